"""Domain exceptions and their HTTP mapping.

Every failure leaves the API as ``{"error": ..., "details"?: ...}``:

- ExpenseValidationError / RequestValidationError -> 400
- InvalidIdError -> 400
- ExpenseNotFoundError -> 404
- anything unhandled -> 500 (logged with traceback)
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("app.errors")

VALIDATION_FAILED = "Validation failed"


class ExpenseError(Exception):
    """Base class for errors raised by the expense store."""


class ExpenseValidationError(ExpenseError):
    """One or more expense fields violate their constraints."""

    def __init__(self, messages: Iterable[str]):
        self.messages: List[str] = list(messages)
        super().__init__(", ".join(self.messages))


class InvalidIdError(ExpenseError):
    def __init__(self, raw_id: str):
        self.raw_id = raw_id
        super().__init__(f"malformed expense id {raw_id!r}")


class ExpenseNotFoundError(ExpenseError):
    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"expense {expense_id} not found")


def _describe(error: dict) -> str:
    loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
    msg = error.get("msg", "invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


def request_validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": VALIDATION_FAILED,
            "details": ", ".join(_describe(e) for e in exc.errors()),
        },
    )


def expense_validation_error_handler(request: Request, exc: ExpenseValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": VALIDATION_FAILED, "details": ", ".join(exc.messages)},
    )


def invalid_id_handler(request: Request, exc: InvalidIdError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid expense ID"},
    )


def not_found_handler(request: Request, exc: ExpenseNotFoundError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Expense not found"},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Server error",
            "message": "Something went wrong",
        },
    )
