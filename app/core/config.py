from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, DEFAULT_MONTHLY_BUDGET, BUDGET_WARN_PCT).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Smart Expense Tracker"
    debug: bool = False
    version: str = "1.0.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "expenses.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Budget defaults (overridable at runtime through the settings endpoint)
    default_monthly_budget: float = 2000.0
    budget_warn_pct: int = 90

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if self.default_monthly_budget < 0:
            raise ValueError("default_monthly_budget cannot be negative")
        if not (1 <= self.budget_warn_pct <= 100):
            raise ValueError(
                f"budget_warn_pct must be within 1..100, got {self.budget_warn_pct}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
