from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

TWO_PASS_REFINEMENT = 2


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, ADMIN_PASSWORD, FEE_REFINEMENT).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Cambio Quote Service"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "rates.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Rate writes are rejected while this is empty
    admin_password: str = ""

    # Fee reconciliation: 'two-pass' keeps the historical quotes,
    # 'converge' iterates until the fee settles (bounded)
    fee_refinement: str = "two-pass"
    max_refinement_passes: int = 5

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        allowed = {"two-pass", "converge"}
        if self.fee_refinement not in allowed:
            raise ValueError(
                f"Unsupported fee_refinement '{self.fee_refinement}'. Allowed: {allowed}"
            )
        if not (TWO_PASS_REFINEMENT <= self.max_refinement_passes <= 10):
            raise ValueError("max_refinement_passes must be between 2 and 10")

    @property
    def refinement_passes(self) -> int:
        if self.fee_refinement == "converge":
            return self.max_refinement_passes
        return TWO_PASS_REFINEMENT


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
