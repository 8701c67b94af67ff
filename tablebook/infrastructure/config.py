from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TABLEBOOK_")

    database_url: str = "sqlite+pysqlite:///./tablebook.db"
    reset_db_on_start: bool = False
    seed_tables: bool = True
    timezone: str = "UTC"
    busy_timeout: float = 5.0
    log_level: str = "INFO"
    openapi_path: Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"

    @property
    def local_tz(self) -> tzinfo:
        """Zone used to read naive, wall-clock times supplied by callers."""
        return ZoneInfo(self.timezone)


settings = Settings()
