from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lessonbook.scheduling.timeutils import MINUTES_PER_DAY


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LESSONBOOK_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./lessonbook.db"

    # Scheduling
    # Lessons may start every 30 minutes; other values are for tuning only
    slot_stride_minutes: int = Field(default=30, gt=0, le=MINUTES_PER_DAY)
    revalidate_on_book: bool = True

    # Billing
    currency: str = "USD"


def get_settings() -> Settings:
    return Settings()
