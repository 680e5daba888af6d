# kpitracker/config.py
from pydantic_settings import BaseSettings
from typing import Optional
from pydantic import Field

class Settings(BaseSettings):
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./kpitracker.db")
    SQLALCHEMY_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = Field(False)

    LOG_LEVEL: str = Field("INFO")

    # Operating cycle used to suggest annual targets from monthly ones.
    ANNUAL_CYCLE_MONTHS: int = Field(13)
    # Delivered-kind KPIs are pinned to these targets when defined.
    DELIVERED_MONTHLY_TARGET: int = Field(1)
    DELIVERED_ANNUAL_TARGET: int = Field(13)

    RECOMMENDATION_LIMIT: int = Field(5)

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def effective_database_url(self) -> str:
        """
        Returns the async driver URL:
          - SQLALCHEMY_DATABASE_URL wins over DATABASE_URL
          - plain postgresql:// is switched to asyncpg
        """
        url = self.SQLALCHEMY_DATABASE_URL or self.DATABASE_URL
        if url.startswith("postgresql://") and "+asyncpg" not in url:
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

settings = Settings()
