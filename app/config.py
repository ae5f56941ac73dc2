# app/config.py
from pydantic_settings import BaseSettings
from typing import Optional
from pydantic import Field

class Settings(BaseSettings):
    SECRET_KEY: str = Field("change-me-in-production")
    ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(30)

    DATABASE_URL: str = Field("sqlite+aiosqlite:///./sales_performance.db")
    SQLALCHEMY_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    # bcrypt work factor; tests lower it through the environment
    BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)
    MAX_LOGIN_ATTEMPTS: int = Field(5, ge=1)

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def effective_database_url(self) -> str:
        """
        Returns the async driver URL:
          - SQLALCHEMY_DATABASE_URL wins over DATABASE_URL
          - postgresql:// is rewritten to postgresql+asyncpg://
        """
        url = self.SQLALCHEMY_DATABASE_URL or self.DATABASE_URL
        if url.startswith("postgresql://") and "+asyncpg" not in url:
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

settings = Settings()
