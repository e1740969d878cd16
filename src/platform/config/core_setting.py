import json
from pathlib import Path
from typing import Annotated, List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Reservation System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_DIR: str = str(_PROJECT_ROOT / 'logs')  # rotating file sink, DEBUG only

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'cinema'
    POSTGRES_PASSWORD: SecretStr = SecretStr('cinema')
    POSTGRES_DB: str = 'cinema_db'
    POSTGRES_PORT: int = 5432
    DATABASE_URL_OVERRIDE: str = ''  # e.g. sqlite+aiosqlite:///./local.db

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Booking hold
    BOOKING_HOLD_TTL_SECONDS: int = 600

    # Notification pipeline
    NOTIFICATION_WORKER_COUNT: int = 3
    NOTIFICATION_QUEUE_SIZE: int = 100
    NOTIFICATION_DRAIN_TIMEOUT_SECONDS: float = 30.0
    NOTIFICATION_BACKEND: Literal['smtp', 'console'] = 'console'

    # SMTP
    SMTP_HOST: str = 'smtp.gmail.com'
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ''
    SMTP_PASSWORD: SecretStr = SecretStr('')
    SMTP_SENDER: str = 'no-reply@cinema.local'
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT_SECONDS: float = 10.0

    # Link prefix encoded into ticket QR codes
    BASE_URL: str = 'http://localhost:8000'
    DISPLAY_TIMEZONE: str = 'UTC'  # screening times in emails, e.g. Asia/Jakarta

    # CORS
    # NoDecode: the validator below gets the raw comma-separated string
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []


settings = Settings()  # type: ignore
