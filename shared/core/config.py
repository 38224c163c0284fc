import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT")
    LEASING_DB_NAME: str | None = os.getenv("LEASING_DB_NAME")

    # Full URL override, e.g. "sqlite://" for tests and local runs
    LEASING_DATABASE_URL: str | None = os.getenv("LEASING_DATABASE_URL")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:8002",
    ]

    # Leasing rules
    CONTRACT_NUMBER_PREFIX: str = os.getenv("CONTRACT_NUMBER_PREFIX", "RENT")
    EXPIRATION_WARNING_DAYS: int = int(
        os.getenv("EXPIRATION_WARNING_DAYS", 30))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

if settings.LEASING_DATABASE_URL:
    LEASING_DATABASE_URL = settings.LEASING_DATABASE_URL
else:
    LEASING_DATABASE_URL = (
        f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.LEASING_DB_NAME}"
    )
