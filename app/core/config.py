# app/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Everything has a default so the backend and the operator terminal
    start without a .env file.

    Backend:
      - STATIC_DIR     : directory served as static assets (index.html etc.)
      - MANIFEST_PATH  : append-only JSON log of saved ticket lines

    Operator terminal:
      - CATALOG_SOURCE : local path or http(s) URL of the catalog JSON
      - SERVER_URL     : base URL of the backend (POST /save-ticket)
      - EXPORT_DIR     : where ticket_<date>.xlsx files are written
    """

    PROJECT_NAME: str = "Dessert POS"
    LOG_LEVEL: str = "INFO"

    STATIC_DIR: Path = BASE_DIR / "static"
    MANIFEST_PATH: Path = BASE_DIR / "manifest.json"

    CATALOG_SOURCE: str = str(BASE_DIR / "static" / "desserts.json")
    SERVER_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT: float | None = None
    EXPORT_DIR: Path = Path(".")

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
