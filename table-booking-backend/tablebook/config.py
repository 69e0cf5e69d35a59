
import os
from pathlib import Path
from dotenv import dotenv_values

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"


def _setting(name: str, default: str) -> str:
    value = os.getenv(name)
    if value and value.strip():
        return value.strip()

    if _ENV_PATH.exists():
        value = dotenv_values(str(_ENV_PATH)).get(name)
        if value and value.strip():
            return value.strip()

    return default


class Config:
    SECRET_KEY = _setting("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = _setting("DATABASE_URL", "sqlite:///local.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SUBMIT_DELAY_SECONDS = float(_setting("SUBMIT_DELAY_SECONDS", "0"))
    LOG_LEVEL = _setting("LOG_LEVEL", "INFO")
