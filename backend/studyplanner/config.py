"""Application settings."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    HOST: str
    PORT: int
    DB_PATH: Path
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    FRONTEND_DIR: Path

    def __init__(self, **overrides):
        self.HOST = "0.0.0.0"
        self.PORT = 8000
        self.DB_PATH = Path(os.getenv("DB_PATH", str(BASE / "db.sqlite")))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.FRONTEND_DIR = BASE.parent / "frontend"
        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"unknown setting: {key}")
            setattr(self, key, value)
        self.DB_PATH = Path(self.DB_PATH)


settings = Settings()
