"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    JWT_SECRET: str
    JWT_ALGORITHM: str
    JWT_EXPIRE_HOURS: int
    DATABASE_URL: str
    REMOTE_TABLE_URL: str
    REMOTE_TABLE_KEY: str
    SERVICES_TABLE: str
    SKELETON_COUNT: int
    FETCH_TIMEOUT_SECONDS: float
    ADMIN_USERNAMES: frozenset
    ALLOW_DEV_CORS: bool
    LOG_LEVEL: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.JWT_SECRET = os.getenv("JWT_SECRET", "change_me_for_prod")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRE_HOURS = int(os.getenv("JWT_EXPIRE_HOURS", "24"))
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'skilltrack.db'}")
        # Backend-as-a-service table endpoint; empty means read the local table.
        self.REMOTE_TABLE_URL = os.getenv("REMOTE_TABLE_URL", "").strip().rstrip("/")
        self.REMOTE_TABLE_KEY = os.getenv("REMOTE_TABLE_KEY", "").strip()
        self.SERVICES_TABLE = os.getenv("SERVICES_TABLE", "services")
        self.SKELETON_COUNT = int(os.getenv("SKELETON_COUNT", "6"))
        self.FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))
        self.ADMIN_USERNAMES = frozenset(
            name.strip() for name in os.getenv("ADMIN_USERNAMES", "").split(",") if name.strip()
        )
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and self.JWT_SECRET == "change_me_for_prod":
            raise RuntimeError("JWT_SECRET must be set to a non-default value in non-dev environments")
        if self.REMOTE_TABLE_URL and not self.REMOTE_TABLE_KEY:
            raise RuntimeError("REMOTE_TABLE_KEY is required when REMOTE_TABLE_URL is set")
        if self.SKELETON_COUNT < 0:
            raise RuntimeError("SKELETON_COUNT must be >= 0")
        if self.FETCH_TIMEOUT_SECONDS <= 0:
            raise RuntimeError("FETCH_TIMEOUT_SECONDS must be > 0")


settings = Settings()
