"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_timeout: float = 30.0
    env: str = "development"
    email_backend: str = "log"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_user: str | None = None
    smtp_password: str | None = None
    email_from: str = "no-reply@storefront.local"

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            database_url=os.environ.get(
                "STOREFRONT_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'storefront.db'}"
            ),
            db_timeout=float(os.environ.get("STOREFRONT_DB_TIMEOUT", "30")),
            env=os.environ.get("STOREFRONT_ENV", "development").lower(),
            email_backend=os.environ.get("STOREFRONT_EMAIL_BACKEND", "log").lower(),
            smtp_host=os.environ.get("STOREFRONT_SMTP_HOST", "localhost"),
            smtp_port=int(os.environ.get("STOREFRONT_SMTP_PORT", "25")),
            smtp_user=os.environ.get("STOREFRONT_SMTP_USER"),
            smtp_password=os.environ.get("STOREFRONT_SMTP_PASSWORD"),
            email_from=os.environ.get("STOREFRONT_EMAIL_FROM", "no-reply@storefront.local"),
        )
