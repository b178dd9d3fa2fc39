from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AuthConfig:
    admin_username: str = os.getenv("CATALOG_ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("CATALOG_ADMIN_PASSWORD", "admin123")
    session_secret: str = os.getenv("SESSION_SECRET", "wynn-ingredients-secret-change-in-production")


DEFAULT_AUTH_CONFIG = AuthConfig()
