from __future__ import annotations

from typing import Any

import bcrypt

from .config import DEFAULT_AUTH_CONFIG, AuthConfig

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def seed_admin(config: AuthConfig = DEFAULT_AUTH_CONFIG) -> None:
    """Register the admin account from config, replacing any previous one."""
    _users.clear()
    _users[config.admin_username] = {
        "password_hash": _hash_password(config.admin_password),
        "role": "admin",
    }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {"username": username, "role": record["role"]}
    return None


seed_admin()
