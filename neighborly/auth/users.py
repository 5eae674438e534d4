from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(email: str, record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "email": email,
        "name": record["name"],
        "role": record["role"],
    }


def register(
    email: str,
    password: str,
    name: str | None = None,
    role: str = "user",
) -> dict[str, Any] | None:
    """Create an account. Returns the public user dict, or ``None`` if the email is taken."""
    key = _normalize_email(email)
    if key in _users:
        return None
    _users[key] = {
        "id": len(_users) + 1,
        "name": name,
        "password_hash": _hash_password(password),
        "role": role,
    }
    return _public(key, _users[key])


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{id, email, name, role}`` or ``None``."""
    key = _normalize_email(email)
    record = _users.get(key)
    if record and _verify_password(password, record["password_hash"]):
        return _public(key, record)
    return None


def _seed_users() -> None:
    """Pre-seed demo accounts on import."""
    register("user@neighborly.local", "user123", name="Demo User")
    register("admin@neighborly.local", "admin123", name="Admin", role="admin")


_seed_users()
