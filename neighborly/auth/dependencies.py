from __future__ import annotations

from fastapi import HTTPException, Request


def _session_user(request: Request) -> dict:
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_user(request: Request) -> dict:
    """Raise 401 unless a signed-in account is on the session."""
    return _session_user(request)


def require_admin(request: Request) -> dict:
    """Raise 401 if not signed in, 403 unless the account is an admin."""
    user = _session_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
