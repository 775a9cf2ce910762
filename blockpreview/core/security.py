#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
Editor authentication
=====================
The preview endpoints are back-office only.  The host issues editors a signed
JWT access token; this service verifies it and keeps no user store of its own.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from .config import get_settings


# ----------------------------------------------------------------------------

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


# ----------------------------------------------------------------------------

def create_access_token(subject: str | int, extra: dict | None = None) -> str:
    """Issue an editor access token (used by the host and by tests)."""
    s = get_settings()
    expire = datetime.now(tz=timezone.utc) + timedelta(minutes=s.access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "exp": expire,
        "type": "access",
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.secret_key, algorithm=s.algorithm)


# ----------------------------------------------------------------------------

def decode_token(token: str) -> dict[str, Any]:
    s = get_settings()
    try:
        payload = jwt.decode(token, s.secret_key, algorithms=[s.algorithm])
    except JWTError:
        raise _credentials_error()
    if payload.get("sub") is None:
        raise _credentials_error()
    return payload


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ----------------------------------------------------------------------------
# FastAPI dependency
# ----------------------------------------------------------------------------

async def get_current_editor_id(token: str = Depends(_oauth2_scheme)) -> str:
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise _credentials_error()
    return payload["sub"]


# ----------------------------------------------------------------------------
