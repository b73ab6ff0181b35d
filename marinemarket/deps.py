# marinemarket/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Header, HTTPException, status

from .services.identity import IdentityClient
from .utils.security import email_from_token


# ------------------ Bearer credential ------------------

def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token required",
        )
    return token.strip()


def get_current_email(authorization: Optional[str] = Header(None)) -> str:
    """
    Email: только из токена, тело запроса не используем.
    """
    token = get_bearer_token(authorization)
    email = email_from_token(token)
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return email


# ------------------ Identity collaborator ------------------

def get_identity_client() -> IdentityClient:
    return IdentityClient()
