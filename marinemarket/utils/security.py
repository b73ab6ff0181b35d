import time
from typing import Optional

from jose import jwt, JWTError
from ..config import settings


def create_jwt(payload: dict) -> str:
    exp = int(time.time()) + settings.JWT_TTL_SEC
    return jwt.encode({**payload, "exp": exp}, settings.SECRET_KEY, algorithm=settings.JWT_ALG)


def decode_jwt(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALG])
    except JWTError:
        return None


def email_from_token(token: str) -> Optional[str]:
    claims = decode_jwt(token) or {}
    email = claims.get("email") or claims.get("preferred_username")
    return email.strip() if isinstance(email, str) and email.strip() else None
