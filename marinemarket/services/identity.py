# marinemarket/services/identity.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import settings
from ..errors import IdentityRejectedError, IdentityServiceUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    exists: bool
    email: str
    user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email


class IdentityClient:
    """
    Внешний сервис авторизации: «есть ли такой email и кто это».
    GET {base_url}/auth/validate-user?email=... с Bearer-токеном.

    exists=false и 404 -> пользователя нет;
    401/403 и прочие 4xx -> IdentityRejectedError;
    5xx, таймаут, сетевые ошибки, битый ответ -> IdentityServiceUnavailableError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.AUTH_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.AUTH_TIMEOUT_SEC
        self._transport = transport

    def validate_user(self, email: str, token: str) -> UserIdentity:
        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as c:
                r = c.get(
                    "/auth/validate-user",
                    params={"email": email},
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.TimeoutException as e:
            logger.warning("identity service timeout after %ss (email=%s)", self.timeout, email)
            raise IdentityServiceUnavailableError("Сервис авторизации не ответил вовремя") from e
        except httpx.HTTPError as e:
            logger.warning("identity service transport error: %s", e)
            raise IdentityServiceUnavailableError(f"Сервис авторизации недоступен: {e}") from e

        if r.status_code == 404:
            return UserIdentity(exists=False, email=email)
        if r.status_code >= 500:
            logger.warning("identity service %s (email=%s)", r.status_code, email)
            raise IdentityServiceUnavailableError(f"Сервис авторизации вернул {r.status_code}")
        if r.status_code >= 400:
            logger.warning("identity service rejected credential: %s", r.status_code)
            raise IdentityRejectedError(f"Сервис авторизации отклонил запрос: {r.status_code}", r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise IdentityServiceUnavailableError("Некорректный ответ сервиса авторизации") from e
        if not isinstance(data, dict):
            raise IdentityServiceUnavailableError("Некорректный ответ сервиса авторизации")

        if not data.get("exists"):
            return UserIdentity(exists=False, email=email)
        user_id = data.get("userId") or data.get("user_id")
        if not user_id:
            raise IdentityServiceUnavailableError("Сервис авторизации не вернул userId")
        return UserIdentity(
            exists=True,
            email=data.get("email") or email,
            user_id=str(user_id),
            first_name=data.get("firstName") or data.get("first_name"),
            last_name=data.get("lastName") or data.get("last_name"),
        )
