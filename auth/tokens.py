"""
Выдача и проверка токенов доступа.

Токен - JWT (HS256 по умолчанию) с полями ``id``, ``username``, ``iat``, ``exp``.
Секрет передаётся при создании сервиса; смена секрета делает недействительными
все выданные токены. Списка отзыва нет, срок жизни ограничен только ``exp``.
"""

import datetime
import logging
from typing import Optional

from jose import JWTError, jwt

from auth.exceptions import InvalidTokenError
from schemas.user import Identity

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = datetime.timedelta(hours=1)


class TokenService:
    def __init__(self, secret: str, algorithm: str = "HS256",
                 expires_in: datetime.timedelta = DEFAULT_EXPIRES_IN):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=datetime.timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, user_id: int, username: str,
              issued_at: Optional[datetime.datetime] = None) -> str:
        """Подписанный токен, действительный ``expires_in`` с момента выдачи"""
        now = issued_at or datetime.datetime.now(datetime.timezone.utc)
        payload = {
            "id": user_id,
            "username": username,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Проверить подпись и срок действия.

        Любая ошибка даёт ``InvalidTokenError``, частичная личность
        не возвращается никогда.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("id")
        username = payload.get("username")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(username, str):
            raise InvalidTokenError("Token payload is missing identity claims")
        if "exp" not in payload:
            raise InvalidTokenError("Token has no expiry")
        return Identity(id=user_id, username=username)
