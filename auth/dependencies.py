"""
FastAPI-зависимости аутентификации.

``get_current_identity`` - единственная точка проверки токена: разбирает
заголовок ``Authorization``, проверяет токен и прикрепляет личность к
``request.state``. Обработчики доверяют прикреплённой личности и сами
токены не разбирают.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from auth.exceptions import AuthenticationRequired, InvalidToken, InvalidTokenError
from auth.password import PasswordHasher
from auth.tokens import TokenService
from schemas.user import Identity

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# APIKeyHeader отдаёт заголовок как есть, чтобы различать «нет токена» и «плохой токен»
_authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer <token>",
)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_current_identity(
        request: Request,
        authorization: Optional[str] = Depends(_authorization_header),
        token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """Проверить токен из заголовка и вернуть личность вызывающего"""
    if not authorization or not authorization.strip():
        raise AuthenticationRequired()

    token = authorization.strip()
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()

    try:
        identity = token_service.verify(token)
    except InvalidTokenError as e:
        logger.info("Rejected token on %s %s: %s", request.method, request.url.path, e)
        raise InvalidToken() from e

    request.state.identity = identity
    return identity
