"""
auth: аутентификация и проверка личности.

Содержит:
  • хеширование паролей (bcrypt, настраиваемая стоимость)
  • выдачу и проверку JWT токенов
  • зависимость ``get_current_identity`` для защищённых маршрутов
"""

from .exceptions import AuthenticationRequired, InvalidToken, InvalidTokenError
from .password import PasswordHasher
from .tokens import TokenService
from .dependencies import get_current_identity, get_password_hasher, get_token_service

__all__ = [
    "AuthenticationRequired",
    "InvalidToken",
    "InvalidTokenError",
    "PasswordHasher",
    "TokenService",
    "get_current_identity",
    "get_password_hasher",
    "get_token_service",
]
