MISSING_TOKEN_MESSAGE = "Access denied. No token provided."
INVALID_TOKEN_MESSAGE = "Invalid token"


class InvalidTokenError(Exception):
    """Токен не прошёл проверку: подпись, срок действия или формат"""


class AuthenticationRequired(Exception):
    """В запросе нет заголовка Authorization (HTTP 401)"""

    def __init__(self, message: str = MISSING_TOKEN_MESSAGE):
        super().__init__(message)
        self.message = message


class InvalidToken(Exception):
    """Заголовок есть, но токен недействителен (HTTP 400)"""

    def __init__(self, message: str = INVALID_TOKEN_MESSAGE):
        super().__init__(message)
        self.message = message
