"""
Централизованная обработка ошибок.

Обработчики маршрутов ловят только то, на что реагируют сами (валидация,
не найдено, дубликат); всё остальное приходит сюда и превращается в
единый ``ErrorResponse`` без внутренних подробностей.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.exceptions import AuthenticationRequired, InvalidToken
from schemas.response import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # первый элемент - источник (body, path, query)
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        details.append({"field": field, "location": loc[0] if loc else None, "message": err.get("msg")})
    return details


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            details=_validation_details(exc),
        )

    @app.exception_handler(AuthenticationRequired)
    async def authentication_required_handler(request: Request, exc: AuthenticationRequired):
        return error_response(
            status.HTTP_401_UNAUTHORIZED,
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(InvalidToken)
    async def invalid_token_handler(request: Request, exc: InvalidToken):
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
