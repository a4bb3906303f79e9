import logging
import sys
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from api.endpoints import users_router, tasks_router
from api.errors import register_exception_handlers
from api.middleware import register_middleware
from auth import PasswordHasher, TokenService
from config import Settings, get_settings
from database import create_db_engine, create_session_factory, get_db, init_db
from schemas.response import HealthCheckResponse

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Собрать приложение; все зависимости строятся из переданных настроек"""
    settings = settings or get_settings()
    configure_logging(settings)

    engine = create_db_engine(settings.database_url, echo=settings.debug)
    init_db(engine)

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService.from_settings(settings)

    register_middleware(app, settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(users_router)
    app.include_router(tasks_router)

    @app.get("/")
    def read_root():
        return {"message": f"{settings.app_name}"}

    @app.get("/health", response_model=HealthCheckResponse)
    def health_check(db: Session = Depends(get_db)):
        db.execute(text("SELECT 1"))
        return HealthCheckResponse(
            message="Service is healthy",
            service=settings.app_name,
            database="connected",
        )

    logger.info("Application configured (database: %s)", engine.url.render_as_string(hide_password=True))
    return app


if __name__ == "__main__":
    config = get_settings()
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )

# Запуск через консоль: uvicorn main:create_app --factory --reload
