import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.orm.exc import StaleDataError

from qualifications.api.router import api_router
from qualifications.core.config import get_settings
from qualifications.core.exceptions import ConflictError, NotFoundError
from qualifications.core.security import hash_password
from qualifications.db.session import get_session_factory
from qualifications.models.user import User

logger = logging.getLogger(__name__)


def _bootstrap_user() -> None:
    settings = get_settings()
    session_factory = get_session_factory()
    with session_factory() as db:
        existing = db.scalar(select(User).where(User.login == settings.bootstrap_user_login))
        if not existing:
            db.add(
                User(
                    login=settings.bootstrap_user_login,
                    password_hash=hash_password(settings.bootstrap_user_password),
                )
            )
            db.commit()
            logger.info("Bootstrap user %s created", settings.bootstrap_user_login)


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    async def conflict_handler(_: Request, exc: ConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(StaleDataError)
    async def stale_data_handler(request: Request, _: StaleDataError):
        logger.warning("Concurrent modification detected on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "The qualification was modified by another request, retry the operation"},
        )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if settings.auto_create_user:
            _bootstrap_user()
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


app = create_app()
