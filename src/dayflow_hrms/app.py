"""FastAPI application factory for DayFlow HRMS."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dayflow_hrms.common.config import get_settings
from dayflow_hrms.common.exceptions import DayflowError
from dayflow_hrms.common.logging import setup_logging
from dayflow_hrms.common.schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

# Domain error code -> HTTP status
ERROR_STATUS = {
    "CONFLICT": 409,
    "STORE_UNAVAILABLE": 503,
    "INVALID_CREDENTIALS": 401,
    "TOKEN_INVALID": 401,
    "ACCOUNT_DEACTIVATED": 403,
    "PASSWORD_RESET_REQUIRED": 403,
    "NOT_FOUND": 404,
    "INVALID_TENANT_CODE": 400,
    "SERIAL_OVERFLOW": 409,
    "LOGIN_ID_COLLISION": 500,
}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DayflowError)
    async def handle_dayflow_error(request: Request, exc: DayflowError):
        status_code = ERROR_STATUS.get(exc.code, 500)
        log_fn = logger.error if status_code >= 500 else logger.info
        log_fn("%s %s -> %s %s", request.method, request.url.path, status_code, exc.code)
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        body = ErrorResponse(error=exc.message, code=exc.code)
        return JSONResponse(
            status_code=status_code, content=body.model_dump(), headers=headers
        )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from dayflow_hrms.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from dayflow_hrms.accounts.router import router as auth_router
    from dayflow_hrms.accounts.admin_router import router as admin_router

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=prefix)
    app.include_router(admin_router, prefix=prefix)

    return app
