from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from perfboard.core.config import settings
from perfboard.core.exceptions import AppException
from perfboard.core.logging import get_logger, setup_logging
from perfboard.db.base import Base
from perfboard.db.session import engine

from perfboard.api.health import router as health_router
from perfboard.api.me import router as me_router
from perfboard.api.root import router as root_router
from perfboard.api.admin import router as admin_router
from perfboard.api.employees import router as employees_router
from perfboard.api.evaluations import router as evaluations_router
from perfboard.api.dashboard import router as dashboard_router

setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "startup",
        env=settings.APP_ENV,
        storage=settings.STORAGE_BACKEND,
        visibility_policy=settings.VISIBILITY_POLICY,
    )
    if settings.STORAGE_BACKEND == "sql" and settings.APP_ENV == "local":
        # deployed databases are managed by alembic
        Base.metadata.create_all(bind=engine)
    yield
    logger.info("shutdown")


app = FastAPI(title="Performance Dashboard", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error_code=exc.error_code, message=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


app.include_router(root_router)
app.include_router(health_router)
app.include_router(me_router)
app.include_router(employees_router)
app.include_router(evaluations_router)
app.include_router(dashboard_router)
app.include_router(admin_router)
