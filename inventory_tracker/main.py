import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from inventory_tracker.config import Settings, get_settings
from inventory_tracker.core.errors import AppError, ConfigurationError
from inventory_tracker.core.logging import log_requests, setup_logging
from inventory_tracker.database import init_db
from inventory_tracker.routers import auth_router, health_router, inventory_router
from inventory_tracker.services.account_service import prime_login_guard

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger("inventory_tracker")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    prime_login_guard(settings.PASSWORD_PBKDF2_ROUNDS)
    if not (settings.JWT_SECRET or "").strip():
        logger.warning("JWT_SECRET is not set; register, login and protected routes will fail.")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Track inventory records behind a token-protected API",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["x-auth-token", "Content-Type"],
)
app.middleware("http")(log_requests)


def _current_settings(request: Request) -> Settings:
    provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return provider()


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    if isinstance(exc, ConfigurationError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = location[-1] if location else "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": ", ".join("{}: {}".format(key, value) for key, value in errors.items()),
            "errors": errors,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    content = {"success": False, "message": "Server error"}
    if not _current_settings(request).is_production:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


app.include_router(health_router)
app.include_router(auth_router)
app.include_router(inventory_router)


@app.get("/")
def root():
    return {"success": True, "message": "{} is running".format(settings.APP_NAME)}


__all__ = ["app", "root"]
