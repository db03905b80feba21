import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import settings
from shared.exceptions import (
    AppError,
    DuplicateEmailError,
    InvalidIdentifierError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from shared.infrastructure.database import Database
from shared.logging_config import setup_logging
from users.application.seed import seed_default_users
from users.infrastructure.user_repository import DbUserRepository
from users.interfaces.routes import router as users_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    await database.connect()
    app.state.database = database
    try:
        if settings.SEED_DEFAULT_USERS:
            async with database.session() as session:
                await seed_default_users(DbUserRepository(session))
        yield
    finally:
        await database.disconnect()


app = FastAPI(
    title="User Directory",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router, prefix=settings.API_PREFIX)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return _error(404, exc.message)


@app.exception_handler(ValidationError)
async def validation_handler(request, exc: ValidationError):
    return _error(400, exc.message)


@app.exception_handler(DuplicateEmailError)
async def duplicate_email_handler(request, exc: DuplicateEmailError):
    return _error(400, exc.message)


@app.exception_handler(InvalidIdentifierError)
async def invalid_identifier_handler(request, exc: InvalidIdentifierError):
    return _error(400, exc.message)


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request, exc: StoreUnavailableError):
    return _error(500, exc.message)


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    logger.error("Unhandled application error: %s", exc.message)
    return _error(500, exc.message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"] if part != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        message = "Invalid request"
    return _error(400, message)


@app.get("/health")
async def health_check(request: Request):
    database: Database | None = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    return {"status": "ok", "database": "ok" if connected else "unavailable"}
