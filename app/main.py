from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from dotenv import load_dotenv

# Load .env file before importing app modules
load_dotenv(override=True)

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import (
    IntegrityError,
    OperationalError,
    SQLAlchemyError,
)

from app.api.v1.router import api_router
from app.config import settings
from app.exceptions import SamdCareException, extract_sql_error_message
from app.middleware.auth import setup_auth_middleware
from app.models import all_models  # noqa: F401
from app.utils.logger import configure_logger

configure_logger()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    logger.info("Starting up FastAPI application", environment=settings.ENVIRONMENT)
    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version="1.0.0",
        description="SAMD Care API - behavior and therapy tracking with AI recommendations",
        routes=app.routes,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Access token issued by the auth provider",
        }
    }

    for path_data in openapi_schema["paths"].values():
        for method, method_data in path_data.items():
            if method.upper() == "OPTIONS":
                continue
            if "Health" not in method_data.get("tags", []):
                method_data["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    content: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        content["error"]["details"] = details
    return content


def request_fields(request: Request) -> Dict[str, str]:
    return {"path": request.url.path, "method": request.method}


# Exception handlers
@app.exception_handler(SamdCareException)
async def samd_care_exception_handler(
    request: Request, exc: SamdCareException
) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.error(
        "Application error",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        **request_fields(request),
    )

    # Details are only exposed outside production
    details = None if settings.is_production else exc.details
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, details),
    )


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed or missing request input."""
    logger.info(
        "Request validation error",
        errors=exc.errors(),
        **request_fields(request),
    )

    return JSONResponse(
        status_code=400,
        content=error_body(
            "VALIDATION_ERROR",
            "Input validation failed",
            {"validation_errors": format_validation_errors(exc.errors())},
        ),
    )


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors raised inside the application."""
    logger.error(
        "Validation error",
        errors=exc.errors(),
        **request_fields(request),
    )

    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR",
            "Data validation failed",
            {"validation_errors": format_validation_errors(exc.errors())},
        ),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors (unique constraints, foreign keys, etc.)."""
    error_msg = str(exc.orig) if exc.orig else str(exc)
    logger.error(
        "Database integrity error",
        error=error_msg,
        **request_fields(request),
    )

    if "unique constraint" in error_msg.lower():
        message = "A record with this information already exists"
    elif "foreign key constraint" in error_msg.lower():
        message = "Referenced record does not exist"
    elif "not null constraint" in error_msg.lower():
        message = "Required field is missing"
    else:
        message = "Data integrity error"

    return JSONResponse(status_code=400, content=error_body("INTEGRITY_ERROR", message))


@app.exception_handler(OperationalError)
async def operational_error_handler(
    request: Request, exc: OperationalError
) -> JSONResponse:
    """Handle database operational errors (connection issues, etc.)."""
    logger.error(
        "Database operational error",
        error=str(exc.orig) if exc.orig else str(exc),
        **request_fields(request),
    )

    return JSONResponse(
        status_code=503,
        content=error_body(
            "DATABASE_UNAVAILABLE",
            "Database is temporarily unavailable. Please try again later.",
        ),
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handle other SQLAlchemy database errors."""
    user_message, technical_details = extract_sql_error_message(exc)

    logger.exception(
        "Database error",
        error_type=type(exc).__name__,
        **request_fields(request),
        technical_details=technical_details,
    )

    details = None
    if settings.ENVIRONMENT == "local":
        details = {
            "technical_details": technical_details,
            "exception_type": type(exc).__name__,
        }

    return JSONResponse(
        status_code=500, content=error_body("DATABASE_ERROR", user_message, details)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPExceptions."""
    logger.error(
        "HTTP error",
        status_code=exc.status_code,
        detail=exc.detail,
        **request_fields(request),
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for all unhandled exceptions."""
    logger.exception(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        **request_fields(request),
    )

    return JSONResponse(
        status_code=500,
        content=error_body(
            "INTERNAL_ERROR", "An unexpected error occurred. Please try again later."
        ),
    )


# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Setup auth middleware (must be after CORS middleware)
setup_auth_middleware(app)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)
