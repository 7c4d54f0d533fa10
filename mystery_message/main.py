# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local application imports
from .api.v1 import auth_router, message_router
from .core.config import get_settings
from .di.container import get_container
from .infrastructure.db.mongo_connection import MongoConnection
from .infrastructure.http_client_factory import close_shared_http_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Ensures the unique user indexes on startup; closes the MongoDB client and
    the shared HTTP client on shutdown.
    """
    connection = get_container().get(MongoConnection)

    try:
        await connection.ensure_indexes()
    except PyMongoError as e:
        # Don't fail app startup if MongoDB is unavailable; requests will report 500s
        logger.error(f"Failed to ensure MongoDB indexes: {e}", exc_info=True)

    yield

    connection.close()
    await close_shared_http_client()
    logger.info("Application shutdown complete")


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid input"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(message)
    return ", ".join(messages) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as {"success": false, "message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations are client errors (400), not 422"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": _validation_message(exc)},
    )


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - Error envelope handlers
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    application = FastAPI(
        title="Mystery Message API",
        version="1.0.0",
        description="Anonymous messaging backend",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register API routers
    application.include_router(auth_router, prefix="/api/v1/auth")
    application.include_router(message_router, prefix="/api/v1")

    return application


# Create application instance
app = create_application()
