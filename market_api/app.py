"""FastAPI application setup module."""
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from market_api.database.database import Database
from market_api.endpoints.materials import router as materials_router
from market_api.endpoints.transactions import router as transactions_router
from market_api.endpoints.users import router as users_router
from market_api.exceptions.api_exception import APIException, ValidationError
from market_api.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

ROUTERS = {
    "materials": materials_router,
    "users": users_router,
    "transactions": transactions_router,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create/alter tables on boot and drain the pool on shutdown."""
    database: Database = app.state.database
    await database.create_all()
    yield
    await database.dispose()


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render service errors as ``{"error"}`` or ``{"errors"}`` bodies."""
    if isinstance(exc, ValidationError):
        content = {"errors": [error.model_dump() for error in exc.errors]}
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies (not a JSON object) are reported like field errors."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


def create_app(
    database: Optional[Database] = None,
    services: Optional[Sequence[str]] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        database: Store handle; built from settings when omitted
        services: Routers to mount, any of "materials", "users", "transactions"

    Returns:
        Configured FastAPI application
    """
    services = list(services or settings.SERVICES)
    unknown = [name for name in services if name not in ROUTERS]
    if unknown:
        raise ValueError(f"Unknown services: {', '.join(unknown)}")

    app = FastAPI(
        title="Market Services API",
        description="Materials, users and the transactions between them",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)

    # CORS middleware for frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    for name in services:
        app.include_router(ROUTERS[name])
    logger.info("Mounted services: %s", ", ".join(services))

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "services": services}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
