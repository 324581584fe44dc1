"""
FastAPI Main Application
Entry point with routers, middleware and error mapping
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.database import close_db, health_check as database_health_check, init_db
from core.exceptions import (
    AuthenticationException,
    ConsistencyViolationException,
    DataAccessException,
    DomainException,
    ResourceNotFoundException,
    ValidationException,
)
from core.logging_config import logger
from presentation.api.v1.endpoints import applications_router, dashboard_router


VERSION = "1.0.0"

# Checked in order; subclasses before DomainException
STATUS_CODES = [
    (AuthenticationException, status.HTTP_401_UNAUTHORIZED),
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (ResourceNotFoundException, status.HTTP_404_NOT_FOUND),
    (ConsistencyViolationException, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (DataAccessException, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status_code": status_code, "message": message})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{VERSION} ({settings.ENVIRONMENT})")

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down API...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Job application tracking with status history and dashboard analytics",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Map domain errors to {"status_code", "message"} bodies"""
    status_code = next(
        (code for exc_type, code in STATUS_CODES if isinstance(exc, exc_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        # Store details stay in the log
        return error_response(status_code, "Internal server error")

    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return error_response(status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return error_response(status.HTTP_400_BAD_REQUEST, errors)


# Include routers
app.include_router(applications_router, prefix="/api/v1", tags=["Applications"])
app.include_router(dashboard_router, prefix="/api/v1", tags=["Dashboard"])


@app.get("/health")
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    database_ok = await database_health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "up" if database_ok else "down",
        "service": "jobtrail",
        "version": VERSION,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "presentation.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
