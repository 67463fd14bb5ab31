"""
Employee Service - Main Application.

CRUD over departments and employees. Reads are served cache-aside from
Redis in front of PostgreSQL; writes invalidate the affected cache keys.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from . import __version__
from .cache import RedisCacheStore, build_cache_store
from .config import settings
from .database import db_manager
from .dependencies import get_coordinator, set_coordinator
from .domain.entities import serialize
from .domain.exceptions import (
    DecodeException,
    EmployeeNotFoundException,
    StoreException,
    ValidationException,
)
from .logging_config import configure_logging
from .metrics import metrics_endpoint, track_request_metrics
from .middleware import PrometheusMiddleware, RequestIDMiddleware
from .models import (
    DepartmentCreate,
    DepartmentResponse,
    EmployeeRequest,
    EmployeeResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from .repositories import PostgresEntityRepository
from .services import CacheAsideCoordinator

configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

logger = structlog.get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Employee Service", version=__version__)

    pool = await db_manager.connect()
    if settings.DATABASE_AUTO_CREATE_SCHEMA:
        await db_manager.init_schema()

    cache = build_cache_store(settings)
    if isinstance(cache, RedisCacheStore):
        logger.info("Connecting to Redis", redis_url=settings.redis_url_safe)
        await cache.connect()

    set_coordinator(
        CacheAsideCoordinator(
            repository=PostgresEntityRepository(pool),
            cache=cache,
            ttl_seconds=settings.CACHE_TTL_SECONDS,
        )
    )
    logger.info(
        "Employee Service started",
        cache_backend=settings.CACHE_BACKEND,
        cache_ttl_seconds=settings.CACHE_TTL_SECONDS,
    )

    yield

    logger.info("Shutting down Employee Service")
    set_coordinator(None)
    await cache.close()
    await db_manager.disconnect()
    logger.info("Employee Service stopped")


app = FastAPI(
    title="Employee Service",
    description="Departments and employees with a cache-aside read layer",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)
app.add_middleware(RequestIDMiddleware)


# ----------------------------------------------------------------------
# Error mapping
# ----------------------------------------------------------------------


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.reason, "error_code": "validation_error"},
    )


@app.exception_handler(DecodeException)
async def decode_exception_handler(request: Request, exc: DecodeException):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.reason, "error_code": "decode_error"},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        reason = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    else:
        reason = "Invalid request body"
    return await decode_exception_handler(request, DecodeException(reason))


@app.exception_handler(EmployeeNotFoundException)
async def not_found_exception_handler(request: Request, exc: EmployeeNotFoundException):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"Employee {exc.employee_id} not found", "error_code": "not_found"},
    )


@app.exception_handler(StoreException)
async def store_exception_handler(request: Request, exc: StoreException):
    logger.error(
        "Store failure",
        path=request.url.path,
        operation=exc.operation,
        error=exc.cause,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_code": "store_error"},
    )


# ----------------------------------------------------------------------
# Operational endpoints
# ----------------------------------------------------------------------


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(coordinator: CacheAsideCoordinator = Depends(get_coordinator)):
    """
    Health check endpoint.

    The service is degraded, not down, when only the cache is unreachable.
    """
    database_ok = await coordinator.repository.ping()
    cache_ok = await coordinator.cache.ping()

    if not database_ok:
        overall = "unhealthy"
    elif not cache_ok:
        overall = "degraded"
    else:
        overall = "healthy"

    body = HealthResponse(
        status=overall,
        service=settings.SERVICE_NAME,
        version=__version__,
        dependencies={
            "database": "healthy" if database_ok else "unhealthy",
            "cache": "healthy" if cache_ok else "unhealthy",
        },
    )
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE if not database_ok else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ----------------------------------------------------------------------
# Departments
# ----------------------------------------------------------------------


@app.post(
    "/departments",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid department", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create department",
    tags=["Departments"],
)
async def create_department(
    body: DepartmentCreate,
    coordinator: CacheAsideCoordinator = Depends(get_coordinator),
):
    """Create a department and return it with its assigned id."""
    department = await coordinator.create_department(body.to_entity())
    return Response(
        content=serialize(department),
        status_code=status.HTTP_201_CREATED,
        media_type=JSON_MEDIA_TYPE,
    )


@app.get(
    "/departments",
    response_model=list[DepartmentResponse],
    summary="List departments",
    tags=["Departments"],
)
async def list_departments(coordinator: CacheAsideCoordinator = Depends(get_coordinator)):
    """List all departments."""
    payload = await coordinator.list_departments()
    return Response(content=payload, media_type=JSON_MEDIA_TYPE)


# ----------------------------------------------------------------------
# Employees
# ----------------------------------------------------------------------


@app.post(
    "/employees",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid employee", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create employee",
    tags=["Employees"],
)
async def create_employee(
    body: EmployeeRequest,
    coordinator: CacheAsideCoordinator = Depends(get_coordinator),
):
    """Create an employee and return it with its assigned id."""
    employee = await coordinator.create_employee(body.to_entity())
    return Response(
        content=serialize(employee),
        status_code=status.HTTP_201_CREATED,
        media_type=JSON_MEDIA_TYPE,
    )


@app.get(
    "/employees",
    response_model=list[EmployeeResponse],
    summary="List employees",
    tags=["Employees"],
)
async def list_employees(coordinator: CacheAsideCoordinator = Depends(get_coordinator)):
    """List all employees."""
    payload = await coordinator.list_employees()
    return Response(content=payload, media_type=JSON_MEDIA_TYPE)


@app.get(
    "/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"description": "Employee not found", "model": ErrorResponse}},
    summary="Get employee",
    tags=["Employees"],
)
async def get_employee(
    employee_id: int,
    coordinator: CacheAsideCoordinator = Depends(get_coordinator),
):
    """Get one employee by id."""
    payload = await coordinator.get_employee(employee_id)
    return Response(content=payload, media_type=JSON_MEDIA_TYPE)


@app.put(
    "/employees/{employee_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid employee", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Replace employee",
    tags=["Employees"],
)
async def update_employee(
    employee_id: int,
    body: EmployeeRequest,
    coordinator: CacheAsideCoordinator = Depends(get_coordinator),
):
    """Replace all mutable fields of an employee."""
    message = await coordinator.update_employee(employee_id, body.to_entity())
    return MessageResponse(message=message)


@app.delete(
    "/employees/{employee_id}",
    response_model=MessageResponse,
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="Delete employee",
    tags=["Employees"],
)
async def delete_employee(
    employee_id: int,
    coordinator: CacheAsideCoordinator = Depends(get_coordinator),
):
    """Delete an employee."""
    message = await coordinator.delete_employee(employee_id)
    return MessageResponse(message=message)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
