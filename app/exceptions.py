"""Domain exceptions and their HTTP mapping"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
import structlog

logger = structlog.get_logger()


class AppError(Exception):
    """Base class for errors surfaced to API clients"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class TenantContextError(AppError):
    """Authenticated identity is missing a field required for tenant scoping"""

    status_code = status.HTTP_401_UNAUTHORIZED


class TenantNotBoundError(RuntimeError):
    """A tenant-scoped query was attempted on a session with no tenant binding"""


class BootstrapError(RuntimeError):
    """Platform bootstrap could not complete"""


class SchemaVersionError(RuntimeError):
    """Database is not migrated to the revision this code expects"""


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflict with existing data"},
    )


async def tenant_not_bound_handler(request: Request, exc: TenantNotBoundError) -> JSONResponse:
    logger.error("Tenant-scoped query on unbound session", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Tenant context not established"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(TenantNotBoundError, tenant_not_bound_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
