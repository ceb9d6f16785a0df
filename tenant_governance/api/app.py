import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenant_governance.domain.exceptions import PersistenceError

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    message = exc.base_error.message
    if exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        message = "Internal server error"
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.reason})")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_persistence_error(request: Request, exc: PersistenceError):
    # Store failures outside a use case's own error handling; nothing was committed
    logger.error(f"Persistence error on {request.method} {request.url.path}: {exc}")
    error_dict = {"code": "PERSISTENCE_ERROR", "message": "Store unavailable, nothing was changed"}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    from tenant_governance.depends import get_dispatcher

    # Let queued notifications finish before the loop goes away
    await get_dispatcher().drain()


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Tenant Governance API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tenant_governance.api.routes import admin, audit, documents, health_check, tenants

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(tenants.router, prefix=prefix, tags=["Tenant"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])
    app.include_router(documents.router, prefix=prefix, tags=["Documents"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)

    return app
