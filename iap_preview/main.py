"""FastAPI application serving preview fixtures to design-time clients."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iap_preview import __version__
from iap_preview.logging_config import configure_from_env, get_logger
from iap_preview.middleware import ContextMiddleware, RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load fixtures on startup so configuration errors surface immediately."""
    from iap_preview.repositories.product_catalog import get_product_catalog
    from iap_preview.services.transaction_feed import get_preview_transaction

    logger.info("preview_server_starting", version=__version__)
    try:
        catalog = get_product_catalog()
        transaction = get_preview_transaction()
        logger.info(
            "preview_server_started",
            products=len(catalog),
            entitlement_product_id=transaction.product_id,
        )
        yield
    finally:
        logger.info("preview_server_stopped")


def create_app() -> FastAPI:
    """Create and configure the preview FastAPI application."""
    configure_from_env()

    app = FastAPI(
        title="IAP Preview Store",
        description="Deterministic in-app purchase fixtures for UI previews",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Preview clients run on arbitrary local origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ContextMiddleware)

    from iap_preview.api.preview import router as preview_router

    app.include_router(preview_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"service": "iap-preview", "status": "running", "version": __version__}

    @app.get("/health")
    async def health() -> dict[str, str]:
        from iap_preview.config import get_config
        from iap_preview.repositories.product_catalog import get_product_catalog

        settings = get_config().preview_settings
        return {
            "status": "healthy",
            "backend": settings.backend.value,
            "catalog": f"loaded ({len(get_product_catalog())} products)",
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "message": "An unexpected error occurred"},
        )

    return app


app = create_app()
