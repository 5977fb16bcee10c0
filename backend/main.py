"""SendVault: application entry point.

Run with ``uvicorn main:create_app --factory``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.download.controllers.download_controller import router as download_router
from api.upload.controllers.upload_controller import router as upload_router
from config import Settings
from errors import StoreUnavailable, TransferError, ValidationError
from store import AssetStore

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def transfer_error_handler(request: Request, exc: TransferError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError(details="; ".join(e.get("msg", "") for e in exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    error = StoreUnavailable(details=type(exc).__name__)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    store = AssetStore(settings)
    store.migrate()

    app = FastAPI(title="SendVault", version="0.1.0")
    app.state.settings = settings
    app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TransferError, transfer_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    app.include_router(upload_router)
    app.include_router(download_router)

    return app
