# school_portal/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_portal.core.config import settings
from school_portal.core.deps import get_school_service
from school_portal.core.errors import PortalError, StoreError
from school_portal.core.identity import FirebaseIdentityProvider, IdentityProvider, InMemoryIdentityProvider
from school_portal.core.logging import configure_logging
from school_portal.db.memory import InMemoryDocumentStore
from school_portal.db.mongo import MongoDocumentStore
from school_portal.db.store import DocumentStore
from school_portal.routes.auth import router as auth_router
from school_portal.routes.opportunities import router as opportunities_router
from school_portal.routes.profile import router as profile_router
from school_portal.routes.schools import router as schools_router
from school_portal.services.school_service import SchoolService

logger = logging.getLogger(__name__)


async def _build_backends(app: FastAPI) -> None:
    if settings.USE_IN_MEMORY_BACKENDS:
        logger.warning("using in-memory store and identity provider")
        app.state.store = InMemoryDocumentStore()
        app.state.identity = InMemoryIdentityProvider()
        return

    store = MongoDocumentStore(settings.MONGO_URI, settings.MONGO_DB, settings.MONGO_TIMEOUT_MS)
    try:
        await store.ping()
        logger.info("Connected to MongoDB")
    except Exception as e:
        # keep serving; requests will fail with 500 until Mongo is reachable
        logger.error("Mongo ping failed: %s", e)
    app.state.store = store
    app.state.identity = FirebaseIdentityProvider(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "store", None) is None:
        await _build_backends(app)
    yield
    app.state.store.close()
    logger.info("store connection closed")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("rejected malformed request to %s: %s", request.url.path, exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request.")


async def _portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    if isinstance(exc, StoreError) or exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return _error(exc.status_code, "Server error")
    return _error(exc.status_code, exc.message)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def create_app(store: Optional[DocumentStore] = None, identity: Optional[IdentityProvider] = None) -> FastAPI:
    """
    Build the application. Passing ``store``/``identity`` skips backend
    construction in the lifespan, which is how tests run against fakes.
    """
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="School Portal Backend", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.identity = identity

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(PortalError, _portal_error_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    @app.get("/ping")
    async def ping(service: SchoolService = Depends(get_school_service)):
        count = await service.count_schools()
        return {"message": "pong", "schools": count}

    app.include_router(schools_router)
    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(opportunities_router)
    return app


app = create_app()
