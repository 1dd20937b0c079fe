import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware

from roster import __version__
from roster.core.container import ApplicationContainer, get_container
from roster.infrastructure.database import init_db
from roster.interfaces.http import create_api_router
from roster.interfaces.http.errors import register_exception_handlers

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "0",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    if container.settings.environment == "development":
        await init_db(container.engine)
    capabilities = await container.schema_detector.detect()
    logger.info(
        "Serving %s (federated id: %s, avatar: %s)",
        container.settings.project_name,
        capabilities.supports_federated_id,
        capabilities.supports_avatar,
    )
    yield
    await container.dispose()


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    container = container or get_container()
    settings = container.settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.project_name,
        description="Account and sign-in API for the school roster",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=settings.cors.allow_headers,
        max_age=settings.cors.max_age,
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/healthz", response_class=PlainTextResponse, include_in_schema=False)
    async def healthz() -> str:
        return "ok"

    return app


app = create_app()
