"""FastAPI application for the agentdock REST API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agentdock.config import Settings
from agentdock.errors import DockError
from agentdock.logging_config import configure_logging
from dockserver.agent_routes import router as agent_router
from dockserver.db import init_all
from dockserver.log_routes import router as log_router
from dockserver.query_routes import router as query_router
from dockserver.services import Services, build_services
from dockserver.tool_routes import router as tool_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Build the app.

    Settings come from the environment (and .env) unless given. Tests pass
    their own services to swap in a fake completion client or memory stores.
    """
    if services is not None:
        settings = services.settings
    elif settings is None:
        settings = Settings.from_env()

    configure_logging(settings.server.log_level, settings.server.log_dir)
    if services is None:
        services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize database tables on startup."""
        init_all(services)
        logger.info(f"REST API server started on port {settings.server.port}")
        yield
        services.close()

    app = FastAPI(
        title="AgentDock API",
        description="Agent registry, provider tool gateway and audited query dispatch",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    app.add_exception_handler(DockError, _dock_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]

    app.include_router(agent_router, prefix="/api")
    app.include_router(tool_router, prefix="/api")
    app.include_router(query_router, prefix="/api")
    app.include_router(log_router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/")
    def root():
        """Service info."""
        return {
            "status": "ok",
            "version": VERSION,
            "completion_model": settings.completion.model,
            "providers": {key.value: on for key, on in settings.provider_configured().items()},
            "endpoints": {
                "agents": "/api/agents",
                "tools": "/api/tools",
                "query": "/api/query",
                "logs": "/api/logs/queries",
            },
        }

    return app


def _dock_error_handler(request: Request, exc: DockError) -> Response:
    if exc.status_code >= 500:
        logger.error(f"API Error: {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = [
        {"loc": list(e.get("loc") or ()), "msg": e.get("msg", "Invalid value"), "type": e.get("type")}
        for e in exc.errors()
    ]
    logger.warning(f"Validation error on {request.method} {request.url.path}: {len(errors)} error(s)")
    return JSONResponse({"error": "Invalid request", "details": errors}, status_code=400)


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)
