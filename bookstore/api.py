import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from bookstore.config import Settings, configure_logging, settings as default_settings
from bookstore.container import HandlerContainer, build_default_container
from bookstore.handlers.base import HandlerRequest, HandlerUnavailableError

configure_logging()
logger = logging.getLogger(__name__)

# Handlers answer every request regardless of method
HANDLER_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


def create_app(container: HandlerContainer | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the API around a handler container (the default one if omitted).

    Title, version and debug mode come from ``settings``, which should be the
    same settings the container was built from.
    """
    settings = settings or default_settings
    container = container or build_default_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Handlers are initialized once on startup and destroyed on shutdown
        container.start()
        try:
            yield
        finally:
            container.shutdown()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    # --- Health check ---
    @app.get("/health")
    async def health():
        """Lightweight health endpoint for container probes."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "handlers": [row["path"] for row in container.describe()],
        }

    @app.get("/handlers")
    async def list_handlers():
        return container.describe()

    # --- Handler dispatch ---
    @app.api_route("/{path:path}", methods=HANDLER_METHODS)
    async def dispatch(path: str, request: Request):
        target = "/" + path
        if not container.has_path(target):
            raise HTTPException(status_code=404, detail=f"No handler registered for {target}")

        handler_request = HandlerRequest(
            method=request.method,
            path=target,
            query_params=dict(request.query_params),
            headers=dict(request.headers),
            body=await request.body(),
        )
        try:
            handler_response = container.dispatch(target, handler_request)
        except HandlerUnavailableError as e:
            raise HTTPException(status_code=503, detail=str(e))

        if handler_response is None:
            raise HTTPException(status_code=404, detail=f"No handler registered for {target}")
        return Response(
            content=handler_response.body,
            status_code=handler_response.status_code,
            media_type=handler_response.content_type,
        )

    return app


app = create_app()
