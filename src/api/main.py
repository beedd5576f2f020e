"""FastAPI application entry point."""
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.errors import register_exception_handlers
from api.middleware import AccessLogMiddleware, SecurityHeadersMiddleware
from api.routers import bookmarks, health
from core.auth import verify_api_token
from core.config import get_settings
from core.exceptions import RouteNotFoundError
from core.logging_config import configure_logging
from db.session import engine, init_db


settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
    """Create tables on startup and release the connection pool on shutdown."""
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title="Bookmarks API",
    description="Token-protected CRUD API for bookmarks.",
    version="0.1.0",
    lifespan=lifespan,
    # Every route, including health and root, sits behind the token gate
    dependencies=[Depends(verify_api_token)],
)

# Middleware order: last added runs first
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AccessLogMiddleware, concise=settings.is_production)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(bookmarks.router, prefix="/api")


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Greeting for quick manual checks."""
    return "Hello, world!"


# Registered last so it only sees requests no other route claimed. Being a
# route, it runs the token gate before answering 404, so unknown paths and
# unsupported methods are still rejected with 401 for anonymous callers.
@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def route_not_found(path: str) -> None:  # noqa: ARG001
    """Answer requests that match no route."""
    raise RouteNotFoundError()
