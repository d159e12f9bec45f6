"""
FastAPI application for the fortune service.

``create_app`` reads the category directory once, wires the fortune
invoker and registers the routes. Run it through ``fortune_api.server``
or any ASGI server, e.g.::

    uvicorn --factory fortune_api.main:create_app
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.routing import request_response

from . import __version__
from .categories import CategoryIndex
from .config import Settings
from .fortune import FortuneError, FortuneExecutionError, FortuneInvoker
from .logging_config import setup_logging
from .schemas import Health, Version

logger = logging.getLogger(__name__)

router = APIRouter()


# === Dependencies ===


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_categories(request: Request) -> CategoryIndex:
    return request.app.state.categories


def get_invoker(request: Request) -> FortuneInvoker:
    return request.app.state.invoker


# === Metadata ===


@router.get("/healthz", response_model=Health)
def health(categories: CategoryIndex = Depends(get_categories)) -> Health:
    return Health(categories=len(categories))


@router.get("/version", response_model=Version)
def version() -> Version:
    return Version(version=__version__)


class AnyMethod:
    """ASGI app serving ``endpoint`` for every HTTP method.

    Starlette limits plain function endpoints to GET; callable instances
    are routed for any method.
    """

    def __init__(self, endpoint) -> None:
        self.app = request_response(endpoint)

    async def __call__(self, scope, receive, send) -> None:
        await self.app(scope, receive, send)


# === Fortunes ===


def list_categories(request: Request) -> Response:
    categories = get_categories(request)
    try:
        body = json.dumps(categories.as_mapping())
    except (TypeError, ValueError):
        logger.exception("Could not serialize the category list")
        body = "[]"
    return Response(content=body, media_type="application/json")


async def random_fortune(request: Request) -> Response:
    """Every path other than the ones above serves a fortune."""
    settings = get_settings(request)
    category = request.query_params.get("category", "").strip()
    if category and settings.strict_categories and category not in get_categories(request):
        logger.info("Rejected unknown category %r", category)
        raise FortuneExecutionError()
    fortune = await get_invoker(request)(category)
    return PlainTextResponse(fortune)


async def fortune_error_handler(request: Request, exc: FortuneError) -> Response:
    logger.warning("%s %s -> %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Raises ``CategoryIndexError`` when the fortune directory cannot be
    read; the service has nothing to serve without it.
    """
    if settings is None:
        settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title="Fortune API", version=__version__)
    app.state.settings = settings
    app.state.categories = CategoryIndex.from_directory(settings.fortune_dir)
    app.state.invoker = FortuneInvoker(settings.fortune_command, settings.subprocess_timeout)

    app.add_exception_handler(FortuneError, fortune_error_handler)
    app.include_router(router)
    app.router.add_route("/categories", AnyMethod(list_categories))
    app.router.add_route("/{path:path}", AnyMethod(random_fortune))
    return app
