"""
HTTP Surface

Exposes handler instances as FastAPI routes, one route per handler.

Invariants:
    - Every response is HTTP 200 with content type application/json; failure
      is signaled only by IsSuccessful in the body. This is legacy behavior
      that existing clients rely on and is kept on purpose.
    - Handlers are synchronous (boto3); they run in Starlette's threadpool.
    - Headers set by a handler (e.g. the list handler's no-cache headers) are
      copied to the response unchanged.
"""

import logging
from typing import Iterable, Mapping, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from .config import HandlerConfig
from .exceptions import ConfigurationError
from .handlers import BaseHandler
from .models import RequestContext

logger = logging.getLogger(__name__)

DEFAULT_METHODS = ("GET", "POST")


def build_request_context(request: Request) -> RequestContext:
    """Build the transport-neutral context handed to pre-execution hooks."""
    return RequestContext(
        method=request.method,
        path=request.url.path,
        headers={k.lower(): v for k, v in request.headers.items()},
        query_params=dict(request.query_params),
        client_host=request.client.host if request.client else None,
        raw=request,
    )


def mount_handler(
    router: APIRouter,
    path: str,
    handler: BaseHandler,
    methods: Iterable[str] = DEFAULT_METHODS
) -> None:
    """
    Register ``handler`` on ``router`` at ``path``.

    A misconfigured handler is still mounted (every call returns a failure
    envelope) but is reported at startup.
    """
    try:
        handler.validate_configuration()
    except ConfigurationError as e:
        logger.error(f"Handler mounted at {path} is misconfigured: {e}")

    async def endpoint(request: Request) -> Response:
        body = await request.body()
        context = build_request_context(request)
        result = await run_in_threadpool(handler.handle, body, context)
        return Response(
            content=result.body,
            status_code=result.status_code,
            media_type=result.content_type,
            headers=result.headers,
        )

    endpoint.__name__ = f"{handler.calling_method}_{path.strip('/').replace('/', '_') or 'root'}"
    router.add_api_route(path, endpoint, methods=list(methods), include_in_schema=True)
    logger.debug(f"Mounted {handler.calling_method} at {path} ({', '.join(methods)})")


def create_app(
    routes: Mapping[str, BaseHandler],
    config: Optional[HandlerConfig] = None,
    title: str = "Generic Handlers"
) -> FastAPI:
    """
    Build a FastAPI application serving ``routes``.

    Args:
        routes: Mapping of URL path to handler instance
        config: Used for logging settings (defaults to the environment)
        title: OpenAPI title

    Returns:
        Configured FastAPI application
    """
    config = config or HandlerConfig()
    if config.enable_debug_logging:
        logging.getLogger("generic_handlers").setLevel(logging.DEBUG)

    app = FastAPI(title=title)
    router = APIRouter()
    for path, handler in routes.items():
        mount_handler(router, path, handler)
    app.include_router(router)
    logger.info(f"Serving {len(routes)} handler route(s)")
    return app
