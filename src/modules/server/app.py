"""aiohttp application: routes, handlers and the access-log middleware."""

import time
from typing import Awaitable, Callable

from aiohttp import web

from ..logging import BaseLogger
from .responses import ApiResponse, HealthResponse

LOGGER_KEY = web.AppKey("logger", BaseLogger)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def root_handler(request: web.Request) -> web.Response:
    return web.json_response(
        ApiResponse(status="success", message="Hello World").model_dump()
    )


async def api_handler(request: web.Request) -> web.Response:
    return web.json_response(
        ApiResponse(status="success", message="Hello API").model_dump()
    )


async def health_handler(request: web.Request) -> web.Response:
    """Healthcheck endpoint.

    Must stay fast and always answer 200, including while draining.
    """
    return web.json_response(HealthResponse().model_dump())


@web.middleware
async def access_log_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    start = time.perf_counter()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as e:
        status = e.status
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        request.app[LOGGER_KEY].log_request(request.method, request.path, status, duration_ms)


def create_app(logger: BaseLogger) -> web.Application:
    """Build the application with its three static routes."""
    app = web.Application(middlewares=[access_log_middleware])
    app[LOGGER_KEY] = logger
    app.add_routes([
        web.get("/", root_handler),
        web.get("/api", api_handler),
        web.get("/health", health_handler),
    ])
    return app
