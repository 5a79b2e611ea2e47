"""
=============================================================================
DISPATCHER
=============================================================================

Glue between a parsed Request and the handler that answers it.

    Request ──► router(request, routes) ──► (captures, handler)
                                                  │
         request.with_captures(captures) ◄────────┘
                      │
                      ▼
         handler(request, configuration) ──► Response

"No route" is not an error. The router answers it with the not-found
handler, so dispatch always returns a Response.

Handler exceptions are NOT caught here; server.process_request turns them
into a response.
"""

import logging

from .config import Configuration
from .http.request import Request
from .http.response import Response
from .http.routes import RouteTable


logger = logging.getLogger(__name__)


def dispatch(request: Request, routes: RouteTable, configuration: Configuration) -> Response:
    """
    Resolve a request against a route table and invoke the handler.

    Args:
        request: The parsed request, captures not yet attached.
        routes: The table to resolve against. Pass a snapshot when the
                table may change concurrently.
        configuration: Passed through to the handler; its router does the
                       resolution.

    Returns:
        Whatever Response the handler returned.
    """
    captures, handler = configuration.router(request, routes)

    logger.debug(
        f"{request.route_key} → {getattr(handler, '__name__', handler)!s}"
        f" captures={list(captures)}"
    )

    return handler(request.with_captures(captures), configuration)


def route_request(request: Request, configuration: Configuration) -> Response:
    """
    Dispatch against a consistent snapshot of the configuration's routes.

    This is the entry point the server uses for every request.
    """
    return dispatch(request, configuration.routes.snapshot(), configuration)
