"""
=============================================================================
SERVO - Embeddable HTTP Request Router
=============================================================================

Maps "METHOD /path" route keys to handler functions, with a trailing "{}"
wildcard that captures the rest of the path, plus a small thread-per-
connection server to run it on.

=============================================================================
ROUTING AT A GLANCE
=============================================================================

    Registered:   "GET /a/{}"   "GET /a/b/{}"   "GET /a/b/c"

    GET /a/b/c         → "GET /a/b/c"      captures []           (exact)
    GET /a/b/c/d       → "GET /a/b/{}"     captures ["c", "d"]
    GET /a/x/y         → "GET /a/{}"       captures ["x", "y"]
    GET /nowhere       → not found         404 "Route not found."

The longest registered prefix wins; exact keys always beat wildcards.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    servo/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m servo)
    ├── config.py            # ServerConfig + Configuration
    ├── dispatch.py          # router → handler glue
    ├── server.py            # Servo class, process_request()
    ├── core/
    │   ├── socket_server.py # Accept loop, thread per connection
    │   └── connection.py    # One client socket
    ├── http/
    │   ├── request.py       # Request model + parser
    │   ├── response.py      # Response model + canned constructors
    │   ├── routes.py        # RouteTable
    │   ├── router.py        # Wildcard fallback matching
    │   ├── status_codes.py  # HTTPStatus
    │   └── content_type.py  # ContentType + extension lookup
    └── handlers/
        ├── defaults.py      # "GET /" and default_routes()
        ├── static.py        # "GET /static/{}"
        └── templates.py     # get_html()

=============================================================================
QUICK START
=============================================================================

    from servo import Servo, ok

    app = Servo()

    @app.route("GET /hello/{}")
    def hello(request, config):
        return ok(f"Hello, {request.url_args}!")

    app.run(port=8000)

Or without a socket at all:

    from servo import Configuration, parse_request, route_request

    config = Configuration()
    response = route_request(parse_request(b"GET / HTTP/1.1\\r\\n"), config)

=============================================================================
"""

__version__ = "1.0.0"

from .config import Configuration, ServerConfig
from .dispatch import dispatch, route_request
from .http import (
    ContentType,
    HTTPStatus,
    MalformedRequest,
    Request,
    Response,
    RouteTable,
    bad_request,
    default_router,
    not_found,
    ok,
    ok_file,
    parse_request,
    server_error,
)
from .handlers import get_html, static_route
from .server import Servo, process_request

__all__ = [
    "Servo",
    "Configuration",
    "ServerConfig",
    "Request",
    "Response",
    "RouteTable",
    "MalformedRequest",
    "ContentType",
    "HTTPStatus",
    "parse_request",
    "process_request",
    "dispatch",
    "route_request",
    "default_router",
    "ok",
    "ok_file",
    "bad_request",
    "not_found",
    "server_error",
    "static_route",
    "get_html",
    "__version__",
]
