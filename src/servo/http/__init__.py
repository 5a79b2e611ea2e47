"""
=============================================================================
HTTP PACKAGE - Request, Response and Routing
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST (request.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Parses raw request text into an immutable Request value            │
    │                                                                      │
    │ "GET /users/42?tab=posts HTTP/1.1\r\nHost: x\r\n"                   │
    │   → Request(method="GET", path="/users/42",                         │
    │             headers={"Host": "x"}, query_params={"tab": "posts"})   │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE (response.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Builder-style Response values and their byte serialization         │
    │                                                                      │
    │ ok("found").serialize()                                             │
    │   → b"HTTP/1.1 200\r\nContent-Type: text/html\r\n..."              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ ROUTES + ROUTER (routes.py, router.py)                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ "GET /users/{}" → handler;  GET /users/42 → (["42"], handler)      │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ CONTENT TYPES (content_type.py) + STATUS CODES (status_codes.py)    │
    │ ─────────────────────────────────────────────────────────────────── │
    │ main.css → ContentType.TEXT_CSS;  HTTPStatus.NOT_FOUND == 404      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .content_type import ContentType, get_content_type
from .request import Request, MalformedRequest, parse_request
from .response import (
    Response,
    ok,             # 200 OK
    ok_file,        # 200 OK, binary body
    bad_request,    # 400 Bad Request
    not_found,      # 404 Not Found
    server_error,   # 505 (legacy server error code)
)
from .router import RouterFunc, default_router, not_found_handler
from .routes import Handler, RouteTable, WILDCARD, route_key
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "Request",
    "MalformedRequest",
    "parse_request",

    # Response building
    "Response",
    "ok",
    "ok_file",
    "bad_request",
    "not_found",
    "server_error",

    # Routing
    "Handler",
    "RouteTable",
    "RouterFunc",
    "WILDCARD",
    "route_key",
    "default_router",
    "not_found_handler",

    # Status codes and content types
    "HTTPStatus",
    "ContentType",
    "get_content_type",
]
