"""
Routes every new Configuration starts with.

    "GET /"            → default_home   ("Good Job.")
    "GET /static/{}"   → static_route   (files under static_dir)

Host programs override either by adding the same key again.
"""

from typing import TYPE_CHECKING

from ..http.content_type import ContentType
from ..http.request import Request
from ..http.response import Response, ok
from ..http.routes import RouteTable
from .static import static_route

if TYPE_CHECKING:
    from ..config import Configuration


HOME_ROUTE = "GET /"
STATIC_ROUTE = "GET /static/{}"


def default_home(request: Request, config: "Configuration") -> Response:
    """Placeholder home page until the host registers its own "GET /"."""
    return ok("Good Job.", ContentType.TEXT_HTML)


def default_routes() -> RouteTable:
    """A fresh RouteTable holding the built-in routes."""
    return RouteTable({
        HOME_ROUTE: default_home,
        STATIC_ROUTE: static_route,
    })
