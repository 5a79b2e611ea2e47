"""
=============================================================================
BUILT-IN HANDLERS
=============================================================================

Handlers that ship with the router. All share the one handler signature:

    def handler(request: Request, config: Configuration) -> Response

=============================================================================
USAGE EXAMPLES
=============================================================================

    # Static file serving is registered by default at "GET /static/{}"
    config = Configuration(server=ServerConfig(static_dir="public/"))

    # Move it somewhere else
    config.add_route("GET /assets/{}", static_route)

    # Templates
    @config.routes.route("GET /about")
    def about(request, config):
        return ok(get_html("about.html", config))

=============================================================================
"""

from ..http.router import not_found_handler
from .defaults import HOME_ROUTE, STATIC_ROUTE, default_home, default_routes
from .static import static_route
from .templates import get_html

__all__ = [
    "default_home",
    "default_routes",
    "not_found_handler",
    "static_route",
    "get_html",
    "HOME_ROUTE",
    "STATIC_ROUTE",
]
