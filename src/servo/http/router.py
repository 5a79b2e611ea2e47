"""
=============================================================================
URL ROUTER
=============================================================================

Resolves a Request against a RouteTable, returning the positional captures
and the handler to call.

=============================================================================
ROUTING ARCHITECTURE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Incoming Request                                                   │
    │   GET /home/nope/blah/whatever/113                                   │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  ROUTER                                                      │   │
    │   │                                                              │   │
    │   │  Registered Routes:                                          │   │
    │   │  ┌────────────────────────────────────────────────────────┐ │   │
    │   │  │ GET /                 → default_home                   │ │   │
    │   │  │ GET /home/nope/ok     → ok_page                        │ │   │
    │   │  │ GET /home/nope/{}     → nope_page      ← MATCH!        │ │   │
    │   │  │ GET /home/{}          → home_page                      │ │   │
    │   │  └────────────────────────────────────────────────────────┘ │   │
    │   │                                                              │   │
    │   │  Captures: ["blah", "whatever", "113"]                      │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                                                             │
    │        ▼                                                             │
    │   nope_page(request, config)                                         │
    │   # request.captures == ("blah", "whatever", "113")                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
FALLBACK MATCHING ALGORITHM
=============================================================================

1. EXACT MATCH. Look up "METHOD /path" directly. A hit returns the handler
   with no captures; wildcard routes are never consulted.

2. WILDCARD FALLBACK. Peel segments off the end of the path one at a time,
   most specific candidate first:

       Path: /home/nope/blah/whatever/113

       pop "113"       try "GET /home/nope/blah/whatever/{}"   miss
       pop "whatever"  try "GET /home/nope/blah/{}"            miss
       pop "blah"      try "GET /home/nope/{}"                 HIT

   Popped segments were collected right-to-left (113, whatever, blah) and
   are reversed into path order before being returned.

3. NO MATCH. Return the not-found handler with no captures. A routing miss
   is not an error: it is a 404 response like any other.

=============================================================================
PRECEDENCE
=============================================================================

    Exact beats wildcard:
        "GET /a/b/c" and "GET /a/{}" both registered
        GET /a/b/c → "GET /a/b/c", captures []

    Longer wildcard prefix beats shorter:
        "GET /a/b/{}" and "GET /a/{}" both registered
        GET /a/b/c → "GET /a/b/{}", captures ["c"]

    Wildcards only match at the end of a route. A route such as
    "GET /a/{}/c" is rejected by the route table at registration time.

    The site root "/" has no segments, so only an exact "GET /" route can
    serve it; "GET /{}" needs at least one segment. Earlier versions let
    "GET /{}" match "/" with one empty capture; that was dropped deliberately.

=============================================================================
CUSTOM ROUTERS
=============================================================================

Any function with the RouterFunc signature can replace default_router:

    def case_insensitive_router(request, routes):
        return default_router(request.with_path(request.path.lower()), routes)

    config = Configuration().with_router(case_insensitive_router)

=============================================================================
"""

from typing import TYPE_CHECKING, Callable, List, Tuple

from .content_type import ContentType
from .request import Request
from .response import Response, not_found
from .routes import Handler, RouteTable, WILDCARD, route_key

if TYPE_CHECKING:
    from ..config import Configuration


# Router: resolves a request to (captures, handler)
RouterFunc = Callable[[Request, RouteTable], Tuple[List[str], Handler]]


def not_found_handler(request: Request, config: "Configuration") -> Response:
    """The handler used when no route matches."""
    return not_found("Route not found.", ContentType.TEXT_HTML)


def path_segments(path: str) -> List[str]:
    """
    Split a path into its segments, dropping the empty leading one.

        "/home/nope/ok"  →  ["home", "nope", "ok"]
        "/"              →  []
    """
    if path in ("", "/"):
        return []
    return path.split("/")[1:]


def default_router(request: Request, routes: RouteTable) -> Tuple[List[str], Handler]:
    """
    Resolve a request to its captures and handler.

    Args:
        request: The parsed request (only method and path are used)
        routes: The route table to search

    Returns:
        Tuple of (captures in path order, handler). When nothing matches the
        handler is not_found_handler and captures is empty.
    """
    requested = request.route_key

    # ─────────────────────────────────────────────────────────────────
    # EXACT MATCH
    # ─────────────────────────────────────────────────────────────────
    handler = routes.get(requested)
    if handler is not None:
        return [], handler

    # ─────────────────────────────────────────────────────────────────
    # WILDCARD FALLBACK (most specific first)
    # ─────────────────────────────────────────────────────────────────
    segments = path_segments(request.path)
    captures: List[str] = []

    while segments:
        captures.append(segments.pop())
        candidate = route_key(request.method, "/" + "/".join(segments + [WILDCARD]))

        handler = routes.get(candidate)
        if handler is not None:
            # Collected back-to-front; hand them out in path order
            captures.reverse()
            return captures, handler

    return [], not_found_handler
