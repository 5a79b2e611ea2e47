"""
=============================================================================
ROUTE TABLE
=============================================================================

Maps route keys to handler functions.

=============================================================================
ROUTE KEYS
=============================================================================

A route key is the method, one space, and the path:

    "GET /"                    exact route for the site root
    "GET /home/nope/ok"        exact route
    "POST /users"              exact route, different method
    "GET /users/{}"            wildcard route

The final path segment may be the wildcard token "{}". It stands for one
or more trailing path segments, which the router hands to the handler as
positional captures:

    "GET /users/{}"   matches   GET /users/42          captures ["42"]
                                GET /users/42/posts    captures ["42", "posts"]
                      but not   GET /users             (needs one segment)

Keys are case-sensitive and method-qualified. Keys are validated on add:

    "/users"              ✗ no method
    "GET users"           ✗ path must start with "/"
    "GET /users/"         ✗ trailing slash (requests never carry one)
    "GET /{}/posts"       ✗ the wildcard must be the final segment

=============================================================================
CONCURRENCY
=============================================================================

Routes are normally all registered before the server starts, but handlers
may add routes at runtime. The table uses a single-writer lock and
copy-on-write:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   add("GET /x", h)                                                  │
    │       │                                                              │
    │       ├──► acquire writer lock                                      │
    │       ├──► new = dict(current); new["GET /x"] = h                  │
    │       └──► current = new          (one reference assignment)       │
    │                                                                      │
    │   snapshot()                                                        │
    │       └──► RouteTable over `current` as it is right now            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A published dict is never mutated again, so a snapshot taken for one
request can't see a half-applied add.

=============================================================================
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Mapping, Optional
import threading

from .request import Request
from .response import Response

if TYPE_CHECKING:
    from ..config import Configuration


# Handler: the signature every route must have
Handler = Callable[[Request, "Configuration"], Response]

# The reserved final path segment marking a wildcard route
WILDCARD = "{}"


def route_key(method: str, path: str) -> str:
    """
    Build a route key.

    Example:
        route_key("GET", "/users/{}") == "GET /users/{}"
    """
    return f"{method} {path}"


def validate_route_key(key: str) -> None:
    """
    Check that a route key is well-formed.

    Raises:
        ValueError: If the key has no method, its path does not start with
                    "/", it has a trailing slash, or "{}" appears anywhere
                    except the final segment.
    """
    method, sep, path = key.partition(" ")
    if not sep or not method:
        raise ValueError(f"Route key must be '<METHOD> <PATH>': {key!r}")

    if not path.startswith("/"):
        raise ValueError(f"Route path must start with '/': {key!r}")

    if len(path) > 1 and path.endswith("/"):
        raise ValueError(f"Route path must not end with '/': {key!r}")

    segments = path.split("/")[1:]
    for segment in segments[:-1]:
        if WILDCARD in segment:
            raise ValueError(f"Wildcard must be the final path segment: {key!r}")
    if WILDCARD in segments[-1] and segments[-1] != WILDCARD:
        raise ValueError(f"Wildcard must be a whole path segment: {key!r}")


def is_wildcard_key(key: str) -> bool:
    """True if the key ends with the wildcard segment."""
    return key.endswith("/" + WILDCARD)


class RouteTable:
    """
    Route key → handler mapping.

    ==========================================================================
    USAGE
    ==========================================================================

        routes = RouteTable()

        routes.add("GET /", home)

        @routes.route("GET /users/{}")
        def show_user(request, config):
            user_id = request.captures[0]
            return ok(f"user {user_id}")

        routes.contains("GET /")      # True
        routes.get("GET /missing")    # None

    ==========================================================================
    """

    def __init__(self, routes: Optional[Mapping[str, Handler]] = None):
        """
        Initialize the table.

        Args:
            routes: Optional initial key → handler mapping. Every key is
                    validated as if it had been passed to add().
        """
        self._lock = threading.Lock()
        self._routes: Dict[str, Handler] = {}

        for key, handler in (routes or {}).items():
            self.add(key, handler)

    @classmethod
    def _frozen(cls, routes: Dict[str, Handler]) -> "RouteTable":
        # Shares `routes` without copying; callers must never mutate it again
        table = cls.__new__(cls)
        table._lock = threading.Lock()
        table._routes = routes
        return table

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add(self, key: str, handler: Handler) -> None:
        """
        Register a handler for a route key.

        Re-adding an existing key replaces its handler (last write wins);
        the table does not grow.

        Raises:
            ValueError: If the key is malformed (see validate_route_key).
        """
        validate_route_key(key)

        with self._lock:
            routes = dict(self._routes)
            routes[key] = handler
            self._routes = routes

    def route(self, key: str) -> Callable[[Handler], Handler]:
        """
        Decorator form of add().

            @routes.route("GET /about")
            def about(request, config):
                return ok(get_html("about.html", config))
        """
        def decorator(handler: Handler) -> Handler:
            self.add(key, handler)
            return handler  # Return handler unchanged (allows stacking decorators)
        return decorator

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def contains(self, key: str) -> bool:
        return key in self._routes

    def get(self, key: str) -> Optional[Handler]:
        return self._routes.get(key)

    def keys(self) -> List[str]:
        """All registered keys, sorted."""
        return sorted(self._routes)

    def snapshot(self) -> "RouteTable":
        """
        A read-only, consistent view of the table as it is right now.

        Later add() calls on this table are not visible through the
        snapshot. Adding to the snapshot itself does not affect this table.
        """
        return RouteTable._frozen(self._routes)

    def as_mapping(self) -> Mapping[str, Handler]:
        """Read-only mapping view of the current routes."""
        return MappingProxyType(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"RouteTable({self.keys()!r})"

    def print_routes(self) -> None:
        """
        Print all registered routes (useful for debugging).

        Example output:
            Registered Routes:
            ------------------------------------------------------------
              GET      /
              GET      /static/{}
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for key in self.keys():
            method, _, path = key.partition(" ")
            print(f"  {method:8} {path}")
        print("-" * 60)
