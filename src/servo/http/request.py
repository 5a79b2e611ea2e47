"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses raw request text into immutable Request values.

The parser is deliberately permissive. It reads the request line and
"Name: value" header lines and nothing else: no body, no chunked transfer,
no version check. The one thing it refuses is a request line that does not
name both a method and a target.

=============================================================================
REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WHAT THE PARSER READS                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   GET /users/42/?page=2&sort=name HTTP/1.1                          │
    │   ─┬─ ──────────────┬──────────── ────┬───                          │
    │    │                │                 │                              │
    │  method           target          ignored                           │
    │                     │                                                │
    │          ┌──────────┴───────────┐                                   │
    │          │                      │                                    │
    │    path (before first ?)   query (after last ?)                     │
    │    /users/42/ → /users/42  page=2&sort=name                         │
    │                                                                      │
    │   Host: localhost:8000           → headers["Host"]                  │
    │   Accept: text/html              → headers["Accept"]                │
    │   garbage line without colon     → ignored                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PARSING RULES
=============================================================================

1. Leading whitespace of the whole input is skipped.
2. Line 0 is split on whitespace. Token 0 is the method, token 1 the
   target. Anything after that (usually the HTTP version) is ignored.
   Fewer than two tokens → MalformedRequest.
3. Every other line is split on its FIRST colon. The name keeps the case
   it arrived in; the value is stripped. Lines with no colon, including
   the blank line that ends the header block, are skipped.
4. The query section is the text after the LAST "?". It is split on "&"
   and every token with exactly one "=" becomes a key/value pair. Other
   tokens are dropped without complaint.
5. Exactly one trailing "/" is stripped from the path, except for the root
   path "/" itself. This keeps route keys free of trailing slashes:

       GET /users/   →  route key "GET /users"
       GET /users//  →  route key "GET /users/"   (only one is stripped)
       GET /         →  route key "GET /"

=============================================================================
IMMUTABILITY
=============================================================================

Request is a frozen dataclass. Route captures are attached after parsing by
building a new value:

    request = parse_request(raw)                  # captures == ()
    routed = request.with_captures(["a", "b"])    # new Request
    request.captures                              # still ()

A handler therefore always sees exactly the request that was routed.

=============================================================================
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple, Union


class MalformedRequest(Exception):
    """
    Raised when the request line cannot be parsed.

    Carries the HTTP status the server should answer with. The only parse
    failure this parser knows about is a request line missing its method
    or target, which maps to 400 Bad Request.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class Request:
    """
    A parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         HTTP verb exactly as received ("GET", "POST", ...)

        path:           Request path, query string removed, one trailing
                        slash stripped ("/users/42")

        headers:        Header name → value, names in the case they were
                        received ({"Host": "localhost:8000"})

        query_params:   Query key → value ({"page": "2"})

        captures:       Path segments consumed by a wildcard route, in
                        left-to-right path order. Empty until routed.

    =========================================================================
    """

    method: str = "GET"
    path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    captures: Tuple[str, ...] = ()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def route_key(self) -> str:
        """
        The canonical route table lookup key: method + " " + path.

        Example:
            Request(method="GET", path="/users/42").route_key == "GET /users/42"
        """
        return f"{self.method} {self.path}"

    @property
    def url_args(self) -> str:
        """
        Captures joined back into a relative path.

        For a request to /static/css/main.css routed to "GET /static/{}",
        captures are ("css", "main.css") and url_args is "css/main.css".
        """
        return "/".join(self.captures)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get a header value, matching the name case-insensitively.

        Headers are stored in the case they were received, so an exact
        lookup is tried first and a case-folded scan second.
        """
        if name in self.headers:
            return self.headers[name]

        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a query parameter value, or default if absent."""
        return self.query_params.get(name, default)

    # =========================================================================
    # BUILDERS - each returns a new Request
    # =========================================================================

    def with_method(self, method: str) -> "Request":
        return replace(self, method=method)

    def with_path(self, path: str) -> "Request":
        return replace(self, path=path)

    def with_headers(self, headers: Dict[str, str]) -> "Request":
        """Replace the header mapping."""
        return replace(self, headers=dict(headers))

    def with_header(self, name: str, value: str) -> "Request":
        """Add or overwrite one header."""
        headers = dict(self.headers)
        headers[name] = value
        return replace(self, headers=headers)

    def with_query_params(self, query_params: Dict[str, str]) -> "Request":
        return replace(self, query_params=dict(query_params))

    def with_captures(self, captures: Iterable[str]) -> "Request":
        """
        Attach route captures.

        Called by the dispatcher once per request, before the handler runs.
        """
        return replace(self, captures=tuple(captures))


# =============================================================================
# PARSING
# =============================================================================

def parse_request(raw: Union[str, bytes]) -> Request:
    """
    Parse raw request text into a Request.

    =====================================================================
    PARSING ALGORITHM
    =====================================================================

    1. Decode bytes as UTF-8 (undecodable bytes become U+FFFD)
    2. Skip leading whitespace, split into lines
    3. Line 0 → method, target (MalformedRequest if either is missing)
    4. Target → path + query params
    5. Lines 1..n → headers

    =====================================================================

    Args:
        raw: The request as received, either text or bytes.

    Returns:
        Parsed Request with empty captures.

    Raises:
        MalformedRequest: If the request line lacks a method or a target.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    lines = raw.lstrip().splitlines()
    if not lines:
        raise MalformedRequest("Empty request")

    method, target = _parse_request_line(lines[0])
    path, query_params = split_target(target)
    headers = _parse_headers(lines[1:])

    return Request(
        method=method,
        path=path,
        headers=headers,
        query_params=query_params,
    )


def _parse_request_line(line: str) -> Tuple[str, str]:
    """
    Split the request line into method and target.

    Only the first two whitespace-separated tokens are used:

        "GET /index.html HTTP/1.1"  →  ("GET", "/index.html")
        "GET /index.html"           →  ("GET", "/index.html")
        "GET"                       →  MalformedRequest
    """
    tokens = line.split()
    if len(tokens) < 2:
        raise MalformedRequest(f"Invalid request line: {line!r}")
    return tokens[0], tokens[1]


def _parse_headers(lines: Iterable[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}

    for line in lines:
        name, sep, value = line.partition(":")
        if not sep:
            continue  # No colon, not a header
        headers[name] = value.strip()

    return headers


def split_target(target: str) -> Tuple[str, Dict[str, str]]:
    """
    Split a request target into a normalized path and its query params.

    Args:
        target: The second token of the request line, e.g.
                "/search/?q=router&page=2"

    Returns:
        Tuple of (path, query_params), e.g.
        ("/search", {"q": "router", "page": "2"})
    """
    path, has_query, _ = target.partition("?")
    query_params = parse_query_string(target.rsplit("?", 1)[1]) if has_query else {}
    return strip_trailing_slash(path), query_params


def parse_query_string(query: str) -> Dict[str, str]:
    """
    Parse "a=1&b=2" into {"a": "1", "b": "2"}.

    Tokens must contain exactly one "=" to be recognized. "flag" and
    "a=b=c" are both dropped. A later duplicate key overwrites an earlier one.
    """
    params: Dict[str, str] = {}

    for token in query.split("&"):
        if token.count("=") != 1:
            continue
        key, value = token.split("=")
        params[key] = value

    return params


def strip_trailing_slash(path: str) -> str:
    """
    Strip exactly one trailing "/" unless the path is the root.

        "/users/"   → "/users"
        "/users//"  → "/users/"
        "/"         → "/"
    """
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path
