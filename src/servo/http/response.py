"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Immutable Response values, builder-style setters, and the serializer that
turns a Response into the bytes written back to the client.

=============================================================================
WIRE FORMAT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     SERIALIZED RESPONSE                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200\r\n                 ← status line, no reason phrase │
    │    Content-Type: text/html\r\n      ← always, from content_type    │
    │    Content-Length: 9\r\n            ← always, len(body)            │
    │    X-Custom: value\r\n              ← any headers the handler set  │
    │    \r\n                             ← end of headers               │
    │    Good Job.                        ← body bytes, verbatim         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Content-Type and Content-Length are derived at serialization time. If a
handler set either of them by hand (in any letter case) the derived value
wins, so the length on the wire always matches the body on the wire.

=============================================================================
BUILDER PATTERN
=============================================================================

Every setter returns a NEW Response; the original is untouched:

    response = (Response()
        .with_status(200)
        .with_content_type(ContentType.APPLICATION_JSON)
        .with_body(b'{"ok": true}')
        .with_header("Cache-Control", "no-store"))

For the common cases use the canned constructors at the bottom of this
module:

    return ok("found")
    return not_found("Route not found.")
    return ok_file(png_bytes, ContentType.IMAGE_PNG)

=============================================================================
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Union

from .content_type import ContentType
from .status_codes import HTTPStatus


Body = Union[str, bytes]

# Headers the serializer always computes itself
DERIVED_HEADERS = ("content-type", "content-length")


@dataclass(frozen=True)
class Response:
    """
    An HTTP response, built by a handler and consumed once by serialize().

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Handler returns          serialize()             Connection sends
        Response        ─────►   builds bytes   ─────►   raw bytes
            │                        │                        │
        Response(                b"HTTP/1.1 200\r\n      sock.sendall(
          status=200,              Content-Type: ...       data
          content_type=...,        Content-Length: ...   )
          body=b"..."              \r\n ..."
        )

    =========================================================================
    """

    status: int = 0
    content_type: ContentType = ContentType.TEXT_HTML
    body: bytes = b""
    headers: Optional[Dict[str, str]] = None

    def __post_init__(self):
        # str bodies are stored UTF-8 encoded, same as with_body()
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    # =========================================================================
    # BUILDERS
    # =========================================================================

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_content_type(self, content_type: ContentType) -> "Response":
        return replace(self, content_type=content_type)

    def with_body(self, body: Body) -> "Response":
        """
        Set the body. Strings are encoded as UTF-8.
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        return replace(self, body=body)

    def with_headers(self, headers: Optional[Dict[str, str]]) -> "Response":
        """Replace all optional headers (None clears them)."""
        return replace(self, headers=dict(headers) if headers is not None else None)

    def with_header(self, name: str, value: str) -> "Response":
        """Add or overwrite a single header, creating the mapping if needed."""
        headers = dict(self.headers or {})
        headers[name] = value
        return replace(self, headers=headers)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    @property
    def status_line(self) -> str:
        """
        The status line, e.g. "HTTP/1.1 404".

        No reason phrase is sent; HTTP/1.1 clients do not need one.
        """
        return f"HTTP/1.1 {int(self.status)}"

    def header_lines(self) -> Dict[str, str]:
        """
        The full, ordered header mapping that serialize() writes.

        Content-Type and Content-Length come first, then the handler's own
        headers in insertion order, minus any it set for the two derived
        names.
        """
        lines = {
            "Content-Type": self.content_type.mime,
            "Content-Length": str(len(self.body)),
        }
        for name, value in (self.headers or {}).items():
            if name.lower() in DERIVED_HEADERS:
                continue
            lines[name] = value
        return lines

    def serialize(self) -> bytes:
        """
        Serialize the response to bytes for sending over a socket.

        Returns:
            Status line, headers, blank line and body, as bytes. The body
            is appended verbatim: no re-encoding, no chunking.
        """
        lines = [self.status_line]
        for name, value in self.header_lines().items():
            lines.append(f"{name}: {value}")

        # Empty line separates headers from body
        lines.append("")
        head = "\r\n".join(lines).encode("utf-8") + b"\r\n"

        return head + self.body


# =============================================================================
# CANNED RESPONSES
# =============================================================================
#
# Each fixes the status code and takes a body plus a content type.
# The content type defaults to HTML, the most common case for this server.
#
# =============================================================================

def _canned(status: int, body: Body, content_type: ContentType) -> Response:
    return (Response()
        .with_status(status)
        .with_content_type(content_type)
        .with_body(body))


def ok(body: Body = "", content_type: ContentType = ContentType.TEXT_HTML) -> Response:
    """
    Create a 200 OK response.

    Args:
        body: Response body (str is encoded as UTF-8)
        content_type: Declared content type

    Returns:
        Response with status 200
    """
    return _canned(HTTPStatus.OK, body, content_type)


def ok_file(body: bytes, content_type: ContentType) -> Response:
    """
    Create a 200 OK response from file contents.

    Same as ok() but spelled out for binary payloads read from disk,
    where the content type usually comes from get_content_type().
    """
    return _canned(HTTPStatus.OK, body, content_type)


def bad_request(body: Body = "Bad Request", content_type: ContentType = ContentType.TEXT_HTML) -> Response:
    """
    Create a 400 Bad Request response.

    Sent when the request line could not be parsed.
    """
    return _canned(HTTPStatus.BAD_REQUEST, body, content_type)


def not_found(body: Body = "", content_type: ContentType = ContentType.TEXT_HTML) -> Response:
    """
    Create a 404 Not Found response.

    Used both for unrouted requests and for missing static files.
    """
    return _canned(HTTPStatus.NOT_FOUND, body, content_type)


def server_error(body: Body = "", content_type: ContentType = ContentType.TEXT_HTML) -> Response:
    """
    Create a server error response.

    The status is 505, not 500. Build a Response with
    HTTPStatus.INTERNAL_SERVER_ERROR if you need 500.

    Returns:
        Response with status 505
    """
    return _canned(HTTPStatus.HTTP_VERSION_NOT_SUPPORTED, body, content_type)
