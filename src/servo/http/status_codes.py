"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The small set of status codes the router itself produces.

Handlers are free to put any integer in a Response; these names exist so
the canned constructors in response.py read as what they mean rather than
as magic numbers.

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  200   │ OK - a handler produced a page, file or document          │
    │  400   │ Bad Request - the request line could not be parsed        │
    │  404   │ Not Found - no route, or the static file is missing       │
    │  500   │ Internal Server Error - conventional server failure code  │
    │  505   │ HTTP Version Not Supported - legacy "server error" code   │
    └────────┴───────────────────────────────────────────────────────────┘

Note on 505: the canned server_error() response has always answered with
505 rather than 500. Clients written against the wire format depend on it,
so it is kept. INTERNAL_SERVER_ERROR is defined for handlers that want the
conventional code.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    Status codes used by the canned responses.

    IntEnum so that values compare equal to plain integers:

        >>> HTTPStatus.OK == 200
        True
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    HTTP_VERSION_NOT_SUPPORTED = 505

    def __str__(self) -> str:
        return str(self.value)
