"""
=============================================================================
CONTENT TYPES
=============================================================================

The fixed set of content types a Response can carry, and the lookup from
file extension to content type used when serving files from disk.

=============================================================================
WHY AN ENUM?
=============================================================================

A Response does not take a free-form MIME string. It takes one of a closed
set of values, and serialization turns that value into the Content-Type
header:

    ContentType.TEXT_HTML      →  Content-Type: text/html
    ContentType.IMAGE_PNG      →  Content-Type: image/png

Keeping the set closed means a typo is an AttributeError at the call site,
not a broken header on the wire.

=============================================================================
EXTENSION TABLE
=============================================================================

    ┌────────────────┬────────────────────────┐
    │  Extension     │  Content type          │
    ├────────────────┼────────────────────────┤
    │  .html         │  text/html  (default)  │
    │  .css          │  text/css              │
    │  .js           │  text/javascript       │
    │  .svg          │  text/svg+xml          │
    │  .json         │  application/json      │
    │  .xml          │  application/xml       │
    │  .png          │  image/png             │
    │  .jpg / .jpeg  │  image/jpg             │
    │  .bmp          │  image/bmp             │
    │  .gif          │  image/gif             │
    └────────────────┴────────────────────────┘

Unknown or missing extensions fall back to text/html.

The strings "text/svg+xml" and "image/jpg" are not the IANA registrations
(image/svg+xml, image/jpeg). They are what existing clients of this server
receive, so they stay.

=============================================================================
"""

from enum import Enum
from pathlib import Path


class ContentType(Enum):
    """
    Content types a Response may declare.

    The enum value is the exact string written in the Content-Type header.
    """

    TEXT_HTML = "text/html"
    TEXT_CSS = "text/css"
    TEXT_JS = "text/javascript"
    TEXT_SVG_XML = "text/svg+xml"
    MULTIPART_FORM = "multipart/form"
    IMAGE_PNG = "image/png"
    IMAGE_JPG = "image/jpg"
    IMAGE_BMP = "image/bmp"
    IMAGE_GIF = "image/gif"
    APPLICATION_JSON = "application/json"
    APPLICATION_XML = "application/xml"

    @property
    def mime(self) -> str:
        """The header value, e.g. "text/html"."""
        return self.value

    def __str__(self) -> str:
        return self.value


# =============================================================================
# EXTENSION DATABASE
# =============================================================================
#
# Keys are lowercase and carry the leading dot, as Path.suffix returns them.
# New content types need an enum member above AND an entry here.
#
# =============================================================================

EXTENSION_TYPES = {
    ".html": ContentType.TEXT_HTML,
    ".css": ContentType.TEXT_CSS,
    ".js": ContentType.TEXT_JS,
    ".svg": ContentType.TEXT_SVG_XML,
    ".json": ContentType.APPLICATION_JSON,
    ".xml": ContentType.APPLICATION_XML,
    ".png": ContentType.IMAGE_PNG,
    ".jpg": ContentType.IMAGE_JPG,
    ".jpeg": ContentType.IMAGE_JPG,
    ".bmp": ContentType.IMAGE_BMP,
    ".gif": ContentType.IMAGE_GIF,
}

DEFAULT_CONTENT_TYPE = ContentType.TEXT_HTML


def get_content_type(filename: str | Path) -> ContentType:
    """
    Get the content type for a file based on its extension.

    Args:
        filename: File path or name with extension

    Returns:
        The matching ContentType, or TEXT_HTML when the extension is
        unknown or missing

    Examples:
        >>> get_content_type("static/main.css")
        <ContentType.TEXT_CSS: 'text/css'>

        >>> get_content_type("photo.JPEG")
        <ContentType.IMAGE_JPG: 'image/jpg'>

        >>> get_content_type("README")
        <ContentType.TEXT_HTML: 'text/html'>
    """
    if isinstance(filename, str):
        filename = Path(filename)

    extension = filename.suffix.lower()  # .PNG → .png
    return EXTENSION_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
