"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Serves files from the configured static directory.

=============================================================================
FLOW
=============================================================================

    Request: GET /static/css/main.css
    Route:   "GET /static/{}"   → captures ("css", "main.css")

    1. Join captures into a relative path      css/main.css
    2. Resolve under server.static_dir         static/css/main.css
    3. Refuse anything resolving outside it    404
    4. Read the bytes                          404 if missing or unreadable
    5. Pick the content type from the suffix   ContentType.TEXT_CSS

=============================================================================
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional
import logging

from ..http.content_type import ContentType, get_content_type
from ..http.request import Request
from ..http.response import Response, not_found, ok_file

if TYPE_CHECKING:
    from ..config import Configuration


logger = logging.getLogger(__name__)


def resolve_static_path(static_dir: str, relative: str) -> Optional[Path]:
    """
    Resolve a request path under the static directory.

    Returns:
        The resolved path, or None if it would escape static_dir
        (e.g. "../../etc/passwd").
    """
    root = Path(static_dir).resolve()
    full_path = (root / relative.lstrip("/")).resolve()

    try:
        full_path.relative_to(root)
    except ValueError:
        return None
    return full_path


def static_route(request: Request, config: "Configuration") -> Response:
    """
    Serve /static/{path} from config.server.static_dir.

    Args:
        request: Request routed through "GET /static/{}"; its captures
                 are the path segments below /static/.
        config: Supplies the static directory.

    Returns:
        200 with the file bytes, or 404 when the file is missing, outside
        the static directory, or unreadable.
    """
    relative = request.url_args
    full_path = resolve_static_path(config.server.static_dir, relative)

    if full_path is None:
        logger.warning(f"Path traversal attempt: {relative}")
        return not_found("Could not find resource", ContentType.TEXT_HTML)

    if not full_path.is_file():
        logger.error(f"Could not find file to serve: {full_path}")
        return not_found("Could not find resource", ContentType.TEXT_HTML)

    try:
        contents = full_path.read_bytes()
    except OSError as e:
        logger.error(f"File read error: {full_path}: {e}")
        return not_found("Could not read file", ContentType.TEXT_HTML)

    return ok_file(contents, get_content_type(full_path))
