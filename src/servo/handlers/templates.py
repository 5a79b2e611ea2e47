"""
Template file loading.

Handlers pair get_html() with ok() to answer with a page from the template
directory:

    @routes.route("GET /about")
    def about(request, config):
        return ok(get_html("about.html", config))
"""

from pathlib import Path
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from ..config import Configuration


logger = logging.getLogger(__name__)


def get_html(path: str, config: "Configuration") -> str:
    """
    Read a file from config.server.html_dir as text.

    Args:
        path: File name relative to the template directory.
        config: Supplies the template directory.

    Returns:
        The file contents, or "" if the file cannot be opened or decoded.
        The failure is logged, not raised.
    """
    filename = Path(config.server.html_dir) / path

    try:
        return filename.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Template read error: {filename}: {e}")
        return ""
