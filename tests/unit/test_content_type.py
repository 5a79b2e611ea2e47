"""
Unit tests for content type lookup.
"""

from pathlib import Path

import pytest

from servo.http.content_type import ContentType, get_content_type


class TestGetContentType:
    """Tests for get_content_type()."""

    @pytest.mark.parametrize("filename,expected", [
        ("index.html", ContentType.TEXT_HTML),
        ("main.css", ContentType.TEXT_CSS),
        ("app.js", ContentType.TEXT_JS),
        ("icon.svg", ContentType.TEXT_SVG_XML),
        ("data.json", ContentType.APPLICATION_JSON),
        ("feed.xml", ContentType.APPLICATION_XML),
        ("logo.png", ContentType.IMAGE_PNG),
        ("photo.jpg", ContentType.IMAGE_JPG),
        ("photo.jpeg", ContentType.IMAGE_JPG),
        ("old.bmp", ContentType.IMAGE_BMP),
        ("anim.gif", ContentType.IMAGE_GIF),
    ])
    def test_known_extensions(self, filename, expected):
        assert get_content_type(filename) is expected

    def test_extension_case_ignored(self):
        """Test that uppercase extensions are recognized."""
        assert get_content_type("LOGO.PNG") is ContentType.IMAGE_PNG

    def test_unknown_defaults_to_html(self):
        """Test the fallback for unknown or missing extensions."""
        assert get_content_type("archive.tar.zst") is ContentType.TEXT_HTML
        assert get_content_type("README") is ContentType.TEXT_HTML

    def test_accepts_path(self):
        """Test that Path objects work as well as strings."""
        assert get_content_type(Path("static") / "css" / "main.css") is ContentType.TEXT_CSS

    def test_only_last_suffix_counts(self):
        assert get_content_type("bundle.min.js") is ContentType.TEXT_JS


class TestContentType:
    """Tests for the ContentType enum."""

    def test_wire_strings(self):
        assert ContentType.TEXT_SVG_XML.mime == "text/svg+xml"
        assert ContentType.MULTIPART_FORM.mime == "multipart/form"
        assert str(ContentType.IMAGE_JPG) == "image/jpg"
