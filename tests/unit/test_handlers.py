"""
Unit tests for the built-in handlers.
"""

import logging

from servo.config import Configuration
from servo.dispatch import route_request
from servo.handlers import default_home, default_routes, get_html, static_route
from servo.handlers.static import resolve_static_path
from servo.http.content_type import ContentType
from servo.http.request import Request, parse_request


def static_request(*captures: str) -> Request:
    return Request(path="/static/" + "/".join(captures)).with_captures(captures)


class TestDefaultHome:
    """Tests for default_home()."""

    def test_good_job(self):
        response = default_home(Request(path="/"), Configuration())

        assert response.status == 200
        assert response.body == b"Good Job."
        assert response.content_type is ContentType.TEXT_HTML


class TestDefaultRoutes:
    """Tests for default_routes()."""

    def test_contents(self):
        routes = default_routes()

        assert routes.keys() == ["GET /", "GET /static/{}"]

    def test_fresh_table_each_call(self):
        assert default_routes() is not default_routes()


class TestStaticRoute:
    """Tests for static_route()."""

    def test_serves_file(self, configuration):
        """Test serving a nested file with its content type."""
        response = static_route(static_request("css", "main.css"), configuration)

        assert response.status == 200
        assert response.body == b"body { color: red; }"
        assert response.content_type is ContentType.TEXT_CSS

    def test_uppercase_extension(self, configuration):
        """Test binary files with an uppercase extension."""
        response = static_route(static_request("img", "logo.PNG"), configuration)

        assert response.status == 200
        assert response.body == b"\x89PNG\r\n\x1a\n"
        assert response.content_type is ContentType.IMAGE_PNG

    def test_missing_file(self, configuration, caplog):
        """Test that a missing file is a logged 404."""
        with caplog.at_level(logging.ERROR, logger="servo.handlers.static"):
            response = static_route(static_request("nope.css"), configuration)

        assert response.status == 404
        assert response.body == b"Could not find resource"
        assert "Could not find file" in caplog.text

    def test_directory_is_not_served(self, configuration):
        response = static_route(static_request("css"), configuration)

        assert response.status == 404

    def test_traversal_refused(self, configuration):
        """Test that paths escaping the static directory are refused."""
        response = static_route(static_request("..", "secret.txt"), configuration)

        assert response.status == 404
        assert b"do not serve" not in response.body

    def test_through_router(self, configuration):
        """Test the full path from raw request to file bytes."""
        request = parse_request(b"GET /static/css/main.css HTTP/1.1\r\n")

        response = route_request(request, configuration)

        assert response.status == 200
        assert response.body == b"body { color: red; }"

    def test_resolve_static_path(self, site_dirs):
        static = str(site_dirs / "static")

        assert resolve_static_path(static, "css/main.css") == (site_dirs / "static" / "css" / "main.css").resolve()
        assert resolve_static_path(static, "../secret.txt") is None


class TestGetHtml:
    """Tests for get_html()."""

    def test_reads_template(self, configuration):
        assert get_html("index.html", configuration) == "<h1>Home</h1>"

    def test_missing_template_is_empty(self, configuration, caplog):
        """Test that a missing template logs and returns ''."""
        with caplog.at_level(logging.ERROR, logger="servo.handlers.templates"):
            assert get_html("missing.html", configuration) == ""

        assert "Template read error" in caplog.text
