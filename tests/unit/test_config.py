"""
Unit tests for ServerConfig and Configuration.
"""

import dataclasses

import pytest

from servo.config import Configuration, ServerConfig
from servo.handlers import default_home, static_route
from servo.http.response import ok
from servo.http.router import default_router
from servo.http.routes import RouteTable


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.static_dir == "static/"
        assert config.html_dir == "templates/"
        assert config.buffer_size == 4096
        assert config.log_level == "INFO"
        assert config.address == "127.0.0.1:8000"

    def test_defaults_are_valid(self):
        ServerConfig().validate()

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 65536},
        {"host": "localhost:8000"},
        {"backlog": 0},
        {"buffer_size": 512},
        {"timeout": 0},
        {"log_level": "LOUD"},
    ])
    def test_validate_rejects(self, overrides):
        """Test that invalid settings raise ValueError."""
        with pytest.raises(ValueError):
            ServerConfig(**overrides).validate()

    def test_lowercase_log_level_accepted(self):
        ServerConfig(log_level="debug").validate()

    def test_from_env(self, monkeypatch):
        """Test reading settings from SERVO_* variables."""
        monkeypatch.setenv("SERVO_HOST", "0.0.0.0")
        monkeypatch.setenv("SERVO_PORT", "9001")
        monkeypatch.setenv("SERVO_STATIC_DIR", "public/")
        monkeypatch.setenv("SERVO_HTML_DIR", "pages/")
        monkeypatch.setenv("SERVO_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 9001
        assert config.static_dir == "public/"
        assert config.html_dir == "pages/"
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("SERVO_HOST", "SERVO_PORT", "SERVO_STATIC_DIR", "SERVO_HTML_DIR", "SERVO_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()

    def test_builders(self):
        """Test that builders return modified copies."""
        base = ServerConfig()
        changed = (base.with_host("0.0.0.0")
                   .with_port(9000)
                   .with_static_dir("public/")
                   .with_html_dir("pages/")
                   .with_log_level("DEBUG"))

        assert base.port == 8000
        assert changed.address == "0.0.0.0:9000"
        assert changed.static_dir == "public/"
        assert changed.html_dir == "pages/"
        assert changed.log_level == "DEBUG"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ServerConfig().port = 1


class TestConfiguration:
    """Tests for Configuration."""

    def test_default_routes(self):
        """Test the built-in routes are present."""
        config = Configuration()

        assert config.routes.get("GET /") is default_home
        assert config.routes.get("GET /static/{}") is static_route
        assert config.router is default_router

    def test_each_configuration_gets_its_own_table(self):
        """Test that default route tables are not shared."""
        a = Configuration()
        b = Configuration()

        a.add_route("GET /only-a", default_home)

        assert "GET /only-a" not in b.routes

    def test_add_route_chains(self):
        config = Configuration(routes=RouteTable())

        result = config.add_route("GET /a", default_home).add_route("GET /b", default_home)

        assert result is config
        assert config.routes.keys() == ["GET /a", "GET /b"]

    def test_with_builders(self):
        """Test with_server / with_routes / with_router."""
        def other_router(request, routes):
            return [], lambda request, config: ok()

        base = Configuration()
        routes = RouteTable()
        changed = (base.with_server(ServerConfig(port=1234))
                   .with_routes(routes)
                   .with_router(other_router))

        assert changed.server.port == 1234
        assert changed.routes is routes
        assert changed.router is other_router
        assert base.server.port == 8000
        assert base.router is default_router
