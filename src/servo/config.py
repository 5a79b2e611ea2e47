"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Configuration values for the router and the server around it.

=============================================================================
TWO LAYERS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         Configuration                               │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   server: ServerConfig       host, port, static/template dirs,      │
    │                              socket and logging settings            │
    │                                                                      │
    │   routes: RouteTable         route key → handler                    │
    │                                                                      │
    │   router: RouterFunc         resolution algorithm                   │
    │                              (default_router unless replaced)       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A Configuration is built once by the host program and passed explicitly to
the dispatcher and to every handler. There is no module-level state.

=============================================================================
IMMUTABILITY
=============================================================================

ServerConfig and Configuration are frozen dataclasses. Changing a setting
produces a new value:

    config = Configuration()
    config = config.with_server(config.server.with_port(9000))

A running server swaps its whole Configuration in one assignment (see
Servo.reconfigure), so a request sees either all of the old settings or all
of the new ones, never a mix.

The RouteTable is the one mutable part. It is safe to add routes while
serving because the table is copy-on-write (see http/routes.py).

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    Priority (highest to lowest):

    1. Command-line arguments      python -m servo --port 3000
    2. Environment variables       SERVO_PORT=3000 python -m servo
    3. Default values              (in the dataclass below)

=============================================================================
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from .handlers.defaults import default_routes
from .http.router import RouterFunc, default_router
from .http.routes import Handler, RouteTable


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerConfig:
    """
    Settings for the server around the router.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    FILES
    - static_dir, html_dir

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to, without a port.
    - "127.0.0.1" - Localhost only (development)
    - "0.0.0.0" - All network interfaces
    """

    port: int = 8000
    """The port number to listen on."""

    backlog: int = 128
    """Maximum number of queued connections."""

    buffer_size: int = 4096
    """
    Bytes read from a client socket per request.
    Requests are read in a single recv(); anything past this is not seen.
    """

    timeout: Optional[float] = 30.0
    """Client socket timeout in seconds. None blocks forever."""

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    static_dir: str = "static/"
    """
    Directory served under /static/{}.
    GET /static/css/main.css reads static/css/main.css.
    """

    html_dir: str = "templates/"
    """Directory get_html() reads template files from."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        SERVO_HOST        Server host (default: 127.0.0.1)
        SERVO_PORT        Server port (default: 8000)
        SERVO_STATIC_DIR  Static files directory (default: static/)
        SERVO_HTML_DIR    Template directory (default: templates/)
        SERVO_LOG_LEVEL   Logging level (default: INFO)

        =====================================================================
        """
        return cls(
            host=os.getenv("SERVO_HOST", "127.0.0.1"),
            port=int(os.getenv("SERVO_PORT", "8000")),
            static_dir=os.getenv("SERVO_STATIC_DIR", "static/"),
            html_dir=os.getenv("SERVO_HTML_DIR", "templates/"),
            log_level=os.getenv("SERVO_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at server construction so a bad port fails at startup, not
        on the first request.

        Raises:
            ValueError: On the first invalid setting found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if ":" in self.host:
            raise ValueError(f"Host must not include a port: {self.host!r}")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    # ─────────────────────────────────────────────────────────────────────
    # BUILDERS
    # ─────────────────────────────────────────────────────────────────────

    def with_host(self, host: str) -> "ServerConfig":
        return replace(self, host=host)

    def with_port(self, port: int) -> "ServerConfig":
        return replace(self, port=port)

    def with_static_dir(self, static_dir: str) -> "ServerConfig":
        return replace(self, static_dir=static_dir)

    def with_html_dir(self, html_dir: str) -> "ServerConfig":
        return replace(self, html_dir=html_dir)

    def with_log_level(self, log_level: str) -> "ServerConfig":
        return replace(self, log_level=log_level)

    @property
    def address(self) -> str:
        """host:port, as used in log lines."""
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class Configuration:
    """
    Everything a request needs: server settings, routes and the router.

    Usage:
        config = Configuration(server=ServerConfig(port=9000))
        config.add_route("GET /hello", hello)

        response = route_request(parse_request(raw), config)
    """

    server: ServerConfig = field(default_factory=ServerConfig)
    routes: RouteTable = field(default_factory=default_routes)
    router: RouterFunc = default_router

    def with_server(self, server: ServerConfig) -> "Configuration":
        return replace(self, server=server)

    def with_routes(self, routes: RouteTable) -> "Configuration":
        return replace(self, routes=routes)

    def with_router(self, router: RouterFunc) -> "Configuration":
        return replace(self, router=router)

    def add_route(self, key: str, handler: Handler) -> "Configuration":
        """
        Register a route on this configuration's table.

        Returns self so registrations can be chained.
        """
        self.routes.add(key, handler)
        return self
