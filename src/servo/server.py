"""
=============================================================================
SERVO SERVER
=============================================================================

Ties the router to a socket: bytes in, Response bytes out.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │                        ┌─────────────────┐                          │
    │                        │      Servo      │                          │
    │                        │  Configuration  │                          │
    │                        └────────┬────────┘                          │
    │                                 │                                    │
    │               ┌─────────────────┴─────────────────┐                 │
    │               ▼                                   ▼                 │
    │       ┌──────────────┐                   ┌─────────────────┐        │
    │       │ SocketServer │  thread per conn  │ process_request │        │
    │       │  (accept)    │ ────────────────► │ parse/dispatch  │        │
    │       └──────────────┘                   └─────────────────┘        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
REQUEST FLOW
=============================================================================

    1. SocketServer accepts a client, starts a thread
    2. Connection.read_request()         one recv() of buffer_size bytes
    3. parse_request()                   MalformedRequest → 400
    4. route_request()                   router + handler
       handler raises                    → logged, 505
    5. Response.serialize() → sendall()
    6. close()

The Configuration is read once per connection, when the worker thread
starts, so reconfigure() never changes settings under a request already in
flight.

=============================================================================
"""

import logging
import threading
from typing import Callable, Optional

from .config import Configuration
from .core import Connection, SocketServer
from .dispatch import route_request
from .http.content_type import ContentType
from .http.request import MalformedRequest, parse_request
from .http.response import Response, bad_request, server_error
from .http.routes import Handler


logger = logging.getLogger(__name__)


def process_request(raw: bytes, configuration: Configuration) -> bytes:
    """
    Turn raw request bytes into serialized response bytes.

    Never raises for a bad request or a failing handler: the first becomes
    400 Bad Request, the second (including a handler that returns something
    other than a Response) 505.

    Args:
        raw: Bytes read from the client.
        configuration: Routes, router and settings to answer with.

    Returns:
        The bytes to write back to the client.
    """
    try:
        request = parse_request(raw)
    except MalformedRequest as e:
        logger.warning(f"Malformed request: {e}")
        return bad_request().serialize()

    try:
        response = route_request(request, configuration)
        if not isinstance(response, Response):
            raise TypeError(f"Handler returned {type(response).__name__}, not Response")
        return response.serialize()
    except Exception as e:
        logger.exception(f"Handler error for {request.route_key}: {e}")
        return server_error("Internal Server Error", ContentType.TEXT_HTML).serialize()


class Servo:
    """
    A thread-per-connection HTTP server around a Configuration.

    Usage:
        app = Servo()

        @app.route("GET /hello/{}")
        def hello(request, config):
            return ok(f"Hello, {request.url_args}!")

        app.run()  # Blocks until Ctrl+C
    """

    def __init__(self, configuration: Optional[Configuration] = None):
        """
        Args:
            configuration: Defaults to Configuration(), which serves the
                           built-in home and static routes.

        Raises:
            ValueError: If the server settings are invalid.
        """
        configuration = configuration or Configuration()
        configuration.server.validate()

        self._configuration = configuration
        self._config_lock = threading.Lock()
        self._socket_server: Optional[SocketServer] = None

    @property
    def configuration(self) -> Configuration:
        with self._config_lock:
            return self._configuration

    def reconfigure(self, configuration: Configuration) -> None:
        """
        Replace the whole Configuration.

        Connections accepted afterwards use the new one. Host and port
        changes take effect on the next run().

        Raises:
            ValueError: If the new server settings are invalid.
        """
        configuration.server.validate()
        with self._config_lock:
            self._configuration = configuration
        logger.info("Configuration replaced")

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(self, key: str, handler: Handler) -> "Servo":
        """Register a handler on the current route table."""
        self.configuration.add_route(key, handler)
        return self

    def route(self, key: str) -> Callable[[Handler], Handler]:
        """Decorator form of add_route()."""
        return self.configuration.routes.route(key)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._socket_server is not None and self._socket_server.is_running

    @property
    def socket_server(self) -> Optional[SocketServer]:
        """The accept loop of the current run(), if any."""
        return self._socket_server

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start serving (blocking).

        Args:
            host: Override the configured host.
            port: Override the configured port.
        """
        server_config = self.configuration.server
        if host:
            server_config = server_config.with_host(host)
        if port is not None:
            server_config = server_config.with_port(port)
        if server_config is not self.configuration.server:
            self.reconfigure(self.configuration.with_server(server_config))

        self._setup_logging(server_config.log_level)
        logger.info(f"Starting servo on {server_config.address}")
        logger.debug(f"Routes: {self.configuration.routes.keys()}")

        self._socket_server = SocketServer(server_config)
        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. In-flight requests finish on their own."""
        if self._socket_server is not None:
            self._socket_server.shutdown()

    def _setup_logging(self, log_level: str):
        level = getattr(logging, log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("servo").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Answer one request (runs on the connection's worker thread).

        Args:
            conn: The accepted client connection.
        """
        configuration = self.configuration

        with conn:
            raw = conn.read_request()
            if not raw:
                logger.debug(f"[{conn.id}] Client sent nothing, closing")
                return

            conn.send_response(process_request(raw, configuration))
