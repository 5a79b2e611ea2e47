"""
pytest configuration and fixtures.
"""

import socket
import threading
import time
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from servo import Configuration, Request, Response, ServerConfig, Servo, ok


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request with a query string."""
    return (
        b"GET /api/users/?page=1&limit=10 HTTP/1.1\r\n"
        b"Host: localhost:8000\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a body."""
    body = b'{"name": "John"}'
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:8000\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
        + body
    )


@pytest.fixture
def site_dirs(tmp_path: Path) -> Path:
    """A static/ and templates/ tree under tmp_path."""
    static = tmp_path / "static"
    (static / "css").mkdir(parents=True)
    (static / "css" / "main.css").write_text("body { color: red; }")
    (static / "img").mkdir()
    (static / "img" / "logo.PNG").write_bytes(b"\x89PNG\r\n\x1a\n")

    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.html").write_text("<h1>Home</h1>")

    (tmp_path / "secret.txt").write_text("do not serve")
    return tmp_path


@pytest.fixture
def server_config(site_dirs: Path) -> ServerConfig:
    """Server settings pointing at the temporary site tree."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,
        timeout=5.0,
        static_dir=str(site_dirs / "static"),
        html_dir=str(site_dirs / "templates"),
        log_level="WARNING",
    )


@pytest.fixture
def configuration(server_config: ServerConfig) -> Configuration:
    """Default routes over the temporary site tree."""
    return Configuration(server=server_config)


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class ServerThread:
    """Runs a Servo in a background thread."""

    def __init__(self, server: Servo, port: int):
        self.server = server
        self.port = port
        self._thread: threading.Thread = None

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"port": self.port},
            daemon=True
        )
        self._thread.start()

        # Wait for server to be ready
        for _ in range(50):  # 5 seconds max
            try:
                with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                    s.connect(('127.0.0.1', self.port))
                    return
            except ConnectionRefusedError:
                time.sleep(0.1)

        raise RuntimeError("Server failed to start")

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes and read until the server closes the connection."""
        with socket.create_connection(('127.0.0.1', self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def running_server(configuration: Configuration, free_port: int) -> Generator[ServerThread, None, None]:
    """A live server with the default routes plus two test routes."""
    server = Servo(configuration)

    @server.route("GET /hello/{}")
    def hello(request: Request, config: Configuration) -> Response:
        return ok(f"Hello, {request.url_args}!")

    @server.route("GET /boom")
    def boom(request: Request, config: Configuration) -> Response:
        raise RuntimeError("handler failed")

    srv = ServerThread(server, free_port)
    srv.start()

    yield srv

    srv.stop()
