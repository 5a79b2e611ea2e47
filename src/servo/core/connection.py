"""
=============================================================================
CONNECTION
=============================================================================

One accepted client socket, used for exactly one request/response exchange.

    accept() ──► Connection ──► read_request() ──► send_response() ──► close()

=============================================================================
ONE READ, ONE WRITE
=============================================================================

The router answers requests identified by their request line, so a single
recv() of buffer_size bytes (4096 by default) is enough:

    ┌──────────────────────────────────────────────┐
    │ GET /static/css/main.css HTTP/1.1\\r\\n         │  ◄── all routing needs
    │ Host: localhost\\r\\n                           │
    │ ...                                          │
    └──────────────────────────────────────────────┘

There is no keep-alive: after the response is written the socket is closed.

=============================================================================
"""

import socket
import time
import logging
from dataclasses import dataclass, field
from typing import Tuple
import uuid


logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """
    A client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log lines.
        buffer_size: Maximum bytes read for the request.
        timeout: Seconds to wait for the client to send.
    """

    socket: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    created_at: float = field(default_factory=time.time)
    buffer_size: int = 4096
    timeout: float = 30.0

    closed: bool = field(default=False, repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    def read_request(self) -> bytes:
        """
        Read the request bytes.

        Returns:
            Up to buffer_size bytes, or b"" if the client sent nothing,
            timed out or disconnected.
        """
        try:
            data = self.socket.recv(self.buffer_size)
        except socket.timeout:
            logger.debug(f"[{self.id}] Read timed out")
            return b""
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.error(f"[{self.id}] Read failed: {e}")
            return b""

        logger.debug(f"[{self.id}] Read {len(data)} bytes from {self.client_ip}")
        return data

    def send_response(self, data: bytes) -> bool:
        """
        Write the serialized response.

        Returns:
            True if every byte was sent, False if the client went away.
        """
        try:
            self.socket.sendall(data)
            return True
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.error(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """Shut down the write side and release the socket."""
        if self.closed:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone

        try:
            self.socket.close()
        except OSError:
            pass

        self.closed = True
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
