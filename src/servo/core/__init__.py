"""Socket layer: the accept loop and per-client connections."""

from .connection import Connection
from .socket_server import SocketServer

__all__ = ["Connection", "SocketServer"]
