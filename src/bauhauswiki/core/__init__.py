"""
Socket-level components: the listening socket and per-client connections.
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # Listening socket + accept loop
    "Connection",       # One client socket, one request
    "ConnectionState",  # Connection lifecycle states
]
