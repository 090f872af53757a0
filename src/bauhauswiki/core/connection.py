"""
=============================================================================
CONNECTION HANDLING
=============================================================================

Wraps one accepted client socket for the lifetime of one request.

=============================================================================
ONE READ, ONE REQUEST
=============================================================================

TCP is a byte stream: a request may arrive in several chunks. The wiki
still reads exactly ONCE, up to buffer_size bytes, and parses whatever
arrived:

    Client sends:     POST /save/bauhaus HTTP/1.1\r\n ... content=...
    recv(4096)  →     everything that is already in the kernel buffer
    parse             the rest, if any, is never read

A request larger than buffer_size, or one split across packets, is
truncated (known limitation).

=============================================================================
LIFECYCLE
=============================================================================

    ┌──────────┐  read_request()  ┌──────────┐  send_response()  ┌─────────┐
    │   NEW    │ ───────────────► │ READING  │ ────────────────► │ WRITING │
    └──────────┘                  └──────────┘                   └────┬────┘
                                                                      │
                                  ┌──────────┐     close()            │
                                  │  CLOSED  │ ◄──────────────────────┘
                                  └──────────┘

There is no keep-alive: every response carries "Connection: close" and the
socket is shut down right after it is written.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid


logger = logging.getLogger(__name__)

# Upper bounds on discarding client data after the response is sent
DRAIN_TIMEOUT = 0.5
DRAIN_MAX_BYTES = 64 * 1024


class ConnectionState(Enum):
    """Where a connection is in its single request/response cycle."""
    NEW = "new"              # Just accepted, nothing read yet
    READING = "reading"      # Waiting on the one recv()
    WRITING = "writing"      # Sending the response
    CLOSING = "closing"      # Shutdown sequence in progress
    CLOSED = "closed"        # Socket released


@dataclass
class Connection:
    """
    One accepted client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        buffer_size: Maximum number of bytes read for the request.
        read_timeout: Seconds to wait for the request; None blocks forever.

    Usage:
        with Connection(client_socket, address, buffer_size=4096) as conn:
            data = conn.read_request()
            conn.send_response(response_bytes)
        # closed here
    """

    # Required parameters
    socket: socket.socket
    address: tuple[str, int]

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    buffer_size: int = 4096
    read_timeout: Optional[float] = None

    def __post_init__(self):
        # The listening socket polls with a timeout; accepted sockets block
        self.socket.settimeout(self.read_timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address."""
        return self.address[0]

    @property
    def client_port(self) -> int:
        """Get the client port."""
        return self.address[1]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read the request with a single recv().

        Returns:
            Whatever the client sent, up to buffer_size bytes (b"" if the
            client closed without sending), or None if the read failed.
        """
        self.state = ConnectionState.READING
        try:
            return self.socket.recv(self.buffer_size)
        except socket.timeout:
            logger.warning(f"[{self.id}] Read timed out after {self.read_timeout}s")
            return None
        except OSError as e:
            logger.warning(f"[{self.id}] Read failed: {e}")
            return None

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the complete response.

        Uses sendall(); a failure is final, there is no retry.

        Returns:
            True if send succeeded, False if the connection was lost.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

            1. shutdown(SHUT_WR)   send FIN, the client sees end of response
            2. drain               discard what the client still sends, at
                                   most DRAIN_MAX_BYTES within DRAIN_TIMEOUT
            3. close()             release the file descriptor

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        try:
            deadline = time.monotonic() + DRAIN_TIMEOUT
            drained = 0
            while drained < DRAIN_MAX_BYTES:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                chunk = self.socket.recv(4096)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass  # Includes socket.timeout

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
