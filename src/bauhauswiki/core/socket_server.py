"""
=============================================================================
TCP SOCKET SERVER
=============================================================================

The listening side of the wiki: bind, listen, accept, hand off.

=============================================================================
SOCKET LIFECYCLE
=============================================================================

    1. socket()    Create the listening socket
    2. bind()      Reserve host:port (port 0 = let the OS pick)
    3. listen()    Start queueing incoming connections (backlog)
    4. accept()    One at a time, in a loop; each returns a NEW socket
    5. close()     Release the listening socket on shutdown

                    ┌───────────────────────┐
                    │   Listening Socket    │ ◄── Created once at startup
                    │   0.0.0.0:24439       │     Never sends/receives data
                    └───────────┬───────────┘
                                │ accept()
        ┌───────────────────────┼───────────────────────┐
        ▼                       ▼                       ▼
    ┌───────────┐         ┌───────────┐         ┌───────────┐
    │ Connection│         │ Connection│         │ Connection│
    │ thread 1  │         │ thread 2  │         │ thread 3  │
    └───────────┘         └───────────┘         └───────────┘

The accept loop is the only long-lived sequential point in the server.
Whatever happens to one connection (reset, timeout, handler crash) stays
in that connection's thread.

=============================================================================
SOCKET OPTIONS
=============================================================================

    SO_REUSEADDR   restart immediately, without waiting out TIME_WAIT
    TCP_NODELAY    send the response as soon as it is written
    settimeout(1)  accept() wakes up every second to check for shutdown

=============================================================================
SIGNALS
=============================================================================

SIGINT (Ctrl+C) and SIGTERM (kill, docker stop) trigger a graceful
shutdown. Python only allows signal handlers on the main thread, so a
server started from any other thread (tests, embedding) skips them and is
stopped with shutdown() instead.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)

# Seconds accept() waits before re-checking the running flag
ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

    Owns the listening socket and the accept loop; every accepted socket is
    wrapped in a Connection and passed to a callback.

    ┌─────────────────────────────────────────────────────────────────────┐
    │    start(handler)                                                    │
    │        ├──► _create_socket()   socket + options                      │
    │        ├──► bind() / listen()  record the real bound address         │
    │        ├──► _setup_signals()   main thread only                      │
    │        ├──► ready.set()        wait_until_ready() returns            │
    │        └──► _accept_loop()     blocks until shutdown()               │
    │                                                                      │
    │    shutdown()        _running = False; loop exits within ~1s         │
    │    _cleanup()        restore signals, close the listening socket     │
    └─────────────────────────────────────────────────────────────────────┘

    Usage:
        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False
        self._bound_address: Optional[Tuple[str, int]] = None

        # Set once listening, so other threads know the real port
        self._ready_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        """Check if server is running."""
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The (host, port) the server listens on.

        After start() this is the address actually bound, so a configured
        port of 0 reports the port the OS picked.
        """
        if self._bound_address is not None:
            return self._bound_address
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        sock.settimeout(ACCEPT_POLL_INTERVAL)
        return sock

    def _setup_signals(self):
        """Install SIGTERM/SIGINT handlers that call shutdown()."""
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, skipping signal handlers")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        """Restore original signal handlers."""
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and accept connections until shutdown() is called.

        Args:
            connection_handler: Called with each new Connection. It must
                                return quickly (the wiki server spawns a
                                thread and returns).

        Raises:
            OSError: If the address cannot be bound.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)
        self._bound_address = self._socket.getsockname()[:2]

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """
        Accept connections one at a time until shutdown.

            while running:
                accept()               (wakes every second to re-check)
                Connection(...)        wrap the client socket
                connection_handler()   hand off, return immediately

        An accept error, or a failure wrapping or handing off one client
        (for example no thread can be started), is logged and the loop
        carries on; only shutdown() ends it.
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Poll the running flag
            except OSError as e:
                if not self._running:
                    break
                logger.error(f"Accept error: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            try:
                conn = Connection(
                    socket=client_socket,
                    address=client_address,
                    buffer_size=self.config.buffer_size,
                    read_timeout=self.config.read_timeout,
                )
                connection_handler(conn)
            except Exception as e:
                logger.exception(
                    f"Failed to hand off connection from {client_address[0]}:{client_address[1]}: {e}"
                )
                client_socket.close()

    def shutdown(self):
        """
        Stop accepting connections.

        Can be called from a signal handler or any other thread, any number
        of times. Connections already accepted run to completion.
        """
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the server is listening.

        Returns:
            True once listening, False on timeout.
        """
        return self._ready_event.wait(timeout)
