"""
=============================================================================
WIKI SERVER
=============================================================================

Ties the components together into a running wiki.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    ┌──────────────┐   accept()    ┌──────────────┐
    │ SocketServer │ ────────────► │  Connection  │
    └──────────────┘               └──────┬───────┘
                                          │ new thread per connection
                                          ▼
                                   read_request()          one recv()
                                          │
                                          ▼
                                   RequestParser.parse     400 / 405 on failure
                                          │
                                          ▼
                                   LoggingMiddleware
                                          │
                                          ▼
                                   Router.handle           404 / 405 on miss
                                          │
                                          ▼
                                   WikiHandlers ◄────────► WikiStore (lock)
                                          │
                                          ▼
                                   send_response()         Connection: close
                                          │
                                          ▼
                                   close()

=============================================================================
FAILURE ISOLATION
=============================================================================

    Malformed request     → 400 / 405 response, connection closed normally
    Handler raises        → logged with traceback, 500 response
    Read / write fails    → logged, only that connection ends
    Accept fails          → logged, the accept loop keeps going

Nothing a single client does can stop the accept loop or corrupt the
store.

=============================================================================
"""

import logging
import threading
from typing import Optional, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection
from .http import (
    HTTPParseError,
    HTTPResponse,
    HTTPStatus,
    RequestParser,
    Router,
    error_response,
    internal_error,
)
from .middleware import LoggingMiddleware, Middleware, MiddlewarePipeline, NextHandler
from .wiki import WikiHandlers, WikiStore


logger = logging.getLogger(__name__)


class WikiServer:
    """
    The BauhausWiki HTTP server.

    =========================================================================
    USAGE
    =========================================================================

        server = WikiServer(ServerConfig(port=8000))
        server.run()                      # blocks until Ctrl+C / SIGTERM

    Tests and embedding:

        server = WikiServer(ServerConfig(host="127.0.0.1", port=0),
                            store=WikiStore())
        threading.Thread(target=server.serve_forever, daemon=True).start()
        server.wait_until_ready(5)
        host, port = server.address
        ...
        server.shutdown()

    Without a socket at all:

        response = server.dispatch(b"GET /wiki/main HTTP/1.1\\r\\n\\r\\n")

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None, store: Optional[WikiStore] = None):
        """
        Args:
            config: Server configuration. Defaults to ServerConfig().
            store: Article store to serve. When omitted a new store is
                   created, with the seed articles if config.seed is set.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        if store is None:
            store = WikiStore.with_seed_data() if self.config.seed else WikiStore()
        self.store = store

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()

        self._router = Router()
        WikiHandlers(self.store).register(self._router)

        self._middleware = MiddlewarePipeline()
        self._middleware.add(LoggingMiddleware(log_format=self.config.log_format))

        # Router wrapped in middleware; rebuilt after use()
        self._handler: Optional[NextHandler] = None

    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """Listening address; the real port once the server is ready."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    def use(self, middleware: Middleware) -> "WikiServer":
        """
        Add middleware inside the access logger.

        Returns:
            Self for method chaining.
        """
        self._middleware.add(middleware)
        self._handler = None
        return self

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def dispatch(self, data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPResponse:
        """
        Turn raw request bytes into a response.

        Never raises: parse errors become 400 / 405 responses and a handler
        crash becomes a 500.
        """
        try:
            request = self._parser.parse(data, client_address)
        except HTTPParseError as e:
            logger.info(f"Rejected request from {client_address[0] or '-'}: {e}")
            return error_response(HTTPStatus(e.status_code))

        if self._handler is None:
            self._handler = self._middleware.wrap(self._router.handle)

        try:
            return self._handler(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.path}: {e}")
            return internal_error()

    def _handle_connection(self, conn: Connection):
        """Start a thread for the connection (called from the accept loop)."""
        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"wiki-conn-{conn.id}",
            daemon=True,
        )
        thread.start()

    def _process_connection(self, conn: Connection):
        """
        Serve exactly one request on ``conn`` (runs in its own thread).

            read once → dispatch → Connection: close → send → close
        """
        with conn:
            try:
                raw_request = conn.read_request()
                if raw_request is None:
                    return  # Read failed, already logged

                response = self.dispatch(raw_request, conn.address)
                response.headers["Connection"] = "close"
                conn.send_response(response.to_bytes(self.config.server_name))

            except Exception as e:
                logger.exception(f"[{conn.id}] Connection error: {e}")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def serve_forever(self):
        """Bind and serve until shutdown() is called (blocking)."""
        self._socket_server.start(self._handle_connection)

    def run(self):
        """
        Configure logging, print the banner and serve (blocking).

        Stops on Ctrl+C or SIGTERM.
        """
        self._setup_logging()
        self._print_startup_banner()

        try:
            self.serve_forever()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is listening; False on timeout."""
        return self._socket_server.wait_until_ready(timeout)

    def shutdown(self):
        """
        Stop accepting connections.

        Requests already in progress finish on their own threads.
        """
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = self.config.log_level_number

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("bauhauswiki").setLevel(level)

    def _print_startup_banner(self):
        url = f"http://{self.config.host}:{self.config.port}"
        articles = f"{len(self.store)} article(s) loaded"

        print()
        print("╔══════════════════════════════════════════════════════════════╗")
        print(f"║  {self.config.server_name + ' running':<60}║")
        print(f"║  {url:<60}║")
        print(f"║  {articles:<60}║")
        print(f"║  {'Press Ctrl+C to stop':<60}║")
        print("╚══════════════════════════════════════════════════════════════╝")
        print()

        self._router.print_routes()


def create_app(config: Optional[ServerConfig] = None, store: Optional[WikiStore] = None) -> WikiServer:
    """
    Create a wiki server.

    Example:
        app = create_app(ServerConfig(port=8000, seed=False))
        app.run()
    """
    return WikiServer(config, store)
