"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bauhauswiki import WikiServer, ServerConfig
from bauhauswiki.wiki import WikiStore


# Fixed clock: 2024-02-29 00:00:00 UTC
FIXED_TIMESTAMP = 1709164800


@pytest.fixture
def clock():
    """A clock that always returns FIXED_TIMESTAMP."""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def store(clock) -> WikiStore:
    """Empty store with a fixed clock."""
    return WikiStore(clock=clock)


@pytest.fixture
def seeded_store(clock) -> WikiStore:
    """Store holding the "main" and "bauhaus" seed articles."""
    return WikiStore.with_seed_data(clock=clock)


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample search request."""
    return (
        b"GET /search?q=form+follows%20function HTTP/1.1\r\n"
        b"Host: localhost:24439\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample save request with a form body."""
    body = b"content=%23+De+Stijl%0A%0ADutch+movement%2C+1917."
    return (
        b"POST /save/de_stijl HTTP/1.1\r\n"
        b"Host: localhost:24439\r\n"
        b"Content-Type: application/x-www-form-urlencoded\r\n"
        b"Content-Length: %d\r\n"
        b"\r\n"
        b"%s"
    ) % (len(body), body)


@pytest.fixture
def config() -> ServerConfig:
    """Test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        read_timeout=5.0,
        log_level="WARNING",
    )


class RunningServer:
    """Test server helper that runs in a background thread."""

    def __init__(self, server: WikiServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw request bytes and read the whole response."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def running_server(config: ServerConfig, seeded_store: WikiStore) -> Generator[RunningServer, None, None]:
    """A seeded wiki listening on an ephemeral port."""
    running = RunningServer(WikiServer(config, store=seeded_store))
    running.start()

    yield running

    running.stop()
