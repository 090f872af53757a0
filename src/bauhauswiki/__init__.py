"""
=============================================================================
BAUHAUSWIKI - A Minimal In-Memory Wiki on Raw Sockets
=============================================================================

A small wiki: articles with full revision history, a tiny line-oriented
markup, search, and an HTTP front end written directly on top of the
socket module.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     BAUHAUSWIKI ARCHITECTURE                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Connection Server    accept loop, one thread per connection       │
    │          │                                                           │
    │          ▼                                                           │
    │   Request Router       request line + headers + body → handler      │
    │          │             (form / query values via the text decoder)   │
    │          ▼                                                           │
    │   Wiki Handlers ◄────► Article Store    (one lock, append-only)     │
    │          │                                                           │
    │          ▼                                                           │
    │   Markup Renderer      article text → HTML                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Everything lives in memory: restarting the process starts over from the
seed articles.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    bauhauswiki/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m bauhauswiki)
    ├── server.py            # WikiServer: wires everything together
    ├── config.py            # ServerConfig dataclass
    ├── core/                # Sockets
    │   ├── socket_server.py # Listening socket + accept loop
    │   └── connection.py    # One client connection
    ├── http/                # Protocol
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response building
    │   ├── router.py        # URL routing
    │   ├── forms.py         # Query / form decoding
    │   └── status_codes.py  # Status enum
    ├── middleware/          # Around the router
    │   ├── base.py          # Middleware + pipeline
    │   └── logging.py       # Access log
    └── wiki/                # The wiki itself
        ├── models.py        # Article, title derivation
        ├── store.py         # WikiStore
        ├── markup.py        # Markup renderer
        ├── pages.py         # HTML page templates
        ├── stylesheet.py    # /styles.css
        └── handlers.py      # Route handlers

=============================================================================
QUICK START
=============================================================================

    from bauhauswiki import WikiServer, ServerConfig

    server = WikiServer(ServerConfig(port=8000))
    server.run()

    # then open http://localhost:8000/

=============================================================================
"""

__version__ = "1.0.0"

from .server import WikiServer
from .config import ServerConfig

__all__ = ["WikiServer", "ServerConfig", "__version__"]
