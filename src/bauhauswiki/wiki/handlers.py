"""
=============================================================================
WIKI HANDLERS
=============================================================================

The request handlers behind every wiki route.

    ┌────────┬──────────────────┬──────────────────────────────────────────┐
    │ Method │ Pattern          │ Handler                                  │
    ├────────┼──────────────────┼──────────────────────────────────────────┤
    │ GET    │ /                │ index    → view of "main"                │
    │ GET    │ /wiki/*key       │ view     → article or not-found page     │
    │ GET    │ /edit/*key       │ edit     → form, empty for a new key     │
    │ GET    │ /history/*key    │ history  → versions, or 303 to the view  │
    │ GET    │ /search*rest     │ search   → matches for ?q=               │
    │ GET    │ /styles.css      │ stylesheet                               │
    │ POST   │ /save/*key       │ save     → append version, 303 to view   │
    └────────┴──────────────────┴──────────────────────────────────────────┘

=============================================================================
STORE ACCESS
=============================================================================

Every handler follows the same shape:

    1. One store call            (holds the lock, returns immutable data)
    2. Render the page           (lock already released)
    3. Return the response       (server writes it to the socket)

An unknown key is never an error here. View shows the not-found page,
history redirects to the view, edit shows an empty form.

=============================================================================
"""

import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder, html_page, see_other
from ..http.router import Router
from .pages import (
    article_page,
    edit_page,
    history_page,
    missing_article_page,
    search_page,
)
from .store import WikiStore
from .stylesheet import STYLESHEET


logger = logging.getLogger(__name__)

MAIN_PAGE_KEY = "main"


class WikiHandlers:
    """
    Route handlers bound to one shared WikiStore.

    Usage:
        store = WikiStore.with_seed_data()
        router = Router()
        WikiHandlers(store).register(router)
    """

    def __init__(self, store: WikiStore):
        self.store = store

    def register(self, router: Router) -> Router:
        """Add every wiki route to ``router``. Returns the router."""
        router.get("/", name="index")(self.index)
        router.get("/wiki/*key", name="view")(self.view)
        router.get("/edit/*key", name="edit")(self.edit)
        router.get("/history/*key", name="history")(self.history)
        router.get("/search*rest", name="search")(self.search)
        router.get("/styles.css", name="stylesheet")(self.stylesheet)
        router.post("/save/*key", name="save")(self.save)
        return router

    # =========================================================================
    # READ HANDLERS
    # =========================================================================

    def index(self, request: HTTPRequest) -> HTTPResponse:
        return self._render_article(MAIN_PAGE_KEY)

    def view(self, request: HTTPRequest) -> HTTPResponse:
        return self._render_article(request.path_params["key"])

    def _render_article(self, key: str) -> HTTPResponse:
        article = self.store.get_latest(key)
        if article is None:
            return html_page(missing_article_page(key))
        return html_page(article_page(key, article))

    def edit(self, request: HTTPRequest) -> HTTPResponse:
        key = request.path_params["key"]
        article = self.store.get_latest(key)
        content = article.content if article is not None else ""
        return html_page(edit_page(key, content))

    def history(self, request: HTTPRequest) -> HTTPResponse:
        """Revision list, or a redirect to the view for an unknown key."""
        key = request.path_params["key"]
        versions = self.store.get_history(key)
        if versions is None:
            return see_other(f"/wiki/{key}")
        return html_page(history_page(key, versions))

    def search(self, request: HTTPRequest) -> HTTPResponse:
        """
        Search current titles and content.

        The query comes from ``q``; a missing ``q`` is an empty query and
        lists every article.
        """
        query = request.get_query("q")
        results = self.store.search(query)
        logger.debug(f"Search {query!r}: {len(results)} result(s)")
        return html_page(search_page(query, results))

    def stylesheet(self, request: HTTPRequest) -> HTTPResponse:
        return ResponseBuilder().css(STYLESHEET).build()

    # =========================================================================
    # WRITE HANDLERS
    # =========================================================================

    def save(self, request: HTTPRequest) -> HTTPResponse:
        """
        Append the posted ``content`` field as a new version.

        A missing field saves empty content. The client is always sent
        back to the article view (303 See Other).
        """
        key = request.path_params["key"]
        self.store.save(key, request.get_form("content"))
        return see_other(f"/wiki/{key}")


def create_router(store: WikiStore) -> Router:
    """Build a Router with every wiki route bound to ``store``."""
    return WikiHandlers(store).register(Router())
