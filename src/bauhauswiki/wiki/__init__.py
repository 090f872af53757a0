"""
The wiki itself: articles, storage, markup, pages and route handlers.
"""

from .models import Article, ArticleHistory, derive_title
from .store import WikiStore, SEED_ARTICLES
from .markup import render_markup, escape_html
from .handlers import WikiHandlers, create_router

__all__ = [
    "Article",
    "ArticleHistory",
    "derive_title",
    "WikiStore",
    "SEED_ARTICLES",
    "render_markup",
    "escape_html",
    "WikiHandlers",
    "create_router",
]
