"""
=============================================================================
PAGE TEMPLATES
=============================================================================

Pure functions from data to a complete HTML document. None of them touch
the store: handlers fetch what they need first, release the lock, and only
then render.

    ┌─────────────────────────┬────────────────────────────────────────────┐
    │ Function                │ Page                                       │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ article_page            │ rendered article + Edit / History buttons  │
    │ missing_article_page    │ "Article Not Found" + Create button        │
    │ edit_page               │ textarea form posting to /save/{key}       │
    │ history_page            │ versions newest first, with previews       │
    │ search_page             │ query + matching articles                  │
    └─────────────────────────┴────────────────────────────────────────────┘

Every piece of dynamic text (keys, titles, queries, content) is escaped
on the way in.

=============================================================================
"""

from datetime import datetime, timezone
from typing import List, Tuple

from .markup import escape_html, render_markup
from .models import Article, ArticleHistory


SITE_NAME = "BauhausWiki"

# Characters of content shown for each version on the history page
PREVIEW_LENGTH = 100


def format_date(timestamp: int) -> str:
    """
    Format a Unix timestamp as a UTC calendar date.

        >>> format_date(0)
        '1970-01-01'
        >>> format_date(1709164800)
        '2024-02-29'
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")


def _layout(title: str, main: str, search_box: bool = False, footer: bool = False) -> str:
    # title and main are already escaped / rendered
    nav = ""
    if search_box:
        nav = """
        <nav>
            <form action="/search" method="get" class="search-form">
                <input type="text" name="q" placeholder="Search..." class="search-input">
                <button type="submit" class="primary-btn">Search</button>
            </form>
        </nav>"""

    foot = ""
    if footer:
        foot = f"""
    <footer>
        <p>{SITE_NAME}</p>
    </footer>"""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{title} - {SITE_NAME}</title>
    <link rel="stylesheet" href="/styles.css">
</head>
<body>
    <header>
        <h1><a href="/">{SITE_NAME}</a></h1>{nav}
    </header>
    <main>
{main}
    </main>{foot}
</body>
</html>"""


def article_page(key: str, article: Article) -> str:
    """Current version of an article, rendered."""
    title = escape_html(article.title)
    k = escape_html(key)
    main = f"""        <article>
            <div class="article-header">
                <h2>{title}</h2>
                <div class="article-actions">
                    <a href="/edit/{k}" class="btn">Edit</a>
                    <a href="/history/{k}" class="btn">History</a>
                </div>
            </div>
            <div class="article-content">
                {render_markup(article.content)}
            </div>
        </article>"""
    return _layout(title, main, search_box=True, footer=True)


def missing_article_page(key: str) -> str:
    """Page shown for a key that was never saved."""
    k = escape_html(key)
    main = f"""        <div class="not-found">
            <h2>Article Not Found: {k}</h2>
            <p>This article does not exist yet.</p>
            <a href="/edit/{k}" class="primary-btn">Create Article</a>
            <a href="/" class="btn">Back to Main Page</a>
        </div>"""
    return _layout("Article Not Found", main)


def edit_page(key: str, content: str) -> str:
    """
    Edit form for ``key``, pre-filled with ``content``.

    ``content`` is the current text, or "" for a new article.
    """
    k = escape_html(key)
    main = f"""        <article>
            <h2>Editing: {k}</h2>
            <form action="/save/{k}" method="post" class="edit-form">
                <textarea name="content" rows="20" class="edit-textarea">{escape_html(content)}</textarea>
                <div class="form-actions">
                    <button type="submit" class="primary-btn">Save Article</button>
                    <a href="/wiki/{k}" class="btn">Cancel</a>
                </div>
            </form>
            <div class="help-box">
                <h3>Formatting Help</h3>
                <ul>
                    <li>[[Link]] - Create internal links</li>
                    <li># Heading - Section heading</li>
                    <li>- Item - List item</li>
                    <li>Paragraphs separated by blank lines</li>
                </ul>
            </div>
        </article>"""
    return _layout(f"Edit {k}", main)


def history_page(key: str, history: ArticleHistory) -> str:
    """
    Revision list, newest first.

    Version numbers count from 1 at the oldest version, so the newest
    entry carries the highest number.
    """
    k = escape_html(key)
    items: List[str] = []
    for number in range(len(history), 0, -1):
        version = history[number - 1]
        items.append(f"""                <div class="history-item">
                    <div class="history-number">Version {number}</div>
                    <div class="history-date">{format_date(version.timestamp)}</div>
                    <div class="history-preview">{escape_html(version.content[:PREVIEW_LENGTH])}</div>
                </div>""")

    versions = "\n".join(items)
    main = f"""        <article>
            <h2>Revision History: {k}</h2>
            <div class="history-list">
{versions}
            </div>
            <a href="/wiki/{k}" class="btn">Back to Article</a>
        </article>"""
    return _layout(f"History: {k}", main)


def search_page(query: str, results: List[Tuple[str, str]]) -> str:
    """Search results for ``query``; ``results`` holds (key, title) pairs."""
    q = escape_html(query)
    if results:
        results_html = "\n".join(
            f'                <div class="search-result">'
            f'<a href="/wiki/{escape_html(key)}">{escape_html(title)}</a></div>'
            for key, title in results
        )
    else:
        results_html = "                <p>No articles found.</p>"

    main = f"""        <article>
            <h2>Search Results: {q}</h2>
            <div class="search-results">
{results_html}
            </div>
        </article>"""
    return _layout(f"Search: {q}", main, search_box=True)
