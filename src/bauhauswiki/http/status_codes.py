"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes the wiki actually sends, with their reason phrases
(RFC 7231).

    ┌──────┬────────────────────────┬──────────────────────────────────────┐
    │ Code │ Phrase                 │ When the wiki sends it               │
    ├──────┼────────────────────────┼──────────────────────────────────────┤
    │ 200  │ OK                     │ Pages, stylesheet, not-found page    │
    │ 303  │ See Other              │ After a save, history of absent key  │
    │ 400  │ Bad Request            │ Empty or malformed request line      │
    │ 404  │ Not Found              │ Unknown route                        │
    │ 405  │ Method Not Allowed     │ Unsupported method / wrong method    │
    │ 500  │ Internal Server Error  │ A handler raised unexpectedly        │
    └──────┴────────────────────────┴──────────────────────────────────────┘

Note that a missing article is NOT a 404: the wiki answers 200 with a page
inviting the reader to create it.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.SEE_OTHER.phrase
        'See Other'
    """

    # 2xx SUCCESS
    OK = 200                            # Standard success response

    # 3xx REDIRECTION
    SEE_OTHER = 303                     # Redirect to GET another URL (after POST)

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400                   # Malformed request syntax
    NOT_FOUND = 404                     # No route for this path
    METHOD_NOT_ALLOWED = 405            # Method not supported for this path

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500         # Unexpected handler failure

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 303 See Other
                     ─── ─────────
                      │      │
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_redirect(self) -> bool:
        """Check if this is a 3xx (redirection) status code."""
        return 300 <= self < 400

    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.SEE_OTHER: "See Other",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
