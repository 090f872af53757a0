"""
=============================================================================
FORM AND QUERY STRING DECODING
=============================================================================

Browsers send user input in two places:

    GET  /search?q=form+follows%20function HTTP/1.1     ← query string
    POST /save/bauhaus HTTP/1.1 ... \r\n\r\ncontent=... ← form body

Both use the application/x-www-form-urlencoded format:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   key=value&key=value&key=value                                     │
    │   ───┬───── ─────────                                               │
    │      │          │                                                   │
    │    pair       pair        pairs are separated by "&"                │
    │                           key and value are separated by "="        │
    └─────────────────────────────────────────────────────────────────────┘

Inside keys and values:

    "+"     → space
    "%XY"   → the byte with hex value XY    ("%20" → " ", "%C3%A9" → "é")
    other   → itself

=============================================================================
DIFFERENCES FROM urllib.parse
=============================================================================

urllib.parse.parse_qs and unquote_plus treat edge cases differently from
the forms this wiki has always accepted:

    Input          unquote_plus      url_decode (this module)
    ─────────      ────────────      ────────────────────────
    "%zz"          "%zz"             ""        (malformed escape dropped)
    "%2"           "%2"              " "       (missing digit counts as 0)
    "a=b=c"        {"a": "b=c"}      ignored   (pair must split in two)

=============================================================================
"""

import string


_HEX_DIGITS = frozenset(string.hexdigits)


def url_decode(value: str) -> str:
    """
    Decode a form-encoded value.

    =====================================================================
    DECODING RULES
    =====================================================================

        "+"          → " "
        "%XY"        → byte 0xXY
        "%X" at end  → byte 0xX0   (missing digits default to "0")
        "%" at end   → byte 0x00
        "%zz"        → nothing     (both characters consumed, then dropped)

    Decoded bytes are collected first and turned back into text as UTF-8,
    so multi-byte escapes like "%C3%A9" come out as a single "é".
    Invalid UTF-8 sequences become U+FFFD.

    =====================================================================

    Args:
        value: Raw value taken from a query string or form body.

    Returns:
        The decoded text.

    Example:
        >>> url_decode("form+follows%20function")
        'form follows function'
    """
    decoded = bytearray()
    i = 0
    length = len(value)

    while i < length:
        char = value[i]

        if char == "+":
            decoded += b" "
            i += 1

        elif char == "%":
            # Two characters are always consumed, even when they turn out
            # not to be hex digits.
            digits = value[i + 1:i + 3]
            i += 1 + len(digits)
            digits = digits.ljust(2, "0")

            if digits[0] in _HEX_DIGITS and digits[1] in _HEX_DIGITS:
                decoded.append(int(digits, 16))

        else:
            decoded += char.encode("utf-8")
            i += 1

    return decoded.decode("utf-8", errors="replace")


def extract_param(encoded: str, name: str) -> str:
    """
    Find a parameter in an urlencoded string.

    Only pairs that split into exactly two tokens on "=" are considered,
    and the first pair whose key equals ``name`` wins:

        extract_param("q=art&q=design", "q")   → "art"
        extract_param("q=a=b&q=design", "q")   → "design"
        extract_param("x=1", "q")              → ""

    Args:
        encoded: The urlencoded string (query string or form body).
        name: Parameter name (compared exactly, case-sensitive).

    Returns:
        Decoded value, or an empty string when the parameter is absent.
    """
    for pair in encoded.split("&"):
        parts = pair.split("=")
        if len(parts) == 2 and parts[0] == name:
            return url_decode(parts[1])
    return ""


def split_target(target: str) -> tuple[str, str]:
    """Split a request target into (path, query_string) at the first "?"."""
    path, _, query_string = target.partition("?")
    return path, query_string


def extract_body(raw: str) -> str:
    """
    Return everything after the first blank-line separator.

    The separator is the CRLF CRLF sequence that ends the header block.
    A request without one has no body.
    """
    header_end = raw.find("\r\n\r\n")
    if header_end == -1:
        return ""
    return raw[header_end + 4:]
