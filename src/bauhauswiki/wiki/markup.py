"""
=============================================================================
WIKI MARKUP RENDERER
=============================================================================

Turns stored article text into HTML. The grammar is line-oriented and has
exactly four rules, checked top to bottom for each (trimmed) line:

    ┌──────────────────┬──────────────────────────────────────────────────┐
    │ Line             │ Output                                           │
    ├──────────────────┼──────────────────────────────────────────────────┤
    │ (blank)          │ closes the open paragraph, if any                │
    │ "# Heading"      │ <h2>Heading</h2>                                 │
    │ "- item"         │ <ul><li>item</li></ul>   (one list PER line)     │
    │ anything else    │ joins the open paragraph, or opens a new one     │
    └──────────────────┴──────────────────────────────────────────────────┘

Example:

    # Title                      <h2>Title</h2>
                                 <p>plain line continued</p>
    plain line                   <ul><li>one</li></ul>
    continued                    <ul><li>two</li></ul>
    - one                        <p><a href="/wiki/bauhaus"
    - two                              class="wiki-link">Bauhaus</a></p>
    [[Bauhaus]]

Consecutive "- " lines produce separate one-item lists. Existing pages
are styled around that, so the lists are not merged.

=============================================================================
CROSS-REFERENCES
=============================================================================

    [[Form Follows Function]]
        │
        ├── key:   lower-case, spaces → "_"   form_follows_function
        └── text:  as written, escaped        Form Follows Function

    <a href="/wiki/form_follows_function" class="wiki-link">Form Follows Function</a>

An unterminated "[[" swallows the rest of the line silently.

=============================================================================
ESCAPING
=============================================================================

All article text is escaped before it reaches the output:

    &  →  &amp;      <  →  &lt;      >  →  &gt;
    "  →  &quot;     '  →  &#39;

Only the tags generated by the renderer itself are emitted raw.

=============================================================================
"""

from typing import List


_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters."""
    return text.translate(_HTML_ESCAPES)


def link_key(name: str) -> str:
    """Article key a ``[[name]]`` reference points to."""
    return name.lower().replace(" ", "_")


def resolve_links(text: str) -> str:
    """
    Escape ``text`` and turn every ``[[Name]]`` into a wiki link.

        >>> resolve_links("See [[De Stijl]] & more")
        'See <a href="/wiki/de_stijl" class="wiki-link">De Stijl</a> &amp; more'
    """
    parts: List[str] = []
    pos = 0

    while True:
        start = text.find("[[", pos)
        if start == -1:
            parts.append(escape_html(text[pos:]))
            break

        parts.append(escape_html(text[pos:start]))

        end = text.find("]]", start + 2)
        if end == -1:
            break  # Unterminated: the rest is dropped

        name = text[start + 2:end]
        parts.append(
            f'<a href="/wiki/{escape_html(link_key(name))}" class="wiki-link">'
            f"{escape_html(name)}</a>"
        )
        pos = end + 2

    return "".join(parts)


def render_markup(content: str) -> str:
    """
    Render article markup to an HTML fragment.

    Lines are split on "\\n" and trimmed of surrounding whitespace (which
    also removes a trailing "\\r"). Each emitted block ends with "\\n".

    Args:
        content: Raw article text.

    Returns:
        HTML fragment (no surrounding page).
    """
    html: List[str] = []
    in_paragraph = False

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if not line:
            if in_paragraph:
                html.append("</p>\n")
                in_paragraph = False
            continue

        if line.startswith("# "):
            if in_paragraph:
                html.append("</p>\n")
                in_paragraph = False
            html.append(f"<h2>{resolve_links(line[2:])}</h2>\n")

        elif line.startswith("- "):
            if in_paragraph:
                html.append("</p>\n")
                in_paragraph = False
            html.append(f"<ul><li>{resolve_links(line[2:])}</li></ul>\n")

        else:
            if in_paragraph:
                html.append(" ")
            else:
                html.append("<p>")
                in_paragraph = True
            html.append(resolve_links(line))

    if in_paragraph:
        html.append("</p>\n")

    return "".join(html)
