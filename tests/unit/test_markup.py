"""
Unit tests for the markup renderer.
"""

import pytest

from bauhauswiki.wiki.markup import escape_html, link_key, render_markup, resolve_links


class TestRenderMarkup:
    """Tests for render_markup."""

    def test_block_types_in_order(self):
        html = render_markup("# Title\n\nplain line\n- item\n[[Bauhaus]]")

        assert html == (
            "<h2>Title</h2>\n"
            "<p>plain line</p>\n"
            "<ul><li>item</li></ul>\n"
            '<p><a href="/wiki/bauhaus" class="wiki-link">Bauhaus</a></p>\n'
        )

    def test_consecutive_lines_join_one_paragraph(self):
        assert render_markup("one\ntwo\nthree") == "<p>one two three</p>\n"

    def test_blank_line_separates_paragraphs(self):
        assert render_markup("one\n\ntwo") == "<p>one</p>\n<p>two</p>\n"

    def test_each_list_line_is_its_own_list(self):
        assert render_markup("- a\n- b") == "<ul><li>a</li></ul>\n<ul><li>b</li></ul>\n"

    def test_lines_are_trimmed(self):
        assert render_markup("   # Title  \r\n  text \r\n") == "<h2>Title</h2>\n<p>text</p>\n"

    def test_marker_needs_a_space(self):
        assert render_markup("#Title\n-item") == "<p>#Title -item</p>\n"

    @pytest.mark.parametrize("content", ["", "\n", "  \n\n  "])
    def test_empty_content(self, content):
        assert render_markup(content) == ""

    def test_escapes_special_characters(self):
        html = render_markup("A&B<C>\"D'E")

        assert html == "<p>A&amp;B&lt;C&gt;&quot;D&#39;E</p>\n"

    def test_no_raw_tags_from_content(self):
        html = render_markup("# <script>alert(1)</script>\n- <b>bold</b>")

        assert "<script>" not in html
        assert "<b>" not in html
        assert "&lt;script&gt;" in html

    def test_links_in_headings_and_items(self):
        html = render_markup("# About [[De Stijl]]\n- see [[Design]]")

        assert '<h2>About <a href="/wiki/de_stijl" class="wiki-link">De Stijl</a></h2>' in html
        assert '<li>see <a href="/wiki/design" class="wiki-link">Design</a></li>' in html


class TestResolveLinks:
    """Tests for [[...]] cross-references."""

    def test_single_link(self):
        assert resolve_links("[[Form Follows Function]]") == (
            '<a href="/wiki/form_follows_function" class="wiki-link">Form Follows Function</a>'
        )

    def test_text_around_links(self):
        assert resolve_links("See [[A]] and [[B]].") == (
            'See <a href="/wiki/a" class="wiki-link">A</a> and '
            '<a href="/wiki/b" class="wiki-link">B</a>.'
        )

    def test_unterminated_link_drops_rest(self):
        assert resolve_links("before [[never closed") == "before "

    def test_link_text_is_escaped(self):
        assert resolve_links("[[<A&B>]]") == (
            '<a href="/wiki/&lt;a&amp;b&gt;" class="wiki-link">&lt;A&amp;B&gt;</a>'
        )

    def test_empty_link(self):
        assert resolve_links("[[]]") == '<a href="/wiki/" class="wiki-link"></a>'


class TestHelpers:
    def test_escape_html(self):
        assert escape_html("&<>\"'") == "&amp;&lt;&gt;&quot;&#39;"

    def test_escape_is_not_idempotent(self):
        assert escape_html("&amp;") == "&amp;amp;"

    def test_link_key(self):
        assert link_key("Form Follows Function") == "form_follows_function"
        assert link_key("bauhaus") == "bauhaus"
