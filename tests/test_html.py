"""Tests for the plain-text and Markdown HTML transforms."""

from docwiki.converter.html import escape_html, markdown_to_html, pdf_page_html, text_to_html


class TestEscapeHtml:
    def test_escapes_all_special_characters(self):
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;"
        )

    def test_ampersand_escaped_first(self):
        assert escape_html("&lt;") == "&amp;lt;"


class TestTextToHtml:
    def test_wraps_in_pre(self):
        assert text_to_html("hello\nworld") == '<pre class="txt">hello\nworld</pre>'

    def test_markup_is_inert(self):
        assert text_to_html("<script>x</script>") == (
            '<pre class="txt">&lt;script&gt;x&lt;/script&gt;</pre>'
        )


class TestMarkdownToHtml:
    def test_heading_bold_italic(self):
        html = markdown_to_html("# Hi\n\n**bold** and *italic*")
        assert html == (
            '<div class="md"><h1>Hi</h1>\n'
            "<p><strong>bold</strong> and <em>italic</em></p></div>"
        )

    def test_all_heading_levels(self):
        src = "\n\n".join(f"{'#' * n} Level {n}" for n in range(1, 7))
        html = markdown_to_html(src)
        for n in range(1, 7):
            assert f"<h{n}>Level {n}</h{n}>" in html

    def test_heading_without_space(self):
        assert markdown_to_html("##Tight") == '<div class="md"><h2>Tight</h2></div>'

    def test_https_link_becomes_anchor(self):
        html = markdown_to_html("[x](https://example.com)")
        assert '<a href="https://example.com" target="_blank" rel="noopener">x</a>' in html

    def test_javascript_link_stays_literal(self):
        html = markdown_to_html("[x](javascript:alert(1))")
        assert "<a" not in html
        assert html == '<div class="md"><p>[x](javascript:alert(1))</p></div>'

    def test_list_items_grouped(self):
        html = markdown_to_html("- one\n- two")
        assert html == '<div class="md"><ul><li>one</li>\n<li>two</li></ul></div>'

    def test_paragraph_line_breaks(self):
        assert markdown_to_html("a\nb") == '<div class="md"><p>a<br>b</p></div>'

    def test_blank_runs_dropped(self):
        assert markdown_to_html("a\n\n\n\nb") == '<div class="md"><p>a</p>\n<p>b</p></div>'

    def test_source_html_is_escaped(self):
        html = markdown_to_html("<img src=x onerror=alert(1)>")
        assert "<img" not in html
        assert "&lt;img" in html

    def test_overlapping_emphasis_output(self):
        assert markdown_to_html("***x***") == (
            '<div class="md"><p><strong><em>x</strong></em></p></div>'
        )

    def test_empty_input(self):
        assert markdown_to_html("") == '<div class="md"></div>'
        assert markdown_to_html(None) == '<div class="md"></div>'


class TestMarkdownLineEndings:
    """CR, LS and PS end lines the way they do in browser regexes."""

    def test_crlf_heading_excludes_carriage_return(self):
        html = markdown_to_html("# Title\r\n\r\nBody")
        assert html == '<div class="md"><h1>Title</h1>\r\n\r\nBody</div>'

    def test_crlf_list_items(self):
        html = markdown_to_html("# Hi\r\n- a\r\n- b")
        assert html == (
            '<div class="md"><h1>Hi</h1>\r<ul><li>a</li></ul>\r<ul><li>b</li></ul></div>'
        )

    def test_crlf_paragraph(self):
        assert markdown_to_html("a\r\nb") == '<div class="md"><p>a\r<br>b</p></div>'

    def test_bold_does_not_cross_carriage_return(self):
        assert markdown_to_html("**a\r\nb**") == '<div class="md"><p>**a\r<br>b**</p></div>'

    def test_line_separator_ends_heading(self):
        html = markdown_to_html("# One\u2028tail")
        assert html == '<div class="md"><h1>One</h1>\u2028tail</div>'


def test_pdf_page_html():
    html = pdf_page_html(3, "data:image/png;base64,AAAA")
    assert html == (
        '<div class="pdf-page"><div class="pdf-page-label">Page 3</div>'
        '<img class="pdf-page-img" src="data:image/png;base64,AAAA" alt="Page 3" /></div>'
    )
