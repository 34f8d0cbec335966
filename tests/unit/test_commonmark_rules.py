"""Tests for the built-in CommonMark rules."""

import pytest

from html2md import convert
from html2md.rules.commonmark import ReferenceLinks, clean_attribute
from html2md.options import StyleOptions


@pytest.mark.unit
class TestHeadings:
    def test_setext_h1(self):
        assert convert("<h1>Title</h1>") == "Title\n====="

    def test_setext_h2(self):
        assert convert("<h2>Sub</h2>") == "Sub\n---"

    def test_setext_falls_back_to_atx_for_h3(self):
        assert convert("<h3>Deep</h3>") == "### Deep"

    def test_atx(self):
        assert convert("<h1>Title</h1>", style_options={"headingStyle": "atx"}) == "# Title"
        assert convert("<h6>Six</h6>", style_options={"heading_style": "atx"}) == "###### Six"

    def test_underline_matches_rendered_content(self):
        assert convert("<h1>A <em>b</em></h1>") == "A _b_\n====="


@pytest.mark.unit
class TestParagraphsAndBreaks:
    def test_paragraphs_separated_by_blank_line(self):
        assert convert("<p>one</p><p>two</p>") == "one\n\ntwo"

    def test_line_break(self):
        assert convert("<p>a<br>b</p>") == "a  \nb"

    def test_horizontal_rule(self):
        assert convert("<p>a</p><hr><p>b</p>") == "a\n\n* * *\n\nb"

    def test_horizontal_rule_style(self):
        assert convert("<hr>", style_options={"hr": "- - -"}) == "- - -"

    def test_blockquote(self):
        assert convert("<blockquote><p>quoted</p></blockquote>") == "> quoted"

    def test_blockquote_with_several_paragraphs(self):
        assert convert("<blockquote><p>one</p><p>two</p></blockquote>") == "> one\n> \n> two"


@pytest.mark.unit
class TestLists:
    def test_unordered(self):
        assert convert("<ul><li>one</li><li>two</li></ul>") == "*   one\n*   two"

    def test_bullet_marker(self):
        html = "<ul><li>one</li><li>two</li></ul>"
        assert convert(html, style_options={"bulletListMarker": "-"}) == "-   one\n-   two"

    def test_ordered(self):
        assert convert("<ol><li>a</li><li>b</li></ol>") == "1.  a\n2.  b"

    def test_ordered_start(self):
        assert convert('<ol start="3"><li>a</li><li>b</li></ol>') == "3.  a\n4.  b"

    def test_invalid_start_counts_from_one(self):
        assert convert('<ol start="x"><li>a</li></ol>') == "1.  a"

    def test_nested(self):
        assert convert("<ul><li>a<ul><li>b</li></ul></li></ul>") == "*   a\n    *   b"

    def test_loose_items(self):
        assert convert("<ul><li><p>a</p></li><li><p>b</p></li></ul>") == "*   a\n\n*   b"

    def test_continuation_lines_are_indented(self):
        assert convert("<ul><li>a<br>b</li></ul>") == "*   a  \n    b"

    def test_blank_lines_inside_item_are_not_indented(self):
        assert convert("<ul><li><p>a</p><p>b</p></li></ul>") == "*   a\n\n    b"

    def test_line_break_before_nested_list(self):
        assert convert("<ul><li>a<br><ul><li>b</li></ul></li></ul>") == "*   a\n\n    *   b"

    def test_long_ordered_list(self):
        html = "<ol>" + "".join(f"<li>item {i}</li>" for i in range(3000)) + "</ol>"
        lines = convert(html).split("\n")
        assert len(lines) == 3000
        assert lines[0] == "1.  item 0"
        assert lines[-1] == "3000.  item 2999"

    def test_source_indentation_is_ignored(self):
        html = """
        <ul>
            <li>one</li>
            <li>two</li>
        </ul>
        """
        assert convert(html) == "*   one\n*   two"


@pytest.mark.unit
class TestCode:
    def test_indented_block(self):
        assert convert("<pre><code>x = 1\ny = 2\n</code></pre>") == "    x = 1\n    y = 2"

    def test_fenced_block_with_language(self):
        html = '<pre><code class="language-python">print(1)</code></pre>'
        assert convert(html, style_options={"codeBlockStyle": "fenced"}) == "```python\nprint(1)\n```"

    def test_tilde_fence(self):
        html = "<pre><code>x</code></pre>"
        assert convert(html, style_options={"codeBlockStyle": "fenced", "fence": "~~~"}) == "~~~\nx\n~~~"

    def test_fence_longer_than_inner_fence(self):
        html = "<pre><code>```\ninner\n```</code></pre>"
        result = convert(html, style_options={"codeBlockStyle": "fenced"})
        assert result == "````\n```\ninner\n```\n````"

    def test_code_block_whitespace_is_preserved(self):
        html = "<pre><code>def f():\n    return  1</code></pre>"
        assert convert(html) == "    def f():\n        return  1"

    def test_inline_code_is_not_escaped(self):
        assert convert("<p>use <code>a*b*c</code></p>") == "use `a*b*c`"

    def test_inline_code_with_backtick(self):
        assert convert("<code>a`b</code>") == "``a`b``"

    def test_inline_code_starting_with_backtick_is_padded(self):
        assert convert("<code>`x`</code>") == "`` `x` ``"


@pytest.mark.unit
class TestLinksAndImages:
    def test_inline_link(self):
        assert convert('<a href="https://x.com" title="T">x</a>') == '[x](https://x.com "T")'

    def test_parentheses_in_href_are_escaped(self):
        assert convert('<a href="/a(1)">x</a>') == "[x](/a\\(1\\))"

    def test_anchor_without_href_renders_content(self):
        assert convert('<a name="top">Top</a>') == "Top"

    def test_reference_links_full(self):
        html = '<p><a href="/a">A</a> and <a href="/b">B</a> and <a href="/a">again</a></p>'
        result = convert(html, style_options={"linkStyle": "referenced"})
        assert result == "[A][1] and [B][2] and [again][1]\n\n[1]: /a\n[2]: /b"

    def test_reference_links_collapsed(self):
        result = convert('<a href="/a">A</a>', style_options={"linkStyle": "referenced", "linkReferenceStyle": "collapsed"})
        assert result == "[A][]\n\n[A]: /a"

    def test_reference_links_shortcut(self):
        result = convert('<a href="/a">A</a>', style_options={"linkStyle": "referenced", "linkReferenceStyle": "shortcut"})
        assert result == "[A]\n\n[A]: /a"

    def test_reference_link_title(self):
        result = convert('<a href="/a" title="T">A</a>', style_options={"linkStyle": "referenced"})
        assert result == '[A][1]\n\n[1]: /a "T"'

    def test_image(self):
        assert convert('<img src="a.png" alt="Alt" title="T">') == '![Alt](a.png "T")'

    def test_image_without_src(self):
        assert convert('<p>x<img alt="nothing"></p>') == "x"

    def test_image_alt_brackets_are_escaped(self):
        assert convert('<img src="a.png" alt="[x]">') == "![\\[x\\]](a.png)"

    def test_image_src_with_spaces_is_wrapped(self):
        assert convert('<img src="a b(1).png" alt="x]y">') == "![x\\]y](<a b(1).png>)"

    def test_image_src_parentheses_are_escaped(self):
        assert convert('<img src="a(1).png">') == "![](a\\(1\\).png)"

    def test_quotes_in_titles_are_escaped(self):
        assert convert('<img src="a.png" title=\'say "hi"\'>') == '![](a.png "say \\"hi\\"")'
        assert convert('<a href="/a" title=\'say "hi"\'>A</a>') == '[A](/a "say \\"hi\\"")'
        result = convert('<a href="/a" title=\'say "hi"\'>A</a>', style_options={"linkStyle": "referenced"})
        assert result == '[A][1]\n\n[1]: /a "say \\"hi\\""'

    def test_collapsed_label_bound_to_another_href_gets_a_number(self):
        html = '<p><a href="/u">l</a> and <a href="/v">l</a> and <a href="/u">L</a></p>'
        style = {"linkStyle": "referenced", "linkReferenceStyle": "collapsed"}
        assert convert(html, style_options=style) == "[l][] and [l][1] and [L][]\n\n[l]: /u\n[1]: /v"

    def test_shortcut_numeric_fallback_skips_taken_labels(self):
        html = '<p><a href="/u">1</a> and <a href="/v">1</a></p>'
        style = {"linkStyle": "referenced", "linkReferenceStyle": "shortcut"}
        assert convert(html, style_options=style) == "[1] and [1][2]\n\n[1]: /u\n[2]: /v"


@pytest.mark.unit
class TestEmphasis:
    def test_default_delimiters(self):
        assert convert("<p><em>a</em> <strong>b</strong></p>") == "_a_ **b**"

    def test_custom_delimiters(self):
        style = {"emDelimiter": "*", "strongDelimiter": "__"}
        assert convert("<p><i>a</i> <b>b</b></p>", style_options=style) == "*a* __b__"

    def test_whitespace_moves_outside_delimiters(self):
        assert convert("<p>a<em> b </em>c</p>") == "a _b_ c"

    def test_empty_emphasis_renders_nothing(self):
        assert convert("<p>a<em> </em>b</p>") == "a b"


@pytest.mark.unit
class TestHelpers:
    def test_clean_attribute(self):
        assert clean_attribute("a\n\n   b") == "a\nb"
        assert clean_attribute(None) == ""

    def test_reference_links_start_empty(self):
        assert ReferenceLinks(StyleOptions(link_style="referenced")).append() == ""
