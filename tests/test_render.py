from __future__ import annotations

import pytest

from backlog_preview.constants import CODE_PLACEHOLDER
from backlog_preview.renderer import render, render_document

LINK = (
    '<a href="{href}" target="_blank" rel="noopener noreferrer" '
    'class="loom-link-another">{text}</a>'
)
INLINE_CODE = '<code class="prettyprint prettyprinted" style><span class="typ">{}</span></code>'
CODE_BLOCK = '<pre class="loom_code loom_code_cs">{}</pre>'


def test_render_table_with_header_row_and_header_cells():
    assert render("|\n||aaa|bbb|h\n|ccc||~ddd|") == (
        "|<br><table><tbody>"
        "<tr><th></th><th>aaa</th><th>bbb</th></tr>"
        "<tr><td>ccc</td><td></td><th>ddd</th></tr>"
        "</tbody></table>"
    )


def test_render_table_closes_before_text():
    assert render("|a|b|\ntext") == (
        "<table><tbody><tr><td>a</td><td>b</td></tr></tbody></table>text<br>"
    )


def test_render_ordered_list():
    assert render("+ aaa") == "<ol><li> aaa</li></ol>"


def test_render_unordered_list_siblings():
    assert render("- a\n- b") == "<ul><li> a</li><li> b</li></ul>"


def test_render_nested_list_levels():
    assert render("- a\n-- b\n--- c\n-- d\n- e") == (
        "<ul><li> a<ul><li> b<ul><li> c</li></ul><li> d</li></ul><li> e</li></ul>"
    )


def test_render_switching_list_kinds_closes_previous_list():
    assert render("- a\n+ b") == "<ul><li> a</li></ul><ol><li> b</li></ol>"


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("* one", "<h1>one</h1>"),
        ("*** heading text", "<h3>heading text</h3>"),
        ("****** six", "<h6>six</h6>"),
        ("******* seven", "******* seven<br>"),
        ("*nospace", "*nospace<br>"),
    ],
)
def test_render_headers(source: str, expected: str):
    assert render(source) == expected


def test_render_single_line_quotes():
    assert render("> hi\n> there\nafter") == (
        "<blockquote> hi<br> there<br></blockquote>after<br>"
    )


def test_render_block_quote():
    assert render("\n{quote}\naaa\n{/quote}\n") == "<br><br><blockquote>aaa<br></blockquote><br>"


def test_render_block_quote_at_start():
    assert render("{quote}\naaa\n{/quote}") == "<br><blockquote>aaa<br></blockquote><br>"


def test_render_italic():
    assert render("a'''b'''c") == "a<i>b</i>c<br>"


def test_render_bold():
    assert render("a''b''c") == "a<b>b</b>c<br>"


def test_render_strike():
    assert render("%%gone%%") == "<strike>gone</strike><br>"


def test_render_color():
    assert render("&color(red) { hi }") == '<span style="color: red;">hi</span><br>'


def test_render_color_with_background():
    assert render("&color(red, white) {hi}") == (
        '<span style="color: red;background-color: white;">hi</span><br>'
    )


def test_render_named_links_are_equivalent():
    with_gt = render("[[Google>https://google.com]]")
    with_colon = render("[[Google:https://google.com]]")

    assert with_gt == with_colon
    assert with_gt == LINK.format(href="https://google.com", text="Google") + "<br>"


def test_render_bare_url():
    assert render("https://google.com") == (
        LINK.format(href="https://google.com", text="https://google.com") + "<br>"
    )


def test_render_literal_break():
    assert render("a&br;b") == "a<br>b<br>"


def test_render_inline_code():
    assert render("aaa{code}bbb{/code}ccc") == f"aaa{INLINE_CODE.format('bbb')}ccc<br>"


def test_inline_code_is_rendered_before_classification():
    assert render("{code}- x{/code}") == f"{INLINE_CODE.format('- x')}<br>"


def test_render_code_block():
    assert render("aaa\n{code}\nhoge\nfuga\n{/code}\n") == (
        "aaa" + CODE_BLOCK.format("hoge\nfuga") + "<br>"
    )


def test_code_block_content_is_escaped_but_not_formatted():
    assert render("{code}\n<b>''x''</b>\n{/code}") == (
        CODE_BLOCK.format("&lt;b&gt;&#x27;&#x27;x&#x27;&#x27;&lt;/b&gt;") + "<br>"
    )


def test_multiple_code_blocks_keep_source_order():
    result = render("{code}\nfirst\n{/code}\n\n{code}\nsecond\n{/code}")

    assert result == CODE_BLOCK.format("first") + CODE_BLOCK.format("second") + "<br>"


def test_unterminated_code_block_is_plain_text():
    assert render("{code}\nabc") == "{code}<br>abc<br>"


def test_placeholder_in_source_does_not_leak():
    result = render(f"a{CODE_PLACEHOLDER}b")

    assert CODE_PLACEHOLDER not in result
    assert result == "ab<br>"


def test_render_escapes_html():
    assert render("<b>&\"`") == "&lt;b&gt;&amp;&quot;&#x60;<br>"


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("", ""),
        ("\n", "<br>"),
        ("\n\n", "<br><br>"),
        ("a\r\nb", "a<br>b<br>"),
        ("a\rb", "a<br>b<br>"),
    ],
)
def test_render_line_breaks(source: str, expected: str):
    assert render(source) == expected


def test_render_crlf_list():
    assert render("- a\r\n- b\r\n") == "<ul><li> a</li><li> b</li></ul>"


def test_render_unclosed_containers_are_closed_at_end():
    assert render("> quote") == "<blockquote> quote<br></blockquote>"
    assert render("+ deep") == "<ol><li> deep</li></ol>"


def test_list_entered_at_deep_level_opens_one_container_and_closes_all_levels():
    assert render("+++ deep") == "<ol><li> deep" + "</li></ol>" * 3


def test_render_document_wraps_fragment():
    page = render_document("''x''", title="<Notes>", container_class="loom")

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>&lt;Notes&gt;</title>" in page
    assert '<div class="loom"><b>x</b><br></div>' in page
