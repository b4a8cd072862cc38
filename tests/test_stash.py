from backlog_preview.constants import CODE_PLACEHOLDER
from backlog_preview.models import CodeStash
from backlog_preview.stash import replace_inline_code, restore_code_blocks, stash_code_blocks


def _pre(content: str) -> str:
    return f'<pre class="loom_code loom_code_cs">{content}</pre>'


def test_stash_replaces_block_with_placeholder():
    stash = CodeStash()

    text = stash_code_blocks("aaa\n{code}\nhoge\nfuga\n{/code}\nbbb", stash)

    assert text == f"aaa{CODE_PLACEHOLDER}bbb"
    assert len(stash) == 1
    assert stash.pop() == _pre("hoge\nfuga")


def test_stash_accepts_crlf_and_cr_delimiters():
    stash = CodeStash()

    text = stash_code_blocks("{code}\r\nx\r{/code}", stash)

    assert text == CODE_PLACEHOLDER
    assert stash.pop() == _pre("x")


def test_stash_requires_markers_on_their_own_lines():
    stash = CodeStash()

    text = stash_code_blocks("a {code}\nx\n{/code}", stash)

    assert text == "a {code}\nx\n{/code}"
    assert len(stash) == 0


def test_stash_leaves_unterminated_block():
    stash = CodeStash()

    assert stash_code_blocks("{code}\nx\n", stash) == "{code}\nx\n"
    assert len(stash) == 0


def test_stash_keeps_source_order():
    stash = CodeStash()

    stash_code_blocks("{code}\none\n{/code}\ntext\n{code}\ntwo\n{/code}", stash)

    assert [stash.pop(), stash.pop()] == [_pre("one"), _pre("two")]


def test_replace_inline_code():
    assert replace_inline_code("a{code}b{/code}c{code}d{/code}") == (
        'a<code class="prettyprint prettyprinted" style><span class="typ">b</span></code>'
        'c<code class="prettyprint prettyprinted" style><span class="typ">d</span></code>'
    )


def test_replace_inline_code_ignores_unclosed_marker():
    assert replace_inline_code("a{code}b") == "a{code}b"


def test_restore_in_fifo_order():
    stash = CodeStash()
    stash.push("X")
    stash.push("Y")

    assert restore_code_blocks(f"a{CODE_PLACEHOLDER}b{CODE_PLACEHOLDER}c", stash) == "aXbYc"


def test_restore_pads_missing_entries_with_empty_string():
    stash = CodeStash()
    stash.push("X")

    assert restore_code_blocks(f"a{CODE_PLACEHOLDER}b{CODE_PLACEHOLDER}c", stash) == "aXbc"


def test_restore_drops_extra_entries():
    stash = CodeStash()
    stash.push("X")
    stash.push("Y")

    assert restore_code_blocks(f"a{CODE_PLACEHOLDER}b", stash) == "aXb"


def test_restore_without_placeholders_returns_text():
    stash = CodeStash()
    stash.push("X")

    assert restore_code_blocks("plain", stash) == "plain"
