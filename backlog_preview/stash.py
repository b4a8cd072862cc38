"""Extraction and restoration of ``{code}`` regions."""

from __future__ import annotations

import re

from .constants import (
    CODE_BLOCK_PATTERN,
    CODE_BLOCK_TEMPLATE,
    CODE_PLACEHOLDER,
    INLINE_CODE_PATTERN,
    INLINE_CODE_TEMPLATE,
)
from .models import CodeStash


def stash_code_blocks(text: str, stash: CodeStash) -> str:
    """Move fenced code blocks out of the text.

    A block starts with a line holding only ``{code}`` and ends with a line
    holding only ``{/code}``. Its inner content is wrapped verbatim in a
    ``<pre>`` container and pushed onto `stash`; the whole region, including
    the delimiter lines and surrounding line breaks, is replaced by one
    placeholder. Unterminated blocks are left untouched.

    Args:
        text: Escaped wiki text.
        stash: Queue receiving the rendered blocks in source order.

    Returns:
        str: Text with one placeholder per extracted block.

    Examples:
        stash_code_blocks("a\\n{code}\\nx\\n{/code}\\n", CodeStash())  # "agPvErkJM67vL"
    """

    def _stash(match: re.Match[str]) -> str:
        stash.push(CODE_BLOCK_TEMPLATE.format(match.group(1)))
        return CODE_PLACEHOLDER

    return CODE_BLOCK_PATTERN.sub(_stash, text)


def replace_inline_code(line: str) -> str:
    """Render ``{code}...{/code}`` spans found within a single line."""
    return INLINE_CODE_PATTERN.sub(
        lambda match: INLINE_CODE_TEMPLATE.format(match.group(1)), line
    )


def restore_code_blocks(text: str, stash: CodeStash) -> str:
    """Replace placeholders with stashed code blocks in extraction order.

    Segments produced by splitting on the placeholder are joined with entries
    popped from the stash. Placeholders without an entry become empty strings,
    and entries left over once every placeholder is filled are dropped.

    Args:
        text: Rendered HTML containing placeholders.
        stash: Queue filled by `stash_code_blocks`.

    Returns:
        str: HTML with no placeholders left.
    """
    segments = text.split(CODE_PLACEHOLDER)
    parts = [segments[0]]
    for segment in segments[1:]:
        parts.append(stash.pop())
        parts.append(segment)
    return "".join(parts)
