"""Inline substitutions applied to the assembled block output."""

from __future__ import annotations

import re
from collections.abc import Callable

from .constants import (
    BLOCK_QUOTE_PATTERN,
    BOLD_PATTERN,
    BREAK_TAG,
    COLOR_PATTERN,
    ITALIC_PATTERN,
    LINK_PATTERN,
    LINK_TEMPLATE,
    LITERAL_BREAK,
    STRIKE_PATTERN,
)


def _fold_block_quote(match: re.Match[str]) -> str:
    prefix = ">" if match.group(1) == ">" else ""
    return f"{prefix}<br><blockquote>{match.group(2)}></blockquote><br>"


def fold_block_quotes(html: str) -> str:
    """Wrap ``{quote}`` ... ``{/quote}`` regions in a blockquote.

    Works on block output, where every neutral line already ends with
    ``<br>``. The region must start the document or follow a closing ``>``
    of the previous tag.

    Args:
        html: Block-level HTML.

    Returns:
        str: HTML with quote regions folded.

    Examples:
        fold_block_quotes("<br>{quote}<br>aaa<br>{/quote}<br>")
        # "<br><br><blockquote>aaa<br></blockquote><br>"
    """
    return BLOCK_QUOTE_PATTERN.sub(_fold_block_quote, html)


def apply_italic(html: str) -> str:
    return ITALIC_PATTERN.sub(r"<i>\2</i>", html)


def apply_bold(html: str) -> str:
    return BOLD_PATTERN.sub(r"<b>\2</b>", html)


def apply_strike(html: str) -> str:
    return STRIKE_PATTERN.sub(r"<strike>\1</strike>", html)


def _color_style(values: str) -> str:
    if "," in values:
        color, background, *_ = values.split(",")
        return f"color: {color.strip()};background-color: {background.strip()};"
    return f"color: {values};"


def apply_color(html: str) -> str:
    """Render ``&color(fg[, bg]) { text }`` as a styled span.

    Examples:
        apply_color("&amp;color(red, white) { hi }")
        # '<span style="color: red;background-color: white;">hi</span>'
    """
    return COLOR_PATTERN.sub(
        lambda match: f'<span style="{_color_style(match.group(1))}">{match.group(2)}</span>',
        html,
    )


def _render_link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2)
    return LINK_TEMPLATE.format(href=url, text=label if label is not None else url)


def apply_links(html: str) -> str:
    """Turn URLs and ``[[label>url]]`` / ``[[label:url]]`` into anchors.

    Anchors open in a new tab; the link text is the label when one is given
    and the URL otherwise.

    Args:
        html: HTML after the emphasis and color passes.

    Returns:
        str: HTML with anchors.

    Examples:
        apply_links("[[Google&gt;https://google.com]]")
    """
    return LINK_PATTERN.sub(_render_link, html)


def unescape_breaks(html: str) -> str:
    """Turn the escaped ``&br;`` directive back into a ``<br>`` tag."""
    return html.replace(LITERAL_BREAK, BREAK_TAG)


# Order matters: italic must see ''' before bold splits it.
INLINE_PASSES: tuple[Callable[[str], str], ...] = (
    fold_block_quotes,
    apply_italic,
    apply_bold,
    apply_strike,
    apply_color,
    apply_links,
    unescape_breaks,
)


def apply_inline_markup(html: str) -> str:
    """Run every inline pass over `html`, in order."""
    for inline_pass in INLINE_PASSES:
        html = inline_pass(html)
    return html
