from __future__ import annotations

import os

import pytest

from backlog_preview.constants import CODE_PLACEHOLDER
from backlog_preview.renderer import render

atheris = pytest.importorskip("atheris")

MARKUP_FRAGMENTS = [
    "|", "||", "|h", "~", "-", "--", "+", "++", ">", "*", "***", "'''", "''", "%%",
    "&color(red, blue) {", "}", "[[", "]]", "https://example.com", "{code}", "{/code}",
    "{quote}", "{/quote}", "&br;", "\n", "\r\n", " ",
]


def test_render_with_fuzzed_text():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    rendered = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        html = render(provider.ConsumeUnicodeNoSurrogates(64))
        assert CODE_PLACEHOLDER not in html
        rendered += 1

    assert rendered  # ensure we exercised the loop


def test_render_with_fuzzed_markup():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    pieces: list[str] = []

    while provider.remaining_bytes() > 0 and len(pieces) < 256:
        index = provider.ConsumeIntInRange(0, len(MARKUP_FRAGMENTS) - 1)
        pieces.append(MARKUP_FRAGMENTS[index])

    html = render("".join(pieces))
    assert html.count("<table>") == html.count("</table>")
