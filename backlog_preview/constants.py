"""Constants used across the backlog-preview package."""

from __future__ import annotations

import re

# Line breaks accepted anywhere in the source text
LINE_BREAK = r"(?:\r\n|\n|\r)"
LINE_BREAK_PATTERN = re.compile(LINE_BREAK)

# Escaping
ESCAPE_PATTERN = re.compile(r"""[<>&"'`]""")
ESCAPE_TABLE = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "`": "&#x60;",
}

# Code blocks
CODE_PLACEHOLDER = "gPvErkJM67vL"  # Arbitrary token, never produced by escaped markup.
CODE_BLOCK_PATTERN = re.compile(
    rf"(?:^|{LINE_BREAK})\{{code\}}{LINE_BREAK}([\s\S]*?){LINE_BREAK}\{{/code\}}(?:{LINE_BREAK}|$)"
)
INLINE_CODE_PATTERN = re.compile(r"\{code\}(.*?)\{/code\}")
CODE_BLOCK_TEMPLATE = '<pre class="loom_code loom_code_cs">{}</pre>'
INLINE_CODE_TEMPLATE = (
    '<code class="prettyprint prettyprinted" style><span class="typ">{}</span></code>'
)

# Block syntax, checked in this order
TABLE_PATTERN = re.compile(r"^\|(.*)\|h?$")
LIST_PATTERN = re.compile(r"^(-+)(.+)")
ORDERED_LIST_PATTERN = re.compile(r"^(\++)(.+)")
QUOTE_PATTERN = re.compile(r"^&gt;(.*)")
# `\s` without \x1c-\x1f, which Python counts as whitespace but Unicode does not
HEADER_PATTERN = re.compile(r"^(\*{1,6})[^\S\x1c-\x1f](.*)")

TABLE_CELL_SEPARATOR = "|"
TABLE_HEADER_ROW_MARKER = "h"
TABLE_HEADER_CELL_MARKER = "~"

# Inline syntax
BLOCK_QUOTE_PATTERN = re.compile(r"(^|>)\{quote\}<br>(.*?)>\{/quote\}<br>")
ITALIC_PATTERN = re.compile(r"(&#x27;){3}(.*?)(&#x27;){3}")
BOLD_PATTERN = re.compile(r"(&#x27;){2}(.*?)(&#x27;){2}")
STRIKE_PATTERN = re.compile(r"%%(.*?)%%")
COLOR_PATTERN = re.compile(r"&amp;color\(\s*(.*?)\s*\)\s*\{\s*(.*?)\s*\}")
LINK_PATTERN = re.compile(
    r"(?:\[\[([^\[\]]+?)(?:&gt;|:))?(https?://[\w!?/+\-_~=;.,*&@#$%()']+)(?:\]\])?"
)
LINK_TEMPLATE = (
    '<a href="{href}" target="_blank" rel="noopener noreferrer" '
    'class="loom-link-another">{text}</a>'
)
LITERAL_BREAK = "&amp;br;"
BREAK_TAG = "<br>"

# Output
DEFAULT_CONTAINER_CLASS = "loom"
DEFAULT_TITLE = "Preview"
DEFAULT_OUTPUT_SUFFIX = ".html"
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_DEBOUNCE_MS = 200
STDIN_PATH = "-"
