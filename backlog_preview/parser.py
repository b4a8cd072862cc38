"""Line-oriented block parsing for wiki markup."""

from __future__ import annotations

from .constants import (
    BREAK_TAG,
    HEADER_PATTERN,
    LINE_BREAK_PATTERN,
    LIST_PATTERN,
    ORDERED_LIST_PATTERN,
    QUOTE_PATTERN,
    TABLE_CELL_SEPARATOR,
    TABLE_HEADER_CELL_MARKER,
    TABLE_HEADER_ROW_MARKER,
    TABLE_PATTERN,
)
from .models import BlockKind, BlockStatus, RenderContext
from .stash import replace_inline_code

_LIST_TAGS = {BlockKind.LIST: "ul", BlockKind.ORDERED_LIST: "ol"}
_LIST_PATTERNS = {BlockKind.LIST: LIST_PATTERN, BlockKind.ORDERED_LIST: ORDERED_LIST_PATTERN}


def split_lines(text: str) -> list[str]:
    """Split text on ``\\r\\n``, ``\\n`` or ``\\r``.

    A trailing line break does not produce a trailing empty line, and empty
    text has no lines at all.

    Args:
        text: Text to split.

    Returns:
        list[str]: Lines without their line breaks.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
        split_lines("\\n")  # [""]
    """
    lines = LINE_BREAK_PATTERN.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def classify(line: str) -> BlockStatus:
    """Classify a line by its leading syntax.

    Precedence is table row, unordered list, ordered list, quote, header,
    then neutral. List levels are the length of the marker run.

    Args:
        line: Escaped line with inline code already rendered.

    Returns:
        BlockStatus: Status of the line.

    Examples:
        classify("|a|b|")  # BlockStatus.table()
        classify("--- item")  # BlockStatus.unordered(3)
        classify("&gt; quoted")  # BlockStatus.quote()
    """
    if TABLE_PATTERN.match(line):
        return BlockStatus.table()

    list_match = LIST_PATTERN.match(line)
    if list_match:
        return BlockStatus.unordered(len(list_match.group(1)))

    ordered_match = ORDERED_LIST_PATTERN.match(line)
    if ordered_match:
        return BlockStatus.ordered(len(ordered_match.group(1)))

    if QUOTE_PATTERN.match(line):
        return BlockStatus.quote()
    if HEADER_PATTERN.match(line):
        return BlockStatus.header()
    return BlockStatus.neutral()


def closing_markup(previous: BlockStatus, current: BlockStatus) -> str:
    """Markup that closes `previous` before a line of status `current`.

    Lists of the same kind only close the levels `current` leaves; any other
    status closes every open level.

    Args:
        previous: Status of the preceding line.
        current: Status of the line about to be emitted.

    Returns:
        str: Closing tags, possibly empty.

    Examples:
        closing_markup(BlockStatus.unordered(3), BlockStatus.unordered(1))  # "</li></ul>" * 2
        closing_markup(BlockStatus.unordered(2), BlockStatus.neutral())  # "</li></ul>" * 2
    """
    if previous == current:
        return ""

    if previous.kind is BlockKind.TABLE:
        return "</tbody></table>"
    if previous.kind is BlockKind.QUOTE:
        return "</blockquote>"
    if previous.is_list:
        closer = f"</li></{_LIST_TAGS[previous.kind]}>"
        if current.kind is previous.kind:
            return closer * max(previous.level - current.level, 0)
        return closer * previous.level
    return ""


def opening_markup(previous: BlockStatus, current: BlockStatus) -> str:
    """Markup that opens (or continues) the container of `current`.

    Args:
        previous: Status of the preceding line.
        current: Status of the line about to be emitted.

    Returns:
        str: Opening tags, possibly empty.

    Examples:
        opening_markup(BlockStatus.neutral(), BlockStatus.ordered(1))  # "<ol><li>"
        opening_markup(BlockStatus.unordered(1), BlockStatus.unordered(3))  # "<ul><li>" * 2
        opening_markup(BlockStatus.unordered(2), BlockStatus.unordered(2))  # "</li><li>"
    """
    if current.kind is BlockKind.TABLE:
        return "" if previous.kind is BlockKind.TABLE else "<table><tbody>"
    if current.kind is BlockKind.QUOTE:
        return "" if previous.kind is BlockKind.QUOTE else "<blockquote>"
    if current.is_list:
        opener = f"<{_LIST_TAGS[current.kind]}><li>"
        if previous.kind is not current.kind:
            return opener
        if current.level > previous.level:
            return opener * (current.level - previous.level)
        if current.level == previous.level:
            return "</li><li>"
        return "<li>"
    return ""


def transition(previous: BlockStatus, current: BlockStatus) -> tuple[str, str]:
    """Return the ``(closing, opening)`` markup between two line statuses."""
    return closing_markup(previous, current), opening_markup(previous, current)


def render_table_row(line: str) -> str:
    """Render a table row line as ``<tr>`` markup.

    A row ending in ``h`` is a header row and every cell becomes ``<th>``.
    Otherwise cells starting with ``~`` become ``<th>`` (marker stripped) and
    the remaining cells ``<td>``.

    Args:
        line: Line classified as a table row.

    Returns:
        str: Row markup.

    Examples:
        render_table_row("|a|~b|")  # "<tr><td>a</td><th>b</th></tr>"
        render_table_row("|a|b|h")  # "<tr><th>a</th><th>b</th></tr>"
    """
    match = TABLE_PATTERN.match(line)
    if match is None:
        return ""

    header_row = line.endswith(TABLE_HEADER_ROW_MARKER)
    cells = ["<tr>"]
    for content in match.group(1).split(TABLE_CELL_SEPARATOR):
        if header_row:
            cells.append(f"<th>{content}</th>")
        elif content.startswith(TABLE_HEADER_CELL_MARKER):
            cells.append(f"<th>{content[len(TABLE_HEADER_CELL_MARKER):]}</th>")
        else:
            cells.append(f"<td>{content}</td>")
    cells.append("</tr>")
    return "".join(cells)


def _render_header(line: str) -> str:
    match = HEADER_PATTERN.match(line)
    if match is None:
        return line
    level = len(match.group(1))
    return f"<h{level}>{match.group(2)}</h{level}>"


def render_line_body(line: str, status: BlockStatus) -> str:
    """Render the content of a line according to its status.

    Args:
        line: Escaped line with inline code already rendered.
        status: Status returned by `classify` for the line.

    Returns:
        str: Line markup without any container tags.
    """
    if status.kind is BlockKind.TABLE:
        return render_table_row(line)
    if status.is_list:
        # Drop the marker run, keep everything after it as is.
        return _LIST_PATTERNS[status.kind].sub(r"\2", line, count=1)
    if status.kind is BlockKind.QUOTE:
        return QUOTE_PATTERN.sub(rf"\1{BREAK_TAG}", line, count=1)
    if status.kind is BlockKind.HEADER:
        return _render_header(line)
    return f"{line}{BREAK_TAG}"


def parse_blocks(text: str, context: RenderContext | None = None) -> str:
    """Walk escaped text line by line and emit block-level HTML.

    Each line has its inline code rendered, is classified, and is emitted
    after the markup that closes the previous container and opens the current
    one. Containers still open after the last line are closed as if a neutral
    line followed.

    Args:
        text: Escaped text with code blocks already stashed.
        context: Render state for this call. Defaults to a fresh
            `RenderContext` when omitted.

    Returns:
        str: Block-level HTML for the whole text.

    Examples:
        parse_blocks("- a\\n-- b")  # "<ul><li> a<ul><li> b</li></ul></li></ul>"
    """
    context = context or RenderContext()

    for raw_line in split_lines(text):
        line = replace_inline_code(raw_line)
        current = classify(line)
        closing, opening = transition(context.previous, current)
        context.emit(closing, opening, render_line_body(line, current))
        context.previous = current

    context.emit(closing_markup(context.previous, BlockStatus.neutral()))
    return context.getvalue()
