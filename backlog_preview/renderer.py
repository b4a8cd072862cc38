"""Wiki markup to HTML rendering."""

from __future__ import annotations

from pathlib import Path

from .config import ConfigError, PreviewConfig, validate_config
from .constants import DEFAULT_CONTAINER_CLASS, DEFAULT_TITLE
from .escape import escape_html
from .exceptions import RenderError, RenderFileError
from .filesystem import read_source
from .inline import apply_inline_markup
from .models import RenderContext
from .parser import parse_blocks
from .stash import restore_code_blocks, stash_code_blocks

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<div class="{container_class}">{body}</div>
</body>
</html>
"""


def render(text: str) -> str:
    """Convert wiki markup into an HTML fragment.

    The input is escaped once, code blocks are stashed behind placeholders,
    lines are parsed into block markup, the inline passes run over the whole
    result, and the stashed code is spliced back in. Never raises; malformed
    markup passes through as escaped text or is closed at end of input.

    Args:
        text: Wiki markup.

    Returns:
        str: HTML fragment ready to embed in a page.

    Examples:
        render("*** Title")  # "<h3>Title</h3>"
        render("a''b''c")  # "a<b>b</b>c<br>"
        render("[[Google>https://google.com]]")
    """
    context = RenderContext()
    escaped = escape_html(text)
    stashed = stash_code_blocks(escaped, context.stash)
    blocks = parse_blocks(stashed, context)
    html = apply_inline_markup(blocks)
    return restore_code_blocks(html, context.stash)


def render_document(
    text: str,
    title: str = DEFAULT_TITLE,
    container_class: str = DEFAULT_CONTAINER_CLASS,
) -> str:
    """Render wiki markup and wrap it in a minimal HTML page.

    Args:
        text: Wiki markup.
        title: Page title; escaped before insertion.
        container_class: Class of the ``<div>`` holding the fragment.

    Returns:
        str: Complete HTML document.
    """
    return DOCUMENT_TEMPLATE.format(
        title=escape_html(title),
        container_class=escape_html(container_class),
        body=render(text),
    )


def render_config(text: str, config: PreviewConfig) -> str:
    """Render `text` as a fragment or a page depending on `config`."""
    if config.standalone:
        return render_document(text, config.title, config.container_class)
    return render(text)


def render_file(filepath: Path, config: PreviewConfig | None = None) -> str:
    """Read a UTF-8 wiki source file and render it.

    Args:
        filepath: Path to the source file.
        config: Rendering configuration; defaults to a new `PreviewConfig`
            when omitted.

    Returns:
        str: Rendered HTML, a full page when `config.standalone` is set.

    Raises:
        RenderFileError: If the configuration is invalid, the file is too
            large, cannot be read, or is not valid UTF-8.

    Examples:
        html = render_file(Path("notes.txt"), PreviewConfig(standalone=True))
    """
    config = config or PreviewConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise RenderFileError(str(error)) from error

    try:
        content = read_source(filepath, config.max_file_size)
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise RenderFileError(error_message) from error
    except RenderError as error:
        raise RenderFileError(f"{filepath}: {error}") from error
    except IOError as error:
        raise RenderFileError(str(error)) from error

    return render_config(content, config)
