"""
backlog-preview: HTML preview renderer for Backlog wiki markup.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    backlog-preview notes.txt
    backlog-preview notes.txt --standalone --write --watch

Library Usage:
    from backlog_preview import render

    html = render("* Title\\n- item\\n''bold'' and '''italic'''")
"""

from .config import ConfigError, PreviewConfig, build_config, load_config
from .escape import escape_html
from .exceptions import FileTooLargeError, RenderError, RenderFileError
from .inline import apply_inline_markup
from .models import BlockKind, BlockStatus, CodeStash, RenderContext
from .parser import classify, parse_blocks, transition
from .renderer import render, render_document, render_file
from .stash import restore_code_blocks, stash_code_blocks

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render",
    "render_document",
    "render_file",
    # Pipeline stages
    "escape_html",
    "stash_code_blocks",
    "parse_blocks",
    "apply_inline_markup",
    "restore_code_blocks",
    "classify",
    "transition",
    # Data models
    "BlockKind",
    "BlockStatus",
    "CodeStash",
    "RenderContext",
    "PreviewConfig",
    # Configuration
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "FileTooLargeError",
    "RenderError",
    "RenderFileError",
    # Version
    "__version__",
]
