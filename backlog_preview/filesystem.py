"""Reading wiki sources and writing rendered HTML."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .exceptions import FileTooLargeError


def resolve_source(raw_path: str) -> Path:
    """Turn a user-supplied source path into an absolute path to a file.

    Raises:
        ValueError: If nothing exists at the path or it is not a regular file.

    Examples:
        resolve_source("~/notes/meeting.txt")
    """
    path = Path(raw_path).expanduser()
    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    return resolved


def read_source(filepath: Path, max_size: int) -> str:
    """Read a wiki source file as UTF-8, keeping its line breaks untouched.

    At most `max_size` + 1 bytes are read, so a file that grows after the
    size check is still rejected.

    Args:
        filepath: Source file.
        max_size: Largest accepted size in bytes.

    Returns:
        str: Decoded file content.

    Raises:
        FileTooLargeError: If the file is larger than `max_size`.
        IOError: If the file cannot be read.
        UnicodeDecodeError: If the content is not valid UTF-8.
    """
    try:
        size = os.stat(filepath).st_size
        if size > max_size:
            raise FileTooLargeError(size, max_size)
        with open(filepath, "rb") as stream:
            data = stream.read(max_size + 1)
    except OSError as error:
        raise IOError(f"Error reading {filepath}: {error}") from error

    if len(data) > max_size:
        raise FileTooLargeError(len(data), max_size)
    return data.decode("utf-8")


def default_output_path(source: Path, suffix: str) -> Path:
    """Path of the HTML file written next to `source`."""
    return source.with_suffix(suffix)


def write_output(filepath: Path, html: str):
    """Atomically write rendered HTML to `filepath`.

    Content goes to a temporary file in the target directory first and then
    replaces the destination. Permissions of an existing destination are kept.

    Raises:
        IOError: If the destination is a symlink or cannot be written.

    Examples:
        write_output(Path("notes.html"), render(source))
    """
    if filepath.is_symlink():
        raise IOError(f"Refusing to write through symlink: {filepath}.")

    temp_path: Path | None = None
    try:
        mode = stat.S_IMODE(os.stat(filepath).st_mode) if filepath.exists() else None
        file_descriptor, temp_name = tempfile.mkstemp(
            dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
        )
        temp_path = Path(temp_name)
        with os.fdopen(file_descriptor, "w", encoding="UTF-8", newline="") as stream:
            stream.write(html)
            stream.flush()
            os.fsync(stream.fileno())
        if mode is not None:
            os.chmod(temp_path, mode)
        os.replace(temp_path, filepath)
        temp_path = None
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
