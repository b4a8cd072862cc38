"""Watch mode: re-render a source file whenever it changes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import watchfiles

from .constants import DEFAULT_DEBOUNCE_MS
from .exceptions import RenderFileError

ChangeBatch = set[tuple[Any, str]]


def make_watchfiles_iter(
    filepath: Path, debounce: int = DEFAULT_DEBOUNCE_MS
) -> Iterable[ChangeBatch]:
    """Change batches for the directory holding `filepath`.

    Watching the directory keeps following editors that save by replacing
    the file.
    """
    return watchfiles.watch(filepath.parent, debounce=debounce)


def touches(batch: ChangeBatch, filepath: Path) -> bool:
    """Whether any change in `batch` concerns `filepath`."""
    target = filepath.resolve()
    return any(Path(raw_path).resolve() == target for _, raw_path in batch)


def watch_file(
    filepath: Path,
    on_change: Callable[[Path], None],
    *,
    changes: Iterable[ChangeBatch] | None = None,
    debounce: int = DEFAULT_DEBOUNCE_MS,
    on_error: Callable[[Exception], None] | None = None,
) -> int:
    """Call `on_change` now and again after every change to `filepath`.

    Changes come from `watchfiles` unless `changes` supplies the batches.
    Batches that only touch other files in the directory, such as the
    rendered output, are ignored. Errors raised by `on_change` go to
    `on_error` and watching continues; without `on_error` they propagate.

    Args:
        filepath: Source file to watch.
        on_change: Callback receiving `filepath`.
        changes: Iterable of ``{(change, path), ...}`` batches.
        debounce: Milliseconds `watchfiles` waits for changes to settle.
        on_error: Callback receiving errors raised by `on_change`.

    Returns:
        int: Number of times `on_change` completed without error; reached only
        once `changes` is exhausted.

    Examples:
        watch_file(Path("notes.txt"), lambda path: print(render_file(path)))
    """
    if changes is None:
        changes = make_watchfiles_iter(filepath, debounce)

    runs = _run(filepath, on_change, on_error)
    for batch in changes:
        if touches(batch, filepath):
            runs += _run(filepath, on_change, on_error)
    return runs


def _run(
    filepath: Path,
    on_change: Callable[[Path], None],
    on_error: Callable[[Exception], None] | None,
) -> int:
    try:
        on_change(filepath)
    except (IOError, ValueError, RenderFileError) as error:
        if on_error is None:
            raise
        on_error(error)
        return 0
    return 1
