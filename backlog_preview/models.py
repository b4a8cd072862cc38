"""Data models for backlog-preview."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto


class BlockKind(Enum):
    """Kinds of block a single line can belong to.

    Attributes:
        NEUTRAL: Plain text line.
        TABLE: Table row (``|a|b|``).
        LIST: Unordered list item (``- item``).
        ORDERED_LIST: Ordered list item (``+ item``).
        QUOTE: Single-line quote (``> text``).
        HEADER: Header line (``* title``).
    """

    NEUTRAL = auto()
    TABLE = auto()
    LIST = auto()
    ORDERED_LIST = auto()
    QUOTE = auto()
    HEADER = auto()


@dataclass(frozen=True)
class BlockStatus:
    """Classification of one line while walking the document.

    Attributes:
        kind: Block kind of the line.
        level: Nesting level for list kinds, derived from the marker run
            length; 0 for every other kind.

    Examples:
        BlockStatus.unordered(2) == BlockStatus(BlockKind.LIST, 2)
    """

    kind: BlockKind
    level: int = 0

    @classmethod
    def neutral(cls) -> BlockStatus:
        return cls(BlockKind.NEUTRAL)

    @classmethod
    def table(cls) -> BlockStatus:
        return cls(BlockKind.TABLE)

    @classmethod
    def quote(cls) -> BlockStatus:
        return cls(BlockKind.QUOTE)

    @classmethod
    def header(cls) -> BlockStatus:
        return cls(BlockKind.HEADER)

    @classmethod
    def unordered(cls, level: int) -> BlockStatus:
        return cls(BlockKind.LIST, level)

    @classmethod
    def ordered(cls, level: int) -> BlockStatus:
        return cls(BlockKind.ORDERED_LIST, level)

    @property
    def is_list(self) -> bool:
        return self.kind in (BlockKind.LIST, BlockKind.ORDERED_LIST)


class CodeStash:
    """FIFO queue of rendered code blocks waiting to be restored.

    Entries are pushed in source order while code blocks are extracted and
    popped in the same order when placeholders are replaced. Popping an empty
    stash yields an empty string.
    """

    def __init__(self) -> None:
        self._entries: deque[str] = deque()

    def push(self, html: str) -> None:
        self._entries.append(html)

    def pop(self) -> str:
        if not self._entries:
            return ""
        return self._entries.popleft()

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class RenderContext:
    """Per-call state threaded through the block walk.

    Attributes:
        previous: Status of the previously processed line.
        output: HTML fragments emitted so far.
        stash: Code blocks extracted before the walk.
    """

    previous: BlockStatus = field(default_factory=BlockStatus.neutral)
    output: list[str] = field(default_factory=list)
    stash: CodeStash = field(default_factory=CodeStash)

    def emit(self, *fragments: str) -> None:
        self.output.extend(fragment for fragment in fragments if fragment)

    def getvalue(self) -> str:
        return "".join(self.output)
