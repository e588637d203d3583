"""Data models for emphasis-spacing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path


class MarkerWidth(IntEnum):
    """Emphasis marker widths recognised by the marker scan.

    Attributes:
        ITALIC: ``*``
        BOLD: ``**``
        BOLD_ITALIC: ``***``
    """

    ITALIC = 1
    BOLD = 2
    BOLD_ITALIC = 3


class HintSide(Enum):
    """Side of an emphasis marker where a visual space is suggested."""

    BEFORE = "before"
    AFTER = "after"


@dataclass
class BlockState:
    """Document-level block flags, created fresh for every document pass.

    Attributes:
        in_code_block: Whether the current line lies inside a fenced code block.
        in_latex_block: Whether the current line lies inside a ``$$`` math block.
    """

    in_code_block: bool = False
    in_latex_block: bool = False


@dataclass
class MarkerFrame:
    """An open emphasis marker.

    Attributes:
        width: Number of asterisks in the opening run.
        output_length: Length of the output buffer right after the opening
            marker was emitted; whitespace is never trimmed past it.
        start: Offset of the opening marker in the scanned line.
    """

    width: int
    output_length: int
    start: int = 0


@dataclass
class ScanContext:
    """Mutable state of a single left-to-right marker scan over one line.

    Attributes:
        line: The (protected) line being scanned.
        index: Position of the next unconsumed character in `line`.
        output: Output buffer, one character per entry.
        stack: Open marker frames, innermost last.
    """

    line: str
    index: int = 0
    output: list[str] = field(default_factory=list)
    stack: list[MarkerFrame] = field(default_factory=list)

    def previous_char(self) -> str:
        return self.output[-1] if self.output else ""

    def next_char(self) -> str:
        return self.line[self.index] if self.index < len(self.line) else ""

    def result(self) -> str:
        return "".join(self.output)


@dataclass(frozen=True)
class ProtectedRegion:
    """A substring swapped out of a line before the marker scan.

    Attributes:
        placeholder: Reserved token that replaced the substring.
        original: The substring itself.
        index: Discovery order within the line.
    """

    placeholder: str
    original: str
    index: int


@dataclass
class ProtectedLine:
    """A line with its protected regions replaced by placeholders.

    Attributes:
        text: Line content with placeholders.
        regions: Protected regions in discovery order.
    """

    text: str
    regions: list[ProtectedRegion] = field(default_factory=list)


@dataclass(frozen=True)
class SpacingHint:
    """A place where a viewer should render a space next to an emphasis marker.

    Attributes:
        offset: Zero-based offset in the document where the space belongs.
        line: Zero-based line number.
        column: Zero-based column within the line.
        side: Whether the space goes before an opening or after a closing marker.
        marker: The marker text (``*``, ``**`` or ``***``).
        span_start: Offset of the opening marker of the emphasis span.
        span_end: Offset just past the closing marker, or past the opening
            marker when the span is unterminated.
    """

    offset: int
    line: int
    column: int
    side: HintSide
    marker: str
    span_start: int
    span_end: int


@dataclass
class FileResult:
    """Outcome of processing a Markdown file.

    Attributes:
        filepath: Path of the processed file.
        original: File content before processing.
        text: File content after processing.
    """

    filepath: Path
    original: str
    text: str

    @property
    def changed(self) -> bool:
        return self.text != self.original
