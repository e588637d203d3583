"""Emphasis marker scanning.

Each transformation walks a protected line once, left to right, keeping a
stack of open markers keyed by width. A run of the same width as the top
frame closes it; any other run opens a new frame. Runs are matched longest
first, so ``***`` is never read as ``**`` followed by a stray ``*``.
Frames still open at the end of the line are dropped.
"""

from __future__ import annotations

from collections.abc import Callable

from .classifier import is_cjk, should_add_space_after, should_add_space_before
from .config import SpacingConfig
from .constants import INLINE_WHITESPACE, MARKER_CHAR, MAX_MARKER_WIDTH
from .models import MarkerFrame, MarkerWidth, ScanContext

ALL_WIDTHS = frozenset(MarkerWidth)
BOLD_WIDTHS = frozenset({MarkerWidth.BOLD, MarkerWidth.BOLD_ITALIC})
ITALIC_WIDTHS = frozenset({MarkerWidth.ITALIC})

MarkerHandler = Callable[[ScanContext, str], None]


def is_marker(text: str, index: int, width: int) -> bool:
    """Return whether exactly `width` asterisks start at `index`.

    The run must not continue past `width`; callers test wider runs first.

    Examples:
        is_marker("**a", 0, 2)  # True
        is_marker("***a", 0, 2)  # False
    """
    end = index + width
    if end > len(text):
        return False
    if text[index:end] != MARKER_CHAR * width:
        return False
    return end == len(text) or text[end] != MARKER_CHAR


def marker_width_at(text: str, index: int) -> int:
    """Return the width of the marker starting at `index`, or 0 when none does.

    Examples:
        marker_width_at("***a***", 0)  # 3
        marker_width_at("****", 0)  # 0
        marker_width_at("****", 1)  # 3
    """
    for width in range(MAX_MARKER_WIDTH, 0, -1):
        if is_marker(text, index, width):
            return width
    return 0


def _scan(
    line: str,
    widths: frozenset[int],
    on_open: MarkerHandler,
    on_close: MarkerHandler,
) -> str:
    ctx = ScanContext(line=line)

    while ctx.index < len(line):
        width = marker_width_at(line, ctx.index)
        if width == 0:
            ctx.output.append(line[ctx.index])
            ctx.index += 1
            continue

        marker = line[ctx.index : ctx.index + width]
        start = ctx.index
        ctx.index += width

        # Runs this pass does not handle are copied as one token
        if width not in widths:
            ctx.output.extend(marker)
            continue

        if ctx.stack and ctx.stack[-1].width == width:
            on_close(ctx, marker)
            ctx.stack.pop()
        else:
            on_open(ctx, marker)
            ctx.stack.append(MarkerFrame(width, len(ctx.output), start))

    return ctx.result()


# Trimming never makes two asterisk runs touch.
def _open_trimming(ctx: ScanContext, marker: str) -> None:
    ctx.output.extend(marker)
    end = ctx.index
    while end < len(ctx.line) and ctx.line[end] in INLINE_WHITESPACE:
        end += 1
    if end < len(ctx.line) and ctx.line[end] == MARKER_CHAR:
        return
    ctx.index = end


def _close_trimming(ctx: ScanContext, marker: str) -> None:
    boundary = ctx.stack[-1].output_length
    end = len(ctx.output)
    while end > boundary and ctx.output[end - 1].isspace():
        end -= 1
    if ctx.output[end - 1] != MARKER_CHAR:
        del ctx.output[end:]
    ctx.output.extend(marker)


def remove_internal_spaces(line: str) -> str:
    """Trim whitespace just inside ``*``, ``**`` and ``***`` spans.

    Spaces and tabs after an opening marker are skipped. Before a closing
    marker, trailing whitespace is removed back to (never past) the point where
    the span opened. Whitespace that separates two asterisk runs is kept, so
    ``* *`` never collapses into ``**``.

    Examples:
        remove_internal_spaces("**  Content  **")  # "**Content**"
        remove_internal_spaces("a *  b  * c")  # "a *b* c"
    """
    return _scan(line, ALL_WIDTHS, _open_trimming, _close_trimming)


def fix_bold_spacing(line: str, config: SpacingConfig) -> str:
    """Insert a space between ``**``/``***`` markers and adjacent text.

    A space goes before an opening marker and after a closing marker when the
    neighbouring character passes the bold spacing predicate. Single
    asterisks are left alone.

    Examples:
        fix_bold_spacing("中文**加粗**中文", SpacingConfig())  # "中文 **加粗** 中文"
    """

    def _open(ctx: ScanContext, marker: str) -> None:
        if should_add_space_before(ctx.previous_char(), config):
            ctx.output.append(" ")
        ctx.output.extend(marker)

    def _close(ctx: ScanContext, marker: str) -> None:
        ctx.output.extend(marker)
        if should_add_space_after(ctx.next_char(), config):
            ctx.output.append(" ")

    return _scan(line, BOLD_WIDTHS, _open, _close)


def fix_italic_spacing(line: str, config: SpacingConfig) -> str:
    """Insert a space between ``*`` markers and adjacent CJK characters.

    ``**`` and ``***`` runs pass through untouched and never toggle the
    italic state.

    Examples:
        fix_italic_spacing("中文*斜体*中文", SpacingConfig())  # "中文 *斜体* 中文"
    """
    if not config.space_between_chinese_and_italic:
        return line

    def _open(ctx: ScanContext, marker: str) -> None:
        before = ctx.previous_char()
        if is_cjk(before) and before != " ":
            ctx.output.append(" ")
        ctx.output.extend(marker)

    def _close(ctx: ScanContext, marker: str) -> None:
        ctx.output.extend(marker)
        if is_cjk(ctx.next_char()):
            ctx.output.append(" ")

    return _scan(line, ITALIC_WIDTHS, _open, _close)
