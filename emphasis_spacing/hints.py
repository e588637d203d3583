"""Read-only detection of spacing hints around emphasis markers.

Editors that render Markdown live can show a visual space where the rewriting
pipeline would insert one, without touching the source. Detection works on
offsets of the unmodified text and uses the broader boundary predicate, since
renderers also fail to see emphasis next to CJK punctuation or Hangul.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .blocks import is_protected_line
from .classifier import is_alphanumeric, is_problematic_boundary
from .config import SpacingConfig, validate_config
from .markers import BOLD_WIDTHS, ITALIC_WIDTHS, marker_width_at
from .models import BlockState, HintSide, SpacingHint
from .protector import find_protected_spans, in_spans

logger = logging.getLogger(__name__)


@dataclass
class _OpenSpan:
    width: int
    start: int
    wants_space_before: bool


def _bold_hint_wanted(char: str, config: SpacingConfig) -> bool:
    if not char or char.isspace():
        return False
    if is_problematic_boundary(char):
        return config.space_between_chinese_and_bold
    if is_alphanumeric(char):
        return config.space_between_english_and_bold
    return False


def _italic_hint_wanted(char: str, config: SpacingConfig) -> bool:
    if not config.space_between_chinese_and_italic:
        return False
    return bool(char) and not char.isspace() and is_problematic_boundary(char)


def _line_hints(
    line: str,
    line_number: int,
    line_start: int,
    spans: list[tuple[int, int]],
    widths: frozenset[int],
    wanted: Callable[[str, SpacingConfig], bool],
    config: SpacingConfig,
) -> list[SpacingHint]:
    def _neighbour(index: int) -> str:
        if 0 <= index < len(line) and not in_spans(index, spans):
            return line[index]
        return ""

    def _hint(offset: int, side: HintSide, open_span: _OpenSpan, span_end: int) -> SpacingHint:
        return SpacingHint(
            offset=line_start + offset,
            line=line_number,
            column=offset,
            side=side,
            marker="*" * open_span.width,
            span_start=line_start + open_span.start,
            span_end=line_start + span_end,
        )

    hints: list[SpacingHint] = []
    stack: list[_OpenSpan] = []
    index = 0

    while index < len(line):
        span_end = next((end for start, end in spans if start <= index < end), None)
        if span_end is not None:
            index = span_end
            continue

        width = marker_width_at(line, index)
        if width == 0 or width not in widths:
            index += max(width, 1)
            continue

        end = index + width
        if stack and stack[-1].width == width:
            open_span = stack.pop()
            if open_span.wants_space_before:
                hints.append(_hint(open_span.start, HintSide.BEFORE, open_span, end))
            if wanted(_neighbour(end), config):
                hints.append(_hint(end, HintSide.AFTER, open_span, end))
        else:
            stack.append(_OpenSpan(width, index, wanted(_neighbour(index - 1), config)))
        index = end

    # Unterminated spans keep the hint before their opening marker
    for open_span in stack:
        if open_span.wants_space_before:
            hints.append(
                _hint(open_span.start, HintSide.BEFORE, open_span, open_span.start + open_span.width)
            )

    return hints


def _overlaps(hint: SpacingHint, selections: list[tuple[int, int]]) -> bool:
    return any(start <= hint.span_end and end >= hint.span_start for start, end in selections)


def find_spacing_hints(
    text: str,
    config: SpacingConfig | None = None,
    selections: Iterable[tuple[int, int]] = (),
) -> list[SpacingHint]:
    """Find where a viewer should render a space next to an emphasis marker.

    Skips fenced code and ``$$`` math blocks the same way `process_text` does,
    along with blank lines and protected inline regions. Markers are paired
    with the same width-keyed stack the rewriting passes use: ``**`` and
    ``***`` for bold hints, ``*`` for italic hints.

    Args:
        text: Document content.
        config: Spacing options. Defaults to a new `SpacingConfig` when omitted.
        selections: Cursor or selection ranges as ``(start, end)`` offsets. Hints
            belonging to an emphasis span that overlaps any of them are
            suppressed so the user sees the raw source while editing it.

    Returns:
        list[SpacingHint]: Hints ordered by offset.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        [hint.offset for hint in find_spacing_hints("中文**加粗**中文")]  # [2, 8]
    """
    config = config or SpacingConfig()
    validate_config(config)
    selection_ranges = [(min(start, end), max(start, end)) for start, end in selections]

    state = BlockState()
    hints: list[SpacingHint] = []
    line_start = 0

    for line_number, line in enumerate(text.split("\n")):
        if not is_protected_line(state, line, config) and line.strip():
            spans = find_protected_spans(line, config)
            for widths, wanted in (
                (BOLD_WIDTHS, _bold_hint_wanted),
                (ITALIC_WIDTHS, _italic_hint_wanted),
            ):
                hints.extend(
                    _line_hints(line, line_number, line_start, spans, widths, wanted, config)
                )
        line_start += len(line) + 1

    visible = [hint for hint in hints if not _overlaps(hint, selection_ranges)]
    logger.debug("Found %d spacing hints, %d suppressed", len(hints), len(hints) - len(visible))
    return sorted(visible, key=lambda hint: (hint.offset, hint.side.value))
