"""Protection of inline regions the marker scan must not touch."""

from __future__ import annotations

import re

from .config import SpacingConfig
from .constants import (
    CODE_PLACEHOLDER,
    INLINE_CODE_PATTERN,
    INLINE_MATH_PATTERN,
    LIST_MARKER_PATTERN,
    LIST_PLACEHOLDER,
    MATH_PLACEHOLDER,
    PLACEHOLDER_DELIMITER,
    SINGLE_STAR_PATTERN,
)
from .models import ProtectedLine, ProtectedRegion


def make_placeholder(kind: str, index: int) -> str:
    """Build the reserved token standing in for a protected region.

    Examples:
        make_placeholder("CODE", 1)  # "\\x00CODE1\\x00"
    """
    return f"{PLACEHOLDER_DELIMITER}{kind}{index}{PLACEHOLDER_DELIMITER}"


def match_list_marker(line: str) -> re.Match[str] | None:
    """Match a leading list bullet (``*`` followed by whitespace).

    A leading ``*`` followed by whitespace is a bullet. The one exception is
    a line whose only other single asterisk ends it, as in
    ``*  Content  *``; there the two pair up as an italic span. Asterisks
    inside inline code or math do not count.

    Args:
        line: Line to inspect.

    Returns:
        re.Match | None: The match covering the indentation and the bullet,
            or None when the line does not start with a bullet.

    Examples:
        match_list_marker("  * Item")  # matches "  *"
        match_list_marker("* **Bold**")  # matches "*"
        match_list_marker("* 5 * 3 = 15")  # matches "*"
        match_list_marker("*  Content  *")  # None
    """
    match = LIST_MARKER_PATTERN.match(line)
    if match is None:
        return None

    rest = INLINE_CODE_PATTERN.sub("", line[match.end() :])
    rest = INLINE_MATH_PATTERN.sub("", rest).rstrip()
    stars = list(SINGLE_STAR_PATTERN.finditer(rest))
    if len(stars) == 1 and stars[0].end() == len(rest):
        return None
    return match


def protect_line(line: str, config: SpacingConfig) -> ProtectedLine:
    """Replace protected regions of a line with placeholders.

    Regions are protected in this order: a leading list bullet, inline code
    spans (only when `config.skip_inline_code` is set), then inline math
    spans delimited by unescaped ``$``. Later patterns run over the output of
    earlier ones, so a math span may enclose a code placeholder.

    Args:
        line: Line to protect.
        config: Spacing options.

    Returns:
        ProtectedLine: Line with placeholders plus the regions needed to
            restore it.

    Examples:
        protect_line("`a*b` *c*", SpacingConfig()).text  # "\\x00CODE0\\x00 *c*"
    """
    regions: list[ProtectedRegion] = []

    def _protect(kind: str, original: str) -> str:
        placeholder = make_placeholder(kind, len(regions))
        regions.append(ProtectedRegion(placeholder, original, len(regions)))
        return placeholder

    text = line
    list_match = match_list_marker(text)
    if list_match:
        text = _protect(LIST_PLACEHOLDER, list_match.group(0)) + text[list_match.end() :]

    if config.skip_inline_code:
        text = INLINE_CODE_PATTERN.sub(lambda match: _protect(CODE_PLACEHOLDER, match.group(0)), text)

    text = INLINE_MATH_PATTERN.sub(lambda match: _protect(MATH_PLACEHOLDER, match.group(0)), text)

    return ProtectedLine(text=text, regions=regions)


def restore_line(text: str, regions: list[ProtectedRegion]) -> str:
    """Substitute placeholders back with their original text.

    Runs in reverse discovery order so that a region whose original text
    contains an earlier placeholder is expanded before that placeholder.
    """
    for region in reversed(regions):
        text = text.replace(region.placeholder, region.original, 1)
    return text


def find_protected_spans(line: str, config: SpacingConfig) -> list[tuple[int, int]]:
    """Locate protected regions as offsets into the unmodified line.

    Covers the same regions as `protect_line` without rewriting the line.

    Args:
        line: Line to scan.
        config: Spacing options.

    Returns:
        list[tuple[int, int]]: Start (inclusive) and end (exclusive) offsets,
            sorted by start.
    """
    spans: list[tuple[int, int]] = []

    list_match = match_list_marker(line)
    if list_match:
        spans.append((0, list_match.end()))

    masked = line
    if config.skip_inline_code:
        for match in INLINE_CODE_PATTERN.finditer(line):
            spans.append(match.span())
        # Same-length filler keeps offsets aligned while hiding `$` inside code
        masked = INLINE_CODE_PATTERN.sub(lambda match: "\x01" * len(match.group(0)), line)

    for match in INLINE_MATH_PATTERN.finditer(masked):
        spans.append(match.span())

    return sorted(spans)


def in_spans(index: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= index < end for start, end in spans)
