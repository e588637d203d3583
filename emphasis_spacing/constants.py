"""Constants used across the emphasis-spacing package."""

from __future__ import annotations

import re

# Block delimiters, matched against stripped lines
CODE_FENCE_PATTERN = re.compile(r"^(?:```|~~~)")
LATEX_FENCE_PATTERN = re.compile(r"^\$\$")
SINGLE_LINE_LATEX_PATTERN = re.compile(r"^\$\$.*\$\$\s*$")
LATEX_FENCE = "$$"

# Protected inline regions
LIST_MARKER_PATTERN = re.compile(r"^\s*\*(?=\s)")
INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")
INLINE_MATH_PATTERN = re.compile(r"(?<!\\)\$(?:\\.|[^$\\])*\$")
SINGLE_STAR_PATTERN = re.compile(r"(?<!\*)\*(?!\*)")

# Placeholder tokens never contain `*`, a backtick or `$`, so neither the
# marker scan nor a later protection pattern can match inside them.
PLACEHOLDER_DELIMITER = "\x00"
LIST_PLACEHOLDER = "LIST"
CODE_PLACEHOLDER = "CODE"
MATH_PLACEHOLDER = "LATEX"

# Emphasis markers
MARKER_CHAR = "*"
MAX_MARKER_WIDTH = 3
INLINE_WHITESPACE = " \t"

# Character classes
CJK_PATTERN = re.compile(r"[\u4e00-\u9fff]")
ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]")
PROBLEMATIC_BOUNDARY_PATTERN = re.compile(
    r"["
    r"\u4e00-\u9fff"  # CJK unified ideographs
    r"\u3400-\u4dbf"  # CJK extension A
    r"\u3000-\u303f"  # CJK symbols and punctuation
    r"\uff00-\uffef"  # halfwidth and fullwidth forms
    r"\u2000-\u206f"  # general punctuation, smart quotes included
    r"\uac00-\ud7af"  # Hangul syllables
    r"\u1100-\u11ff"  # Hangul jamo
    r"\"'"
    r"]"
)

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
