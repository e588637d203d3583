"""Line-level tracking of fenced code and ``$$`` math blocks."""

from __future__ import annotations

import logging

from .config import SpacingConfig
from .constants import (
    CODE_FENCE_PATTERN,
    LATEX_FENCE,
    LATEX_FENCE_PATTERN,
    SINGLE_LINE_LATEX_PATTERN,
)
from .models import BlockState

logger = logging.getLogger(__name__)


def _try_toggle_code_fence(state: BlockState, trimmed: str, config: SpacingConfig) -> bool:
    """Toggle the code block flag on a backtick or tilde fence line.

    The same test opens and closes a block. Fences inside a math block are
    ordinary math content.

    Returns:
        bool: True when the line is a fence.
    """
    if not config.skip_code_blocks or state.in_latex_block:
        return False
    if not CODE_FENCE_PATTERN.match(trimmed):
        return False

    state.in_code_block = not state.in_code_block
    return True


def _try_toggle_latex_block(state: BlockState, trimmed: str) -> bool:
    """Handle a line starting with ``$$``.

    A one-line ``$$ ... $$`` formula is passed through without toggling; a
    bare ``$$`` or an unbalanced opener toggles the math block flag.

    Returns:
        bool: True when the line starts with ``$$``.
    """
    if state.in_code_block:
        return False
    if not LATEX_FENCE_PATTERN.match(trimmed):
        return False

    if trimmed == LATEX_FENCE or not SINGLE_LINE_LATEX_PATTERN.match(trimmed):
        state.in_latex_block = not state.in_latex_block
    return True


def is_protected_line(state: BlockState, line: str, config: SpacingConfig) -> bool:
    """Advance block state over `line` and report whether it must pass through.

    Args:
        state: Block flags for the current document pass; updated in place.
        line: Line being scanned, without its newline.
        config: Spacing options.

    Returns:
        bool: True for fence and ``$$`` delimiter lines and for lines inside a
            code or math block; False for lines eligible for processing.

    Examples:
        state = BlockState()
        is_protected_line(state, "```python", SpacingConfig())  # True
        state.in_code_block  # True
    """
    trimmed = line.strip()

    if _try_toggle_code_fence(state, trimmed, config):
        logger.debug("Code fence, in_code_block=%s", state.in_code_block)
        return True

    if _try_toggle_latex_block(state, trimmed):
        logger.debug("Math fence, in_latex_block=%s", state.in_latex_block)
        return True

    return state.in_code_block or state.in_latex_block
