"""Character classification for spacing decisions."""

from __future__ import annotations

from .config import SpacingConfig
from .constants import ALPHANUMERIC_PATTERN, CJK_PATTERN, PROBLEMATIC_BOUNDARY_PATTERN


def is_cjk(char: str | None) -> bool:
    """Return whether `char` is a CJK unified ideograph.

    Only the first code point is inspected; empty or missing input is never CJK.

    Examples:
        is_cjk("中")  # True
        is_cjk("，")  # False
    """
    return bool(char) and CJK_PATTERN.match(char) is not None


def is_alphanumeric(char: str | None) -> bool:
    """Return whether `char` is an ASCII letter or digit."""
    return bool(char) and ALPHANUMERIC_PATTERN.match(char) is not None


def is_problematic_boundary(char: str | None) -> bool:
    """Return whether `char` keeps a renderer from seeing an emphasis boundary.

    Broader than `is_cjk`: also covers CJK punctuation, fullwidth forms,
    general punctuation (smart quotes included) and Hangul. Used by the
    spacing hints only; the rewriting passes stick to `is_cjk`.

    Examples:
        is_problematic_boundary("“")  # True
        is_problematic_boundary("한")  # True
        is_problematic_boundary("a")  # False
    """
    return bool(char) and PROBLEMATIC_BOUNDARY_PATTERN.match(char) is not None


def should_add_space(
    char: str | None, config: SpacingConfig, exclude_newline: bool = False
) -> bool:
    """Decide whether a space belongs between a bold marker and `char`.

    Args:
        char: Neighbouring character, or an empty string at a line edge.
        config: Spacing options.
        exclude_newline: Also refuse a newline neighbour.

    Returns:
        bool: The Chinese-bold option for CJK neighbours, the English-bold
            option for ASCII alphanumerics, otherwise False.
    """
    if not char or char in " \t":
        return False
    if exclude_newline and char == "\n":
        return False
    if is_cjk(char):
        return config.space_between_chinese_and_bold
    if is_alphanumeric(char):
        return config.space_between_english_and_bold
    return False


def should_add_space_before(char: str | None, config: SpacingConfig) -> bool:
    return should_add_space(char, config)


def should_add_space_after(char: str | None, config: SpacingConfig) -> bool:
    return should_add_space(char, config, exclude_newline=True)
