"""Emphasis spacing pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from .blocks import is_protected_line
from .config import SpacingConfig, validate_config
from .exceptions import ProcessFileError
from .filesystem import safe_read
from .markers import fix_bold_spacing, fix_italic_spacing, remove_internal_spaces
from .models import BlockState, FileResult
from .protector import protect_line, restore_line

logger = logging.getLogger(__name__)


def process_line(line: str, config: SpacingConfig) -> str:
    """Run the enabled transformations over a single line.

    Protected regions are swapped for placeholders first, then internal space
    removal, bold spacing and italic spacing run in that order, each seeing the
    previous stage's output. Placeholders are restored last.

    Args:
        line: Line without its newline.
        config: Spacing options.

    Returns:
        str: The transformed line.

    Examples:
        process_line("中文**  加粗 **中文", SpacingConfig())  # "中文 **加粗** 中文"
    """
    protected = protect_line(line, config)
    text = protected.text

    if config.remove_internal_bold_spaces:
        text = remove_internal_spaces(text)

    if config.space_between_chinese_and_bold or config.space_between_english_and_bold:
        text = fix_bold_spacing(text, config)

    if config.space_between_chinese_and_italic:
        text = fix_italic_spacing(text, config)

    return restore_line(text, protected.regions)


def process_text(text: str, config: SpacingConfig | None = None) -> str:
    """Normalize whitespace around emphasis markers in a Markdown document.

    Lines inside fenced code blocks (when `config.skip_code_blocks` is set) and
    ``$$`` math blocks, along with their delimiter lines, pass through
    unchanged. Every call starts from fresh block state, and applying the
    function to its own output changes nothing.

    Args:
        text: Document content; lines are separated by ``\\n``.
        config: Spacing options. Defaults to a new `SpacingConfig` when omitted.

    Returns:
        str: The transformed document.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        process_text("中文**加粗**中文\\n")  # "中文 **加粗** 中文\\n"
    """
    config = config or SpacingConfig()
    validate_config(config)

    state = BlockState()
    result_lines: list[str] = []
    skipped = changed = 0

    for line in text.split("\n"):
        if is_protected_line(state, line, config):
            result_lines.append(line)
            skipped += 1
            continue

        # A CRLF ending is not line content
        body, ending = (line[:-1], "\r") if line.endswith("\r") else (line, "")
        new_line = process_line(body, config) + ending
        if new_line != line:
            changed += 1
        result_lines.append(new_line)

    logger.debug(
        "Processed %d lines: %d changed, %d left inside blocks",
        len(result_lines),
        changed,
        skipped,
    )
    return "\n".join(result_lines)


def fix_all_spacing(text: str, config: SpacingConfig | None = None) -> str:
    """Apply every enabled spacing stage to `text`."""
    return process_text(text, config)


def fix_bold_spacing_only(text: str, config: SpacingConfig | None = None) -> str:
    # Narrower historically; now runs the same pipeline as `fix_all_spacing`.
    return process_text(text, config)


def process_file(filepath: Path, config: SpacingConfig | None = None) -> FileResult:
    """Read a Markdown file and compute its spacing-fixed content.

    The file itself is not modified.

    Args:
        filepath: Path to the Markdown file.
        config: Spacing options; defaults to a new `SpacingConfig` when omitted.

    Returns:
        FileResult: Original and transformed content.

    Raises:
        ProcessFileError: If the file cannot be read or is not valid UTF-8.

    Examples:
        result = process_file(Path("README.md"))
        result.changed
    """
    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise ProcessFileError(filepath, f"Invalid UTF-8 sequence: {error}") from error
    except IOError as error:
        raise ProcessFileError(filepath, str(error)) from error

    return FileResult(filepath=filepath, original=content, text=process_text(content, config))
