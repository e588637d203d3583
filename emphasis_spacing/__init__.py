"""
emphasis-spacing: whitespace normalization around Markdown emphasis markers.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    emphasis-spacing README.md

Library Usage:
    from emphasis_spacing import SpacingConfig, process_text

    fixed = process_text("中文**加粗**中文", SpacingConfig())
    # "中文 **加粗** 中文"
"""

from .classifier import (
    is_alphanumeric,
    is_cjk,
    is_problematic_boundary,
    should_add_space_after,
    should_add_space_before,
)
from .config import ConfigError, SpacingConfig, build_config, config_from_settings, load_config
from .exceptions import ProcessFileError
from .hints import find_spacing_hints
from .markers import fix_bold_spacing, fix_italic_spacing, remove_internal_spaces
from .models import FileResult, HintSide, SpacingHint
from .processor import (
    fix_all_spacing,
    fix_bold_spacing_only,
    process_file,
    process_line,
    process_text,
)
from .protector import protect_line, restore_line

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "process_text",
    "process_line",
    "process_file",
    "fix_all_spacing",
    "fix_bold_spacing_only",
    # Transformation stages
    "remove_internal_spaces",
    "fix_bold_spacing",
    "fix_italic_spacing",
    "protect_line",
    "restore_line",
    # Classification
    "is_cjk",
    "is_alphanumeric",
    "is_problematic_boundary",
    "should_add_space_before",
    "should_add_space_after",
    # Hints
    "find_spacing_hints",
    # Configuration
    "SpacingConfig",
    "build_config",
    "load_config",
    "config_from_settings",
    # Data models
    "FileResult",
    "HintSide",
    "SpacingHint",
    # Exceptions
    "ConfigError",
    "ProcessFileError",
    # Version
    "__version__",
]
