from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from emphasis_spacing.config import ConfigError, SpacingConfig
from emphasis_spacing.exceptions import ProcessFileError
from emphasis_spacing.processor import (
    fix_all_spacing,
    fix_bold_spacing_only,
    process_file,
    process_line,
    process_text,
)


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("中文**加粗**中文", "中文 **加粗** 中文"),
        ("**加粗内容**", "**加粗内容**"),
        ("Word**Bold**Word", "Word**Bold**Word"),
        ("**  Content  **", "**Content**"),
        ("*  Content  *", "*Content*"),
        ("* List Item", "* List Item"),
        ("  * List Item", "  * List Item"),
        ("* **Bold Item**", "* **Bold Item**"),
        ("* **  Bold Item  **", "* **Bold Item**"),
        ("中文***粗斜***中文", "中文 ***粗斜*** 中文"),
        ("中文*斜体*中文", "中文 *斜体* 中文"),
        ("Text `code ** bold ` Text", "Text `code ** bold ` Text"),
        ("中文`code**不处理**`中文", "中文`code**不处理**`中文"),
        ("中文$a**b**c$中文", "中文$a**b**c$中文"),
        ("中文`code`**加粗**", "中文`code`**加粗**"),
        ("中文**  加粗 **中文", "中文 **加粗** 中文"),
        ("* 列表**项目**结束", "* 列表 **项目** 结束"),
        ("中文**未闭合", "中文 **未闭合"),
        ("", ""),
    ],
)
def test_process_line_defaults(line: str, expected: str):
    assert process_line(line, SpacingConfig()) == expected


def test_list_bullet_survives_stray_asterisks():
    assert process_text("* a *b* *c") == "* a *b* *c"
    # A lone star opens a span that never closes; its trimmed space stays trimmed
    assert process_text("* 5 * 3 = 15") == "* 5 *3 = 15"
    assert process_text("* 中文 * 中文") == "* 中文 *中文"


@pytest.mark.parametrize("document", ["x* * ", "中** **中", "** *a* b**", "a*\t*b*"])
def test_whitespace_between_markers_is_stable(document: str):
    once = process_text(document)

    assert process_text(once) == once


def test_english_bold_option():
    config = SpacingConfig(space_between_english_and_bold=True)

    assert process_text("Word**Bold**Word", config) == "Word **Bold** Word"


def test_internal_spaces_kept_when_removal_disabled():
    config = SpacingConfig(remove_internal_bold_spaces=False)

    assert process_text("**  a  **", config) == "**  a  **"


def test_inline_code_rewritten_when_protection_disabled():
    line = "`中**粗**中`"

    assert process_text(line, SpacingConfig()) == line
    assert process_text(line, SpacingConfig(skip_inline_code=False)) == "`中 **粗** 中`"


def test_spacing_stages_all_disabled_only_trims():
    config = SpacingConfig(
        space_between_chinese_and_bold=False,
        space_between_chinese_and_italic=False,
    )

    assert process_text("中文** 加粗 **中文*斜体*", config) == "中文**加粗**中文*斜体*"


def test_process_text_skips_blocks():
    document = _dedent(
        """
        # 标题

        中文**加粗**中文

        ```python
        x = "中文**不变**中文"
        ```

        $$
        a**b**c中文**d**
        $$

        $$ 中文**e**中文 $$

        * 列表**项目**结束
        """
    )
    expected = _dedent(
        """
        # 标题

        中文 **加粗** 中文

        ```python
        x = "中文**不变**中文"
        ```

        $$
        a**b**c中文**d**
        $$

        $$ 中文**e**中文 $$

        * 列表 **项目** 结束
        """
    )

    assert process_text(document) == expected


def test_process_text_rewrites_code_when_fences_not_skipped():
    document = "```\n中文**加粗**中文\n```"

    result = process_text(document, SpacingConfig(skip_code_blocks=False))

    assert result == "```\n中文 **加粗** 中文\n```"


def test_unterminated_fence_protects_rest_of_document():
    document = "```\n中文**加粗**中文\n中文**加粗**中文"

    assert process_text(document) == document


def test_process_text_preserves_line_endings():
    assert process_text("中文**加粗**中文\n") == "中文 **加粗** 中文\n"
    assert process_text("中文**加粗**中文\r\n**a**") == "中文 **加粗** 中文\r\n**a**"
    assert process_text("\n\n") == "\n\n"


def test_process_text_state_is_fresh_per_call():
    process_text("```\nunterminated")

    assert process_text("中文**加粗**中文") == "中文 **加粗** 中文"


@pytest.mark.parametrize(
    "document",
    [
        "中文**加粗**中文",
        "* **  Bold Item  **",
        "中文*  斜体 *中文 and **  x **中",
        "Word**Bold**Word 中文***粗斜***中文",
    ],
)
def test_process_text_is_idempotent(document: str):
    config = SpacingConfig(space_between_english_and_bold=True)
    once = process_text(document, config)

    assert process_text(once, config) == once


def test_process_text_rejects_invalid_config():
    with pytest.raises(ConfigError):
        process_text("text", SpacingConfig(skip_code_blocks="yes"))  # type: ignore[arg-type]


def test_host_commands_share_the_pipeline():
    document = "中文**加粗**中文*斜体*中文"
    expected = "中文 **加粗** 中文 *斜体* 中文"

    assert fix_all_spacing(document) == expected
    assert fix_bold_spacing_only(document) == expected


def test_process_file_reports_change(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("中文**加粗**中文\n", encoding="utf-8")

    result = process_file(target)

    assert result.changed is True
    assert result.original == "中文**加粗**中文\n"
    assert result.text == "中文 **加粗** 中文\n"
    assert target.read_text(encoding="utf-8") == "中文**加粗**中文\n"


def test_process_file_keeps_crlf(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes("中文**加粗**中文\r\n".encode("utf-8"))

    result = process_file(target)

    assert result.text == "中文 **加粗** 中文\r\n"


def test_process_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.md"
    target.write_bytes(b"\xff\xfe**bold**\n")

    with pytest.raises(ProcessFileError, match="Invalid UTF-8"):
        process_file(target)


def test_process_file_missing(tmp_path: Path):
    with pytest.raises(ProcessFileError):
        process_file(tmp_path / "missing.md")
