import pytest

from emphasis_spacing.config import ConfigError, SpacingConfig
from emphasis_spacing.hints import find_spacing_hints
from emphasis_spacing.models import HintSide
from emphasis_spacing.processor import process_text


def _offsets(hints):
    return [hint.offset for hint in hints]


def test_bold_hints_on_both_sides():
    hints = find_spacing_hints("中文**加粗**中文")

    assert _offsets(hints) == [2, 8]
    assert [hint.side for hint in hints] == [HintSide.BEFORE, HintSide.AFTER]
    assert {hint.marker for hint in hints} == {"**"}
    assert {(hint.span_start, hint.span_end) for hint in hints} == {(2, 8)}


def test_italic_hints():
    hints = find_spacing_hints("中文*斜体*中文")

    assert _offsets(hints) == [2, 6]
    assert {hint.marker for hint in hints} == {"*"}


def test_hints_cover_punctuation_the_rewrite_leaves_alone():
    text = "“引用”**加粗**"

    hints = find_spacing_hints(text)

    assert _offsets(hints) == [4]
    assert hints[0].side is HintSide.BEFORE
    assert process_text(text) == text


def test_english_hints_follow_option():
    assert find_spacing_hints("Word**Bold**Word") == []

    hints = find_spacing_hints("Word**Bold**Word", SpacingConfig(space_between_english_and_bold=True))

    assert _offsets(hints) == [4, 12]


def test_hints_report_line_and_column():
    hints = find_spacing_hints("a\n中**粗**")

    assert len(hints) == 1
    assert hints[0].offset == 3
    assert hints[0].line == 1
    assert hints[0].column == 1


def test_unterminated_span_keeps_opening_hint():
    hints = find_spacing_hints("中文**加粗")

    assert _offsets(hints) == [2]
    assert (hints[0].span_start, hints[0].span_end) == (2, 4)


@pytest.mark.parametrize(
    "text",
    [
        "```\n中文**加粗**中文\n```",
        "$$\n中文**加粗**中文\n$$",
        "`中`**粗**",
        "$中$**粗**",
        "**加粗内容**",
        "",
        "   ",
    ],
)
def test_no_hints_in_protected_or_clean_text(text: str):
    assert find_spacing_hints(text) == []


def test_hints_disabled_with_options():
    config = SpacingConfig(
        space_between_chinese_and_bold=False,
        space_between_chinese_and_italic=False,
    )

    assert find_spacing_hints("中文**加粗**中文*斜体*中文", config) == []


@pytest.mark.parametrize(("cursor", "expected"), [(5, []), (8, []), (2, []), (9, [2, 8]), (0, [2, 8])])
def test_hints_suppressed_under_cursor(cursor: int, expected: list[int]):
    hints = find_spacing_hints("中文**加粗**中文", selections=[(cursor, cursor)])

    assert _offsets(hints) == expected


def test_selection_only_suppresses_overlapping_spans():
    text = "中**甲**中 中**乙**中"

    hints = find_spacing_hints(text, selections=[(12, 8)])

    assert _offsets(hints) == [1, 6]


def test_find_spacing_hints_rejects_invalid_config():
    with pytest.raises(ConfigError):
        find_spacing_hints("text", SpacingConfig(skip_inline_code=1))  # type: ignore[arg-type]
