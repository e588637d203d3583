from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from emphasis_spacing.config import SpacingConfig
from emphasis_spacing.hints import find_spacing_hints
from emphasis_spacing.processor import process_text

PLAIN_ALPHABET = "中文字测试abcXYZ123 ，。"
WORD_ALPHABET = "中文字测试abcXYZ123"

plain_strategy = st.text(alphabet=PLAIN_ALPHABET, min_size=1, max_size=12)
word_strategy = st.text(alphabet=WORD_ALPHABET, min_size=1, max_size=8)
span_strategy = st.builds(
    lambda marker, pad_left, word, pad_right: f"{marker}{pad_left}{word}{pad_right}{marker}",
    st.sampled_from(["*", "**", "***"]),
    st.sampled_from(["", " ", "  "]),
    word_strategy,
    st.sampled_from(["", " ", "  "]),
)
config_strategy = st.builds(
    SpacingConfig,
    remove_internal_bold_spaces=st.booleans(),
    space_between_chinese_and_bold=st.booleans(),
    space_between_english_and_bold=st.booleans(),
    space_between_chinese_and_italic=st.booleans(),
)


@st.composite
def emphasis_lines(draw) -> str:
    """A line that starts with plain text and alternates with emphasis spans."""
    parts = [draw(plain_strategy)]
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        parts.append(draw(span_strategy))
        parts.append(draw(plain_strategy))
    return "".join(parts)


@given(st.lists(emphasis_lines(), min_size=1, max_size=5), config_strategy)
def test_process_text_is_idempotent(lines: list[str], config: SpacingConfig):
    """Property: a second pass over fixed output changes nothing."""
    document = "\n".join(lines)
    once = process_text(document, config)

    assert process_text(once, config) == once


@given(st.text(alphabet="中文ab *`$\t", max_size=24))
def test_process_text_is_idempotent_on_arbitrary_lines(line: str):
    once = process_text(line)

    assert process_text(once) == once


@given(st.text().filter(lambda text: "*" not in text))
def test_text_without_markers_is_untouched(text: str):
    assert process_text(text) == text


@given(
    st.text(alphabet=PLAIN_ALPHABET + "*", max_size=12),
    st.text(alphabet=WORD_ALPHABET + "* $", min_size=1, max_size=12),
    st.text(alphabet=PLAIN_ALPHABET + "*", max_size=12),
)
def test_inline_code_is_preserved(prefix: str, inner: str, suffix: str):
    code = f"`{inner}`"

    assert code in process_text(f"{prefix}{code}{suffix}")


@given(st.lists(st.text(alphabet=PLAIN_ALPHABET + "*", max_size=16), max_size=6))
def test_fenced_code_is_opaque(body: list[str]):
    document = "\n".join(["```", *body, "```"])

    assert process_text(document) == document


@given(st.text(), config_strategy)
def test_process_text_is_deterministic(text: str, config: SpacingConfig):
    assert process_text(text, config) == process_text(text, config)


@given(st.text(alphabet=PLAIN_ALPHABET + "*`$\n", max_size=64))
def test_hints_point_at_markers(text: str):
    hints = find_spacing_hints(text)

    for hint in hints:
        assert 0 <= hint.offset <= len(text)
        assert hint.span_start <= hint.span_end
        assert text[hint.span_start] == "*"
