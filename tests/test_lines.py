from __future__ import annotations

import re

import pytest

from pinyin_ruby.chinese_processing import tokenize
from pinyin_ruby.lines import lines_to_text, segment_lines
from pinyin_ruby.tokens import tokens_text


def _line_texts(lines) -> list[str]:
    return [line.text for line in lines]


def test_single_line_keeps_every_token(lookup) -> None:
    tokens = tokenize("你好，世界！", lookup)
    lines = segment_lines(tokens)
    assert len(lines) == 1
    assert [item.index for item in lines[0].items] == [0, 1, 2, 3, 4, 5]
    assert lines[0].has_line_break_before is False


def test_newline_between_characters(lookup) -> None:
    lines = segment_lines(tokenize("你好\n世界", lookup))
    assert _line_texts(lines) == ["你好", "世界"]
    assert [item.token.is_ruby for item in lines[0].items] == [True, True]
    assert [item.token.is_ruby for item in lines[1].items] == [True, True]
    assert [item.index for item in lines[1].items] == [3, 4]
    assert lines[0].has_line_break_before is False
    assert lines[1].has_line_break_before is True


def test_run_spanning_lines_shares_source_index(lookup) -> None:
    tokens = tokenize("你 end\r\nstart 好", lookup)
    lines = segment_lines(tokens)
    assert _line_texts(lines) == ["你 end", "start 好"]
    assert (lines[0].items[1].index, lines[0].items[1].token.text) == (1, " end")
    assert (lines[1].items[0].index, lines[1].items[0].token.text) == (1, "start ")


def test_blank_lines_are_kept(lookup) -> None:
    lines = segment_lines(tokenize("你\n\n好", lookup))
    assert _line_texts(lines) == ["你", "", "好"]
    assert [line.has_line_break_before for line in lines] == [False, True, True]


def test_leading_break_gives_empty_first_line(lookup) -> None:
    lines = segment_lines(tokenize("\n你", lookup))
    assert _line_texts(lines) == ["", "你"]
    assert lines[0].has_line_break_before is False


def test_trailing_break_does_not_add_empty_line(lookup) -> None:
    lines = segment_lines(tokenize("你好\n", lookup))
    assert _line_texts(lines) == ["你好"]


def test_lone_carriage_return_stays_in_line(lookup) -> None:
    lines = segment_lines(tokenize("你\r好", lookup))
    assert len(lines) == 1
    assert lines[0].text == "你\r好"


def test_empty_sequence() -> None:
    assert segment_lines([]) == []


@pytest.mark.parametrize(
    "text",
    ["你好，世界！", "第一行\n第二行\r\n第三行", "abc\n\n你\nxyz", "你好\n", "\n\n"],
)
def test_items_reconstruct_text_without_breaks(lookup, text: str) -> None:
    tokens = tokenize(text, lookup)
    lines = segment_lines(tokens)
    joined = "".join(item.token.text for line in lines for item in line.items)
    assert joined == re.sub(r"\r\n|\n", "", tokens_text(tokens))


def test_lines_to_text_restores_inner_breaks(lookup) -> None:
    text = "你好\n世界\n\n再见"
    assert lines_to_text(segment_lines(tokenize(text, lookup))) == text
