from __future__ import annotations

import pytest

from pinyin_ruby.chinese_processing import tokenize
from pinyin_ruby.tokens import PinyinVariant, RubyToken, select_variant


def test_plain_token_has_no_readings() -> None:
    token = RubyToken(text="abc")
    assert not token.is_ruby
    assert token.active_variant is None
    assert token.active_pinyin == ""
    assert token.active_zhuyin == ""


def test_active_accessors_follow_index() -> None:
    token = RubyToken(
        text="行",
        variants=(PinyinVariant("xíng", "ㄒㄧㄥ"), PinyinVariant("háng", "ㄏㄤ")),
        active_variant_index=1,
    )
    assert token.is_polyphonic
    assert token.active_pinyin == "háng"
    assert token.active_zhuyin == "ㄏㄤ"


def test_select_variant_changes_only_one_token(lookup) -> None:
    tokens = tokenize("行好", lookup)
    updated = select_variant(tokens, 0, 1)
    assert updated[0].active_pinyin == "háng"
    assert updated[0].text == "行"
    assert updated[0].variants == tokens[0].variants
    assert updated[1] == tokens[1]
    # The input sequence is not modified
    assert tokens[0].active_variant_index == 0


def test_selecting_active_variant_is_a_no_op(lookup) -> None:
    tokens = tokenize("行好", lookup)
    assert select_variant(tokens, 0, 0) == tokens
    changed = select_variant(tokens, 0, 1)
    assert select_variant(changed, 0, 1) == changed


@pytest.mark.parametrize(
    "token_index, variant_index",
    [(0, 2), (0, -1), (-1, 0), (5, 0), (1, 0)],
)
def test_out_of_range_selection_is_a_no_op(lookup, token_index: int, variant_index: int) -> None:
    # Index 1 is the plain "," token, which has no variants at all
    tokens = tokenize("行,好", lookup)
    assert select_variant(tokens, token_index, variant_index) == tokens
