from __future__ import annotations

import pytest

from pinyin_ruby.tokens import PinyinVariant

_READINGS = {
    "你": [("nǐ", "ㄋㄧ")],
    "好": [("hǎo", "ㄏㄠ"), ("hào", "ㄏㄠ")],
    "世": [("shì", "ㄕ")],
    "界": [("jiè", "ㄐㄧㄝ")],
    "行": [("xíng", "ㄒㄧㄥ"), ("háng", "ㄏㄤ")],
    "吗": [("ma", "ㄇㄚ")],
}


def fake_lookup(char: str) -> list[PinyinVariant]:
    """Deterministic stand-in for the pypinyin lookup."""
    return [PinyinVariant(pinyin=p, zhuyin=z) for p, z in _READINGS.get(char, [])]


@pytest.fixture
def lookup():
    return fake_lookup


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.json"
