"""
Chinese text processing: character classification and ruby tokenization.

Uses pypinyin for per-character readings. Polyphonic characters get every
reading pypinyin knows (heteronym=True), the most common one first.

Text is split into one token per Chinese character and one token per
maximal run of non-Chinese text, so joining the token texts always gives
back the input.
"""

import logging
from functools import lru_cache
from typing import Callable

from pypinyin import pinyin, Style

from .tokens import PinyinVariant, RubyToken
from .tones import pinyin_to_zhuyin_base

logger = logging.getLogger(__name__)

# CJK Unified Ideographs as covered by the reading dictionary
CJK_START = 0x4E00
CJK_END = 0x9FBB

EMPTY_VARIANT = PinyinVariant(pinyin='', zhuyin='')

Lookup = Callable[[str], list[PinyinVariant]]


def is_chinese_char(char: str) -> bool:
    """Check if a character is a CJK unified ideograph."""
    if not char:
        return False
    return CJK_START <= ord(char[0]) <= CJK_END


def contains_chinese(text: str) -> bool:
    """Check if a string contains any Chinese characters."""
    return any(is_chinese_char(c) for c in text)


def lookup_variants(char: str, zhuyin_map=None) -> list[PinyinVariant]:
    """
    All readings of a single Chinese character, default reading first.

    Each reading carries the tone-marked pinyin and its untoned Zhuyin.
    Returns an empty list for characters pypinyin does not know.
    """
    if zhuyin_map is None:
        return list(_cached_variants(char))
    return _variants_for(char, zhuyin_map)


@lru_cache(maxsize=8192)
def _cached_variants(char: str) -> tuple[PinyinVariant, ...]:
    return tuple(_variants_for(char, None))


def _variants_for(char: str, zhuyin_map) -> list[PinyinVariant]:
    readings = pinyin(char, style=Style.TONE, heteronym=True, errors='ignore')
    if not readings or not readings[0]:
        return []

    variants = []
    seen = set()
    for reading in readings[0]:
        if not reading or reading in seen:
            continue
        seen.add(reading)
        variants.append(PinyinVariant(
            pinyin=reading,
            zhuyin=pinyin_to_zhuyin_base(reading, zhuyin_map),
        ))
    return variants


def _char_variants(char: str, lookup: Lookup) -> tuple[PinyinVariant, ...]:
    try:
        variants = lookup(char)
    except Exception as e:
        logger.warning(f'Reading lookup failed for {char!r}: {e}')
        variants = None
    if not variants:
        return (EMPTY_VARIANT,)
    return tuple(variants)


def tokenize(text: str, lookup: Lookup | None = None) -> list[RubyToken]:
    """
    Split text into ruby tokens.

    Every Chinese character becomes an annotated token with the readings
    returned by lookup (defaults to pypinyin). Consecutive non-Chinese
    characters, including line breaks, are grouped into one plain token.
    A character without readings gets a single empty reading.
    """
    if lookup is None:
        lookup = lookup_variants

    tokens = []
    i = 0
    while i < len(text):
        char = text[i]
        if is_chinese_char(char):
            tokens.append(RubyToken(text=char, variants=_char_variants(char, lookup)))
            i += 1
            continue

        start = i
        while i < len(text) and not is_chinese_char(text[i]):
            i += 1
        tokens.append(RubyToken(text=text[start:i]))

    return tokens


def convert_text(text: str, lookup: Lookup | None = None) -> list[RubyToken]:
    """Tokenize user input; blank input gives no tokens."""
    if not text or not text.strip():
        return []
    return tokenize(text, lookup)
