"""Pinyin / Zhuyin ruby annotation for Chinese text."""

from .chinese_processing import (
    is_chinese_char,
    contains_chinese,
    lookup_variants,
    tokenize,
    convert_text,
)
from .tokens import (
    PinyinVariant,
    RubyToken,
    select_variant,
)
from .tones import (
    pinyin_to_tone_number,
    tone_of,
    remove_tone_marks,
    pinyin_to_zhuyin_base,
    apply_tone_to_zhuyin,
    format_reading,
)
from .lines import (
    LineItem,
    RenderLine,
    segment_lines,
)
from .navigation import (
    NO_SELECTION,
    is_phrase_start,
    move_selection,
    move_to_phrase,
    handle_key,
)
from .session import ReaderSession

__all__ = [
    'is_chinese_char',
    'contains_chinese',
    'lookup_variants',
    'tokenize',
    'convert_text',
    'PinyinVariant',
    'RubyToken',
    'select_variant',
    'pinyin_to_tone_number',
    'tone_of',
    'remove_tone_marks',
    'pinyin_to_zhuyin_base',
    'apply_tone_to_zhuyin',
    'format_reading',
    'LineItem',
    'RenderLine',
    'segment_lines',
    'NO_SELECTION',
    'is_phrase_start',
    'move_selection',
    'move_to_phrase',
    'handle_key',
    'ReaderSession',
]
