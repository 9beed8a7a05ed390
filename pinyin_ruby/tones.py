"""
Tone conversion between tone-marked pinyin, tone-numbered pinyin and Zhuyin.

Pinyin readings arrive tone-marked (e.g. "nǐ"). Display can show them as-is,
with a trailing tone digit ("ni3"), or as Zhuyin with either a tone
diacritic ("ㄋㄧˇ") or a digit ("ㄋㄧ3"). Tone 5 is the neutral tone.
"""

from .tokens import PinyinVariant
from .zhuyin_map import PINYIN_TO_ZHUYIN

NEUTRAL_TONE = 5

RUBY_MODES = ('pinyin', 'zhuyin')
TONE_DISPLAYS = ('mark', 'number')

# Toned glyph -> (base glyph, tone number)
TONE_NUMBER_MAP = {
    'ā': ('a', 1), 'á': ('a', 2), 'ǎ': ('a', 3), 'à': ('a', 4),
    'ē': ('e', 1), 'é': ('e', 2), 'ě': ('e', 3), 'è': ('e', 4),
    'ī': ('i', 1), 'í': ('i', 2), 'ǐ': ('i', 3), 'ì': ('i', 4),
    'ō': ('o', 1), 'ó': ('o', 2), 'ǒ': ('o', 3), 'ò': ('o', 4),
    'ū': ('u', 1), 'ú': ('u', 2), 'ǔ': ('u', 3), 'ù': ('u', 4),
    'ǖ': ('ü', 1), 'ǘ': ('ü', 2), 'ǚ': ('ü', 3), 'ǜ': ('ü', 4),
    'ń': ('n', 2), 'ň': ('n', 3), 'ǹ': ('n', 4),
}

# Tone 1 carries no mark in Zhuyin; the neutral tone is a dot
ZHUYIN_TONE_MARKS = {1: '', 2: 'ˊ', 3: 'ˇ', 4: 'ˋ', 5: '˙'}


def tone_mark_to_base(char: str) -> tuple[str, int | None]:
    """
    Map a toned glyph to (base, tone). Untoned glyphs return (char, None).

    Capital toned glyphs (Ǐ, Ā) keep their case: Ǐ -> ('I', 3).
    """
    entry = TONE_NUMBER_MAP.get(char)
    if entry is not None:
        return entry
    lower = char.lower()
    if lower != char and lower in TONE_NUMBER_MAP:
        base, tone = TONE_NUMBER_MAP[lower]
        return base.upper(), tone
    return char, None


def remove_tone_marks(pinyin_text: str) -> str:
    """Remove tone marks from pinyin: nǐ -> ni, hǎo -> hao."""
    return ''.join(tone_mark_to_base(char)[0] for char in pinyin_text)


def pinyin_to_tone_number(pinyin_text: str) -> str:
    """
    Convert tone-marked pinyin to a trailing tone digit.

    nǐ -> ni3, māo -> mao1, ma -> ma5. When several toned glyphs occur the
    last one wins.
    """
    if not pinyin_text:
        return pinyin_text
    tone = NEUTRAL_TONE
    base = []
    for char in pinyin_text:
        replacement, char_tone = tone_mark_to_base(char)
        if char_tone is not None:
            tone = char_tone
        base.append(replacement)
    return ''.join(base) + str(tone)


def tone_of(pinyin_text: str) -> int:
    """Tone (1-5) of the first toned glyph in the pinyin, 5 if none."""
    for char in pinyin_text:
        _, tone = tone_mark_to_base(char)
        if tone is not None:
            return tone
    return NEUTRAL_TONE


def pinyin_to_zhuyin_base(pinyin_text: str, dictionary=None) -> str:
    """
    Look up the untoned Zhuyin for a pinyin syllable: nǐ -> ㄋㄧ.

    Falls back to the lower-cased, tone-stripped pinyin when the syllable is
    not in the dictionary.
    """
    if not pinyin_text:
        return ''
    if dictionary is None:
        dictionary = PINYIN_TO_ZHUYIN
    base_pinyin = remove_tone_marks(pinyin_text).lower()
    return dictionary.get(base_pinyin, base_pinyin)


def apply_tone_to_zhuyin(zhuyin_text: str, pinyin_text: str, tone_display: str) -> str:
    """
    Append the tone of pinyin_text to a Zhuyin base.

    'mark' appends the Zhuyin diacritic (nothing for tone 1), 'number'
    appends the digit.
    """
    if tone_display not in TONE_DISPLAYS:
        raise ValueError(f'Unknown tone display: {tone_display!r}')
    if not zhuyin_text:
        return zhuyin_text
    tone = tone_of(pinyin_text)
    if tone_display == 'number':
        return f'{zhuyin_text}{tone}'
    return zhuyin_text + ZHUYIN_TONE_MARKS[tone]


def format_reading(variant: PinyinVariant, mode: str = 'pinyin', tone_display: str = 'mark') -> str:
    """Ruby text for a variant in the given ruby mode and tone display."""
    if mode == 'zhuyin':
        return apply_tone_to_zhuyin(variant.zhuyin, variant.pinyin, tone_display)
    if mode != 'pinyin':
        raise ValueError(f'Unknown ruby mode: {mode!r}')
    if tone_display == 'number':
        return pinyin_to_tone_number(variant.pinyin)
    return variant.pinyin
