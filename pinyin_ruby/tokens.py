"""
Ruby token data model and polyphonic variant selection.

A conversion produces a sequence of RubyToken values: one token per Chinese
character (carrying one or more pronunciations) and one token per run of
non-Chinese text (carrying none). Tokens are immutable; changing the
displayed reading of a character produces a new sequence.
"""

from dataclasses import dataclass, field, replace
from typing import Sequence


@dataclass(frozen=True)
class PinyinVariant:
    """One reading of a character: tone-marked pinyin plus untoned Zhuyin."""
    pinyin: str
    zhuyin: str


@dataclass(frozen=True)
class RubyToken:
    """
    A Chinese character with its readings, or a run of non-Chinese text.

    variants is ordered as the phonetic lookup returned it; the first entry
    is the default reading. Unannotated tokens have no variants.
    """
    text: str
    variants: tuple[PinyinVariant, ...] = field(default_factory=tuple)
    active_variant_index: int = 0

    @property
    def is_ruby(self) -> bool:
        return bool(self.variants)

    @property
    def is_polyphonic(self) -> bool:
        return len(self.variants) > 1

    @property
    def active_variant(self) -> PinyinVariant | None:
        if not self.variants:
            return None
        return self.variants[self.active_variant_index]

    @property
    def active_pinyin(self) -> str:
        variant = self.active_variant
        return variant.pinyin if variant else ''

    @property
    def active_zhuyin(self) -> str:
        variant = self.active_variant
        return variant.zhuyin if variant else ''


def tokens_text(tokens: Sequence[RubyToken]) -> str:
    """Join token texts back into the original input."""
    return ''.join(token.text for token in tokens)


def select_variant(
    tokens: Sequence[RubyToken],
    token_index: int,
    variant_index: int,
) -> list[RubyToken]:
    """
    Return a new token list with one token's active reading changed.

    Out-of-range indices leave the sequence unchanged; the picker UI only
    ever offers valid choices.
    """
    if not 0 <= token_index < len(tokens):
        return list(tokens)
    token = tokens[token_index]
    if not 0 <= variant_index < len(token.variants):
        return list(tokens)
    if token.active_variant_index == variant_index:
        return list(tokens)

    updated = list(tokens)
    updated[token_index] = replace(token, active_variant_index=variant_index)
    return updated
