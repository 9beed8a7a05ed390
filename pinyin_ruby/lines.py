"""
Split a ruby token sequence into display lines.

Line breaks only ever occur inside plain (non-Chinese) tokens. Such a token
is split on its breaks, and each non-empty piece is kept as a line item
that still points back at the index of the token it came from, so a
selection index in token coordinates can be matched against line items.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Sequence

from .tokens import RubyToken

_LINE_BREAK = re.compile(r'\r\n|\n')


@dataclass(frozen=True)
class LineItem:
    index: int
    token: RubyToken


@dataclass
class RenderLine:
    items: list[LineItem] = field(default_factory=list)
    has_line_break_before: bool = False

    @property
    def text(self) -> str:
        return ''.join(item.token.text for item in self.items)


def _has_line_break(text: str) -> bool:
    return '\n' in text or '\r' in text


def segment_lines(tokens: Sequence[RubyToken]) -> list[RenderLine]:
    """Group tokens into lines, splitting plain tokens at their line breaks."""
    lines = []
    current = RenderLine()

    for i, token in enumerate(tokens):
        if token.is_ruby or not _has_line_break(token.text):
            current.items.append(LineItem(i, token))
            continue

        parts = _LINE_BREAK.split(token.text)
        for j, part in enumerate(parts):
            if part:
                current.items.append(LineItem(i, replace(token, text=part)))
            # Start a new line after each break, but not after the last piece
            if j < len(parts) - 1:
                lines.append(current)
                current = RenderLine(has_line_break_before=True)

    if current.items:
        lines.append(current)
    return lines


def lines_to_text(lines: Sequence[RenderLine]) -> str:
    """Join lines back into text with a newline before each broken line."""
    chunks = []
    for line in lines:
        if line.has_line_break_before:
            chunks.append('\n')
        chunks.append(line.text)
    return ''.join(chunks)
