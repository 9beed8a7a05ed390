"""
Reader session state.

A ReaderSession holds everything one reader view shows: the converted
tokens, the selected index and the display options. Sessions are immutable;
every user action returns a new session to replace the old one.
"""

from dataclasses import dataclass, field, replace

from .chinese_processing import Lookup, convert_text
from .lines import segment_lines
from .navigation import NO_SELECTION, handle_key
from .ruby_html import lines_to_html
from .tokens import RubyToken, select_variant
from .tones import RUBY_MODES, TONE_DISPLAYS, format_reading


@dataclass(frozen=True)
class ReaderSession:
    text: str = ''
    tokens: tuple[RubyToken, ...] = field(default_factory=tuple)
    selected_index: int = NO_SELECTION
    mode: str = 'pinyin'
    tone_display: str = 'mark'

    def convert(self, text: str, lookup: Lookup | None = None) -> 'ReaderSession':
        """Convert new text. The selection is cleared."""
        tokens = convert_text(text, lookup)
        return replace(self, text=text, tokens=tuple(tokens), selected_index=NO_SELECTION)

    def select(self, index: int) -> 'ReaderSession':
        """Select a token directly (e.g. by clicking). Plain tokens are ignored."""
        if index == NO_SELECTION:
            return replace(self, selected_index=NO_SELECTION)
        if not 0 <= index < len(self.tokens) or not self.tokens[index].is_ruby:
            return self
        return replace(self, selected_index=index)

    def press_key(self, key: str) -> tuple['ReaderSession', bool]:
        new_index, handled = handle_key(self.tokens, self.selected_index, key)
        if new_index == self.selected_index:
            return self, handled
        return replace(self, selected_index=new_index), handled

    def choose_variant(self, token_index: int, variant_index: int) -> 'ReaderSession':
        tokens = select_variant(self.tokens, token_index, variant_index)
        if tokens == list(self.tokens):
            return self
        return replace(self, tokens=tuple(tokens))

    def with_display(self, mode: str | None = None, tone_display: str | None = None) -> 'ReaderSession':
        mode = mode or self.mode
        tone_display = tone_display or self.tone_display
        if mode not in RUBY_MODES:
            raise ValueError(f'Unknown ruby mode: {mode!r}')
        if tone_display not in TONE_DISPLAYS:
            raise ValueError(f'Unknown tone display: {tone_display!r}')
        return replace(self, mode=mode, tone_display=tone_display)

    def render_html(self) -> str:
        return lines_to_html(
            segment_lines(self.tokens), self.mode, self.tone_display, self.selected_index,
        )

    def to_dict(self) -> dict:
        """JSON-friendly view of the session for the web front end."""
        return {
            'text': self.text,
            'mode': self.mode,
            'tone_display': self.tone_display,
            'selected_index': self.selected_index,
            'html': self.render_html(),
            'tokens': [
                {
                    'text': token.text,
                    'is_ruby': token.is_ruby,
                    'active_variant_index': token.active_variant_index,
                    'variants': [
                        format_reading(v, self.mode, self.tone_display) for v in token.variants
                    ],
                }
                for token in self.tokens
            ],
        }
