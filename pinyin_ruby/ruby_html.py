"""
HTML output: <ruby> markup for annotated lines.

Each Chinese character gets its own ruby annotation (mono ruby style) with
<rp> fallbacks for readers that do not support ruby. Plain text is escaped
and left unannotated. Every element carries data-index, which is the
token's position in the source sequence, so a front end can map clicks
and key presses back onto the selection index.
"""

import html
from typing import Sequence

from .lines import RenderLine, segment_lines
from .navigation import NO_SELECTION
from .tokens import RubyToken
from .tones import format_reading

RUBY_CSS = '''
/* Ruby annotation styling for pinyin / zhuyin */
ruby {
    ruby-align: center;
    -webkit-ruby-position: before;
    ruby-position: over;
    cursor: pointer;
}

rt {
    font-size: 0.45em;
    font-style: normal;
    font-weight: normal;
    color: #888;
    ruby-align: center;
    letter-spacing: 0.02em;
}

rp {
    display: none;
}

ruby.selected {
    background: #fde2e0;
    border-radius: 3px;
}

ruby.selected rt {
    color: #e74c3c;
}

ruby.polyphonic rt {
    text-decoration: underline dotted;
}

.ruby-line {
    line-height: 2.2;
    font-family: "Songti SC", "Noto Serif CJK SC", "Source Han Serif SC", serif;
    font-size: 1.4em;
}
'''


def token_to_ruby_html(
    index: int,
    token: RubyToken,
    mode: str = 'pinyin',
    tone_display: str = 'mark',
    selected: bool = False,
) -> str:
    """Render one line item. Plain text becomes an escaped <span>."""
    text = html.escape(token.text)
    if not token.is_ruby:
        return f'<span class="plain-text" data-index="{index}">{text}</span>'

    classes = ['ruby-text']
    if selected:
        classes.append('selected')
    if token.is_polyphonic:
        classes.append('polyphonic')

    reading = html.escape(format_reading(token.active_variant, mode, tone_display))
    return (
        f'<ruby class="{" ".join(classes)}" data-index="{index}">'
        f'{text}<rp>(</rp><rt>{reading}</rt><rp>)</rp></ruby>'
    )


def lines_to_html(
    lines: Sequence[RenderLine],
    mode: str = 'pinyin',
    tone_display: str = 'mark',
    selected_index: int = NO_SELECTION,
) -> str:
    """Render segmented lines, one <div class="ruby-line"> per line."""
    parts = []
    for line in lines:
        if line.has_line_break_before:
            parts.append('<br>')
        items = ''.join(
            token_to_ruby_html(
                item.index, item.token, mode, tone_display,
                selected=item.index == selected_index,
            )
            for item in line.items
        )
        parts.append(f'<div class="ruby-line">{items}</div>')
    return '\n'.join(parts)


def tokens_to_html(
    tokens: Sequence[RubyToken],
    mode: str = 'pinyin',
    tone_display: str = 'mark',
    selected_index: int = NO_SELECTION,
) -> str:
    return lines_to_html(segment_lines(tokens), mode, tone_display, selected_index)


def render_page(body_html: str, title: str = 'Pinyin Ruby') -> str:
    """Wrap rendered lines in a standalone HTML document."""
    return (
        '<!DOCTYPE html>\n'
        '<html lang="zh">\n<head>\n<meta charset="utf-8">\n'
        f'<title>{html.escape(title)}</title>\n'
        f'<style>{RUBY_CSS}</style>\n'
        '</head>\n<body>\n'
        f'{body_html}\n'
        '</body>\n</html>\n'
    )


def tokens_to_annotated_text(
    tokens: Sequence[RubyToken],
    mode: str = 'pinyin',
    tone_display: str = 'mark',
) -> str:
    """
    Plain-text rendering: each character followed by its reading in brackets.

    Example: "你好" -> "你(nǐ)好(hǎo)"
    """
    result = []
    for token in tokens:
        if token.is_ruby:
            reading = format_reading(token.active_variant, mode, tone_display)
            result.append(f'{token.text}({reading})' if reading else token.text)
        else:
            result.append(token.text)
    return ''.join(result)
