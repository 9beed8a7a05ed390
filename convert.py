#!/usr/bin/env python3
"""
Pinyin Ruby Converter

Annotates Chinese text with pinyin or zhuyin readings above each character.

Usage:
    python convert.py "你好，世界！"
    python convert.py -i story.txt --html -o story.html
    python convert.py "你好" --zhuyin --tone-number
    python convert.py --history
"""

import argparse
import logging
import sys
from functools import partial
from pathlib import Path

from pinyin_ruby.chinese_processing import convert_text, lookup_variants
from pinyin_ruby.config import ConfigError, ReaderConfig
from pinyin_ruby.history import add_to_history, clear_history, load_history
from pinyin_ruby.lines import segment_lines
from pinyin_ruby.ruby_html import lines_to_html, render_page, tokens_to_annotated_text
from pinyin_ruby.timefmt import format_time
from pinyin_ruby.zhuyin_map import load_zhuyin_map


def build_parser():
    parser = argparse.ArgumentParser(
        description='Annotate Chinese text with pinyin or zhuyin ruby readings.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python convert.py "你好，世界！"                   # 你(nǐ)好(hǎo)，世(shì)界(jiè)！
  python convert.py "你好" --tone-number            # 你(ni3)好(hao3)
  python convert.py "你好" --zhuyin                 # 你(ㄋㄧˇ)好(ㄏㄠˇ)
  python convert.py -i story.txt --html -o out.html # Standalone HTML page with <ruby>
  python convert.py --history                       # Show recent conversions
  python convert.py --clear-history                 # Forget all conversions
        ''',
    )

    parser.add_argument('text', nargs='?', help='Chinese text to annotate')
    parser.add_argument('-i', '--input', help='Read text from a file (UTF-8)')
    parser.add_argument('-o', '--output', help='Write the result to a file instead of stdout')
    parser.add_argument(
        '--zhuyin',
        action='store_true',
        help='Show zhuyin (bopomofo) instead of pinyin',
    )
    parser.add_argument(
        '--tone-number',
        action='store_true',
        help='Show tones as digits 1-5 instead of marks',
    )
    parser.add_argument(
        '--html',
        action='store_true',
        help='Output an HTML page with <ruby> annotations',
    )

    history_group = parser.add_argument_group('history')
    history_group.add_argument(
        '--no-history',
        action='store_true',
        help='Do not record this conversion in the history',
    )
    history_group.add_argument(
        '--history',
        action='store_true',
        help='List recent conversions and exit',
    )
    history_group.add_argument(
        '--clear-history',
        action='store_true',
        help='Delete all recorded conversions and exit',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging',
    )
    return parser


def _read_input(args, parser):
    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f'Error: Input file not found: {input_path}', file=sys.stderr)
            sys.exit(1)
        return input_path.read_text(encoding='utf-8')
    if args.text is not None:
        return args.text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    parser.error('provide TEXT, --input FILE, or pipe text on stdin')


def _print_history(config):
    items = load_history(config.history_path)
    if not items:
        print('No conversions yet.')
        return
    for item in items:
        preview = item.input_text.replace('\n', ' ')
        if len(preview) > 40:
            preview = preview[:40] + '…'
        print(f'{item.id:>4}  {format_time(item.timestamp):<10}  {preview}')


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
    )

    try:
        config = ReaderConfig.from_env()
        if args.zhuyin:
            config.mode = 'zhuyin'
        if args.tone_number:
            config.tone_display = 'number'
        config.validate()
    except ConfigError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.clear_history:
        clear_history(config.history_path)
        print('History cleared.')
        return
    if args.history:
        _print_history(config)
        return

    text = _read_input(args, parser)

    lookup = None
    if config.zhuyin_map_path:
        lookup = partial(lookup_variants, zhuyin_map=load_zhuyin_map(config.zhuyin_map_path))

    tokens = convert_text(text, lookup)
    if not tokens:
        print('Error: nothing to convert (input is empty)', file=sys.stderr)
        sys.exit(1)

    if not args.no_history:
        add_to_history(
            load_history(config.history_path), text,
            path=config.history_path, max_items=config.max_history_items,
        )

    if args.html:
        body = lines_to_html(segment_lines(tokens), config.mode, config.tone_display)
        result = render_page(body)
    else:
        result = tokens_to_annotated_text(tokens, config.mode, config.tone_display)

    if args.output:
        Path(args.output).write_text(result, encoding='utf-8')
        print(f'Written to: {args.output}')
    else:
        print(result)


if __name__ == '__main__':
    main()
