"""
Reader configuration.

Defaults can be overridden with environment variables:
  PINYIN_RUBY_MODE          pinyin | zhuyin
  PINYIN_RUBY_TONE_DISPLAY  mark | number
  PINYIN_RUBY_HISTORY       path of the history JSON file
  PINYIN_RUBY_ZHUYIN_MAP    JSON file with extra pinyin -> Zhuyin entries
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .history import DEFAULT_HISTORY_PATH, MAX_HISTORY_ITEMS
from .tones import RUBY_MODES, TONE_DISPLAYS


class ConfigError(ValueError):
    """Raised when a configuration value is not one of the allowed choices."""
    pass


@dataclass
class ReaderConfig:
    """Display and storage options shared by the CLI and the web app."""
    mode: str = 'pinyin'               # pinyin, zhuyin
    tone_display: str = 'mark'         # mark, number
    history_path: Path = field(default_factory=lambda: DEFAULT_HISTORY_PATH)
    max_history_items: int = MAX_HISTORY_ITEMS
    zhuyin_map_path: Path | None = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.mode not in RUBY_MODES:
            raise ConfigError(f'Unknown ruby mode {self.mode!r}, expected one of {RUBY_MODES}')
        if self.tone_display not in TONE_DISPLAYS:
            raise ConfigError(
                f'Unknown tone display {self.tone_display!r}, expected one of {TONE_DISPLAYS}'
            )
        if self.max_history_items < 1:
            raise ConfigError('max_history_items must be at least 1')

    @classmethod
    def from_env(cls, environ=None) -> 'ReaderConfig':
        if environ is None:
            environ = os.environ
        zhuyin_map = environ.get('PINYIN_RUBY_ZHUYIN_MAP')
        return cls(
            mode=environ.get('PINYIN_RUBY_MODE', 'pinyin'),
            tone_display=environ.get('PINYIN_RUBY_TONE_DISPLAY', 'mark'),
            history_path=Path(environ.get('PINYIN_RUBY_HISTORY', DEFAULT_HISTORY_PATH)),
            zhuyin_map_path=Path(zhuyin_map) if zhuyin_map else None,
        )
