"""
Conversion history, persisted as a JSON file.

Entries are kept newest first and capped at MAX_HISTORY_ITEMS. A text that
is already anywhere in the history (same SHA-256 of the trimmed text) is
not added again; the id of the existing entry is reported instead.

The in-memory list is authoritative: read and write failures are logged
and otherwise ignored.
"""

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_HISTORY_ITEMS = 20
DEFAULT_HISTORY_PATH = Path.home() / '.pinyin_ruby' / 'history.json'


@dataclass(frozen=True)
class ConversionItem:
    id: int
    input_text: str
    timestamp: datetime
    hash: str

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'input_text': self.input_text,
            'timestamp': self.timestamp.isoformat(),
            'hash': self.hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ConversionItem':
        return cls(
            id=int(data['id']),
            input_text=str(data['input_text']),
            timestamp=datetime.fromisoformat(data['timestamp']),
            hash=str(data['hash']),
        )


@dataclass(frozen=True)
class AddToHistoryResult:
    history: list[ConversionItem]
    duplicate_id: int | None = None


def text_hash(text: str) -> str:
    """SHA-256 hex digest of the trimmed text."""
    return hashlib.sha256(text.strip().encode('utf-8')).hexdigest()


def load_history(path: str | Path = DEFAULT_HISTORY_PATH) -> list[ConversionItem]:
    """Load history from disk. Missing or unreadable files give an empty list."""
    path = Path(path)
    if not path.exists():
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [ConversionItem.from_dict(entry) for entry in data]
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f'Could not load history from {path}: {e}')
        return []


def save_history(items: list[ConversionItem], path: str | Path = DEFAULT_HISTORY_PATH) -> None:
    """Write history to disk, creating the parent directory if needed."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([item.to_dict() for item in items], f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.warning(f'Could not save history to {path}: {e}')


def add_to_history(
    items: list[ConversionItem],
    input_text: str,
    path: str | Path = DEFAULT_HISTORY_PATH,
    max_items: int = MAX_HISTORY_ITEMS,
    now: datetime | None = None,
) -> AddToHistoryResult:
    """
    Prepend a new entry for input_text.

    Blank text is ignored. Duplicates leave the list unchanged and report the
    existing entry's id. Ids continue from the highest existing id.
    """
    trimmed = input_text.strip()
    if not trimmed:
        return AddToHistoryResult(history=items)

    digest = text_hash(trimmed)
    for item in items:
        if item.hash == digest:
            logger.debug(f'Skipping duplicate history entry (id {item.id})')
            return AddToHistoryResult(history=items, duplicate_id=item.id)

    new_item = ConversionItem(
        id=max((item.id for item in items), default=0) + 1,
        input_text=trimmed,
        timestamp=now or datetime.now(timezone.utc),
        hash=digest,
    )
    history = [new_item, *items][:max_items]
    save_history(history, path)
    return AddToHistoryResult(history=history)


def remove_from_history(
    items: list[ConversionItem],
    item_id: int,
    path: str | Path = DEFAULT_HISTORY_PATH,
) -> list[ConversionItem]:
    history = [item for item in items if item.id != item_id]
    save_history(history, path)
    return history


def clear_history(path: str | Path = DEFAULT_HISTORY_PATH) -> list[ConversionItem]:
    save_history([], path)
    return []
