"""
File-backed record store.

Keeps a learner's records and the word catalog in a single YAML file
(JSON works too, it is valid YAML):

    words:
      1: abandon
      2: resilient
    records:
      - word_id: 1
        total_exposures: 3
        dwell_history: [4.2, 2.1, 1.5]
        ...

The engine itself never touches storage; this adapter exists for the CLI.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter

from vocaplan.domain.models import ReviewRecord
from vocaplan.domain.ports import WordCatalog

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[ReviewRecord])


@dataclass
class RecordStore(WordCatalog):
    records: dict[int, ReviewRecord] = field(default_factory=dict)
    words: dict[int, str] = field(default_factory=dict)

    def lookup(self, word_id: int) -> str | None:
        return self.words.get(word_id)

    def get_or_create(self, word_id: int, target_exposures: int) -> ReviewRecord:
        record = self.records.get(word_id)
        if record is None:
            record = ReviewRecord.initial(word_id, target_exposures)
            self.records[word_id] = record
        return record


def parse_store(data: dict[str, Any] | None) -> RecordStore:
    """Build a store from already-parsed YAML/JSON data."""
    data = data or {}
    if not isinstance(data, dict):
        raise ValueError("records file must contain a mapping at the top level")

    words = {int(k): str(v) for k, v in (data.get("words") or {}).items()}
    records = _records_adapter.validate_python(data.get("records") or [])
    return RecordStore(records={r.word_id: r for r in records}, words=words)


def load_store(path: Path) -> RecordStore:
    """
    Load records and words from `path`.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML/JSON.
        pydantic.ValidationError: If a record does not match the model.
    """
    text = path.read_text(encoding="utf-8")
    store = parse_store(yaml.safe_load(text))
    logger.debug(f"Loaded {len(store.records)} records, {len(store.words)} words from {path}")
    return store


def dump_store(store: RecordStore) -> dict[str, Any]:
    ordered = sorted(store.records.values(), key=lambda r: r.word_id)
    return {
        "words": dict(sorted(store.words.items())),
        "records": _records_adapter.dump_python(ordered, mode="json"),
    }


def save_store(path: Path, store: RecordStore) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(dump_store(store), sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    logger.info(f"Saved {len(store.records)} records to {path}")
