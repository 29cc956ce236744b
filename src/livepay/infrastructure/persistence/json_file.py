"""Shared file handling for the JSON-backed repositories.

Each store is one JSON array on disk.  Load-modify-persist cycles run
under a re-entrant lock, and writes go through a temporary file that
replaces the original, so readers never see a half-written array.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path


class JsonListFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        with self._lock:
            tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._file_path)

    def upsert(self, record: dict, key: str) -> None:
        """Replace the record with the same *key* value, or append it."""
        with self._lock:
            records = self.load()
            for i, raw in enumerate(records):
                if raw[key] == record[key]:
                    records[i] = record
                    break
            else:
                records.append(record)
            self.persist(records)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
