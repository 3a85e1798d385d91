"""A JSON array stored in one file, shared by the JSON repositories.

Reads and writes are serialized per file, writes go through a temporary
file and ``os.replace`` so a crash never leaves a half-written store, and
every I/O or decoding problem surfaces as StorageError.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from stockdash.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self.lock = threading.RLock()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> list[dict]:
        with self.lock:
            try:
                raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.error("Could not read %s: %s", self._file_path, exc)
                raise StorageError(f"Could not read {self._file_path.name}: {exc}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"{self._file_path.name} does not contain a JSON array")
        return raw

    def write(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        with self.lock:
            try:
                tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
                os.replace(tmp_path, self._file_path)
            except OSError as exc:
                logger.error("Could not write %s: %s", self._file_path, exc)
                raise StorageError(f"Could not write {self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not create {self._file_path}: {exc}") from exc
