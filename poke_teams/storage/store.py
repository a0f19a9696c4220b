"""Whole-document JSON key/value store for persisted teams."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

TEAMS_KEY = "pokemon-teams"


class JsonTeamStore:
    """Keeps every key in one JSON file and rewrites the file on each save.

    Writes go through a temp file in the same directory followed by
    ``os.replace`` so a crash never leaves a half-written document. There is
    no locking; the last writer wins.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.path = Path(path)
        self._debug_logger = debug_logger

    def load(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def save(self, key: str, value: Any) -> None:
        document = self._read()
        document[key] = value
        self._atomic_write(document)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (OSError, ValueError) as exc:
            self._debug(f"Unreadable store {self.path}: {exc}")
            self._back_up_corrupt_file()
            return {}
        if not isinstance(document, dict):
            self._debug(f"Store {self.path} does not hold a JSON object; ignoring it")
            self._back_up_corrupt_file()
            return {}
        return document

    def _atomic_write(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                tmp_path = tmp.name
                json.dump(document, tmp, ensure_ascii=False, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _back_up_corrupt_file(self) -> None:
        backup = self.path.with_name(
            f"{self.path.name}.corrupt.{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        )
        try:
            os.replace(self.path, backup)
        except OSError as exc:
            self._debug(f"Could not back up {self.path}: {exc}")
            return
        self._debug(f"Backed up unreadable store to {backup}")

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)
