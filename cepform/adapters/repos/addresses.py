# cepform/adapters/repos/addresses.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from ...config import settings
from ...domain.address import AddressRecord, StoredAddress
from ...domain.errors import PersistenceError

log = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_saved_at(ts: datetime) -> str:
    """ISO-8601 in UTC with a Z suffix, e.g. 2025-01-31T12:00:00.123456Z"""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


@dataclass
class JsonAddressStore:
    """
    Saved addresses as one pretty-printed JSON array:
      data/saved-addresses.json

    Every append reads the whole file, adds one entry and writes the whole file
    back. Nothing is locked: two concurrent appends can lose one of them
    (last write wins). Fine for a single writer; use a real datastore otherwise.
    """

    path: Path
    clock: Callable[[], datetime] = field(default=utc_now)

    @classmethod
    def from_settings(cls) -> "JsonAddressStore":
        return cls(path=Path(settings.CEPFORM_DATA_FILE))

    def ensure_file(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("[]", encoding="utf-8")
                log.info("created address store path=%s", self.path)
        except OSError as e:
            raise PersistenceError(f"cannot initialize store at {self.path}: {e}") from e

    def read_all(self) -> list[dict[str, Any]]:
        self.ensure_file()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"cannot read store at {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise PersistenceError(f"malformed store at {self.path}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"malformed store at {self.path}: expected a JSON array, got {type(data).__name__}")
        return data

    def append(self, record: AddressRecord) -> StoredAddress:
        entries = self.read_all()

        stored = StoredAddress.model_validate(
            {**record.to_wire(), "savedAt": format_saved_at(self.clock())}
        )
        entries.append(stored.model_dump(by_alias=True))
        self._write(entries)

        log.info(
            "saved address postal_code=%s saved_at=%s total=%d",
            stored.postal_code,
            stored.saved_at,
            len(entries),
        )
        return stored

    def _write(self, entries: list[dict[str, Any]]) -> None:
        blob = json.dumps(entries, indent=2, ensure_ascii=False)
        try:
            self.path.write_text(blob, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"cannot write store at {self.path}: {e}") from e
