"""
profiles_api/store.py

Record store for profile and credential collections.

Storage:
- Two JSON documents, each a top-level array of objects:
    userData.json   -> profiles
    userLogins.json -> credentials
- Read wholesale on every load, rewritten wholesale on every save.
- No caching, no indexing.

Concurrency:
- transaction() serializes load+save spans inside one process only.
- Separate processes writing the same files race; the last full write wins.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol, runtime_checkable

from .config import Settings

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RecordStoreError(IOError):
    """Storage unreadable, unwritable or malformed."""
    pass


@runtime_checkable
class RecordStore(Protocol):
    """
    Interface the handlers depend on.

    Loads return fresh lists the caller may mutate; nothing is shared with
    the store until the matching save.
    """

    def load_profiles(self) -> List[Record]:
        ...

    def save_profiles(self, records: List[Record]) -> None:
        ...

    def load_credentials(self) -> List[Record]:
        ...

    def save_credentials(self, records: List[Record]) -> None:
        ...

    def transaction(self) -> Any:
        """Context manager spanning one read-modify-write cycle."""
        ...


# ----------------------------
# JSON file store
# ----------------------------

class JsonRecordStore:
    def __init__(self, profiles_path: Path, credentials_path: Path) -> None:
        self.profiles_path = Path(profiles_path)
        self.credentials_path = Path(credentials_path)
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "JsonRecordStore":
        return cls(settings.profiles_path, settings.credentials_path)

    @contextmanager
    def transaction(self) -> Iterator["JsonRecordStore"]:
        with self._lock:
            yield self

    def load_profiles(self) -> List[Record]:
        return self._read(self.profiles_path)

    def save_profiles(self, records: List[Record]) -> None:
        self._write(self.profiles_path, records)

    def load_credentials(self) -> List[Record]:
        return self._read(self.credentials_path)

    def save_credentials(self, records: List[Record]) -> None:
        self._write(self.credentials_path, records)

    # ---- file helpers ----

    def _ensure_file(self, path: Path) -> None:
        if path.exists():
            return
        logger.info("Seeding empty collection at %s", path)
        self._write(path, [])

    def _read(self, path: Path) -> List[Record]:
        with self._lock:
            self._ensure_file(path)
            try:
                raw = path.read_bytes()
            except OSError as exc:
                raise RecordStoreError(f"Could not read {path}: {exc}") from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RecordStoreError(f"Malformed JSON in {path}: {exc}") from exc

        if not isinstance(payload, list):
            raise RecordStoreError(f"Expected a JSON array in {path}, got {type(payload).__name__}")
        return payload

    def _write(self, path: Path, records: List[Record]) -> None:
        try:
            # NaN/Infinity are not JSON; refuse them rather than write an unreadable file.
            text = json.dumps(records, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise RecordStoreError(f"Could not serialize records for {path}: {exc}") from exc

        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                # Readers never observe a partially written document.
                fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.write(text)
                    os.replace(tmp_name, path)
                except BaseException:
                    if os.path.exists(tmp_name):
                        os.unlink(tmp_name)
                    raise
            except OSError as exc:
                raise RecordStoreError(f"Could not write {path}: {exc}") from exc


# ----------------------------
# In-memory store
# ----------------------------

class InMemoryRecordStore:
    """Same contract as JsonRecordStore, backed by lists. Loads and saves deep-copy."""

    def __init__(self, profiles: Optional[List[Record]] = None, credentials: Optional[List[Record]] = None) -> None:
        self._profiles: List[Record] = copy.deepcopy(profiles or [])
        self._credentials: List[Record] = copy.deepcopy(credentials or [])
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["InMemoryRecordStore"]:
        with self._lock:
            yield self

    def load_profiles(self) -> List[Record]:
        return copy.deepcopy(self._profiles)

    def save_profiles(self, records: List[Record]) -> None:
        self._profiles = copy.deepcopy(list(records))

    def load_credentials(self) -> List[Record]:
        return copy.deepcopy(self._credentials)

    def save_credentials(self, records: List[Record]) -> None:
        self._credentials = copy.deepcopy(list(records))
