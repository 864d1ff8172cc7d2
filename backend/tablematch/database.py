"""User store persistence.

The whole account collection lives in a single JSON document of the form
``{"users": [...], "nextId": n}``. Every operation loads the full document
and every mutation writes it back in one piece.
"""
from collections.abc import Generator
from contextlib import contextmanager
import json
import logging
import os
from pathlib import Path
import tempfile
import threading

from pydantic import ValidationError

from tablematch.config import get_settings
from tablematch.errors import PersistenceError
from tablematch.models.user import UserStoreData

logger = logging.getLogger(__name__)


class UserStore:
    """Handle on one users file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"UserStore(path={str(self.path)!r})"

    def initialize(self) -> bool:
        """Create the default document if none exists. Returns True if created."""
        if self.path.exists():
            logger.info(f"User store already exists: {self.path}")
            return False
        self.save(UserStoreData())
        logger.info(f"User store created: {self.path}")
        return True

    def load(self) -> UserStoreData:
        """Read the full snapshot.

        A missing file is replaced with the empty default. An unreadable
        one is reported and left alone; callers get an empty placeholder
        that ``mutate`` will not write back.
        """
        if not self.path.exists():
            data = UserStoreData()
            self.save(data)
            return data

        try:
            return UserStoreData.model_validate(self._read_document())
        except (PersistenceError, ValidationError) as e:
            logger.error(f"Error reading user store {self.path}: {e}")
            return UserStoreData.placeholder()

    def save(self, data: UserStoreData) -> bool:
        """Overwrite the file with ``data``. Returns False if the write failed."""
        try:
            self._write_document(data.to_document())
        except PersistenceError as e:
            logger.error(f"Error writing user store {self.path}: {e}")
            return False
        return True

    @contextmanager
    def mutate(self) -> Generator[UserStoreData, None, None]:
        """Load, hand out for modification, and save under the writer lock.

        The snapshot is only written back if the block finishes without
        raising. Raises ``PersistenceError`` when the file exists but cannot
        be read, so its contents are never replaced by an empty store.
        """
        with self._lock:
            data = self.load()
            if data.is_placeholder:
                raise PersistenceError(f"User store {self.path} is unreadable; refusing to overwrite it")
            yield data
            self.save(data)

    def _read_document(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(str(e)) from e

    def _write_document(self, document: dict) -> None:
        # Written to a sibling temp file and swapped in so readers never see
        # a half-written document.
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(str(e)) from e


_stores: dict[Path, UserStore] = {}
_stores_lock = threading.Lock()


def get_user_store(path: Path | str | None = None) -> UserStore:
    """Shared store for a file path (the configured one by default).

    Requests against the same file share one handle, and so one writer lock.
    """
    resolved = Path(path or get_settings().users_file).resolve()
    with _stores_lock:
        store = _stores.get(resolved)
        if store is None:
            store = _stores[resolved] = UserStore(resolved)
        return store


def get_store() -> UserStore:
    """Dependency that provides the user store."""
    return get_user_store()
