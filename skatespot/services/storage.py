"""
Durable key-value storage backends.

Each backend stores opaque string blobs under a name. Failures are raised as
StorageError; callers that must not fail (the state repository) catch it.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skatespot.config.settings import StorageBackend, StorageSettings
from skatespot.core.db import Base, create_db_engine, create_session_factory, db_session
from skatespot.core.exceptions import StorageError
from skatespot.models.storage import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, blob: str) -> None:
        ...


class InMemoryStorage:
    """Process-local storage; nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, name: str) -> Optional[str]:
        return self._blobs.get(name)

    def set(self, name: str, blob: str) -> None:
        self._blobs[name] = blob


class JsonFileStorage:
    """One ``<name>.json`` file per key inside a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def get(self, name: str) -> Optional[str]:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(name, "Cannot read storage file", {"path": str(path), "error": str(e)}) from e

    def set(self, name: str, blob: str) -> None:
        path = self._path(name)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(blob, encoding="utf-8")
            # Readers never observe a half-written blob
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(name, "Cannot write storage file", {"path": str(path), "error": str(e)}) from e


class SqlKeyValueStorage:
    """Blobs kept in the ``key_value_store`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, name: str) -> Optional[str]:
        try:
            with db_session(self.session_factory) as session:
                entry = session.get(KeyValueEntry, name)
                return entry.blob if entry is not None else None
        except SQLAlchemyError as e:
            raise StorageError(name, "Cannot read storage table", {"error": str(e)}) from e

    def set(self, name: str, blob: str) -> None:
        try:
            with db_session(self.session_factory) as session:
                entry = session.get(KeyValueEntry, name)
                if entry is None:
                    session.add(KeyValueEntry(name=name, blob=blob))
                else:
                    entry.blob = blob
        except SQLAlchemyError as e:
            raise StorageError(name, "Cannot write storage table", {"error": str(e)}) from e


def build_storage(storage_settings: StorageSettings) -> KeyValueStorage:
    """Create the backend selected in settings."""
    backend = storage_settings.backend
    if backend == StorageBackend.MEMORY:
        logger.warning("Using in-memory storage; spots and check-ins will not survive a restart")
        return InMemoryStorage()
    if backend == StorageBackend.FILE:
        return JsonFileStorage(storage_settings.get_directory())
    engine = create_db_engine(storage_settings.database_url)
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        # Reads and writes will report StorageError; the store keeps working in memory
        logger.warning(f"Storage table could not be created: {e}")
    return SqlKeyValueStorage(create_session_factory(engine))
