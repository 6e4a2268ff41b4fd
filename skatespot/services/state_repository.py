"""
State repository - loads and saves the whole store state as one named blob.
"""

import logging
from typing import Optional, Protocol

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from skatespot.core.exceptions import StorageError
from skatespot.models.spot import StoreState
from skatespot.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_NAME = "skatespot-storage"


class StateRepository(Protocol):
    def load(self) -> Optional[StoreState]:
        ...

    def save(self, state: StoreState) -> bool:
        ...


class KeyValueStateRepository:
    """Persists StoreState under a single storage name"""

    def __init__(self, storage: KeyValueStorage, name: str = DEFAULT_STORAGE_NAME):
        self.storage = storage
        self.name = name
        self.last_error: Optional[StorageError] = None

    def load(self) -> Optional[StoreState]:
        """
        Read the persisted state.

        Returns:
            Restored state, or None when nothing is stored or the blob
            cannot be read or parsed
        """
        try:
            blob = self.storage.get(self.name)
        except StorageError as e:
            self.last_error = e
            logger.warning(f"Could not read persisted state '{self.name}': {e.message}", extra={"details": e.details})
            return None

        if blob is None:
            logger.info(f"No persisted state under '{self.name}', starting empty")
            return None

        try:
            state = StoreState.model_validate_json(blob)
        except ValidationError as e:
            logger.warning(f"Persisted state '{self.name}' is unreadable, starting empty: {e.error_count()} errors")
            return None

        logger.info(
            f"Restored {len(state.spots)} spots and {len(state.check_ins)} check-ins from '{self.name}'"
        )
        return state

    def save(self, state: StoreState) -> bool:
        """
        Write the full state.

        Returns:
            True when the write succeeded; failures are logged, never raised
        """
        try:
            blob = state.model_dump_json(by_alias=True)
        except PydanticSerializationError as e:
            logger.warning(f"Could not serialize state '{self.name}': {e}")
            return False

        try:
            self.storage.set(self.name, blob)
        except StorageError as e:
            self.last_error = e
            logger.warning(f"Could not persist state '{self.name}': {e.message}", extra={"details": e.details})
            return False

        self.last_error = None
        return True
