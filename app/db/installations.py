from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging
import threading

from app.schemas.installation import Installation

logger = logging.getLogger(__name__)

class InstallationStore(ABC):
    @abstractmethod
    def put(self, location_id: str, token_data: Dict[str, Any]) -> Installation:
        pass

    @abstractmethod
    def get(self, location_id: str) -> Optional[Installation]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

class InMemoryInstallationStore(InstallationStore):
    """
    Process-lifetime installations keyed by location id.
    No expiry, no refresh; a restart clears everything.
    """
    def __init__(self):
        self._storage: Dict[str, Installation] = {}
        self._lock = threading.Lock()

    def put(self, location_id: str, token_data: Dict[str, Any]) -> Installation:
        installation = Installation(
            location_id=location_id,
            access_token=token_data["access_token"],
            token_data=dict(token_data),
        )
        with self._lock:
            replaced = location_id in self._storage
            self._storage[location_id] = installation
        logger.info(f"Installation stored for location {location_id} (replaced={replaced})")
        return installation

    def get(self, location_id: str) -> Optional[Installation]:
        with self._lock:
            return self._storage.get(location_id)

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

# Global Accessor
installation_store = InMemoryInstallationStore()
