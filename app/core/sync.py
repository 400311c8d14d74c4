import logging
from typing import Iterable, List, Mapping, Optional

from app.core.config import settings
from app.core.errors import NotInstalledError
from app.core.ghl import GHLClient
from app.db.installations import InstallationStore
from app.schemas.custom_values import ApiCallResult, SyncResultItem, SyncStatus

logger = logging.getLogger(__name__)


class CustomValueSynchronizer:
    """
    Writes a field bag into a location's custom values.

    Each field gets a create attempt; when the API answers with a conflict
    status the same payload is sent as an update. Fields are processed one
    at a time in mapping order and a failing field never stops the rest.
    Nothing is retried.
    """

    def __init__(
        self,
        store: InstallationStore,
        client: GHLClient,
        conflict_status_codes: Optional[Iterable[int]] = None,
    ):
        self.store = store
        self.client = client
        codes = settings.GHL_CONFLICT_STATUS_CODES if conflict_status_codes is None else conflict_status_codes
        self.conflict_status_codes = frozenset(codes)

    async def sync(self, location_id: str, fields: Mapping[str, object]) -> List[SyncResultItem]:
        if self.store.get(location_id) is None:
            raise NotInstalledError(location_id)

        results: List[SyncResultItem] = []
        for key, value in fields.items():
            item = await self._sync_field(location_id, key, str(value))
            results.append(item)

        counts = {s.value: sum(1 for r in results if r.status == s) for s in SyncStatus}
        logger.info(f"Custom values synced for location {location_id}: {counts}")
        return results

    async def _sync_field(self, location_id: str, key: str, value: str) -> SyncResultItem:
        created = await self.client.create_custom_value(location_id, key, value)
        if created.ok:
            return SyncResultItem(key=key, status=SyncStatus.CREATED, detail=created.data)

        if created.status_code not in self.conflict_status_codes:
            return _failed(key, created)

        updated = await self.client.update_custom_value(location_id, key, value)
        if updated.ok:
            return SyncResultItem(key=key, status=SyncStatus.UPDATED, detail=updated.data)
        return _failed(key, updated)


def _failed(key: str, result: ApiCallResult) -> SyncResultItem:
    logger.warning(f"Custom value '{key}' failed: {result.error}")
    return SyncResultItem(key=key, status=SyncStatus.ERROR, detail=result.error)
