from pydantic import BaseModel
from typing import Any, List, Optional
from enum import Enum


class SyncStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    ERROR = "error"


class SyncResultItem(BaseModel):
    key: str
    status: SyncStatus
    detail: Optional[Any] = None


class ApiCallResult(BaseModel):
    """Outcome of a single custom values call. `status_code` is None on transport failure."""
    status_code: Optional[int] = None
    data: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


class SubmitResponse(BaseModel):
    success: bool
    message: str
    results: List[SyncResultItem]
