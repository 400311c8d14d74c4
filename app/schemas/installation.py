from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Dict, Any


class Installation(BaseModel):
    location_id: str
    access_token: str
    installed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    token_data: Dict[str, Any] = Field(default_factory=dict)


class TokenResponse(BaseModel):
    access_token: str
    raw: Dict[str, Any]
