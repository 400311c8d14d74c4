from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from app.api.dependencies import get_installation_store
from app.db.installations import InstallationStore

router = APIRouter()

@router.get("/health")
async def health(store: InstallationStore = Depends(get_installation_store)):
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "installations": store.count(),
    }
