from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import Optional

from app.api.dependencies import get_installation_store, get_token_client
from app.core.oauth import TokenExchangeClient
from app.db.installations import InstallationStore

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

INDUSTRIES = ["retail", "healthcare", "technology", "finance", "education", "other"]
NOTIFICATION_PREFS = ["email", "sms", "both", "none"]

@router.get("/", response_class=HTMLResponse)
async def landing_page(
    request: Request,
    store: InstallationStore = Depends(get_installation_store),
    token_client: TokenExchangeClient = Depends(get_token_client),
):
    return templates.TemplateResponse(request, "landing.html", {
        "authorize_url": token_client.authorize_url(),
        "installations": store.count(),
    })

@router.get("/form", response_class=HTMLResponse)
async def wizard_page(request: Request, locationId: Optional[str] = None):
    if not locationId:
        return PlainTextResponse("Location ID required", status_code=400)

    return templates.TemplateResponse(request, "form.html", {
        "location_id": locationId,
        "industries": INDUSTRIES,
        "notification_prefs": NOTIFICATION_PREFS,
    })
