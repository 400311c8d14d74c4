from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse
from typing import Optional
import json
import logging

from app.api.dependencies import get_installation_store, get_token_client
from app.api.web import templates
from app.core.errors import TokenExchangeError
from app.core.oauth import TokenExchangeClient
from app.db.installations import InstallationStore

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/authorize-handler", response_class=HTMLResponse)
async def authorize_handler(
    request: Request,
    code: Optional[str] = None,
    location_id: Optional[str] = None,
    store: InstallationStore = Depends(get_installation_store),
    token_client: TokenExchangeClient = Depends(get_token_client),
):
    """OAuth redirect target: trade the code for a token and remember the installation."""
    if not code or not location_id:
        return PlainTextResponse("Missing authorization code or location ID", status_code=400)

    logger.info(f"Received OAuth callback for location {location_id}")

    try:
        token = await token_client.exchange(code)
        store.put(location_id, token.raw)
    except TokenExchangeError as e:
        logger.error(f"Authorization failed for location {location_id}: {e}")
        return PlainTextResponse("Authorization failed", status_code=500)
    except Exception:
        logger.exception(f"Storing installation for location {location_id} failed")
        return PlainTextResponse("Authorization failed", status_code=500)

    logger.info(f"App installed for location {location_id}")
    return templates.TemplateResponse(request, "installed.html", {
        "location_id": location_id,
    })

@router.post("/webhook-handler")
async def webhook_handler(request: Request):
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = body.decode("utf-8", errors="replace")
    logger.info(f"Webhook received: {payload}")
    return {"received": True}
