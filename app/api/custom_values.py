from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from typing import Dict
import logging

from app.api.dependencies import get_ghl_client, get_installation_store, get_media_uploader, get_synchronizer
from app.core.config import settings
from app.core.errors import IntegrationError, NotInstalledError, ValidationError, public_detail
from app.core.ghl import GHLClient
from app.core.media import IMAGE_FIELDS, MediaUploader
from app.core.sync import CustomValueSynchronizer
from app.db.installations import InstallationStore
from app.schemas.custom_values import SubmitResponse

router = APIRouter(prefix="/api/custom-values")
logger = logging.getLogger(__name__)

def _failure(message: str, exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": public_detail(exc, settings.is_production, message)},
    )

@router.post("/submit", response_model=SubmitResponse)
async def submit_custom_values(
    request: Request,
    store: InstallationStore = Depends(get_installation_store),
    uploader: MediaUploader = Depends(get_media_uploader),
    synchronizer: CustomValueSynchronizer = Depends(get_synchronizer),
):
    form = await request.form()
    location_id = form.get("locationId")

    try:
        if not isinstance(location_id, str) or not location_id.strip():
            raise ValidationError("Location ID is required")
        location_id = location_id.strip()

        if store.get(location_id) is None:
            raise NotInstalledError(location_id)

        fields: Dict[str, str] = {}
        files: Dict[str, UploadFile] = {}
        for key, value in form.multi_items():
            if key == "locationId":
                continue
            if isinstance(value, UploadFile):
                if key not in IMAGE_FIELDS:
                    raise ValidationError(f"Unexpected file field '{key}'")
                # Browsers send an empty part when no file was picked
                if value.filename:
                    files[key] = value
                continue
            if value.strip():
                fields[key] = value

        for field_name, (value_key, folder) in IMAGE_FIELDS.items():
            upload = files.get(field_name)
            if upload is None:
                continue
            content = await upload.read()
            fields[value_key] = await uploader.upload(content, upload.content_type, folder)

        results = await synchronizer.sync(location_id, fields)

    except (ValidationError, NotInstalledError) as e:
        logger.warning(f"Submission rejected for location {location_id}: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except IntegrationError as e:
        logger.error(f"Custom values submission failed for location {location_id}: {e}")
        return _failure("Failed to update custom values", e)
    except Exception as e:
        logger.exception(f"Unexpected error submitting custom values for location {location_id}")
        return _failure("Failed to update custom values", e)
    finally:
        await form.close()

    logger.info(f"Custom values updated for location {location_id}")
    return SubmitResponse(
        success=True,
        message="Custom values updated successfully",
        results=results,
    )

@router.get("/{location_id}")
async def get_custom_values(location_id: str, client: GHLClient = Depends(get_ghl_client)):
    try:
        return await client.get_custom_values(location_id)
    except IntegrationError as e:
        logger.error(f"Get custom values failed for location {location_id}: {e}")
        return _failure("Failed to get custom values", e)
    except Exception as e:
        logger.exception(f"Unexpected error reading custom values for location {location_id}")
        return _failure("Failed to get custom values", e)
