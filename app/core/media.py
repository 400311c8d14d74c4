import io
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import UploadError

logger = logging.getLogger(__name__)

# Form file field -> (custom value key, Cloudinary sub-folder)
IMAGE_FIELDS = {
    "businessLogo": ("businessLogoUrl", "business-logos"),
    "additionalImage": ("additionalImageUrl", "additional-images"),
}


class MediaUploader:
    def __init__(self, root_folder: Optional[str] = None, max_bytes: Optional[int] = None):
        self.root_folder = root_folder if root_folder is not None else settings.CLOUDINARY_FOLDER
        self.max_bytes = max_bytes or settings.UPLOAD_MAX_BYTES
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )

    def validate(self, content: bytes, content_type: Optional[str]):
        if not content_type or not content_type.startswith("image/"):
            raise UploadError("Only image files are allowed")
        if not content:
            raise UploadError("Uploaded file is empty")
        if len(content) > self.max_bytes:
            raise UploadError(f"File too large (max {self.max_bytes} bytes)")

    async def upload(self, content: bytes, content_type: Optional[str], folder: str) -> str:
        self.validate(content, content_type)
        target = f"{self.root_folder}/{folder}" if self.root_folder else folder
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                folder=target,
                resource_type="image",
                quality="auto",
                fetch_format="auto",
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload to {target} failed: {e}")
            raise UploadError(f"Image upload failed: {e}") from e

        url = (result or {}).get("secure_url")
        if not url:
            raise UploadError("Image upload returned no URL")
        logger.info(f"Uploaded {len(content)} bytes to {target}")
        return url
