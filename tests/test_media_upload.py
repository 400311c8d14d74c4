import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from app.core.errors import UploadError
from app.core.media import MediaUploader


@pytest.mark.asyncio
async def test_upload_returns_secure_url(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append((file.read(), options))
        return {"secure_url": "https://res.cloudinary.com/demo/image/upload/logo.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    url = await MediaUploader().upload(b"\x89PNG", "image/png", "business-logos")

    assert url == "https://res.cloudinary.com/demo/image/upload/logo.png"
    content, options = calls[0]
    assert content == b"\x89PNG"
    assert options["folder"] == "ghl-integration/business-logos"
    assert options["resource_type"] == "image"


@pytest.mark.asyncio
async def test_non_image_rejected(monkeypatch):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda *a, **k: pytest.fail("should not upload"))

    with pytest.raises(UploadError, match="Only image files"):
        await MediaUploader().upload(b"hello", "text/plain", "business-logos")


@pytest.mark.asyncio
async def test_size_ceiling(monkeypatch):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda *a, **k: pytest.fail("should not upload"))

    with pytest.raises(UploadError, match="too large"):
        await MediaUploader(max_bytes=4).upload(b"12345", "image/png", "business-logos")


@pytest.mark.asyncio
async def test_upstream_failure(monkeypatch):
    def failing_upload(file, **options):
        raise CloudinaryError("Invalid API key")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

    with pytest.raises(UploadError, match="Invalid API key"):
        await MediaUploader().upload(b"\x89PNG", "image/jpeg", "additional-images")
