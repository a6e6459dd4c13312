"""
Object storage for admin uploads.

Paths follow the storefront bucket layout:
    categories/<ms-timestamp>_<filename>
    products/<ms-timestamp>_<filename>
    settings/hero/<filename>
    settings/about/<filename>
Settings images keep their plain name, so re-uploading a file with the
same name replaces the previous one.
"""
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

import config
from enums.media_entity import MediaEntity
from exceptions import InvalidImageException, MediaUploadException
from models.media import UploadedImageDTO

logger = logging.getLogger(__name__)

IMAGE_CONTENT_TYPE_PREFIX = "image/"


def build_media_path(entity: MediaEntity, filename: str, timestamp_ms: int | None = None) -> str:
    # Only the base name: "../x.png" must not escape the folder
    name = Path(filename.replace("\\", "/")).name
    if name in ("", ".."):
        raise InvalidImageException(filename, "empty filename")
    if entity.timestamped:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        name = f"{timestamp_ms}_{name}"
    return f"{entity.value}/{name}"


def validate_image(image: UploadedImageDTO) -> None:
    """Same rule as the admin file picker (image/*); checked only when the client sent a type."""
    if image.content_type and not image.content_type.startswith(IMAGE_CONTENT_TYPE_PREFIX):
        raise InvalidImageException(image.filename, f"unsupported type {image.content_type}")


class MediaStorage(ABC):

    @abstractmethod
    async def upload(self, entity: MediaEntity, image: UploadedImageDTO) -> str:
        """Store the image and return its public URL."""


class LocalMediaStorage(MediaStorage):
    """Files under MEDIA_ROOT, served by the app at MEDIA_URL."""

    def __init__(self, root: Path | str = config.MEDIA_ROOT, base_url: str = config.MEDIA_URL):
        self.root = Path(root)
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    async def upload(self, entity: MediaEntity, image: UploadedImageDTO) -> str:
        validate_image(image)
        path = build_media_path(entity, image.filename)
        target = self.root / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(image.content)
        except OSError as e:
            raise MediaUploadException(path, str(e)) from e
        logger.info(f"[Media] Stored {path} ({len(image.content)} bytes)")
        return self.base_url + path
