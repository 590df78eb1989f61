# upload_service.py
"""
Validation and storage of listing images.

Files are checked for count, size and decodability before any moderation
call is made, then written through Django's default storage under
``listings/<uuid>.<ext>``.
"""

import base64
import io
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

from classifieds.exceptions import ListingValidationError
from classifiedsutils.logging import get_logger

logger = get_logger(__name__)

# Pillow format name -> file extension
ALLOWED_IMAGE_FORMATS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "WEBP": "webp",
}

LISTING_IMAGE_DIR = "listings"


@dataclass(frozen=True)
class ValidatedImage:
    """An uploaded file that decoded as a supported image."""

    content: bytes
    image_format: str
    original_name: str = ""

    @property
    def extension(self) -> str:
        return ALLOWED_IMAGE_FORMATS[self.image_format]

    @property
    def mime_type(self) -> str:
        return Image.MIME.get(self.image_format, "image/jpeg")

    def as_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")


class UploadService:
    """Helpers for listing image uploads."""

    @staticmethod
    def validate_images(files: Sequence) -> list[ValidatedImage]:
        """
        Read and verify uploaded files.

        Args:
            files: uploaded file objects (anything with ``read()``)

        Returns:
            ValidatedImage list in submission order

        Raises:
            ListingValidationError: too many files, a file over the size
                limit, or a file that is not a supported image
        """
        max_images = getattr(settings, "MAX_LISTING_IMAGES", 10)
        max_bytes = getattr(settings, "MAX_IMAGE_UPLOAD_BYTES", 5 * 1024 * 1024)

        if len(files) > max_images:
            raise ListingValidationError(
                {"images": [f"At most {max_images} images are allowed."]}
            )

        errors = []
        validated = []
        for index, upload in enumerate(files):
            name = getattr(upload, "name", "") or f"image-{index + 1}"
            size = getattr(upload, "size", None)
            if size is not None and size > max_bytes:
                errors.append(f"{name}: file exceeds the {max_bytes} byte limit.")
                continue

            content = upload.read()
            if len(content) > max_bytes:
                errors.append(f"{name}: file exceeds the {max_bytes} byte limit.")
                continue

            image_format = UploadService._detect_format(content)
            if image_format not in ALLOWED_IMAGE_FORMATS:
                errors.append(f"{name}: only image files are allowed.")
                continue

            validated.append(
                ValidatedImage(
                    content=content, image_format=image_format, original_name=name
                )
            )

        if errors:
            raise ListingValidationError({"images": errors})
        return validated

    @staticmethod
    def _detect_format(content: bytes) -> str | None:
        try:
            with Image.open(io.BytesIO(content)) as image:
                image_format = image.format
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            return None
        return image_format

    @staticmethod
    def store_image(image: ValidatedImage) -> str:
        """Save an image and return its storage path."""
        path = f"{LISTING_IMAGE_DIR}/{uuid.uuid4().hex}.{image.extension}"
        return default_storage.save(path, ContentFile(image.content))

    @staticmethod
    def delete_files(paths: Iterable[str]) -> int:
        """Remove stored files, skipping ones already gone. Returns the count removed."""
        removed = 0
        for path in paths:
            if default_storage.exists(path):
                default_storage.delete(path)
                removed += 1
            else:
                logger.info("listing_image_missing", path=path)
        return removed
