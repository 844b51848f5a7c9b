"""Filesystem image store for development and single-host deployments."""

import os
from pathlib import Path
from uuid import uuid4

from protean.exceptions import ValidationError

from shared.media.port import ImageStore, StoredImage

MEDIA_ROOT_ENV = "SHOPFRONT_MEDIA_ROOT"
MEDIA_URL_ENV = "SHOPFRONT_MEDIA_URL"

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class LocalImageStore(ImageStore):
    """Writes images under ``root`` with random names and serves them from ``base_url``."""

    def __init__(self, root: str | None = None, base_url: str | None = None) -> None:
        self.root = Path(root or os.getenv(MEDIA_ROOT_ENV, "media"))
        self.base_url = (base_url or os.getenv(MEDIA_URL_ENV, "/media")).rstrip("/")

    def store(self, data: bytes, filename: str) -> StoredImage:
        extension = Path(filename or "").suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError({"file": [f"Unsupported image type '{extension or filename}'"]})
        if not data:
            raise ValidationError({"file": ["Image is empty"]})
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError({"file": ["Image exceeds the 5 MB limit"]})

        self.root.mkdir(parents=True, exist_ok=True)
        name = f"{uuid4().hex}{extension}"
        (self.root / name).write_bytes(data)

        return StoredImage(url=f"{self.base_url}/{name}")
