"""Image store port (abstract interface).

The catalogue never keeps image bytes. Uploads are handed to an image store
and only the returned public URL is persisted on categories, brands,
products and variants.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    """Public location of a stored image."""

    url: str
    thumbnail_url: str | None = None


class ImageStore(ABC):
    """Abstract image store interface."""

    @abstractmethod
    def store(self, data: bytes, filename: str) -> StoredImage:
        """Persist ``data`` and return where it can be fetched from."""
        ...
