"""Image store factory.

Provides get_image_store() / set_image_store() to swap implementations:
- LocalImageStore for development and testing
- any CDN-backed ImageStore in production
"""

from shared.media.local_adapter import LocalImageStore
from shared.media.port import ImageStore, StoredImage

_current_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Return the current image store. Defaults to LocalImageStore."""
    global _current_store
    if _current_store is None:
        _current_store = LocalImageStore()
    return _current_store


def set_image_store(store: ImageStore) -> None:
    """Override the active image store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_image_store() -> None:
    """Reset to default image store."""
    global _current_store
    _current_store = None


__all__ = ["ImageStore", "StoredImage", "get_image_store", "reset_image_store", "set_image_store"]
