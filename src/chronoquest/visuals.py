"""Lookup of pre-fetched event images."""
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".webp")


class ImageRegistry:
    """Maps event ids to image files already on disk.

    Images are named ``<event id><suffix>`` inside ``images_dir``. Explicit
    entries passed as ``images`` take precedence. Nothing is fetched; a
    missing image simply returns None.
    """

    def __init__(self, images_dir=None, images: dict = None):
        self.images_dir = Path(images_dir) if images_dir else None
        self._images = dict(images or {})

    def lookup(self, event_id: int) -> Optional[str]:
        if event_id in self._images:
            return self._images[event_id]
        if self.images_dir is None or not self.images_dir.is_dir():
            return None
        for suffix in IMAGE_SUFFIXES:
            candidate = self.images_dir / f"{event_id}{suffix}"
            if candidate.exists():
                self._images[event_id] = str(candidate)
                return self._images[event_id]
        logger.debug("No image for event %s", event_id)
        return None

    __call__ = lookup
