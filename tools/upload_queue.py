"""Pending uploads waiting for the user to classify them."""
from __future__ import annotations

import base64
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional
from uuid import uuid4

from memory.catalog import Catalog
from models.clothing_item import ClothingItem
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


def encode_image_file(path: str | Path) -> str:
    """Read an image file into a self-contained ``data:`` URL handle."""

    file_path = Path(path)
    mime_type, _ = mimetypes.guess_type(file_path.name)
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


@dataclass(frozen=True)
class PendingUpload:
    image: str
    id: str = field(default_factory=lambda: f"pending-{uuid4().hex}")


class UploadQueue:
    """FIFO of decoded images; lives only for the current session."""

    def __init__(self) -> None:
        self._pending: List[PendingUpload] = []

    def __len__(self) -> int:
        return len(self._pending)

    def peek(self) -> Optional[PendingUpload]:
        return self._pending[0] if self._pending else None

    def enqueue(self, images: str | Iterable[str]) -> List[PendingUpload]:
        if isinstance(images, str):
            images = [images]
        added = [PendingUpload(image=image) for image in images if image]
        self._pending.extend(added)
        log_event(LOGGER, logging.INFO, "uploads_queued", added=len(added), pending=len(self._pending))
        return added

    def enqueue_files(self, paths: Iterable[str | Path]) -> List[PendingUpload]:
        return self.enqueue(encode_image_file(path) for path in paths)

    def classify_next(self, category: str, catalog: Catalog) -> Optional[ClothingItem]:
        """Move the oldest pending upload into the catalog under ``category``.

        Returns None when nothing is pending. The upload stays queued if the
        catalog rejects the category.
        """

        if not self._pending:
            return None
        item = catalog.add_item(self._pending[0].image, category)
        self._pending.pop(0)
        return item


__all__ = ["PendingUpload", "UploadQueue", "encode_image_file"]
