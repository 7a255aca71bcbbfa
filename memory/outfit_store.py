"""Saved outfits and the browse cursor over them."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from logic.index_cycler import next_index
from models.outfit import Outfit
from tools.persistence import PersistenceBridge
from yourfit_app.logging_config import get_logger, log_event

if TYPE_CHECKING:
    from logic.outfit_composer import OutfitComposer

LOGGER = get_logger(__name__)


class OutfitStore:
    """Ordered, append-only sequence of saved outfits.

    The browse cursor is session state: it is not persisted and is re-clamped
    from the post-mutation length whenever outfits are removed.
    """

    def __init__(
        self,
        outfits: Optional[List[Outfit]] = None,
        persistence: Optional[PersistenceBridge] = None,
    ) -> None:
        self._outfits: List[Outfit] = list(outfits or [])
        self.persistence = persistence
        self.cursor = 0

    @classmethod
    def load(cls, persistence: PersistenceBridge) -> "OutfitStore":
        return cls(persistence.load_outfits(), persistence=persistence)

    def __len__(self) -> int:
        return len(self._outfits)

    def __iter__(self) -> Iterator[Outfit]:
        return iter(tuple(self._outfits))

    @property
    def outfits(self) -> Tuple[Outfit, ...]:
        return tuple(self._outfits)

    def get(self, outfit_id: str) -> Optional[Outfit]:
        return next((outfit for outfit in self._outfits if outfit.id == outfit_id), None)

    def current_outfit(self) -> Optional[Outfit]:
        """Return the outfit under the browse cursor, or None when empty."""

        if not self._outfits:
            return None
        if not 0 <= self.cursor < len(self._outfits):
            self._clamp_cursor()
        return self._outfits[self.cursor]

    def save(self, outfit: Outfit, composer: Optional["OutfitComposer"] = None) -> bool:
        """Append ``outfit`` and focus it.

        Outfits without a real top and bottom, or with a part in the wrong slot,
        are rejected with a warning and nothing is written. On success the
        composer's selection is reset.
        """

        if not outfit.is_complete:
            log_event(
                LOGGER,
                logging.WARNING,
                "outfit_save_rejected",
                outfit_id=outfit.id,
                reason="Cannot save outfit without a top and bottom.",
            )
            return False

        self._outfits.append(outfit)
        self.cursor = len(self._outfits) - 1
        if composer is not None:
            composer.reset()
        self._persist()
        log_event(
            LOGGER,
            logging.INFO,
            "outfit_saved",
            outfit_id=outfit.id,
            item_ids=outfit.item_ids(),
            cursor=self.cursor,
        )
        return True

    def change_browse(self, delta: int) -> int:
        self.cursor = next_index(len(self._outfits), self.cursor, delta)
        return self.cursor

    def delete_outfit(self, outfit_id: str) -> bool:
        """Remove an outfit by id; unknown ids are ignored."""

        remaining = [outfit for outfit in self._outfits if outfit.id != outfit_id]
        if len(remaining) == len(self._outfits):
            return False

        self._outfits = remaining
        self._clamp_cursor()
        self._persist()
        log_event(
            LOGGER,
            logging.INFO,
            "outfit_deleted",
            outfit_id=outfit_id,
            remaining=len(self._outfits),
            cursor=self.cursor,
        )
        return True

    def remove_item_references(self, item_id: str) -> int:
        """Unset every field referencing ``item_id``; drop outfits left incomplete.

        Returns the number of outfits that were changed or removed.
        """

        touched = 0
        dropped: List[str] = []
        updated: List[Outfit] = []
        for outfit in self._outfits:
            if not outfit.references(item_id):
                updated.append(outfit)
                continue
            touched += 1
            cleaned = outfit.without_item(item_id)
            if cleaned.is_complete:
                updated.append(cleaned)
            else:
                dropped.append(outfit.id)

        if not touched:
            return 0

        self._outfits = updated
        self._clamp_cursor()
        self._persist()
        log_event(
            LOGGER,
            logging.INFO,
            "outfits_cascade_cleaned",
            item_id=item_id,
            touched=touched,
            dropped_outfit_ids=dropped,
            cursor=self.cursor,
        )
        return touched

    def _clamp_cursor(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self._outfits) - 1))

    def _persist(self) -> None:
        if self.persistence is not None:
            self.persistence.save_outfits(self._outfits)


__all__ = ["OutfitStore"]
