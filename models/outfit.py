"""Saved outfit schema."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
from uuid import uuid4

from models.clothing_item import ClothingItem
from models.taxonomy import CATEGORIES, REQUIRED_CATEGORIES


class IncompleteOutfitError(ValueError):
    """Raised when an outfit would be built without both a top and a bottom."""


def new_outfit_id() -> str:
    return f"outfit-{uuid4().hex}"


@dataclass(frozen=True)
class Outfit:
    id: str
    top: Optional[ClothingItem]
    bottom: Optional[ClothingItem]
    hat: Optional[ClothingItem] = None
    shoes: Optional[ClothingItem] = None

    @property
    def is_complete(self) -> bool:
        """True when a real top and bottom are present and every part sits in its own slot."""

        for category in REQUIRED_CATEGORIES:
            item = self.part(category)
            if item is None or item.is_sentinel:
                return False
        return all(item is None or item.type == category for category, item in self.parts().items())

    def parts(self) -> Dict[str, Optional[ClothingItem]]:
        return {category: self.part(category) for category in CATEGORIES}

    def part(self, category: str) -> Optional[ClothingItem]:
        return getattr(self, category)

    def item_ids(self) -> list[str]:
        return [item.id for item in (self.part(cat) for cat in CATEGORIES) if item is not None]

    def references(self, item_id: str) -> bool:
        return item_id in self.item_ids()

    def without_item(self, item_id: str) -> "Outfit":
        """Return a copy with every field referencing ``item_id`` unset."""

        cleared = {}
        for cat in CATEGORIES:
            item = self.part(cat)
            if item is not None and item.id == item_id:
                cleared[cat] = None
        return replace(self, **cleared) if cleared else self

    def to_dict(self) -> Dict[str, Any]:
        # Absent parts are omitted rather than serialised as null.
        payload: Dict[str, Any] = {"id": self.id}
        for cat in CATEGORIES:
            item = self.part(cat)
            if item is not None:
                payload[cat] = item.to_dict()
        return payload


__all__ = ["Outfit", "IncompleteOutfitError", "new_outfit_id"]
