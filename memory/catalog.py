"""The user's clothing catalog and its categorized view."""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from models.clothing_item import NO_HAT, NO_HAT_ID, ClothingItem, new_item_id
from models.taxonomy import CATEGORIES, HAT, validate_category
from memory.outfit_store import OutfitStore
from tools.persistence import PersistenceBridge
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


class Catalog:
    """Owns the clothing items, keyed by id in insertion order.

    Deleting an item cascades synchronously into the attached
    :class:`OutfitStore` so no saved outfit keeps a dangling reference.
    """

    def __init__(
        self,
        items: Optional[List[ClothingItem]] = None,
        outfit_store: Optional[OutfitStore] = None,
        persistence: Optional[PersistenceBridge] = None,
    ) -> None:
        self._items: Dict[str, ClothingItem] = {}
        for item in items or []:
            self._items[item.id] = item
        self.outfit_store = outfit_store
        self.persistence = persistence

    @classmethod
    def load(cls, persistence: PersistenceBridge, outfit_store: Optional[OutfitStore] = None) -> "Catalog":
        return cls(persistence.load_clothes(), outfit_store=outfit_store, persistence=persistence)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[ClothingItem]:
        return iter(list(self._items.values()))

    def list_items(self) -> List[ClothingItem]:
        return list(self._items.values())

    def get_item(self, item_id: str) -> Optional[ClothingItem]:
        return self._items.get(item_id)

    def add_item(self, image: str, category: str) -> ClothingItem:
        """Store a newly classified image under a fresh id.

        Raises ``ValueError`` when the image handle is empty or the category is
        not one of the clothing slots.
        """

        if not isinstance(image, str) or not image:
            raise ValueError("A clothing item needs a non-empty image handle")
        item = ClothingItem(id=new_item_id(), image=image, type=validate_category(category))
        self._items[item.id] = item
        self._persist()
        log_event(LOGGER, logging.INFO, "clothing_item_added", item_id=item.id, category=item.type)
        return item

    def items_of(self, category: str) -> List[ClothingItem]:
        category_key = validate_category(category)
        return [item for item in self._items.values() if item.type == category_key]

    def categorized_view(self) -> Dict[str, List[ClothingItem]]:
        """Partition items by category, with the "no hat" entry leading the hats.

        Derived on every call and never stored.
        """

        view: Dict[str, List[ClothingItem]] = {category: [] for category in CATEGORIES}
        for item in self._items.values():
            view[item.type].append(item)
        view[HAT].insert(0, NO_HAT)
        return view

    def delete_item(self, item_id: str) -> bool:
        """Remove an item and clean up every outfit that references it.

        Unknown ids and the "no hat" entry are ignored.
        """

        if item_id == NO_HAT_ID or item_id not in self._items:
            return False

        removed = self._items.pop(item_id)
        self._persist()
        cascaded = self.outfit_store.remove_item_references(item_id) if self.outfit_store is not None else 0
        log_event(
            LOGGER,
            logging.INFO,
            "clothing_item_deleted",
            item_id=item_id,
            category=removed.type,
            outfits_touched=cascaded,
        )
        return True

    def _persist(self) -> None:
        if self.persistence is not None:
            self.persistence.save_clothes(self._items.values())


__all__ = ["Catalog"]
