"""In-progress outfit selection over the catalog's categorized view."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from logic.index_cycler import next_index
from memory.catalog import Catalog
from models.clothing_item import ClothingItem
from models.outfit import IncompleteOutfitError, Outfit, new_outfit_id
from models.taxonomy import BOTTOM, CATEGORIES, HAT, REQUIRED_CATEGORIES, SHOES, TOP, validate_category
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


def _resolve(items: List[ClothingItem], index: int) -> Optional[ClothingItem]:
    if 0 <= index < len(items):
        return items[index]
    return None


class OutfitComposer:
    """Holds one selection index per category.

    Indexes point into ``catalog.categorized_view()`` and may go stale when the
    catalog shrinks; stale indexes resolve to nothing rather than wrapping.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.selection: Dict[str, int] = {category: 0 for category in CATEGORIES}

    def reset(self) -> None:
        self.selection = {category: 0 for category in CATEGORIES}

    def change_part(self, category: str, delta: int) -> int:
        category_key = validate_category(category)
        items = self.catalog.categorized_view()[category_key]
        if not items:
            return self.selection[category_key]
        self.selection[category_key] = next_index(len(items), self.selection[category_key], delta)
        return self.selection[category_key]

    def selected_item(self, category: str) -> Optional[ClothingItem]:
        category_key = validate_category(category)
        items = self.catalog.categorized_view()[category_key]
        return _resolve(items, self.selection[category_key])

    def selected_items(self) -> Dict[str, Optional[ClothingItem]]:
        view = self.catalog.categorized_view()
        return {category: _resolve(view[category], self.selection[category]) for category in CATEGORIES}

    @property
    def can_save(self) -> bool:
        """True when both a top and a bottom resolve to real items."""

        view = self.catalog.categorized_view()
        return all(
            view[category] and _resolve(view[category], self.selection[category]) is not None
            for category in REQUIRED_CATEGORIES
        )

    def build_outfit(self) -> Outfit:
        """Materialise the current selection into an unsaved :class:`Outfit`.

        The "no hat" entry is left out rather than stored. Raises
        :class:`IncompleteOutfitError` when no valid top and bottom are selected.
        """

        if not self.can_save:
            log_event(
                LOGGER,
                logging.WARNING,
                "outfit_build_rejected",
                selection=dict(self.selection),
            )
            raise IncompleteOutfitError("Cannot build an outfit without a top and bottom.")

        parts: Dict[str, ClothingItem] = {}
        for category, item in self.selected_items().items():
            if item is None or item.is_sentinel:
                continue
            parts[category] = item

        return Outfit(
            id=new_outfit_id(),
            top=parts[TOP],
            bottom=parts[BOTTOM],
            hat=parts.get(HAT),
            shoes=parts.get(SHOES),
        )


__all__ = ["OutfitComposer"]
