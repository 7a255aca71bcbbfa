"""Load and save the catalog and saved outfits as keyed JSON blobs."""
from __future__ import annotations

import json
import logging
from typing import Iterable, List

from logic.validation import parse_clothes, parse_outfits
from models.clothing_item import ClothingItem
from models.outfit import Outfit
from tools.kv_store import KeyValueStore
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)

CLOTHES_KEY = "yourfit-clothes"
OUTFITS_KEY = "yourfit-outfits"
THEME_KEY = "yourfit-theme"
ACCENT_COLOR_KEY = "yourfit-color"


class PersistenceBridge:
    """Serialise whole collections into a :class:`KeyValueStore`.

    Loading never raises: an absent key or a blob that fails to parse is logged
    and treated as an empty collection.
    """

    def __init__(self, kv_store: KeyValueStore) -> None:
        self.kv_store = kv_store

    def load_clothes(self) -> List[ClothingItem]:
        return self._load(CLOTHES_KEY, parse_clothes)

    def load_outfits(self) -> List[Outfit]:
        return self._load(OUTFITS_KEY, parse_outfits)

    def save_clothes(self, items: Iterable[ClothingItem]) -> None:
        payload = [item.to_dict() for item in items]
        self.kv_store.set(CLOTHES_KEY, json.dumps(payload))
        log_event(LOGGER, logging.DEBUG, "clothes_persisted", count=len(payload))

    def save_outfits(self, outfits: Iterable[Outfit]) -> None:
        payload = [outfit.to_dict() for outfit in outfits]
        self.kv_store.set(OUTFITS_KEY, json.dumps(payload))
        log_event(LOGGER, logging.DEBUG, "outfits_persisted", count=len(payload))

    def _load(self, key: str, parser):
        raw = self.kv_store.get(key)
        if not raw:
            return []
        try:
            return parser(raw)
        except ValueError as exc:
            log_event(
                LOGGER,
                logging.ERROR,
                "persisted_state_invalid",
                key=key,
                error=str(exc),
            )
            return []


__all__ = [
    "PersistenceBridge",
    "CLOTHES_KEY",
    "OUTFITS_KEY",
    "THEME_KEY",
    "ACCENT_COLOR_KEY",
]
