"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import NO_HAT, NO_HAT_ID, ClothingItem
from models.outfit import IncompleteOutfitError, Outfit

__all__ = ["ClothingItem", "NO_HAT", "NO_HAT_ID", "IncompleteOutfitError", "Outfit"]
