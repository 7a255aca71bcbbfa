"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict
from uuid import uuid4

from models.taxonomy import HAT, validate_category

NO_HAT_ID = "no-hat"


def new_item_id() -> str:
    return f"cloth-{uuid4().hex}"


@dataclass(frozen=True)
class ClothingItem:
    """A classified photo of one piece of clothing.

    ``image`` is an opaque handle (usually a ``data:`` URL) that is stored and
    forwarded but never interpreted.
    """

    id: str
    image: str
    type: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", validate_category(self.type))

    @property
    def is_sentinel(self) -> bool:
        return self.id == NO_HAT_ID

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Synthesised into the hat view on every read; never stored or persisted.
NO_HAT = ClothingItem(id=NO_HAT_ID, image="", type=HAT)


__all__ = ["ClothingItem", "NO_HAT", "NO_HAT_ID", "new_item_id"]
