"""Pydantic schemas for persisted wardrobe state and operation results."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from models.clothing_item import NO_HAT_ID, ClothingItem
from models.outfit import Outfit
from models.taxonomy import CATEGORIES, REQUIRED_CATEGORIES, validate_category
from yourfit_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)


class ClothingItemRecord(BaseModel):
    """Stored shape of a clothing item."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    image: str = Field(min_length=1)
    type: str

    @field_validator("type")
    @classmethod
    def _validate_type(cls, value: str) -> str:
        return validate_category(value)

    def to_item(self) -> ClothingItem:
        return ClothingItem(id=self.id, image=self.image, type=self.type)


class OutfitPartRecord(ClothingItemRecord):
    """Item snapshot embedded in an outfit; the hat sentinel has no image."""

    image: str = ""


class OutfitRecord(BaseModel):
    """Stored shape of a saved outfit.

    Top and bottom are mandatory real items; every part must belong to the
    slot it is stored under.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    hat: Optional[OutfitPartRecord] = None
    top: OutfitPartRecord
    bottom: OutfitPartRecord
    shoes: Optional[OutfitPartRecord] = None

    @model_validator(mode="after")
    def _validate_slots(self) -> "OutfitRecord":
        for category in REQUIRED_CATEGORIES:
            if getattr(self, category).id == NO_HAT_ID:
                raise ValueError(f"Outfit {category} cannot be the no-hat placeholder")
        for category in CATEGORIES:
            part = getattr(self, category)
            if part is not None and part.type != category:
                raise ValueError(f"Outfit {category} holds a '{part.type}' item")
        return self

    def to_outfit(self) -> Outfit:
        hat = self.hat.to_item() if self.hat and self.hat.id != NO_HAT_ID else None
        return Outfit(
            id=self.id,
            hat=hat,
            top=self.top.to_item(),
            bottom=self.bottom.to_item(),
            shoes=self.shoes.to_item() if self.shoes else None,
        )


class OperationResult(BaseModel):
    """Envelope returned by the app facade for every user action."""

    status: Literal["ok", "error"]
    message: Optional[str] = None
    details: List[Dict[str, Any]] = []
    data: Dict[str, Any] = {}


_RECORDS_ADAPTER = TypeAdapter(List[Any])


def _validate_records(raw: str, model: type[BaseModel], label: str) -> List[BaseModel]:
    """Validate each stored record on its own; bad records are skipped and logged.

    Raises ``ValueError`` only when the blob is not a JSON list at all.
    """

    try:
        entries = _RECORDS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise ValueError(f"Malformed {label} payload: {exc.error_count()} error(s)") from exc

    records: List[BaseModel] = []
    for position, entry in enumerate(entries):
        try:
            records.append(model.model_validate(entry))
        except ValidationError as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "persisted_record_skipped",
                collection=label,
                position=position,
                errors=[err["msg"] for err in exc.errors()],
            )
    return records


def parse_clothes(raw: str) -> List[ClothingItem]:
    """Parse a stored clothes blob, raising ``ValueError`` when it is not a list."""

    records = _validate_records(raw, ClothingItemRecord, "clothes")
    return [record.to_item() for record in records if record.id != NO_HAT_ID]


def parse_outfits(raw: str) -> List[Outfit]:
    """Parse a stored outfits blob, raising ``ValueError`` when it is not a list."""

    return [record.to_outfit() for record in _validate_records(raw, OutfitRecord, "outfits")]


def operation_success(message: str | None = None, **data: Any) -> Dict[str, Any]:
    return OperationResult(status="ok", message=message, data=data).model_dump()


def operation_failure(message: str, exc: Exception | None = None) -> Dict[str, Any]:
    """Translate a rejected action into a consistent error payload."""

    details: List[Dict[str, Any]] = []
    if isinstance(exc, ValidationError):
        details = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
    elif exc is not None:
        details = [{"msg": str(exc)}]
    return OperationResult(status="error", message=message, details=details).model_dump()


__all__ = [
    "ClothingItemRecord",
    "OutfitPartRecord",
    "OutfitRecord",
    "OperationResult",
    "parse_clothes",
    "parse_outfits",
    "operation_success",
    "operation_failure",
]
