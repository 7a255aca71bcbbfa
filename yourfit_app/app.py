"""YourFit app bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from yourfit_app.config import YourFitConfig
from yourfit_app.logging_config import configure_logging, get_logger, log_event
from logic.outfit_composer import OutfitComposer
from logic.validation import operation_failure, operation_success
from memory.catalog import Catalog
from memory.outfit_store import OutfitStore
from memory.preferences import PreferenceService
from models.clothing_item import ClothingItem
from models.outfit import IncompleteOutfitError, Outfit
from tools.kv_store import KeyValueStore, build_kv_store
from tools.observability import instrument_operation
from tools.persistence import PersistenceBridge
from tools.upload_queue import UploadQueue

LOGGER = get_logger(__name__)

HOME_VIEW = "home"
CLASSIFIER_VIEW = "classifier"
WARDROBE_VIEW = "wardrobe"
CREATOR_VIEW = "creator"
VIEWS = (HOME_VIEW, CLASSIFIER_VIEW, WARDROBE_VIEW, CREATOR_VIEW)


class WardrobeApp:
    """Wires together storage, the catalog, the composer and saved outfits.

    Every user action is a method here that returns an ``{"status": ...}``
    payload; none of them raise for expected user errors.
    """

    def __init__(self, config: YourFitConfig | None = None, kv_store: KeyValueStore | None = None) -> None:
        self.config = config or YourFitConfig.from_env()
        configure_logging(self.config.log_level)

        self.kv_store = kv_store or build_kv_store(
            self.config.storage_backend, self.config.resolved_storage_path
        )
        self.persistence = PersistenceBridge(self.kv_store)
        self.outfit_store = OutfitStore.load(self.persistence)
        self.catalog = Catalog.load(self.persistence, outfit_store=self.outfit_store)
        self.composer = OutfitComposer(self.catalog)
        self.uploads = UploadQueue()
        self.preferences = PreferenceService(self.kv_store)
        self.current_view = HOME_VIEW

        log_event(
            LOGGER,
            logging.INFO,
            "app_started",
            storage_backend=self.config.storage_backend,
            environment=self.config.environment or "local",
            clothing_items=len(self.catalog),
            saved_outfits=len(self.outfit_store),
        )

    # Uploads and classification

    @instrument_operation("upload_images")
    def upload_images(self, images: str | Iterable[str]) -> dict:
        """Queue already-encoded image handles for classification."""

        added = self.uploads.enqueue(images)
        if not added:
            return operation_failure("No images to upload")
        self.current_view = CLASSIFIER_VIEW
        return operation_success(pending=len(self.uploads), added=[upload.id for upload in added])

    @instrument_operation("upload_files")
    def upload_files(self, paths: Iterable[str | Path]) -> dict:
        try:
            added = self.uploads.enqueue_files(paths)
        except OSError as exc:
            return operation_failure("Could not read uploaded file", exc)
        if not added:
            return operation_failure("No images to upload")
        self.current_view = CLASSIFIER_VIEW
        return operation_success(pending=len(self.uploads), added=[upload.id for upload in added])

    @instrument_operation("classify_pending")
    def classify_pending(self, category: str) -> dict:
        """Classify the oldest pending upload; leave the classifier once all are done."""

        if not len(self.uploads):
            return operation_failure("No uploads are waiting for classification")
        try:
            item = self.uploads.classify_next(category, self.catalog)
        except ValueError as exc:
            return operation_failure("Could not classify upload", exc)
        if not len(self.uploads):
            self.current_view = WARDROBE_VIEW
        return operation_success(item_id=item.id if item else None, remaining=len(self.uploads))

    # Composition

    def categorized_view(self) -> Dict[str, List[ClothingItem]]:
        return self.catalog.categorized_view()

    @property
    def can_save(self) -> bool:
        return self.composer.can_save

    @instrument_operation("change_part")
    def change_part(self, category: str, delta: int) -> dict:
        try:
            index = self.composer.change_part(category, delta)
        except ValueError as exc:
            return operation_failure("Unknown clothing category", exc)
        return operation_success(category=category, index=index, can_save=self.composer.can_save)

    @instrument_operation("save_outfit")
    def save_outfit(self) -> dict:
        try:
            outfit = self.composer.build_outfit()
        except IncompleteOutfitError as exc:
            return operation_failure("Cannot save outfit without a top and bottom.", exc)
        if not self.outfit_store.save(outfit, composer=self.composer):
            return operation_failure("Cannot save outfit without a top and bottom.")
        self.current_view = HOME_VIEW
        return operation_success(outfit_id=outfit.id, cursor=self.outfit_store.cursor)

    # Browsing and deletion

    def current_outfit(self) -> Optional[Outfit]:
        return self.outfit_store.current_outfit()

    @instrument_operation("change_outfit")
    def change_outfit(self, delta: int) -> dict:
        if not len(self.outfit_store):
            return operation_success("No saved outfits", cursor=0, total=0)
        cursor = self.outfit_store.change_browse(delta)
        return operation_success(cursor=cursor, total=len(self.outfit_store))

    @instrument_operation("delete_clothing_item")
    def delete_clothing_item(self, item_id: str) -> dict:
        deleted = self.catalog.delete_item(item_id)
        return operation_success(
            deleted=deleted,
            saved_outfits=len(self.outfit_store),
            cursor=self.outfit_store.cursor,
        )

    @instrument_operation("delete_outfit")
    def delete_outfit(self, outfit_id: str) -> dict:
        deleted = self.outfit_store.delete_outfit(outfit_id)
        return operation_success(
            deleted=deleted,
            saved_outfits=len(self.outfit_store),
            cursor=self.outfit_store.cursor,
        )

    # Navigation and preferences

    @instrument_operation("open_view")
    def open_view(self, view: str) -> dict:
        if view not in VIEWS:
            return operation_failure(f"Unknown view '{view}'")
        if view == CLASSIFIER_VIEW and not len(self.uploads):
            return operation_failure("No uploads are waiting for classification")
        self.current_view = view
        return operation_success(view=view)

    @instrument_operation("set_theme")
    def set_theme(self, theme: str) -> dict:
        try:
            self.preferences.set_theme(theme)
        except ValueError as exc:
            return operation_failure("Unsupported theme", exc)
        return operation_success(**self.preferences.as_dict())

    @instrument_operation("toggle_theme")
    def toggle_theme(self) -> dict:
        self.preferences.toggle_theme()
        return operation_success(**self.preferences.as_dict())

    @instrument_operation("set_accent_color")
    def set_accent_color(self, color: str) -> dict:
        try:
            self.preferences.set_accent_color(color)
        except ValueError as exc:
            return operation_failure("Unsupported accent color", exc)
        return operation_success(**self.preferences.as_dict())

    def snapshot(self) -> dict:
        """Summarise what a front end would render right now."""

        current = self.current_outfit()
        selected = self.composer.selected_items()
        return {
            "view": self.current_view,
            "needs_onboarding": not len(self.catalog) and not len(self.uploads),
            "pending_uploads": len(self.uploads),
            "clothing_counts": {
                category: len([item for item in items if not item.is_sentinel])
                for category, items in self.catalog.categorized_view().items()
            },
            "selection": dict(self.composer.selection),
            "selected_item_ids": {
                category: item.id if item else None for category, item in selected.items()
            },
            "can_save": self.composer.can_save,
            "saved_outfits": len(self.outfit_store),
            "cursor": self.outfit_store.cursor,
            "current_outfit_id": current.id if current else None,
            "preferences": self.preferences.as_dict(),
        }


__all__ = ["WardrobeApp", "VIEWS"]
