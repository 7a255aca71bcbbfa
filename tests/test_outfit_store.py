"""Saved outfit store: save gating, browsing and cursor re-clamping."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_composer import OutfitComposer
from memory.catalog import Catalog
from memory.outfit_store import OutfitStore
from models.clothing_item import NO_HAT, ClothingItem
from models.outfit import Outfit
from tools.kv_store import InMemoryKeyValueStore
from tools.persistence import OUTFITS_KEY, PersistenceBridge

TOP = ClothingItem(id="cloth-top", image="top-img", type="top")
BOTTOM = ClothingItem(id="cloth-bottom", image="bottom-img", type="bottom")
SHOES = ClothingItem(id="cloth-shoes", image="shoes-img", type="shoes")


def _outfits(count: int) -> List[Outfit]:
    return [Outfit(id=f"o{i}", top=TOP, bottom=BOTTOM) for i in range(count)]


@pytest.fixture()
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def store(kv_store: InMemoryKeyValueStore) -> OutfitStore:
    return OutfitStore(persistence=PersistenceBridge(kv_store))


def test_empty_store_is_safe(store: OutfitStore) -> None:
    assert store.current_outfit() is None
    assert store.change_browse(1) == 0
    assert store.change_browse(-1) == 0
    assert store.delete_outfit("missing") is False


def test_save_focuses_new_outfit(store: OutfitStore) -> None:
    for outfit in _outfits(3):
        assert store.save(outfit) is True
        assert store.current_outfit() == outfit
    assert store.cursor == 2


def test_save_rejects_incomplete_outfit(
    store: OutfitStore, kv_store: InMemoryKeyValueStore, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert store.save(Outfit(id="bad", top=TOP, bottom=None)) is False
    assert len(store) == 0
    assert kv_store.get(OUTFITS_KEY) is None
    assert any(record.getMessage() == "outfit_save_rejected" for record in caplog.records)


@pytest.mark.parametrize(
    "outfit",
    [
        Outfit(id="sentinel-top", top=NO_HAT, bottom=BOTTOM),
        Outfit(id="sentinel-bottom", top=TOP, bottom=NO_HAT),
        Outfit(id="shoes-as-top", top=SHOES, bottom=BOTTOM),
        Outfit(id="top-as-shoes", top=TOP, bottom=BOTTOM, shoes=TOP),
    ],
)
def test_save_rejects_placeholder_or_misplaced_parts(
    outfit: Outfit, store: OutfitStore, kv_store: InMemoryKeyValueStore
) -> None:
    assert store.save(outfit) is False
    assert len(store) == 0
    assert kv_store.get(OUTFITS_KEY) is None


def test_save_resets_composer_selection(store: OutfitStore) -> None:
    catalog = Catalog()
    catalog.add_item("top-a", "top")
    catalog.add_item("top-b", "top")
    catalog.add_item("bottom", "bottom")
    composer = OutfitComposer(catalog)
    composer.change_part("top", 1)

    assert store.save(composer.build_outfit(), composer=composer)
    assert composer.selection == {"hat": 0, "top": 0, "bottom": 0, "shoes": 0}


def test_failed_save_keeps_composer_selection(store: OutfitStore) -> None:
    catalog = Catalog()
    catalog.add_item("top-a", "top")
    catalog.add_item("top-b", "top")
    composer = OutfitComposer(catalog)
    composer.change_part("top", 1)

    assert store.save(Outfit(id="bad", top=TOP, bottom=None), composer=composer) is False
    assert composer.selection["top"] == 1


def test_change_browse_wraps(store: OutfitStore) -> None:
    for outfit in _outfits(3):
        store.save(outfit)
    assert store.change_browse(1) == 0
    assert store.change_browse(-1) == 2
    assert store.current_outfit().id == "o2"


def test_delete_last_outfit_moves_cursor_to_new_last(store: OutfitStore) -> None:
    for outfit in _outfits(3):
        store.save(outfit)
    assert store.cursor == 2

    assert store.delete_outfit("o2") is True
    assert store.cursor == 1
    assert store.current_outfit().id == "o1"


def test_delete_before_cursor_keeps_cursor_number(store: OutfitStore) -> None:
    for outfit in _outfits(3):
        store.save(outfit)
    store.change_browse(-1)
    assert store.cursor == 1

    store.delete_outfit("o0")
    assert store.cursor == 1
    assert store.current_outfit().id == "o2"


def test_delete_clamps_out_of_bounds_cursor(store: OutfitStore) -> None:
    for outfit in _outfits(3):
        store.save(outfit)

    store.delete_outfit("o0")
    assert store.cursor == 1
    store.delete_outfit("o1")
    assert store.cursor == 0
    store.delete_outfit("o2")
    assert store.cursor == 0
    assert store.current_outfit() is None


def test_delete_unknown_outfit_leaves_state(store: OutfitStore, kv_store: InMemoryKeyValueStore) -> None:
    for outfit in _outfits(2):
        store.save(outfit)
    before = kv_store.get(OUTFITS_KEY)

    assert store.delete_outfit("nope") is False
    assert store.cursor == 1
    assert kv_store.get(OUTFITS_KEY) == before


def test_load_restores_saved_outfits(kv_store: InMemoryKeyValueStore, store: OutfitStore) -> None:
    for outfit in _outfits(2):
        store.save(outfit)

    reloaded = OutfitStore.load(PersistenceBridge(kv_store))
    assert reloaded.outfits == store.outfits
    assert reloaded.cursor == 0


def test_remove_item_references_clamps_cursor(store: OutfitStore) -> None:
    other_top = ClothingItem(id="cloth-other", image="img", type="top")
    store.save(Outfit(id="keep", top=other_top, bottom=BOTTOM))
    store.save(Outfit(id="drop", top=TOP, bottom=BOTTOM))
    assert store.cursor == 1

    assert store.remove_item_references(TOP.id) == 1
    assert [outfit.id for outfit in store] == ["keep"]
    assert store.cursor == 0
    assert store.remove_item_references("cloth-unused") == 0
