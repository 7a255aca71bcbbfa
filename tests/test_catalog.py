"""Catalog storage, categorized view and cascading delete tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from memory.catalog import Catalog
from memory.outfit_store import OutfitStore
from models.clothing_item import NO_HAT, NO_HAT_ID
from models.outfit import Outfit
from tools.kv_store import InMemoryKeyValueStore
from tools.persistence import PersistenceBridge


@pytest.fixture()
def persistence() -> PersistenceBridge:
    return PersistenceBridge(InMemoryKeyValueStore())


@pytest.fixture()
def store(persistence: PersistenceBridge) -> OutfitStore:
    return OutfitStore(persistence=persistence)


@pytest.fixture()
def catalog(persistence: PersistenceBridge, store: OutfitStore) -> Catalog:
    return Catalog(outfit_store=store, persistence=persistence)


def test_add_item_assigns_unique_ids_and_persists(catalog: Catalog, persistence: PersistenceBridge) -> None:
    first = catalog.add_item("data:image/png;base64,AAA", "top")
    second = catalog.add_item("data:image/png;base64,BBB", "top")

    assert first.id != second.id
    assert first.id.startswith("cloth-")
    assert catalog.list_items() == [first, second]
    assert catalog.get_item(first.id) == first
    assert persistence.load_clothes() == [first, second]


@pytest.mark.parametrize("image, category", [("", "top"), (None, "top"), ("img", "dress"), ("img", "")])
def test_add_item_rejects_invalid_inputs(catalog: Catalog, image, category) -> None:
    with pytest.raises(ValueError):
        catalog.add_item(image, category)
    assert len(catalog) == 0


def test_categorized_view_prefixes_hat_sentinel(catalog: Catalog) -> None:
    """The hat list always starts with "no hat", even with no hats stored."""

    view = catalog.categorized_view()
    assert view == {"hat": [NO_HAT], "top": [], "bottom": [], "shoes": []}

    hat = catalog.add_item("hat-img", "hat")
    top = catalog.add_item("top-img", "top")
    view = catalog.categorized_view()
    assert view["hat"] == [NO_HAT, hat]
    assert view["top"] == [top]
    assert NO_HAT_ID not in catalog


def test_categorized_view_keeps_insertion_order(catalog: Catalog) -> None:
    tops = [catalog.add_item(f"top-{i}", "top") for i in range(3)]
    catalog.add_item("bottom-0", "bottom")
    assert catalog.categorized_view()["top"] == tops
    assert catalog.items_of("top") == tops


def test_delete_unknown_or_sentinel_is_noop(catalog: Catalog) -> None:
    item = catalog.add_item("img", "top")
    assert catalog.delete_item("missing") is False
    assert catalog.delete_item(NO_HAT_ID) is False
    assert catalog.list_items() == [item]


def test_delete_removes_dependent_outfit(catalog: Catalog, store: OutfitStore) -> None:
    """Deleting an outfit's top removes the whole outfit."""

    top = catalog.add_item("top", "top")
    bottom = catalog.add_item("bottom", "bottom")
    store.save(Outfit(id="o1", top=top, bottom=bottom))

    assert catalog.delete_item(top.id) is True
    assert top.id not in catalog
    assert len(store) == 0


def test_delete_preserves_independent_fields(catalog: Catalog, store: OutfitStore, persistence: PersistenceBridge) -> None:
    hat = catalog.add_item("hat", "hat")
    top = catalog.add_item("top", "top")
    bottom = catalog.add_item("bottom", "bottom")
    shoes = catalog.add_item("shoes", "shoes")
    store.save(Outfit(id="o1", hat=hat, top=top, bottom=bottom, shoes=shoes))

    catalog.delete_item(hat.id)

    remaining = store.get("o1")
    assert remaining is not None
    assert remaining.hat is None
    assert (remaining.top, remaining.bottom, remaining.shoes) == (top, bottom, shoes)
    assert persistence.load_outfits() == [remaining]


def test_cascade_only_touches_referencing_outfits(catalog: Catalog, store: OutfitStore) -> None:
    top_a = catalog.add_item("a", "top")
    top_b = catalog.add_item("b", "top")
    bottom = catalog.add_item("c", "bottom")
    store.save(Outfit(id="o1", top=top_a, bottom=bottom))
    store.save(Outfit(id="o2", top=top_b, bottom=bottom))

    catalog.delete_item(top_a.id)
    assert [outfit.id for outfit in store] == ["o2"]

    catalog.delete_item(bottom.id)
    assert len(store) == 0
    assert store.current_outfit() is None
    assert store.cursor == 0


def test_catalog_without_outfit_store_still_deletes(persistence: PersistenceBridge) -> None:
    catalog = Catalog(persistence=persistence)
    item = catalog.add_item("img", "shoes")
    assert catalog.delete_item(item.id) is True
    assert persistence.load_clothes() == []
