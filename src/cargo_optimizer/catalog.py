"""Standard cargo archetypes, display colors and cargo-list helpers."""

from __future__ import annotations

import uuid

from cargo_optimizer.models import CargoItem, CatalogItem

# One color per cargo line, cycled by position in the cargo list.
CARGO_COLORS: list[str] = [
    "#ef4444", "#f97316", "#eab308", "#84cc16", "#22c55e", "#14b8a6",
    "#06b6d4", "#3b82f6", "#8b5cf6", "#d946ef", "#ec4899", "#78716c",
]

# Hypothetical filler additions; not part of CARGO_COLORS.
FILLER_COLOR = "#f43f5e"

DEFAULT_COLOR = "#ffffff"

FILLER_CATALOG: list[CatalogItem] = [
    CatalogItem(name="S2008 Pallet 1#", length=2500, width=1850, height=1570, weight=828, packaging="pallet"),
    CatalogItem(name="S2008 Pallet 2#", length=2500, width=1850, height=1500, weight=702, packaging="pallet"),
    CatalogItem(name="S2008 Pallet 3/4#", length=1850, width=1500, height=1560, weight=690, packaging="pallet"),
    CatalogItem(name="S2008 Pallet 5#", length=1600, width=1500, height=960, weight=408, packaging="pallet"),
    CatalogItem(name="S2008-15 Wooden Box 6#", length=850, width=850, height=760, weight=335, packaging="wooden_box"),
    CatalogItem(name="S2008-10 Wooden Box 7#", length=1130, width=800, height=1010, weight=1061, packaging="wooden_box"),
    CatalogItem(name="S2008 Pallet 8#", length=2460, width=1860, height=1000, weight=2130, packaging="pallet"),
    CatalogItem(name="S2008-1 Pallet 9#", length=2460, width=1860, height=1000, weight=2160, packaging="pallet"),
    CatalogItem(name="S2008-2/3 Pallet 10#", length=2460, width=1860, height=780, weight=1952, packaging="pallet"),
    CatalogItem(name="S2008-9 Pallet 11#", length=5900, width=1000, height=300, weight=1200, packaging="pallet"),
    CatalogItem(name="S2008-8 Bundle 12#", length=6000, width=275, height=275, weight=540, packaging="bundle"),
]


def assign_colors(cargo_items: list[CargoItem]) -> dict[str, str]:
    """Map each cargo line id to its display color for one optimization run."""
    return {item.id: CARGO_COLORS[index % len(CARGO_COLORS)] for index, item in enumerate(cargo_items)}


def quick_add(cargo_items: list[CargoItem], archetype: CatalogItem) -> list[CargoItem]:
    """
    Add one unit of a catalog archetype to a cargo list.

    A line with the same name gets its quantity bumped by one; otherwise a new
    line with quantity 1 is appended. The input list is not modified.
    """
    existing = next((item for item in cargo_items if item.name == archetype.name), None)
    if existing is not None:
        return [
            item.model_copy(update={"quantity": item.quantity + 1}) if item.id == existing.id else item
            for item in cargo_items
        ]

    new_item = CargoItem(id=str(uuid.uuid4()), quantity=1, **archetype.model_dump())
    return [*cargo_items, new_item]
