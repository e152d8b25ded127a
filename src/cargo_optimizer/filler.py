"""Filler analysis: what standard cargo still fits into an already packed container."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from cargo_optimizer.catalog import FILLER_CATALOG, FILLER_COLOR
from cargo_optimizer.geometry import fits_in_space, split_space
from cargo_optimizer.metrics import percentage, placed_volume
from cargo_optimizer.models import (
    CatalogItem,
    Container,
    FillerOption,
    PackingResult,
    PlacedCargo,
    Space,
    SupportingSurface,
)

logger = logging.getLogger(__name__)

FILLER_ITEM_ID = "filler-item"


def pack_single_item_type(
    spaces: list[Space],
    item: CatalogItem,
    remaining_weight: float,
    color: str = FILLER_COLOR,
) -> list[PlacedCargo]:
    """
    Place as many units of one item as the spaces and weight margin allow.

    Works on a deep copy of `spaces`. The best space is simply the lowest
    (z, y, x) corner that fits; there is no identity scoring with one item type.
    """
    current = [space.model_copy(deep=True) for space in spaces]
    placed: list[PlacedCargo] = []
    added_weight = 0.0

    while added_weight + item.weight <= remaining_weight:
        best_index: Optional[int] = None
        for index, space in enumerate(current):
            if not fits_in_space(item.length, item.width, item.height, space):
                continue
            if best_index is None or (space.z, space.y, space.x) < (
                current[best_index].z, current[best_index].y, current[best_index].x
            ):
                best_index = index

        if best_index is None:
            break

        space = current.pop(best_index)
        placed.append(PlacedCargo(
            id=FILLER_ITEM_ID,
            instance_id=str(uuid.uuid4()),
            name=item.name,
            x=space.x,
            y=space.y,
            z=space.z,
            length=item.length,
            width=item.width,
            height=item.height,
            weight=item.weight,
            is_fragile=item.is_fragile,
            packaging=item.packaging,
            color=color,
        ))
        added_weight += item.weight

        surface = SupportingSurface(
            item_id=FILLER_ITEM_ID,
            length=item.length,
            width=item.width,
            packaging=item.packaging,
        )
        current.extend(split_space(space, item.length, item.width, item.height, item.is_fragile, surface))

    return placed


def calculate_filler_options(
    container: Container,
    primary_result: PackingResult,
    catalog: Optional[list[CatalogItem]] = None,
) -> list[FillerOption]:
    """
    Test every catalog item against the leftover spaces and weight margin.

    Only items with at least one placed unit are returned, most units first,
    then largest added volume utilization.
    """
    if catalog is None:
        catalog = FILLER_CATALOG

    remaining_weight = float(container.max_weight) - primary_result.total_weight
    if not primary_result.remaining_spaces or remaining_weight <= 0:
        return []

    container_volume = container.volume
    options: list[FillerOption] = []

    for item in catalog:
        placed = pack_single_item_type(primary_result.remaining_spaces, item, remaining_weight)
        if not placed:
            continue

        options.append(FillerOption(
            item=item,
            placed_filler_cargo=placed,
            quantity=len(placed),
            added_weight=sum(p.weight for p in placed),
            added_volume_utilization=percentage(placed_volume(placed), container_volume),
        ))

    options.sort(key=lambda o: (-o.quantity, -o.added_volume_utilization))
    logger.debug("filler analysis for %s: %d of %d catalog items fit", container.id, len(options), len(catalog))
    return options
