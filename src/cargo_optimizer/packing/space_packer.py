# src/cargo_optimizer/packing/space_packer.py

from __future__ import annotations

import logging
from typing import Optional

from cargo_optimizer.catalog import DEFAULT_COLOR
from cargo_optimizer.geometry import container_space, fits_in_space, split_space
from cargo_optimizer.metrics import compute_metrics
from cargo_optimizer.models import Box, Container, PackingResult, PlacedCargo, Space, SupportingSurface

logger = logging.getLogger(__name__)

# Base score minus position penalty: lower z, then y, then x wins.
BASE_SCORE = 1_000_000_000
Z_WEIGHT = 10_000
Y_WEIGHT = 100

# Resting on an identical item outranks any position.
STACK_BONUS = 3_000_000_000
# Flush against an identical item of at least the same height.
CLUSTER_BONUS = 1_500_000_000


def is_candidate(box: Box, space: Space) -> bool:
    """Box fits the space and, for cartons, rests on the floor or another carton."""
    surface = space.supporting_surface
    if box.packaging == "carton" and surface is not None and surface.packaging != "carton":
        return False
    return fits_in_space(box.length, box.width, box.height, space)


def is_adjacent_to_identical(box: Box, space: Space, placed: list[PlacedCargo]) -> bool:
    for p in placed:
        if p.id != box.id or p.z != space.z or p.height < box.height:
            continue
        if p.x + p.length == space.x and p.y == space.y:
            return True
        if p.y + p.width == space.y and p.x == space.x:
            return True
    return False


def score_space(box: Box, space: Space, placed: list[PlacedCargo]) -> float:
    score = BASE_SCORE - (space.z * Z_WEIGHT + space.y * Y_WEIGHT + space.x)

    surface = space.supporting_surface
    if surface is not None and surface.item_id == box.id:
        score += STACK_BONUS

    if is_adjacent_to_identical(box, space, placed):
        score += CLUSTER_BONUS

    return score


def find_best_space(box: Box, spaces: list[Space], placed: list[PlacedCargo]) -> Optional[int]:
    """Index of the highest scoring candidate space; the first one wins ties."""
    best_index: Optional[int] = None
    best_score = 0.0
    for index, space in enumerate(spaces):
        if not is_candidate(box, space):
            continue
        score = score_space(box, space, placed)
        if best_index is None or score > best_score:
            best_index = index
            best_score = score
    return best_index


def pack(container: Container, boxes: list[Box], color_map: Optional[dict[str, str]] = None) -> PackingResult:
    """
    Space-partitioning packer for a single container.

    - Boxes are taken in the given order, sturdy boxes first, fragile boxes after
    - A box over the remaining weight budget is skipped
    - Each box goes to the best scoring free space, at its origin corner
    - The consumed space is replaced by its right/back/top children
    - Boxes without a candidate space are left out silently
    - Works on its own free-space list; the container is never mutated
    """
    color_map = color_map or {}

    initial = container_space(container)
    spaces: list[Space] = [initial] if initial is not None else []
    placed: list[PlacedCargo] = []
    total_weight = 0.0

    ordered = [b for b in boxes if not b.is_fragile] + [b for b in boxes if b.is_fragile]

    for box in ordered:
        if total_weight + box.weight > container.max_weight:
            continue

        best_index = find_best_space(box, spaces, placed)
        if best_index is None:
            continue

        space = spaces.pop(best_index)
        placed.append(PlacedCargo(
            id=box.id,
            instance_id=box.instance_id,
            name=box.name,
            x=space.x,
            y=space.y,
            z=space.z,
            length=box.length,
            width=box.width,
            height=box.height,
            weight=box.weight,
            is_fragile=box.is_fragile,
            packaging=box.packaging,
            color=color_map.get(box.id, DEFAULT_COLOR),
        ))
        total_weight += box.weight

        surface = SupportingSurface(
            item_id=box.id,
            length=box.length,
            width=box.width,
            packaging=box.packaging,
        )
        spaces.extend(split_space(space, box.length, box.width, box.height, box.is_fragile, surface))

    volume_utilization, weight_utilization = compute_metrics(container, placed, total_weight)
    logger.debug(
        "packed %d/%d boxes into %s (volume %.1f%%, weight %.1f%%)",
        len(placed), len(boxes), container.id, volume_utilization, weight_utilization,
    )

    return PackingResult(
        placed_cargo=placed,
        unplaced_cargo=[],
        volume_utilization=volume_utilization,
        weight_utilization=weight_utilization,
        total_weight=total_weight,
        remaining_spaces=spaces,
    )
