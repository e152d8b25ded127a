from __future__ import annotations

import logging
import uuid
from collections import Counter
from typing import Optional

from cargo_optimizer.catalog import assign_colors
from cargo_optimizer.containers import EmptyContainerPoolError
from cargo_optimizer.metrics import placed_volume
from cargo_optimizer.models import (
    Box,
    CargoItem,
    Container,
    MultiContainerPackingResult,
    PackedContainer,
    PackingResult,
)
from cargo_optimizer.packing.space_packer import pack

logger = logging.getLogger(__name__)


def expand_boxes(cargo_items: list[CargoItem]) -> list[Box]:
    """One Box per unit; lines with zero quantity or a non-positive dimension are dropped."""
    boxes: list[Box] = []
    for item in cargo_items:
        if item.quantity <= 0 or item.length <= 0 or item.width <= 0 or item.height <= 0:
            continue
        boxes.extend(Box.from_cargo(item, str(uuid.uuid4())) for _ in range(item.quantity))
    return boxes


def box_sort_key(box: Box) -> tuple[float, float]:
    # Largest single dimension first, then largest volume
    return (-max(box.length, box.width, box.height), -box.volume)


def residual_cargo(cargo_items: list[CargoItem], remaining: list[Box]) -> list[CargoItem]:
    """Group never-placed boxes back into cargo lines carrying the residual quantity."""
    counts = Counter(box.id for box in remaining)
    return [
        item.model_copy(update={"quantity": counts[item.id]})
        for item in cargo_items
        if counts[item.id] > 0
    ]


def pack_into_multiple_containers(
    container_pool: list[Container],
    cargo_items: list[CargoItem],
) -> MultiContainerPackingResult:
    """
    Greedy allocation of a cargo list across a pool of containers.

    Each pool entry is one physical container. Every round packs all remaining
    boxes into every remaining entry from scratch, commits the entry with the
    best volume utilization and drops it from the pool. Stops when the boxes
    or the pool run out, or when no entry can take a single box.

    Raises:
        EmptyContainerPoolError: the pool is empty.
    """
    if not container_pool:
        raise EmptyContainerPoolError("Container pool is empty; nothing to pack into.")

    color_map = assign_colors(cargo_items)
    remaining_boxes = sorted(expand_boxes(cargo_items), key=box_sort_key)
    remaining_pool = list(container_pool)
    packed_containers: list[PackedContainer] = []

    while remaining_boxes and remaining_pool:
        best_result: Optional[PackingResult] = None
        best_index = -1
        best_utilization = -1.0

        for index, container in enumerate(remaining_pool):
            trial = pack(container, remaining_boxes, color_map)
            container_volume = container.volume
            if container_volume <= 0 or not trial.placed_cargo:
                continue

            utilization = placed_volume(trial.placed_cargo) / container_volume
            if utilization > best_utilization:
                best_utilization = utilization
                best_result = trial
                best_index = index

        if best_result is None:
            logger.debug("no remaining container accepts any of %d boxes", len(remaining_boxes))
            break

        container = remaining_pool.pop(best_index)
        packed_containers.append(PackedContainer(container=container, result=best_result))

        packed_ids = {p.instance_id for p in best_result.placed_cargo}
        remaining_boxes = [box for box in remaining_boxes if box.instance_id not in packed_ids]
        logger.debug(
            "committed %s with %d boxes (%.1f%% volume), %d boxes left",
            container.id, len(packed_ids), best_result.volume_utilization, len(remaining_boxes),
        )

    unplaced = residual_cargo(cargo_items, remaining_boxes)
    logger.info(
        "containers_used=%d, unplaced_units=%d",
        len(packed_containers), sum(item.quantity for item in unplaced),
    )
    return MultiContainerPackingResult(packed_containers=packed_containers, unplaced_cargo=unplaced)
