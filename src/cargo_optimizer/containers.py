# src/cargo_optimizer/containers.py
from __future__ import annotations

from typing import Mapping, Sequence

from cargo_optimizer.models import Container


class EmptyContainerPoolError(ValueError):
    """Raised when an allocation is requested without any container to fill."""


# Interior dims (mm) and max gross weight (kg).
CONTAINER_PRESETS: list[Container] = [
    Container(id="20GP", name="20' GP", length=5898, width=2352, height=2393, max_weight=28200),
    Container(id="40GP", name="40' GP", length=12032, width=2352, height=2393, max_weight=28800),
    Container(id="40HQ", name="40' HQ", length=12032, width=2352, height=2698, max_weight=28600),
    Container(id="custom", name="Custom", length=12000, width=2400, height=2500, max_weight=30000),
]


def get_container(preset: str, presets: Sequence[Container] = CONTAINER_PRESETS) -> Container:
    key = preset.strip().upper()
    for container in presets:
        if container.id.upper() == key:
            return container
    raise ValueError(f"Unknown container preset '{preset}'. Valid: {sorted(c.id for c in presets)}")


def build_container_pool(
    quantities: Mapping[str, int],
    presets: Sequence[Container] = CONTAINER_PRESETS,
) -> list[Container]:
    """
    Flatten {preset_id: quantity} into a pool with one entry per physical container.

    Ids match case-insensitively, as in get_container. Unknown ids and
    non-positive quantities are skipped.
    """
    by_id = {c.id.upper(): c for c in presets}
    pool: list[Container] = []
    for preset_id, quantity in quantities.items():
        container = by_id.get(preset_id.strip().upper())
        if container is None or quantity <= 0:
            continue
        pool.extend([container] * int(quantity))

    if not pool:
        raise EmptyContainerPoolError(
            "Select at least one container and set a quantity greater than 0."
        )
    return pool
