"""Plain-data views of packing results for a 3D viewer."""

from __future__ import annotations

from typing import Any

from cargo_optimizer.models import Container, PlacedCargo


def container_render(container: Container) -> dict[str, float]:
    return {
        "L": float(container.length),
        "W": float(container.width),
        "H": float(container.height),
    }


def placements_render(placed: list[PlacedCargo]) -> list[dict[str, Any]]:
    """Position, dims (L, W, H) and color of each placement, JSON primitives only."""
    return [
        {
            "x": float(p.x),
            "y": float(p.y),
            "z": float(p.z),
            "dims": [float(p.length), float(p.width), float(p.height)],
            "color": p.color,
        }
        for p in placed
    ]
