from __future__ import annotations

import math
from typing import Iterable

from cargo_optimizer.models import Container, PlacedCargo


def placed_volume(placed: Iterable[PlacedCargo]) -> float:
    return sum(float(p.length) * float(p.width) * float(p.height) for p in placed)


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0.0 when whole is zero or the ratio is not finite."""
    if whole <= 0:
        return 0.0
    value = part / whole * 100.0
    return value if math.isfinite(value) else 0.0


def compute_metrics(container: Container, placed: list[PlacedCargo], total_weight: float) -> tuple[float, float]:
    volume_utilization = percentage(placed_volume(placed), container.volume)
    weight_utilization = percentage(total_weight, float(container.max_weight))
    return volume_utilization, weight_utilization
