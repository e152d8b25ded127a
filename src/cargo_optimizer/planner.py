"""Plan building shared by the HTTP service and the CLI."""

from __future__ import annotations

from typing import Any, Optional

from cargo_optimizer.containers import EmptyContainerPoolError, build_container_pool
from cargo_optimizer.io.schemas import OptimizeRequestSchema
from cargo_optimizer.models import Container, MultiContainerPackingResult
from cargo_optimizer.packing.multi_container import pack_into_multiple_containers
from cargo_optimizer.render import container_render, placements_render


class PoolTooLargeError(ValueError):
    """Raised when a request asks for more containers than the service accepts."""


def resolve_pool(request: OptimizeRequestSchema, max_pool_size: Optional[int] = None) -> list[Container]:
    """Explicit containers win over preset quantities."""
    if request.containers:
        pool = list(request.containers)
    elif request.container_quantities:
        pool = build_container_pool(request.container_quantities)
    else:
        raise EmptyContainerPoolError("Request must include 'containers' or 'container_quantities'.")

    if max_pool_size is not None and len(pool) > max_pool_size:
        raise PoolTooLargeError(f"Container pool has {len(pool)} entries; the maximum is {max_pool_size}.")
    return pool


def compute_metrics(result: MultiContainerPackingResult) -> dict[str, Any]:
    units_loaded = sum(len(pc.result.placed_cargo) for pc in result.packed_containers)
    units_unloaded = sum(item.quantity for item in result.unplaced_cargo)
    total_weight = sum(pc.result.total_weight for pc in result.packed_containers)
    return {
        "containers_used": len(result.packed_containers),
        "units_loaded": units_loaded,
        "units_unloaded": units_unloaded,
        "total_weight": total_weight,
    }


def format_summary(result: MultiContainerPackingResult) -> str:
    """Human-readable multi-line summary of an allocation."""
    metrics = compute_metrics(result)
    lines = ["🚢 Optimization Complete"]
    for index, pc in enumerate(result.packed_containers, start=1):
        lines.append(
            f"📦 #{index} {pc.container.name or pc.container.id}: "
            f"{len(pc.result.placed_cargo)} units, "
            f"Volume Fill: {pc.result.volume_utilization:.1f}%, "
            f"Weight Fill: {pc.result.weight_utilization:.1f}%"
        )
    lines.append(f"✅ Units Loaded: {metrics['units_loaded']}")
    lines.append(f"❌ Units Unloaded: {metrics['units_unloaded']}")
    return "\n".join(lines)


def build_plan(
    request: OptimizeRequestSchema,
    include_render: bool = False,
    max_pool_size: Optional[int] = None,
) -> dict[str, Any]:
    """
    Run the allocator for a request and shape the response.

    Raises:
        EmptyContainerPoolError: no container to pack into.
        PoolTooLargeError: pool above `max_pool_size`.
        ValueError: unknown container preset.
    """
    pool = resolve_pool(request, max_pool_size)
    result = pack_into_multiple_containers(pool, request.cargo_items)

    plan: dict[str, Any] = {
        "metrics": compute_metrics(result),
        "summary": format_summary(result),
        "result": result.model_dump(),
    }

    if include_render:
        plan["render"] = [
            {
                "container_render": container_render(pc.container),
                "placements_render": placements_render(pc.result.placed_cargo),
            }
            for pc in result.packed_containers
        ]
    return plan
