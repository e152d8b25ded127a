"""Bundle configurations: consolidating N units of one cargo line into a rectangular block."""

from __future__ import annotations

import uuid
from itertools import permutations as _orderings

from cargo_optimizer.models import (
    BundleDims,
    BundleLayout,
    BundlingConfiguration,
    CargoItem,
    CatalogItem,
    Container,
    Permutation,
)

Triplet = tuple[int, int, int]


def find_factor_triplets(n: int) -> list[Triplet]:
    """
    All (i, j, k) with i * j * k == n, sorted ascending and deduplicated.

    Brute-force divisor search; quantities are small logistics counts.
    """
    triplets: dict[Triplet, None] = {}
    for i in range(1, n + 1):
        if n % i:
            continue
        remainder = n // i
        for j in range(1, remainder + 1):
            if remainder % j:
                continue
            k = remainder // j
            a, b, c = sorted((i, j, k))
            triplets[(a, b, c)] = None
    return list(triplets)


def unique_permutations(triplet: Triplet) -> list[Triplet]:
    """Distinct orderings: 6 for distinct factors, 3 with one repeat, 1 for a cube."""
    return list(dict.fromkeys(_orderings(triplet)))


def _fits_any(dims: BundleDims, containers: list[Container]) -> bool:
    return any(
        dims.length <= c.length and dims.width <= c.width and dims.height <= c.height
        for c in containers
    )


def calculate_bundling_options(
    item: CargoItem,
    candidate_containers: list[Container],
) -> list[BundlingConfiguration]:
    """
    Bundling options for all units of a cargo line.

    A permutation (px, py, pz) stacks px units along length, py along width and
    pz along height. It is kept when the bundle fits at least one candidate
    container without rotation; with no candidates every permutation is kept.
    Configurations come back most cube-like first.
    """
    if item.quantity < 2:
        return []

    configurations: list[BundlingConfiguration] = []

    for triplet in find_factor_triplets(item.quantity):
        valid: list[Permutation] = []
        for px, py, pz in unique_permutations(triplet):
            final_dims = BundleDims(
                length=item.length * px,
                width=item.width * py,
                height=item.height * pz,
            )
            if candidate_containers and not _fits_any(final_dims, candidate_containers):
                continue
            valid.append(Permutation(layout=BundleLayout(x=px, y=py, z=pz), final_dims=final_dims))

        if valid:
            configurations.append(BundlingConfiguration(
                base_factors=triplet,
                permutations=valid,
                item_count=item.quantity,
            ))

    configurations.sort(key=lambda c: c.base_factors[2] / c.base_factors[0])
    return configurations


def build_bundled_item(item: CargoItem, permutation: Permutation, item_count: int) -> CatalogItem:
    """The cargo archetype of a confirmed bundle; packaging is always 'bundle'."""
    layout = permutation.layout
    return CatalogItem(
        name=f"{item.name} (Bundle {layout.x}x{layout.y}x{layout.z})",
        length=permutation.final_dims.length,
        width=permutation.final_dims.width,
        height=permutation.final_dims.height,
        weight=item.weight * item_count,
        is_fragile=item.is_fragile,
        packaging="bundle",
    )


def apply_bundle(
    cargo_items: list[CargoItem],
    item_id: str,
    bundled: CatalogItem,
    items_used: int,
) -> list[CargoItem]:
    """
    Replace `items_used` units of a cargo line with one bundle line.

    Units left over stay in the list as the original line with the residual
    quantity. Returns a new list; an unknown id leaves the cargo unchanged.
    """
    original = next((item for item in cargo_items if item.id == item_id), None)
    if original is None:
        return list(cargo_items)

    updated = [item for item in cargo_items if item.id != item_id]
    updated.append(CargoItem(id=str(uuid.uuid4()), quantity=1, **bundled.model_dump()))

    remaining_quantity = original.quantity - items_used
    if remaining_quantity > 0:
        updated.append(original.model_copy(update={"quantity": remaining_quantity}))

    return updated
