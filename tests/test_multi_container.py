from __future__ import annotations

from collections import Counter

import pytest

from cargo_optimizer.catalog import CARGO_COLORS
from cargo_optimizer.containers import CONTAINER_PRESETS, EmptyContainerPoolError, get_container
from cargo_optimizer.geometry import boxes_overlap, placement_bounds
from cargo_optimizer.models import CargoItem, Container
from cargo_optimizer.packing.multi_container import (
    box_sort_key,
    expand_boxes,
    pack_into_multiple_containers,
)


def make_item(item_id: str, length: float, width: float, height: float, weight: float = 10.0,
              quantity: int = 1, is_fragile: bool = False, packaging: str = "other") -> CargoItem:
    return CargoItem(
        id=item_id,
        name=item_id,
        length=length,
        width=width,
        height=height,
        weight=weight,
        quantity=quantity,
        is_fragile=is_fragile,
        packaging=packaging,
    )


def mixed_cargo() -> list[CargoItem]:
    return [
        make_item("large", 1200, 1000, 800, weight=250, quantity=15),
        make_item("medium", 800, 600, 500, weight=100, quantity=20, packaging="carton"),
        make_item("fragile", 500, 400, 300, weight=15, quantity=30, is_fragile=True, packaging="carton"),
    ]


def assert_within_container(container, placements):
    for p in placements:
        x1, y1, z1, x2, y2, z2 = placement_bounds(p)
        assert x1 >= 0 and y1 >= 0 and z1 >= 0
        assert x2 <= container.length
        assert y2 <= container.width
        assert z2 <= container.height


def assert_no_overlaps(placements):
    bounds = [placement_bounds(p) for p in placements]
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            assert not boxes_overlap(bounds[i], bounds[j])


def boxes_directly_below(p, placements):
    """Placements whose top face touches the bottom of p with overlapping footprint."""
    below = []
    for q in placements:
        if q is p or q.z + q.height != p.z:
            continue
        if q.x < p.x + p.length and q.x + q.length > p.x and q.y < p.y + p.width and q.y + q.width > p.y:
            below.append(q)
    return below


def test_expand_boxes_drops_malformed_lines() -> None:
    items = [
        make_item("ok", 100, 100, 100, quantity=3),
        make_item("none", 100, 100, 100, quantity=0),
        make_item("flat", 100, 0, 100, quantity=2),
        make_item("negative", -5, 100, 100, quantity=2),
    ]

    boxes = expand_boxes(items)

    assert [b.id for b in boxes] == ["ok", "ok", "ok"]
    assert len({b.instance_id for b in boxes}) == 3


def test_boxes_sorted_by_largest_dimension_then_volume() -> None:
    boxes = expand_boxes([
        make_item("small", 100, 100, 100),
        make_item("long", 2000, 100, 100),
        make_item("cube", 2000, 2000, 2000),
        make_item("mid", 500, 500, 500),
    ])

    ordered = [b.id for b in sorted(boxes, key=box_sort_key)]

    assert ordered == ["cube", "long", "mid", "small"]


def test_empty_pool_fails_fast() -> None:
    with pytest.raises(EmptyContainerPoolError):
        pack_into_multiple_containers([], mixed_cargo())


def test_scenario_a_uses_one_container() -> None:
    container = get_container("20GP")
    cargo = [make_item("large", 1200, 1000, 800, weight=250, quantity=15)]

    result = pack_into_multiple_containers([container, container], cargo)

    assert len(result.packed_containers) == 1
    packed = result.packed_containers[0].result
    assert len(packed.placed_cargo) == 15
    assert packed.total_weight == 3750
    assert packed.weight_utilization == pytest.approx(13.3, abs=0.05)
    assert result.unplaced_cargo == []


def test_scenario_c_weight_rejection_reports_residual() -> None:
    container = Container(id="small", length=1000, width=1000, height=1000, max_weight=100)
    cargo = [make_item("heavy", 100, 100, 100, weight=60, quantity=2)]

    result = pack_into_multiple_containers([container], cargo)

    assert len(result.packed_containers) == 1
    assert len(result.packed_containers[0].result.placed_cargo) == 1
    assert len(result.unplaced_cargo) == 1
    assert result.unplaced_cargo[0].id == "heavy"
    assert result.unplaced_cargo[0].quantity == 1
    # The caller's record is not touched
    assert cargo[0].quantity == 2


def test_stops_when_nothing_fits_anywhere() -> None:
    container = Container(id="tiny", length=500, width=500, height=500, max_weight=1000)
    cargo = [make_item("big", 1000, 1000, 1000, quantity=2)]

    result = pack_into_multiple_containers([container, container], cargo)

    assert result.packed_containers == []
    assert result.unplaced_cargo[0].quantity == 2


def test_picks_container_with_best_utilization() -> None:
    roomy = Container(id="roomy", length=4000, width=1000, height=1000, max_weight=1000)
    snug = Container(id="snug", length=2000, width=1000, height=1000, max_weight=1000)
    cargo = [make_item("A", 1000, 1000, 1000, quantity=2)]

    result = pack_into_multiple_containers([roomy, snug], cargo)

    assert [pc.container.id for pc in result.packed_containers] == ["snug"]


def test_overflow_spills_into_next_container() -> None:
    container = Container(id="c", length=2000, width=1000, height=1000, max_weight=1000)
    cargo = [make_item("A", 1000, 1000, 1000, quantity=5)]

    result = pack_into_multiple_containers([container] * 2, cargo)

    assert [len(pc.result.placed_cargo) for pc in result.packed_containers] == [2, 2]
    assert result.unplaced_cargo[0].quantity == 1


def test_conservation_and_invariants_for_mixed_cargo() -> None:
    cargo = mixed_cargo() + [make_item("pallet", 1200, 1000, 1500, weight=900, quantity=4, packaging="pallet")]
    pool = [get_container("20GP"), get_container("20GP"), get_container("40GP")]

    result = pack_into_multiple_containers(pool, cargo)

    placed_ids = Counter()
    for pc in result.packed_containers:
        placements = pc.result.placed_cargo
        assert pc.result.total_weight <= pc.container.max_weight
        assert_within_container(pc.container, placements)
        assert_no_overlaps(placements)
        for p in placements:
            placed_ids[p.id] += 1
            below = boxes_directly_below(p, placements)
            assert all(not q.is_fragile for q in below)
            if p.packaging == "carton" and p.z > 0:
                assert below and all(q.packaging == "carton" for q in below)

    unplaced_ids = Counter({item.id: item.quantity for item in result.unplaced_cargo})
    assert placed_ids + unplaced_ids == Counter({item.id: item.quantity for item in cargo})
    assert all(item.quantity > 0 for item in result.unplaced_cargo)


def test_each_pool_entry_used_at_most_once() -> None:
    container = Container(id="c", length=1000, width=1000, height=1000, max_weight=1000)
    cargo = [make_item("A", 1000, 1000, 1000, quantity=4)]

    result = pack_into_multiple_containers([container] * 3, cargo)

    assert len(result.packed_containers) == 3
    assert result.unplaced_cargo[0].quantity == 1


def test_colors_are_stable_per_cargo_line_across_containers() -> None:
    container = Container(id="c", length=1000, width=1000, height=1000, max_weight=1000)
    cargo = [
        make_item("A", 1000, 1000, 1000, quantity=2),
        make_item("B", 500, 500, 500, quantity=1),
    ]

    result = pack_into_multiple_containers([container] * 3, cargo)

    colors = {(p.id, p.color) for pc in result.packed_containers for p in pc.result.placed_cargo}
    assert colors == {("A", CARGO_COLORS[0]), ("B", CARGO_COLORS[1])}


def test_presets_are_valid_pool_entries() -> None:
    assert {c.id for c in CONTAINER_PRESETS} == {"20GP", "40GP", "40HQ", "custom"}
