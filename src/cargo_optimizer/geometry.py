"""Geometry utilities: free-space subdivision and bounding boxes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .models import Space, SupportingSurface

if TYPE_CHECKING:
    from .models import Container, PlacedCargo


Bounds = tuple[float, float, float, float, float, float]


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def placement_bounds(p: "PlacedCargo") -> Bounds:
    x, y, z = float(p.x), float(p.y), float(p.z)
    return (x, y, z, x + float(p.length), y + float(p.width), z + float(p.height))


def fits_in_space(length: float, width: float, height: float, space: Space) -> bool:
    """No rotation: every extent must fit on its own axis."""
    return length <= space.length and width <= space.width and height <= space.height


def container_space(container: "Container") -> Optional[Space]:
    """The whole interior as one floor-supported space, or None for a degenerate container."""
    if container.length <= 0 or container.width <= 0 or container.height <= 0:
        return None
    return Space(
        x=0.0,
        y=0.0,
        z=0.0,
        length=float(container.length),
        width=float(container.width),
        height=float(container.height),
        supporting_surface=None,
    )


def split_space(
    space: Space,
    length: float,
    width: float,
    height: float,
    is_fragile: bool,
    surface: SupportingSurface,
) -> list[Space]:
    """
    Guillotine split of a space whose origin corner just received a box.

    Children:
      right: past the box along x, full width and height of the parent
      back:  past the box along y, box length, full height of the parent
      top:   above the box, box footprint; never created over fragile boxes

    right/back keep the parent's supporting surface, top rests on `surface`.
    Children with a zero extent are not created.
    """
    children: list[Space] = []

    if space.length - length > 0:
        children.append(Space(
            x=space.x + length,
            y=space.y,
            z=space.z,
            length=space.length - length,
            width=space.width,
            height=space.height,
            supporting_surface=space.supporting_surface,
        ))

    if space.width - width > 0:
        children.append(Space(
            x=space.x,
            y=space.y + width,
            z=space.z,
            length=length,
            width=space.width - width,
            height=space.height,
            supporting_surface=space.supporting_surface,
        ))

    if not is_fragile and space.height - height > 0:
        children.append(Space(
            x=space.x,
            y=space.y,
            z=space.z + height,
            length=length,
            width=width,
            height=space.height - height,
            supporting_surface=surface,
        ))

    return children
