from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

# Geometry is in millimetres, weight in kilograms.
# Axes: x = length, y = width, z = height.

PackagingType = Literal["carton", "wooden_box", "pallet", "bundle", "other"]


class Container(BaseModel):
    """Container catalog entry with interior dimensions."""

    id: str = Field(description="Container type identifier (e.g. 20GP)")
    name: str = Field(default="", description="Display name")
    length: float = Field(ge=0, description="Interior length in mm")
    width: float = Field(ge=0, description="Interior width in mm")
    height: float = Field(ge=0, description="Interior height in mm")
    max_weight: float = Field(ge=0, description="Maximum gross weight in kg")

    @property
    def volume(self) -> float:
        return float(self.length) * float(self.width) * float(self.height)


class CargoItem(BaseModel):
    """
    Cargo line owned by the caller.

    Dimensions are unconstrained; the allocator drops entries with
    non-positive dimensions or zero quantity.
    """

    id: str = Field(description="Unique identifier of the cargo line")
    name: str = Field(default="", description="Display name")
    length: float = Field(description="Length in mm")
    width: float = Field(description="Width in mm")
    height: float = Field(description="Height in mm")
    weight: float = Field(ge=0, description="Unit weight in kg")
    quantity: int = Field(ge=0, description="Number of units")
    is_fragile: bool = Field(default=False, description="Nothing may be stacked on fragile units")
    packaging: PackagingType = Field(default="other", description="Packaging category")


class CatalogItem(BaseModel):
    """Cargo archetype without identity or quantity (filler catalog, quick-add, bundles)."""

    name: str = Field(description="Display name")
    length: float = Field(gt=0, description="Length in mm")
    width: float = Field(gt=0, description="Width in mm")
    height: float = Field(gt=0, description="Height in mm")
    weight: float = Field(ge=0, description="Unit weight in kg")
    is_fragile: bool = Field(default=False, description="Nothing may be stacked on fragile units")
    packaging: PackagingType = Field(default="other", description="Packaging category")


class Box(BaseModel):
    """One physical unit of a cargo line, alive only during a packing run."""

    id: str = Field(description="Identifier of the originating cargo line")
    instance_id: str = Field(description="Unique identifier of this unit")
    name: str = Field(default="", description="Display name")
    length: float = Field(gt=0, description="Length in mm")
    width: float = Field(gt=0, description="Width in mm")
    height: float = Field(gt=0, description="Height in mm")
    weight: float = Field(ge=0, description="Weight in kg")
    is_fragile: bool = False
    packaging: PackagingType = "other"
    volume: float = Field(ge=0, description="length * width * height")

    @classmethod
    def from_cargo(cls, item: CargoItem, instance_id: str) -> "Box":
        return cls(
            id=item.id,
            instance_id=instance_id,
            name=item.name,
            length=item.length,
            width=item.width,
            height=item.height,
            weight=item.weight,
            is_fragile=item.is_fragile,
            packaging=item.packaging,
            volume=float(item.length) * float(item.width) * float(item.height),
        )


class SupportingSurface(BaseModel):
    """Footprint and packaging of the box whose top face created a space."""

    item_id: Optional[str] = Field(default=None, description="Originating cargo line of the box underneath")
    length: float = Field(ge=0)
    width: float = Field(ge=0)
    packaging: PackagingType


class Space(BaseModel):
    """Free axis-aligned region inside a container."""

    x: float = Field(ge=0)
    y: float = Field(ge=0)
    z: float = Field(ge=0)
    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    # None means the container floor, which supports anything
    supporting_surface: Optional[SupportingSurface] = None


class PlacedCargo(BaseModel):
    """Placement of one box: position, full dimensions and display color."""

    id: str = Field(description="Identifier of the originating cargo line")
    instance_id: str = Field(description="Identifier of the placed unit")
    name: str = ""
    x: float = Field(ge=0, description="Position along the length axis")
    y: float = Field(ge=0, description="Position along the width axis")
    z: float = Field(ge=0, description="Position along the height axis")
    length: float
    width: float
    height: float
    weight: float
    is_fragile: bool = False
    packaging: PackagingType = "other"
    color: str = Field(description="Display color (hex)")


class PackingResult(BaseModel):
    """Result of packing one container."""

    placed_cargo: list[PlacedCargo] = Field(default_factory=list)
    # Always empty for a single container; residuals are reported by the allocator
    unplaced_cargo: list[CargoItem] = Field(default_factory=list)
    volume_utilization: float = Field(default=0.0, description="Percentage of container volume used")
    weight_utilization: float = Field(default=0.0, description="Percentage of max weight used")
    total_weight: float = 0.0
    remaining_spaces: list[Space] = Field(default_factory=list)


class PackedContainer(BaseModel):
    container: Container
    result: PackingResult


class MultiContainerPackingResult(BaseModel):
    """Containers actually used, in commit order, plus residual cargo."""

    packed_containers: list[PackedContainer] = Field(default_factory=list)
    unplaced_cargo: list[CargoItem] = Field(default_factory=list)


class BundleLayout(BaseModel):
    """Number of units along each axis of a bundle."""

    x: int = Field(ge=1)
    y: int = Field(ge=1)
    z: int = Field(ge=1)


class BundleDims(BaseModel):
    length: float
    width: float
    height: float


class Permutation(BaseModel):
    layout: BundleLayout
    final_dims: BundleDims


class BundlingConfiguration(BaseModel):
    """One factor triplet of the quantity and its valid axis assignments."""

    base_factors: tuple[int, int, int] = Field(description="Sorted factors (i <= j <= k)")
    permutations: list[Permutation] = Field(default_factory=list)
    item_count: int = Field(ge=2, description="Number of units the bundle replaces")


class FillerOption(BaseModel):
    """How many units of a catalog item still fit into a packed container."""

    item: CatalogItem
    placed_filler_cargo: list[PlacedCargo] = Field(default_factory=list)
    quantity: int = 0
    added_weight: float = 0.0
    added_volume_utilization: float = Field(default=0.0, description="Percentage of container volume added")
