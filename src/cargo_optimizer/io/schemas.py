"""Request schemas for the HTTP service and CLI input files."""

from typing import Optional

from pydantic import BaseModel, Field

from cargo_optimizer.models import CargoItem, CatalogItem, Container, PackingResult, Permutation


class OptimizeRequestSchema(BaseModel):
    """Cargo list plus either explicit containers or per-preset quantities."""
    cargo_items: list[CargoItem] = Field(default_factory=list, description="Cargo lines to load")
    containers: Optional[list[Container]] = Field(
        default=None, description="Explicit pool, one entry per physical container")
    container_quantities: dict[str, int] = Field(
        default_factory=dict, description="Preset id -> number of containers")


class BundlingRequestSchema(BaseModel):
    """Cargo line to bundle and the containers the bundle must fit."""
    item: CargoItem
    containers: list[Container] = Field(default_factory=list)


class BundleApplyRequestSchema(BaseModel):
    """Confirmed bundle permutation to substitute into a cargo list."""
    cargo_items: list[CargoItem]
    item_id: str = Field(description="Cargo line being bundled")
    permutation: Permutation
    item_count: Optional[int] = Field(
        default=None, ge=2, description="Units consumed by the bundle; defaults to the layout product")


class FillerRequestSchema(BaseModel):
    """An already packed container and an optional custom catalog."""
    container: Container
    result: PackingResult
    catalog: Optional[list[CatalogItem]] = Field(default=None, description="Defaults to the standard catalog")
