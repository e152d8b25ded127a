"""FastAPI endpoint for the cargo optimizer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from cargo_optimizer.bundling import apply_bundle, build_bundled_item, calculate_bundling_options
from cargo_optimizer.catalog import FILLER_CATALOG
from cargo_optimizer.config import configure_logging, get_settings
from cargo_optimizer.containers import CONTAINER_PRESETS, EmptyContainerPoolError
from cargo_optimizer.filler import calculate_filler_options
from cargo_optimizer.io.schemas import (
    BundleApplyRequestSchema,
    BundlingRequestSchema,
    FillerRequestSchema,
    OptimizeRequestSchema,
)
from cargo_optimizer.models import BundlingConfiguration, CargoItem, CatalogItem, Container, FillerOption
from cargo_optimizer.planner import PoolTooLargeError, build_plan

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Cargo Optimizer API",
        description="Container loading, bundling and filler analysis",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check endpoint."""
        return {"ok": True}

    @app.get("/containers")
    async def containers() -> list[Container]:
        return CONTAINER_PRESETS

    @app.get("/catalog")
    async def catalog() -> list[CatalogItem]:
        return FILLER_CATALOG

    @app.post("/optimize")
    def optimize(
        request: OptimizeRequestSchema,
        render: int = Query(0, description="Include rendering data (1) or not (0)"),
    ) -> dict[str, Any]:
        """
        Allocate a cargo list across a container pool.

        Input (request body):
            {
                "container_quantities": {"20GP": 2, "40HQ": 1},
                "cargo_items": [
                    {"id": "a", "name": "Large Box", "length": 1200, "width": 1000,
                     "height": 800, "weight": 250, "quantity": 15,
                     "is_fragile": false, "packaging": "other"}
                ]
            }

        Returns:
            Response with metrics, summary and the full result
        """
        try:
            plan = build_plan(request, include_render=render == 1, max_pool_size=settings.max_pool_size)
        except EmptyContainerPoolError as e:
            raise HTTPException(status_code=422, detail={
                "error": "NO_CONTAINERS",
                "summary": "⚠️ No containers selected",
                "details": [str(e)],
            })
        except PoolTooLargeError as e:
            raise HTTPException(status_code=422, detail={
                "error": "POOL_TOO_LARGE",
                "summary": "⚠️ Too many containers requested",
                "details": [str(e)],
            })
        except Exception as e:
            logger.error(f"ERROR in /optimize endpoint: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

        metrics = plan["metrics"]
        logger.info(
            f"containers_used={metrics['containers_used']}, "
            f"loaded_units={metrics['units_loaded']}, "
            f"unloaded_units={metrics['units_unloaded']}"
        )
        return plan

    @app.post("/bundling")
    def bundling(request: BundlingRequestSchema) -> list[BundlingConfiguration]:
        return calculate_bundling_options(request.item, request.containers)

    @app.post("/bundling/apply")
    def bundling_apply(request: BundleApplyRequestSchema) -> list[CargoItem]:
        original = next((item for item in request.cargo_items if item.id == request.item_id), None)
        if original is None:
            raise HTTPException(status_code=404, detail=f"Unknown cargo item '{request.item_id}'")

        layout = request.permutation.layout
        item_count = request.item_count or layout.x * layout.y * layout.z
        if item_count > original.quantity:
            raise HTTPException(
                status_code=422,
                detail=f"Bundle needs {item_count} units but '{original.name}' has {original.quantity}",
            )

        bundled = build_bundled_item(original, request.permutation, item_count)
        return apply_bundle(request.cargo_items, request.item_id, bundled, item_count)

    @app.post("/filler")
    def filler(request: FillerRequestSchema) -> list[FillerOption]:
        return calculate_filler_options(request.container, request.result, request.catalog)

    return app


app = create_app()
