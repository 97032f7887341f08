"""
API router for bundle and plant catalog endpoints.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Path, Query

from landscape_studio.api.dependencies import DesignServiceDep
from landscape_studio.api.v1.models.requests import ApplyBundleRequest
from landscape_studio.api.v1.models.responses import (
    AppliedBundleResponse,
    BundleListResponse,
    BundleSummary,
    PlantListResponse,
)
from landscape_studio.config import settings
from landscape_studio.domain.models import BedDimensions
from landscape_studio.domain.results import BundleRatioReport
from landscape_studio.services.application.design_service import BundleNotFoundError


router = APIRouter(tags=["catalog"])

BundleIdPath = Annotated[str, Path(description="Bundle template id")]


@router.get(
    "/bundles",
    response_model=BundleListResponse,
    summary="List bundle templates",
)
async def list_bundles(design_service: DesignServiceDep) -> BundleListResponse:
    bundles = [BundleSummary.from_template(b) for b in design_service.list_bundles()]
    return BundleListResponse(count=len(bundles), bundles=bundles)


@router.get(
    "/bundles/{bundle_id}/ratios",
    response_model=BundleRatioReport,
    summary="Check a bundle's layer ratios",
    responses={404: {"description": "Bundle not found"}},
)
async def bundle_ratios(
    bundle_id: BundleIdPath,
    design_service: DesignServiceDep,
) -> BundleRatioReport:
    try:
        return design_service.bundle_ratios(bundle_id)
    except BundleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/bundles/{bundle_id}/apply",
    response_model=AppliedBundleResponse,
    summary="Expand a bundle into placements",
    description="""
    Expand a bundle template into placed plants for a bed.

    Each entry yields round(quantity * scale) plants, positioned in the band
    of bed depth matching its role and spread across the width. Placement
    is not collision aware.
    """,
    responses={404: {"description": "Bundle not found"}},
)
async def apply_bundle(
    bundle_id: BundleIdPath,
    request: ApplyBundleRequest,
    design_service: DesignServiceDep,
) -> AppliedBundleResponse:
    """
    Expand a bundle.

    Args:
        bundle_id: Bundle template id
        request: Scale, bed and jitter options
        design_service: Design service (injected dependency)

    Returns:
        AppliedBundleResponse with the new placements

    Raises:
        HTTPException: 404 if the bundle is unknown
    """
    bed = request.bed or BedDimensions(
        width=settings.default_bed_width,
        height=settings.default_bed_height,
    )
    try:
        placed = design_service.apply_bundle(
            bundle_id,
            request.scale,
            bed,
            density=request.density,
            seed=request.seed,
        )
    except BundleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return AppliedBundleResponse(
        bundle_id=bundle_id,
        placed_count=len(placed),
        placed_plants=placed,
    )


@router.get(
    "/plants",
    response_model=PlantListResponse,
    summary="List catalog plants",
)
async def list_plants(
    design_service: DesignServiceDep,
    category: Annotated[Optional[str], Query(description="Filter by catalog category")] = None,
) -> PlantListResponse:
    plants = design_service.list_plants(category)
    return PlantListResponse(count=len(plants), plants=plants)
