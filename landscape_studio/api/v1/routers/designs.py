"""
API router for design scoring endpoints.
"""
from fastapi import APIRouter

from landscape_studio.api.dependencies import DesignServiceDep
from landscape_studio.domain.models import Design
from landscape_studio.domain.results import (
    AnalysisResult,
    DesignBlueprint,
    ResidentialAnalysis,
    ShowReadyScore,
)


router = APIRouter(
    prefix="/designs",
    tags=["designs"],
)


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    summary="Analyze a design",
    description="""
    Run every design analyzer over a set of placed plants.

    Returns coverage, color harmony, height layering, form and texture
    variety, mass planting, bloom sequence, the Show Ready score and the
    residential analyses. Placements referencing unknown plants are ignored
    and listed in `unresolvedPlantIds`.
    """,
)
async def analyze_design(
    design: Design,
    design_service: DesignServiceDep,
) -> AnalysisResult:
    """
    Analyze a design.

    Args:
        design: Placements, bed and optional yard zone
        design_service: Design service (injected dependency)

    Returns:
        Full AnalysisResult
    """
    return design_service.analyze_design(design)


@router.post(
    "/score/show-ready",
    response_model=ShowReadyScore,
    summary="Show Ready score",
)
async def score_show_ready(
    design: Design,
    design_service: DesignServiceDep,
) -> ShowReadyScore:
    return design_service.score_show_ready(design)


@router.post(
    "/score/residential",
    response_model=ResidentialAnalysis,
    summary="Residential analyses and score",
)
async def score_residential(
    design: Design,
    design_service: DesignServiceDep,
) -> ResidentialAnalysis:
    return design_service.score_residential(design)


@router.post(
    "/export",
    response_model=DesignBlueprint,
    summary="Export a design blueprint",
    description="""
    Package a design as a JSON blueprint: bed dimensions, every placement
    annotated with its species, coverage, color harmony and bundle name.
    """,
)
async def export_design(
    design: Design,
    design_service: DesignServiceDep,
) -> DesignBlueprint:
    return design_service.export_blueprint(design)
