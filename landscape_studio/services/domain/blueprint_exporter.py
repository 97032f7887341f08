"""
Domain service: design blueprint export.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import Design
from landscape_studio.domain.results import AnalysisResult, BlueprintPlant, DesignBlueprint

logger = logging.getLogger(__name__)


def build_blueprint(
    design: Design,
    catalog: Catalog,
    analysis: AnalysisResult,
    created: Optional[datetime] = None,
) -> DesignBlueprint:
    """
    Build the JSON blueprint for a design.

    Every placement is kept, annotated with its species data when the plant
    id resolves; unresolved placements carry null species fields.

    Args:
        design: Design being exported
        catalog: Catalog resolving plant ids
        analysis: Analysis of the same design state
        created: Export timestamp; now (UTC) when omitted

    Returns:
        DesignBlueprint ready for JSON serialization
    """
    plants = []
    for placement in design.placed_plants:
        species = catalog.get(placement.plant_id)
        plants.append(BlueprintPlant(
            id=placement.id,
            plant_id=placement.plant_id,
            x=placement.x,
            y=placement.y,
            rotation=placement.rotation,
            scale=placement.scale,
            species=species.name if species else None,
            category=species.category if species else None,
            color=species.color if species else None,
            height=species.height_range if species else None,
            spread=species.spread_range if species else None,
        ))

    bundle = catalog.get_bundle(design.bundle_id) if design.bundle_id else None

    logger.info(f"Exported blueprint '{design.name}' with {len(plants)} plants")
    return DesignBlueprint(
        name=design.name,
        created=created or datetime.now(timezone.utc),
        dimensions=design.bed,
        plants=plants,
        coverage=analysis.coverage_percent,
        color_harmony=analysis.color_harmony,
        bundle=bundle.name if bundle else None,
    )
