"""
Domain service: bed coverage and color palette analysis.
"""
import logging
from typing import Iterable

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, PlacedPlant
from landscape_studio.domain.results import ColorHarmony
from landscape_studio.utils.bed_geometry import bed_area, footprint_areas

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_TOLERANCE = 0.15

_SCHEMES = {0: "Monochromatic", 1: "Monochromatic", 2: "Complementary", 3: "Analogous"}


def compute_coverage(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    bed: BedDimensions,
    overlap_tolerance: float = DEFAULT_OVERLAP_TOLERANCE,
) -> float:
    """
    Percentage of the bed covered by mature plant footprints.

    Each resolved plant contributes a circle of its spread; the summed area
    is discounted by ``overlap_tolerance`` and capped at 100.

    Args:
        placed: Placements on the canvas
        catalog: Catalog used to resolve plant ids
        bed: Bed dimensions in inches
        overlap_tolerance: Fraction of footprint assumed to overlap

    Returns:
        Coverage in [0, 100]; 0 for a degenerate bed or no resolved plants
    """
    area = bed_area(bed)
    if area <= 0:
        logger.debug(f"Degenerate bed area {area}; coverage is 0")
        return 0.0

    resolved = catalog.resolve(placed)
    if not resolved:
        return 0.0

    total_footprint = float(footprint_areas(s.spread_inches for _, s in resolved).sum())
    coverage = total_footprint / area * 100 * (1 - overlap_tolerance)
    return max(0.0, min(100.0, coverage))


def compute_color_harmony(placed: Iterable[PlacedPlant], catalog: Catalog) -> ColorHarmony:
    """
    Classify the palette by its number of distinct colors.

    0-1 colors is Monochromatic, 2 Complementary, 3 Analogous; four or more
    is flagged as too many hues.
    """
    colors = {species.color for _, species in catalog.resolve(placed)}
    count = len(colors)

    if count in _SCHEMES:
        return ColorHarmony(valid=True, scheme=_SCHEMES[count], unique_colors=count)
    return ColorHarmony(valid=False, scheme=f"{count} Hues (Too Many)", unique_colors=count)
