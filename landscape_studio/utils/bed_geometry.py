"""
Bed geometry helper functions.

Provides utilities for:
- Bed area (rectangle or drawn outline polygon)
- Circular plant footprints
- Clamping and snapping positions into the bed
- Crowded pair detection between placements
"""
import math
from typing import Iterable, Optional

import numpy as np
from scipy.spatial import KDTree
from shapely.geometry import Point, Polygon
from shapely.ops import nearest_points
import logging

from landscape_studio.domain.models import BedDimensions

logger = logging.getLogger(__name__)


def bed_polygon(bed: BedDimensions) -> Optional[Polygon]:
    """
    Build the outline polygon for a bed, if one was drawn.

    Invalid (self-intersecting) outlines are repaired with a zero buffer.

    Returns:
        Polygon, or None when the bed is a plain rectangle or the outline is
        degenerate
    """
    if not bed.has_outline:
        return None
    polygon = Polygon(bed.outline)
    if not polygon.is_valid:
        polygon = polygon.buffer(0)
    if polygon.is_empty:
        return None
    return polygon


def bed_area(bed: BedDimensions) -> float:
    """
    Bed area in square inches.

    Uses the outline polygon when one is present, otherwise width * height.
    Negative dimensions yield a non-positive area, which callers treat as
    degenerate.
    """
    polygon = bed_polygon(bed)
    if polygon is not None:
        return float(polygon.area)
    return float(bed.width * bed.height)


def footprint_areas(spreads: Iterable[float]) -> np.ndarray:
    """Circular footprint area pi * (spread / 2)^2 for each spread."""
    radii = np.asarray(list(spreads), dtype=float) / 2.0
    return math.pi * radii ** 2


def clamp_to_bed(x: float, y: float, bed: BedDimensions) -> tuple[float, float]:
    """Clamp a point into [0, width] x [0, height]."""
    width = max(bed.width, 0.0)
    height = max(bed.height, 0.0)
    return (
        float(min(max(x, 0.0), width)),
        float(min(max(y, 0.0), height)),
    )


def snap_into_outline(x: float, y: float, bed: BedDimensions) -> tuple[float, float]:
    """
    Move a point onto the nearest location inside the bed outline.

    Points already inside (or beds without an outline) are returned clamped
    to the bounding rectangle.
    """
    x, y = clamp_to_bed(x, y, bed)
    polygon = bed_polygon(bed)
    if polygon is None:
        return x, y

    point = Point(x, y)
    if polygon.covers(point):
        return x, y

    nearest, _ = nearest_points(polygon, point)
    logger.debug(f"Snapped ({x:.1f}, {y:.1f}) into outline at ({nearest.x:.1f}, {nearest.y:.1f})")
    return clamp_to_bed(nearest.x, nearest.y, bed)


def find_crowded_pairs(
    coordinates: list[tuple[float, float]],
    spreads: list[float],
    crowding_factor: float = 0.5
) -> list[tuple[int, int, float]]:
    """
    Find placement pairs closer than a fraction of their ideal spacing.

    Ideal spacing for a pair is spread1 / 2 + spread2 / 2; a pair is crowded
    when its distance is below ``crowding_factor`` times that.

    Args:
        coordinates: List of (x, y) positions in inches
        spreads: Mature spread in inches, one per coordinate
        crowding_factor: Fraction of ideal spacing below which a pair is crowded

    Returns:
        List of (index1, index2, distance) tuples for crowded pairs
    """
    if len(coordinates) < 2:
        return []

    all_points = np.asarray(coordinates, dtype=float).reshape(-1, 2)
    all_halves = np.asarray(spreads, dtype=float) / 2.0

    # Placements with non-finite positions or spreads are never crowded
    valid = np.isfinite(all_points).all(axis=1) & np.isfinite(all_halves)
    index_map = np.flatnonzero(valid)
    if len(index_map) < 2:
        return []
    points = all_points[valid]
    halves = all_halves[valid]
    kdtree = KDTree(points)

    # No pair can be crowded beyond the widest possible threshold
    search_radius = float(crowding_factor * 2 * halves.max())
    pairs = kdtree.query_pairs(r=search_radius, output_type="ndarray")
    if len(pairs) == 0:
        return []

    distances = np.linalg.norm(points[pairs[:, 0]] - points[pairs[:, 1]], axis=1)
    thresholds = crowding_factor * (halves[pairs[:, 0]] + halves[pairs[:, 1]])
    mask = distances < thresholds

    crowded = sorted(
        (int(index_map[i]), int(index_map[j]), float(d))
        for (i, j), d in zip(pairs[mask], distances[mask])
    )
    logger.debug(f"Found {len(crowded)} crowded pairs from {len(pairs)} candidates")
    return crowded
