"""
Domain service: bundle expansion, density scaling and ratio checks.

A bundle template lists plant quantities grouped by role. Expansion turns
it into concrete placements: each role maps to a band of bed depth (heroes
at the back, carpets at the front), instances spread across the width with
a little jitter. Placement is not collision aware; overlaps are expected.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

import numpy as np

from landscape_studio.config import settings
from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, BundleTemplate, PlacedPlant
from landscape_studio.domain.results import BundleRatioReport, RoleTargets
from landscape_studio.domain.rules import round_half_up
from landscape_studio.utils.bed_geometry import snap_into_outline

logger = logging.getLogger(__name__)


# Normalized (top, bottom) band of bed depth per role; 0 is the back edge
ROLE_BANDS: dict[str, tuple[float, float]] = {
    "hero": (0.05, 0.2),
    "focal": (0.05, 0.2),
    "structure": (0.1, 0.35),
    "back": (0.1, 0.35),
    "topiary": (0.15, 0.4),
    "seasonal": (0.35, 0.65),
    "texture": (0.35, 0.65),
    "middle": (0.35, 0.65),
    "front": (0.6, 0.85),
    "edge": (0.8, 0.95),
    "carpet": (0.7, 0.95),
    "groundcover": (0.7, 0.95),
}
DEFAULT_BAND = (0.3, 0.7)

# Legacy position tags folded onto the five standard roles
LEGACY_ROLES = {
    "focal": "hero",
    "back": "structure",
    "topiary": "structure",
    "middle": "seasonal",
    "front": "texture",
    "edge": "texture",
    "groundcover": "carpet",
}

LAYER_RATIOS = {"tall": 0.10, "medium": 0.60, "low": 0.30}

PLANTS_PER_SQFT = {"young": 2.0, "mature": 1.0, "specimen": 0.5}

PLANT_AGE_ALIASES = {
    "dense": "young",
    "standard": "mature",
    "normal": "mature",
    "sparse": "specimen",
}

DEFAULT_ROLE_TARGET = 5


@dataclass
class PlacementConfig:
    """Configuration for bundle expansion."""

    jitter_inches: float = 6.0
    """Maximum random offset applied to each coordinate, in inches"""

    seed: Optional[int] = None
    """Seed for the jitter generator when no generator is supplied"""

    @classmethod
    def from_settings(cls) -> "PlacementConfig":
        return cls(jitter_inches=settings.bundle_jitter_inches)


def standard_role(role: str) -> str:
    return LEGACY_ROLES.get(role, role)


def apply_bundle(
    template: BundleTemplate,
    scale: float,
    bed: BedDimensions,
    rng: Optional[np.random.Generator] = None,
    catalog: Optional[Catalog] = None,
    config: Optional[PlacementConfig] = None,
) -> list[PlacedPlant]:
    """
    Expand a bundle template into placed plants.

    Each entry yields round(quantity * scale) placements, rounding halves
    up. Entries whose plant is missing from ``catalog`` (when one is given)
    are skipped.

    Placement ids take the form ``<bundle id>-<batch>-<n>``, where the batch
    token is fresh for every call, so repeated applications onto one design
    never collide.

    Args:
        template: Bundle template to expand
        scale: Quantity multiplier
        bed: Target bed; every placement lands inside it
        rng: Random generator for jitter; seeded from ``config`` if omitted
        catalog: Optional catalog used to drop unknown plants
        config: Placement configuration

    Returns:
        List of new PlacedPlant records
    """
    config = config or PlacementConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    width = max(bed.width, 0.0)
    depth = max(bed.height, 0.0)
    jitter = max(config.jitter_inches, 0.0)

    batch = uuid4().hex[:8]
    placements: list[PlacedPlant] = []
    for entry in template.entries():
        if catalog is not None and entry.plant_id not in catalog:
            logger.warning(f"Bundle '{template.id}' references unknown plant '{entry.plant_id}'; skipping")
            continue

        count = round_half_up(entry.quantity * scale)
        if count <= 0:
            continue

        top, bottom = ROLE_BANDS.get(entry.role, DEFAULT_BAND)
        for index in range(count):
            x = width * (index + 1) / (count + 1)
            y = depth * rng.uniform(top, bottom)
            if jitter > 0:
                x += rng.uniform(-jitter, jitter)
                y += rng.uniform(-jitter, jitter)
            x, y = snap_into_outline(x, y, bed)

            placements.append(PlacedPlant(
                id=f"{template.id}-{batch}-{len(placements) + 1}",
                plant_id=entry.plant_id,
                x=x,
                y=y,
            ))

    logger.info(f"Expanded bundle '{template.id}' at scale {scale} into {len(placements)} plants")
    return placements


def calculate_role_targets(bed_area_sqft: float, plant_age: str = "young") -> RoleTargets:
    """
    Target plant counts per role for a bed area.

    Density is 2 plants/sq ft for young installs, 1 for mature and 0.5 for
    specimen plantings, split 10/60/30 between tall, medium and low layers.
    """
    age = PLANT_AGE_ALIASES.get(plant_age, plant_age)
    if age not in PLANTS_PER_SQFT:
        age = "young"
    per_sqft = PLANTS_PER_SQFT[age]

    total = round_half_up(max(bed_area_sqft, 0.0) * per_sqft)
    tall = max(1, round_half_up(total * LAYER_RATIOS["tall"]))
    medium = round_half_up(total * LAYER_RATIOS["medium"])
    low = round_half_up(total * LAYER_RATIOS["low"])

    return RoleTargets(
        total=total,
        hero=max(1, round_half_up(tall * 0.5)),
        structure=round_half_up(medium * 0.6),
        seasonal=round_half_up(medium * 0.4),
        texture=round_half_up(low * 0.6),
        carpet=round_half_up(low * 0.4),
        by_layer={"tall": tall, "medium": medium, "low": low},
        plant_age=age,
        plants_per_sqft=per_sqft,
    )


def _plant_age_for(multiplier: float) -> str:
    if multiplier >= 1.25:
        return "young"
    if multiplier >= 0.9:
        return "mature"
    return "specimen"


def apply_density(
    template: BundleTemplate,
    multiplier: float = 1.5,
    bed_area_sqft: float = 200,
) -> BundleTemplate:
    """
    Rescale a template's quantities to the role targets for a bed.

    Within each role, quantities keep their relative proportions and are
    scaled so the role totals its target times ``multiplier``; every entry
    keeps at least one plant.

    Returns:
        A new BundleTemplate with adjusted quantities
    """
    targets = calculate_role_targets(bed_area_sqft, _plant_age_for(multiplier))

    scaled: dict[str, list] = {}
    for role, entries in template.plants.items():
        role_total = sum(e.quantity for e in entries)
        target = getattr(targets, standard_role(role), DEFAULT_ROLE_TARGET)
        factor = target * multiplier / role_total if role_total > 0 else 0.0
        scaled[role] = [
            e.model_copy(update={"quantity": max(1, round_half_up(e.quantity * factor))})
            for e in entries
        ]

    return template.model_copy(update={"plants": scaled})


def validate_bundle_ratios(template: BundleTemplate) -> BundleRatioReport:
    """
    Check a template against the 10/60/30 tall/medium/low layer split.

    More than 20% tall plants, a medium share outside 40-80%, or under 15%
    low plants are reported as issues.
    """
    counts = {"hero": 0, "structure": 0, "seasonal": 0, "texture": 0, "carpet": 0}
    for entry in template.entries():
        role = standard_role(entry.role)
        if role in counts:
            counts[role] += entry.quantity
    total = sum(e.quantity for e in template.entries())
    counts["total"] = total

    if total == 0:
        return BundleRatioReport(counts=counts)

    tall = counts["hero"] / total
    medium = (counts["structure"] + counts["seasonal"]) / total
    low = (counts["texture"] + counts["carpet"]) / total

    def pct(ratio: float) -> int:
        return round_half_up(ratio * 100)

    issues = []
    if tall > 0.20:
        issues.append(f"Too many hero plants ({pct(tall)}%). Target: 10%")
    if medium < 0.40:
        issues.append(f"Not enough fillers ({pct(medium)}%). Target: 60%")
    elif medium > 0.80:
        issues.append(f"Too many fillers ({pct(medium)}%). Target: 60%")
    if low < 0.15:
        issues.append(f"Not enough groundcover ({pct(low)}%). Target: 30%")

    return BundleRatioReport(
        valid=not issues,
        issues=issues,
        ratios={"tall": pct(tall), "medium": pct(medium), "low": pct(low)},
        counts=counts,
    )
