"""
Domain service: residential landscape analyses.

Home-yard checks that feed the Residential score:
- Front-to-back layering against bed depth
- Crowding between neighbouring plants
- Odd-numbered groupings
- Yard zone height limits
- Four-season interest
- Curb appeal (focal point, specimen restraint, palette, species density)

All positions and dimensions are in inches.
"""
import logging
from collections import Counter
from typing import Iterable, Optional

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, PlacedPlant
from landscape_studio.domain.results import (
    BloomSequenceResult,
    ColorHarmony,
    CurbAppealResult,
    FourSeasonResult,
    HeightLayeringResult,
    OddGroupingResult,
    ResidentialLayeringResult,
    SpacingResult,
    ZoneComplianceResult,
)
from landscape_studio.domain.rules import DEFAULT_RULES, RuleSet, round_half_up
from landscape_studio.utils.bed_geometry import bed_area, find_crowded_pairs

logger = logging.getLogger(__name__)

SQ_INCHES_PER_SQ_FOOT = 144
CROWDING_FACTOR = 0.5
LAYER_POSITION_TOLERANCE = 0.3
MAX_LISTED_ISSUES = 3
CURB_APPEAL_PENALTY = 25


def calculate_layer_count(bed_depth: float) -> int:
    """Number of planting layers a bed of this depth (inches) can hold."""
    if bed_depth < 36:
        return 1
    if bed_depth < 72:
        return 2
    if bed_depth < 96:
        return 3
    if bed_depth < 144:
        return 4
    return 5


def _expected_position(height_inches: float) -> float:
    # Normalized depth, 0 at the back edge and 1 at the front
    if height_inches > 48:
        return 0.2
    if height_inches > 24:
        return 0.5
    return 0.8


def _layer_name(height_inches: float) -> str:
    if height_inches > 48:
        return "back"
    if height_inches > 24:
        return "middle"
    return "front"


def analyze_residential_layering(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    bed: BedDimensions,
) -> ResidentialLayeringResult:
    """
    Check that taller plants sit toward the back of the bed.

    Each plant's y position is normalized by bed depth and compared with the
    position expected for its height (0.2 for >48in, 0.5 for >24in, else
    0.8) within a tolerance of 0.3.

    Args:
        placed: Placements on the canvas
        catalog: Catalog used to resolve plant ids
        bed: Bed dimensions in inches

    Returns:
        ResidentialLayeringResult with the percentage of correctly placed plants
    """
    placed = list(placed)
    expected_layers = calculate_layer_count(bed.height)
    if not placed:
        return ResidentialLayeringResult(
            score=0, issues=["No plants placed"], expected_layers=expected_layers
        )

    resolved = catalog.resolve(placed)
    correct = 0
    for placement, species in resolved:
        normalized_y = placement.y / bed.height if bed.height > 0 else 0.0
        if abs(normalized_y - _expected_position(species.height_inches)) <= LAYER_POSITION_TOLERANCE:
            correct += 1

    score = round_half_up(correct / len(resolved) * 100) if resolved else 0

    return ResidentialLayeringResult(
        score=score,
        expected_layers=expected_layers,
        actual_layers=len({_layer_name(s.height_inches) for _, s in resolved}),
        issues=["Consider placing taller plants towards the back of the bed"] if score < 70 else [],
        recommendation=(
            "Arrange plants by height: tallest in back, shortest in front" if score < 50 else None
        ),
    )


def analyze_residential_spacing(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
) -> SpacingResult:
    """
    Flag pairs of plants closer than half their ideal on-center spacing.

    Ideal spacing for a pair is half of each plant's mature spread.
    """
    resolved = catalog.resolve(placed)
    if len(resolved) < 2:
        return SpacingResult(score=100)

    coordinates = [(p.x, p.y) for p, _ in resolved]
    spreads = [s.spread_inches for _, s in resolved]
    crowded = find_crowded_pairs(coordinates, spreads, CROWDING_FACTOR)

    total_pairs = len(resolved) * (len(resolved) - 1) // 2
    issues = [
        f"{resolved[i][1].name} and {resolved[j][1].name} are too close together"
        for i, j, _ in crowded[:MAX_LISTED_ISSUES]
    ]

    return SpacingResult(
        score=round_half_up((total_pairs - len(crowded)) / total_pairs * 100),
        total_pairs=total_pairs,
        spacing_issues=len(crowded),
        issues=issues,
    )


def analyze_odd_groupings(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
) -> OddGroupingResult:
    """Share of repeated species planted in odd-numbered groups."""
    placed = list(placed)
    if not placed:
        return OddGroupingResult(score=0)

    counts = Counter(s.id for _, s in catalog.resolve(placed))
    groups = {pid: c for pid, c in counts.items() if c > 1}
    odd = sum(1 for c in groups.values() if c % 2 == 1)

    issues = []
    for plant_id, count in groups.items():
        if count % 2 == 0 and len(issues) < MAX_LISTED_ISSUES:
            name = catalog.get(plant_id).name
            issues.append(f"{name}: {count} planted (try {count + 1} for visual balance)")

    return OddGroupingResult(
        score=round_half_up(odd / len(groups) * 100) if groups else 100,
        plant_groups=len(counts),
        odd_group_count=odd,
        issues=issues,
    )


def analyze_zone_compliance(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    zone: Optional[str],
    rules: RuleSet = DEFAULT_RULES,
) -> ZoneComplianceResult:
    """
    Percentage of plants meeting the yard zone's height limits.

    Unknown or missing zones impose no limits and score 100.
    """
    yard_zone = rules.yard_zone(zone)
    if yard_zone is None:
        return ZoneComplianceResult(score=100)

    resolved = catalog.resolve(placed)
    issues = []
    compliant = 0
    for _, species in resolved:
        ok = True
        height = species.height_inches
        if yard_zone.max_plant_height is not None and height > yard_zone.max_plant_height:
            ok = False
            if len(issues) < MAX_LISTED_ISSUES:
                issues.append(
                    f"{species.name} too tall for {yard_zone.name.lower()} "
                    f"(max {yard_zone.max_plant_height:g}\")"
                )
        if yard_zone.min_plant_height is not None and height < yard_zone.min_plant_height:
            ok = False
            if len(issues) < MAX_LISTED_ISSUES:
                issues.append(
                    f"{species.name} too short for {yard_zone.name.lower()} "
                    f"(min {yard_zone.min_plant_height / 12:g}ft)"
                )
        if ok:
            compliant += 1

    return ZoneComplianceResult(
        score=round_half_up(compliant / len(resolved) * 100) if resolved else 100,
        zone_name=yard_zone.name,
        zone_goals=list(yard_zone.goals),
        issues=issues,
    )


def analyze_four_season(
    bloom_sequence: BloomSequenceResult,
    rules: RuleSet = DEFAULT_RULES,
) -> FourSeasonResult:
    """Mean seasonal interest coverage, scaled to 100."""
    coverage = bloom_sequence.seasonal_coverage
    if not coverage:
        return FourSeasonResult(score=0)

    names = {s.id: s.name for s in rules.seasons}
    with_interest = [sid for sid, c in coverage.items() if c.interest_months > 0]
    issues = [
        f"No {names.get(sid, sid).lower()} interest. Add plants that carry the bed through {names.get(sid, sid).lower()}."
        for sid, c in coverage.items()
        if c.interest_months == 0
    ]

    mean = sum(c.interest_coverage for c in coverage.values()) / len(coverage)
    return FourSeasonResult(
        score=mean * 100,
        seasons_with_interest=with_interest,
        issues=issues,
    )


def analyze_curb_appeal(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    bed: BedDimensions,
    zone: Optional[str],
    harmony: ColorHarmony,
    layering: HeightLayeringResult,
    rules: RuleSet = DEFAULT_RULES,
) -> CurbAppealResult:
    """
    Curb appeal checklist, 25 points off per failed check.

    Checks for a focal point, at most one specimen tree in front-facing
    zones, a valid palette, and no more species than the bed can carry.
    """
    resolved = catalog.resolve(placed)
    if not resolved:
        return CurbAppealResult(score=0)

    score = 100
    issues = []

    specimen_count = sum(1 for _, s in resolved if s.drift_category == "tree")
    has_focal_point = layering.has_focal_points or specimen_count > 0
    if not has_focal_point:
        score -= CURB_APPEAL_PENALTY
        issues.append("Add a focal point such as a specimen tree or tall accent")

    yard_zone = rules.yard_zone(zone)
    if (
        yard_zone is not None
        and yard_zone.front_facing
        and yard_zone.specimen_limit is not None
        and specimen_count > yard_zone.specimen_limit
    ):
        score -= CURB_APPEAL_PENALTY
        issues.append(
            f"{specimen_count} specimen trees compete for attention in the "
            f"{yard_zone.name.lower()}. Keep one focal specimen."
        )

    if not harmony.valid:
        score -= CURB_APPEAL_PENALTY
        issues.append(f"Palette uses {harmony.scheme.lower()}. Limit to 3 colors for a cohesive look.")

    area_sqft = bed_area(bed) / SQ_INCHES_PER_SQ_FOOT
    species_count = len({s.id for _, s in resolved})
    if area_sqft > 0:
        species_per_100 = species_count / (area_sqft / 100)
        if species_per_100 > rules.max_species_per_100_sqft:
            score -= CURB_APPEAL_PENALTY
            issues.append(
                f"{species_count} species in {area_sqft:.0f} sq ft feels busy. "
                f"Use at most {rules.max_species_per_100_sqft} per 100 sq ft."
            )

    return CurbAppealResult(
        score=max(0, score),
        issues=issues,
        has_focal_point=has_focal_point,
        specimen_count=specimen_count,
    )
