"""
Domain service: height layering and form/texture variety.

Height layering buckets placed plants into the seven height tiers and looks
for missing transitions between the lowest and highest occupied tier. Form
and texture variety penalize a design dominated by one shape or leaf size.
"""
import math
import logging
from collections import Counter
from typing import Iterable, Optional

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, PlacedPlant, PlantSpecies
from landscape_studio.domain.results import (
    FormVarietyResult,
    HeightLayeringResult,
    TextureVarietyResult,
    TierSummary,
)
from landscape_studio.domain.rules import DEFAULT_RULES, RuleSet, round_half_up

logger = logging.getLogger(__name__)

MAX_IDEAL_TIERS = 5
PLANTS_PER_TIER = 3


def analyze_height_layering(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    bed: Optional[BedDimensions] = None,
    rules: RuleSet = DEFAULT_RULES,
) -> HeightLayeringResult:
    """
    Bucket placed plants by height tier and report gaps between tiers.

    Args:
        placed: Placements on the canvas
        catalog: Catalog used to resolve plant ids
        bed: Bed dimensions; accepted for interface parity, positions are
            not used for layering yet
        rules: Rule set providing the tier table

    Returns:
        HeightLayeringResult with tier counts, gap issues and a diversity
        score in [0, 100]
    """
    tier_counts = {
        tier.id: TierSummary(tier_id=tier.id, name=tier.name, label=tier.label)
        for tier in rules.height_tiers
    }

    resolved = catalog.resolve(placed)
    for placement, species in resolved:
        tier = rules.tier_for_height(species.height_inches)
        summary = tier_counts[tier.id]
        summary.count += 1
        summary.plant_ids.append(placement.id)

    active_tiers = sorted(t for t, s in tier_counts.items() if s.count > 0)

    issues = []
    if len(active_tiers) > 1:
        for tier_id in range(active_tiers[0] + 1, active_tiers[-1]):
            if tier_id not in active_tiers:
                tier = rules.tier_by_id(tier_id)
                issues.append(
                    f"Missing {tier.name} plants ({tier.label}). Add mid-height transitions."
                )

    tier_diversity = len(active_tiers)
    if resolved:
        ideal_tiers = min(MAX_IDEAL_TIERS, math.ceil(len(resolved) / PLANTS_PER_TIER))
        diversity_score = min(100.0, tier_diversity / ideal_tiers * 100)
    else:
        diversity_score = 0.0

    def occupied(*tier_ids: int) -> bool:
        return any(tier_counts[t].count > 0 for t in tier_ids if t in tier_counts)

    return HeightLayeringResult(
        tier_counts=tier_counts,
        active_tiers=active_tiers,
        tier_diversity=tier_diversity,
        diversity_score=diversity_score,
        issues=issues,
        has_ground_layer=occupied(1, 2),
        has_middle_layer=occupied(3, 4),
        has_upper_layer=occupied(5, 6),
        has_focal_points=occupied(7),
    )


def validate_form_variety(
    plants: list[PlantSpecies],
    rules: RuleSet = DEFAULT_RULES,
) -> FormVarietyResult:
    """
    Score growth-form variety over resolved species, one per placement.

    Raises an issue when fewer than three forms are used across five or more
    plants, and one per form holding more than 40% of the plants.
    """
    if not plants:
        return FormVarietyResult()

    form_counts = Counter(p.resolved_form for p in plants)
    total = len(plants)
    issues = []

    unique_forms = len(form_counts)
    if unique_forms < rules.min_form_variety and total >= rules.min_plants_for_form_variety:
        issues.append(f"Only {unique_forms} plant forms used. Add variety with different shapes.")

    for form, count in form_counts.items():
        share = count / total
        if share > rules.max_same_form_share:
            issues.append(f"{round_half_up(share * 100)}% of plants are {form}. Mix in contrasting forms.")

    return FormVarietyResult(
        valid=not issues,
        score=max(0, 100 - rules.variety_issue_penalty * len(issues)),
        issues=issues,
        form_counts=dict(form_counts),
        unique_forms=unique_forms,
    )


def validate_texture_variety(
    plants: list[PlantSpecies],
    rules: RuleSet = DEFAULT_RULES,
) -> TextureVarietyResult:
    """Score leaf texture contrast; one issue per texture above a 50% share."""
    if not plants:
        return TextureVarietyResult()

    texture_counts = Counter(p.resolved_texture for p in plants)
    total = len(plants)
    issues = []

    for texture, count in texture_counts.items():
        share = count / total
        if share > rules.max_same_texture_share:
            issues.append(
                f"{round_half_up(share * 100)}% of plants have {texture} texture. Add contrast."
            )

    return TextureVarietyResult(
        valid=not issues,
        score=max(0, 100 - rules.variety_issue_penalty * len(issues)),
        issues=issues,
        texture_counts=dict(texture_counts),
    )


def form_variety_for(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    rules: RuleSet = DEFAULT_RULES,
) -> FormVarietyResult:
    return validate_form_variety([s for _, s in catalog.resolve(placed)], rules)


def texture_variety_for(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    rules: RuleSet = DEFAULT_RULES,
) -> TextureVarietyResult:
    return validate_texture_variety([s for _, s in catalog.resolve(placed)], rules)
