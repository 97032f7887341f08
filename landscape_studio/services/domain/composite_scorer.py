"""
Domain service: weighted composite scores.

Two parallel formulas combine 0-100 sub-scores into one rated total: the
"Show Ready" score over the core analyzers and the Residential score over
the home-yard analyses.
"""
import logging

from landscape_studio.domain.results import (
    ResidentialInputs,
    ResidentialScore,
    ShowReadyInputs,
    ShowReadyScore,
)
from landscape_studio.domain.rules import DEFAULT_RULES, RuleSet, rate, round_half_up

logger = logging.getLogger(__name__)


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def calculate_show_ready_score(
    inputs: ShowReadyInputs,
    rules: RuleSet = DEFAULT_RULES,
    coverage_target: float = 95.0,
) -> ShowReadyScore:
    """
    Combine analyzer outputs into the Show Ready score.

    Missing analyzer results count as 0. Color harmony earns partial credit
    (50) when the palette is invalid.

    Args:
        inputs: Analyzer outputs for one design
        rules: Rule set providing weights and rating bands
        coverage_target: Coverage percentage earning full coverage credit

    Returns:
        ShowReadyScore with the rounded total, per-criterion scores and rating
    """
    scores = {
        "coverage": min(100.0, inputs.coverage_percent / coverage_target * 100)
        if coverage_target > 0 else 0.0,
        "bloomSequence": inputs.bloom_sequence.interest_score if inputs.bloom_sequence else 0.0,
        "heightLayering": inputs.height_layering.diversity_score if inputs.height_layering else 0.0,
        "formVariety": inputs.form_variety.score if inputs.form_variety else 0.0,
        "textureVariety": inputs.texture_variety.score if inputs.texture_variety else 0.0,
        "massPlanting": inputs.mass_planting.score if inputs.mass_planting else 0.0,
        "colorHarmony": 100.0 if inputs.color_harmony.valid else rules.invalid_harmony_credit,
    }
    scores = {key: _clamp_score(value) for key, value in scores.items()}

    weighted_total = sum(
        scores.get(key, 0.0) * weight / 100 for key, weight in rules.show_ready_weights.items()
    )
    band = rate(weighted_total, rules.show_ready_bands)

    logger.debug(f"Show Ready total {weighted_total:.2f} rated '{band.rating}'")
    return ShowReadyScore(
        total_score=round_half_up(weighted_total),
        scores=scores,
        rating=band.rating,
        rating_color=band.color,
        is_show_ready=weighted_total >= rules.show_ready_threshold,
    )


RESIDENTIAL_FIELDS = {
    "layering": "layering",
    "spacing": "spacing",
    "oddGroupings": "odd_groupings",
    "zoneCompliance": "zone_compliance",
    "fourSeason": "four_season",
    "curbAppeal": "curb_appeal",
}


def calculate_residential_score(
    inputs: ResidentialInputs,
    rules: RuleSet = DEFAULT_RULES,
) -> ResidentialScore:
    """
    Combine residential sub-analyses into the Residential score.

    The total is the rounded weighted mean; recommendations are the first
    five issues across the sub-analyses, in criterion order.
    """
    scores = {}
    recommendations: list[str] = []
    for key, field_name in RESIDENTIAL_FIELDS.items():
        result = getattr(inputs, field_name)
        scores[key] = _clamp_score(result.score) if result is not None else 0.0
        if result is not None:
            recommendations.extend(result.issues)

    weights = rules.residential_weights
    total_weight = sum(weights.values())
    weighted = sum(scores.get(key, 0.0) * weight for key, weight in weights.items()) / total_weight
    total_score = round_half_up(weighted)
    band = rate(total_score, rules.residential_bands)

    return ResidentialScore(
        total_score=total_score,
        scores=scores,
        rating=band.rating,
        rating_color=band.color,
        recommendations=recommendations[:rules.max_recommendations],
    )
