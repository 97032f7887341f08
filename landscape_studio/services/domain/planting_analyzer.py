"""
Domain service: mass planting and bloom sequence analysis.

Mass planting checks that each species is placed in drifts large enough to
read as a group, prefers odd counts, and looks for at least one plant
repeated often enough to set a rhythm. Bloom sequence lays every placed
plant's bloom and interest months over a 12-month calendar to find gaps.
"""
import logging
from collections import Counter
from typing import Iterable

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import PlacedPlant
from landscape_studio.domain.results import (
    BloomSequenceResult,
    MassPlantingIssue,
    MassPlantingResult,
    MassPlantingSuggestion,
    MonthContribution,
    MonthInfo,
    SeasonCoverage,
)
from landscape_studio.domain.rules import DEFAULT_RULES, RuleSet

logger = logging.getLogger(__name__)


def analyze_mass_planting(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    rules: RuleSet = DEFAULT_RULES,
) -> MassPlantingResult:
    """
    Check drift sizes, odd-number grouping and repetition rhythm.

    Args:
        placed: Placements on the canvas
        catalog: Catalog used to resolve plant ids
        rules: Rule set providing drift sizes and penalties

    Returns:
        MassPlantingResult; an empty design is valid with score 100
    """
    resolved = catalog.resolve(placed)
    plant_counts = Counter(species.id for _, species in resolved)

    issues: list[MassPlantingIssue] = []
    suggestions: list[MassPlantingSuggestion] = []

    for plant_id, count in plant_counts.items():
        species = catalog.get(plant_id)
        drift = rules.drift_size(species.drift_category)

        if count < drift.min and species.drift_category != "tree":
            issues.append(MassPlantingIssue(
                plant_id=plant_id,
                plant_name=species.name,
                count=count,
                min_needed=drift.min,
                shortfall=drift.min - count,
                message=f"{species.name}: Only {count} placed. {drift.label}",
            ))

        if (
            rules.prefer_odd_numbers
            and count > 1
            and count % 2 == 0
            and count < rules.even_suggestion_limit
        ):
            suggestions.append(MassPlantingSuggestion(
                plant_id=plant_id,
                plant_name=species.name,
                count=count,
                message=f"{species.name}: {count} is even. Add 1 more for natural grouping.",
            ))

    repeated = [pid for pid, count in plant_counts.items() if count >= rules.min_repetition]
    if not repeated and len(plant_counts) > 3:
        issues.append(MassPlantingIssue(
            message=(
                f"No plants repeated {rules.min_repetition}+ times. "
                "Repeat key plants to create visual rhythm."
            )
        ))

    score = max(
        0,
        100
        - rules.mass_issue_penalty * len(issues)
        - rules.mass_suggestion_penalty * len(suggestions),
    )

    return MassPlantingResult(
        valid=not issues,
        score=score,
        issues=issues,
        suggestions=suggestions,
        plant_counts=dict(plant_counts),
        repeated_plants=len(repeated),
    )


def analyze_bloom_sequence(
    placed: Iterable[PlacedPlant],
    catalog: Catalog,
    rules: RuleSet = DEFAULT_RULES,
) -> BloomSequenceResult:
    """
    Build the monthly bloom/interest calendar and score its continuity.

    Scores are (12 - gap months) / 12 * 100 for bloom and interest
    separately. One recommendation is produced per season with bloom gaps,
    naming the missing months.
    """
    monthly_interest: dict[int, list[MonthContribution]] = {m.id: [] for m in rules.months}
    monthly_bloom: dict[int, list[MonthContribution]] = {m.id: [] for m in rules.months}

    for _, species in catalog.resolve(placed):
        bloom = species.bloom
        for month in bloom.interest_months:
            monthly_interest[month].append(MonthContribution(
                plant_id=species.id,
                plant_name=species.name,
                interest_type=bloom.interest_type,
                is_evergreen=bloom.is_evergreen,
            ))
        for month in bloom.bloom_months:
            monthly_bloom[month].append(MonthContribution(
                plant_id=species.id,
                plant_name=species.name,
                interest_type=bloom.interest_type,
                color=species.color,
            ))

    bloom_gaps = [m for m in rules.months if not monthly_bloom[m.id]]
    interest_gaps = [m for m in rules.months if not monthly_interest[m.id]]

    seasonal_coverage = {}
    for season in rules.seasons:
        bloom_months = sum(1 for m in season.months if monthly_bloom[m])
        interest_months = sum(1 for m in season.months if monthly_interest[m])
        total = len(season.months)
        seasonal_coverage[season.id] = SeasonCoverage(
            bloom_coverage=bloom_months / total,
            interest_coverage=interest_months / total,
            bloom_months=bloom_months,
            interest_months=interest_months,
            total_months=total,
        )

    month_count = len(rules.months)
    bloom_score = (month_count - len(bloom_gaps)) / month_count * 100
    interest_score = (month_count - len(interest_gaps)) / month_count * 100

    recommendations = []
    gap_seasons: list[str] = []
    for month in bloom_gaps:
        if month.season not in gap_seasons:
            gap_seasons.append(month.season)
    for season in gap_seasons:
        missing = ", ".join(m.abbr for m in bloom_gaps if m.season == season)
        recommendations.append(f"Add {season} bloomers to fill color gaps in {missing}")

    return BloomSequenceResult(
        monthly_interest=monthly_interest,
        monthly_bloom=monthly_bloom,
        bloom_gaps=[_month_info(m) for m in bloom_gaps],
        interest_gaps=[_month_info(m) for m in interest_gaps],
        seasonal_coverage=seasonal_coverage,
        bloom_score=bloom_score,
        interest_score=interest_score,
        recommendations=recommendations,
        has_year_round_interest=not interest_gaps,
        has_year_round_bloom=not bloom_gaps,
    )


def _month_info(month) -> MonthInfo:
    return MonthInfo(id=month.id, name=month.name, abbr=month.abbr, season=month.season)
