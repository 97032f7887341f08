"""
Analysis result models.

Every analyzer returns one of these. They are derived data: recomputed on
each design change and never persisted on their own.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from landscape_studio.domain.models import BedDimensions, CamelModel


class ColorHarmony(CamelModel):
    valid: bool = True
    scheme: str = "Monochromatic"
    unique_colors: int = 0


class TierSummary(CamelModel):
    tier_id: int
    name: str
    label: str
    count: int = 0
    plant_ids: list[str] = Field(default_factory=list)


class HeightLayeringResult(CamelModel):
    tier_counts: dict[int, TierSummary]
    active_tiers: list[int] = Field(default_factory=list)
    tier_diversity: int = 0
    diversity_score: float = 0.0
    issues: list[str] = Field(default_factory=list)
    has_ground_layer: bool = False
    has_middle_layer: bool = False
    has_upper_layer: bool = False
    has_focal_points: bool = False


class VarietyResult(CamelModel):
    valid: bool = True
    score: float = 100.0
    issues: list[str] = Field(default_factory=list)


class FormVarietyResult(VarietyResult):
    form_counts: dict[str, int] = Field(default_factory=dict)
    unique_forms: int = 0


class TextureVarietyResult(VarietyResult):
    texture_counts: dict[str, int] = Field(default_factory=dict)


class MassPlantingIssue(CamelModel):
    message: str
    plant_id: Optional[str] = None
    plant_name: Optional[str] = None
    count: Optional[int] = None
    min_needed: Optional[int] = None
    shortfall: Optional[int] = None


class MassPlantingSuggestion(CamelModel):
    plant_id: str
    plant_name: str
    count: int
    message: str


class MassPlantingResult(CamelModel):
    valid: bool = True
    score: float = 100.0
    issues: list[MassPlantingIssue] = Field(default_factory=list)
    suggestions: list[MassPlantingSuggestion] = Field(default_factory=list)
    plant_counts: dict[str, int] = Field(default_factory=dict)
    repeated_plants: int = 0


class MonthContribution(CamelModel):
    plant_id: str
    plant_name: str
    interest_type: Optional[str] = None
    is_evergreen: bool = False
    color: Optional[str] = None


class MonthInfo(CamelModel):
    id: int
    name: str
    abbr: str
    season: str


class SeasonCoverage(CamelModel):
    bloom_coverage: float
    interest_coverage: float
    bloom_months: int
    interest_months: int
    total_months: int


class BloomSequenceResult(CamelModel):
    monthly_interest: dict[int, list[MonthContribution]]
    monthly_bloom: dict[int, list[MonthContribution]]
    bloom_gaps: list[MonthInfo] = Field(default_factory=list)
    interest_gaps: list[MonthInfo] = Field(default_factory=list)
    seasonal_coverage: dict[str, SeasonCoverage] = Field(default_factory=dict)
    bloom_score: float = 0.0
    interest_score: float = 0.0
    recommendations: list[str] = Field(default_factory=list)
    has_year_round_interest: bool = False
    has_year_round_bloom: bool = False


class ShowReadyInputs(CamelModel):
    """Analyzer outputs combined into the Show Ready score."""
    coverage_percent: float = 0.0
    bloom_sequence: Optional[BloomSequenceResult] = None
    height_layering: Optional[HeightLayeringResult] = None
    form_variety: Optional[FormVarietyResult] = None
    texture_variety: Optional[TextureVarietyResult] = None
    mass_planting: Optional[MassPlantingResult] = None
    color_harmony: ColorHarmony = Field(default_factory=ColorHarmony)


class ShowReadyScore(CamelModel):
    total_score: int
    scores: dict[str, float]
    rating: str
    rating_color: str
    is_show_ready: bool


# Residential sub-analyses

class SubScore(CamelModel):
    score: float = 0.0
    issues: list[str] = Field(default_factory=list)


class ResidentialLayeringResult(SubScore):
    expected_layers: int = 0
    actual_layers: int = 0
    recommendation: Optional[str] = None


class SpacingResult(SubScore):
    total_pairs: int = 0
    spacing_issues: int = 0


class OddGroupingResult(SubScore):
    plant_groups: int = 0
    odd_group_count: int = 0
    tip: str = "Plant in groups of 3, 5, or 7 for a natural, professional look"


class ZoneComplianceResult(SubScore):
    zone_name: Optional[str] = None
    zone_goals: list[str] = Field(default_factory=list)


class FourSeasonResult(SubScore):
    seasons_with_interest: list[str] = Field(default_factory=list)


class CurbAppealResult(SubScore):
    has_focal_point: bool = False
    specimen_count: int = 0


class ResidentialInputs(CamelModel):
    """Sub-analyses combined into the Residential score."""
    layering: Optional[SubScore] = None
    spacing: Optional[SubScore] = None
    odd_groupings: Optional[SubScore] = None
    zone_compliance: Optional[SubScore] = None
    four_season: Optional[SubScore] = None
    curb_appeal: Optional[SubScore] = None


class ResidentialScore(CamelModel):
    total_score: int
    scores: dict[str, float]
    rating: str
    rating_color: str
    recommendations: list[str] = Field(default_factory=list)


class ResidentialAnalysis(CamelModel):
    layering: ResidentialLayeringResult
    spacing: SpacingResult
    odd_groupings: OddGroupingResult
    zone_compliance: ZoneComplianceResult
    four_season: FourSeasonResult
    curb_appeal: CurbAppealResult
    score: ResidentialScore


class AnalysisResult(CamelModel):
    """Full assessment of one design state."""
    coverage_percent: float
    color_harmony: ColorHarmony
    height_layering: HeightLayeringResult
    form_variety: FormVarietyResult
    texture_variety: TextureVarietyResult
    mass_planting: MassPlantingResult
    bloom_sequence: BloomSequenceResult
    show_ready: ShowReadyScore
    residential: ResidentialAnalysis
    unresolved_plant_ids: list[str] = Field(default_factory=list)


# Export

class BlueprintPlant(CamelModel):
    id: str
    plant_id: str
    x: float
    y: float
    rotation: float = 0.0
    scale: float = 1.0
    species: Optional[str] = None
    category: Optional[str] = None
    color: Optional[str] = None
    height: Optional[str] = None
    spread: Optional[str] = None


class DesignBlueprint(CamelModel):
    name: str
    created: datetime
    dimensions: BedDimensions
    plants: list[BlueprintPlant]
    coverage: float
    color_harmony: ColorHarmony
    bundle: Optional[str] = None


# Bundles

class RoleTargets(CamelModel):
    total: int
    hero: int
    structure: int
    seasonal: int
    texture: int
    carpet: int
    by_layer: dict[str, int]
    plant_age: str
    plants_per_sqft: float


class BundleRatioReport(CamelModel):
    valid: bool = True
    issues: list[str] = Field(default_factory=list)
    ratios: dict[str, int] = Field(default_factory=dict)
    counts: dict[str, int] = Field(default_factory=dict)
