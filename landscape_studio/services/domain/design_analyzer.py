"""
Domain service: full design assessment in one synchronous pass.

Runs every analyzer over a design and its catalog and assembles the
AnalysisResult the canvas renders after each placement change. Each
analyzer reads only the placements, the catalog and the bed, so the order
below is only for readability; the composite scores come last because they
consume the others' outputs.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from landscape_studio.config import settings
from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import Design
from landscape_studio.domain.results import (
    AnalysisResult,
    BloomSequenceResult,
    ColorHarmony,
    HeightLayeringResult,
    ResidentialAnalysis,
    ResidentialInputs,
    ShowReadyInputs,
)
from landscape_studio.domain.rules import DEFAULT_RULES, RuleSet
from landscape_studio.services.domain.composite_scorer import (
    calculate_residential_score,
    calculate_show_ready_score,
)
from landscape_studio.services.domain.coverage_analyzer import (
    compute_color_harmony,
    compute_coverage,
)
from landscape_studio.services.domain.layering_analyzer import (
    analyze_height_layering,
    form_variety_for,
    texture_variety_for,
)
from landscape_studio.services.domain.planting_analyzer import (
    analyze_bloom_sequence,
    analyze_mass_planting,
)
from landscape_studio.services.domain.residential_analyzer import (
    analyze_curb_appeal,
    analyze_four_season,
    analyze_odd_groupings,
    analyze_residential_layering,
    analyze_residential_spacing,
    analyze_zone_compliance,
)

logger = logging.getLogger(__name__)


@dataclass
class AnalysisConfig:
    """Configuration for design analysis."""

    overlap_tolerance: float = 0.15
    """Fraction of summed footprint discounted as overlap in coverage"""

    coverage_target: float = 95.0
    """Coverage percentage that earns full coverage credit"""

    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    """Rule tables used by every analyzer"""

    @classmethod
    def from_settings(cls) -> "AnalysisConfig":
        return cls(
            overlap_tolerance=settings.overlap_tolerance,
            coverage_target=settings.coverage_target,
        )


class DesignAnalyzer:
    """
    Domain service producing the full assessment of a design.

    Stateless apart from its configuration: analyzing the same design twice
    yields equal results, and inputs are never mutated.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        rules: Optional[RuleSet] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Analysis configuration; defaults are the reference values
            rules: Rule set overriding ``config.rules``
        """
        self.config = config or AnalysisConfig()
        if rules is not None:
            self.config = AnalysisConfig(
                overlap_tolerance=self.config.overlap_tolerance,
                coverage_target=self.config.coverage_target,
                rules=rules,
            )
        logger.info(f"Initialized DesignAnalyzer with config: "
                    f"overlap_tolerance={self.config.overlap_tolerance}, "
                    f"coverage_target={self.config.coverage_target}")

    @property
    def rules(self) -> RuleSet:
        return self.config.rules

    def analyze(self, design: Design, catalog: Catalog) -> AnalysisResult:
        """
        Assess a design against every rule.

        Unknown plant ids are skipped by each analyzer and reported on the
        result; nothing here raises for malformed placement data.

        Args:
            design: Placements, bed and optional yard zone
            catalog: Catalog resolving plant ids

        Returns:
            AnalysisResult with every sub-analysis and both composite scores
        """
        placed = list(design.placed_plants)
        bed = design.bed
        rules = self.rules
        logger.info(f"Analyzing design '{design.name}' with {len(placed)} placements")

        unresolved = catalog.unresolved_ids(placed)
        if unresolved:
            logger.debug(f"Unresolved plant ids ignored: {unresolved}")

        # Step 1: core analyzers
        coverage = compute_coverage(placed, catalog, bed, self.config.overlap_tolerance)
        harmony = compute_color_harmony(placed, catalog)
        height_layering = analyze_height_layering(placed, catalog, bed, rules)
        form_variety = form_variety_for(placed, catalog, rules)
        texture_variety = texture_variety_for(placed, catalog, rules)
        mass_planting = analyze_mass_planting(placed, catalog, rules)
        bloom_sequence = analyze_bloom_sequence(placed, catalog, rules)
        logger.debug(f"Step 1: coverage={coverage:.2f}%, harmony='{harmony.scheme}', "
                     f"tiers={height_layering.active_tiers}")

        # Step 2: Show Ready composite
        show_ready = calculate_show_ready_score(
            ShowReadyInputs(
                coverage_percent=coverage,
                bloom_sequence=bloom_sequence,
                height_layering=height_layering,
                form_variety=form_variety,
                texture_variety=texture_variety,
                mass_planting=mass_planting,
                color_harmony=harmony,
            ),
            rules,
            self.config.coverage_target,
        )
        logger.debug(f"Step 2: show ready score {show_ready.total_score} ({show_ready.rating})")

        # Step 3: residential analyses and composite
        residential = self.analyze_residential(design, catalog, harmony, height_layering, bloom_sequence)
        logger.debug(f"Step 3: residential score {residential.score.total_score} "
                     f"({residential.score.rating})")

        logger.info(f"Design '{design.name}' scored {show_ready.total_score} show ready, "
                    f"{residential.score.total_score} residential")

        return AnalysisResult(
            coverage_percent=coverage,
            color_harmony=harmony,
            height_layering=height_layering,
            form_variety=form_variety,
            texture_variety=texture_variety,
            mass_planting=mass_planting,
            bloom_sequence=bloom_sequence,
            show_ready=show_ready,
            residential=residential,
            unresolved_plant_ids=unresolved,
        )

    def analyze_residential(
        self,
        design: Design,
        catalog: Catalog,
        harmony: Optional[ColorHarmony] = None,
        height_layering: Optional[HeightLayeringResult] = None,
        bloom_sequence: Optional[BloomSequenceResult] = None,
    ) -> ResidentialAnalysis:
        """
        Run the residential analyses and their composite score.

        Core results already computed for the same design may be passed in
        to avoid recomputing them.
        """
        placed = list(design.placed_plants)
        bed = design.bed
        rules = self.rules

        if harmony is None:
            harmony = compute_color_harmony(placed, catalog)
        if height_layering is None:
            height_layering = analyze_height_layering(placed, catalog, bed, rules)
        if bloom_sequence is None:
            bloom_sequence = analyze_bloom_sequence(placed, catalog, rules)

        layering = analyze_residential_layering(placed, catalog, bed)
        spacing = analyze_residential_spacing(placed, catalog)
        odd_groupings = analyze_odd_groupings(placed, catalog)
        zone_compliance = analyze_zone_compliance(placed, catalog, design.yard_zone, rules)
        four_season = analyze_four_season(bloom_sequence, rules)
        curb_appeal = analyze_curb_appeal(
            placed, catalog, bed, design.yard_zone, harmony, height_layering, rules
        )

        score = calculate_residential_score(
            ResidentialInputs(
                layering=layering,
                spacing=spacing,
                odd_groupings=odd_groupings,
                zone_compliance=zone_compliance,
                four_season=four_season,
                curb_appeal=curb_appeal,
            ),
            rules,
        )

        return ResidentialAnalysis(
            layering=layering,
            spacing=spacing,
            odd_groupings=odd_groupings,
            zone_compliance=zone_compliance,
            four_season=four_season,
            curb_appeal=curb_appeal,
            score=score,
        )
