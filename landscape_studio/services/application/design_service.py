"""
Application service: Orchestration layer for design operations.
"""
import logging
from typing import Callable, Optional

import numpy as np

from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, BundleTemplate, Design, PlacedPlant, PlantSpecies
from landscape_studio.domain.results import (
    AnalysisResult,
    BundleRatioReport,
    DesignBlueprint,
    ResidentialAnalysis,
    ShowReadyScore,
)
from landscape_studio.services.domain.blueprint_exporter import build_blueprint
from landscape_studio.services.domain.bundle_planner import (
    PlacementConfig,
    apply_bundle,
    apply_density,
    validate_bundle_ratios,
)
from landscape_studio.services.domain.design_analyzer import DesignAnalyzer
from landscape_studio.utils.bed_geometry import bed_area

logger = logging.getLogger(__name__)


class BundleNotFoundError(LookupError):
    """Raised when a bundle id is not in the catalog."""

    def __init__(self, bundle_id: str):
        self.bundle_id = bundle_id
        super().__init__(f"Bundle '{bundle_id}' not found")


class DesignService:
    """
    Application service for design operations.

    Coordinates the catalog source and the domain analyzers; the scoring
    rules themselves live in the domain layer.
    """

    def __init__(
        self,
        catalog_provider: Callable[[], Catalog],
        analyzer: DesignAnalyzer,
        placement_config: Optional[PlacementConfig] = None,
    ):
        """
        Initialize the service with dependencies.

        Args:
            catalog_provider: Callable returning the current catalog
            analyzer: Design analyzer for scoring
            placement_config: Bundle expansion settings
        """
        self.catalog_provider = catalog_provider
        self.analyzer = analyzer
        self.placement_config = placement_config or PlacementConfig()

    @property
    def catalog(self) -> Catalog:
        return self.catalog_provider()

    def analyze_design(self, design: Design) -> AnalysisResult:
        return self.analyzer.analyze(design, self.catalog)

    def score_show_ready(self, design: Design) -> ShowReadyScore:
        return self.analyze_design(design).show_ready

    def score_residential(self, design: Design) -> ResidentialAnalysis:
        return self.analyzer.analyze_residential(design, self.catalog)

    def export_blueprint(self, design: Design) -> DesignBlueprint:
        """Analyze a design and package it as a blueprint document."""
        catalog = self.catalog
        analysis = self.analyzer.analyze(design, catalog)
        return build_blueprint(design, catalog, analysis)

    def list_bundles(self) -> list[BundleTemplate]:
        return list(self.catalog.bundles.values())

    def list_plants(self, category: Optional[str] = None) -> list[PlantSpecies]:
        plants = self.catalog.plants.values()
        if category:
            wanted = category.strip().lower()
            plants = [p for p in plants if p.category.lower() == wanted]
        return list(plants)

    def get_bundle(self, bundle_id: str) -> BundleTemplate:
        """
        Look up a bundle template.

        Raises:
            BundleNotFoundError: If the id is unknown
        """
        bundle = self.catalog.get_bundle(bundle_id)
        if bundle is None:
            raise BundleNotFoundError(bundle_id)
        return bundle

    def bundle_ratios(self, bundle_id: str) -> BundleRatioReport:
        return validate_bundle_ratios(self.get_bundle(bundle_id))

    def apply_bundle(
        self,
        bundle_id: str,
        scale: float,
        bed: BedDimensions,
        density: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> list[PlacedPlant]:
        """
        Expand a bundle into placements for a bed.

        When ``density`` is given the template is first rescaled to the bed
        area with that multiplier.

        Args:
            bundle_id: Bundle template id
            scale: Quantity multiplier
            bed: Target bed dimensions in inches
            density: Optional density multiplier for young/mature installs
            seed: Optional seed for reproducible jitter

        Returns:
            New placements

        Raises:
            BundleNotFoundError: If the id is unknown
        """
        catalog = self.catalog
        template = self.get_bundle(bundle_id)
        if density is not None:
            area_sqft = max(bed_area(bed), 0.0) / 144
            template = apply_density(template, density, area_sqft)

        rng = np.random.default_rng(seed if seed is not None else self.placement_config.seed)
        return apply_bundle(
            template, scale, bed,
            rng=rng, catalog=catalog, config=self.placement_config,
        )
