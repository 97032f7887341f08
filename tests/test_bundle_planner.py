"""
Unit tests for bundle expansion, density scaling and ratio checks.

Tests cover:
- Quantity scaling with half-up rounding
- Placement bounds, role bands and outline snapping
- Reproducible jitter
- Role targets per plant age
- Density rescaling and layer ratio validation
"""
from collections import Counter

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from landscape_studio.domain.models import BedDimensions, BundleTemplate
from landscape_studio.services.domain.bundle_planner import (
    PlacementConfig,
    apply_bundle,
    apply_density,
    calculate_role_targets,
    validate_bundle_ratios,
)


NO_JITTER = PlacementConfig(jitter_inches=0)


# ============================================================
# Bundle Expansion Tests
# ============================================================

class TestApplyBundle:
    """Tests for turning a template into placements."""

    def test_scaled_quantity_and_bounds(self, catalog, bed):
        """Quantity 6 at scale 1.5 yields exactly 9 placements inside the bed."""
        template = catalog.get_bundle("main-street-usa")

        placed = apply_bundle(template, 1.5, bed, rng=np.random.default_rng(7), catalog=catalog)

        counts = Counter(p.plant_id for p in placed)
        assert counts["knockout-rose"] == 9
        for p in placed:
            assert 0 <= p.x <= bed.width
            assert 0 <= p.y <= bed.height

    def test_half_quantities_round_up(self, catalog, bed):
        """A single focal tree at scale 0.5 still yields one plant."""
        template = catalog.get_bundle("main-street-usa")

        placed = apply_bundle(template, 0.5, bed, config=NO_JITTER)

        counts = Counter(p.plant_id for p in placed)
        assert counts["crape-myrtle"] == 1
        assert counts["knockout-rose"] == 3
        assert len(placed) == 13

    def test_ids_unique_and_prefixed(self, catalog, bed):
        """Placement ids are unique and carry the bundle id."""
        placed = apply_bundle(catalog.get_bundle("main-street-usa"), 1, bed)

        assert len({p.id for p in placed}) == len(placed) == 25
        assert all(p.id.startswith("main-street-usa-") for p in placed)

    def test_ids_unique_across_applications(self, bed):
        """Applying a bundle twice onto one design never repeats an id."""
        template = BundleTemplate.model_validate({
            "id": "x", "name": "X",
            "plants": [{"plantId": "liriope", "quantity": 3, "role": "carpet"}],
        })

        first = apply_bundle(template, 1, bed, rng=np.random.default_rng(1))
        second = apply_bundle(template, 1, bed, rng=np.random.default_rng(2))

        ids = [p.id for p in first + second]
        assert len(set(ids)) == len(ids) == 6

    def test_role_bands(self, catalog, bed):
        """Heroes land near the back and carpets near the front."""
        placed = apply_bundle(catalog.get_bundle("layered-border"), 1, bed, config=NO_JITTER)

        hero = [p for p in placed if p.plant_id == "crape-myrtle"]
        carpet = [p for p in placed if p.plant_id == "liriope"]
        assert all(0.05 * 72 <= p.y <= 0.2 * 72 for p in hero)
        assert all(0.7 * 72 <= p.y <= 0.95 * 72 for p in carpet)

    def test_spread_across_width(self, catalog, bed):
        """Instances of one entry are spaced evenly across the width."""
        placed = apply_bundle(catalog.get_bundle("layered-border"), 1, bed, config=NO_JITTER)

        xs = [p.x for p in placed if p.plant_id == "holly-nellie"]
        assert xs == pytest.approx([30, 60, 90])

    def test_seed_reproducible(self, catalog, bed):
        """The same seed yields the same placements."""
        template = catalog.get_bundle("layered-border")
        config = PlacementConfig(jitter_inches=6, seed=42)

        def layout():
            return [(p.plant_id, p.x, p.y) for p in apply_bundle(template, 1, bed, config=config)]

        assert layout() == layout()

    def test_outline_snapping(self, catalog):
        """Placements land inside a drawn outline."""
        outline = [(0, 0), (120, 0), (0, 72)]
        bed = BedDimensions(width=120, height=72, outline=outline)
        polygon = Polygon(outline).buffer(1e-6)

        placed = apply_bundle(
            catalog.get_bundle("main-street-usa"), 1, bed, rng=np.random.default_rng(3)
        )

        assert all(polygon.covers(Point(p.x, p.y)) for p in placed)

    def test_unknown_plants_skipped(self, catalog, bed):
        """Entries naming plants missing from the catalog are skipped."""
        template = BundleTemplate.model_validate({
            "id": "mixed", "name": "Mixed",
            "plants": [
                {"plantId": "liriope", "quantity": 3, "role": "carpet"},
                {"plantId": "discontinued", "quantity": 3, "role": "carpet"},
            ],
        })

        placed = apply_bundle(template, 1, bed, catalog=catalog)

        assert {p.plant_id for p in placed} == {"liriope"}

    def test_zero_scale(self, catalog, bed):
        """A zero scale places nothing."""
        assert apply_bundle(catalog.get_bundle("main-street-usa"), 0, bed) == []


# ============================================================
# Role Target Tests
# ============================================================

class TestRoleTargets:
    """Tests for density-based role targets."""

    def test_young_install(self):
        """Young installs plant 2 per sq ft split 10/60/30."""
        targets = calculate_role_targets(100, "young")

        assert targets.total == 200
        assert targets.by_layer == {"tall": 20, "medium": 120, "low": 60}
        assert (targets.hero, targets.structure, targets.seasonal) == (10, 72, 48)
        assert (targets.texture, targets.carpet) == (36, 24)

    def test_mature_install(self):
        """Mature installs plant 1 per sq ft."""
        targets = calculate_role_targets(100, "mature")

        assert targets.total == 100
        assert targets.hero == 5

    def test_aliases_and_unknown_age(self):
        """Density aliases map to ages and unknown ages fall back to young."""
        assert calculate_role_targets(50, "sparse").plant_age == "specimen"
        assert calculate_role_targets(50, "ancient").plant_age == "young"

    def test_tiny_bed_keeps_a_hero(self):
        """Even the smallest bed gets one hero plant."""
        assert calculate_role_targets(0, "specimen").hero == 1


# ============================================================
# Density & Ratio Tests
# ============================================================

class TestDensity:
    """Tests for density rescaling."""

    def test_rescales_to_targets(self, catalog):
        """Role totals follow the mature targets, keeping proportions."""
        template = catalog.get_bundle("layered-border")

        dense = apply_density(template, multiplier=1.0, bed_area_sqft=100)

        assert dense.plants["hero"][0].quantity == 5
        assert [e.quantity for e in dense.plants["seasonal"]] == [12, 12]
        assert template.plants["hero"][0].quantity == 1

    def test_minimum_one_plant(self, catalog):
        """Every entry keeps at least one plant."""
        dense = apply_density(catalog.get_bundle("main-street-usa"), multiplier=0.1, bed_area_sqft=1)

        assert all(e.quantity >= 1 for e in dense.entries())


class TestBundleRatios:
    """Tests for tall/medium/low layer ratios."""

    def test_balanced_bundle(self, catalog):
        """A layered border sits inside every ratio limit."""
        report = validate_bundle_ratios(catalog.get_bundle("layered-border"))

        assert report.valid is True
        assert report.ratios == {"tall": 4, "medium": 54, "low": 42}
        assert report.counts["total"] == 24

    def test_legacy_rows_counted(self, catalog):
        """Legacy rows fold onto standard roles before the ratios are taken."""
        report = validate_bundle_ratios(catalog.get_bundle("main-street-usa"))

        assert report.valid is False
        assert report.issues == ["Not enough fillers (24%). Target: 60%"]
        assert report.counts["hero"] == 1

    def test_hero_heavy(self):
        """Too many heroes and no fillers are both reported."""
        template = BundleTemplate.model_validate({
            "id": "x", "name": "x",
            "plants": {
                "hero": [{"plantId": "a", "quantity": 5}],
                "carpet": [{"plantId": "b", "quantity": 5}],
            },
        })

        report = validate_bundle_ratios(template)

        assert len(report.issues) == 2
        assert report.issues[0].startswith("Too many hero plants (50%)")

    def test_empty_bundle(self):
        """An empty bundle is trivially valid."""
        report = validate_bundle_ratios(BundleTemplate(id="empty", name="Empty"))

        assert report.valid is True
        assert report.counts["total"] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
