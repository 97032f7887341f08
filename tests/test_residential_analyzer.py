"""
Unit tests for the residential analyses.

Tests cover:
- Layer counts and front-to-back placement
- Crowded pairs
- Odd-numbered groupings
- Yard zone height limits
- Four-season interest
- Curb appeal checklist
"""
import pytest

from landscape_studio.domain.models import BedDimensions
from landscape_studio.services.domain.coverage_analyzer import compute_color_harmony
from landscape_studio.services.domain.layering_analyzer import analyze_height_layering
from landscape_studio.services.domain.planting_analyzer import analyze_bloom_sequence
from landscape_studio.services.domain.residential_analyzer import (
    analyze_curb_appeal,
    analyze_four_season,
    analyze_odd_groupings,
    analyze_residential_layering,
    analyze_residential_spacing,
    analyze_zone_compliance,
    calculate_layer_count,
)
from landscape_studio.utils.bed_geometry import find_crowded_pairs


# ============================================================
# Layering Tests
# ============================================================

class TestResidentialLayering:
    """Tests for front-to-back layering."""

    @pytest.mark.parametrize("depth,layers", [(30, 1), (36, 2), (72, 3), (96, 4), (144, 5)])
    def test_layer_count_from_depth(self, depth, layers):
        """Deeper beds hold more layers."""
        assert calculate_layer_count(depth) == layers

    def test_well_layered_design(self, catalog, layered_design):
        """Tall at the back, short at the front scores 100."""
        result = analyze_residential_layering(
            layered_design.placed_plants, catalog, layered_design.bed
        )

        assert result.score == 100
        assert result.expected_layers == 3
        assert result.actual_layers == 3
        assert result.issues == []

    def test_tree_at_front(self, catalog, bed, place):
        """A canopy tree at the front edge is out of position."""
        result = analyze_residential_layering(place(("crape-myrtle", 60, 70)), catalog, bed)

        assert result.score == 0
        assert len(result.issues) == 1
        assert result.recommendation is not None

    def test_empty(self, catalog, bed):
        """Empty designs score 0 with a single issue."""
        result = analyze_residential_layering([], catalog, bed)

        assert result.score == 0
        assert result.issues == ["No plants placed"]


# ============================================================
# Spacing Tests
# ============================================================

class TestResidentialSpacing:
    """Tests for crowding between plants."""

    def test_crowded_pair(self, catalog, place):
        """Two 48in roses 10in apart are crowded."""
        result = analyze_residential_spacing(
            place(("knockout-rose", 20, 36), ("knockout-rose", 30, 36)), catalog
        )

        assert result.score == 0
        assert result.spacing_issues == 1
        assert result.issues == ["Knockout Rose and Knockout Rose are too close together"]

    def test_well_spaced(self, catalog, place):
        """Plants beyond half their ideal spacing are fine."""
        result = analyze_residential_spacing(
            place(("knockout-rose", 10, 36), ("knockout-rose", 110, 36)), catalog
        )

        assert result.score == 100
        assert result.total_pairs == 1

    def test_single_plant(self, catalog, place):
        """Fewer than two plants cannot crowd."""
        assert analyze_residential_spacing(place(("liriope", 0, 0)), catalog).score == 100

    def test_issue_messages_capped(self, catalog, place):
        """At most three crowding messages are listed."""
        placed = place(*[("liriope", i, 0) for i in range(5)])

        result = analyze_residential_spacing(placed, catalog)

        assert result.spacing_issues == 10
        assert len(result.issues) == 3

    def test_crowded_pairs_helper(self):
        """Pairs are crowded below half the summed half-spreads."""
        pairs = find_crowded_pairs([(0, 0), (5, 0), (100, 0)], [12, 12, 12])

        assert pairs == [(0, 1, 5.0)]

    def test_crowded_pairs_skip_non_finite(self):
        """Non-finite positions are ignored and indices still refer to the input."""
        pairs = find_crowded_pairs(
            [(float("nan"), 0), (0, 0), (float("inf"), 0), (5, 0)], [12, 12, 12, 12]
        )

        assert pairs == [(1, 3, 5.0)]

    def test_non_finite_placement_not_crowded(self, catalog, place):
        """A placement with a NaN coordinate counts as well spaced."""
        placed = place(("knockout-rose", float("nan"), 36), ("knockout-rose", 20, 36))

        result = analyze_residential_spacing(placed, catalog)

        assert result.score == 100
        assert result.total_pairs == 1


# ============================================================
# Odd Grouping Tests
# ============================================================

class TestOddGroupings:
    """Tests for odd-numbered groupings."""

    def test_mixed_groups(self, catalog, place):
        """One odd group of two repeated species scores 50."""
        placed = place(
            ("knockout-rose", 0, 0), ("knockout-rose", 0, 0), ("knockout-rose", 0, 0),
            ("liriope", 0, 0), ("liriope", 0, 0),
        )

        result = analyze_odd_groupings(placed, catalog)

        assert result.score == 50
        assert result.odd_group_count == 1
        assert result.issues == ["Liriope: 2 planted (try 3 for visual balance)"]

    def test_singles_only(self, catalog, place):
        """Designs without repeated species have nothing to fault."""
        assert analyze_odd_groupings(place(("liriope", 0, 0)), catalog).score == 100

    def test_empty(self, catalog):
        """Empty designs score 0."""
        assert analyze_odd_groupings([], catalog).score == 0


# ============================================================
# Zone Compliance Tests
# ============================================================

class TestZoneCompliance:
    """Tests for yard zone height limits."""

    def test_entry_path_height_cap(self, catalog, place):
        """Entry walks cap plants at 36 inches."""
        placed = place(("crape-myrtle", 0, 0), ("liriope", 0, 0))

        result = analyze_zone_compliance(placed, catalog, "ENTRY_PATH")

        assert result.score == 50
        assert result.zone_name == "Entry Walkway"
        assert result.issues == ['Crape Myrtle too tall for entry walkway (max 36")']

    def test_privacy_screen_minimum(self, catalog, place):
        """Privacy screens need plants of at least six feet."""
        result = analyze_zone_compliance(place(("liriope", 0, 0)), catalog, "privacy-screen")

        assert result.score == 0
        assert result.issues == ["Liriope too short for privacy screen (min 6ft)"]

    @pytest.mark.parametrize("zone", [None, "", "moon-garden"])
    def test_no_zone_limits(self, catalog, place, zone):
        """Missing or unknown zones impose no limits."""
        assert analyze_zone_compliance(place(("crape-myrtle", 0, 0)), catalog, zone).score == 100


# ============================================================
# Four Season Tests
# ============================================================

class TestFourSeason:
    """Tests for four-season interest."""

    def test_evergreen_all_seasons(self, catalog, place):
        """An evergreen carries every season."""
        bloom = analyze_bloom_sequence(place(("ball-boxwood", 0, 0)), catalog)

        result = analyze_four_season(bloom)

        assert result.score == pytest.approx(100)
        assert result.issues == []

    def test_summer_only(self, catalog, place):
        """A summer bloomer covers one season in four."""
        bloom = analyze_bloom_sequence(place(("liriope", 0, 0)), catalog)

        result = analyze_four_season(bloom)

        assert result.score == pytest.approx(25)
        assert result.seasons_with_interest == ["summer"]
        assert len(result.issues) == 3


# ============================================================
# Curb Appeal Tests
# ============================================================

class TestCurbAppeal:
    """Tests for the curb appeal checklist."""

    @staticmethod
    def _curb_appeal(placed, catalog, bed, zone=None):
        return analyze_curb_appeal(
            placed, catalog, bed, zone,
            compute_color_harmony(placed, catalog),
            analyze_height_layering(placed, catalog, bed),
        )

    def test_layered_design_passes(self, catalog, layered_design):
        """A focal tree, three colors and few species pass every check."""
        result = self._curb_appeal(layered_design.placed_plants, catalog, layered_design.bed)

        assert result.score == 100
        assert result.has_focal_point is True
        assert result.specimen_count == 1

    def test_no_focal_point(self, catalog, bed, place):
        """Beds without a tree or canopy plant lose 25."""
        result = self._curb_appeal(place(("liriope", 0, 0)), catalog, bed)

        assert result.score == 75
        assert result.has_focal_point is False

    def test_competing_specimens_in_front_zone(self, catalog, bed, place):
        """More than one specimen tree in a front zone loses 25."""
        placed = place(("crape-myrtle", 30, 10), ("crape-myrtle", 90, 10))

        assert self._curb_appeal(placed, catalog, bed, "FRONT_FOUNDATION").score == 75
        assert self._curb_appeal(placed, catalog, bed, "BACKYARD_BORDER").score == 100

    def test_too_many_colors(self, catalog, place):
        """An invalid palette loses 25."""
        bed = BedDimensions(width=240, height=120)
        placed = place(("crape-myrtle", 60, 10), ("knockout-rose", 0, 0),
                       ("blue-salvia", 0, 0), ("petunia", 0, 0))

        result = self._curb_appeal(placed, catalog, bed)

        assert result.score == 75

    def test_busy_small_bed(self, catalog, place):
        """More than five species per 100 sq ft loses 25."""
        bed = BedDimensions(width=24, height=24)
        placed = place(("crape-myrtle", 12, 4), ("liriope", 12, 20))

        assert self._curb_appeal(placed, catalog, bed).score == 75

    def test_empty(self, catalog, bed):
        """Empty designs score 0."""
        assert self._curb_appeal([], catalog, bed).score == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
