"""
Unit tests for catalog normalization and lookup.

Tests cover:
- Legacy and current plant record shapes
- Category-grouped plant lists
- Skipping of bad records and duplicate ids
- Bundle template parsing (legacy rows and role groups)
- Placement resolution
"""
import pytest

from landscape_studio.domain.catalog import Catalog, CatalogError, normalize_plant_record
from landscape_studio.domain.models import PlacedPlant


# ============================================================
# Record Normalization Tests
# ============================================================

class TestNormalizePlantRecord:
    """Tests for single record normalization."""

    def test_legacy_field_names(self):
        """height/spread/disneyUse should map onto the current fields."""
        plant = normalize_plant_record({
            "id": "crape-myrtle", "name": "Crape Myrtle",
            "height": "15-25ft", "spread": "15-20ft",
            "color": "#E91E63", "bloomTime": "Summer", "category": "focal",
            "disneyUse": "Main Street USA focal trees",
        })

        assert plant.height_range == "15-25ft"
        assert plant.height_inches == 300
        assert plant.spread_inches == 240
        assert plant.description == "Main Street USA focal trees"
        assert plant.bloom.bloom_months == [6, 7, 8]
        assert plant.drift_category == "tree"

    def test_current_field_names(self):
        """heightRange/spreadRange should be read directly."""
        plant = normalize_plant_record({
            "id": "moss-phlox", "name": "Moss Phlox",
            "heightRange": "4-6in", "spreadRange": "12-24in",
            "category": "groundcovers",
        })

        assert plant.height_inches == 6
        assert plant.spread_inches == 24
        assert plant.drift_category == "groundcover"

    def test_db_category_preferred(self):
        """dbCategory should override the display category."""
        plant = normalize_plant_record({
            "id": "x", "name": "Oakleaf Hydrangea",
            "category": "Flowering", "dbCategory": "shrubs",
        })

        assert plant.category == "shrubs"
        assert plant.drift_category == "shrub"
        assert plant.resolved_form == "mounding"
        assert plant.resolved_texture == "coarse"

    def test_explicit_form_and_texture_kept(self):
        """Explicit form and texture should survive normalization."""
        plant = normalize_plant_record({
            "id": "x", "name": "Anything", "form": "Weeping", "texture": "Fine",
        })

        assert plant.resolved_form == "weeping"
        assert plant.resolved_texture == "fine"

    def test_missing_fields_use_defaults(self):
        """Records without sizes should use the parser defaults."""
        plant = normalize_plant_record({"id": "x", "name": "Bare"})

        assert plant.height_inches == 24
        assert plant.spread_inches == 12
        assert plant.bloom.interest_months == []
        assert plant.drift_category == "perennial"

    def test_missing_id_raises(self):
        """A record with no id cannot be normalized."""
        with pytest.raises(ValueError, match="missing id or name"):
            normalize_plant_record({"name": "Nameless"})


# ============================================================
# Catalog Construction Tests
# ============================================================

class TestCatalogFromDict:
    """Tests for building a catalog from a JSON document."""

    def test_sample_catalog_loads(self, catalog):
        """Every sample plant and bundle should be indexed."""
        assert len(catalog) == 8
        assert set(catalog.bundles) == {"main-street-usa", "layered-border"}
        assert "liriope" in catalog

    def test_category_grouped_plants(self):
        """Plants grouped under category keys should inherit that category."""
        catalog = Catalog.from_dict({
            "plants": {
                "groundcover": [{"id": "liriope", "name": "Liriope", "height": "10-12in"}],
                "focal": [{"id": "live-oak", "name": "Live Oak", "height": "40-80ft"}],
            }
        })

        assert catalog.get("liriope").category == "groundcover"
        assert catalog.get("live-oak").drift_category == "tree"

    def test_bad_records_skipped(self):
        """Unparseable records should be skipped, not fail the load."""
        catalog = Catalog.from_dict({
            "plants": [
                {"id": "ok", "name": "Fine Plant"},
                {"name": "No Id"},
                {"id": "ok", "name": "Duplicate"},
            ]
        })

        assert len(catalog) == 1
        assert catalog.get("ok").name == "Fine Plant"

    def test_garbage_height_skips_nothing(self):
        """A height too large to parse should default rather than abort the load."""
        catalog = Catalog.from_dict({
            "plants": [
                {"id": "a", "name": "A", "height": "9" * 400 + "in"},
                {"id": "b", "name": "B", "height": "2ft"},
            ]
        })

        assert len(catalog) == 2
        assert catalog.get("a").height_inches == 24

    @pytest.mark.parametrize("plants", [["oops"], [42, None], {"hero": 5}, {"hero": ["oops"]}])
    def test_malformed_bundle_skipped(self, plants):
        """Bundles with non-mapping entries are skipped; the rest still load."""
        catalog = Catalog.from_dict({
            "plants": [{"id": "a", "name": "A"}],
            "bundles": [
                {"id": "bad", "name": "Bad", "plants": plants},
                {"id": "good", "name": "Good", "plants": [{"plantId": "a", "quantity": 3}]},
            ],
        })

        assert list(catalog.bundles) == ["good"]
        assert len(catalog) == 1

    def test_non_mapping_document_raises(self):
        """A document that is not a JSON object is not a catalog."""
        with pytest.raises(CatalogError):
            Catalog.from_dict([{"id": "x", "name": "x"}])

    def test_plants_mapping_is_read_only(self, catalog):
        """The plant index should not be mutable from outside."""
        with pytest.raises(TypeError):
            catalog.plants["new"] = None


# ============================================================
# Bundle Template Tests
# ============================================================

class TestBundleTemplates:
    """Tests for bundle template parsing."""

    def test_legacy_rows_become_roles(self, catalog):
        """Flat entries tagged with 'row' should be grouped by that row."""
        bundle = catalog.get_bundle("main-street-usa")

        assert set(bundle.plants) == {"edge", "middle", "front", "groundcover", "focal"}
        assert bundle.plants["edge"][0].role == "edge"

    def test_role_groups_assign_roles(self, catalog):
        """Entries under a role key should carry that role."""
        bundle = catalog.get_bundle("layered-border")

        assert [e.role for e in bundle.plants["seasonal"]] == ["seasonal", "seasonal"]
        assert bundle.plants["carpet"][0].swaps[0].plant_id == "moss-phlox"

    def test_entries_in_role_order(self, catalog):
        """entries() should list standard roles from hero to carpet."""
        roles = [e.role for e in catalog.get_bundle("layered-border").entries()]

        assert roles == ["hero", "structure", "seasonal", "seasonal", "texture", "carpet"]


# ============================================================
# Resolution Tests
# ============================================================

class TestResolution:
    """Tests for resolving placements against the catalog."""

    def test_unknown_ids_skipped(self, catalog):
        """Placements with unknown plant ids should be dropped silently."""
        placed = [
            PlacedPlant(id="a", plant_id="liriope", x=0, y=0),
            PlacedPlant(id="b", plant_id="retired-plant", x=0, y=0),
        ]

        resolved = catalog.resolve(placed)

        assert [p.id for p, _ in resolved] == ["a"]
        assert catalog.unresolved_ids(placed) == ["retired-plant"]

    def test_unresolved_ids_distinct(self, catalog):
        """Each missing id should be reported once."""
        placed = [PlacedPlant(id=str(i), plant_id="gone", x=0, y=0) for i in range(3)]

        assert catalog.unresolved_ids(placed) == ["gone"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
