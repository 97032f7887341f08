"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- A small plant catalog with bundle templates
- Bed dimensions
- Placement builders
- FastAPI test client
"""
import pytest
from fastapi.testclient import TestClient

from landscape_studio.main import app
from landscape_studio.domain.catalog import Catalog
from landscape_studio.domain.models import BedDimensions, Design, PlacedPlant
from landscape_studio.infrastructure.catalog_client import set_catalog


# ============================================================
# Sample Data Fixtures
# ============================================================

SAMPLE_CATALOG = {
    "plants": [
        {"id": "crape-myrtle", "name": "Crape Myrtle", "height": "15-25ft", "spread": "15-20ft",
         "color": "#E91E63", "bloomTime": "Summer", "category": "focal"},
        {"id": "ball-boxwood", "name": "Ball Boxwood", "height": "2-4ft", "spread": "2-4ft",
         "color": "#33691E", "bloomTime": "Evergreen", "category": "topiary"},
        {"id": "knockout-rose", "name": "Knockout Rose", "height": "3-4ft", "spread": "3-4ft",
         "color": "#D32F2F", "bloomTime": "Spring-Fall", "category": "middle"},
        {"id": "blue-salvia", "name": "Blue Salvia", "height": "2-3ft", "spread": "2ft",
         "color": "#1565C0", "bloomTime": "Summer-Fall", "category": "middle"},
        {"id": "petunia", "name": "Petunia", "height": "6-12in", "spread": "12-18in",
         "color": "#9C27B0", "bloomTime": "Spring-Fall", "category": "front"},
        {"id": "liriope", "name": "Liriope", "height": "10-12in", "spread": "12in",
         "color": "#4CAF50", "bloomTime": "Summer spikes", "category": "groundcover"},
        {"id": "moss-phlox", "name": "Moss Phlox", "heightRange": "4-6in", "spreadRange": "12-24in",
         "color": "#EC407A", "bloomTime": "Early Spring", "category": "groundcovers"},
        {"id": "holly-nellie", "name": "Holly 'Nellie Stevens'", "height": "15-25ft",
         "spread": "8-12ft", "color": "#1B5E20", "bloomTime": "Evergreen + berries",
         "category": "back"},
    ],
    "bundles": [
        {
            "id": "main-street-usa",
            "name": "Main Street USA",
            "theme": "Classic Americana",
            "plants": [
                {"plantId": "ball-boxwood", "quantity": 4, "row": "edge"},
                {"plantId": "knockout-rose", "quantity": 6, "row": "middle"},
                {"plantId": "petunia", "quantity": 8, "row": "front"},
                {"plantId": "liriope", "quantity": 6, "row": "groundcover"},
                {"plantId": "crape-myrtle", "quantity": 1, "row": "focal"},
            ],
        },
        {
            "id": "layered-border",
            "name": "Layered Border",
            "baseSize": "200 sq ft",
            "plants": {
                "hero": [{"plantId": "crape-myrtle", "quantity": 1}],
                "structure": [{"plantId": "holly-nellie", "quantity": 3}],
                "seasonal": [
                    {"plantId": "knockout-rose", "quantity": 5},
                    {"plantId": "blue-salvia", "quantity": 5},
                ],
                "texture": [{"plantId": "petunia", "quantity": 5}],
                "carpet": [
                    {"plantId": "liriope", "quantity": 5,
                     "swaps": [{"condition": "full-shade", "plantId": "moss-phlox"}]},
                ],
            },
        },
    ],
}


@pytest.fixture
def catalog() -> Catalog:
    """Create a small catalog covering every category group."""
    return Catalog.from_dict(SAMPLE_CATALOG)


@pytest.fixture
def bed() -> BedDimensions:
    """Create a 10ft x 6ft bed."""
    return BedDimensions(width=120, height=72)


@pytest.fixture
def place():
    """Build placements from (plant_id, x, y) tuples with sequential ids."""
    def _place(*specs: tuple[str, float, float]) -> list[PlacedPlant]:
        return [
            PlacedPlant(id=f"p{i}", plant_id=plant_id, x=x, y=y)
            for i, (plant_id, x, y) in enumerate(specs, start=1)
        ]
    return _place


@pytest.fixture
def layered_design(bed, place) -> Design:
    """Create a design with a focal tree, a rose drift and a liriope edge."""
    placed = place(
        ("crape-myrtle", 60, 10),
        ("knockout-rose", 20, 36), ("knockout-rose", 60, 36), ("knockout-rose", 100, 36),
        ("liriope", 10, 62), ("liriope", 35, 62), ("liriope", 60, 62),
        ("liriope", 85, 62), ("liriope", 110, 62),
    )
    return Design(name="Front Walk", bed=bed, placed_plants=placed)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(catalog):
    """Create a synchronous test client serving the sample catalog."""
    set_catalog(catalog)
    try:
        yield TestClient(app)
    finally:
        set_catalog(None)
