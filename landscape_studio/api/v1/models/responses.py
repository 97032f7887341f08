"""
API response models using Pydantic.
"""
from typing import List, Optional

from pydantic import ConfigDict, Field

from landscape_studio.domain.models import BundleTemplate, CamelModel, PlacedPlant, PlantSpecies


class BundleSummary(CamelModel):
    """Bundle template listing entry."""
    id: str
    name: str
    subtitle: Optional[str] = None
    theme: Optional[str] = None
    description: Optional[str] = None
    base_size: Optional[str] = None
    plant_count: int = Field(description="Total plants at scale 1")
    species_count: int = Field(description="Distinct species in the bundle")

    @classmethod
    def from_template(cls, template: BundleTemplate) -> "BundleSummary":
        entries = template.entries()
        return cls(
            id=template.id,
            name=template.name,
            subtitle=template.subtitle,
            theme=template.theme,
            description=template.description,
            base_size=template.base_size,
            plant_count=sum(e.quantity for e in entries),
            species_count=len({e.plant_id for e in entries}),
        )


class BundleListResponse(CamelModel):
    """Response model for the bundle listing endpoint."""
    count: int
    bundles: List[BundleSummary]


class AppliedBundleResponse(CamelModel):
    """Response model for bundle expansion."""
    bundle_id: str = Field(description="Bundle template id")
    placed_count: int = Field(description="Number of placements created")
    placed_plants: List[PlacedPlant] = Field(description="New placements in bed inches")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "bundleId": "main-street-usa",
            "placedCount": 2,
            "placedPlants": [
                {"id": "main-street-usa-1", "plantId": "crape-myrtle", "x": 60.0, "y": 9.4},
                {"id": "main-street-usa-2", "plantId": "knockout-rose", "x": 17.1, "y": 36.2},
            ]
        }
    })


class PlantListResponse(CamelModel):
    """Response model for the plant catalog listing."""
    count: int
    plants: List[PlantSpecies]
