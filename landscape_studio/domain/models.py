"""
Domain models for plants, placements, beds and bundle templates.

These models represent the core domain entities and should be independent
of any infrastructure concerns (catalog sources, HTTP, etc.). They serialize
with camelCase aliases, which is the shape the canvas front end exchanges.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BloomProfile(CamelModel):
    """Structured bloom/interest calendar parsed from free-text bloom time."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    bloom_months: list[int] = Field(default_factory=list)
    interest_months: list[int] = Field(default_factory=list)
    is_evergreen: bool = False
    interest_type: Optional[str] = None


class PlantSpecies(CamelModel):
    """
    Catalog plant record.

    The raw text fields are kept as entered; the parsed fields below them are
    filled once by ``landscape_studio.domain.catalog.normalize_plant_record``
    so analyzers never re-parse prose.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    height_range: str = ""
    spread_range: str = ""
    color: str = ""
    bloom_time: str = ""
    category: str = ""
    form: Optional[str] = None
    texture: Optional[str] = None
    botanical_name: Optional[str] = None
    description: Optional[str] = None

    height_inches: float = 24.0
    spread_inches: float = 12.0
    bloom: BloomProfile = Field(default_factory=BloomProfile)
    resolved_form: str = "mounding"
    resolved_texture: str = "medium"
    drift_category: str = "perennial"


class PlacedPlant(CamelModel):
    """A single plant instance on the canvas, positioned in bed inches."""
    id: str
    plant_id: str
    x: float = Field(description="Horizontal position in inches from the left bed edge")
    y: float = Field(description="Vertical position in inches from the back bed edge")
    rotation: float = 0.0
    scale: float = 1.0
    size_variant: Optional[str] = None


class BedDimensions(CamelModel):
    """Rectangular bed size in inches, with an optional drawn outline."""
    width: float = Field(description="Bed width in inches")
    height: float = Field(description="Bed depth in inches")
    outline: Optional[list[tuple[float, float]]] = Field(
        default=None,
        description="Custom bed polygon as [x, y] inch pairs"
    )

    @property
    def has_outline(self) -> bool:
        return bool(self.outline) and len(self.outline) > 2


class BundleSwap(CamelModel):
    """Conditional substitution suggestion. Informational only."""
    condition: str
    plant_id: str
    note: Optional[str] = None


class BundleEntry(CamelModel):
    plant_id: str
    quantity: int = Field(ge=0)
    role: str = "middle"
    note: Optional[str] = None
    height_tier: Optional[str] = None
    swaps: list[BundleSwap] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_row(cls, data: Any) -> Any:
        # Older templates tag position with "row" instead of "role"
        if isinstance(data, dict) and "role" not in data and "row" in data:
            data = {**data, "role": data["row"]}
        return data


ROLE_ORDER = ("hero", "structure", "seasonal", "texture", "carpet")


class BundleTemplate(CamelModel):
    """Named template of role-grouped plant quantities."""
    id: str
    name: str
    subtitle: Optional[str] = None
    theme: Optional[str] = None
    description: Optional[str] = None
    base_size: Optional[str] = None
    yard_zone: Optional[str] = None
    is_residential: bool = False
    plants: dict[str, list[BundleEntry]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _group_plant_entries(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        plants = data.get("plants")
        if isinstance(plants, list):
            grouped: dict[str, list] = {}
            for entry in plants:
                # Non-mapping entries are left for field validation to reject
                role = (entry.get("role") or entry.get("row")) if isinstance(entry, dict) else None
                role = role or "middle"
                grouped.setdefault(role, []).append(entry)
            data = {**data, "plants": grouped}
        elif isinstance(plants, dict):
            # Entries inherit their group's role unless they name one
            data = {**data, "plants": {
                role: [
                    {"role": role, **entry} if isinstance(entry, dict) else entry
                    for entry in entries
                ] if isinstance(entries, list) else entries
                for role, entries in plants.items()
            }}
        return data

    def entries(self) -> list[BundleEntry]:
        """All entries, standard roles first in canonical order."""
        ordered = [r for r in ROLE_ORDER if r in self.plants]
        ordered += [r for r in self.plants if r not in ROLE_ORDER]
        return [entry for role in ordered for entry in self.plants[role]]


class Design(CamelModel):
    """The state of one design session."""
    name: str = "Untitled Garden"
    bed: BedDimensions
    placed_plants: list[PlacedPlant] = Field(default_factory=list)
    yard_zone: Optional[str] = None
    bundle_id: Optional[str] = None
