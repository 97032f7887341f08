"""
Plant catalog: normalization of raw plant records and an immutable index.

Catalog sources use two record shapes. The older one names its fields
``height``/``spread`` and may carry the grouping category as ``dbCategory``;
the newer one uses ``heightRange``/``spreadRange``. Both are normalized once
here so analyzers only ever see ``PlantSpecies``.
"""
import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from landscape_studio.domain.models import BundleTemplate, PlacedPlant, PlantSpecies
from landscape_studio.domain.rules import drift_category_for
from landscape_studio.utils.attribute_parsers import (
    infer_plant_form,
    infer_plant_texture,
    parse_bloom_time,
    parse_height_to_inches,
    parse_spread_to_inches,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a catalog source cannot be read or is not a catalog."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.message = message
        self.source = source
        super().__init__(message)


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return default


def normalize_plant_record(raw: Mapping[str, Any]) -> PlantSpecies:
    """
    Turn one raw catalog record into a ``PlantSpecies``.

    Resolves legacy field names and fills every cached parsed attribute.

    Args:
        raw: Plant record as loaded from JSON

    Returns:
        Normalized, immutable PlantSpecies

    Raises:
        ValueError: If the record has no id or name
    """
    plant_id = _first(raw, "id")
    name = _first(raw, "name")
    if not plant_id or not name:
        raise ValueError(f"Plant record missing id or name: {dict(raw)!r}")

    height_range = str(_first(raw, "heightRange", "height_range", "height", default=""))
    spread_range = str(_first(raw, "spreadRange", "spread_range", "spread", default=""))
    bloom_time = str(_first(raw, "bloomTime", "bloom_time", default=""))
    category = str(_first(raw, "dbCategory", "db_category", "category", default=""))
    botanical_name = _first(raw, "botanicalName", "botanical_name")
    description = _first(raw, "description", "disneyUse")
    form = _first(raw, "form")
    texture = _first(raw, "texture")

    return PlantSpecies(
        id=str(plant_id),
        name=str(name),
        height_range=height_range,
        spread_range=spread_range,
        color=str(_first(raw, "color", default="")),
        bloom_time=bloom_time,
        category=category,
        form=form,
        texture=texture,
        botanical_name=botanical_name,
        description=description,
        height_inches=parse_height_to_inches(height_range),
        spread_inches=parse_spread_to_inches(spread_range),
        bloom=parse_bloom_time(bloom_time),
        resolved_form=infer_plant_form(name, category, botanical_name, explicit=form),
        resolved_texture=infer_plant_texture(
            name, category, botanical_name, description, explicit=texture
        ),
        drift_category=drift_category_for(category),
    )


def _iter_records(plants: Any) -> Iterable[Mapping[str, Any]]:
    # Catalogs may group plant lists under their category key
    if isinstance(plants, Mapping):
        for category, records in plants.items():
            for record in records or []:
                if isinstance(record, Mapping) and "category" not in record:
                    record = {**record, "category": category}
                yield record
    elif isinstance(plants, list):
        yield from plants


class Catalog:
    """
    Immutable index of plant species and bundle templates.

    Lookups of unknown ids return None; analyzers skip such placements.
    """

    def __init__(
        self,
        plants: Iterable[PlantSpecies] = (),
        bundles: Iterable[BundleTemplate] = ()
    ):
        plant_index: dict[str, PlantSpecies] = {}
        for plant in plants:
            if plant.id in plant_index:
                logger.warning(f"Duplicate plant id '{plant.id}' in catalog; keeping first")
                continue
            plant_index[plant.id] = plant

        bundle_index: dict[str, BundleTemplate] = {}
        for bundle in bundles:
            if bundle.id in bundle_index:
                logger.warning(f"Duplicate bundle id '{bundle.id}' in catalog; keeping first")
                continue
            bundle_index[bundle.id] = bundle

        self._plants = MappingProxyType(plant_index)
        self._bundles = MappingProxyType(bundle_index)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Catalog":
        """
        Build a catalog from a decoded JSON document.

        Records that fail normalization are skipped with a warning rather
        than failing the whole load.

        Raises:
            CatalogError: If the document is not a mapping
        """
        if not isinstance(data, Mapping):
            raise CatalogError("Catalog document must be a JSON object")

        plants = []
        for raw in _iter_records(data.get("plants", [])):
            try:
                plants.append(normalize_plant_record(raw))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unparseable plant record: {e}")

        bundles = []
        for raw in data.get("bundles", []) or []:
            try:
                bundles.append(BundleTemplate.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid bundle {raw.get('id') if isinstance(raw, Mapping) else raw!r}: {e}")

        logger.info(f"Loaded catalog with {len(plants)} plants and {len(bundles)} bundles")
        return cls(plants, bundles)

    @property
    def plants(self) -> Mapping[str, PlantSpecies]:
        return self._plants

    @property
    def bundles(self) -> Mapping[str, BundleTemplate]:
        return self._bundles

    def get(self, plant_id: str) -> Optional[PlantSpecies]:
        return self._plants.get(plant_id)

    def get_bundle(self, bundle_id: str) -> Optional[BundleTemplate]:
        return self._bundles.get(bundle_id)

    def resolve(self, placed: Iterable[PlacedPlant]) -> list[tuple[PlacedPlant, PlantSpecies]]:
        """Pair each placement with its species, dropping unresolvable ones."""
        resolved = []
        for placement in placed:
            species = self._plants.get(placement.plant_id)
            if species is None:
                logger.debug(f"Skipping placement {placement.id}: unknown plant '{placement.plant_id}'")
                continue
            resolved.append((placement, species))
        return resolved

    def unresolved_ids(self, placed: Iterable[PlacedPlant]) -> list[str]:
        """Distinct plant ids referenced by placements but absent from the catalog."""
        missing = []
        for placement in placed:
            if placement.plant_id not in self._plants and placement.plant_id not in missing:
                missing.append(placement.plant_id)
        return missing

    def __len__(self) -> int:
        return len(self._plants)

    def __contains__(self, plant_id: object) -> bool:
        return plant_id in self._plants
