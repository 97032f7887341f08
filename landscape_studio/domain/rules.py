"""
Horticultural rule tables used by the design analyzers.

Every table lives on an immutable ``RuleSet`` that is passed into the
analyzers explicitly. ``DEFAULT_RULES`` carries the reference values; tests
and alternative rule books build their own instance.
"""
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class HeightTier:
    """One of the seven ordered height bands."""
    id: int
    name: str
    min_height: float
    max_height: float
    label: str
    color: str


@dataclass(frozen=True)
class Month:
    id: int
    name: str
    abbr: str
    season: str


@dataclass(frozen=True)
class Season:
    id: str
    name: str
    months: tuple[int, ...]
    color: str


@dataclass(frozen=True)
class DriftSize:
    """Minimum and ideal group size for a drift category."""
    min: int
    ideal: int
    label: str


@dataclass(frozen=True)
class RatingBand:
    """Qualitative rating awarded at or above ``threshold``."""
    threshold: float
    rating: str
    color: str


@dataclass(frozen=True)
class YardZone:
    """Residential yard zone and the plant constraints it imposes."""
    key: str
    id: str
    name: str
    goals: tuple[str, ...]
    max_plant_height: Optional[float] = None
    min_plant_height: Optional[float] = None
    front_facing: bool = False
    specimen_limit: Optional[int] = None


HEIGHT_TIERS: tuple[HeightTier, ...] = (
    HeightTier(1, "Ground Plane", 0, 6, '0-6"', "#8BC34A"),
    HeightTier(2, "Ankle Height", 6, 12, '6-12"', "#689F38"),
    HeightTier(3, "Knee Height", 12, 24, '12-24"', "#558B2F"),
    HeightTier(4, "Waist Height", 24, 36, '24-36"', "#33691E"),
    HeightTier(5, "Chest Height", 36, 48, '36-48"', "#1B5E20"),
    HeightTier(6, "Eye Level", 48, 72, '48-72"', "#004D40"),
    HeightTier(7, "Canopy", 72, math.inf, "6ft+", "#006064"),
)

MONTHS: tuple[Month, ...] = (
    Month(1, "January", "Jan", "winter"),
    Month(2, "February", "Feb", "winter"),
    Month(3, "March", "Mar", "spring"),
    Month(4, "April", "Apr", "spring"),
    Month(5, "May", "May", "spring"),
    Month(6, "June", "Jun", "summer"),
    Month(7, "July", "Jul", "summer"),
    Month(8, "August", "Aug", "summer"),
    Month(9, "September", "Sep", "fall"),
    Month(10, "October", "Oct", "fall"),
    Month(11, "November", "Nov", "fall"),
    Month(12, "December", "Dec", "winter"),
)

SEASONS: tuple[Season, ...] = (
    Season("spring", "Spring", (3, 4, 5), "#81C784"),
    Season("summer", "Summer", (6, 7, 8), "#FFD54F"),
    Season("fall", "Fall", (9, 10, 11), "#FF8A65"),
    Season("winter", "Winter", (12, 1, 2), "#90CAF9"),
)

# Both catalog vocabularies collapse onto these groups.
CATEGORY_GROUPS: Mapping[str, str] = MappingProxyType({
    "focal": "trees",
    "trees": "trees",
    "tree": "trees",
    "topiary": "topiary",
    "back": "shrubs",
    "shrubs": "shrubs",
    "shrub": "shrubs",
    "middle": "perennials",
    "front": "perennials",
    "perennials": "perennials",
    "perennial": "perennials",
    "grasses": "grasses",
    "grass": "grasses",
    "groundcover": "groundcovers",
    "groundcovers": "groundcovers",
})

GROUP_DRIFT_CATEGORY: Mapping[str, str] = MappingProxyType({
    "trees": "tree",
    "topiary": "shrub",
    "shrubs": "shrub",
    "perennials": "perennial",
    "grasses": "grass",
    "groundcovers": "groundcover",
})

DRIFT_SIZES: Mapping[str, DriftSize] = MappingProxyType({
    "groundcover": DriftSize(5, 7, "Carpet in sweeps of 5-7+"),
    "perennial": DriftSize(3, 5, "Group in drifts of 3-5"),
    "shrub": DriftSize(3, 5, "Mass in groups of 3-5"),
    "grass": DriftSize(3, 5, "Cluster in groups of 3-5"),
    "tree": DriftSize(1, 1, "Use as specimens or groves of 3"),
})

SHOW_READY_WEIGHTS: Mapping[str, int] = MappingProxyType({
    "coverage": 20,
    "bloomSequence": 20,
    "heightLayering": 15,
    "formVariety": 15,
    "textureVariety": 10,
    "massPlanting": 10,
    "colorHarmony": 10,
})

SHOW_READY_BANDS: tuple[RatingBand, ...] = (
    RatingBand(90, "Show Ready", "#4CAF50"),
    RatingBand(75, "Near Ready", "#8BC34A"),
    RatingBand(60, "Good Progress", "#FFC107"),
    RatingBand(40, "Needs Work", "#FF9800"),
    RatingBand(-math.inf, "Early Stage", "#F44336"),
)

RESIDENTIAL_WEIGHTS: Mapping[str, int] = MappingProxyType({
    "layering": 20,
    "spacing": 20,
    "oddGroupings": 15,
    "zoneCompliance": 15,
    "fourSeason": 15,
    "curbAppeal": 15,
})

RESIDENTIAL_BANDS: tuple[RatingBand, ...] = (
    RatingBand(90, "Pro Landscaper", "#4CAF50"),
    RatingBand(75, "Curb Appeal Ready", "#8BC34A"),
    RatingBand(60, "Good Foundation", "#FFC107"),
    RatingBand(40, "Getting Started", "#FF9800"),
    RatingBand(-math.inf, "Early Planning", "#F44336"),
)

YARD_ZONES: Mapping[str, YardZone] = MappingProxyType({
    "FRONT_FOUNDATION": YardZone(
        "FRONT_FOUNDATION", "front-foundation", "Front Foundation",
        ("Curb appeal", "Frame entry", "Soften architecture"),
        front_facing=True, specimen_limit=1,
    ),
    "FRONT_ISLAND": YardZone(
        "FRONT_ISLAND", "front-island", "Front Yard Island",
        ("Create focal point", "Add dimension", "Define spaces"),
        front_facing=True, specimen_limit=1,
    ),
    "ENTRY_PATH": YardZone(
        "ENTRY_PATH", "entry-path", "Entry Walkway",
        ("Guide visitors", "Create welcoming approach", "Frame entry"),
        max_plant_height=36, front_facing=True, specimen_limit=1,
    ),
    "SIDE_YARD": YardZone(
        "SIDE_YARD", "side-yard", "Side Yard",
        ("Privacy screening", "Utility concealment", "Transition zone"),
    ),
    "BACKYARD_BORDER": YardZone(
        "BACKYARD_BORDER", "backyard-border", "Backyard Border",
        ("Privacy", "Enclose space", "Create rooms"),
    ),
    "PATIO_SURROUND": YardZone(
        "PATIO_SURROUND", "patio-surround", "Patio Surround",
        ("Frame views", "Privacy", "Seasonal interest"),
    ),
    "PRIVACY_SCREEN": YardZone(
        "PRIVACY_SCREEN", "privacy-screen", "Privacy Screen",
        ("Block views", "Reduce noise", "Create enclosure"),
        min_plant_height=72,
    ),
})


@dataclass(frozen=True)
class RuleSet:
    """
    Complete rule book consumed by the analyzers.

    Weight tables must each sum to exactly 100; construction fails otherwise.
    """
    height_tiers: tuple[HeightTier, ...] = HEIGHT_TIERS
    months: tuple[Month, ...] = MONTHS
    seasons: tuple[Season, ...] = SEASONS

    # Form & texture variety
    max_same_form_share: float = 0.4
    min_form_variety: int = 3
    min_plants_for_form_variety: int = 5
    max_same_texture_share: float = 0.5
    variety_issue_penalty: int = 15

    # Mass planting
    drift_sizes: Mapping[str, DriftSize] = field(default_factory=lambda: DRIFT_SIZES)
    prefer_odd_numbers: bool = True
    even_suggestion_limit: int = 8
    min_repetition: int = 3
    mass_issue_penalty: int = 10
    mass_suggestion_penalty: int = 3

    # Composite scoring
    show_ready_weights: Mapping[str, int] = field(default_factory=lambda: SHOW_READY_WEIGHTS)
    show_ready_bands: tuple[RatingBand, ...] = SHOW_READY_BANDS
    show_ready_threshold: float = 90
    invalid_harmony_credit: float = 50
    residential_weights: Mapping[str, int] = field(default_factory=lambda: RESIDENTIAL_WEIGHTS)
    residential_bands: tuple[RatingBand, ...] = RESIDENTIAL_BANDS
    max_recommendations: int = 5

    # Residential
    yard_zones: Mapping[str, YardZone] = field(default_factory=lambda: YARD_ZONES)
    max_species_per_100_sqft: int = 5

    def __post_init__(self):
        for name, weights in (
            ("show_ready_weights", self.show_ready_weights),
            ("residential_weights", self.residential_weights),
        ):
            total = sum(weights.values())
            if total != 100:
                raise ValueError(f"{name} must sum to 100, got {total}")

    def tier_for_height(self, height_inches: float) -> HeightTier:
        """Return the first tier whose inclusive upper bound holds the height."""
        for tier in self.height_tiers:
            if height_inches <= tier.max_height:
                return tier
        return self.height_tiers[-1]

    def tier_by_id(self, tier_id: int) -> HeightTier:
        return next(t for t in self.height_tiers if t.id == tier_id)

    def drift_size(self, drift_category: str) -> DriftSize:
        return self.drift_sizes.get(drift_category, self.drift_sizes["perennial"])

    def yard_zone(self, zone: Optional[str]) -> Optional[YardZone]:
        """Look a zone up by its key (``ENTRY_PATH``) or id (``entry-path``)."""
        if not zone:
            return None
        if zone in self.yard_zones:
            return self.yard_zones[zone]
        for candidate in self.yard_zones.values():
            if candidate.id == zone:
                return candidate
        return None


def rate(score: float, bands: tuple[RatingBand, ...]) -> RatingBand:
    """Map a score onto the first band whose threshold it reaches."""
    for band in bands:
        if score >= band.threshold:
            return band
    return bands[-1]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as score displays expect."""
    return math.floor(value + 0.5)


def category_group(category: Optional[str]) -> Optional[str]:
    if not category:
        return None
    return CATEGORY_GROUPS.get(category.strip().lower())


def drift_category_for(category: Optional[str]) -> str:
    """Collapse a catalog category onto its mass-planting drift category."""
    group = category_group(category)
    return GROUP_DRIFT_CATEGORY.get(group, "perennial")


DEFAULT_RULES = RuleSet()
