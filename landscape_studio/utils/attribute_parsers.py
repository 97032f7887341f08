"""
Free-text plant attribute parsers.

Provides utilities for:
- Height and spread strings ("15-25ft", "6-8in") to inches
- Bloom time prose ("Early Spring", "June-September", "Evergreen") to months
- Keyword-based form and texture inference

None of these raise on bad input; unparseable text falls back to a default.
"""
import math
import re
from typing import Optional

from landscape_studio.domain.models import BloomProfile
from landscape_studio.domain.rules import category_group


DEFAULT_HEIGHT_INCHES = 24.0
DEFAULT_SPREAD_INCHES = 12.0
DEFAULT_FORM = "mounding"
DEFAULT_TEXTURE = "medium"

ALL_MONTHS = list(range(1, 13))

_DECIMAL_TOKEN = re.compile(r"\d+(?:\.\d+)?")
_INTEGER_TOKEN = re.compile(r"\d+")
_RANGE_PATTERN = re.compile(r"(\w+)\s*[-–]\s*(\w+)")

MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

SEASON_PHRASES = {
    "early spring": [3, 4],
    "mid spring": [4, 5],
    "late spring": [5, 6],
    "spring": [3, 4, 5],
    "early summer": [6, 7],
    "mid summer": [7],
    "midsummer": [7],
    "late summer": [8],
    "summer": [6, 7, 8],
    "early fall": [9],
    "mid fall": [10],
    "late fall": [11],
    "fall": [9, 10, 11],
    "autumn": [9, 10, 11],
    "early winter": [12],
    "mid winter": [1],
    "late winter": [2],
    "winter": [12, 1, 2],
}

_MONTH_PATTERNS = [
    (re.compile(rf"\b{name}\b"), month) for name, month in MONTH_NAMES.items()
]

# Longest phrase first so "early spring" is consumed before "spring"
_SEASON_PATTERNS = [
    (re.compile(rf"\b{phrase}\b"), months)
    for phrase, months in sorted(SEASON_PHRASES.items(), key=lambda kv: -len(kv[0]))
]


def _finite_or(value: float, default: float) -> float:
    # Digit runs too long for a float parse to inf
    return value if math.isfinite(value) else default


def _parse_length(text: Optional[str], default: float) -> float:
    if not text:
        return default
    lowered = text.lower()

    if "ft" in lowered:
        tokens = _DECIMAL_TOKEN.findall(lowered)
        if tokens:
            return _finite_or(max(float(t) for t in tokens) * 12, default)

    tokens = _INTEGER_TOKEN.findall(lowered)
    if tokens:
        return _finite_or(max(float(t) for t in tokens), default)

    return default


def parse_height_to_inches(text: Optional[str]) -> float:
    """
    Parse a height string into inches, taking the top of any range.

    Args:
        text: Free-text height such as "15-25ft", "6-8in" or "30"

    Returns:
        Height in inches; 24 when no number is found
    """
    return _parse_length(text, DEFAULT_HEIGHT_INCHES)


def parse_spread_to_inches(text: Optional[str]) -> float:
    """Parse a spread string into inches; 12 when no number is found."""
    return _parse_length(text, DEFAULT_SPREAD_INCHES)


def _month_range(start: int, end: int) -> list[int]:
    months = []
    current = start
    while current != end:
        months.append(current)
        current = 1 if current == 12 else current + 1
    months.append(end)
    return months


def parse_bloom_time(text: Optional[str]) -> BloomProfile:
    """
    Parse a bloom time string into bloom and interest months.

    Keyword precedence: evergreen, exact "foliage", fall color, year-round,
    berries, then month names and season phrases, then a "Month-Month"
    range walk (wrapping December to January).

    Args:
        text: Free-text bloom time from the catalog

    Returns:
        BloomProfile with sorted, de-duplicated month numbers
    """
    if not text:
        return BloomProfile()

    lowered = text.strip().lower()

    if "evergreen" in lowered:
        return BloomProfile(
            interest_months=ALL_MONTHS, is_evergreen=True, interest_type="foliage"
        )

    if lowered == "foliage":
        return BloomProfile(interest_months=list(range(4, 11)), interest_type="foliage")

    if "fall color" in lowered or "fall foliage" in lowered:
        return BloomProfile(interest_months=[9, 10, 11], interest_type="fall-color")

    if "year-round" in lowered:
        return BloomProfile(interest_months=ALL_MONTHS, interest_type="multi-season")

    if "berries" in lowered:
        if "fall" in lowered:
            months = [9, 10, 11]
        elif "winter" in lowered:
            months = [11, 12, 1, 2]
        else:
            months = [9, 10, 11, 12]
        return BloomProfile(interest_months=sorted(months), interest_type="berries")

    found: set[int] = set()
    for pattern, month in _MONTH_PATTERNS:
        if pattern.search(lowered):
            found.add(month)

    remaining = lowered
    for pattern, months in _SEASON_PATTERNS:
        if pattern.search(remaining):
            found.update(months)
            remaining = pattern.sub(" ", remaining)

    if not found:
        match = _RANGE_PATTERN.search(lowered)
        if match:
            start = MONTH_NAMES.get(match.group(1))
            end = MONTH_NAMES.get(match.group(2))
            if start and end:
                found.update(_month_range(start, end))

    if not found:
        return BloomProfile()

    months = sorted(found)
    return BloomProfile(bloom_months=months, interest_months=months, interest_type="bloom")


# Keyword rules per category group, first match wins
FORM_RULES: dict[str, list[tuple[tuple[str, ...], str]]] = {
    "grasses": [
        (("fountain", "pennisetum"), "arching"),
        (("miscanthus", "maiden"), "upright"),
        (("sedge", "carex", "fescue"), "mounding"),
    ],
    "groundcovers": [
        (("juniper", "spreading"), "spreading"),
        (("creeping", "prostrate"), "prostrate"),
    ],
    "trees": [
        (("weeping",), "weeping"),
        (("columnar", "fastigiata"), "columnar"),
        (("oak", "maple", "crape", "crepe"), "vase"),
        (("pine", "spruce", "fir", "magnolia"), "pyramidal"),
    ],
    "topiary": [
        (("spiral", "cone", "pyramid"), "pyramidal"),
        (("column",), "columnar"),
    ],
    "shrubs": [
        (("boxwood", "holly", "ilex", "hydrangea", "spiraea", "spirea", "rose"), "mounding"),
        (("juniper",), "spreading"),
        (("arborvitae", "thuja"), "columnar"),
        (("forsythia",), "arching"),
    ],
    "perennials": [
        (("daylily", "hemerocallis"), "arching"),
        (("astilbe", "salvia", "sage", "coneflower", "echinacea", "rudbeckia",
          "black-eyed", "foxglove", "delphinium", "snapdragon"), "upright"),
    ],
}

GROUP_DEFAULT_FORMS = {
    "grasses": "arching",
    "groundcovers": "spreading",
    "trees": "vase",
    "topiary": "mounding",
    "shrubs": "mounding",
    "perennials": "mounding",
}

FINE_TEXTURE_WORDS = (
    "fine", "feather", "delicate", "fescue", "muhly", "maiden", "nassella", "needle",
)
COARSE_TEXTURE_WORDS = (
    "bold", "large", "giant", "hosta", "elephant", "banana", "hydrangea", "magnolia",
)


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    return any(word in text for word in words)


def infer_plant_form(
    name: str,
    category: Optional[str] = None,
    botanical_name: Optional[str] = None,
    explicit: Optional[str] = None,
) -> str:
    """
    Infer a growth form from the plant's name and category.

    An explicit form on the catalog record always wins.
    """
    if explicit:
        return explicit.strip().lower()

    text = f"{name or ''} {botanical_name or ''}".lower()
    group = category_group(category)
    if group is None:
        return DEFAULT_FORM

    # Tall sedums are upright; the mounding rule only covers the short ones
    if group == "perennials" and "sedum" in text and "tall" not in text:
        return "mounding"

    for words, form in FORM_RULES.get(group, []):
        if _contains_any(text, words):
            return form
    return GROUP_DEFAULT_FORMS.get(group, DEFAULT_FORM)


def infer_plant_texture(
    name: str,
    category: Optional[str] = None,
    botanical_name: Optional[str] = None,
    description: Optional[str] = None,
    explicit: Optional[str] = None,
) -> str:
    """Infer leaf texture from name, botanical name and description."""
    if explicit:
        return explicit.strip().lower()

    text = f"{name or ''} {botanical_name or ''} {description or ''}".lower()

    if _contains_any(text, FINE_TEXTURE_WORDS):
        return "fine"
    if _contains_any(text, COARSE_TEXTURE_WORDS):
        return "coarse"

    group = category_group(category)
    if group == "grasses":
        return "fine"
    if group == "groundcovers" and "moss" in text:
        return "fine"
    if group == "trees":
        return "coarse"
    return DEFAULT_TEXTURE
