"""
Unit recognition, normalization and metric conversion.

Unit tokens are searched with ordered regex families. The first family
with a match wins, and within that family the leftmost match is used.
Matched tokens are collapsed to one canonical name per unit.
"""
import re
from typing import List, Optional, Tuple

from recipe_etl.engine.parsing.models import ConvertedQuantity

# Ordered unit families: (family name, pattern). Order is part of the
# tie-break contract, e.g. "in" (length) is checked before "can" (count).
UNIT_PATTERNS: List[Tuple[str, re.Pattern]] = [
    # Volume units: imperial and metric
    ("volume", re.compile(
        r"\b(cup|cups|c\.|tbsp|tablespoon|tablespoons|tsp|teaspoon|teaspoons|"
        r"fl oz|fluid ounce|fluid ounces|pint|pints|quart|quarts|gallon|gallons|"
        r"ml|milliliter|milliliters|cl|centiliter|centiliters|dl|deciliter|deciliters|"
        r"l|liter|liters|litre|litres)(?!\w)",
        re.IGNORECASE,
    )),
    # Weight units: imperial and metric
    ("weight", re.compile(
        r"\b(lb|lbs|pound|pounds|oz|ounce|ounces|kg|kilogram|kilograms|"
        r"g|gram|grams|mg|milligram|milligrams)(?!\w)",
        re.IGNORECASE,
    )),
    # Length units (for descriptors like "2cm thick")
    ("length", re.compile(
        r"\b(inch|inches|in|ft|feet|foot|mm|millimeter|millimeters|"
        r"cm|centimeter|centimeters|m|meter|meters|metre|metres)(?!\w)",
        re.IGNORECASE,
    )),
    # Count units: pieces, slices, cloves
    ("count", re.compile(
        r"\b(piece|pieces|slice|slices|clove|cloves|head|heads|bunch|bunches|"
        r"can|cans|package|packages|bag|bags|box|boxes|bottle|bottles|"
        r"jar|jars|tube|tubes)(?!\w)",
        re.IGNORECASE,
    )),
    # Size descriptors
    ("size", re.compile(
        r"\b(extra large|small|medium|large|xl|jumbo|mini|tiny)(?!\w)",
        re.IGNORECASE,
    )),
    # Temperature units (for ingredients that specify temperature)
    ("temperature", re.compile(
        r"(°c|°f|\bcelsius|\bfahrenheit|\bfarenheit)(?!\w)",
        re.IGNORECASE,
    )),
    # Unit at the very start of the text ("c. firmly packed brown sugar")
    ("leading", re.compile(
        r"^(c\.|tbsp|tsp|fl oz|lb|oz|ml|g|kg|in|ft|cm|m)(?=[\s.,]|$)",
        re.IGNORECASE,
    )),
]

# Abbreviation and plural variants collapsed to one canonical name
UNIT_ALIASES = {
    # Volume
    "c": "cup", "c.": "cup", "cup": "cup", "cups": "cup",
    "tbsp": "tablespoon", "tablespoon": "tablespoon", "tablespoons": "tablespoon",
    "tsp": "teaspoon", "teaspoon": "teaspoon", "teaspoons": "teaspoon",
    "fl oz": "fluid ounce", "fluid ounce": "fluid ounce", "fluid ounces": "fluid ounce",
    "pint": "pint", "pints": "pint",
    "quart": "quart", "quarts": "quart",
    "gallon": "gallon", "gallons": "gallon",
    "ml": "milliliter", "milliliter": "milliliter", "milliliters": "milliliter",
    "cl": "centiliter", "centiliter": "centiliter", "centiliters": "centiliter",
    "dl": "deciliter", "deciliter": "deciliter", "deciliters": "deciliter",
    "l": "liter", "liter": "liter", "liters": "liter", "litre": "liter", "litres": "liter",
    # Weight
    "lb": "pound", "lbs": "pound", "pound": "pound", "pounds": "pound",
    "oz": "ounce", "ounce": "ounce", "ounces": "ounce",
    "kg": "kilogram", "kilogram": "kilogram", "kilograms": "kilogram",
    "g": "gram", "gram": "gram", "grams": "gram",
    "mg": "milligram", "milligram": "milligram", "milligrams": "milligram",
}

# Metric unit -> (ratio, imperial unit). Keys are lowercased tokens.
METRIC_TO_IMPERIAL = {
    # Volume
    "ml": (0.00422675, "cup"),
    "milliliter": (0.00422675, "cup"),
    "milliliters": (0.00422675, "cup"),
    "cl": (0.0422675, "cup"),
    "centiliter": (0.0422675, "cup"),
    "centiliters": (0.0422675, "cup"),
    "dl": (0.422675, "cup"),
    "deciliter": (0.422675, "cup"),
    "deciliters": (0.422675, "cup"),
    "l": (4.22675, "cup"),
    "liter": (4.22675, "cup"),
    "liters": (4.22675, "cup"),
    "litre": (4.22675, "cup"),
    "litres": (4.22675, "cup"),
    # Weight
    "g": (0.035274, "ounce"),
    "gram": (0.035274, "ounce"),
    "grams": (0.035274, "ounce"),
    "kg": (2.20462, "pound"),
    "kilogram": (2.20462, "pound"),
    "kilograms": (2.20462, "pound"),
    "mg": (0.000035274, "ounce"),
    "milligram": (0.000035274, "ounce"),
    "milligrams": (0.000035274, "ounce"),
    # Length
    "mm": (0.0393701, "inch"),
    "millimeter": (0.0393701, "inch"),
    "millimeters": (0.0393701, "inch"),
    "cm": (0.393701, "inch"),
    "centimeter": (0.393701, "inch"),
    "centimeters": (0.393701, "inch"),
    "m": (3.28084, "foot"),
    "meter": (3.28084, "foot"),
    "meters": (3.28084, "foot"),
    "metre": (3.28084, "foot"),
    "metres": (3.28084, "foot"),
}


def find_unit(text: str) -> Optional[re.Match]:
    """
    Find the first unit token in text.

    Families are tried in order and the first family with any match wins.

    Returns:
        The regex match for the unit token, or None if no family matched.
    """
    for _family, pattern in UNIT_PATTERNS:
        match = pattern.search(text)
        if match:
            return match
    return None


def normalize_unit(unit: str) -> str:
    """
    Normalize a unit token to its canonical name.

    Examples:
        "c." -> "cup"
        "Tbsp" -> "tablespoon"
        "grams" -> "gram"
        "cloves" -> "cloves" (not in the table, passed through as given)

    Args:
        unit: Unit token as matched in the ingredient text

    Returns:
        Canonical unit name, the token unchanged if it has no entry,
        or "unknown" for an empty or non-string token.
    """
    if not unit or not isinstance(unit, str):
        return "unknown"
    return UNIT_ALIASES.get(unit.lower(), unit)


def convert_metric_to_imperial(quantity: float, unit: str) -> ConvertedQuantity:
    """
    Convert a metric quantity to its imperial equivalent.

    Accepts raw tokens ("g", "ml") as well as canonical names ("gram",
    "milliliter"). Non-metric units pass through unconverted.

    The result always carries a canonical unit name ("cup", "ounce",
    "pound", "inch", "foot"), the same names normalize_unit produces, never
    an abbreviation or plural such as "oz", "lbs" or "cups".

    Examples:
        (500, "g") -> ConvertedQuantity(17.637, "ounce")
        (2, "kg") -> ConvertedQuantity(4.40924, "pound")
        (1, "cup") -> ConvertedQuantity(1, "cup")
    """
    if not unit or not isinstance(unit, str):
        return ConvertedQuantity(quantity=quantity, unit=unit or "unknown")

    conversion = METRIC_TO_IMPERIAL.get(unit.lower())
    if conversion is None:
        return ConvertedQuantity(quantity=quantity, unit=unit)

    ratio, imperial_unit = conversion
    return ConvertedQuantity(quantity=quantity * ratio, unit=imperial_unit)
