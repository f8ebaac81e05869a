"""
Data models for ingredient and instruction parsing.

Every model here is computed fresh from input text on each call; none of
them are persisted by the engine. The to_row() helpers shape a result for
the relational tables the import pipeline writes into.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

UNKNOWN_INGREDIENT = "Unknown ingredient"


class IngredientKind(str, Enum):
    """Ingredient categories used for meal-planning filters."""

    PROTEIN_MAIN = "protein_main"
    PROTEIN_SOURCE = "protein_source"
    VEGETABLE = "vegetable"
    GRAIN = "grain"
    DAIRY = "dairy"
    FAT = "fat"
    SPICE = "spice"
    FRUIT = "fruit"
    NUTS_SEEDS = "nuts_seeds"
    CONDIMENTS = "condiments"
    OTHER = "other"


class Difficulty(str, Enum):
    """Recipe difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DietaryTag(str, Enum):
    """Dietary tags inferred from ingredient content."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"


@dataclass
class ParsedIngredient:
    """
    One ingredient line resolved to structure.

    quantity and unit are independent: either, both, or neither may be set.

    Example:
        >>> ParsedIngredient(
        ...     name="ground beef",
        ...     quantity=500,
        ...     unit="gram",
        ...     category=IngredientKind.PROTEIN_MAIN,
        ... )
    """

    name: str  # Never empty; falls back to UNKNOWN_INGREDIENT
    quantity: Optional[float] = None
    unit: Optional[str] = None  # Canonical unit name, e.g. "cup"
    category: IngredientKind = IngredientKind.OTHER
    is_optional: bool = False
    sort_order: int = 0  # Assigned by the caller across a recipe

    def to_row(self) -> Dict[str, Any]:
        """Column values for a recipe_ingredients row."""
        return {
            "ingredient_name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "kind": self.category.value,
            "is_optional": self.is_optional,
            "sort_order": self.sort_order,
        }


@dataclass
class ParsedInstruction:
    """One instruction step with extracted timing and temperature."""

    step_number: int
    text: str  # Original text, trimmed
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None
    temperature_fahrenheit: Optional[int] = None

    def to_row(self) -> Dict[str, Any]:
        """Column values for a recipe_instructions row."""
        return {
            "step_number": self.step_number,
            "instruction": self.text,
            "prep_time": self.prep_minutes,
            "cook_time": self.cook_minutes,
            "temperature": self.temperature_fahrenheit,
        }


@dataclass(frozen=True)
class ConvertedQuantity:
    """Result of a metric to imperial conversion."""

    quantity: float
    unit: str
