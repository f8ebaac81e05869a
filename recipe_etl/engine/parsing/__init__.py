"""
Line-level parsing for recipe ingredients and instructions.

This module turns single free-text lines into structured records:
1. Ingredient lines -> quantity, canonical unit, cleaned name, category
2. Instruction steps -> prep/cook minutes and temperature in Fahrenheit

All parsers are rule-based and stateless. They never raise for malformed
input; they fall back to default values instead.
"""

from recipe_etl.engine.parsing.models import (
    UNKNOWN_INGREDIENT,
    ConvertedQuantity,
    DietaryTag,
    Difficulty,
    IngredientKind,
    ParsedIngredient,
    ParsedInstruction,
)
from recipe_etl.engine.parsing.quantity import extract_quantity
from recipe_etl.engine.parsing.units import convert_metric_to_imperial, normalize_unit
from recipe_etl.engine.parsing.classifier import classify_ingredient
from recipe_etl.engine.parsing.ingredient import (
    IngredientParser,
    parse_ingredient,
    parse_ingredients,
)
from recipe_etl.engine.parsing.instruction import (
    InstructionParser,
    parse_instruction,
    parse_instructions,
)

__all__ = [
    # Core models
    "ParsedIngredient",
    "ParsedInstruction",
    "ConvertedQuantity",
    "IngredientKind",
    "Difficulty",
    "DietaryTag",
    "UNKNOWN_INGREDIENT",
    # Parsers
    "IngredientParser",
    "InstructionParser",
    "parse_ingredient",
    "parse_ingredients",
    "parse_instruction",
    "parse_instructions",
    # Building blocks
    "extract_quantity",
    "normalize_unit",
    "convert_metric_to_imperial",
    "classify_ingredient",
]
