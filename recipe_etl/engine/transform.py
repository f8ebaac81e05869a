"""
Whole-recipe transformation for the import pipeline.

Composes cleaning, validation, line parsing and recipe analysis into one
TransformedRecipe per raw record. Nothing here reads files or touches a
database; the caller decides where the rows go.
"""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from recipe_etl.engine.analysis import (
    CookingTimes,
    analyze_difficulty,
    estimate_cooking_times,
    extract_dietary_tags,
)
from recipe_etl.engine.parsing.ingredient import parse_ingredients
from recipe_etl.engine.parsing.instruction import parse_instructions
from recipe_etl.engine.parsing.models import (
    DietaryTag,
    Difficulty,
    ParsedIngredient,
    ParsedInstruction,
)
from recipe_etl.engine.validation import (
    ValidationResult,
    clean_recipe_data,
    get_field,
    validate_recipe,
)

logger = logging.getLogger(__name__)

COOKING_METHODS = (
    "baked", "grilled", "fried", "boiled", "steamed", "roasted",
    "sautéed", "braised", "slow-cooked", "raw",
)

_COOKING_METHOD_PATTERNS = [
    (method, re.compile(r"\b" + re.escape(method) + r"\b"))
    for method in COOKING_METHODS
]

# CSV columns holding JSON-encoded lists -> key in the decoded record
_JSON_LIST_COLUMNS = {"ingredients": "ingredients", "directions": "directions", "NER": "ner"}


class TagType(str, Enum):
    """Tag families written to recipe_tags."""

    DIETARY = "dietary"
    CUISINE = "cuisine"
    CATEGORY = "category"
    COOKING_METHOD = "cooking_method"


@dataclass(frozen=True)
class RecipeTag:
    name: str
    type: TagType

    def to_row(self) -> Dict[str, Any]:
        """Column values for a recipe_tags row."""
        return {"tag_name": self.name, "tag_type": self.type.value}


@dataclass
class TransformedRecipe:
    """
    A recipe record with every line parsed and recipe metadata derived.

    Invalid records are still transformed; check validation.is_valid (or
    use transform_recipe(strict=True)) before persisting.
    """

    title: str
    ingredients: List[ParsedIngredient]
    instructions: List[ParsedInstruction]
    difficulty: Difficulty
    dietary_tags: List[DietaryTag]
    times: CookingTimes
    tags: List[RecipeTag]
    validation: ValidationResult
    description: str = ""
    link: str = ""
    source: str = ""
    site: str = ""
    ner: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    def to_row(self) -> Dict[str, Any]:
        """Column values for a recipes row. Zero times are stored as NULL."""
        return {
            "title": self.title,
            "prep_time": self.times.prep_minutes or None,
            "cook_time": self.times.cook_minutes or None,
            "total_time": self.times.total_minutes or None,
            "difficulty": self.difficulty.value,
            "source_url": self.link or None,
        }


def _decode_list_cell(value: Any, column: str, title: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if value is None or value == "":
        return []
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to decode {column} for '{title}': {e}")
        return []
    if not isinstance(decoded, list):
        logger.warning(f"Expected a JSON list in {column} for '{title}', got {type(decoded).__name__}")
        return []
    return decoded


def recipe_from_csv_row(row: Mapping) -> Dict[str, Any]:
    """
    Decode one row of the recipe CSV export into a raw recipe record.

    The ingredients, directions and NER columns hold JSON arrays. A cell
    that fails to decode, or decodes to something other than a list,
    becomes an empty list.

    Returns:
        Dict with title, ingredients, directions, ner, link, source and site.
    """
    title = row.get("title")
    record = {
        "title": title,
        "link": row.get("link"),
        "source": row.get("source"),
        "site": row.get("site"),
    }
    for column, key in _JSON_LIST_COLUMNS.items():
        record[key] = _decode_list_cell(row.get(column), column, title)
    return record


def extract_cooking_method_tags(instruction_texts: Iterable[str]) -> List[str]:
    """Return the cooking-method words that appear as whole words in the steps."""
    text = " ".join(t for t in instruction_texts if isinstance(t, str)).lower()
    return [method for method, pattern in _COOKING_METHOD_PATTERNS if pattern.search(text)]


def build_recipe_tags(
    dietary_tags: Sequence[DietaryTag],
    difficulty: Difficulty,
    source: Optional[str] = None,
    site: Optional[str] = None,
    cooking_methods: Sequence[str] = (),
) -> List[RecipeTag]:
    """
    Assemble the recipe_tags entries for one recipe.

    Order: dietary tags, source (as cuisine), site (as category), difficulty
    (as category), cooking methods. Duplicate (name, type) pairs keep their
    first position.
    """
    candidates = [RecipeTag(DietaryTag(tag).value, TagType.DIETARY) for tag in dietary_tags]
    if source:
        candidates.append(RecipeTag(source.lower(), TagType.CUISINE))
    if site:
        candidates.append(RecipeTag(site.lower(), TagType.CATEGORY))
    candidates.append(RecipeTag(Difficulty(difficulty).value, TagType.CATEGORY))
    candidates.extend(RecipeTag(method, TagType.COOKING_METHOD) for method in cooking_methods)

    tags = []
    seen = set()
    for tag in candidates:
        if tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tags


def transform_recipe(raw: Any, strict: bool = False) -> TransformedRecipe:
    """
    Clean, validate, parse and analyze one raw recipe record.

    Args:
        raw: Dict-like record (e.g. from recipe_from_csv_row) or an object
            with the same attributes.
        strict: Raise InvalidRecipeError instead of returning an invalid
            recipe.

    Returns:
        TransformedRecipe carrying its ValidationResult.

    Raises:
        InvalidRecipeError: strict is set and the record fails validation.
    """
    cleaned = clean_recipe_data(raw)
    validation = validate_recipe(cleaned)
    if not validation.is_valid:
        logger.warning(f"Invalid recipe '{cleaned['title']}': {', '.join(validation.errors)}")
        if strict:
            validation.raise_for_errors(title=cleaned["title"] or None)

    ingredient_lines = cleaned["ingredients"]
    directions = cleaned["directions"]

    difficulty = analyze_difficulty(ingredient_lines, directions)
    dietary_tags = extract_dietary_tags(ingredient_lines)
    tags = build_recipe_tags(
        dietary_tags,
        difficulty,
        source=cleaned["source"],
        site=cleaned["site"],
        cooking_methods=extract_cooking_method_tags(directions),
    )

    ner = get_field(raw, "ner") if raw is not None else None

    return TransformedRecipe(
        title=cleaned["title"],
        ingredients=parse_ingredients(ingredient_lines),
        instructions=parse_instructions(directions),
        difficulty=difficulty,
        dietary_tags=dietary_tags,
        times=estimate_cooking_times(directions),
        tags=tags,
        validation=validation,
        description=cleaned["description"],
        link=cleaned["link"],
        source=cleaned["source"],
        site=cleaned["site"],
        ner=ner if isinstance(ner, list) else [],
    )
