"""
Recipe-level analysis: difficulty, dietary tags and time estimates.

These work on a whole recipe's ingredient and instruction lists rather than
on single lines. Dietary keyword sets are derived once from the classifier
tables at import time.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence

from recipe_etl.config import settings
from recipe_etl.engine.parsing.classifier import INGREDIENT_KEYWORDS
from recipe_etl.engine.parsing.instruction import parse_instruction
from recipe_etl.engine.parsing.models import DietaryTag, Difficulty, IngredientKind

logger = logging.getLogger(__name__)

# Technique terms that signal a harder recipe (one point each)
ADVANCED_TECHNIQUES = (
    "braise", "sous vide", "temper", "emulsify", "clarify", "confit",
    "brunoise", "julienne", "chiffonade", "flambé", "deglaze",
)

# Protein-source keywords that do not make a recipe non-vegetarian
PLANT_BASED_PROTEINS: FrozenSet[str] = frozenset({
    "tofu", "tempeh", "seitan", "lentils", "chickpeas", "garbanzo",
    "black beans", "kidney beans", "pinto beans", "navy beans", "lima beans",
    "edamame", "quinoa", "hemp seeds", "chia seeds", "nutritional yeast",
    "protein powder", "whey", "casein",
})

# Grain keywords that contain gluten
GLUTEN_CONTAINING: FrozenSet[str] = frozenset({
    "flour", "bread", "pasta", "wheat", "barley", "rye", "spaghetti", "penne",
    "rigatoni", "fettuccine", "linguine", "macaroni", "lasagna", "ravioli",
    "tortellini", "gnocchi", "ramen", "soba", "udon", "rice noodles", "vermicelli",
    "angel hair", "fusilli", "rotini", "ziti", "breadcrumbs", "panko", "croutons",
    "tortilla", "pita", "naan", "bagel", "muffin", "biscuit", "scone", "croissant",
    "baguette", "sourdough", "rye bread", "whole wheat", "multigrain", "sprouted",
    "gluten-free bread", "cornmeal", "polenta", "grits", "semolina", "farro",
    "spelt", "kamut", "amaranth", "teff", "sorghum", "triticale", "oats",
    "steel cut oats", "rolled oats", "instant oats", "granola", "muesli",
})

MEAT_KEYWORDS = INGREDIENT_KEYWORDS[IngredientKind.PROTEIN_MAIN] + tuple(
    k for k in INGREDIENT_KEYWORDS[IngredientKind.PROTEIN_SOURCE]
    if k not in PLANT_BASED_PROTEINS
)
DAIRY_KEYWORDS = INGREDIENT_KEYWORDS[IngredientKind.DAIRY] + ("egg", "eggs")
GLUTEN_KEYWORDS = tuple(
    k for k in INGREDIENT_KEYWORDS[IngredientKind.GRAIN] if k in GLUTEN_CONTAINING
)


@dataclass
class CookingTimes:
    """Whole-recipe prep and cook estimate in minutes."""

    prep_minutes: int
    cook_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.prep_minutes + self.cook_minutes


def _strings(items: Sequence) -> List[str]:
    return [item for item in items if isinstance(item, str)]


def analyze_difficulty(
    ingredient_names: Sequence[str], instruction_texts: Sequence[str]
) -> Difficulty:
    """
    Score a recipe's difficulty from its size and technique mentions.

    Score components:
        ingredients:  >15 -> 2, >8 -> 1
        instructions: >8 -> 2, >4 -> 1
        words:        >200 -> 2, >100 -> 1
        +1 per distinct advanced technique found in the instructions

    A score of 5 or more is hard, 2 or more is medium, anything lower is easy.
    """
    score = 0

    ingredient_count = len(ingredient_names)
    if ingredient_count > 15:
        score += 2
    elif ingredient_count > 8:
        score += 1

    instruction_count = len(instruction_texts)
    if instruction_count > 8:
        score += 2
    elif instruction_count > 4:
        score += 1

    instruction_text = " ".join(_strings(instruction_texts))
    word_count = len(instruction_text.split())
    if word_count > 200:
        score += 2
    elif word_count > 100:
        score += 1

    instruction_lower = instruction_text.lower()
    score += sum(1 for technique in ADVANCED_TECHNIQUES if technique in instruction_lower)

    if score >= 5:
        return Difficulty.HARD
    if score >= 2:
        return Difficulty.MEDIUM
    return Difficulty.EASY


def extract_dietary_tags(ingredient_names: Sequence[str]) -> List[DietaryTag]:
    """
    Infer dietary tags from a recipe's ingredient lines.

    Tags are positive-default: a tag applies when no disqualifying keyword
    appears anywhere in the ingredient text. An empty list therefore gets
    all four tags.

    Returns:
        Tags in the order vegetarian, vegan, gluten-free, dairy-free.
    """
    ingredient_text = " ".join(_strings(ingredient_names)).lower()

    has_meat = any(keyword in ingredient_text for keyword in MEAT_KEYWORDS)
    has_dairy = any(keyword in ingredient_text for keyword in DAIRY_KEYWORDS)
    has_gluten = any(keyword in ingredient_text for keyword in GLUTEN_KEYWORDS)

    tags = []
    if not has_meat:
        tags.append(DietaryTag.VEGETARIAN)
    if not has_meat and not has_dairy:
        tags.append(DietaryTag.VEGAN)
    if not has_gluten:
        tags.append(DietaryTag.GLUTEN_FREE)
    if not has_dairy:
        tags.append(DietaryTag.DAIRY_FREE)
    return tags


def estimate_cooking_times(instruction_texts: Sequence[str]) -> CookingTimes:
    """
    Estimate whole-recipe prep and cook time.

    Takes the smallest nonzero prep time and the smallest nonzero cook time
    found across all steps. When no step mentions any time, falls back to
    an estimate from the number of steps; otherwise a missing field is 0.
    """
    prep_times = []
    cook_times = []
    for text in instruction_texts:
        parsed = parse_instruction(text, 1)
        if parsed.prep_minutes:
            prep_times.append(parsed.prep_minutes)
        if parsed.cook_minutes:
            cook_times.append(parsed.cook_minutes)

    if not prep_times and not cook_times:
        step_count = len(instruction_texts)
        logger.debug(f"No times found in {step_count} steps, estimating from step count")
        return CookingTimes(
            prep_minutes=max(
                settings.fallback_min_prep_minutes,
                step_count * settings.fallback_prep_minutes_per_step,
            ),
            cook_minutes=max(
                settings.fallback_min_cook_minutes,
                step_count * settings.fallback_cook_minutes_per_step,
            ),
        )

    return CookingTimes(
        prep_minutes=min(prep_times) if prep_times else 0,
        cook_minutes=min(cook_times) if cook_times else 0,
    )
