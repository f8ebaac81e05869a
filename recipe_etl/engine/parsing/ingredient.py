"""
Ingredient line parser.

Turns free-text ingredient lines from CSV rows or user input into
ParsedIngredient records:

    "1 c. firmly packed brown sugar" -> quantity 1, unit "cup",
                                        name "firmly packed brown sugar"
    "500g ground beef"               -> quantity 500, unit "gram",
                                        name "ground beef"

The parser never raises for malformed input; it degrades to a
ParsedIngredient holding the UNKNOWN_INGREDIENT name.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from recipe_etl.engine.parsing.classifier import classify_ingredient
from recipe_etl.engine.parsing.models import UNKNOWN_INGREDIENT, ParsedIngredient
from recipe_etl.engine.parsing.quantity import extract_quantity
from recipe_etl.engine.parsing.units import find_unit, normalize_unit

logger = logging.getLogger(__name__)


class IngredientParser:
    """
    Rule-based ingredient parser.

    Pipeline per line: quantity at the head of the string, then a unit
    token anywhere in the remainder, then classification of what is left.
    """

    # Phrases marking an ingredient as optional
    OPTIONAL_MARKERS = ["optional", "to taste", "as needed", "if desired"]

    # Punctuation left at the front of a name after removing "lb." or "c."
    _LEADING_PUNCTUATION = re.compile(r"^[.,;:\s]+")
    _WHITESPACE = re.compile(r"\s+")

    def parse_ingredient(self, text: str) -> ParsedIngredient:
        """
        Parse a single ingredient line into structured data.

        Args:
            text: Raw ingredient string.

        Returns:
            ParsedIngredient with name, quantity, unit, category and
            optional flag. sort_order is left at 0 for the caller.
        """
        if not isinstance(text, str) or not text.strip():
            logger.debug(f"Empty or non-string ingredient: {text!r}")
            return ParsedIngredient(name=UNKNOWN_INGREDIENT)

        trimmed = text.strip()

        quantity, remainder = extract_quantity(trimmed)
        # Without a leading quantity the unit search covers the whole line
        search_text = remainder if remainder is not None else trimmed

        unit, name = self._extract_unit(search_text)
        name = name or UNKNOWN_INGREDIENT

        return ParsedIngredient(
            name=name,
            quantity=quantity,
            unit=unit,
            category=classify_ingredient(name),
            is_optional=self._is_optional(trimmed),
        )

    def parse_ingredients(self, lines: Iterable[str]) -> List[ParsedIngredient]:
        """
        Parse a recipe's ingredient lines, assigning sort_order by position.

        Non-string, empty and whitespace-only entries are skipped; the rest
        keep the index they had in the input list.
        """
        parsed = []
        for index, line in enumerate(lines):
            if not isinstance(line, str) or not line.strip():
                continue
            ingredient = self.parse_ingredient(line)
            ingredient.sort_order = index
            parsed.append(ingredient)
        return parsed

    def _extract_unit(self, text: str) -> Tuple[Optional[str], str]:
        """Find a unit token, returning (canonical unit, text without it)."""
        match = find_unit(text)
        if not match:
            return None, self._clean_name(text)

        unit = normalize_unit(match.group(0))
        name = text[:match.start()] + " " + text[match.end():]
        return unit, self._clean_name(name)

    def _clean_name(self, name: str) -> str:
        name = self._WHITESPACE.sub(" ", name).strip()
        return self._LEADING_PUNCTUATION.sub("", name)

    def _is_optional(self, text: str) -> bool:
        text_lower = text.lower()
        return any(marker in text_lower for marker in self.OPTIONAL_MARKERS)


_parser = IngredientParser()


def parse_ingredient(text: str) -> ParsedIngredient:
    """Parse one ingredient line with the shared stateless parser."""
    return _parser.parse_ingredient(text)


def parse_ingredients(lines: Iterable[str]) -> List[ParsedIngredient]:
    """Parse a list of ingredient lines, assigning sort_order by position."""
    return _parser.parse_ingredients(lines)
