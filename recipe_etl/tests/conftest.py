"""
Shared pytest fixtures for recipe ETL tests.

This module provides common fixtures for:
- Parser instances
- Raw recipe records and CSV rows
"""
import json

import pytest

from recipe_etl.engine.parsing.ingredient import IngredientParser
from recipe_etl.engine.parsing.instruction import InstructionParser


# ============================================================================
# Parser Fixtures
# ============================================================================

@pytest.fixture
def ingredient_parser() -> IngredientParser:
    """Create an ingredient parser instance."""
    return IngredientParser()


@pytest.fixture
def instruction_parser() -> InstructionParser:
    """Create an instruction parser with the default context window."""
    return InstructionParser()


# ============================================================================
# Recipe Record Fixtures
# ============================================================================

@pytest.fixture
def sample_recipe() -> dict:
    """A small, valid raw recipe record."""
    return {
        "title": "  Garlic Butter Salmon ",
        "ingredients": [
            "1 lb salmon fillets",
            "2 tbsp butter",
            "3 cloves garlic, minced",
        ],
        "directions": [
            "Preheat oven to 400°F.",
            "Bake the salmon for 15 minutes.",
            "Serve with the baked garlic butter.",
        ],
        "link": "www.example.com/salmon",
        "source": "Gathered",
        "site": "www.example.com",
    }


@pytest.fixture
def sample_csv_row(sample_recipe) -> dict:
    """The sample recipe as a row of the CSV export (JSON-encoded lists)."""
    return {
        "title": sample_recipe["title"],
        "ingredients": json.dumps(sample_recipe["ingredients"]),
        "directions": json.dumps(sample_recipe["directions"]),
        "NER": json.dumps(["salmon fillets", "butter", "garlic"]),
        "link": sample_recipe["link"],
        "source": sample_recipe["source"],
        "site": sample_recipe["site"],
    }
