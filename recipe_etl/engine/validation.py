"""
Structural validation and cleaning of raw recipe records.

validate_recipe collects every violated rule rather than stopping at the
first one. clean_recipe_data is a separate normalization pass and is not
gated by validation.
"""

from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from recipe_etl.config import settings
from recipe_etl.errors import InvalidRecipeError


class ValidationResult(BaseModel):
    """Outcome of validate_recipe."""

    is_valid: bool
    errors: List[str] = []

    def raise_for_errors(self, title: Optional[str] = None) -> None:
        """Raise InvalidRecipeError if any rule was violated."""
        if not self.is_valid:
            raise InvalidRecipeError(self.errors, title=title)


class CleanedRecipe(BaseModel):
    """
    Normalized copy of a loosely-typed recipe record.

    Text fields are trimmed and default to "". List fields fall back to []
    when the input is not a list.
    """

    model_config = ConfigDict(from_attributes=True)

    title: str = ""
    description: str = ""
    ingredients: List[Any] = Field(default_factory=list)
    directions: List[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("directions", "instructions"),
    )
    link: str = ""
    source: str = ""
    site: str = ""

    @field_validator("title", "description", "link", "source", "site", mode="before")
    @classmethod
    def trim_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if not isinstance(v, str):
            v = str(v)
        return v.strip()

    @field_validator("ingredients", "directions", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> List[Any]:
        if isinstance(v, (list, tuple)):
            return list(v)
        return []


def get_field(raw: Any, name: str) -> Any:
    """Read a field from a dict-like record or an attribute-style object."""
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def validate_recipe(raw: Any) -> ValidationResult:
    """
    Check a raw recipe record for minimal structural completeness.

    Rules (all checked):
        - title present and not blank
        - at least one ingredient
        - at least one instruction ("directions", or "instructions")
        - title no longer than settings.title_max_length characters

    Args:
        raw: A dict-like record or any object exposing the same attributes.

    Returns:
        ValidationResult with is_valid True only when no rule was violated.
    """
    errors = []

    title = get_field(raw, "title")
    if not isinstance(title, str) or not title.strip():
        errors.append("Recipe title is required")

    ingredients = get_field(raw, "ingredients")
    if not isinstance(ingredients, (list, tuple)) or len(ingredients) == 0:
        errors.append("At least one ingredient is required")

    directions = get_field(raw, "directions")
    if directions is None:
        directions = get_field(raw, "instructions")
    if not isinstance(directions, (list, tuple)) or len(directions) == 0:
        errors.append("At least one instruction is required")

    if isinstance(title, str) and len(title) > settings.title_max_length:
        errors.append(
            f"Recipe title is too long (max {settings.title_max_length} characters)"
        )

    return ValidationResult(is_valid=not errors, errors=errors)


def clean_recipe_data(raw: Any) -> dict:
    """
    Produce a normalized shallow copy of a raw recipe record.

    Returns:
        Dict with keys title, description, ingredients, directions, link,
        source and site. List items are passed through untouched.
    """
    if raw is None:
        raw = {}
    return CleanedRecipe.model_validate(raw).model_dump()
