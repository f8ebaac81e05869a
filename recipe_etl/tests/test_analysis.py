"""
Unit tests for recipe-level analysis.

Tests difficulty scoring, dietary tag inference, and whole-recipe time
estimates including the step-count fallback.
"""

from recipe_etl.config import get_settings
from recipe_etl.engine import analysis
from recipe_etl.engine.analysis import (
    CookingTimes,
    analyze_difficulty,
    estimate_cooking_times,
    extract_dietary_tags,
)
from recipe_etl.engine.parsing.models import DietaryTag, Difficulty


class TestAnalyzeDifficulty:
    """Tests for difficulty scoring."""

    def test_large_wordy_recipe_with_technique_is_hard(self):
        """Many ingredients, many long steps and a technique score as hard."""
        ingredients = [f"ingredient {i}" for i in range(16)]
        instructions = ["Braise the meat slowly " + "and keep stirring " * 8 for _ in range(9)]
        assert analyze_difficulty(ingredients, instructions) == Difficulty.HARD

    def test_short_recipe_is_easy(self):
        """A handful of ingredients and steps is easy."""
        assert analyze_difficulty(["bread", "butter"], ["Toast the bread.", "Spread butter."]) == Difficulty.EASY

    def test_moderate_counts_are_medium(self):
        """More than 8 ingredients and more than 4 steps scores 2."""
        ingredients = [f"ingredient {i}" for i in range(9)]
        instructions = ["Mix.", "Pour.", "Wait.", "Flip.", "Serve."]
        assert analyze_difficulty(ingredients, instructions) == Difficulty.MEDIUM

    def test_each_technique_counts_once(self):
        """Repeating a technique does not add to the score."""
        assert analyze_difficulty(["fish"], ["Deglaze the pan.", "Deglaze again."]) == Difficulty.EASY

    def test_distinct_techniques_add_up(self):
        """Two different techniques score 2."""
        assert analyze_difficulty(["carrots"], ["Julienne the carrots.", "Deglaze the pan."]) == Difficulty.MEDIUM

    def test_non_string_steps_are_ignored_for_words(self):
        """Non-string steps do not break word counting."""
        assert analyze_difficulty([], [None, 3, "Serve."]) == Difficulty.EASY


class TestExtractDietaryTags:
    """Tests for dietary tag inference."""

    def test_flour_milk_eggs(self):
        """Dairy and eggs rule out vegan and dairy-free but not vegetarian."""
        tags = extract_dietary_tags(["2 cups flour", "1 cup milk", "2 eggs"])
        assert DietaryTag.VEGETARIAN in tags
        assert DietaryTag.VEGAN not in tags
        assert DietaryTag.DAIRY_FREE not in tags
        assert DietaryTag.GLUTEN_FREE not in tags

    def test_empty_list_gets_every_tag(self):
        """Tags are positive-default, so an empty list gets all four."""
        assert extract_dietary_tags([]) == [
            DietaryTag.VEGETARIAN,
            DietaryTag.VEGAN,
            DietaryTag.GLUTEN_FREE,
            DietaryTag.DAIRY_FREE,
        ]

    def test_meat_rules_out_vegetarian_and_vegan(self):
        """A meat ingredient removes vegetarian and vegan."""
        tags = extract_dietary_tags(["1 lb ground beef", "salt"])
        assert tags == [DietaryTag.GLUTEN_FREE, DietaryTag.DAIRY_FREE]

    def test_plant_proteins_do_not_count_as_meat(self):
        """Tofu is a protein source but not meat."""
        tags = extract_dietary_tags(["firm tofu", "rice", "broccoli"])
        assert DietaryTag.VEGETARIAN in tags
        assert DietaryTag.VEGAN in tags

    def test_fish_counts_as_meat(self):
        """Non-plant protein sources rule out vegetarian."""
        assert DietaryTag.VEGETARIAN not in extract_dietary_tags(["salmon fillets"])

    def test_rice_is_gluten_free(self):
        """Grains outside the gluten list keep gluten-free."""
        assert DietaryTag.GLUTEN_FREE in extract_dietary_tags(["jasmine rice"])

    def test_adding_meat_never_adds_vegetarian_or_vegan(self):
        """Adding meat can only remove vegetarian and vegan."""
        base = ["firm tofu", "rice", "broccoli"]
        before = set(extract_dietary_tags(base))
        after = set(extract_dietary_tags(base + ["2 chicken breasts"]))
        assert DietaryTag.VEGETARIAN not in after
        assert DietaryTag.VEGAN not in after
        assert after - before == set()

    def test_ignores_non_string_entries(self):
        """Non-string entries are skipped."""
        assert extract_dietary_tags([None, 5]) == extract_dietary_tags([])


class TestEstimateCookingTimes:
    """Tests for whole-recipe time estimates."""

    def test_takes_minimum_of_each_field(self):
        """The smallest prep and cook times across steps are used."""
        times = estimate_cooking_times([
            "Chop onions for 10 minutes",
            "Bake for 30 minutes",
            "Bake another 20 minutes",
        ])
        assert times == CookingTimes(prep_minutes=10, cook_minutes=20)
        assert times.total_minutes == 30

    def test_ingredient_words_are_not_read_as_times(self):
        """'2 minced shallots' does not produce a 2-minute prep time."""
        times = estimate_cooking_times([
            "Chop the onion for 10 minutes",
            "Stir in 2 minced shallots",
            "Bake for 30 minutes",
        ])
        assert times == CookingTimes(prep_minutes=10, cook_minutes=30)

    def test_missing_field_is_zero(self):
        """A field no step mentions is 0 when the other was found."""
        times = estimate_cooking_times(["Bake for 25 minutes", "Serve."])
        assert times == CookingTimes(prep_minutes=0, cook_minutes=25)

    def test_fallback_uses_minimums_for_short_recipes(self):
        """With no times, short recipes get the minimum estimate."""
        times = estimate_cooking_times(["Mix everything.", "Serve."])
        assert times == CookingTimes(prep_minutes=5, cook_minutes=10)

    def test_fallback_scales_with_step_count(self):
        """With no times, the estimate grows with the number of steps."""
        times = estimate_cooking_times(["Do something."] * 6)
        assert times == CookingTimes(prep_minutes=12, cook_minutes=18)

    def test_empty_list_uses_fallback(self):
        """An empty instruction list gets the minimum estimate."""
        assert estimate_cooking_times([]) == CookingTimes(prep_minutes=5, cook_minutes=10)

    def test_fallback_reads_settings(self, monkeypatch):
        """Fallback minimums come from settings."""
        monkeypatch.setattr(
            analysis,
            "settings",
            get_settings(fallback_min_prep_minutes=15, fallback_min_cook_minutes=40),
        )
        times = estimate_cooking_times(["Serve."])
        assert times == CookingTimes(prep_minutes=15, cook_minutes=40)
