"""
Unit tests for instruction step parsing.

Tests time extraction with prep/cook routing, temperature extraction
and Celsius conversion, and list numbering.
"""

import pytest

from recipe_etl.engine.parsing.instruction import (
    InstructionParser,
    celsius_to_fahrenheit,
    parse_instructions,
)


class TestTimeExtraction:
    """Tests for prep and cook time routing."""

    def test_bake_is_cook_time(self, instruction_parser):
        """A time near 'bake' is cook time."""
        result = instruction_parser.parse_instruction("Bake for 30 minutes at 350°F", 1)
        assert result.cook_minutes == 30
        assert result.prep_minutes is None
        assert result.temperature_fahrenheit == 350

    def test_prep_and_cook_from_separate_mentions(self, instruction_parser):
        """One step can yield both a prep and a cook time."""
        result = instruction_parser.parse_instruction(
            "Marinate for 2 hours, then cook for 45 minutes", 1
        )
        assert result.prep_minutes == 120
        assert result.cook_minutes == 45

    def test_range_uses_lower_bound(self, instruction_parser):
        """A range contributes its lower bound."""
        result = instruction_parser.parse_instruction("Simmer for 15-20 minutes", 2)
        assert result.cook_minutes == 15

    def test_en_dash_range(self, instruction_parser):
        """En dashes separate ranges too."""
        result = instruction_parser.parse_instruction("Roast 1–2 hours", 2)
        assert result.cook_minutes == 60

    def test_hour_abbreviation(self, instruction_parser):
        """'hrs' converts to minutes like 'hours'."""
        result = instruction_parser.parse_instruction("Let the dough rest 2 hrs", 1)
        assert result.cook_minutes == 120

    def test_decimal_hours(self, instruction_parser):
        """'1.5 hours' is 90 minutes, not a time read from the '5'."""
        result = instruction_parser.parse_instruction("Bake for 1.5 hours", 1)
        assert result.cook_minutes == 90
        assert result.prep_minutes is None

    def test_decimal_minutes_round_to_whole_minutes(self, instruction_parser):
        """Fractional minutes are rounded."""
        result = instruction_parser.parse_instruction("Simmer for 7.8 minutes", 1)
        assert result.cook_minutes == 8

    def test_minced_is_not_a_time_unit(self, instruction_parser):
        """'min' inside 'minced' is not read as minutes."""
        result = instruction_parser.parse_instruction("Stir in 2 minced shallots and serve", 3)
        assert result.prep_minutes is None
        assert result.cook_minutes is None

    def test_mint_is_not_a_time_unit(self, instruction_parser):
        """'min' inside 'mint' is not read as minutes."""
        result = instruction_parser.parse_instruction("Garnish with 3 mint leaves", 6)
        assert result.prep_minutes is None
        assert result.cook_minutes is None

    def test_hour_inside_a_word_is_not_a_time_unit(self, instruction_parser):
        """'hour' must end the word."""
        result = instruction_parser.parse_instruction("Cut 2 hourglass shapes from the dough", 1)
        assert result.cook_minutes is None

    def test_min_abbreviation_still_matches(self, instruction_parser):
        """'min' followed by punctuation is minutes."""
        result = instruction_parser.parse_instruction("Bake 12 min.", 1)
        assert result.cook_minutes == 12

    def test_no_cue_defaults_to_cook(self, instruction_parser):
        """A time with no nearby cue becomes cook time when nothing is set yet."""
        result = instruction_parser.parse_instruction("Let it stand for 10 minutes", 1)
        assert result.cook_minutes == 10
        assert result.prep_minutes is None

    def test_no_cue_does_not_fill_cook_after_prep(self, instruction_parser):
        """The cook default only applies while both fields are empty."""
        result = instruction_parser.parse_instruction(
            "Dice onions for 5 minutes. Let everything rest for another 10 minutes.", 1
        )
        assert result.prep_minutes == 5
        assert result.cook_minutes is None

    def test_first_match_wins_per_field(self, instruction_parser):
        """Later times for an already-filled field are discarded."""
        result = instruction_parser.parse_instruction(
            "Chop onions for 5 minutes, then chop peppers for 10 minutes", 1
        )
        assert result.prep_minutes == 5
        assert result.cook_minutes is None

    def test_no_times(self, instruction_parser):
        """Steps without times leave both fields empty."""
        result = instruction_parser.parse_instruction("Serve immediately.", 5)
        assert result.prep_minutes is None
        assert result.cook_minutes is None

    def test_context_window_is_configurable(self):
        """With no context window, cue words are never seen."""
        parser = InstructionParser(context_window=0)
        result = parser.parse_instruction("Chop for 5 minutes", 1)
        assert result.prep_minutes is None
        assert result.cook_minutes == 5


class TestTemperatureExtraction:
    """Tests for temperature extraction."""

    def test_bare_fahrenheit(self, instruction_parser):
        """'400°F' is read in Fahrenheit."""
        result = instruction_parser.parse_instruction("Preheat oven to 400°F.", 1)
        assert result.temperature_fahrenheit == 400

    def test_bare_celsius_is_converted(self, instruction_parser):
        """'180°C' converts to Fahrenheit."""
        result = instruction_parser.parse_instruction("Bake at 180°C for 25 minutes", 1)
        assert result.temperature_fahrenheit == 356
        assert result.cook_minutes == 25

    def test_worded_fahrenheit(self, instruction_parser):
        """'degrees Fahrenheit' is recognized."""
        result = instruction_parser.parse_instruction("Heat oven to 375 degrees Fahrenheit", 1)
        assert result.temperature_fahrenheit == 375

    def test_worded_degrees_f(self, instruction_parser):
        """'degrees F' is recognized."""
        result = instruction_parser.parse_instruction("Heat oven to 350 degrees F.", 1)
        assert result.temperature_fahrenheit == 350

    def test_worded_celsius_is_converted(self, instruction_parser):
        """'degrees Celsius' converts to Fahrenheit."""
        result = instruction_parser.parse_instruction("Preheat oven to 200 degrees Celsius", 1)
        assert result.temperature_fahrenheit == 392

    def test_cup_abbreviation_is_not_a_temperature(self, instruction_parser):
        """A quantity followed by 'c.' is not Celsius."""
        result = instruction_parser.parse_instruction("Add 2 c. flour", 1)
        assert result.temperature_fahrenheit is None

    def test_capital_cup_abbreviation_is_not_celsius(self, instruction_parser):
        """'1 C. sugar' is a cup measure, not 1°C."""
        result = instruction_parser.parse_instruction("Add 1 C. sugar and mix well", 2)
        assert result.temperature_fahrenheit is None

    def test_bare_celsius_without_degree_sign(self, instruction_parser):
        """'180 C' followed by a word is still Celsius."""
        result = instruction_parser.parse_instruction("Bake at 180 C until golden", 1)
        assert result.temperature_fahrenheit == 356

    def test_fahrenheit_pattern_wins_over_earlier_celsius(self, instruction_parser):
        """Fahrenheit is checked first, wherever it appears in the step."""
        result = instruction_parser.parse_instruction("Start at 200°C, then lower to 350°F", 1)
        assert result.temperature_fahrenheit == 350

    def test_word_starting_with_f_is_not_a_temperature(self, instruction_parser):
        """'5 Fish' is not Fahrenheit."""
        result = instruction_parser.parse_instruction("Add 5 Fish fillets to the pan", 1)
        assert result.temperature_fahrenheit is None

    @pytest.mark.parametrize("celsius,fahrenheit", [(0, 32), (100, 212), (180, 356), (37, 99)])
    def test_celsius_to_fahrenheit(self, celsius, fahrenheit):
        """Conversion rounds to the nearest whole degree."""
        assert celsius_to_fahrenheit(celsius) == fahrenheit


class TestParseInstruction:
    """Tests for text handling and numbering."""

    def test_text_is_trimmed(self, instruction_parser):
        """Surrounding whitespace is removed; the rest is kept verbatim."""
        result = instruction_parser.parse_instruction("  Stir well, then serve.  ", 4)
        assert result.text == "Stir well, then serve."
        assert result.step_number == 4

    def test_non_string_input(self, instruction_parser):
        """Non-string input yields an empty step without raising."""
        result = instruction_parser.parse_instruction(None, 3)
        assert result.step_number == 3
        assert result.text == ""
        assert result.prep_minutes is None
        assert result.cook_minutes is None
        assert result.temperature_fahrenheit is None

    def test_parse_instructions_numbers_from_one(self):
        """Steps are numbered by position, starting at 1."""
        results = parse_instructions(["Mix the batter.", "Bake for 20 minutes."])
        assert [r.step_number for r in results] == [1, 2]
        assert results[1].cook_minutes == 20

    def test_parse_instructions_skips_invalid_entries(self):
        """Invalid entries are dropped without renumbering the rest."""
        results = parse_instructions(["Mix.", 42, "", "Bake."])
        assert [r.step_number for r in results] == [1, 4]

    def test_parse_instructions_skips_whitespace_only_entries(self):
        """Whitespace-only entries are dropped like empty ones."""
        results = parse_instructions(["Mix.", "   ", "\t\n", "Bake."])
        assert [r.step_number for r in results] == [1, 4]
        assert [r.text for r in results] == ["Mix.", "Bake."]

    def test_row_shape(self):
        """to_row() uses the recipe_instructions column names."""
        row = parse_instructions(["Bake for 30 minutes at 350°F"])[0].to_row()
        assert row == {
            "step_number": 1,
            "instruction": "Bake for 30 minutes at 350°F",
            "prep_time": None,
            "cook_time": 30,
            "temperature": 350,
        }
