"""
Instruction step parser.

Extracts prep/cook durations and an oven or cooking temperature from
free-text instruction steps:

    "Bake for 30 minutes at 350°F" -> cook 30 minutes, 350°F
    "Marinate for 2 hours, then cook for 45 minutes"
                                   -> prep 120 minutes, cook 45 minutes

Durations are routed to prep or cook by the words around each time
mention. Conflicting mentions resolve by first match per field; no error
is raised for ambiguous text.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from recipe_etl.config import settings
from recipe_etl.engine.parsing.models import ParsedInstruction

logger = logging.getLogger(__name__)

_TIME_UNITS = r"(minutes|minute|mins|min|hours|hour|hrs|hr)(?!\w)"
_NUMBER = r"(\d+(?:\.\d+)?)"


class InstructionParser:
    """
    Rule-based instruction parser.

    Time mentions are collected family by family (ranges, single values,
    contextual phrasing), each family scanned across the whole step.
    """

    # (pattern, group holding the time unit). A range contributes its lower bound.
    TIME_PATTERNS: List[Tuple[re.Pattern, int]] = [
        # Ranges: "15-20 minutes", "1 to 2 hours"
        (re.compile(r"(?<![\d.])" + _NUMBER + r"\s*(?:to|-|–)\s*" + _NUMBER + r"\s*" + _TIME_UNITS, re.IGNORECASE), 3),
        # Single times: "30 minutes", "1 hour"
        (re.compile(r"(?<![\d.])" + _NUMBER + r"\s*" + _TIME_UNITS, re.IGNORECASE), 2),
        # Contextual times: "for about 15 minutes", "approximately 1 hour"
        (re.compile(r"(?:for|about|approximately)\s*" + _NUMBER + r"\s*" + _TIME_UNITS, re.IGNORECASE), 2),
    ]

    # (pattern, is_celsius) in priority order; the first match wins
    TEMPERATURE_PATTERNS: List[Tuple[re.Pattern, bool]] = [
        # Fahrenheit: "350°F", "350 F"
        (re.compile(r"(\d+)\s*(?:[°º]\s*[Ff]|F)\b"), False),
        # Celsius: "180°C", "180 C" (but not the cup abbreviation "1 C.")
        (re.compile(r"(\d+)\s*(?:[°º]\s*[Cc]|C(?!\.))\b"), True),
        # Worded: "350 degrees F", "375 degrees Fahrenheit"
        (re.compile(r"(\d+)\s*degrees?\s*F(?:ahrenheit)?\b", re.IGNORECASE), False),
        # Worded: "180 degrees C", "200 degrees Celsius"
        (re.compile(r"(\d+)\s*degrees?\s*C(?:elsius)?\b", re.IGNORECASE), True),
    ]

    # Words near a time mention that mark it as prep time
    PREP_KEYWORDS = [
        "prep", "chop", "slice", "dice", "mix", "stir",
        "prepare", "cut", "mince", "marinate",
    ]

    # Words near a time mention that mark it as cook time
    COOK_KEYWORDS = [
        "bake", "cook", "fry", "grill", "roast",
        "simmer", "boil", "steam", "broil",
    ]

    def __init__(self, context_window: Optional[int] = None):
        if context_window is None:
            context_window = settings.instruction_context_window
        self.context_window = context_window

    def parse_instruction(self, text: str, step_number: int) -> ParsedInstruction:
        """
        Parse a single instruction step.

        Args:
            text: Raw instruction text.
            step_number: 1-based position of the step, supplied by the caller.

        Returns:
            ParsedInstruction with the trimmed text and any extracted
            prep/cook minutes and Fahrenheit temperature.
        """
        if not isinstance(text, str):
            logger.debug(f"Non-string instruction for step {step_number}: {text!r}")
            return ParsedInstruction(step_number=step_number, text="")

        instruction = text.strip()
        prep_minutes, cook_minutes = self._extract_times(instruction)

        return ParsedInstruction(
            step_number=step_number,
            text=instruction,
            prep_minutes=prep_minutes,
            cook_minutes=cook_minutes,
            temperature_fahrenheit=self._extract_temperature(instruction),
        )

    def parse_instructions(self, lines: Iterable[str]) -> List[ParsedInstruction]:
        """
        Parse a recipe's instruction steps, numbering them from 1.

        Non-string, empty and whitespace-only entries are skipped; the rest
        keep the step number of their position in the input list.
        """
        parsed = []
        for index, line in enumerate(lines):
            if not isinstance(line, str) or not line.strip():
                continue
            parsed.append(self.parse_instruction(line, index + 1))
        return parsed

    def _find_time_mentions(self, instruction: str) -> List[Tuple[int, str]]:
        """Collect (minutes, surrounding context) for every time mention."""
        mentions = []
        for pattern, unit_group in self.TIME_PATTERNS:
            for match in pattern.finditer(instruction):
                value = float(match.group(1))
                unit = match.group(unit_group).lower()
                if unit.startswith("h"):
                    value *= 60
                minutes = int(round(value))

                start = max(0, match.start() - self.context_window)
                end = min(len(instruction), match.end() + self.context_window)
                mentions.append((minutes, instruction[start:end].lower()))
        return mentions

    def _extract_times(self, instruction: str) -> Tuple[Optional[int], Optional[int]]:
        prep_minutes = None
        cook_minutes = None

        for minutes, context in self._find_time_mentions(instruction):
            if any(kw in context for kw in self.PREP_KEYWORDS):
                if prep_minutes is None:
                    prep_minutes = minutes
            elif any(kw in context for kw in self.COOK_KEYWORDS):
                if cook_minutes is None:
                    cook_minutes = minutes
            elif prep_minutes is None and cook_minutes is None:
                # No cue either way and nothing assigned yet: default to cook time
                cook_minutes = minutes

        return prep_minutes, cook_minutes

    def _extract_temperature(self, instruction: str) -> Optional[int]:
        for pattern, is_celsius in self.TEMPERATURE_PATTERNS:
            match = pattern.search(instruction)
            if match:
                degrees = int(match.group(1))
                if is_celsius:
                    return celsius_to_fahrenheit(degrees)
                return degrees
        return None


def celsius_to_fahrenheit(celsius: float) -> int:
    """Convert Celsius to Fahrenheit, rounded to the nearest degree."""
    return int(round(celsius * 9 / 5 + 32))


_parser = InstructionParser()


def parse_instruction(text: str, step_number: int) -> ParsedInstruction:
    """Parse one instruction step with the shared stateless parser."""
    return _parser.parse_instruction(text, step_number)


def parse_instructions(lines: Iterable[str]) -> List[ParsedInstruction]:
    """Parse a list of instruction steps, numbering them from 1."""
    return _parser.parse_instructions(lines)
