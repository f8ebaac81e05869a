"""
Quantity extraction for ingredient lines.

Recognizes a numeric quantity at the head of an ingredient string and
returns it together with the rest of the line. Handles fractions, mixed
numbers, decimals, integers and spelled-out words.
"""
import re
from fractions import Fraction
from typing import Callable, List, Optional, Tuple

# Unicode vulgar fractions rewritten to ASCII before matching
UNICODE_FRACTIONS = {
    "½": "1/2", "¼": "1/4", "¾": "3/4",
    "⅓": "1/3", "⅔": "2/3",
    "⅛": "1/8", "⅜": "3/8", "⅝": "5/8", "⅞": "7/8",
}

WORD_QUANTITIES = {
    "one": 1.0, "two": 2.0, "three": 3.0, "four": 4.0, "five": 5.0,
    "six": 6.0, "seven": 7.0, "eight": 8.0, "nine": 9.0, "ten": 10.0,
    "half": 0.5, "quarter": 0.25, "third": 1 / 3,
}

_UNICODE_FRACTION_RE = re.compile(r"(\d*)\s*([" + "".join(UNICODE_FRACTIONS) + r"])")


def _fraction_value(token: str) -> Optional[float]:
    try:
        return float(Fraction(token))
    except ZeroDivisionError:
        return None


def _mixed_value(token: str) -> Optional[float]:
    whole, fraction = token.split()
    fraction_value = _fraction_value(fraction)
    if fraction_value is None:
        return None
    return float(whole) + fraction_value


def _word_value(token: str) -> Optional[float]:
    return WORD_QUANTITIES.get(token.lower())


# Head-of-string patterns in priority order; the first match wins.
QUANTITY_PATTERNS: List[Tuple[re.Pattern, Callable[[str], Optional[float]]]] = [
    # Fractions: 1/2, 3/4
    (re.compile(r"^(\d+/\d+)(?!\d)\s*(.+)$"), _fraction_value),
    # Mixed numbers: 1 1/2, 2 3/4
    (re.compile(r"^(\d+\s+\d+/\d+)(?!\d)\s*(.+)$"), _mixed_value),
    # Decimals: 1.5, 2.25 (unit may be attached: 1.5kg)
    (re.compile(r"^(\d+\.\d+)(?![\d/-])\s*(.+)$"), float),
    # Whole numbers: 2, 500 (unit may be attached: 500g)
    (re.compile(r"^(\d+)(?![\d./-])\s*(.+)$"), float),
    # Words: one, two, half
    (
        re.compile(
            r"^(one|two|three|four|five|six|seven|eight|nine|ten|half|quarter|third)\s+(.+)$",
            re.IGNORECASE,
        ),
        _word_value,
    ),
]


def replace_unicode_fractions(text: str) -> str:
    """
    Rewrite unicode vulgar fractions as ASCII fractions.

    Examples:
        "½ cup milk" -> "1/2 cup milk"
        "1½ cups flour" -> "1 1/2 cups flour"
    """
    def _replace(match: re.Match) -> str:
        whole, symbol = match.group(1), match.group(2)
        ascii_fraction = UNICODE_FRACTIONS[symbol]
        return f"{whole} {ascii_fraction}" if whole else ascii_fraction

    return _UNICODE_FRACTION_RE.sub(_replace, text)


def extract_quantity(text: str) -> Tuple[Optional[float], Optional[str]]:
    """
    Extract a leading quantity from an ingredient string.

    Args:
        text: Trimmed ingredient string

    Returns:
        Tuple of (quantity, remainder). remainder is None when no quantity
        pattern matched the head of the string. quantity is None when a
        pattern matched but the value is degenerate (zero, or a zero
        denominator).

    Examples:
        "1 1/2 cups flour" -> (1.5, "cups flour")
        "500g ground beef" -> (500.0, "g ground beef")
        "salt to taste" -> (None, None)
    """
    candidate = replace_unicode_fractions(text).strip()

    for pattern, to_value in QUANTITY_PATTERNS:
        match = pattern.match(candidate)
        if not match:
            continue

        value = to_value(match.group(1).strip())
        remainder = match.group(2).strip()
        if not value:
            return None, remainder
        return value, remainder

    return None, None
