"""
Price and Area Formatting Utilities

Formats money and surface values the way the Luxembourg site displays them,
and parses the free-form amounts sellers type into forms.

Provides consistent price handling across all modules.
"""

import re
from typing import Optional, Union

from xactestate.logging_config import get_logger

logger = get_logger(__name__)

Number = Union[int, float]

NARROW_NBSP = "\u202f"
NBSP = "\u00a0"

_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£", "CHF": "CHF"}


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    scaled = abs(value) * factor + 0.5
    rounded = int(scaled) / factor
    return -rounded if value < 0 else rounded


def _group(integer: int, separator: str) -> str:
    return f"{integer:,}".replace(",", separator)


def _localize(value: Number, group_sep: str, decimal_sep: str, max_fraction: int = 3) -> str:
    """Render a number with locale separators and up to ``max_fraction`` decimals."""
    rounded = _round_half_up(float(value), max_fraction)
    sign = "-" if rounded < 0 else ""
    rounded = abs(rounded)
    integer = int(rounded)
    text = _group(integer, group_sep)

    fraction = f"{rounded - integer:.{max_fraction}f}"[2:].rstrip("0")
    if fraction:
        text = f"{text}{decimal_sep}{fraction}"
    return f"{sign}{text}"


def format_price(price: Optional[Number], currency: str = "EUR") -> str:
    """Format a price in fr-LU currency style without decimals.

    Example:
        >>> format_price(750000)
        '750 000 €'
    """
    if price is None:
        return "-"

    rounded = int(_round_half_up(float(price)))
    sign = "-" if rounded < 0 else ""
    symbol = _CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    return f"{sign}{_group(abs(rounded), NARROW_NBSP)}{NBSP}{symbol}"


def format_area(area: Optional[Number]) -> str:
    """Format a surface in square metres, e.g. ``"1 250 m²"``."""
    if area is None:
        return "-"
    return f"{_localize(area, NARROW_NBSP, ',')} m²"


def format_number_de(value: Number) -> str:
    """Format a number with de-LU grouping (``750000`` -> ``"750.000"``)."""
    return _localize(value, ".", ",")


def format_compact_value(total: Optional[Number]) -> str:
    """Format an aggregate portfolio value for the homepage counters.

    Example:
        >>> format_compact_value(1_250_000_000)
        '€1.3B'
        >>> format_compact_value(3_500_000)
        '€3.5M'
    """
    total = float(total or 0)
    if total >= 1_000_000_000:
        return f"€{_round_half_up(total / 1_000_000_000, 1):.1f}B"
    if total >= 1_000_000:
        return f"€{_round_half_up(total / 1_000_000, 1):.1f}M"
    return f"€{_localize(total, ',', '.')}"


def parse_amount(value: Union[str, Number, None]) -> Optional[float]:
    """Parse a user-entered amount into a number.

    Handles plain numbers and strings such as:
    - "750000", "750 000 €", "€750,000", "750.000"
    - "1.5M", "750k"
    - "1.234.567,50" (continental decimals)

    Args:
        value: Raw amount.

    Returns:
        Parsed value, or None when nothing numeric can be extracted.

    Example:
        >>> parse_amount("750.000 €")
        750000.0
        >>> parse_amount("1.5M")
        1500000.0
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    if not text:
        return None

    text = re.sub(r"(?i)eur|€|\$|£|chf", "", text)
    text = text.replace(NBSP, "").replace(NARROW_NBSP, "").replace(" ", "").replace("'", "")

    multiplier = 1
    suffix = re.search(r"([kKmM])$", text)
    if suffix:
        multiplier = 1_000 if suffix.group(1) in "kK" else 1_000_000
        text = text[:-1]

    if not re.fullmatch(r"-?[\d.,]+", text) or not re.search(r"\d", text):
        logger.debug("Could not parse amount from: %s", value)
        return None

    if "," in text and "." in text:
        # Whichever separator comes last is the decimal one
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text or "." in text:
        sep = "," if "," in text else "."
        parts = text.split(sep)
        grouped = len(parts) > 2 or (len(parts[-1]) == 3 and multiplier == 1)
        if grouped:
            text = "".join(parts)
        else:
            text = text.replace(sep, ".")

    try:
        return float(text) * multiplier
    except ValueError:
        logger.debug("Could not parse amount from: %s", value)
        return None
