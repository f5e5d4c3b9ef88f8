"""
Centralized formatting module for the ticker tables.
Turns raw prices, percent changes, ranks and names into fixed-width cells.
"""

import math
from decimal import Decimal
from typing import Optional

from ticker.config import TABLE, TableSettings


def pad(content: str, count: int) -> str:
    """Append `count` spaces. The caller guarantees `count >= 0`."""
    return content + " " * count


def _fit(text: str, width: int) -> str:
    """Pad or cut a sentinel so it occupies exactly `width` columns."""
    text = text[:width]
    return pad(text, width - len(text))


def format_value(price: float, settings: TableSettings = TABLE) -> str:
    """
    Format a non-negative price into a `value_len` cell.

    Sub-unit prices keep fixed decimals (0.005 -> "0.00500"), larger ones
    are scaled by thousands with a magnitude suffix (1500 -> "1.50K  ").
    Prices of 10^15 and above collapse into the PUMPED sentinel.
    """
    width = settings.value_len
    if price < 1:
        return f"{price:.{min(width - 2, settings.value_max_decimals)}f}"

    suffixes = settings.magnitude_suffixes
    tier = max(math.floor(math.log10(price)), 0) // 3
    while True:
        if tier >= len(suffixes):
            return _fit(settings.pumped, width)
        # Round half up to hundredths; 1000.00 carries into the next tier
        hundredths = math.floor(price / 10 ** (3 * tier) * 100 + 0.5)
        if hundredths < 100_000:
            break
        tier += 1

    whole, fraction = divmod(hundredths, 100)
    text = f"{whole}.{fraction:02d}{suffixes[tier]}"
    return pad(text, width - len(text))


def format_change(pct: float, settings: TableSettings = TABLE) -> str:
    """
    Format a signed 24h percent change into a `change_len` cell.

    Precision shrinks as the magnitude grows so the cell width stays
    constant: +1.000%, +12.35%, -123.5%. Changes of 1000% or more become
    PUMPED!/DUMPED!.
    """
    width = settings.change_len
    magnitude = abs(pct)
    if magnitude < settings.change_zero_threshold:
        return f" {0:.{width - 4}f}%"

    tier = max(math.floor(math.log10(magnitude)), 0)
    if tier >= settings.change_max_tier:
        return _fit(settings.pumped if pct > 0 else settings.dumped, width)

    precision = width - 4 - tier
    digits = f"{magnitude:.{precision}f}"
    if len(digits) > width - 2:
        if tier + 1 < settings.change_max_tier:
            # 9.9996 rounds to 10.000
            precision -= 1
            digits = f"{magnitude:.{precision}f}"
        else:
            # Below 1000% never becomes a sentinel: 999.96 -> 999.9
            scale = 10 ** precision
            digits = f"{math.floor(magnitude * scale) / scale:.{precision}f}"
    digits = digits.ljust(width - 2, "0")
    sign = "+" if pct > 0 else "-"
    return f"{sign}{digits}%"


def format_rank(rank: int, settings: TableSettings = TABLE) -> str:
    digits = str(rank)
    return pad(digits, settings.rank_len - len(digits))


def format_name(
    name: str,
    max_len: Optional[int] = None,
    cased: Optional[bool] = None,
    settings: TableSettings = TABLE,
) -> str:
    """
    Case and fit an asset name.

    `cased=True` keeps the name as given (display names such as "BNB" or
    "Lido Staked Ether"), `cased=False` title-cases a lowercase id
    ("bitcoin" -> "Bitcoin"). Left as None, a name with any uppercase
    character is treated as already cased.
    """
    if cased is None:
        cased = any(char.isupper() for char in name)
    name_str = name if cased else name[:1].upper() + name[1:].lower()

    if max_len is None:
        return name_str
    if max_len < 1:
        raise ValueError(f"max_len must be positive, got {max_len}")

    if len(name_str) > max_len:
        return name_str[:max_len - 1] + settings.truncation_marker
    return pad(name_str, max_len - len(name_str))


def format_amount(amount: float) -> str:
    """Shortest plain-decimal rendering: 100.0 -> "100", 1e-05 -> "0.00001"."""
    if not math.isfinite(amount):
        return repr(amount)
    if amount.is_integer():
        return str(int(amount))
    return format(Decimal(repr(amount)), "f")


def format_conversion(value: float, settings: TableSettings = TABLE) -> str:
    """Show a converted amount with about `eval_digits` significant digits."""
    if value <= 0 or not math.isfinite(value):
        return f"{value:.{settings.eval_digits}f}"
    int_digits = math.floor(math.log10(value)) + 1
    return f"{value:.{max(0, settings.eval_digits - int_digits)}f}"
