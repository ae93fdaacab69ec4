"""
Number formatting helpers for chart tooltips and axis ticks.
"""
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Number
from typing import Optional

COMPACT_UNITS = [
    (Decimal(10) ** 12, 'T'),
    (Decimal(10) ** 9, 'B'),
    (Decimal(10) ** 6, 'M'),
    (Decimal(10) ** 3, 'K'),
]


def _to_decimal(number) -> Optional[Decimal]:
    if isinstance(number, bool):
        return None
    try:
        value = Decimal(str(number).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not value.is_finite():
        return None
    return value


def format_number(number) -> Optional[str]:
    """
    Render a number with thousands separators, e.g. 1000 -> "1,000".

    Fractions keep at most three decimals. Returns None for non-numeric input.
    """
    if not isinstance(number, Number) or isinstance(number, bool):
        return None
    if isinstance(number, float) and math.isnan(number):
        return None
    if float(number).is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip('0').rstrip('.')


def _round_compact(value: Decimal) -> Decimal:
    # one decimal while the integer part is a single digit, whole numbers above
    if value < 10:
        return value.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
    return value.quantize(Decimal('1'), rounding=ROUND_HALF_UP)


def _strip(value: Decimal) -> str:
    text = f"{value:f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def shorten_number(number) -> Optional[str]:
    """
    Render a number in compact form, e.g. 10000 -> "10K", 1234567 -> "1.2M".

    Returns None for non-numeric, NaN or zero input.
    """
    value = _to_decimal(number)
    if value is None or value == 0:
        return None

    sign = '-' if value < 0 else ''
    magnitude = abs(value)

    suffix = ''
    scaled = _round_compact(magnitude)
    for i, (unit, unit_suffix) in enumerate(COMPACT_UNITS):
        if magnitude < unit:
            continue
        scaled = _round_compact(magnitude / unit)
        suffix = unit_suffix
        # 999_999 rounds to 1000K, which reads as 1M
        if scaled >= 1000 and i > 0:
            larger_unit, larger_suffix = COMPACT_UNITS[i - 1]
            scaled = _round_compact(magnitude / larger_unit)
            suffix = larger_suffix
        break
    else:
        if scaled >= 1000:
            scaled = _round_compact(magnitude / COMPACT_UNITS[-1][0])
            suffix = COMPACT_UNITS[-1][1]

    if scaled == 0:
        return None

    return f"{sign}{_strip(scaled)}{suffix}"
