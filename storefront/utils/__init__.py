"""Shared utility helpers used across connectors and services."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
MAX_MONEY = Decimal("999999999999.99")


def safe_int(v, default=None):
    """Safely convert a value to int, returning default on failure.

    Strings like "12.0" are accepted and truncated.
    """
    if v is None or isinstance(v, bool):
        return default
    try:
        return int(v)
    except (ValueError, TypeError):
        pass
    try:
        return int(float(v))
    except (ValueError, TypeError, OverflowError):
        return default


def safe_decimal(v, default=Decimal("0")):
    """Safely convert a value to a finite Decimal, returning default on failure.

    Values beyond ±MAX_MONEY count as failures.
    """
    if v is None or isinstance(v, bool):
        return default
    try:
        d = Decimal(str(v).strip())
    except (InvalidOperation, ValueError):
        return default
    if not d.is_finite() or abs(d) > MAX_MONEY:
        return default
    return d


def to_money(v) -> str:
    """Format a value as a two-place fixed-point string ("89.50")."""
    return str(safe_decimal(v).quantize(CENTS, rounding=ROUND_HALF_UP))


def first_present(data: dict, candidates, default=None):
    """Return the value of the first candidate key that is present.

    None and empty strings count as absent, so vendor payloads that send
    "" for a missing field fall through to the next candidate.
    """
    if not isinstance(data, dict):
        return default
    for key in candidates:
        value = data.get(key)
        if value is None or value == "":
            continue
        return value
    return default
