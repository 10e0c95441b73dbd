"""Shared parsing helpers for configuration and CLI value normalization."""

from __future__ import annotations


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def parse_positive_number(value: object, field_name: str) -> float:
    """Parse a strictly positive number (seconds, minutes) from text or numerics.

    Raises:
        ValueError: If the value is blank, boolean, non-numeric, or not above zero.
    """

    if isinstance(value, bool):
        raise ValueError(f"`{field_name}` must be a positive number.")
    if isinstance(value, int | float):
        parsed = float(value)
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(f"`{field_name}` must be a positive number.")
        try:
            parsed = float(normalized)
        except ValueError as exc:
            raise ValueError(f"`{field_name}` must be a positive number.") from exc
    if parsed <= 0 or parsed != parsed:
        raise ValueError(f"`{field_name}` must be a positive number.")
    return parsed


def parse_int(value: object, field_name: str, *, minimum: int) -> int:
    """Parse an integer no smaller than `minimum`.

    Raises:
        ValueError: If the value is blank, boolean, non-integer, or below `minimum`.
    """

    message = f"`{field_name}` must be an integer >= {minimum}."
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, int):
        parsed = value
    else:
        normalized = normalize_optional_string(value)
        if normalized is None:
            raise ValueError(message)
        try:
            parsed = int(normalized)
        except ValueError as exc:
            raise ValueError(message) from exc
    if parsed < minimum:
        raise ValueError(message)
    return parsed
