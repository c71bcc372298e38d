"""Shared utilities used across the booking form."""

from typing import Any


def is_blank(value: Any) -> bool:
    """True when a field value counts as "not provided".

    None, whitespace-only strings, and empty collections are blank.
    Booleans are never blank; ``False`` is a real answer.

    Examples:
        >>> is_blank("   ")
        True
        >>> is_blank([])
        True
        >>> is_blank(False)
        False
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False
