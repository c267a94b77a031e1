"""Heuristic detection of values that have already been masked.

Every category-specific ``is_masked`` check in piimask delegates here. The
check is purely textual: it looks for signatures that the maskers leave
behind, not for the absence of personal data. False positives are expected
for genuine values that happen to carry one of the signatures, for example
a version string such as ``"1.0"`` or a password containing ``*``.
"""

import re
from typing import Any

PLACEHOLDER_EMAIL = "deleted@site.invalid"

# Output shape of ``mask_user_agent``: "Chrome on Windows"
_USER_AGENT_SUMMARY = re.compile(r"^[A-Za-z\s]+ on [A-Za-z\s]+$")

_MASKED_SUFFIXES = (".0", ":0")


def is_masked(value: Any) -> bool:
    """Check whether a value shows signs of having been masked.

    Args:
        value: Any value; it is coerced to text before checking.

    Returns:
        True if the value contains ``*``, is the placeholder email, ends with
        ``.0`` or ``:0``, equals ``::``, or looks like ``"Browser on OS"``.
        Empty values are never considered masked.

    Examples:
        >>> is_masked("jo***@ex*****.com")
        True
        >>> is_masked("192.168.1.0")
        True
        >>> is_masked("john@example.com")
        False
    """
    if not value:
        return False

    text = str(value)

    return (
        "*" in text
        or text == PLACEHOLDER_EMAIL
        or text.endswith(_MASKED_SUFFIXES)
        or text == "::"
        or _USER_AGENT_SUMMARY.fullmatch(text) is not None
    )


def any_masked(*values: Any) -> bool:
    """Return True if any of the given values individually looks masked."""
    return any(is_masked(value) for value in values)
