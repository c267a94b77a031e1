"""Email address masking.

Malformed addresses are treated as "nothing to mask": every function here
returns an empty string for them instead of raising.
"""

import re
from typing import Any, Iterable, List

from piimask.core.detection import PLACEHOLDER_EMAIL
from piimask.core.detection import is_masked as _is_masked

from .format_helpers import FormatPreserver

_LOCAL_PART = re.compile(r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~.-]+")
_DOMAIN_LABEL = re.compile(r"[a-z0-9-]+", re.IGNORECASE)
_MIN_EMAIL_LENGTH = 6  # a@b.co


def is_valid_email(email: Any) -> bool:
    """Check whether ``email`` is a syntactically well-formed address.

    The check is structural only: one ``@``, a local part made of the
    characters allowed unquoted, and a dotted domain of at least two labels
    where no label starts or ends with a hyphen.
    """
    if not isinstance(email, str) or len(email) < _MIN_EMAIL_LENGTH:
        return False

    if email.count("@") != 1:
        return False

    local, domain = email.split("@")
    if not local or not _LOCAL_PART.fullmatch(local):
        return False

    if ".." in domain or domain.startswith(".") or domain.endswith("."):
        return False

    labels = domain.split(".")
    if len(labels) < 2:
        return False

    return all(
        _DOMAIN_LABEL.fullmatch(label) and not label.startswith("-") and not label.endswith("-")
        for label in labels
    )


def mask_email(email: str) -> str:
    """Mask an email address, keeping its shape and public suffix.

    The local part keeps its first two characters and the first domain label
    is masked the same way. Remaining domain labels are kept so multi-part
    suffixes like ``co.uk`` survive.

    Examples:
        >>> mask_email("john.doe@example.com")
        'jo******@ex*****.com'
        >>> mask_email("user@subdomain.example.co.uk")
        'us***@su*******.example.co.uk'
        >>> mask_email("not-an-email")
        ''
    """
    if not is_valid_email(email):
        return ""

    local, domain = email.split("@")
    labels = domain.split(".")

    # Validation guarantees at least two domain labels.
    masked_domain = ".".join([FormatPreserver.keep_prefix(labels[0]), *labels[1:]])

    return f"{FormatPreserver.keep_prefix(local)}@{masked_domain}"


def display_mask(email: str, show_first: int = 1, show_last: int = 1) -> str:
    """Mask the middle of the local part for display, keeping the domain.

    If the visible characters would cover the whole local part the address
    is returned unchanged.

    Examples:
        >>> display_mask("john@example.com")
        'j**n@example.com'
    """
    if not is_valid_email(email):
        return ""

    local, domain = email.split("@")
    masked_local = FormatPreserver.keep_edges(local, show_first, show_last)
    if masked_local == local:
        return email

    return f"{masked_local}@{domain}"


def placeholder(email: str) -> str:
    """Replace a valid address with the fixed placeholder, else ``""``.

    The placeholder keeps database columns populated while discarding the
    original content entirely.
    """
    return PLACEHOLDER_EMAIL if is_valid_email(email) else ""


def get_placeholder() -> str:
    return PLACEHOLDER_EMAIL


def mask_many(emails: Iterable[str]) -> List[str]:
    """Mask several addresses; invalid entries become ``""``."""
    return [mask_email(email) for email in emails]


def is_masked(email: str) -> bool:
    """Check whether an email address looks masked."""
    return _is_masked(email)
