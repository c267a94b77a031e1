"""Masking for card numbers, bank accounts and tax identifiers.

All three keep only the digits of the identifier and show the last few.
"""

from typing import Any, Dict, Mapping, Optional

from piimask.core.detection import is_masked as _is_masked

from .format_helpers import FormatPreserver, digits_only
from .routing import FieldRouter

CREDIT_CARD = "credit_card"
BANK_ACCOUNT = "bank_account"
TAX_ID = "tax_id"


def _mask_identifier(value: str, keep_last: int) -> str:
    if not value:
        return ""
    return FormatPreserver.keep_last(digits_only(value), keep_last)


def credit_card(card_number: str, keep_last: int = 4) -> str:
    """Mask a card number, keeping its last digits.

    Examples:
        >>> credit_card("4532-1234-5678-9012")
        '************9012'
    """
    return _mask_identifier(card_number, keep_last)


def bank_account(account_number: str, keep_last: int = 4) -> str:
    """Mask a bank account number, keeping its last digits."""
    return _mask_identifier(account_number, keep_last)


def tax_id(identifier: str, keep_last: int = 4) -> str:
    """Mask a tax identifier (SSN, EIN, ...), keeping its last digits."""
    return _mask_identifier(identifier, keep_last)


# Unmatched field names fall back to card masking.
FIELD_ROUTER = FieldRouter(
    contains=(
        ("credit", CREDIT_CARD),
        ("card", CREDIT_CARD),
        ("bank", BANK_ACCOUNT),
        ("account", BANK_ACCOUNT),
        ("tax", TAX_ID),
        ("ein", TAX_ID),
    ),
    default=CREDIT_CARD,
    handlers={
        CREDIT_CARD: credit_card,
        BANK_ACCOUNT: bank_account,
        TAX_ID: tax_id,
    },
)


def detect_type(field_name: str) -> str:
    """Guess the identifier type from a field name."""
    return FIELD_ROUTER.route(field_name) or CREDIT_CARD


def mask_fields(
    data: Mapping[str, Any], explicit_types: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Mask a mapping of financial identifiers.

    Args:
        data: Field name to identifier
        explicit_types: Field name to ``"credit_card"``, ``"bank_account"``
            or ``"tax_id"``; overrides detection from the field name.

    Returns:
        A new mapping with masked identifiers. Empty values are passed
        through unchanged.
    """
    return FIELD_ROUTER.apply(data, overrides=explicit_types)


def is_masked(identifier: str) -> bool:
    """Check whether an identifier looks masked."""
    return _is_masked(identifier)
