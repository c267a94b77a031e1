"""Masking for names, phone numbers, postal addresses, dates and free text."""

import re
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from dateutil import parser as date_parser

from .format_helpers import FormatPreserver, alnum_only, digits_only
from .routing import FieldRouter, build_table

DEFAULT_PRESERVE_CHARS: FrozenSet[str] = frozenset(" .@-")

_DIGIT_RUN = re.compile(r"\d+")


def _mask_word(word: str) -> str:
    if len(word) <= 2:
        return FormatPreserver.mask_run(len(word))
    return FormatPreserver.keep_edges(word, 1, 1)


def mask_name(name: str) -> str:
    """Mask each word of a name, keeping its first and last character.

    Words of one or two characters are masked completely. Lengths are
    counted in code points, so accented and non-Latin names keep their
    shape.

    Examples:
        >>> mask_name("John Smith")
        'J**n S***h'
        >>> mask_name("Jo")
        '**'
    """
    if not name:
        return ""

    return " ".join(_mask_word(word) for word in name.strip().split(" "))


def mask_phone(phone: str, keep_last: int = 4) -> str:
    """Keep only the digits of a phone number and mask all but the last few.

    Examples:
        >>> mask_phone("555-123-4567")
        '******4567'
    """
    if not phone:
        return ""

    return FormatPreserver.keep_last(digits_only(phone), keep_last)


def _mask_address_line(line: str) -> str:
    line = _DIGIT_RUN.sub(lambda match: FormatPreserver.mask_run(len(match.group())), line)
    return FormatPreserver.mask_where(line, lambda char: char.isalpha() or char.isdigit())


def mask_address(address: str) -> str:
    """Mask house numbers and letters line by line, keeping layout.

    Digit runs in any script keep their width and every letter becomes
    ``*``; spaces, punctuation and line breaks are left in place.
    """
    if not address:
        return ""

    return "\n".join(_mask_address_line(line) for line in address.split("\n"))


def mask_date(date: str) -> Optional[str]:
    """Reduce a date to its year and month.

    Returns:
        ``YYYY-MM-**`` for parsable input, or None when the input is empty or
        cannot be parsed. None means the value could not be anonymized.
    """
    if not date:
        return None

    try:
        parsed = date_parser.parse(date)
    except (ValueError, OverflowError):
        return None

    return f"{parsed.year:04d}-{parsed.month:02d}-**"


def mask_zipcode(zipcode: str, keep_last: int = 3) -> str:
    """Keep letters and digits of a postal code and mask all but the last few."""
    if not zipcode:
        return ""

    return FormatPreserver.keep_last(alnum_only(zipcode), keep_last)


def mask_text(text: str, preserve_chars: Iterable[str] = DEFAULT_PRESERVE_CHARS) -> str:
    """Mask every character of ``text`` except those in ``preserve_chars``."""
    if not text:
        return ""

    preserved = frozenset(preserve_chars)
    return FormatPreserver.mask_where(text, lambda char: char not in preserved)


FIELD_ROUTER = FieldRouter(
    exact=build_table(
        {
            "name": ("name", "first_name", "last_name", "display_name"),
            "phone": ("phone", "telephone", "mobile"),
            "address": ("address", "billing_address", "shipping_address"),
            "zipcode": ("zipcode", "postal_code", "zip"),
            "date": ("birth_date", "birthday", "date_of_birth"),
        }
    ),
    default="text",
    handlers={
        "name": mask_name,
        "phone": mask_phone,
        "address": mask_address,
        "zipcode": mask_zipcode,
        "date": mask_date,
        "text": mask_text,
    },
)


def mask_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Mask a mapping of personal fields, choosing a masker per field name.

    Field names are matched case-insensitively; unknown names are masked as
    free text. Empty values are passed through unchanged.
    """
    return FIELD_ROUTER.apply(data)
