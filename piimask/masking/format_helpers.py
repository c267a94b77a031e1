"""Format-aware masking helpers shared by the category maskers."""

import re
from typing import Callable

from piimask.core.exceptions import require_non_negative

MASK_CHAR = "*"

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


class FormatPreserver:
    """Helper class for length- and structure-preserving masking."""

    @staticmethod
    def mask_run(length: int) -> str:
        """Return a run of mask characters of the given length."""
        return MASK_CHAR * max(length, 0)

    @staticmethod
    def keep_last(chars: str, keep_last: int) -> str:
        """Mask all but the last ``keep_last`` characters.

        When there are no more than ``keep_last`` characters the whole value
        is masked, so a short identifier is never shown in full.
        """
        require_non_negative("keep_last", keep_last)

        length = len(chars)
        if length <= keep_last:
            return FormatPreserver.mask_run(length)

        return FormatPreserver.mask_run(length - keep_last) + chars[length - keep_last :]

    @staticmethod
    def keep_edges(text: str, show_first: int, show_last: int) -> str:
        """Keep ``show_first`` leading and ``show_last`` trailing characters."""
        require_non_negative("show_first", show_first)
        require_non_negative("show_last", show_last)

        length = len(text)
        if show_first + show_last >= length:
            return text

        middle = length - show_first - show_last
        return text[:show_first] + FormatPreserver.mask_run(middle) + text[length - show_last :]

    @staticmethod
    def keep_prefix(text: str, visible: int = 2, min_mask: int = 3) -> str:
        """Keep a short prefix and mask the rest with at least ``min_mask`` characters."""
        return text[:visible] + FormatPreserver.mask_run(max(len(text) - visible, min_mask))

    @staticmethod
    def mask_where(text: str, should_mask: Callable[[str], bool]) -> str:
        """Replace every character matching ``should_mask``; keep the rest."""
        return "".join(MASK_CHAR if should_mask(char) else char for char in text)


def digits_only(value: str) -> str:
    """Strip everything except ASCII digits."""
    return _NON_DIGITS.sub("", value)


def alnum_only(value: str) -> str:
    """Strip everything except ASCII letters and digits."""
    return _NON_ALNUM.sub("", value)


def is_ascii_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()
