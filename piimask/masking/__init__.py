"""Category maskers: email, personal data, network, financial and web."""

from . import email, financial, network, personal, web
from .format_helpers import FormatPreserver
from .routing import FieldRouter

__all__ = [
    "email",
    "financial",
    "network",
    "personal",
    "web",
    "FieldRouter",
    "FormatPreserver",
]
