"""piimask: deterministic, format-preserving masking of personal data.

piimask masks email addresses, names, phone numbers, postal addresses,
dates, IP addresses, financial identifiers, URLs and user-agent strings
while keeping enough structure (lengths, separators, domains, network
prefixes) for the masked values to stay useful in logs, exports and
support tooling. A shared heuristic, ``is_masked``, tells whether a value
already carries the marks of masking.
"""

__version__ = "0.1.0"

from .core import (
    PLACEHOLDER_EMAIL,
    ConfigurationError,
    MaskingConfig,
    MaskingParameterError,
    PiiMaskError,
    any_masked,
    get_config,
    is_masked,
    load_config,
    set_config,
)
from .engine import MaskingEngine
from .masking import FieldRouter, FormatPreserver, email, financial, network, personal, web
from .records import CommentAnonymizer, InMemoryRecordStore, RecordStore, UserAnonymizer

__all__ = [
    "__version__",
    # Detection
    "PLACEHOLDER_EMAIL",
    "is_masked",
    "any_masked",
    # Category maskers
    "email",
    "personal",
    "network",
    "financial",
    "web",
    "FieldRouter",
    "FormatPreserver",
    # Engine and configuration
    "MaskingEngine",
    "MaskingConfig",
    "get_config",
    "set_config",
    "load_config",
    # Records
    "RecordStore",
    "InMemoryRecordStore",
    "UserAnonymizer",
    "CommentAnonymizer",
    # Exceptions
    "PiiMaskError",
    "MaskingParameterError",
    "ConfigurationError",
]
