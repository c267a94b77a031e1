"""Core building blocks shared by every masking category."""

from .config import LoggingConfig, MaskingConfig, get_config, load_config, set_config
from .detection import PLACEHOLDER_EMAIL, any_masked, is_masked
from .exceptions import ConfigurationError, MaskingParameterError, PiiMaskError

__all__ = [
    # Detection
    "PLACEHOLDER_EMAIL",
    "is_masked",
    "any_masked",
    # Configuration
    "LoggingConfig",
    "MaskingConfig",
    "get_config",
    "set_config",
    "load_config",
    # Exceptions
    "PiiMaskError",
    "MaskingParameterError",
    "ConfigurationError",
]
