"""piimask exception hierarchy.

Bad user-supplied data (a malformed email, an unparsable date, an invalid IP)
never raises: maskers return ``""`` or ``None`` for it. The exceptions here
cover programmer errors such as negative masking parameters or unknown
categories, and configuration loading failures.
"""

from typing import Any, Dict, Optional


class PiiMaskError(Exception):
    """Base exception for all piimask errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context and metadata
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class MaskingParameterError(PiiMaskError, ValueError):
    """Raised when a masking call receives an invalid parameter.

    Examples are a negative ``keep_last`` or an unknown masking category.
    Subclasses ``ValueError`` so callers can treat it like any other bad
    argument.
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if parameter:
            self.add_context("parameter", parameter)
        if actual_value is not None:
            self.add_context("actual_value", str(actual_value))


class ConfigurationError(PiiMaskError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        if config_key:
            self.add_context("config_key", config_key)
        if config_file:
            self.add_context("config_file", config_file)


def require_non_negative(name: str, value: int) -> None:
    """Raise ``MaskingParameterError`` unless ``value`` is a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MaskingParameterError(
            f"{name} must be a non-negative integer, got {value!r}",
            parameter=name,
            actual_value=value,
        )
