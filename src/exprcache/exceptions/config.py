from __future__ import annotations

from typing import Any

from exprcache.exceptions.base import ExprCacheError


class ConfigError(ExprCacheError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when a YAML file cannot be parsed or when the merged settings fail
    Pydantic validation.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field path that caused the error
            (e.g., "parser.max_expression_length").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Invalid configuration value",
            field="parser.max_expression_length",
            value=0,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
