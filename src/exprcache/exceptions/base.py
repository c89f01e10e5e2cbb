from __future__ import annotations


class ExprCacheError(Exception):
    """Base exception class for all exprcache errors.

    Every exception raised deliberately by this package derives from this
    class, so callers can catch the whole family at a boundary while system
    exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            evaluator.resolve(cache, element_key, "#root.name")
        except ExprCacheError as e:
            logger.error("expression_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the ExprCacheError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
