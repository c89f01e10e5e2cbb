from __future__ import annotations

from exprcache.exceptions.base import ExprCacheError


class InvalidArgumentError(ExprCacheError, ValueError):
    """Exception for arguments that a constructor or operation cannot accept.

    Also a ``ValueError`` so generic argument handling keeps working.

    Attributes:
        message: Human-readable error message.
        argument: Name of the offending argument, if known.
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        self.argument = argument
        super().__init__(message)
