"""exprcache exception hierarchy.

All exceptions can be imported from this package:
    from exprcache.exceptions import ConfigError, InvalidArgumentError
"""

from __future__ import annotations

# Base exception
from exprcache.exceptions.base import ExprCacheError

# Configuration exceptions
from exprcache.exceptions.config import ConfigError

# Argument validation exceptions
from exprcache.exceptions.validation import InvalidArgumentError

__all__ = [
    "ExprCacheError",
    "ConfigError",
    "InvalidArgumentError",
]
