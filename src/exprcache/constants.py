"""Constants shared across exprcache.

Single source of truth for defaults that appear both in configuration models
and in the components that consume them.
"""

from __future__ import annotations

# =============================================================================
# Parsing
# =============================================================================

#: Longest expression text the default parser accepts
DEFAULT_MAX_EXPRESSION_LENGTH: int = 10_000

#: Opening delimiter of a template-wrapped expression (``#{ ... }``)
TEMPLATE_PREFIX: str = "#{"

#: Closing delimiter of a template-wrapped expression
TEMPLATE_SUFFIX: str = "}"

#: Longest excerpt of expression text quoted in an error message
ERROR_EXCERPT_LENGTH: int = 80

# =============================================================================
# Keys
# =============================================================================

#: Weight applied to the secondary component when combining key hashes
KEY_HASH_MULTIPLIER: int = 29

# =============================================================================
# Configuration
# =============================================================================

#: Prefix for environment variables read by the settings model
ENV_PREFIX: str = "EXPRCACHE_"

#: Project-level configuration file name, looked up in the working directory
PROJECT_CONFIG_FILENAME: str = "exprcache.yaml"
