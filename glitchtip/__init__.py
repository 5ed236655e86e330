# =============================================================================
# glitchtip/__init__.py
# =============================================================================
# This package contains everything that talks to GlitchTip and turns its
# JSON into text.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP wiring lives in
#   tools/; this package only knows about HTTP, GlitchTip resources and
#   Markdown rendering, so each piece can be tested on its own.
# =============================================================================

from glitchtip.client import (
    ApiResult,
    GlitchTipAPIError,
    GlitchTipClient,
    GlitchTipConnectionError,
    GlitchTipError,
)
from glitchtip.config import ConfigError, Settings, load_settings

__all__ = [
    "ApiResult",
    "ConfigError",
    "GlitchTipAPIError",
    "GlitchTipClient",
    "GlitchTipConnectionError",
    "GlitchTipError",
    "Settings",
    "load_settings",
]
