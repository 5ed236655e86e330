# =============================================================================
# glitchtip/config.py  -  Startup Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the server's configuration from the environment once, at startup,
#   and freezes it into a Settings value.
#
# ENVIRONMENT VARIABLES:
#   GLITCHTIP_HOST   GlitchTip server URL (default: http://localhost:18000)
#   GLITCHTIP_TOKEN  API authentication token (required)
#   LOG_LEVEL        Logging level for stderr output (default: INFO)
#
#   main.py calls load_dotenv() before load_settings(), so these can also
#   come from a .env file in the working directory.
#
# HOW SETTINGS FLOW:
#   load_settings() is called exactly once.  The resulting Settings object
#   is handed to GlitchTipClient and to the tool server factory.  No tool
#   ever reads os.environ on its own.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HOST = "http://localhost:18000"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Raised when required configuration is missing."""


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once and never mutated."""

    base_url: str                      # e.g. "https://glitchtip.example.com"
    token: str                         # Bearer token for the GlitchTip API
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"Settings(base_url={self.base_url!r}, token='***', "
            f"log_level={self.log_level!r})"
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to os.environ; tests pass
                 a plain dict.

    Returns:
        A frozen Settings instance.

    Raises:
        ConfigError: If GLITCHTIP_TOKEN is missing or empty.
    """
    if environ is None:
        environ = os.environ

    token = environ.get("GLITCHTIP_TOKEN")
    if not token:
        raise ConfigError("GLITCHTIP_TOKEN environment variable is required")

    return Settings(
        base_url=environ.get("GLITCHTIP_HOST") or DEFAULT_HOST,
        token=token,
        log_level=(environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
