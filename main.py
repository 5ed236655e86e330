# =============================================================================
# main.py  -  Entry Point for the GlitchTip MCP Server
# =============================================================================
#
# HOW TO RUN:
#   GLITCHTIP_TOKEN=... uv run python main.py
#   (or, once installed: glitchtip-mcp)
#
# WHAT HAPPENS:
#   1. Loads a .env file if one exists (GLITCHTIP_HOST, GLITCHTIP_TOKEN, ...)
#   2. Builds Settings; exits with status 1 if GLITCHTIP_TOKEN is missing
#   3. Configures logging to stderr
#   4. Builds the FastMCP server (tools/mcp_server.py)
#   5. Serves MCP over stdin/stdout until the host closes the pipe
#
# MCP HOST CONFIG (e.g. claude_desktop_config.json):
#   {
#     "mcpServers": {
#       "glitchtip": {
#         "command": "glitchtip-mcp",
#         "env": {
#           "GLITCHTIP_HOST": "http://localhost:18000",
#           "GLITCHTIP_TOKEN": "<api token>"
#         }
#       }
#     }
#   }
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from glitchtip.config import ConfigError, load_settings
from tools.mcp_server import configure_logging, create_server

logger = logging.getLogger(__name__)


def main() -> None:
    """Load configuration and serve the GlitchTip tools over stdio."""

    # =========================================================================
    # Step 1: Configuration
    # =========================================================================
    # load_dotenv() never overrides variables already set in the process
    # environment, so values from the MCP host config win over .env.
    # =========================================================================
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)

    # =========================================================================
    # Step 2: Build and run the server
    # =========================================================================
    server = create_server(settings)
    logger.info("GlitchTip MCP server running")
    server.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
