# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP protocol and the
#   GlitchTip client.  mcp_server.py:
#     1. Declares each tool's typed parameters (FastMCP validates them)
#     2. Calls GlitchTipClient from glitchtip/
#     3. Renders the result as Markdown via glitchtip/formatting.py
#     4. Converts GlitchTip failures into MCP error replies
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT inspect HTTP status codes (GlitchTipClient does)
#   - They do NOT build Markdown by hand (glitchtip/formatting.py does)
#   - They do NOT read the environment (main.py passes Settings in)
# =============================================================================
