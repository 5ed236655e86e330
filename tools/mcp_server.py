# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the seven MCP tools that expose GlitchTip.  Each tool is a thin
#   wrapper: it calls GlitchTipClient (glitchtip/client.py), renders the
#   result with glitchtip/formatting.py, and returns Markdown text.
#
# HOW IT WORKS (the flow):
#   1. The MCP host calls a tool by name (e.g., "list_issues")
#   2. FastMCP validates the arguments against the tool's signature.  Bad
#      arguments are rejected here and the tool body never runs.
#   3. The tool calls GlitchTip, renders the JSON, and returns a string
#   4. FastMCP wraps the string in a single text content block
#
# ERRORS:
#   Any GlitchTipError (non-2xx, connection failure, bad JSON) is turned
#   into a ToolError whose message is "Error: ...".  FastMCP replies with
#   that text and isError=true; the server keeps running.
#
# TOOL NAMING CONVENTIONS:
#   - list_* / get_*  → Read-only retrieval (safe to retry)
#   - resolve_issue   → The only tool that changes GlitchTip state
#
# RUNNING THIS SERVER:
#   Built by create_server(settings) and started from main.py over stdio.
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from glitchtip import formatting
from glitchtip.client import GlitchTipClient, GlitchTipError
from glitchtip.config import Settings
from glitchtip.events import fetch_latest_events

SERVER_NAME = "GlitchTip"
SERVER_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its host over STDOUT.
# Anything else written to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for the rendered response
#     - YELLOW for intermediate status/progress messages
#     - RED for GlitchTip errors
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (rendered text)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr.  Called once from main.py."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line of the rendered response in GREEN, then return it."""
    first_line = text.splitlines()[0] if text else ""
    logger.info(f"{_GREEN}  ← {tool_name} response: {first_line} ({len(text)} chars){_RESET}")
    return text


def _tool_error(tool_name: str, error: GlitchTipError) -> ToolError:
    """Log a GlitchTip failure in RED and build the ToolError to raise."""
    logger.warning(f"{_RED}  ✗ {tool_name} failed: {error}{_RESET}")
    return ToolError(f"Error: {error}")


# =============================================================================
# Server factory
# =============================================================================
# Settings are passed in, never read from the environment here, so tests
# can build a server pointed at an httpx.MockTransport.
# =============================================================================
def create_server(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build the GlitchTip FastMCP server with all seven tools registered.

    Args:
        settings: Startup configuration (GlitchTip URL and token).
        transport: Optional httpx transport for the GlitchTip client.

    Returns:
        A FastMCP instance ready for run().
    """
    client = GlitchTipClient(settings, transport=transport)
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    # =========================================================================
    # TOOL 1: list_organizations
    # =========================================================================
    # The usual entry point: every other tool needs an organization slug.
    # =========================================================================
    @mcp.tool()
    async def list_organizations() -> str:
        """List all accessible GlitchTip organizations.

        Returns one line per organization as "name (slug)" and the total.
        Use the slug as organization_slug in the other tools.
        """
        _log_request("list_organizations")
        try:
            orgs = await client.list_organizations()
        except GlitchTipError as e:
            raise _tool_error("list_organizations", e) from e

        _log_status(f"Found {len(orgs)} organizations")
        return _log_response("list_organizations", formatting.render_organizations(orgs))

    # =========================================================================
    # TOOL 2: list_projects
    # =========================================================================
    @mcp.tool()
    async def list_projects(
        organization_slug: Annotated[str, Field(description="Organization slug")],
    ) -> str:
        """List projects in an organization.

        Returns each project's name, slug and numeric ID, plus the total.
        """
        _log_request("list_projects", organization_slug=organization_slug)
        try:
            projects = await client.list_projects(organization_slug)
        except GlitchTipError as e:
            raise _tool_error("list_projects", e) from e

        _log_status(f"Found {len(projects)} projects")
        return _log_response(
            "list_projects", formatting.render_projects(organization_slug, projects)
        )

    # =========================================================================
    # TOOL 3: list_issues
    # =========================================================================
    @mcp.tool()
    async def list_issues(
        organization_slug: Annotated[str, Field(description="Organization slug")],
        project_slug: Annotated[str, Field(description="Project slug")],
        limit: Annotated[int, Field(description="Max issues to return")] = 10,
    ) -> str:
        """List issues/errors in a project.

        Each issue shows its title, ID, event count, and first/last seen
        timestamps.  Pass an ID to get_issue for details.
        """
        _log_request("list_issues",
                     organization_slug=organization_slug,
                     project_slug=project_slug, limit=limit)
        try:
            issues = await client.list_issues(organization_slug, project_slug, limit)
        except GlitchTipError as e:
            raise _tool_error("list_issues", e) from e

        _log_status(f"Found {len(issues)} issues")
        return _log_response("list_issues", formatting.render_issues(project_slug, issues))

    # =========================================================================
    # TOOL 4: get_issue
    # =========================================================================
    # Two sequential calls: the issue itself, then its 3 most recent events.
    # If either fails, the whole tool fails.
    # =========================================================================
    @mcp.tool()
    async def get_issue(
        issue_id: Annotated[str, Field(description="Issue ID")],
    ) -> str:
        """Get detailed information about a specific issue.

        Returns the issue's type, count, status and first/last seen times,
        followed by up to 3 recent events with message and context.
        """
        _log_request("get_issue", issue_id=issue_id)
        try:
            issue = await client.get_issue(issue_id)
            events = await client.list_issue_events(issue_id, limit=3)
        except GlitchTipError as e:
            raise _tool_error("get_issue", e) from e

        _log_status(f"Issue status={issue.status}, {len(events)} recent events")
        return _log_response("get_issue", formatting.render_issue_detail(issue, events))

    # =========================================================================
    # TOOL 5: get_latest_events
    # =========================================================================
    # Tries the organization-wide events endpoint first and falls back to the
    # organization's first project when that endpoint fails.
    # =========================================================================
    @mcp.tool()
    async def get_latest_events(
        organization_slug: Annotated[str, Field(description="Organization slug")],
        limit: Annotated[int, Field(description="Max events to return")] = 5,
    ) -> str:
        """Get the most recent error events across all projects.

        If the server has no organization-wide events endpoint, the events
        of the organization's first project are returned instead.
        """
        _log_request("get_latest_events",
                     organization_slug=organization_slug, limit=limit)
        try:
            latest = await fetch_latest_events(client, organization_slug, limit)
        except GlitchTipError as e:
            raise _tool_error("get_latest_events", e) from e

        if latest.source == "project" and latest.project_slug:
            _log_status(f"Used fallback project '{latest.project_slug}'")
        _log_status(f"Found {len(latest.events)} events")
        return _log_response("get_latest_events", formatting.render_latest_events(latest))

    # =========================================================================
    # TOOL 6: list_issue_events
    # =========================================================================
    @mcp.tool()
    async def list_issue_events(
        issue_id: Annotated[str, Field(description="Issue ID")],
        limit: Annotated[int, Field(description="Max events to return")] = 10,
    ) -> str:
        """List all events for a specific issue.

        Events are numbered in the order GlitchTip returns them (newest
        first) and include message and tags when present.
        """
        _log_request("list_issue_events", issue_id=issue_id, limit=limit)
        try:
            events = await client.list_issue_events(issue_id, limit)
        except GlitchTipError as e:
            raise _tool_error("list_issue_events", e) from e

        _log_status(f"Found {len(events)} events")
        return _log_response(
            "list_issue_events", formatting.render_issue_events(issue_id, events)
        )

    # =========================================================================
    # TOOL 7: resolve_issue
    # =========================================================================
    # The only write operation.  Re-resolving an already resolved issue is
    # harmless on GlitchTip's side, so the tool does not check status first.
    # =========================================================================
    @mcp.tool()
    async def resolve_issue(
        issue_id: Annotated[str, Field(description="Issue ID")],
    ) -> str:
        """Mark an issue as resolved."""
        _log_request("resolve_issue", issue_id=issue_id)
        try:
            await client.resolve_issue(issue_id)
        except GlitchTipError as e:
            raise _tool_error("resolve_issue", e) from e

        return _log_response("resolve_issue", formatting.render_resolved(issue_id))

    logger.info(f"Registered GlitchTip tools against {client.api_root}")
    return mcp
