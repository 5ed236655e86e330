# =============================================================================
# glitchtip/formatting.py  -  Markdown Rendering
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns GlitchTip models into the Markdown text each tool returns.  One
#   render_* function per tool; all of them are pure (no I/O), so the exact
#   output can be pinned down in tests without an MCP server.
#
# RENDERING RULES:
#   - Lists that come back empty get their own sentence ("No issues found.")
#     instead of an empty heading.
#   - Optional event fields (message, context, tags) only produce a line
#     when they have a value.
#   - A missing scalar field prints as "N/A", never as "None".
# =============================================================================

import json
from typing import Any

from glitchtip.events import LatestEvents
from glitchtip.models import Event, Issue, Organization, Project

MISSING = "N/A"

NO_ISSUES = "No issues found."
NO_EVENTS = "No events found."
NO_RECENT_EVENTS = "No recent events."
NO_PROJECTS = "No projects found."
NO_ORGANIZATIONS = "No organizations found."


def _show(value: Any) -> str:
    """Display a scalar field, substituting MISSING for None."""
    return MISSING if value is None else str(value)


def render_organizations(orgs: list[Organization]) -> str:
    if not orgs:
        return NO_ORGANIZATIONS

    output = "\n".join(f"- {_show(o.name)} ({_show(o.slug)})" for o in orgs)
    return f"# Organizations\n\n{output}\n\nTotal: {len(orgs)}"


def render_projects(organization_slug: str, projects: list[Project]) -> str:
    if not projects:
        return NO_PROJECTS

    output = "\n".join(
        f"- **{_show(p.name)}** ({_show(p.slug)}) - ID: {_show(p.id)}" for p in projects
    )
    return f"# Projects in {organization_slug}\n\n{output}\n\nTotal: {len(projects)}"


def render_issues(project_slug: str, issues: list[Issue]) -> str:
    if not issues:
        return NO_ISSUES

    output = "\n".join(
        f"### {_show(i.title)}\n"
        f"- ID: {_show(i.id)}\n"
        f"- Count: {_show(i.count)}\n"
        f"- First seen: {_show(i.first_seen)}\n"
        f"- Last seen: {_show(i.last_seen)}\n"
        for i in issues
    )
    return f"# Issues in {project_slug}\n\n{output}"


def render_issue_detail(issue: Issue, events: list[Event]) -> str:
    """Issue summary followed by a "Recent Events" section, if any."""
    lines = [
        f"# Issue: {_show(issue.title)}",
        "",
        f"- **ID:** {_show(issue.id)}",
        f"- **Type:** {_show(issue.type)}",
        f"- **Count:** {_show(issue.count)}",
        f"- **First seen:** {_show(issue.first_seen)}",
        f"- **Last seen:** {_show(issue.last_seen)}",
        f"- **Status:** {_show(issue.status)}",
        "",
    ]
    output = "\n".join(lines) + "\n"

    if events:
        output += "## Recent Events\n\n"
        for event in events:
            output += f"### Event {_show(event.event_id)}\n"
            output += f"- Time: {_show(event.date_created)}\n"
            if event.message:
                output += f"- Message: {event.message}\n"
            if event.context:
                context = json.dumps(event.context, indent=2, ensure_ascii=False, default=str)
                output += f"- Context: ```json\n{context}\n```\n"
            output += "\n"

    return output


def render_latest_events(latest: LatestEvents) -> str:
    if latest.no_projects:
        return NO_PROJECTS
    if not latest.events:
        return NO_RECENT_EVENTS

    output = "\n\n".join(
        f"- **{e.title or e.message or 'Unknown'}**\n"
        f"  Time: {_show(e.date_created)}\n"
        f"  ID: {_show(e.event_id)}"
        for e in latest.events
    )
    return f"# Latest Events\n\n{output}"


def render_issue_events(issue_id: str, events: list[Event]) -> str:
    if not events:
        return NO_EVENTS

    blocks = []
    for index, event in enumerate(events, start=1):
        block = (
            f"### Event {index}\n"
            f"- ID: {_show(event.event_id)}\n"
            f"- Time: {_show(event.date_created)}\n"
        )
        if event.message:
            block += f"- Message: {event.message}\n"
        if event.tags:
            tags = ", ".join(f"{_show(t.key)}={_show(t.value)}" for t in event.tags)
            block += f"- Tags: {tags}\n"
        blocks.append(block)

    return f"# Events for Issue {issue_id}\n\n" + "\n".join(blocks)


def render_resolved(issue_id: str) -> str:
    return f"✅ Issue {issue_id} marked as resolved."
