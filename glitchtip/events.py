# =============================================================================
# glitchtip/events.py  -  "Latest events" lookup with project fallback
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Finds the most recent events for an organization.
#
#   Step 1: GET /organizations/{org}/events/
#           Sentry serves this; GlitchTip may not.  If it answers 2xx, its
#           result is used as-is, even when the list is empty.
#   Step 2: Only if step 1 FAILED (non-2xx or no response):
#           GET /organizations/{org}/projects/ and then the first project's
#           /projects/{org}/{slug}/events/.  Errors here propagate normally.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Optional

from glitchtip.client import GlitchTipClient
from glitchtip.models import Event

logger = logging.getLogger(__name__)


@dataclass
class LatestEvents:
    """Outcome of fetch_latest_events().

    source is "organization" or "project".  no_projects is set when the
    fallback ran and the organization has no projects at all.
    """

    events: list[Event] = field(default_factory=list)
    source: str = "organization"
    project_slug: Optional[str] = None
    no_projects: bool = False


async def fetch_latest_events(client: GlitchTipClient, organization_slug: str, limit: int) -> LatestEvents:
    primary = await client.organization_events(organization_slug, limit)
    if primary.ok:
        return LatestEvents(events=primary.data, source="organization")

    logger.info(
        "Organization events unavailable for %s (%s), falling back to first project",
        organization_slug, primary.error,
    )

    projects = await client.list_projects(organization_slug)
    if not projects:
        return LatestEvents(source="project", no_projects=True)

    project_slug = projects[0].slug
    events = await client.list_project_events(organization_slug, project_slug, limit)
    return LatestEvents(events=events, source="project", project_slug=project_slug)
