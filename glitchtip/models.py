# =============================================================================
# glitchtip/models.py  -  GlitchTip Resources (the "nouns" of the system)
# =============================================================================
#
# These dataclasses are the slice of each GlitchTip API object that the
# tools actually render.  Nothing outlives the request that fetched it.
#
# READING THE API DEFENSIVELY:
#   GlitchTip's JSON is not validated against a contract.  Every from_api()
#   constructor reads fields with .get(), so a missing key becomes None (or
#   an empty list for tags) rather than a KeyError halfway through a render.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


def as_list(data: Any) -> list[dict]:
    """Return the dict items of a list payload; anything else is empty."""
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


# -----------------------------------------------------------------------------
# Organization - top-level tenant
# -----------------------------------------------------------------------------
@dataclass
class Organization:
    name: Optional[str]
    slug: Optional[str]

    @classmethod
    def from_api(cls, data: dict) -> "Organization":
        return cls(name=data.get("name"), slug=data.get("slug"))


# -----------------------------------------------------------------------------
# Project - a monitored application inside an organization
# -----------------------------------------------------------------------------
@dataclass
class Project:
    id: Any                            # GlitchTip sends ints; Sentry sends strings
    name: Optional[str]
    slug: Optional[str]

    @classmethod
    def from_api(cls, data: dict) -> "Project":
        return cls(id=data.get("id"), name=data.get("name"), slug=data.get("slug"))


# -----------------------------------------------------------------------------
# Issue - a deduplicated group of events
# -----------------------------------------------------------------------------
@dataclass
class Issue:
    id: Any
    title: Optional[str]
    type: Optional[str]                # "error", "default", "csp", ...
    count: Any                         # Event count (string in Sentry's API)
    first_seen: Optional[str]          # ISO timestamp
    last_seen: Optional[str]
    status: Optional[str]              # "unresolved", "resolved", "ignored"

    @classmethod
    def from_api(cls, data: dict) -> "Issue":
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            type=data.get("type"),
            count=data.get("count"),
            first_seen=data.get("firstSeen"),
            last_seen=data.get("lastSeen"),
            status=data.get("status"),
        )


@dataclass
class Tag:
    key: Any
    value: Any


# -----------------------------------------------------------------------------
# Event - one concrete occurrence of an issue
# -----------------------------------------------------------------------------
# message, context and tags are optional in the API.  They default to None
# or an empty list so the renderers can test them for truthiness and skip
# the line.
# -----------------------------------------------------------------------------
@dataclass
class Event:
    event_id: Optional[str]
    date_created: Optional[str]
    title: Optional[str] = None
    message: Optional[str] = None
    context: Any = None                # Usually a dict; rendered as JSON when truthy
    tags: list[Tag] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "Event":
        return cls(
            event_id=data.get("eventID"),
            date_created=data.get("dateCreated"),
            title=data.get("title"),
            message=data.get("message"),
            context=data.get("context"),
            tags=[
                Tag(key=tag.get("key"), value=tag.get("value"))
                for tag in as_list(data.get("tags"))
            ],
        )
