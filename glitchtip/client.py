# =============================================================================
# glitchtip/client.py  -  GlitchTip REST API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps GlitchTip's versioned REST API ({base_url}/api/0) behind a small
#   async client.  Every tool goes through GlitchTipClient.call(), which is
#   the ONE place where HTTP status codes are inspected.
#
# THE TWO LAYERS:
#   request()  → never raises for remote problems.  It returns an ApiResult
#                that holds either the parsed JSON or the error.
#   call()     → request() + unwrap(): returns the JSON or raises the error.
#
#   Most tools want call().  get_latest_events wants request(), because it
#   branches on whether the organization-level endpoint exists
#   (see glitchtip/events.py).
#
# HTTP:
#   A fresh httpx.AsyncClient is opened per request with httpx's default
#   timeout.  No retries.  Tests pass an httpx.MockTransport as
#   `transport` so no real network is touched.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from glitchtip.config import Settings
from glitchtip.models import Event, Issue, Organization, Project, as_list

logger = logging.getLogger(__name__)

API_PREFIX = "/api/0"


# =============================================================================
# Errors
# =============================================================================
class GlitchTipError(Exception):
    """Base class for every failure talking to GlitchTip."""


class GlitchTipAPIError(GlitchTipError):
    """GlitchTip answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}: {body}")


class GlitchTipConnectionError(GlitchTipError):
    """The request never got an HTTP response (DNS, refused, timeout...)."""


# =============================================================================
# ApiResult - either data or an error, never both
# =============================================================================
@dataclass
class ApiResult:
    data: Any = None
    error: Optional[GlitchTipError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the parsed body, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.data


class GlitchTipClient:
    """Authenticated access to one GlitchTip server.

    Args:
        settings: Startup configuration (base URL and token).
        transport: Optional httpx transport, forwarded to every
                   httpx.AsyncClient this client opens.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    def api_root(self) -> str:
        return f"{self.settings.base_url}{API_PREFIX}"

    def _headers(self, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.settings.token}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    # =========================================================================
    # Low-level request helpers
    # =========================================================================
    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> ApiResult:
        """Send one request to {api_root}{endpoint}.

        Args:
            endpoint: Path relative to the API root, e.g. "/issues/42/".
            method: HTTP method.
            json: Optional body, serialized as JSON.
            headers: Extra headers; these override the defaults.

        Returns:
            ApiResult with the parsed JSON body on 2xx, or with a
            GlitchTipError describing what went wrong.
        """
        url = f"{self.api_root}{endpoint}"
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method, url, json=json, headers=self._headers(headers)
                )
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ApiResult(error=GlitchTipConnectionError(
                f"Request to {url} failed: {type(e).__name__}: {e}"
            ))

        if not response.is_success:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            return ApiResult(error=GlitchTipAPIError(response.status_code, response.text))

        if not response.content:
            return ApiResult(data=None)

        try:
            return ApiResult(data=response.json())
        except ValueError as e:
            return ApiResult(error=GlitchTipError(f"Invalid JSON from {url}: {e}"))

    async def call(
        self,
        endpoint: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """Like request(), but returns the parsed body or raises GlitchTipError."""
        result = await self.request(endpoint, method=method, json=json, headers=headers)
        return result.unwrap()

    # =========================================================================
    # Resource helpers - one per endpoint the tools consume
    # =========================================================================
    async def list_organizations(self) -> list[Organization]:
        data = await self.call("/organizations/")
        return [Organization.from_api(item) for item in as_list(data)]

    async def list_projects(self, organization_slug: str) -> list[Project]:
        data = await self.call(f"/organizations/{organization_slug}/projects/")
        return [Project.from_api(item) for item in as_list(data)]

    async def list_issues(self, organization_slug: str, project_slug: str, limit: int) -> list[Issue]:
        data = await self.call(
            f"/projects/{organization_slug}/{project_slug}/issues/?limit={limit}"
        )
        return [Issue.from_api(item) for item in as_list(data)]

    async def get_issue(self, issue_id: str) -> Issue:
        data = await self.call(f"/issues/{issue_id}/")
        return Issue.from_api(data if isinstance(data, dict) else {})

    async def list_issue_events(self, issue_id: str, limit: int) -> list[Event]:
        data = await self.call(f"/issues/{issue_id}/events/?limit={limit}")
        return [Event.from_api(item) for item in as_list(data)]

    async def list_project_events(self, organization_slug: str, project_slug: str, limit: int) -> list[Event]:
        data = await self.call(
            f"/projects/{organization_slug}/{project_slug}/events/?limit={limit}"
        )
        return [Event.from_api(item) for item in as_list(data)]

    async def organization_events(self, organization_slug: str, limit: int) -> ApiResult:
        """Org-wide events.  Not every GlitchTip version serves this endpoint,
        so the raw ApiResult is returned for the caller to branch on."""
        result = await self.request(f"/organizations/{organization_slug}/events/?limit={limit}")
        if result.ok:
            result.data = [Event.from_api(item) for item in as_list(result.data)]
        return result

    async def resolve_issue(self, issue_id: str) -> Any:
        return await self.call(
            f"/issues/{issue_id}/", method="PUT", json={"status": "resolved"}
        )
