"""GitHub issue-comment publisher.

Posts the size report as a comment on a pull request / issue and replaces
the previous report comment, so each PR carries a single, current report.

The id of the last posted comment is remembered in a hidden data block in
the issue body (see ``buildsize.publishing.hidden_data``).  Publishing is
a linear sequence:

1. GET the issue and read the hidden data block.
2. POST the new comment.
3. PATCH the issue body with the new comment id.
4. DELETE the previously recorded comment, if any.

Any failure raises ``PublishError``; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from buildsize.models.reports import SizeReport
from buildsize.publishing import PublishError
from buildsize.publishing.hidden_data import (
    DEFAULT_MARKER,
    embed_comment_id,
    extract_hidden_data,
)

logger = logging.getLogger(__name__)


class GitHubCommentPublisher:
    """Publishes size reports as GitHub issue comments.

    Parameters
    ----------
    client:
        An ``httpx.AsyncClient``.  Its ``base_url`` should point at the
        GitHub API (see ``build_client``).
    owner, repo:
        Repository coordinates.
    issue_number:
        The pull request / issue number to comment on.
    marker:
        Name of the hidden data block in the issue body.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        issue_number: int,
        *,
        marker: str = DEFAULT_MARKER,
    ) -> None:
        self._client = client
        self._owner = owner
        self._repo = repo
        self._issue_number = issue_number
        self._marker = marker

    @property
    def publisher_name(self) -> str:
        return "github"

    @staticmethod
    def build_client(
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an authenticated client for the GitHub REST API."""
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"token {token}"
        return httpx.AsyncClient(base_url=api_url, headers=headers, timeout=timeout, transport=transport)

    @property
    def _issue_url(self) -> str:
        return f"/repos/{self._owner}/{self._repo}/issues/{self._issue_number}"

    # ------------------------------------------------------------------
    # HTTP steps
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.info("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PublishError(f"{method} {url} failed: {exc}") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise PublishError(f"Invalid JSON from {response.request.url}: {exc}") from exc
        if not isinstance(data, dict):
            raise PublishError(f"Unexpected response from {response.request.url}: {data!r}")
        return data

    async def get_issue_body(self) -> str:
        response = await self._request("GET", self._issue_url)
        return self._json(response).get("body") or ""

    async def create_comment(self, body: str) -> int:
        response = await self._request("POST", f"{self._issue_url}/comments", json={"body": body})
        data = self._json(response)
        if "id" not in data:
            raise PublishError(f"Comment response has no id: {data!r}")
        return int(data["id"])

    async def update_issue_body(self, body: str) -> None:
        await self._request("PATCH", self._issue_url, json={"body": body})

    async def delete_comment(self, comment_id: int) -> None:
        await self._request(
            "DELETE", f"/repos/{self._owner}/{self._repo}/issues/comments/{comment_id}"
        )

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, report: SizeReport) -> int:
        """Post *report* and replace the previous report comment.

        Returns the id of the new comment.
        """
        issue_body = await self.get_issue_body()
        try:
            hidden_data = extract_hidden_data(issue_body, self._marker)
        except ValueError as exc:
            raise PublishError(f"Corrupt hidden data block in issue body: {exc}") from exc
        last_comment_id = hidden_data.get("sizeReport", {}).get("lastCommentId")

        comment_id = await self.create_comment(report.render())
        logger.info("Posted size report comment %s", comment_id)

        await self.update_issue_body(
            embed_comment_id(issue_body, hidden_data, comment_id, self._marker)
        )

        if last_comment_id is not None:
            await self.delete_comment(last_comment_id)
            logger.info("Deleted previous size report comment %s", last_comment_id)

        return comment_id
