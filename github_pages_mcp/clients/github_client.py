"""
GitHub REST API client
Provides the async calls used by the Pages operations
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .. import __version__

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubAPIError(Exception):
    """Upstream call failed (transport error or non-2xx status)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class GitHubClient:
    """Async client for the GitHub Pages and Git database endpoints."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token; requests are unauthenticated without it
            base_url: REST API root
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": f"github-pages-mcp-server/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Send one request and decode the JSON body.

        Returns:
            Decoded JSON body, or None for empty (204) responses

        Raises:
            GitHubAPIError: On transport failure or non-2xx status
        """
        logger.debug(f"{method} {path}")
        try:
            response = await self.client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise GitHubAPIError(f"Request to GitHub failed: {e}") from e

        if response.is_error:
            body = _decode_body(response)
            message = None
            if isinstance(body, dict):
                message = body.get("message")
            if not message:
                message = f"GitHub API returned HTTP {response.status_code}"
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise GitHubAPIError(message, response.status_code, body)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Pages site
    # ------------------------------------------------------------------

    async def create_pages_site(
        self,
        owner: str,
        repo: str,
        source: Dict[str, str],
        build_type: str
    ) -> Dict[str, Any]:
        """Create a Pages site (POST /repos/{owner}/{repo}/pages)."""
        return await self._request(
            "POST",
            f"/repos/{owner}/{repo}/pages",
            json={"source": source, "build_type": build_type}
        )

    async def get_pages(self, owner: str, repo: str) -> Dict[str, Any]:
        """Get Pages settings; raises GitHubAPIError(404) when not enabled."""
        return await self._request("GET", f"/repos/{owner}/{repo}/pages")

    async def update_pages(
        self,
        owner: str,
        repo: str,
        changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Update Pages settings (PUT /repos/{owner}/{repo}/pages).

        Args:
            changes: Only the keys to change; ``cname: None`` clears the domain

        Returns:
            Response body, or None when GitHub answers 204
        """
        return await self._request("PUT", f"/repos/{owner}/{repo}/pages", json=changes)

    async def delete_pages_site(self, owner: str, repo: str) -> None:
        """Delete the Pages site."""
        await self._request("DELETE", f"/repos/{owner}/{repo}/pages")

    # ------------------------------------------------------------------
    # Git database
    # ------------------------------------------------------------------

    async def get_ref(self, owner: str, repo: str, ref: str) -> Dict[str, Any]:
        """Read a reference, e.g. ``heads/main``."""
        return await self._request("GET", f"/repos/{owner}/{repo}/git/ref/{ref}")

    async def get_commit(self, owner: str, repo: str, commit_sha: str) -> Dict[str, Any]:
        return await self._request("GET", f"/repos/{owner}/{repo}/git/commits/{commit_sha}")

    async def create_blob(
        self,
        owner: str,
        repo: str,
        content: str,
        encoding: str = "utf-8"
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/blobs",
            json={"content": content, "encoding": encoding}
        )

    async def create_tree(
        self,
        owner: str,
        repo: str,
        tree: List[Dict[str, str]],
        base_tree: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a tree; entries overlay ``base_tree`` when given."""
        payload: Dict[str, Any] = {"tree": tree}
        if base_tree:
            payload["base_tree"] = base_tree
        return await self._request("POST", f"/repos/{owner}/{repo}/git/trees", json=payload)

    async def create_commit(
        self,
        owner: str,
        repo: str,
        message: str,
        tree: str,
        parents: List[str]
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/commits",
            json={"message": message, "tree": tree, "parents": parents}
        )

    async def update_ref(
        self,
        owner: str,
        repo: str,
        ref: str,
        sha: str,
        force: bool = False
    ) -> Dict[str, Any]:
        """Move a reference; non-fast-forward moves are rejected unless forced."""
        return await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/git/refs/{ref}",
            json={"sha": sha, "force": force}
        )


def _decode_body(response: httpx.Response) -> Any:
    """Return the JSON body of an error response, falling back to text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
