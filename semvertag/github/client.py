"""
GitHub REST API Client.

Minimal client for the git references API: list tag refs, dereference
annotated tags, create a tag ref.

API Endpoints:
- GET  /repos/{owner}/{repo}/git/matching-refs/tags - List tag refs
- GET  /repos/{owner}/{repo}/git/tags/{sha}         - Read annotated tag
- POST /repos/{owner}/{repo}/git/refs               - Create a ref

Failures are raised as GitHubAPIError with GitHub's message unchanged.
Requests are never retried: a create that succeeded but timed out on the
way back would otherwise be sent twice.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from semvertag import __version__
from semvertag.core.exceptions import GitHubAPIError
from semvertag.core.logging import get_logger
from semvertag.core.release.state import TAG_REF_PREFIX, TagRef

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# JPL Rule #2: Fixed upper bounds
MAX_PAGES = 100
PAGE_SIZE = 100


def _error_message(response: requests.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason or "request failed"


class GitHubClient:
    """
    HTTP client for the GitHub git references API.

    Example:
        with GitHubClient(token, "octo/widgets") as client:
            refs = client.list_tag_refs()
            client.create_tag_ref("v1.3.0", "6dcb09b5b57875f334f61aebed695e2e4193db5e")
    """

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        timeout_sec: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Access token sent as a bearer credential.
            repository: Repository in owner/name form.
            api_url: API root (GitHub Enterprise uses https://host/api/v3).
            timeout_sec: Per-request timeout in seconds.
            session: Optional preconfigured session.
        """
        self.owner, self.name = repository.split("/", 1)
        self.api_url = api_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"auto-semver-tag/{__version__}",
            }
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    @property
    def repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.name}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request, turning transport errors into GitHubAPIError."""
        logger.debug("GitHub API request", method=method, url=url)
        try:
            return self._session.request(
                method, url, params=params, json=json, timeout=self.timeout_sec
            )
        except requests.RequestException as e:
            raise GitHubAPIError(f"{method} {url} failed: {e}") from e

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.ok:
            return
        raise GitHubAPIError(
            f"{response.status_code} {_error_message(response)}",
            status_code=response.status_code,
        )

    def list_tag_refs(self) -> List[TagRef]:
        """
        List all tag references of the repository.

        Follows Link pagination up to MAX_PAGES pages; a listing that is
        longer fails rather than returning a partial result.

        Returns:
            Tag refs in listing order; empty if the repository has none
            (GitHub answers 404 for an empty ref namespace).

        Raises:
            GitHubAPIError: On any other failure, or if the listing has
                more than MAX_PAGES pages.
        """
        url: Optional[str] = f"{self.repo_url}/git/matching-refs/tags"
        params: Optional[Dict[str, Any]] = {"per_page": PAGE_SIZE}
        refs: List[TagRef] = []

        for _ in range(MAX_PAGES):
            if url is None:
                break
            response = self._request("GET", url, params=params)
            if response.status_code == 404:
                return refs
            self._raise_for_status(response)

            for item in response.json():
                obj = item.get("object") or {}
                refs.append(
                    TagRef.from_ref(
                        item.get("ref", ""),
                        sha=obj.get("sha", ""),
                        object_type=obj.get("type", "commit"),
                    )
                )

            url = response.links.get("next", {}).get("url")
            params = None  # the next link already carries the query

        if url is not None:
            raise GitHubAPIError(
                f"tag listing exceeded {MAX_PAGES} pages of {PAGE_SIZE} refs"
            )

        logger.debug("Listed tag refs", count=len(refs))
        return refs

    def resolve_tag_commit(self, ref: TagRef) -> str:
        """
        Return the commit SHA a tag points to.

        Lightweight tags point at the commit directly; annotated tags
        point at a tag object which is read to find the commit.
        """
        if not ref.is_annotated:
            return ref.sha

        response = self._request("GET", f"{self.repo_url}/git/tags/{ref.sha}")
        self._raise_for_status(response)
        return response.json()["object"]["sha"]

    def create_tag_ref(self, tag_name: str, sha: str) -> Dict[str, Any]:
        """
        Create refs/tags/<tag_name> pointing at the given commit.

        Args:
            tag_name: Tag name, e.g. "v1.3.0".
            sha: Commit SHA to tag.

        Returns:
            The created reference as returned by GitHub.

        Raises:
            GitHubAPIError: If GitHub refuses the ref (including
                "Reference already exists").
        """
        response = self._request(
            "POST",
            f"{self.repo_url}/git/refs",
            json={"ref": f"{TAG_REF_PREFIX}{tag_name}", "sha": sha},
        )
        self._raise_for_status(response)
        logger.info("Created tag", tag=tag_name, sha=sha)
        return response.json()
