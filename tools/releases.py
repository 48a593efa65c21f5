"""Latest-release lookups against the GitHub REST API.

Fetches the "latest release" resource of a repository and returns its
cleaned tag name. Rate limiting and rejected tokens are reported as
FatalApiError subclasses; every other failure is a ReleaseFetchError.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from mcp_tools.exceptions import (
    BadCredentialsError,
    RateLimitedError,
    ReleaseFetchError,
)

if TYPE_CHECKING:
    from config import ReleaseSource

USER_AGENT = "esp-toolcheck"
ACCEPT = "application/vnd.github+json"
API_VERSION = "2022-11-28"

RATE_LIMIT_MARKER = "https://docs.github.com/rest/overview/resources-in-the-rest-api#rate-limiting"
BAD_CREDENTIALS_MARKER = "Bad credentials"


def clean_tag(tag: str) -> str:
    """Remove every 'v' and '"' character from a tag.

    Not only a leading prefix: "version-vv1.0" becomes "ersion-1.0".
    """
    return tag.replace("v", "").replace('"', "")


def build_headers(token: str | None = None) -> dict[str, str]:
    """Build GitHub API request headers.

    Args:
        token: Bearer token; the Authorization header is omitted when None.

    Returns:
        Header dictionary.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": ACCEPT,
        "X-GitHub-Api-Version": API_VERSION,
    }
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return headers


@dataclass
class ReleaseInfo:
    """Outcome of fetching one release source.

    Attributes:
        source: The queried source.
        tag: Cleaned tag name, None if the fetch failed.
    """

    source: "ReleaseSource"
    tag: str | None = None

    @property
    def ok(self) -> bool:
        return self.tag is not None


class ReleaseFetcher:
    """Blocking client for GitHub "latest release" endpoints.

    Example:
        with ReleaseFetcher(token=os.environ.get("GITHUB_TOKEN")) as fetcher:
            tag = fetcher.fetch_latest(
                "https://api.github.com/repos/esp-rs/espflash/releases/latest"
            )
    """

    def __init__(
        self,
        token: str | None = None,
        timeout: float = 10.0,
        logger: Any = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            token: GitHub bearer token, None for anonymous requests.
            timeout: Request timeout in seconds.
            logger: Optional ToolcheckLogger for diagnostics.
            transport: Custom httpx transport (used by tests).
        """
        self.token = token
        self.timeout = timeout
        self.logger = logger
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "ReleaseFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def _headers(self) -> dict[str, str]:
        headers = build_headers(self.token)
        if "Authorization" in headers and self.logger:
            self.logger.debug("Auth header added")
        return headers

    def _check_fatal(self, body: str, url: str) -> None:
        """Raise if the body reports rate limiting or a rejected token."""
        if RATE_LIMIT_MARKER in body:
            if self.logger:
                self.logger.error("API Rate Limit Exceeded", url=url)
            raise RateLimitedError(details=url)

        if BAD_CREDENTIALS_MARKER in body:
            if self.logger:
                self.logger.error("Invalid GitHub token", url=url)
            raise BadCredentialsError(details=url)

    def fetch_latest(self, url: str) -> str:
        """Fetch the cleaned tag name of the latest release.

        Args:
            url: GitHub API URL of a "latest release" resource.

        Returns:
            Tag name with every 'v' and '"' removed.

        Raises:
            RateLimitedError: Response reports API rate limiting.
            BadCredentialsError: Response reports an invalid token.
            ReleaseFetchError: Transport failure or unusable response body.
        """
        if self.logger:
            self.logger.debug(f"Querying GitHub API: '{url}'", url=url)

        try:
            response = self.client.get(url, headers=self._headers())
            body = response.text
        except httpx.HTTPError as e:
            raise ReleaseFetchError("Request failed", url=url, details=str(e)) from e

        self._check_fatal(body, url)

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ReleaseFetchError("Response is not JSON", url=url, details=str(e)) from e

        if not isinstance(data, dict):
            raise ReleaseFetchError("Response is not a JSON object", url=url)

        tag = data.get("tag_name")
        if not isinstance(tag, str):
            raise ReleaseFetchError(
                "Response has no tag_name",
                url=url,
                details=f"HTTP {response.status_code}",
            )

        return clean_tag(tag)

    def fetch_all(self, sources: Iterable["ReleaseSource"]) -> list[ReleaseInfo]:
        """Fetch every source in order.

        A ReleaseFetchError for one source is recorded on its ReleaseInfo and
        the remaining sources are still queried. FatalApiError propagates.

        Args:
            sources: Release sources to query.

        Returns:
            One ReleaseInfo per source, in input order.
        """
        releases = []
        for source in sources:
            try:
                releases.append(ReleaseInfo(source=source, tag=self.fetch_latest(source.url)))
            except ReleaseFetchError as e:
                if self.logger:
                    self.logger.warning(f"Cannot fetch latest {source.name} version: {e}", url=source.url)
                releases.append(ReleaseInfo(source=source))
        return releases
