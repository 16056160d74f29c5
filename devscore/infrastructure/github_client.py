"""GitHub REST and GraphQL gateway implementation with retry logic."""
import asyncio
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import aiohttp
from gql import gql, Client
from gql.transport.aiohttp import AIOHTTPTransport
from gql.transport.exceptions import (
    TransportError as GraphQLTransportError,
    TransportQueryError,
    TransportServerError,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)
from devscore.config import Settings
from devscore.domain.errors import (
    GitHubAPIError,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from devscore.domain.github_interface import IGitHubGateway, SearchKind
from devscore.domain.models import (
    AvatarImage,
    ContributionCalendar,
    ContributionDay,
    RepositorySummary,
    UserProfile,
)


logger = logging.getLogger(__name__)


SEARCH_QUERIES = {
    SearchKind.COMMITS: ("/search/commits", "author:{handle}"),
    SearchKind.PRS: ("/search/issues", "author:{handle} type:pr"),
    SearchKind.ISSUES: ("/search/issues", "author:{handle} type:issue"),
    SearchKind.REVIEWS: ("/search/issues", "reviewed-by:{handle} type:pr"),
}

# Connection failures and timeouts are retried; rate limits are not
RETRYABLE_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def raise_for_status(status: int, body: str, context: str) -> None:
    """Translate an HTTP status into the gateway error taxonomy.

    Raises:
        NotFoundError: On 404
        RateLimitError: On 403 or 429
        TransportError: On any other status >= 400
    """
    if status == 404:
        raise NotFoundError(f"{context}: not found")
    if status in (403, 429):
        raise RateLimitError(f"{context}: rate limit exceeded ({status})")
    if status >= 400:
        raise TransportError(f"{context}: GitHub API error {status}: {body[:200]}")


class GitHubGateway(IGitHubGateway):
    """GitHub API gateway over REST (aiohttp) and GraphQL (gql).

    Implements the IGitHubGateway port. One HTTP session is created lazily
    and shared by all concurrent calls; its headers are read-only.
    """

    # GraphQL query for the daily contribution calendar
    CALENDAR_QUERY = gql("""
        query ContributionCalendar($login: String!) {
            user(login: $login) {
                contributionsCollection {
                    contributionCalendar {
                        totalContributions
                        weeks {
                            contributionDays {
                                date
                                contributionCount
                            }
                        }
                    }
                }
            }
        }
    """)

    def __init__(self, settings: Settings):
        """Initialize GitHub gateway.

        Args:
            settings: Token, endpoints and timeout configuration
        """
        self._settings = settings
        self._session: Optional[aiohttp.ClientSession] = None
        self._api_headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.user_agent,
        }
        if settings.github_token:
            self._api_headers["Authorization"] = f"Bearer {settings.github_token}"
        else:
            logger.warning("GitHub gateway is not authenticated. Rate limits will be lower.")

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.request_timeout)
            )
        return self._session

    @retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True
    )
    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        session = await self._init_session()
        url = f"{self._settings.api_url}{path}"
        async with session.get(url, headers=self._api_headers, params=params) as response:
            if response.status >= 400:
                raise_for_status(response.status, await response.text(), f"GET {path}")
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining is not None:
                logger.debug(f"GET {path}: rate limit remaining {remaining}")
            return await response.json(content_type=None)

    async def _request_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a REST resource, normalizing every failure into a GitHubAPIError."""
        try:
            return await self._get_json(path, params)
        except GitHubAPIError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(f"GET {path} failed: {type(e).__name__}: {e}") from e

    @staticmethod
    def _normalize_user(user_json: Dict[str, Any]) -> UserProfile:
        """Transform raw GitHub user JSON into a UserProfile."""
        return UserProfile(
            login=user_json["login"],
            name=user_json.get("name"),
            avatar_url=user_json.get("avatar_url"),
            bio=user_json.get("bio"),
            public_repos=user_json.get("public_repos") or 0,
            followers=user_json.get("followers") or 0,
            following=user_json.get("following") or 0,
            created_at=parse_timestamp(user_json.get("created_at")),
        )

    @staticmethod
    def _normalize_repository(repo_json: Dict[str, Any]) -> RepositorySummary:
        return RepositorySummary(
            name=repo_json.get("name") or "",
            language=repo_json.get("language") or None,
            star_count=repo_json.get("stargazers_count") or 0,
            fork_count=repo_json.get("forks_count") or 0,
            size=repo_json.get("size") or 0,
            is_fork=bool(repo_json.get("fork")),
        )

    @staticmethod
    def _parse_calendar(result: Dict[str, Any]) -> ContributionCalendar:
        """Transform a GraphQL contributionCalendar payload into a ContributionCalendar."""
        user = result.get("user")
        if user is None:
            raise NotFoundError("GraphQL user not found")
        calendar = user["contributionsCollection"]["contributionCalendar"]
        weeks = tuple(
            tuple(
                ContributionDay(
                    date=date.fromisoformat(day["date"]),
                    count=int(day["contributionCount"]),
                )
                for day in week["contributionDays"]
            )
            for week in calendar["weeks"]
        )
        return ContributionCalendar(weeks=weeks)

    async def get_user(self, handle: str) -> UserProfile:
        user_json = await self._request_json(f"/users/{quote(handle, safe='')}")
        try:
            user = self._normalize_user(user_json)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed user payload for {handle}: {e}") from e
        logger.debug(f"Fetched profile for {handle}")
        return user

    async def list_repositories(
        self,
        handle: str,
        page: int,
        page_size: int
    ) -> List[RepositorySummary]:
        page_data = await self._request_json(
            f"/users/{quote(handle, safe='')}/repos",
            {"per_page": page_size, "page": page},
        )
        if not isinstance(page_data, list):
            raise TransportError(f"Unexpected repository payload for {handle} page {page}")
        try:
            return [self._normalize_repository(repo) for repo in page_data]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed repository payload for {handle} page {page}: {e}") from e

    async def search_count(self, kind: SearchKind, handle: str) -> int:
        path, query = SEARCH_QUERIES[SearchKind(kind)]
        data = await self._request_json(path, {"q": query.format(handle=handle), "per_page": 1})
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected search payload for {kind.value}")
        try:
            return max(0, int(data.get("total_count") or 0))
        except (TypeError, ValueError) as e:
            raise TransportError(f"Malformed search payload for {kind.value}: {e}") from e

    async def get_contribution_calendar(self, handle: str) -> ContributionCalendar:
        if not self._settings.github_token:
            raise TransportError("The GraphQL API requires GITHUB_TOKEN")

        transport = AIOHTTPTransport(
            url=self._settings.graphql_url,
            headers={
                "Authorization": f"Bearer {self._settings.github_token}",
                "User-Agent": self._settings.user_agent,
            },
        )
        client = Client(
            transport=transport,
            fetch_schema_from_transport=False,
            execute_timeout=self._settings.request_timeout,
        )
        try:
            async with client as session:
                result = await session.execute(
                    self.CALENDAR_QUERY,
                    variable_values={"login": handle}
                )
        except TransportQueryError as e:
            message = str(e).lower()
            if "rate limit" in message or "rate_limited" in message:
                raise RateLimitError(f"GraphQL rate limit exceeded: {e}") from e
            if "could not resolve to a user" in message or "not_found" in message:
                raise NotFoundError(f"GraphQL user {handle} not found") from e
            raise TransportError(f"GraphQL query failed: {e}") from e
        except TransportServerError as e:
            if e.code in (403, 429):
                raise RateLimitError(f"GraphQL rate limit exceeded ({e.code})") from e
            raise TransportError(f"GraphQL server error {e.code}: {e}") from e
        except (GraphQLTransportError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"GraphQL request failed: {type(e).__name__}: {e}") from e

        try:
            return self._parse_calendar(result)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed contribution calendar for {handle}: {e}") from e

    async def fetch_avatar(self, url: str) -> Optional[AvatarImage]:
        session = await self._init_session()
        try:
            async with session.get(url, headers={"User-Agent": self._settings.user_agent}) as response:
                if response.status != 200:
                    logger.warning(f"Failed to fetch avatar: HTTP {response.status}")
                    return None
                data = await response.read()
                content_type = response.headers.get("Content-Type") or "image/png"
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Avatar download failed: {e}") from e
        return AvatarImage(data=data, content_type=content_type.split(";")[0].strip())

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
