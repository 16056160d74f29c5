"""Tests for the GitHub gateway's normalization and error mapping."""
import asyncio
from datetime import date, datetime, timezone
import aiohttp
import pytest
from devscore.config import Settings
from devscore.domain.errors import NotFoundError, RateLimitError, TransportError
from devscore.domain.github_interface import SearchKind
from devscore.infrastructure.github_client import (
    GitHubGateway,
    SEARCH_QUERIES,
    parse_timestamp,
    raise_for_status,
)


def test_raise_for_status_mapping():
    """Test HTTP statuses map onto the error taxonomy."""
    raise_for_status(200, "", "GET /users/octocat")

    with pytest.raises(NotFoundError):
        raise_for_status(404, "Not Found", "GET /users/ghost")
    with pytest.raises(RateLimitError):
        raise_for_status(403, "API rate limit exceeded", "GET /search/commits")
    with pytest.raises(RateLimitError):
        raise_for_status(429, "", "GET /search/issues")
    with pytest.raises(TransportError):
        raise_for_status(422, "Validation Failed", "GET /search/issues")
    with pytest.raises(TransportError):
        raise_for_status(502, "Bad Gateway", "GET /users/octocat")


def test_parse_timestamp():
    """Test GitHub timestamps parse as aware datetimes."""
    assert parse_timestamp("2011-01-25T18:44:36Z") == datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc)
    assert parse_timestamp(None) is None
    assert parse_timestamp("yesterday") is None


def test_normalize_user():
    """Test null counters become zero and identity fields are kept."""
    user = GitHubGateway._normalize_user({
        "login": "octocat",
        "name": None,
        "avatar_url": "https://avatars.example.com/u/1",
        "public_repos": 8,
        "followers": None,
        "created_at": "2011-01-25T18:44:36Z",
    })

    assert user.login == "octocat"
    assert user.display_name == "octocat"
    assert user.public_repos == 8
    assert user.followers == 0
    assert user.following == 0
    assert user.created_at.year == 2011


def test_normalize_repository():
    """Test repository payloads keep only the aggregation fields."""
    repo = GitHubGateway._normalize_repository({
        "name": "Hello-World",
        "language": None,
        "stargazers_count": 1500,
        "forks_count": 9,
        "size": 108,
        "fork": True,
    })

    assert repo.name == "Hello-World"
    assert repo.language is None
    assert repo.star_count == 1500
    assert repo.fork_count == 9
    assert repo.size == 108
    assert repo.is_fork


def test_parse_calendar():
    """Test the GraphQL calendar payload becomes weeks of days."""
    calendar = GitHubGateway._parse_calendar({
        "user": {
            "contributionsCollection": {
                "contributionCalendar": {
                    "totalContributions": 3,
                    "weeks": [
                        {"contributionDays": [
                            {"date": "2024-01-01", "contributionCount": 1},
                            {"date": "2024-01-02", "contributionCount": 2},
                        ]},
                        {"contributionDays": [{"date": "2024-01-08", "contributionCount": 0}]},
                    ],
                }
            }
        }
    })

    days = calendar.days()
    assert len(calendar.weeks) == 2
    assert [day.count for day in days] == [1, 2, 0]
    assert days[0].date == date(2024, 1, 1)


def test_parse_calendar_missing_user():
    """Test a null user in the payload means the user does not exist."""
    with pytest.raises(NotFoundError):
        GitHubGateway._parse_calendar({"user": None})


def test_search_queries():
    """Test reviews are searched by reviewer and commits on the commit index."""
    assert SEARCH_QUERIES[SearchKind.COMMITS] == ("/search/commits", "author:{handle}")
    assert SEARCH_QUERIES[SearchKind.REVIEWS][1].format(handle="octocat") == "reviewed-by:octocat type:pr"
    assert set(SEARCH_QUERIES) == set(SearchKind)


async def test_calendar_requires_token():
    """Test the GraphQL calendar is refused without a token."""
    gateway = GitHubGateway(Settings(github_token=""))

    with pytest.raises(TransportError):
        await gateway.get_contribution_calendar("octocat")


@pytest.mark.parametrize("error", [
    aiohttp.ClientConnectionError("connection reset"),
    asyncio.TimeoutError(),
    ValueError("Expecting value"),
])
async def test_request_errors_become_transport_errors(monkeypatch, error):
    """Test low-level failures are normalized into TransportError."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))

    async def failing_get_json(path, params=None):
        raise error

    monkeypatch.setattr(gateway, "_get_json", failing_get_json)

    with pytest.raises(TransportError):
        await gateway.get_user("octocat")


async def test_search_count_reads_total_count(monkeypatch):
    """Test the search count comes from total_count and is never negative."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))
    requests = []

    async def fake_get_json(path, params=None):
        requests.append((path, params))
        return {"total_count": 321, "items": []}

    monkeypatch.setattr(gateway, "_get_json", fake_get_json)

    assert await gateway.search_count(SearchKind.PRS, "octocat") == 321
    assert requests == [("/search/issues", {"q": "author:octocat type:pr", "per_page": 1})]


async def test_list_repositories_rejects_unexpected_payload(monkeypatch):
    """Test a non-list repository page is a transport error."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))

    async def fake_get_json(path, params=None):
        return {"message": "unexpected"}

    monkeypatch.setattr(gateway, "_get_json", fake_get_json)

    with pytest.raises(TransportError):
        await gateway.list_repositories("octocat", 1, 100)


def test_authorization_header_only_with_token():
    """Test the bearer token is sent only when configured."""
    assert GitHubGateway(Settings(github_token="ghp_x"))._api_headers["Authorization"] == "Bearer ghp_x"
    assert "Authorization" not in GitHubGateway(Settings())._api_headers


@pytest.mark.parametrize("page", [
    [None],
    ["octocat/Hello-World"],
    [{"name": "ok", "size": 1}, 42],
])
async def test_list_repositories_rejects_malformed_items(monkeypatch, page):
    """Test non-object repository entries are a transport error."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))

    async def fake_get_json(path, params=None):
        return page

    monkeypatch.setattr(gateway, "_get_json", fake_get_json)

    with pytest.raises(TransportError):
        await gateway.list_repositories("octocat", 1, 100)


async def test_search_count_rejects_malformed_total(monkeypatch):
    """Test a non-numeric total_count is a transport error."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))

    async def fake_get_json(path, params=None):
        return {"total_count": "many"}

    monkeypatch.setattr(gateway, "_get_json", fake_get_json)

    with pytest.raises(TransportError):
        await gateway.search_count(SearchKind.COMMITS, "octocat")


async def test_handle_is_quoted_in_rest_paths(monkeypatch):
    """Test the handle is a single escaped path segment."""
    gateway = GitHubGateway(Settings(github_token="ghp_test"))
    paths = []

    async def fake_get_json(path, params=None):
        paths.append(path)
        if path.endswith("/repos"):
            return []
        return {"login": "torvalds/followers"}

    monkeypatch.setattr(gateway, "_get_json", fake_get_json)

    await gateway.get_user("torvalds/followers")
    await gateway.list_repositories("a b?c", 1, 100)

    assert paths == ["/users/torvalds%2Ffollowers", "/users/a%20b%3Fc/repos"]
