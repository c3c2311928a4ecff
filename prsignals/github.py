import asyncio
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import httpx
from typing import Any, Dict, List, Optional, Tuple

from .config import settings

RETRY_STATUSES = (403, 429)

def _retry_after_seconds(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given either as seconds or as an HTTP date."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())

def _next_link(headers: httpx.Headers) -> Optional[str]:
    for part in headers.get("Link", "").split(","):
        section = part.split(";")
        if len(section) < 2:
            continue
        url = section[0].strip().strip("<>")
        if any(p.strip() == 'rel="next"' for p in section[1:]):
            return url
    return None

class GitHubClient:
    def __init__(
        self,
        token: str = "",
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        token = token or settings.GITHUB_TOKEN
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=base_url or settings.GITHUB_API_URL,
            headers=headers,
            timeout=httpx.Timeout(settings.GITHUB_TIMEOUT_SECONDS),
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Tuple[Any, httpx.Headers]:
        attempts = max(1, settings.GITHUB_MAX_ATTEMPTS)
        delay = 1.0
        for attempt in range(1, attempts + 1):
            resp = await self._client.get(url, params=params)

            if resp.status_code == 200:
                return resp.json(), resp.headers

            retryable = resp.status_code in RETRY_STATUSES or 500 <= resp.status_code < 600
            if not retryable or attempt == attempts:
                break

            # backoff on rate limit / transient errors
            sleep_s = _retry_after_seconds(resp.headers.get("Retry-After"))
            if sleep_s is None:
                sleep_s = delay + random.uniform(0, delay * 0.25)
            print(f"[github] {resp.status_code} on {url}; retrying in {sleep_s:.1f}s")
            await asyncio.sleep(sleep_s)
            delay *= 2

        resp.raise_for_status()
        # a non-200 success status (e.g. 204) carries no JSON body
        return None, resp.headers

    async def get_paginated(self, url: str, params: Optional[Dict[str, Any]] = None) -> List[Any]:
        params = dict(params or {})
        params.setdefault("per_page", settings.GITHUB_PER_PAGE)
        items: List[Any] = []
        next_url: Optional[str] = url
        while next_url:
            data, headers = await self.get_json(next_url, params=params)
            items.extend(data or [])
            next_url = _next_link(headers)
            # the next link already carries the query string
            params = None
        return items

    async def get_pull(self, owner: str, repo: str, number: int):
        data, _headers = await self.get_json(
            f"/repos/{owner}/{repo}/pulls/{number}",
        )
        return data

    async def list_issue_comments(self, owner: str, repo: str, number: int):
        return await self.get_paginated(f"/repos/{owner}/{repo}/issues/{number}/comments")

    async def list_issue_labels(self, owner: str, repo: str, number: int):
        return await self.get_paginated(f"/repos/{owner}/{repo}/issues/{number}/labels")

class GitHubPullContext:
    """PullContext backed by a pull request payload and the GitHub API.

    Comments and labels are fetched on first use and kept for the lifetime
    of the instance, so one instance is one point-in-time snapshot.
    """

    def __init__(self, gh: GitHubClient, owner: str, repo: str, pull: Dict[str, Any]):
        self._gh = gh
        self.owner = owner
        self.repo = repo
        self.number = int(pull["number"])
        self._pull = pull
        self._comments: Optional[List[str]] = None
        self._labels: Optional[List[str]] = None

    @classmethod
    async def from_number(cls, gh: GitHubClient, owner: str, repo: str, number: int) -> "GitHubPullContext":
        pull = await gh.get_pull(owner, repo, number)
        return cls(gh, owner, repo, pull)

    def body(self) -> str:
        return self._pull.get("body") or ""

    async def comments(self) -> List[str]:
        if self._comments is None:
            data = await self._gh.list_issue_comments(self.owner, self.repo, self.number)
            self._comments = [c.get("body") or "" for c in data]
        return self._comments

    async def labels(self) -> List[str]:
        if self._labels is None:
            data = await self._gh.list_issue_labels(self.owner, self.repo, self.number)
            self._labels = [l.get("name") for l in data if l.get("name")]
        return self._labels

    def branches(self) -> Tuple[str, str]:
        base = (self._pull.get("base") or {}).get("ref") or ""
        head = (self._pull.get("head") or {}).get("ref") or ""
        return base, head

    def creator(self) -> str:
        return (self._pull.get("user") or {}).get("login") or ""
