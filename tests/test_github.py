import asyncio

import httpx
import pytest

from prsignals.config import settings
from prsignals.github import GitHubClient, GitHubPullContext
from prsignals.loader import signal_set_from_dict
from prsignals.services.evaluator import matches

API = "https://api.github.com"

def _pull():
    return {
        "number": 7,
        "body": "Bumps deps",
        "base": {"ref": "main"},
        "head": {"ref": "dependabot/npm/x"},
        "user": {"login": "dependabot[bot]"},
    }

def _handler(requests):
    def handle(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if path == "/repos/org/repo/pulls/7":
            return httpx.Response(200, json=_pull())
        if path == "/repos/org/repo/issues/7/labels":
            return httpx.Response(200, json=[{"name": "AutoMerge"}, {"name": "deps"}])
        if path == "/repos/org/repo/issues/7/comments":
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=[{"body": "/merge"}])
            return httpx.Response(
                200,
                json=[{"body": "lgtm"}],
                headers={"Link": f'<{API}{path}?per_page=100&page=2>; rel="next", <{API}{path}?per_page=100&page=2>; rel="last"'},
            )
        return httpx.Response(404, json={"message": "Not Found"})
    return handle

@pytest.mark.asyncio
async def test_pull_context_reads_payload_and_paginates():
    requests = []
    async with GitHubClient("t0ken", transport=httpx.MockTransport(_handler(requests))) as gh:
        pull = await GitHubPullContext.from_number(gh, "org", "repo", 7)
        assert pull.body() == "Bumps deps"
        assert pull.branches() == ("main", "dependabot/npm/x")
        assert pull.creator() == "dependabot[bot]"
        assert await pull.labels() == ["AutoMerge", "deps"]
        assert await pull.comments() == ["lgtm", "/merge"]
        # second read comes from the snapshot
        assert await pull.comments() == ["lgtm", "/merge"]

    comment_calls = [r for r in requests if r.url.path.endswith("/comments")]
    assert len(comment_calls) == 2
    assert requests[0].headers["Authorization"] == "Bearer t0ken"

@pytest.mark.asyncio
async def test_pull_context_end_to_end_match():
    signals = signal_set_from_dict({
        "label": {"values": ["automerge"]},
        "comments": ["/merge"],
        "creators": ["dependabot[bot]"],
        "match": "all",
    })
    async with GitHubClient(transport=httpx.MockTransport(_handler([]))) as gh:
        pull = await GitHubPullContext.from_number(gh, "org", "repo", 7)
        result = await matches(signals, pull, "trigger")
    assert result.matched is True
    assert result.reason == "pull request matches the trigger"

@pytest.mark.asyncio
async def test_get_json_retries_on_rate_limit():
    attempts = []

    def handle(request):
        attempts.append(request)
        if len(attempts) == 1:
            return httpx.Response(429, headers={"Retry-After": "0"})
        return httpx.Response(200, json=_pull())

    async with GitHubClient(transport=httpx.MockTransport(handle)) as gh:
        data = await gh.get_pull("org", "repo", 7)
    assert data["number"] == 7
    assert len(attempts) == 2

@pytest.mark.asyncio
async def test_get_json_raises_on_not_found():
    async with GitHubClient(transport=httpx.MockTransport(_handler([]))) as gh:
        with pytest.raises(httpx.HTTPStatusError):
            await gh.get_pull("org", "repo", 8)

@pytest.mark.asyncio
async def test_get_json_does_not_sleep_after_final_attempt(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(settings, "GITHUB_MAX_ATTEMPTS", 3)
    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    attempts = []

    def handle(request):
        attempts.append(request)
        return httpx.Response(503)

    async with GitHubClient(transport=httpx.MockTransport(handle)) as gh:
        with pytest.raises(httpx.HTTPStatusError):
            await gh.get_pull("org", "repo", 7)
    assert len(attempts) == 3
    assert len(sleeps) == 2

@pytest.mark.asyncio
async def test_get_json_makes_one_attempt_when_attempts_disabled(monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_MAX_ATTEMPTS", 0)
    async with GitHubClient(transport=httpx.MockTransport(lambda request: httpx.Response(502))) as gh:
        with pytest.raises(httpx.HTTPStatusError):
            await gh.get_pull("org", "repo", 7)

@pytest.mark.asyncio
async def test_get_json_accepts_http_date_retry_after(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    attempts = []

    def handle(request):
        attempts.append(request)
        if len(attempts) == 1:
            return httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})
        return httpx.Response(200, json=_pull())

    async with GitHubClient(transport=httpx.MockTransport(handle)) as gh:
        data = await gh.get_pull("org", "repo", 7)
    assert data["number"] == 7
    # a date in the past means retry straight away
    assert sleeps == [0.0]
