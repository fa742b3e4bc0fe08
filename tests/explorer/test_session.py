"""조회 세션 및 프록시 클라이언트 테스트."""

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from gh_explorer.errors import InvalidInputError, NotFoundError, UpstreamError
from gh_explorer.explorer.client import ProxyClient
from gh_explorer.explorer.session import ExplorerSession
from gh_explorer.history import SearchHistory
from gh_explorer.server import create_app


class StubSource:
    """사용자명별 응답을 돌려주는 업스트림 대역."""

    def __init__(self, users: dict[str, tuple[dict[str, Any], list[dict[str, Any]]]]) -> None:
        self.users = users

    async def fetch_profile(self, username: str) -> dict[str, Any]:
        if username not in self.users:
            raise NotFoundError()
        return self.users[username][0]

    async def fetch_all_repositories(self, username: str) -> list[dict[str, Any]]:
        if username not in self.users:
            raise NotFoundError()
        return self.users[username][1]


class GatedClient:
    """사용자명별로 응답 시점을 제어할 수 있는 클라이언트 대역."""

    def __init__(self, profile: dict[str, Any], repos: list[dict[str, Any]]) -> None:
        self.profile = profile
        self.repos = repos
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    def gate(self, username: str) -> asyncio.Event:
        return self.gates.setdefault(username, asyncio.Event())

    async def fetch_profile(self, username: str) -> dict[str, Any]:
        self.calls.append(username)
        await self.gate(username).wait()
        return {**self.profile, "login": username}

    async def fetch_repositories(self, username: str) -> list[dict[str, Any]]:
        await self.gate(username).wait()
        return self.repos


@pytest.fixture
def history(tmp_path: Path) -> SearchHistory:
    return SearchHistory(path=tmp_path / "history.json")


@pytest.fixture
def proxy_client(
    profile_payload: dict[str, Any], make_repo_payload: Callable[..., dict[str, Any]]
) -> ProxyClient:
    """ASGI 트랜스포트로 프록시 앱에 직접 연결된 클라이언트를 반환한다."""
    source = StubSource(
        {"octocat": (profile_payload, [make_repo_payload(i) for i in range(1, 21)])}
    )
    transport = httpx.ASGITransport(app=create_app(source=source))
    return ProxyClient(base_url="http://testserver/api/", transport=transport)


class TestProxyClient:
    """ProxyClient 테스트."""

    @pytest.mark.asyncio
    async def test_fetch(self, proxy_client: ProxyClient) -> None:
        profile = await proxy_client.fetch_profile("octocat")
        repos = await proxy_client.fetch_repositories("octocat")
        assert profile["login"] == "octocat"
        assert len(repos) == 20

    @pytest.mark.asyncio
    async def test_not_found(self, proxy_client: ProxyClient) -> None:
        with pytest.raises(NotFoundError):
            await proxy_client.fetch_profile("ghost")

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        """500 응답은 상태 코드와 오류 내용을 담은 UpstreamError가 된다."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"message": "x", "error": "GitHub API returned 502"})
        )
        client = ProxyClient(base_url="http://proxy/api", transport=transport)
        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch_repositories("octocat")
        assert exc_info.value.status_code == 500
        assert "GitHub API returned 502" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        """2xx지만 JSON이 아닌 본문은 UpstreamError가 된다."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>maintenance</html>")
        )
        client = ProxyClient(base_url="http://proxy/api", transport=transport)
        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch_profile("octocat")
        assert "Invalid JSON" in str(exc_info.value)


class TestExplorerSession:
    """ExplorerSession 테스트."""

    @pytest.mark.asyncio
    async def test_lookup_loads_results(
        self, proxy_client: ProxyClient, history: SearchHistory
    ) -> None:
        """조회 결과가 상태에 반영되고 기록에 추가된다."""
        session = ExplorerSession(client=proxy_client, history=history)
        assert await session.lookup("  octocat ") is True

        state = session.store.state
        assert state.profile is not None
        assert state.profile.login == "octocat"
        assert len(state.repositories) == 20
        assert history.list() == ["octocat"]

    @pytest.mark.asyncio
    async def test_empty_username_makes_no_request(self, history: SearchHistory) -> None:
        """빈 사용자명은 네트워크 요청 없이 InvalidInputError를 올린다."""
        client = GatedClient({}, [])
        session = ExplorerSession(client=client, history=history)  # type: ignore[arg-type]
        with pytest.raises(InvalidInputError):
            await session.lookup("   ")
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_not_found_shows_nothing(
        self, proxy_client: ProxyClient, history: SearchHistory
    ) -> None:
        """404면 이전 결과를 지우고 기록에 남기지 않는다."""
        session = ExplorerSession(client=proxy_client, history=history)
        await session.lookup("octocat")

        with pytest.raises(NotFoundError):
            await session.lookup("ghost")
        assert session.store.state.profile is None
        assert session.store.state.repositories == ()
        assert history.list() == ["octocat"]

    @pytest.mark.asyncio
    async def test_stale_lookup_is_discarded(
        self,
        history: SearchHistory,
        profile_payload: dict[str, Any],
        make_repo_payload: Callable[..., dict[str, Any]],
    ) -> None:
        """먼저 시작한 조회가 나중에 끝나면 그 결과는 버려진다."""
        client = GatedClient(profile_payload, [make_repo_payload(1)])
        session = ExplorerSession(client=client, history=history)  # type: ignore[arg-type]

        slow = asyncio.create_task(session.lookup("slow"))
        await asyncio.sleep(0)
        fast = asyncio.create_task(session.lookup("fast"))
        await asyncio.sleep(0)

        client.gate("fast").set()
        assert await fast is True
        client.gate("slow").set()
        assert await slow is False

        assert session.store.state.profile is not None
        assert session.store.state.profile.login == "fast"
        assert history.list() == ["fast"]

    @pytest.mark.asyncio
    async def test_non_json_response_is_upstream_error(self, history: SearchHistory) -> None:
        """프록시가 HTML을 돌려주면 UpstreamError로 끝나고 결과는 비어 있다."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>maintenance</html>")
        )
        client = ProxyClient(base_url="http://proxy/api", transport=transport)
        session = ExplorerSession(client=client, history=history)
        with pytest.raises(UpstreamError):
            await session.lookup("octocat")
        assert session.store.state.profile is None
        assert history.list() == []

    @pytest.mark.asyncio
    async def test_malformed_profile_is_upstream_error(
        self, history: SearchHistory, make_repo_payload: Callable[..., dict[str, Any]]
    ) -> None:
        """형식이 맞지 않는 프로필은 UpstreamError가 된다."""
        client = GatedClient({"followers": "many"}, [make_repo_payload(1)])
        client.gate("octocat").set()
        session = ExplorerSession(client=client, history=history)  # type: ignore[arg-type]
        with pytest.raises(UpstreamError):
            await session.lookup("octocat")
        assert session.store.state.profile is None
        assert history.list() == []

    @pytest.mark.asyncio
    async def test_malformed_repository_is_upstream_error(
        self, history: SearchHistory, profile_payload: dict[str, Any]
    ) -> None:
        """updated_at이 없는 저장소는 UpstreamError가 된다."""
        client = GatedClient(profile_payload, [{"name": "broken"}])
        client.gate("octocat").set()
        session = ExplorerSession(client=client, history=history)  # type: ignore[arg-type]
        with pytest.raises(UpstreamError):
            await session.lookup("octocat")
        assert session.store.state.repositories == ()
        assert history.list() == []
