"""GitHub REST API 소스."""

import logging
from typing import Any

import httpx

from gh_explorer.config import Settings, settings as default_settings
from gh_explorer.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class GitHubSource:
    """GitHub REST API에서 사용자 프로필과 저장소를 가져온다."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            settings: 설정. None이면 전역 설정 사용.
            transport: HTTP 트랜스포트 (테스트용). None이면 기본값.
        """
        self.settings = settings or default_settings
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        """요청 헤더를 생성한다."""
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.github_api_base,
            headers=self._headers(),
            timeout=self.settings.request_timeout,
            transport=self.transport,
        )

    async def _get(self, client: httpx.AsyncClient, path: str, **params: Any) -> Any:
        """GET 요청을 보내고 JSON 본문을 반환한다.

        Raises:
            NotFoundError: 404 응답
            UpstreamError: 그 외 실패 응답 또는 네트워크 오류
        """
        try:
            response = await client.get(path, params=params or None)
        except httpx.RequestError as e:
            raise UpstreamError(f"GitHub request failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            raise UpstreamError(
                f"GitHub API returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from GitHub: {e}") from e

    async def fetch_profile(self, username: str) -> dict[str, Any]:
        """사용자 프로필을 가져온다."""
        async with self._client() as client:
            data: dict[str, Any] = await self._get(client, f"/users/{username}")
        if not isinstance(data, dict):
            raise UpstreamError(f"Unexpected user payload from GitHub: {type(data).__name__}")
        return data

    async def fetch_all_repositories(self, username: str) -> list[dict[str, Any]]:
        """사용자의 저장소를 페이지 단위로 모두 가져온다.

        빈 페이지를 받거나 max_pages에 도달하면 멈춘다. 중간에 실패하면
        이미 받은 페이지는 버리고 예외를 그대로 올린다.
        """
        repositories: list[dict[str, Any]] = []

        async with self._client() as client:
            for page in range(1, self.settings.max_pages + 1):
                items: list[dict[str, Any]] = await self._get(
                    client,
                    f"/users/{username}/repos",
                    sort="updated",
                    per_page=self.settings.per_page,
                    page=page,
                )
                if not isinstance(items, list):
                    raise UpstreamError(
                        f"Unexpected repository page from GitHub: {type(items).__name__}"
                    )
                logger.debug(f"Fetched page {page} for {username}: {len(items)} repos")
                if not items:
                    break
                repositories.extend(items)

        return repositories
