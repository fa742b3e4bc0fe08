"""프록시 API 클라이언트."""

import logging
from typing import Any

import httpx

from gh_explorer.config import settings
from gh_explorer.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class ProxyClient:
    """gh-explorer 프록시 서버에서 프로필과 저장소를 가져온다."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: 프록시 API 기본 URL (예: http://127.0.0.1:3000/api)
            timeout: HTTP 요청 타임아웃 (초)
            transport: HTTP 트랜스포트 (테스트용)
        """
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _fetch(self, path: str) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}")
            except httpx.RequestError as e:
                raise UpstreamError(f"Proxy request failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            message = f"HTTP error! status: {response.status_code}"
            try:
                detail = response.json().get("error")
            except ValueError:
                detail = None
            if detail:
                message = f"{message} ({detail})"
            raise UpstreamError(message, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from proxy: {e}") from e

    async def fetch_profile(self, username: str) -> dict[str, Any]:
        """사용자 프로필을 가져온다."""
        data: dict[str, Any] = await self._fetch(f"/user/{username}")
        return data

    async def fetch_repositories(self, username: str) -> list[dict[str, Any]]:
        """사용자의 전체 저장소 목록을 가져온다."""
        data: list[dict[str, Any]] = await self._fetch(f"/user/{username}/repos")
        return data
