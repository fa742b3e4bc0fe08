"""소스 프로토콜 정의."""

from typing import Any, Protocol


class UserSource(Protocol):
    """사용자 데이터 소스 프로토콜."""

    async def fetch_profile(self, username: str) -> dict[str, Any]:
        """사용자 프로필을 가져온다."""
        ...

    async def fetch_all_repositories(self, username: str) -> list[dict[str, Any]]:
        """사용자의 전체 저장소 목록을 가져온다."""
        ...
