"""공용 테스트 픽스처."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from gh_explorer.models import Profile, Repository

BASE_TIME = datetime(2024, 6, 1, tzinfo=UTC)


def repo_payload(index: int, **overrides: Any) -> dict[str, Any]:
    """업스트림 형식의 저장소 객체를 만든다."""
    data: dict[str, Any] = {
        "name": f"repo-{index:02d}",
        "description": f"Project number {index}",
        "homepage": None,
        "language": "Python",
        "stargazers_count": index,
        "forks_count": index % 4,
        "updated_at": (BASE_TIME - timedelta(days=index)).isoformat(),
        "html_url": f"https://github.com/octocat/repo-{index:02d}",
    }
    data.update(overrides)
    return data


PROFILE_PAYLOAD: dict[str, Any] = {
    "login": "octocat",
    "name": "The Octocat",
    "avatar_url": "https://avatars.githubusercontent.com/u/583231",
    "bio": None,
    "location": "San Francisco",
    "company": "@github",
    "blog": "github.blog",
    "public_repos": 8,
    "followers": 100,
    "following": 9,
    "created_at": "2011-01-25T18:44:36Z",
    "html_url": "https://github.com/octocat",
}


@pytest.fixture
def profile_payload() -> dict[str, Any]:
    """업스트림 형식의 사용자 객체를 반환한다."""
    return dict(PROFILE_PAYLOAD)


@pytest.fixture
def make_repo_payload() -> Callable[..., dict[str, Any]]:
    """업스트림 형식 저장소 객체 팩토리를 반환한다."""
    return repo_payload


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    """Repository 팩토리를 반환한다."""

    def _make(index: int = 1, **overrides: Any) -> Repository:
        return Repository.from_upstream(repo_payload(index, **overrides))

    return _make


@pytest.fixture
def repositories(make_repo: Callable[..., Repository]) -> list[Repository]:
    """업데이트 최신순으로 정렬된 저장소 20개를 반환한다."""
    return [make_repo(i) for i in range(1, 21)]


@pytest.fixture
def profile() -> Profile:
    """테스트용 Profile을 반환한다."""
    return Profile.from_upstream(PROFILE_PAYLOAD)
