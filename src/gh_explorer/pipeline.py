"""저장소 목록 필터링, 정렬, 페이지 분할 파이프라인.

모든 함수는 순수 함수이며 입력 목록을 변경하지 않는다.
"""

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gh_explorer.explorer.state import (
    DEFAULT_PAGE_SIZE,
    ExplorerState,
    FilterState,
    SortDirection,
    SortField,
    SortState,
)
from gh_explorer.models import Repository


class RepositoryView(BaseModel):
    """현재 페이지에 표시할 저장소와 집계 정보."""

    model_config = ConfigDict(frozen=True)

    items: list[Repository] = Field(default_factory=list, description="현재 페이지 저장소")
    total_count: int = Field(default=0, description="전체 저장소 수")
    filtered_count: int = Field(default=0, description="필터 적용 후 저장소 수")
    total_pages: int = Field(default=0, description="전체 페이지 수")
    page: int = Field(default=1, description="보정된 현재 페이지")
    start_index: int = Field(default=0, description="표시 시작 위치 (1부터)")
    end_index: int = Field(default=0, description="표시 끝 위치 (포함)")
    languages: list[str] = Field(default_factory=list, description="선택 가능한 언어 목록")


def _contains(value: str | None, term: str) -> bool:
    return value is not None and term in value.lower()


def matches_filters(repo: Repository, filters: FilterState) -> bool:
    """저장소가 설정된 모든 필터 조건을 만족하는지 확인한다."""
    if filters.search_term:
        term = filters.search_term.lower()
        if not (
            _contains(repo.name, term)
            or _contains(repo.description, term)
            or _contains(repo.language, term)
        ):
            return False

    if filters.language and repo.language != filters.language:
        return False

    if filters.has_description and not repo.description:
        return False

    if filters.has_homepage and not repo.homepage:
        return False

    if filters.min_stars is not None and repo.stars < filters.min_stars:
        return False

    return True


def filter_repositories(
    repositories: Iterable[Repository], filters: FilterState
) -> list[Repository]:
    """필터 조건을 만족하는 저장소만 원래 순서대로 반환한다."""
    return [repo for repo in repositories if matches_filters(repo, filters)]


_SORT_KEYS: dict[SortField, Callable[[Repository], Any]] = {
    SortField.name: lambda repo: repo.name.lower(),
    SortField.stars: lambda repo: repo.stars,
    SortField.forks: lambda repo: repo.forks,
    SortField.updated: lambda repo: repo.updated_at,
}


def sort_repositories(
    repositories: Iterable[Repository], sort: SortState
) -> list[Repository]:
    """정렬 상태에 따라 저장소를 정렬한다 (안정 정렬)."""
    return sorted(
        repositories,
        key=_SORT_KEYS[sort.field],
        reverse=sort.direction == SortDirection.desc,
    )


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """전체 페이지 수를 계산한다."""
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    """페이지 번호를 [1, pages] 범위로 보정한다. 페이지가 없으면 1."""
    return min(max(page, 1), max(pages, 1))


def paginate(
    repositories: Sequence[Repository],
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Repository]:
    """page번째 페이지의 저장소를 반환한다. 범위를 벗어나면 빈 목록."""
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(repositories[start : start + page_size])


def available_languages(repositories: Iterable[Repository]) -> list[str]:
    """저장소에 등장하는 언어를 중복 없이 정렬해 반환한다."""
    return sorted({repo.language for repo in repositories if repo.language})


def derive_view(state: ExplorerState) -> RepositoryView:
    """상태 스냅샷에서 현재 페이지 뷰를 계산한다."""
    filtered = filter_repositories(state.repositories, state.filters)
    ordered = sort_repositories(filtered, state.sort)

    page_size = state.paging.page_size
    pages = total_pages(len(ordered), page_size)
    page = clamp_page(state.paging.page, pages)
    items = paginate(ordered, page, page_size)

    start_index = (page - 1) * page_size + 1 if items else 0
    return RepositoryView(
        items=items,
        total_count=len(state.repositories),
        filtered_count=len(ordered),
        total_pages=pages,
        page=page,
        start_index=start_index,
        end_index=start_index + len(items) - 1 if items else 0,
        languages=available_languages(state.repositories),
    )
