"""탐색기 상태 스냅샷과 상태 전이 함수.

상태는 모두 불변(frozen)이며, 각 전이 함수는 새 스냅샷을 반환한다.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from gh_explorer.models import Profile, Repository

DEFAULT_PAGE_SIZE = 15


class SortField(str, Enum):
    """정렬 기준."""

    name = "name"
    stars = "stars"
    forks = "forks"
    updated = "updated"


class SortDirection(str, Enum):
    """정렬 방향."""

    asc = "asc"
    desc = "desc"


class FilterState(BaseModel):
    """필터 조건. 설정된 조건은 모두 AND로 결합된다."""

    model_config = ConfigDict(frozen=True)

    search_term: str = Field(default="", description="검색어 (이름/설명/언어)")
    language: str | None = Field(default=None, description="언어 (정확히 일치)")
    min_stars: int | None = Field(default=None, description="최소 스타 수 (이상)")
    has_description: bool = Field(default=False, description="설명 필수 여부")
    has_homepage: bool = Field(default=False, description="홈페이지 필수 여부")


class SortState(BaseModel):
    """정렬 상태."""

    model_config = ConfigDict(frozen=True)

    field: SortField = SortField.updated
    direction: SortDirection = SortDirection.desc


class PageState(BaseModel):
    """페이지 상태 (1부터 시작)."""

    model_config = ConfigDict(frozen=True)

    page: int = 1
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)


class ExplorerState(BaseModel):
    """탐색기 전체 상태 스냅샷."""

    model_config = ConfigDict(frozen=True)

    profile: Profile | None = None
    repositories: tuple[Repository, ...] = ()
    filters: FilterState = FilterState()
    sort: SortState = SortState()
    paging: PageState = PageState()


def parse_min_stars(value: str | int | None) -> int | None:
    """사용자 입력을 최소 스타 수로 변환한다.

    비어 있거나 숫자가 아니면 None을 반환하여 필터를 끈다.
    """
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def _with_page(state: ExplorerState, page: int) -> ExplorerState:
    return state.model_copy(update={"paging": state.paging.model_copy(update={"page": page})})


def apply_filter(state: ExplorerState, **changes: object) -> ExplorerState:
    """필터 필드를 바꾸고 1페이지로 돌아간다."""
    filters = FilterState.model_validate({**state.filters.model_dump(), **changes})
    return _with_page(state.model_copy(update={"filters": filters}), 1)


def clear_filters(state: ExplorerState) -> ExplorerState:
    """모든 필터를 해제하고 1페이지로 돌아간다."""
    return _with_page(state.model_copy(update={"filters": FilterState()}), 1)


def change_sort(state: ExplorerState, field: SortField) -> ExplorerState:
    """정렬 기준을 바꾼다.

    같은 기준이면 방향을 뒤집고, 다른 기준이면 내림차순으로 설정한다.
    현재 페이지 번호는 유지한다.
    """
    if state.sort.field == field:
        direction = (
            SortDirection.desc
            if state.sort.direction == SortDirection.asc
            else SortDirection.asc
        )
        sort = SortState(field=field, direction=direction)
    else:
        sort = SortState(field=field, direction=SortDirection.desc)
    return state.model_copy(update={"sort": sort})


def go_to_page(state: ExplorerState, page: int) -> ExplorerState:
    """페이지 번호를 바꾼다. 범위 보정은 뷰 계산 시 수행된다."""
    return _with_page(state, page)


def load_results(
    state: ExplorerState,
    profile: Profile,
    repositories: list[Repository] | tuple[Repository, ...],
) -> ExplorerState:
    """새 조회 결과로 교체하고 필터/정렬/페이지를 초기화한다."""
    return ExplorerState(
        profile=profile,
        repositories=tuple(repositories),
        paging=PageState(page_size=state.paging.page_size),
    )


def reset(state: ExplorerState) -> ExplorerState:
    """조회 결과와 필터/정렬/페이지를 모두 비운다."""
    return ExplorerState(paging=PageState(page_size=state.paging.page_size))
