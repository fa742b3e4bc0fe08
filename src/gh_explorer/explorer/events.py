"""탐색기 이벤트와 상태 저장소.

UI 입력은 이벤트로 변환되어 Store.dispatch()로 전달되고, Store는 새 상태
스냅샷을 만든 뒤 구독자에게 알린다.
"""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from gh_explorer.explorer import state as transitions
from gh_explorer.explorer.state import ExplorerState, FilterState, SortField
from gh_explorer.models import Profile, Repository

logger = logging.getLogger(__name__)


class Event(BaseModel):
    """이벤트 기본 클래스."""

    model_config = ConfigDict(frozen=True)


class LookupStarted(Event):
    """새 사용자 조회가 시작됨."""

    username: str


class ResultsLoaded(Event):
    """조회 결과가 도착함."""

    profile: Profile
    repositories: tuple[Repository, ...]


class FilterChanged(Event):
    """필터 필드 하나가 바뀜."""

    name: str
    value: str | int | bool | None


class FiltersCleared(Event):
    """모든 필터 해제."""


class SortChanged(Event):
    """정렬 기준 선택."""

    field: SortField


class PageChanged(Event):
    """페이지 이동."""

    page: int


Listener = Callable[[ExplorerState, Event], None]


def reduce(state: ExplorerState, event: Event) -> ExplorerState:
    """이벤트를 적용한 새 상태를 반환한다."""
    if isinstance(event, LookupStarted):
        return transitions.reset(state)
    if isinstance(event, ResultsLoaded):
        return transitions.load_results(state, event.profile, event.repositories)
    if isinstance(event, FilterChanged):
        if event.name not in FilterState.model_fields:
            raise ValueError(f"Unknown filter: {event.name}")
        value = event.value
        if event.name == "min_stars":
            value = transitions.parse_min_stars(value)
        elif event.name == "language" and not value:
            value = None
        return transitions.apply_filter(state, **{event.name: value})
    if isinstance(event, FiltersCleared):
        return transitions.clear_filters(state)
    if isinstance(event, SortChanged):
        return transitions.change_sort(state, event.field)
    if isinstance(event, PageChanged):
        return transitions.go_to_page(state, event.page)
    raise TypeError(f"Unknown event: {type(event).__name__}")


class Store:
    """현재 상태를 보관하고 이벤트를 구독자에게 전달한다."""

    def __init__(self, initial: ExplorerState | None = None) -> None:
        self.state = initial or ExplorerState()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """구독자를 등록하고 해제 함수를 반환한다."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Event) -> ExplorerState:
        """이벤트를 적용하고 구독자에게 새 상태를 알린다."""
        self.state = reduce(self.state, event)
        logger.debug(f"Dispatched {type(event).__name__}")
        for listener in list(self._listeners):
            listener(self.state, event)
        return self.state
