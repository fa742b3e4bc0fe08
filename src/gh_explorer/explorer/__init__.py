"""탐색기 상태, 이벤트, 조회 세션 모듈."""

from gh_explorer.explorer.events import (
    Event,
    FilterChanged,
    FiltersCleared,
    LookupStarted,
    PageChanged,
    ResultsLoaded,
    SortChanged,
    Store,
)
from gh_explorer.explorer.state import (
    ExplorerState,
    FilterState,
    PageState,
    SortDirection,
    SortField,
    SortState,
)

__all__ = [
    "Event",
    "ExplorerState",
    "FilterChanged",
    "FilterState",
    "FiltersCleared",
    "LookupStarted",
    "PageChanged",
    "PageState",
    "ResultsLoaded",
    "SortChanged",
    "SortDirection",
    "SortField",
    "SortState",
    "Store",
]
