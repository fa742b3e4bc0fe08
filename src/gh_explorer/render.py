"""Rich 기반 뷰 렌더링 모듈.

모든 함수는 상태를 받아 renderable을 반환할 뿐, 상태를 바꾸지 않는다.
"""

from datetime import UTC, datetime, timedelta

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gh_explorer.config import settings
from gh_explorer.explorer.state import (
    ExplorerState,
    FilterState,
    SortDirection,
    SortField,
    SortState,
)
from gh_explorer.models import Profile, Repository
from gh_explorer.pipeline import RepositoryView, derive_view

PAGE_WINDOW = 5


def format_url(url: str) -> str:
    """스킴이 없는 URL에 https://를 붙인다."""
    return url if url.startswith("http") else f"https://{url}"


def sort_indicator(sort: SortState, field: SortField) -> str:
    """정렬 중인 컬럼이면 방향 화살표를 반환한다."""
    if sort.field != field:
        return ""
    return " ↑" if sort.direction == SortDirection.asc else " ↓"


def is_recent(repo: Repository, now: datetime, days: int = 7) -> bool:
    """now 기준 days일 이내에 업데이트되었는지 확인한다."""
    return now - repo.updated_at < timedelta(days=days)


def pagination_window(current: int, total: int, width: int = PAGE_WINDOW) -> list[int]:
    """현재 페이지를 중심으로 최대 width개의 페이지 번호를 반환한다."""
    half = width // 2
    start = max(1, current - half)
    end = min(total, current + half)
    return list(range(start, end + 1))


def render_pagination(current: int, total: int) -> Text:
    """이전/다음 버튼과 페이지 번호를 렌더링한다."""
    parts: list[Text] = []
    if current > 1:
        parts.append(Text("← 이전", style="cyan"))
    for number in pagination_window(current, total):
        if number == current:
            parts.append(Text(f"[{number}]", style="bold reverse"))
        else:
            parts.append(Text(str(number), style="cyan"))
    if current < total:
        parts.append(Text("다음 →", style="cyan"))
    return Text("  ").join(parts)


def render_profile(profile: Profile) -> Panel:
    """사용자 프로필 패널을 렌더링한다."""
    lines = [
        Text(profile.bio or "자기소개 없음"),
        Text(f"📍 {profile.location or '위치 정보 없음'}"),
        Text(f"🏢 {profile.company or '소속 없음'}"),
        Text(
            f"📊 공개 저장소: {profile.public_repos:,} | "
            f"팔로워: {profile.followers:,} | 팔로잉: {profile.following:,}"
        ),
    ]
    if profile.avatar_url:
        avatar = f"[link={profile.avatar_url}]{escape(profile.avatar_url)}[/link]"
        lines.insert(0, Text.from_markup(f"🖼️  {avatar}"))
    if profile.blog:
        lines.append(Text(f"🌐 {format_url(profile.blog)}"))
    if profile.created_at:
        lines.append(Text(f"📅 가입일: {profile.created_at:%Y-%m-%d}"))
    lines.append(Text(f"🔗 {profile.html_url}", style="dim"))

    title = f"[bold]{escape(profile.display_name)}[/bold]"
    if profile.name:
        title += f" [dim]({escape(profile.login)})[/dim]"
    return Panel(Group(*lines), title=title, border_style="blue")


def _describe_filters(filters: FilterState) -> str:
    parts = []
    if filters.search_term:
        parts.append(f"검색='{filters.search_term}'")
    if filters.language:
        parts.append(f"언어={filters.language}")
    if filters.min_stars is not None:
        parts.append(f"⭐≥{filters.min_stars}")
    if filters.has_description:
        parts.append("설명 있음")
    if filters.has_homepage:
        parts.append("홈페이지 있음")
    return " · ".join(parts)


def _build_table(view: RepositoryView, sort: SortState, now: datetime) -> Table:
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column(f"저장소{sort_indicator(sort, SortField.name)}", style="bold")
    table.add_column("설명")
    table.add_column(f"⭐ Stars{sort_indicator(sort, SortField.stars)}", justify="right")
    table.add_column(f"🍴 Forks{sort_indicator(sort, SortField.forks)}", justify="right")
    table.add_column("언어", width=12)
    table.add_column(f"업데이트{sort_indicator(sort, SortField.updated)}", width=14)

    for repo in view.items:
        name = f"[link={repo.url}]{escape(repo.name)}[/link]"
        if repo.homepage:
            name += f" [link={format_url(repo.homepage)}]🌍[/link]"
        updated = f"{repo.updated_at:%Y-%m-%d}"
        if is_recent(repo, now, settings.recent_days):
            updated = f"[green]✨ {updated}[/green]"
        table.add_row(
            name,
            escape(repo.description) if repo.description else "[dim]설명 없음[/dim]",
            f"{repo.stars:,}",
            f"{repo.forks:,}",
            escape(repo.language or "-"),
            updated,
        )
    return table


def render_repositories(state: ExplorerState, now: datetime | None = None) -> RenderableType:
    """저장소 테이블과 필터/페이지 정보를 렌더링한다."""
    now = now or datetime.now(UTC)
    view = derive_view(state)

    if view.filtered_count == 0:
        if view.total_count == 0:
            return Text("저장소가 없습니다.", style="yellow")
        return Group(
            Text("필터 조건에 맞는 저장소가 없습니다.", style="yellow"),
            Text("`clear` 명령으로 필터를 해제할 수 있습니다.", style="dim"),
        )

    parts: list[RenderableType] = [
        Text(f"저장소 ({view.filtered_count}/{view.total_count}개 표시)", style="bold"),
        Text(
            f"{view.start_index}-{view.end_index} / {view.filtered_count}개 저장소",
            style="dim",
        ),
    ]
    summary = _describe_filters(state.filters)
    if summary:
        parts.append(Text(f"필터: {summary}", style="dim"))
    if view.languages:
        parts.append(Text(f"언어: {', '.join(view.languages)}", style="dim"))

    parts.append(_build_table(view, state.sort, now))

    if view.total_pages > 1:
        parts.append(render_pagination(view.page, view.total_pages))
    return Group(*parts)


def render_history(entries: list[str]) -> Text | None:
    """최근 검색 기록을 렌더링한다. 기록이 없으면 None."""
    if not entries:
        return None
    numbered = "  ".join(f"{i}. {entry}" for i, entry in enumerate(entries, start=1))
    return Text.assemble(
        ("최근 검색: ", "bold"), numbered, ("  (recent <번호>로 다시 조회)", "dim")
    )


def render_state(
    state: ExplorerState,
    history: list[str] | None = None,
    now: datetime | None = None,
) -> RenderableType:
    """전체 화면을 렌더링한다."""
    parts: list[RenderableType] = []
    history_text = render_history(history or [])
    if history_text is not None:
        parts.append(history_text)
    if state.profile is not None:
        parts.append(render_profile(state.profile))
        parts.append(render_repositories(state, now=now))
    return Group(*parts)
