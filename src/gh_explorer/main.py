"""CLI 엔트리포인트."""

import asyncio
import logging
import shlex
from typing import Annotated

import typer
from rich.console import Console
from rich.prompt import Prompt

from gh_explorer.config import settings
from gh_explorer.errors import InvalidInputError, NotFoundError, UpstreamError
from gh_explorer.explorer.client import ProxyClient
from gh_explorer.explorer.events import (
    Event,
    FilterChanged,
    FiltersCleared,
    LookupStarted,
    PageChanged,
    SortChanged,
    Store,
)
from gh_explorer.explorer.session import ExplorerSession
from gh_explorer.explorer.state import ExplorerState, PageState, SortField
from gh_explorer.history import SearchHistory
from gh_explorer.pipeline import derive_view
from gh_explorer.render import render_history, render_state

console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gh-explorer",
    help="GitHub 사용자의 프로필과 저장소를 탐색합니다.",
    no_args_is_help=True,
)

HELP_TEXT = """\
[bold]명령어[/bold]
  user <이름>        사용자 조회
  search <검색어>    이름/설명/언어 검색 (인자 없으면 해제)
  lang <언어|->      언어 필터
  stars <수|->       최소 스타 수 필터
  desc / home        설명 있음 / 홈페이지 있음 토글
  sort <name|stars|forks|updated>  정렬 (같은 기준이면 방향 전환)
  page <번호>, next, prev
  clear              필터 해제
  history            최근 검색 보기
  recent <번호>      최근 검색의 해당 번호 사용자 다시 조회
  quit               종료"""


def command_to_event(line: str, state: ExplorerState) -> Event | None:
    """입력 명령을 이벤트로 변환한다. 이벤트가 아닌 명령이면 None.

    Raises:
        ValueError: 명령 인자가 올바르지 않음
    """
    parts = shlex.split(line)
    if not parts:
        return None
    command, args = parts[0].lower(), parts[1:]
    arg = " ".join(args)

    if command == "search":
        return FilterChanged(name="search_term", value=arg)
    if command == "lang":
        return FilterChanged(name="language", value=None if arg in ("", "-") else arg)
    if command == "stars":
        return FilterChanged(name="min_stars", value=None if arg in ("", "-") else arg)
    if command == "desc":
        return FilterChanged(name="has_description", value=not state.filters.has_description)
    if command == "home":
        return FilterChanged(name="has_homepage", value=not state.filters.has_homepage)
    if command == "clear":
        return FiltersCleared()
    if command == "sort":
        return SortChanged(field=SortField(arg or SortField.updated.value))
    if command == "page":
        return PageChanged(page=int(arg))
    if command in ("next", "prev"):
        view = derive_view(state)
        step = 1 if command == "next" else -1
        return PageChanged(page=max(1, min(view.page + step, view.total_pages)))
    return None


def resolve_recent(arg: str, entries: list[str]) -> str:
    """최근 검색 번호(1부터)를 사용자명으로 바꾼다.

    Raises:
        ValueError: 번호가 숫자가 아니거나 범위를 벗어남
    """
    index = int(arg.strip().lstrip("#"))
    if not 1 <= index <= len(entries):
        raise ValueError(f"No recent search #{index}")
    return entries[index - 1]


async def _lookup(session: ExplorerSession, username: str) -> None:
    """조회를 실행하고 오류를 사용자 메시지로 보여준다."""
    with console.status(f"[cyan]{username} 조회 중...[/cyan]"):
        try:
            await session.lookup(username)
        except InvalidInputError:
            console.print("[red]GitHub 사용자명을 입력하세요.[/red]")
        except NotFoundError:
            console.print("[red]사용자를 찾을 수 없습니다. 사용자명을 확인하고 다시 시도하세요.[/red]")
        except UpstreamError as e:
            logger.error(f"Lookup failed: {e}")
            console.print("[red]데이터를 가져올 수 없습니다. 연결을 확인하고 다시 시도하세요.[/red]")


async def _explore(username: str | None, api_url: str | None) -> None:
    """대화형 탐색 루프를 실행한다."""
    history = SearchHistory()
    store = Store(ExplorerState(paging=PageState(page_size=settings.page_size)))
    session = ExplorerSession(
        client=ProxyClient(base_url=api_url), history=history, store=store
    )

    def _on_change(state: ExplorerState, event: Event) -> None:
        if isinstance(event, LookupStarted):
            return
        console.print(render_state(state))

    session.store.subscribe(_on_change)

    history_text = render_history(history.list())
    if history_text is not None:
        console.print(history_text)
    console.print(HELP_TEXT)

    if username:
        await _lookup(session, username)

    while True:
        line = Prompt.ask("[bold blue]gh-explorer[/bold blue]", default="", console=console)
        command = line.strip().split(" ", 1)[0].lower()

        if command in ("quit", "exit", "q"):
            return
        if command == "user":
            await _lookup(session, line.strip()[len(command) :])
            continue
        if command == "recent":
            try:
                recent = resolve_recent(line.strip()[len(command) :], history.list())
            except ValueError as e:
                console.print(f"[red]잘못된 입력: {e}[/red]")
                continue
            await _lookup(session, recent)
            continue
        if command == "history":
            history_text = render_history(history.list())
            console.print(history_text or "[dim]최근 검색 기록이 없습니다.[/dim]")
            continue
        if command == "help":
            console.print(HELP_TEXT)
            continue

        try:
            event = command_to_event(line, session.store.state)
        except ValueError as e:
            console.print(f"[red]잘못된 입력: {e}[/red]")
            continue
        if event is None:
            if command:
                console.print(f"[yellow]알 수 없는 명령: {command}[/yellow]")
            continue
        if session.store.state.profile is None:
            console.print("[yellow]먼저 `user <이름>`으로 사용자를 조회하세요.[/yellow]")
            continue
        session.store.dispatch(event)


@app.command()
def explore(
    username: Annotated[
        str | None,
        typer.Argument(help="바로 조회할 GitHub 사용자명"),
    ] = None,
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="프록시 API 기본 URL"),
    ] = None,
) -> None:
    """대화형으로 사용자 프로필과 저장소를 탐색합니다."""
    try:
        asyncio.run(_explore(username, api_url))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]중단됨[/dim]")
        raise typer.Exit(0) from None
    except Exception as e:
        console.print(f"[red]오류 발생: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="바인드 주소")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="포트")] = None,
) -> None:
    """GitHub 프록시 API 서버를 실행합니다."""
    import uvicorn

    from gh_explorer.server import create_app

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        create_app(),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command("history")
def show_history(
    clear: Annotated[bool, typer.Option("--clear", help="기록 삭제")] = False,
) -> None:
    """최근 검색 기록을 보여주거나 삭제합니다."""
    history = SearchHistory()
    if clear:
        history.clear()
        console.print("[green]검색 기록을 삭제했습니다.[/green]")
        return

    history_text = render_history(history.list())
    console.print(history_text or "[dim]최근 검색 기록이 없습니다.[/dim]")


if __name__ == "__main__":
    app()
