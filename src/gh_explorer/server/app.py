"""GitHub 프록시 API 서버."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gh_explorer.config import Settings, settings as default_settings
from gh_explorer.errors import NotFoundError, UpstreamError
from gh_explorer.server.middleware import RequestLoggerMiddleware
from gh_explorer.sources import GitHubSource, UserSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["github"])


def get_source(request: Request) -> UserSource:
    """앱에 등록된 데이터 소스를 반환한다."""
    source: UserSource = request.app.state.source
    return source


def _message(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = {"message": message}
    if error is not None:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def _username_missing(username: str) -> bool:
    return not username or not username.strip()


@router.get("/user/{username}", response_model=None)
async def get_user(
    username: str,
    source: UserSource = Depends(get_source),
) -> dict[str, Any] | JSONResponse:
    """사용자 프로필을 그대로 전달한다."""
    if _username_missing(username):
        return _message(400, "Username is required")

    try:
        return await source.fetch_profile(username)
    except NotFoundError:
        return _message(404, "User not found")
    except UpstreamError as e:
        logger.error(f"Error fetching user data for {username}: {e}")
        return _message(500, "Error fetching user data from GitHub", str(e))


@router.get("/user/{username}/repos", response_model=None)
async def get_user_repos(
    username: str,
    source: UserSource = Depends(get_source),
) -> list[dict[str, Any]] | JSONResponse:
    """사용자의 전체 저장소 목록을 하나의 배열로 모아 전달한다."""
    if _username_missing(username):
        return _message(400, "Username is required")

    try:
        return await source.fetch_all_repositories(username)
    except NotFoundError:
        return _message(404, "User not found")
    except UpstreamError as e:
        logger.error(f"Error fetching repositories for {username}: {e}")
        return _message(500, "Error fetching repositories from GitHub", str(e))


def create_app(
    source: UserSource | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """프록시 FastAPI 앱을 생성한다.

    Args:
        source: 업스트림 데이터 소스. None이면 GitHubSource 사용.
        settings: 설정. None이면 전역 설정 사용.
    """
    settings = settings or default_settings

    app = FastAPI(title="gh-explorer", version="0.1.0")
    app.state.source = source or GitHubSource(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(router)
    return app
