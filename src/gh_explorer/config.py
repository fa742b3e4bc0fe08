"""설정 관리 모듈."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GH_EXPLORER_",
        extra="ignore",
    )

    # GitHub 업스트림
    github_api_base: str = Field(
        default="https://api.github.com",
        description="GitHub REST API 기본 URL",
    )
    github_token: str | None = Field(default=None, description="GitHub 토큰 (선택)")
    per_page: int = Field(default=100, ge=1, le=100, description="페이지당 저장소 수")
    max_pages: int = Field(default=10, ge=1, description="최대 조회 페이지 수")
    request_timeout: float = Field(default=10.0, description="HTTP 요청 타임아웃 (초)")

    # 프록시 서버
    host: str = Field(default="127.0.0.1", description="서버 바인드 주소")
    port: int = Field(default=3000, description="서버 포트")

    # 탐색기 클라이언트
    api_base_url: str = Field(
        default="http://127.0.0.1:3000/api",
        description="프록시 API 기본 URL",
    )
    history_path: Path = Field(
        default=Path.home() / ".gh_explorer" / "history.json",
        description="최근 검색 기록 파일 경로",
    )
    page_size: int = Field(default=15, ge=1, description="테이블 페이지 크기")
    recent_days: int = Field(default=7, ge=0, description="최근 업데이트 표시 기준 (일)")

    log_level: str = Field(default="INFO", description="로그 레벨")


settings = Settings()
