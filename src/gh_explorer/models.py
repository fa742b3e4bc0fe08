"""데이터 모델 정의."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """GitHub 사용자 프로필."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str = Field(description="로그인 이름")
    name: str | None = Field(default=None, description="표시 이름")
    avatar_url: str | None = Field(default=None, description="아바타 이미지 URL")
    bio: str | None = Field(default=None, description="자기소개")
    location: str | None = Field(default=None, description="위치")
    company: str | None = Field(default=None, description="소속")
    blog: str | None = Field(default=None, description="블로그 URL")
    public_repos: int = Field(default=0, description="공개 저장소 수")
    followers: int = Field(default=0, description="팔로워 수")
    following: int = Field(default=0, description="팔로잉 수")
    created_at: datetime | None = Field(default=None, description="가입 시각")
    html_url: str = Field(default="", description="프로필 URL")

    @property
    def display_name(self) -> str:
        """표시 이름이 없으면 로그인 이름을 쓴다."""
        return self.name or self.login

    @classmethod
    def from_upstream(cls, data: dict[str, Any]) -> "Profile":
        """업스트림 사용자 객체를 Profile로 변환한다."""
        return cls.model_validate(data)


class Repository(BaseModel):
    """GitHub 저장소 정보."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(description="저장소 이름")
    description: str | None = Field(default=None, description="저장소 설명")
    homepage: str | None = Field(default=None, description="홈페이지 URL")
    language: str | None = Field(default=None, description="주 프로그래밍 언어")
    stars: int = Field(default=0, alias="stargazers_count", description="스타 수")
    forks: int = Field(default=0, alias="forks_count", description="포크 수")
    updated_at: datetime = Field(description="마지막 업데이트 시각")
    url: str = Field(default="", alias="html_url", description="저장소 URL")

    @classmethod
    def from_upstream(cls, data: dict[str, Any]) -> "Repository":
        """업스트림 저장소 객체를 Repository로 변환한다."""
        return cls.model_validate(data)
