"""데이터 소스 모듈."""

from gh_explorer.sources.base import UserSource
from gh_explorer.sources.github import GitHubSource

__all__ = ["GitHubSource", "UserSource"]
