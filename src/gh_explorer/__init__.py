"""GitHub 사용자 프로필/저장소 탐색기."""

__version__ = "0.1.0"
