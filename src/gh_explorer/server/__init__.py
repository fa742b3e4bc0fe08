"""프록시 서버 모듈."""

from gh_explorer.server.app import create_app

__all__ = ["create_app"]
