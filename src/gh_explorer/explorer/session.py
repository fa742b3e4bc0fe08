"""사용자 조회 세션."""

import asyncio
import logging

from pydantic import ValidationError

from gh_explorer.errors import InvalidInputError, NotFoundError, UpstreamError
from gh_explorer.explorer.client import ProxyClient
from gh_explorer.explorer.events import LookupStarted, ResultsLoaded, Store
from gh_explorer.history import SearchHistory
from gh_explorer.models import Profile, Repository

logger = logging.getLogger(__name__)


class ExplorerSession:
    """조회 요청을 실행하고 결과를 Store에 반영한다.

    조회마다 토큰을 발급하며, 더 최신 조회가 시작된 뒤에 도착한 응답은
    버린다 (last-write-wins).
    """

    def __init__(
        self,
        client: ProxyClient,
        history: SearchHistory,
        store: Store | None = None,
    ) -> None:
        self.client = client
        self.history = history
        self.store = store or Store()
        self._token = 0

    async def lookup(self, username: str) -> bool:
        """사용자 프로필과 저장소를 동시에 조회한다.

        Returns:
            결과가 반영되었으면 True, 더 최신 조회에 밀려 버려졌으면 False

        Raises:
            InvalidInputError: 사용자명이 비어 있음 (네트워크 요청 없음)
            NotFoundError: 사용자를 찾을 수 없음
            UpstreamError: 그 외 조회 실패
        """
        username = username.strip()
        if not username:
            raise InvalidInputError("Please enter a GitHub username")

        self._token += 1
        token = self._token
        self.store.dispatch(LookupStarted(username=username))

        try:
            profile_data, repos_data = await asyncio.gather(
                self.client.fetch_profile(username),
                self.client.fetch_repositories(username),
            )
        except NotFoundError:
            logger.info(f"User not found: {username}")
            raise

        if token != self._token:
            logger.info(f"Discarding stale results for {username}")
            return False

        try:
            profile = Profile.from_upstream(profile_data)
            repositories = tuple(Repository.from_upstream(item) for item in repos_data)
        except (ValidationError, TypeError) as e:
            logger.warning(f"Malformed response for {username}: {e}")
            raise UpstreamError(f"Malformed response from proxy: {e}") from e
        self.store.dispatch(ResultsLoaded(profile=profile, repositories=repositories))
        self.history.record(username)
        return True
