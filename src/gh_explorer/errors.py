"""예외 정의."""


class ExplorerError(Exception):
    """gh-explorer 기본 예외."""


class InvalidInputError(ExplorerError):
    """사용자 입력이 올바르지 않을 때 발생한다 (예: 빈 사용자명)."""


class NotFoundError(ExplorerError):
    """업스트림이 사용자를 찾지 못했을 때 발생한다."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class UpstreamError(ExplorerError):
    """업스트림 요청이 실패했을 때 발생한다."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """
        Args:
            message: 오류 메시지
            status_code: HTTP 상태 코드. 네트워크 오류면 None.
        """
        super().__init__(message)
        self.status_code = status_code
