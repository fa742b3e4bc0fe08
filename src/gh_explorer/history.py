"""최근 검색 기록 저장소."""

import json
import logging
from pathlib import Path

from gh_explorer.config import settings

logger = logging.getLogger(__name__)

STORAGE_KEY = "githubSearchHistory"
MAX_ENTRIES = 5


class SearchHistory:
    """최근 검색한 사용자명을 최신순으로 최대 5개까지 보관한다."""

    def __init__(self, path: Path | None = None, max_entries: int = MAX_ENTRIES) -> None:
        """
        Args:
            path: 기록 파일 경로. None이면 설정값 사용.
            max_entries: 최대 보관 개수
        """
        self.path = path or settings.history_path
        self.max_entries = max_entries
        self._entries = self._load()

    def _load(self) -> list[str]:
        """저장된 기록을 읽는다. 파일이 없거나 손상되었으면 빈 목록."""
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable search history {self.path}: {e}")
            return []

        entries = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.warning(f"Ignoring malformed search history {self.path}")
            return []

        unique: list[str] = []
        for entry in entries:
            if isinstance(entry, str) and entry not in unique:
                unique.append(entry)
        return unique[: self.max_entries]

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({STORAGE_KEY: self._entries}, ensure_ascii=False),
            encoding="utf-8",
        )

    def record(self, username: str) -> None:
        """사용자명을 맨 앞에 추가한다. 이미 있으면 맨 앞으로 옮긴다."""
        entries = [entry for entry in self._entries if entry != username]
        entries.insert(0, username)
        self._entries = entries[: self.max_entries]
        self._save()

    def clear(self) -> None:
        """기록을 비우고 저장 파일을 삭제한다."""
        self._entries = []
        self.path.unlink(missing_ok=True)

    def list(self) -> list[str]:
        """기록을 최신순으로 반환한다."""
        return list(self._entries)
