"""Local analysis history.

Stores each analysis as one entry in a JSON file, with the headline
scores as separate fields and the full result document alongside for
replay. Entries are appended as saved and listed newest first by timestamp.
"""

from __future__ import annotations

import datetime
import json
import os
import uuid
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .logging import get_logger
from .models import AnalysisResult

DEFAULT_HISTORY_FILE = Path.home() / ".repo-insight" / "history.json"

logger = get_logger("history")


class HistoryError(Exception):
    """History file cannot be read or written."""


def default_history_path() -> Path:
    env = os.environ.get("REPO_INSIGHT_HISTORY")
    return Path(env) if env else DEFAULT_HISTORY_FILE


@dataclass
class HistoryEntry:
    """One stored analysis."""

    user_id: str
    repository_url: str
    repository_name: str
    overall_score: int
    code_quality_score: int
    documentation_score: int
    structure_score: int
    recommendations: list[str] = field(default_factory=list)
    analysis_data: dict[str, Any] = field(default_factory=dict)
    id: str = ""
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(**data)

    @property
    def result(self) -> AnalysisResult:
        return AnalysisResult.from_dict(self.analysis_data)


@dataclass
class ProgressComparison:
    """Latest analysis of a repository against the one before it."""

    current: HistoryEntry
    previous: HistoryEntry | None
    improvement: dict[str, int]


_SCORE_FIELDS = ("overall_score", "code_quality_score", "documentation_score", "structure_score")


class HistoryStore:
    """JSON-file backed history of analyses."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else default_history_path()

    def _load(self) -> list[HistoryEntry]:
        if not self.path.exists():
            return []
        try:
            with open(self.path) as f:
                data = json.load(f)
            return [HistoryEntry.from_dict(item) for item in data.get("analyses", [])]
        except (OSError, json.JSONDecodeError, TypeError, AttributeError) as e:
            raise HistoryError(f"Cannot read history file {self.path}: {e}")

    def _dump(self, entries: list[HistoryEntry]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps({"analyses": [e.to_dict() for e in entries]}, indent=2))
            tmp.replace(self.path)
        except OSError as e:
            raise HistoryError(f"Cannot write history file {self.path}: {e}")

    def save(
        self,
        user_id: str,
        repository_url: str,
        result: AnalysisResult,
        created_at: str | None = None,
    ) -> HistoryEntry:
        entry = HistoryEntry(
            user_id=user_id,
            repository_url=repository_url,
            repository_name=result.repo_info.name,
            overall_score=result.score,
            code_quality_score=result.metrics.code_quality,
            documentation_score=result.metrics.documentation,
            structure_score=result.metrics.project_structure,
            recommendations=[r.title for r in result.recommendations],
            analysis_data=result.to_dict(),
            id=uuid.uuid4().hex,
            created_at=created_at or datetime.datetime.now(datetime.timezone.utc).isoformat(),
        )
        entries = self._load()
        entries.append(entry)
        self._dump(entries)
        logger.info("Saved analysis of %s to %s", repository_url, self.path)
        return entry

    def user_analyses(self, user_id: str) -> list[HistoryEntry]:
        """All analyses for a user, newest first by ``created_at``.

        Entries with equal timestamps keep the later-saved one first.
        """
        entries = [e for e in reversed(self._load()) if e.user_id == user_id]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)

    def repository_history(self, user_id: str, repository_url: str) -> list[HistoryEntry]:
        """Analyses of one repository, newest first."""
        return [e for e in self.user_analyses(user_id) if e.repository_url == repository_url]

    def progress_comparison(self, user_id: str, repository_url: str) -> ProgressComparison | None:
        history = self.repository_history(user_id, repository_url)
        if not history:
            return None

        current = history[0]
        previous = history[1] if len(history) > 1 else None
        improvement = {
            name: (getattr(current, name) - getattr(previous, name)) if previous else 0
            for name in _SCORE_FIELDS
        }
        return ProgressComparison(current=current, previous=previous, improvement=improvement)

    def unique_repositories(self, user_id: str) -> list[HistoryEntry]:
        """Latest analysis per repository URL, newest first."""
        seen: set[str] = set()
        latest = []
        for entry in self.user_analyses(user_id):
            if entry.repository_url not in seen:
                seen.add(entry.repository_url)
                latest.append(entry)
        return latest
