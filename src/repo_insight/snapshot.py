"""Repository snapshot - the normalized input to the scoring engine.

A snapshot is built once per analysis by the metadata intake (see
``github.py``) and is never mutated afterwards. The presence detectors
below derive the boolean flags from a repository's top-level listing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields


class InvalidSnapshot(ValueError):
    """Snapshot violates a precondition of the scoring engine."""


@dataclass(frozen=True)
class RepositorySnapshot:
    """Metadata of one repository at analysis time."""

    name: str
    description: str = ""
    last_updated: str = ""

    # Popularity
    stars: int = 0
    forks: int = 0
    open_issues: int = 0

    # Languages
    primary_language: str | None = None
    language_byte_counts: Mapping[str, int] = field(default_factory=dict)

    # Presence flags (derived from the top-level listing)
    has_readme: bool = False
    has_license: bool = False
    has_tests: bool = False
    has_ci: bool = False
    has_documentation: bool = False

    # Lower-cased top-level entry names, in listing order
    file_names: Sequence[str] = ()

    # Activity
    commit_count: int = 0
    contributor_count: int = 1

    @property
    def file_blob(self) -> str:
        """All file names joined into one lower-cased string."""
        return " ".join(self.file_names).lower()

    def to_dict(self) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["language_byte_counts"] = dict(self.language_byte_counts)
        data["file_names"] = list(self.file_names)
        return data


_COUNT_FIELDS = ("stars", "forks", "open_issues", "commit_count", "contributor_count")
_FLAG_FIELDS = ("has_readme", "has_license", "has_tests", "has_ci", "has_documentation")


def validate_snapshot(snapshot: RepositorySnapshot) -> None:
    """Fail fast on malformed input. Raises InvalidSnapshot naming the field."""
    if not isinstance(snapshot, RepositorySnapshot):
        raise InvalidSnapshot(
            f"expected RepositorySnapshot, got {type(snapshot).__name__}"
        )
    if not isinstance(snapshot.name, str):
        raise InvalidSnapshot("name must be a string")
    for attr in ("description", "last_updated"):
        if not isinstance(getattr(snapshot, attr), str):
            raise InvalidSnapshot(f"{attr} must be a string")
    if snapshot.primary_language is not None and not isinstance(snapshot.primary_language, str):
        raise InvalidSnapshot("primary_language must be a string or None")

    for attr in _COUNT_FIELDS:
        value = getattr(snapshot, attr)
        # bool is an int subclass; a flag in a count slot is a caller bug
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSnapshot(f"{attr} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidSnapshot(f"{attr} must be non-negative, got {value}")

    for attr in _FLAG_FIELDS:
        if not isinstance(getattr(snapshot, attr), bool):
            raise InvalidSnapshot(f"{attr} must be a boolean")

    if not isinstance(snapshot.language_byte_counts, Mapping):
        raise InvalidSnapshot("language_byte_counts must be a mapping")
    for lang, size in snapshot.language_byte_counts.items():
        if not isinstance(lang, str):
            raise InvalidSnapshot(f"language_byte_counts key {lang!r} must be a string")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidSnapshot(
                f"language_byte_counts[{lang!r}] must be a non-negative integer"
            )

    if isinstance(snapshot.file_names, str) or not isinstance(snapshot.file_names, Sequence):
        raise InvalidSnapshot("file_names must be a sequence of strings")
    for entry in snapshot.file_names:
        if not isinstance(entry, str):
            raise InvalidSnapshot(f"file_names entry {entry!r} must be a string")


# --- Presence detection over a top-level listing ---

README_PATTERNS = ("readme",)

LICENSE_PATTERNS = ("license", "licence", "copying", "unlicense")

TEST_PATTERNS = (
    "test", "spec", "__tests__",
    "jest.config.js", "jest.config.ts", "jest.config.json",
    "pytest.ini", "pyproject.toml", "tox.ini",
    "mocha.opts", "karma.conf.js",
    "vitest.config.js", "vitest.config.ts",
    "cypress.config.js", "playwright.config.js", "playwright.config.ts",
)

CI_MARKERS = {
    ".github", ".gitlab-ci.yml", ".travis.yml", "jenkinsfile", ".circleci",
    "azure-pipelines.yml", "appveyor.yml", ".appveyor.yml",
    "bitbucket-pipelines.yml", "buildkite.yml", "drone.yml", ".drone.yml",
    "wercker.yml", "cloudbuild.yaml", "cloudbuild.yml",
    "codebuild.yml", "codebuild.yaml",
}

DOC_PATTERNS = (
    "docs", "documentation", "doc", "wiki", "guide", "manual", "tutorial",
    "api-docs", "apidocs", "api", "reference",
    "changelog", "history.md", "history.txt",
    "contributing", "code_of_conduct", "security",
)


def _lowered(file_names: Sequence[str]) -> list[str]:
    return [name.lower() for name in file_names]


def detect_readme(file_names: Sequence[str]) -> bool:
    return any(name.startswith(README_PATTERNS) for name in _lowered(file_names))


def detect_license(file_names: Sequence[str]) -> bool:
    return any(p in name for name in _lowered(file_names) for p in LICENSE_PATTERNS)


def detect_tests(file_names: Sequence[str]) -> bool:
    return any(p in name for name in _lowered(file_names) for p in TEST_PATTERNS)


def detect_ci(file_names: Sequence[str]) -> bool:
    """Exact-name match only; a file merely mentioning CI does not count."""
    return any(name in CI_MARKERS for name in _lowered(file_names))


def detect_documentation(file_names: Sequence[str]) -> bool:
    return any(p in name for name in _lowered(file_names) for p in DOC_PATTERNS)
