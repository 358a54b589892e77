"""Scoring engine. Pure functions, no I/O.

Maps a RepositorySnapshot to an AnalysisResult: three metric calculators,
a weighted overall score, technology extraction against the reference
table, then skill gaps, recommendations and insights (see ``advisor.py``).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from . import constants as C
from .advisor import generate_recommendations, identify_skill_gaps, summarize_insights
from .logging import get_logger
from .models import AnalysisResult, Metrics, RepoInfo, TechnologyRecord
from .snapshot import RepositorySnapshot, validate_snapshot
from .technologies import DEFAULT_TECHNOLOGIES, TechnologyInfo, TechnologyTable, flatten_table

logger = get_logger("analyzer")


def _clamp(score: int) -> int:
    return max(0, min(C.MAX_SCORE, score))


# --- Metric calculators ---

def calculate_code_quality(snapshot: RepositorySnapshot) -> int:
    """Tests, CI, license, activity, collaboration and issue backlog."""
    score = C.CODE_QUALITY_BASE_SCORE
    if snapshot.has_tests:
        score += C.TESTS_SCORE
    if snapshot.has_ci:
        score += C.CI_SCORE
    if snapshot.has_license:
        score += C.LICENSE_SCORE
    if snapshot.commit_count > C.ACTIVE_COMMIT_THRESHOLD:
        score += C.COMMIT_SCORE
    if snapshot.commit_count > C.VERY_ACTIVE_COMMIT_THRESHOLD:
        score += C.VERY_ACTIVE_COMMIT_SCORE
    if snapshot.contributor_count > C.COLLABORATION_THRESHOLD:
        score += C.CONTRIBUTORS_SCORE
    if snapshot.contributor_count > C.STRONG_COLLABORATION_THRESHOLD:
        score += C.STRONG_COLLABORATION_SCORE
    if snapshot.open_issues < C.LOW_ISSUE_THRESHOLD:
        score += C.LOW_ISSUE_COUNT_SCORE
    return _clamp(score)


def calculate_documentation(snapshot: RepositorySnapshot) -> int:
    """README, supplementary docs, a meaningful description, license."""
    score = C.DOCUMENTATION_BASE_SCORE
    if snapshot.has_readme:
        score += C.README_SCORE
    if snapshot.has_documentation:
        score += C.ADDITIONAL_DOC_SCORE
    if len(snapshot.description or "") > C.MEANINGFUL_DESCRIPTION_LENGTH:
        score += C.MEANINGFUL_DESCRIPTION_SCORE
    if snapshot.has_license:
        score += C.LICENSE_DOC_SCORE
    return _clamp(score)


def _is_config_entry(name: str) -> bool:
    return (
        "config" in name
        or name.endswith(".yml")
        or (name.endswith(".json") and name != "package.json")
    )


def calculate_project_structure(snapshot: RepositorySnapshot) -> int:
    """Config files, source directory, manifest, .gitignore, language count."""
    names = [n.lower() for n in snapshot.file_names]
    score = C.PROJECT_STRUCTURE_BASE_SCORE
    if any(_is_config_entry(n) for n in names):
        score += C.CONFIG_SCORE
    if any(n in C.SOURCE_DIRS for n in names):
        score += C.SRC_DIR_SCORE
    if any(n in C.PACKAGE_MANIFESTS for n in names):
        score += C.PACKAGE_MANAGER_SCORE
    if ".gitignore" in names:
        score += C.GITIGNORE_SCORE
    if len(snapshot.language_byte_counts) > C.MULTI_LANG_THRESHOLD:
        score += C.MULTI_LANG_SCORE
    return _clamp(score)


def calculate_overall_score(metrics: Metrics) -> int:
    """Weighted sum rounded half-up, computed in decimal."""
    weighted = (
        Decimal(metrics.code_quality) * Decimal(C.CODE_QUALITY_WEIGHT)
        + Decimal(metrics.documentation) * Decimal(C.DOCUMENTATION_WEIGHT)
        + Decimal(metrics.project_structure) * Decimal(C.PROJECT_STRUCTURE_WEIGHT)
    )
    return _clamp(int(weighted.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


# --- Technology extraction ---

JS_FRAMEWORKS = ("React", "Next.js", "Vue", "Angular", "Express", "NestJS")
PY_FRAMEWORKS = ("Django", "FastAPI", "Flask")
DATABASES = ("PostgreSQL", "MongoDB", "MySQL", "Redis")

# Entries added without a reference-table lookup
NODE_JS = TechnologyInfo("framework", "high", ("JavaScript", "Express", "npm"))
DOCKER = TechnologyInfo("devops", "high", ("Containerization", "Kubernetes"))
KUBERNETES = TechnologyInfo("devops", "high", ("Docker", "Orchestration", "Cloud"))
GITHUB_ACTIONS = TechnologyInfo("devops", "high", ("CI/CD", "Automation", "YAML"))
JEST = TechnologyInfo("tool", "high", ("Testing", "JavaScript", "TDD"))
PYTEST = TechnologyInfo("tool", "high", ("Testing", "Python", "TDD"))


class _Inventory:
    """Ordered, name-unique accumulator for TechnologyRecords."""

    def __init__(self) -> None:
        self._records: list[TechnologyRecord] = []
        self._names: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def add(self, name: str, info: TechnologyInfo, confidence: str, category: str | None = None) -> None:
        if name in self._names:
            return
        self._names.add(name)
        self._records.append(TechnologyRecord(
            name=name,
            category=category or info.category,
            confidence=confidence,
            market_demand=info.demand,
            related_skills=tuple(info.related),
        ))

    def records(self) -> tuple[TechnologyRecord, ...]:
        return tuple(self._records)


def extract_technologies(
    snapshot: RepositorySnapshot,
    table: TechnologyTable = DEFAULT_TECHNOLOGIES,
) -> tuple[TechnologyRecord, ...]:
    """Detect and infer technologies in discovery order, first 15 kept.

    Framework, container and database inference is a plain substring test
    on the joined file names, so ``docker-notes.txt`` counts as Docker.
    """
    lookup = flatten_table(table)
    blob = snapshot.file_blob
    found = _Inventory()

    # Languages reported by the host
    lang = snapshot.primary_language
    if lang and lang in lookup:
        found.add(lang, lookup[lang], "detected")
    for lang in snapshot.language_byte_counts:
        if lang in lookup:
            found.add(lang, lookup[lang], "detected")

    # JavaScript ecosystem
    if "package.json" in blob:
        for fw in JS_FRAMEWORKS:
            if fw.lower() in blob and fw in lookup:
                found.add(fw, lookup[fw], "inferred")
        found.add("Node.js", NODE_JS, "inferred")

    # Python ecosystem
    if "requirements.txt" in blob or "pipfile" in blob:
        for fw in PY_FRAMEWORKS:
            if fw.lower() in blob and fw in lookup:
                found.add(fw, lookup[fw], "inferred")

    # DevOps
    if "docker" in blob:
        found.add("Docker", DOCKER, "detected")
    if "kubernetes" in blob or "k8s" in blob:
        found.add("Kubernetes", KUBERNETES, "detected")
    if snapshot.has_ci and ".github" in blob:
        found.add("GitHub Actions", GITHUB_ACTIONS, "detected")

    # Test runners
    if snapshot.has_tests:
        if "jest" in blob or "package.json" in blob:
            found.add("Jest", JEST, "inferred")
        if "pytest" in blob or "requirements.txt" in blob:
            found.add("Pytest", PYTEST, "inferred")

    for db in DATABASES:
        if db.lower() in blob and db in lookup:
            found.add(db, lookup[db], "inferred", category="database")

    return found.records()[: C.MAX_TECHNOLOGIES]


# --- Orchestration ---

def analyze(
    snapshot: RepositorySnapshot,
    table: TechnologyTable = DEFAULT_TECHNOLOGIES,
) -> AnalysisResult:
    """Score a snapshot. Deterministic and side-effect free.

    Raises InvalidSnapshot when the snapshot is malformed.
    """
    validate_snapshot(snapshot)

    metrics = Metrics(
        code_quality=calculate_code_quality(snapshot),
        documentation=calculate_documentation(snapshot),
        project_structure=calculate_project_structure(snapshot),
    )
    score = calculate_overall_score(metrics)

    technologies = extract_technologies(snapshot, table)
    skill_gaps = identify_skill_gaps(snapshot, technologies)
    recommendations = generate_recommendations(snapshot, metrics, technologies, skill_gaps)
    insights = summarize_insights(snapshot, score, technologies, skill_gaps)

    logger.debug(
        "Analyzed %s: score=%d (%d/%d/%d), %d technologies, %d gaps, %d recommendations",
        snapshot.name, score,
        metrics.code_quality, metrics.documentation, metrics.project_structure,
        len(technologies), len(skill_gaps), len(recommendations),
    )

    return AnalysisResult(
        score=score,
        metrics=metrics,
        technologies=technologies,
        skill_gaps=skill_gaps,
        recommendations=recommendations,
        repo_info=RepoInfo(
            name=snapshot.name,
            description=snapshot.description,
            stars=snapshot.stars,
            forks=snapshot.forks,
            last_updated=snapshot.last_updated,
        ),
        insights=insights,
    )


class Analyzer:
    """Binds a technology table to ``analyze``. Holds no other state."""

    def __init__(self, table: TechnologyTable = DEFAULT_TECHNOLOGIES):
        self.table = table

    def analyze(self, snapshot: RepositorySnapshot) -> AnalysisResult:
        return analyze(snapshot, self.table)
