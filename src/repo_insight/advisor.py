"""Skill gaps, recommendations and insights.

Each generator walks a fixed, ordered list of ``(predicate, record)`` rules
and keeps the records whose predicate holds. Lists are truncated in rule
order; they are never re-sorted by priority or impact.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from . import constants as C
from .models import Insights, Metrics, Recommendation, SkillGap, TechnologyRecord
from .snapshot import RepositorySnapshot


@dataclass(frozen=True)
class Facts:
    """Everything the rules may look at, computed once per analysis."""

    snapshot: RepositorySnapshot
    technologies: tuple[TechnologyRecord, ...]
    metrics: Metrics | None = None
    skill_gaps: tuple[SkillGap, ...] = ()

    @property
    def tech_names(self) -> set[str]:
        return {t.name for t in self.technologies}

    def has_tech(self, name: str) -> bool:
        return name in self.tech_names

    def has_category(self, category: str) -> bool:
        return any(t.category == category for t in self.technologies)

    @property
    def high_demand(self) -> list[TechnologyRecord]:
        return [t for t in self.technologies if t.market_demand == "high"]

    @property
    def critical_gaps(self) -> list[SkillGap]:
        return [g for g in self.skill_gaps if g.priority == "critical"]


Rule = tuple[Callable[[Facts], bool], Any]


def _apply(rules: Sequence[Rule], facts: Facts, limit: int) -> tuple:
    """Evaluate rules in order; callables in the record slot build the record."""
    out = []
    for predicate, record in rules:
        if predicate(facts):
            out.append(record(facts) if callable(record) else record)
    return tuple(out[:limit])


# --- Skill gaps ---

SKILL_GAP_RULES: list[Rule] = [
    # critical
    (lambda f: not f.snapshot.has_tests, SkillGap(
        skill="Automated Testing",
        priority="critical",
        reason="Testing is essential for code quality and is expected by 95% of employers",
        learning_resources=("Jest Documentation", "Testing Library", "Test-Driven Development"),
        estimated_impact=15,
    )),
    (lambda f: not f.snapshot.has_ci, SkillGap(
        skill="CI/CD Pipeline",
        priority="critical",
        reason="Continuous Integration is a standard practice in modern development teams",
        learning_resources=("GitHub Actions", "GitLab CI", "Jenkins"),
        estimated_impact=15,
    )),
    # high
    (lambda f: not f.has_tech("Docker"), SkillGap(
        skill="Docker & Containerization",
        priority="high",
        reason="Containerization is used by 80% of companies for deployment and development",
        learning_resources=("Docker Documentation", "Docker Compose", "Container Best Practices"),
        estimated_impact=10,
    )),
    (lambda f: f.has_tech("JavaScript") and not f.has_tech("TypeScript"), SkillGap(
        skill="TypeScript",
        priority="high",
        reason="TypeScript is increasingly preferred over JavaScript for large-scale applications",
        learning_resources=("TypeScript Handbook", "Type Safety", "Advanced Types"),
        estimated_impact=10,
    )),
    (lambda f: not f.snapshot.has_documentation, SkillGap(
        skill="Technical Documentation",
        priority="high",
        reason="Good documentation demonstrates communication skills and project maturity",
        learning_resources=("Documentation Best Practices", "API Documentation", "README Templates"),
        estimated_impact=10,
    )),
    # medium
    (lambda f: not f.has_category("database"), SkillGap(
        skill="Database Management",
        priority="medium",
        reason="Most applications require database knowledge (SQL or NoSQL)",
        learning_resources=("PostgreSQL", "MongoDB", "Database Design"),
        estimated_impact=10,
    )),
    (lambda f: f.has_tech("Docker") and not f.has_tech("Kubernetes"), SkillGap(
        skill="Kubernetes",
        priority="medium",
        reason="Container orchestration is valuable for scalable applications",
        learning_resources=("Kubernetes Basics", "K8s Deployment", "Helm"),
        estimated_impact=5,
    )),
    (lambda f: not f.has_category("cloud"), SkillGap(
        skill="Cloud Platform (AWS/Azure/GCP)",
        priority="medium",
        reason="Cloud experience is required by most modern tech companies",
        learning_resources=("AWS Fundamentals", "Azure Basics", "Cloud Architecture"),
        estimated_impact=10,
    )),
    # low
    (lambda f: f.snapshot.commit_count < 20, SkillGap(
        skill="Git Best Practices",
        priority="low",
        reason="Consistent commit history shows professional development habits",
        learning_resources=("Git Workflow", "Commit Messages", "Branching Strategies"),
        estimated_impact=5,
    )),
    (lambda f: not f.snapshot.has_license, SkillGap(
        skill="Open Source Licensing",
        priority="low",
        reason="Understanding licenses is important for professional open source work",
        learning_resources=("MIT License", "Apache 2.0", "License Selection"),
        estimated_impact=3,
    )),
]


def identify_skill_gaps(
    snapshot: RepositorySnapshot,
    technologies: Sequence[TechnologyRecord],
) -> tuple[SkillGap, ...]:
    facts = Facts(snapshot=snapshot, technologies=tuple(technologies))
    return _apply(SKILL_GAP_RULES, facts, C.MAX_SKILL_GAPS)


# --- Recommendations ---

TESTING_SUITE = Recommendation(
    title="Implement Comprehensive Testing Suite",
    description="Add unit tests, integration tests, and achieve at least 70% code coverage",
    priority="critical",
    category="code-quality",
    estimated_effort="high",
    score_impact=15,
    action_steps=(
        "Choose a testing framework (Jest for JS, Pytest for Python)",
        "Write unit tests for core functions and components",
        "Add integration tests for critical user flows",
        "Set up code coverage reporting",
        "Aim for 70%+ coverage before considering complete",
    ),
)

CI_PIPELINE = Recommendation(
    title="Set Up CI/CD Pipeline",
    description="Automate testing, linting, and deployment with GitHub Actions or similar",
    priority="critical",
    category="deployment",
    estimated_effort="medium",
    score_impact=12,
    action_steps=(
        "Create .github/workflows/ci.yml file",
        "Configure automated testing on pull requests",
        "Add linting and code quality checks",
        "Set up automated deployment to staging",
        "Add status badges to README",
    ),
)

CREATE_README = Recommendation(
    title="Create Comprehensive README",
    description="Write a professional README with setup instructions, features, and examples",
    priority="high",
    category="documentation",
    estimated_effort="low",
    score_impact=15,
    action_steps=(
        "Add project title and description",
        "Include installation and setup instructions",
        "Document key features with examples",
        "Add screenshots or demo GIFs",
        "Include contribution guidelines and license",
    ),
)

ENHANCE_DOCUMENTATION = Recommendation(
    title="Enhance Documentation",
    description="Add API documentation, architecture diagrams, and contribution guidelines",
    priority="high",
    category="documentation",
    estimated_effort="medium",
    score_impact=10,
    action_steps=(
        "Create docs/ folder with detailed documentation",
        "Add API reference documentation",
        "Include architecture diagrams",
        "Write CONTRIBUTING.md for contributors",
        "Add code examples and tutorials",
    ),
)

IMPROVE_STRUCTURE = Recommendation(
    title="Improve Project Structure",
    description="Organize code with clear separation of concerns and standard conventions",
    priority="high",
    category="structure",
    estimated_effort="medium",
    score_impact=12,
    action_steps=(
        "Create src/ directory for source code",
        "Separate tests into tests/ or __tests__/",
        "Add config/ for configuration files",
        "Create docs/ for documentation",
        "Follow framework-specific best practices",
    ),
)

INCREASE_ACTIVITY = Recommendation(
    title="Increase Development Activity",
    description="Make regular, meaningful commits to show active development",
    priority="medium",
    category="collaboration",
    estimated_effort="low",
    score_impact=5,
    action_steps=(
        "Commit changes regularly (daily or weekly)",
        "Write clear, descriptive commit messages",
        "Follow conventional commit format",
        "Break large changes into smaller commits",
        "Show consistent development over time",
    ),
)

ADD_LICENSE = Recommendation(
    title="Add Open Source License",
    description="Choose and add an appropriate license (MIT, Apache 2.0, GPL)",
    priority="medium",
    category="documentation",
    estimated_effort="low",
    score_impact=5,
    action_steps=(
        "Choose appropriate license for your project",
        "Add LICENSE file to repository root",
        "Include license badge in README",
        "Update package.json or setup.py with license info",
    ),
)

ENCOURAGE_CONTRIBUTIONS = Recommendation(
    title="Encourage Community Contributions",
    description="Make your project contribution-friendly to attract collaborators",
    priority="medium",
    category="collaboration",
    estimated_effort="low",
    score_impact=7,
    action_steps=(
        "Add CONTRIBUTING.md with contribution guidelines",
        "Create issue templates for bugs and features",
        'Label issues as "good first issue" for newcomers',
        "Respond promptly to issues and pull requests",
        "Add CODE_OF_CONDUCT.md",
    ),
)

INCREASE_VISIBILITY = Recommendation(
    title="Increase Project Visibility",
    description="Promote your project to gain recognition and demonstrate impact",
    priority="low",
    category="collaboration",
    estimated_effort="medium",
    score_impact=5,
    action_steps=(
        "Share on Twitter, LinkedIn, and Reddit",
        "Write a blog post about your project",
        "Submit to awesome lists and directories",
        "Present at local meetups or conferences",
        "Create demo videos or tutorials",
    ),
)

ADD_DOCKER = Recommendation(
    title="Add Docker Support",
    description="Containerize your application for consistent deployment",
    priority="medium",
    category="deployment",
    estimated_effort="medium",
    score_impact=10,
    action_steps=(
        "Create Dockerfile for your application",
        "Add docker-compose.yml for multi-service setup",
        "Document Docker usage in README",
        "Test container builds in CI pipeline",
        "Consider multi-stage builds for optimization",
    ),
)

RECOMMENDATION_RULES: list[Rule] = [
    (lambda f: not f.snapshot.has_tests, TESTING_SUITE),
    (lambda f: not f.snapshot.has_ci, CI_PIPELINE),
    (lambda f: not f.snapshot.has_readme, CREATE_README),
    # only when a README exists
    (lambda f: f.snapshot.has_readme and f.metrics.documentation < 70, ENHANCE_DOCUMENTATION),
    (lambda f: f.metrics.project_structure < 70, IMPROVE_STRUCTURE),
    (lambda f: f.snapshot.commit_count < 50, INCREASE_ACTIVITY),
    (lambda f: not f.snapshot.has_license, ADD_LICENSE),
    (lambda f: f.snapshot.contributor_count == 1, ENCOURAGE_CONTRIBUTIONS),
    (lambda f: f.snapshot.stars < 10, INCREASE_VISIBILITY),
    (lambda f: not f.has_tech("Docker") and len(f.technologies) > 0, ADD_DOCKER),
]


def generate_recommendations(
    snapshot: RepositorySnapshot,
    metrics: Metrics,
    technologies: Sequence[TechnologyRecord],
    skill_gaps: Sequence[SkillGap],
) -> tuple[Recommendation, ...]:
    facts = Facts(
        snapshot=snapshot,
        technologies=tuple(technologies),
        metrics=metrics,
        skill_gaps=tuple(skill_gaps),
    )
    return _apply(RECOMMENDATION_RULES, facts, C.MAX_RECOMMENDATIONS)


# --- Insights ---

def _high_demand_strength(f: Facts) -> str:
    names = ", ".join(t.name for t in f.high_demand)
    return f"Strong alignment with in-demand technologies ({names})"


def _critical_gap_weakness(f: Facts) -> str:
    return f"Critical skill gaps: {', '.join(g.skill for g in f.critical_gaps)}"


STRENGTH_RULES: list[Rule] = [
    (lambda f: f.snapshot.has_tests, "Strong testing practices demonstrate code quality focus"),
    (lambda f: f.snapshot.has_ci, "CI/CD implementation shows DevOps awareness"),
    (lambda f: f.snapshot.commit_count > 100, "Consistent development activity indicates dedication"),
    (lambda f: f.snapshot.contributor_count > 5, "Collaborative project shows teamwork skills"),
    (lambda f: f.snapshot.has_documentation, "Comprehensive documentation demonstrates professionalism"),
    (lambda f: len(f.technologies) > 5, "Diverse technology stack shows versatility"),
    (lambda f: len(f.high_demand) > 3, _high_demand_strength),
]

WEAKNESS_RULES: list[Rule] = [
    (lambda f: not f.snapshot.has_tests, "Lack of testing may raise concerns about code reliability"),
    (lambda f: not f.snapshot.has_ci, "Missing CI/CD suggests limited DevOps experience"),
    (lambda f: f.snapshot.commit_count < 20, "Low commit count may indicate limited project scope"),
    (lambda f: not f.snapshot.has_documentation, "Insufficient documentation could hinder collaboration"),
    (lambda f: len(f.technologies) < 3, "Limited technology diversity may restrict job opportunities"),
    (lambda f: len(f.critical_gaps) > 0, _critical_gap_weakness),
]

MARKET_EXCELLENT = "Excellent - Your tech stack strongly aligns with current market demands"
MARKET_GOOD = "Good - Your skills match many employer requirements, with room for growth"
MARKET_DEVELOPING = "Developing - Consider adding more in-demand technologies to your portfolio"


def market_alignment(technologies: Sequence[TechnologyRecord]) -> str:
    count = sum(1 for t in technologies if t.market_demand == "high")
    if count >= 4:
        return MARKET_EXCELLENT
    if count >= 2:
        return MARKET_GOOD
    return MARKET_DEVELOPING


def career_level(snapshot: RepositorySnapshot, score: int, tech_count: int) -> str:
    if score >= 80 and snapshot.has_tests and snapshot.has_ci and tech_count >= 5:
        return "senior"
    if score >= 65 and (snapshot.has_tests or snapshot.has_ci) and tech_count >= 3:
        return "mid"
    return "junior"


def summarize_insights(
    snapshot: RepositorySnapshot,
    score: int,
    technologies: Sequence[TechnologyRecord],
    skill_gaps: Sequence[SkillGap],
) -> Insights:
    facts = Facts(
        snapshot=snapshot,
        technologies=tuple(technologies),
        skill_gaps=tuple(skill_gaps),
    )
    return Insights(
        strengths=_apply(STRENGTH_RULES, facts, C.MAX_INSIGHTS),
        weaknesses=_apply(WEAKNESS_RULES, facts, C.MAX_INSIGHTS),
        market_alignment=market_alignment(technologies),
        career_level=career_level(snapshot, score, len(technologies)),
    )
