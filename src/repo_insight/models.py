"""Analysis result types.

Everything here is created by the engine and only read by callers.
``to_dict`` emits the camelCase document format used by JSON reports and
stored in history; ``AnalysisResult.from_dict`` reads it back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TechnologyRecord:
    """A technology detected in, or inferred from, a repository."""

    name: str
    category: str
    confidence: str  # "detected" | "inferred"
    market_demand: str
    related_skills: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "confidence": self.confidence,
            "marketDemand": self.market_demand,
            "relatedSkills": list(self.related_skills),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TechnologyRecord:
        return cls(
            name=data["name"],
            category=data["category"],
            confidence=data["confidence"],
            market_demand=data["marketDemand"],
            related_skills=tuple(data.get("relatedSkills", ())),
        )


@dataclass(frozen=True)
class SkillGap:
    """A skill the repository does not demonstrate."""

    skill: str
    priority: str
    reason: str
    learning_resources: tuple[str, ...]
    estimated_impact: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "skill": self.skill,
            "priority": self.priority,
            "reason": self.reason,
            "learningResources": list(self.learning_resources),
            "estimatedImpact": self.estimated_impact,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillGap:
        return cls(
            skill=data["skill"],
            priority=data["priority"],
            reason=data["reason"],
            learning_resources=tuple(data.get("learningResources", ())),
            estimated_impact=data["estimatedImpact"],
        )


@dataclass(frozen=True)
class Recommendation:
    """An actionable improvement with its expected score impact."""

    title: str
    description: str
    priority: str
    category: str
    estimated_effort: str
    score_impact: int
    action_steps: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "category": self.category,
            "estimatedEffort": self.estimated_effort,
            "scoreImpact": self.score_impact,
            "actionSteps": list(self.action_steps),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recommendation:
        return cls(
            title=data["title"],
            description=data["description"],
            priority=data["priority"],
            category=data["category"],
            estimated_effort=data["estimatedEffort"],
            score_impact=data["scoreImpact"],
            action_steps=tuple(data.get("actionSteps", ())),
        )


@dataclass(frozen=True)
class Metrics:
    code_quality: int
    documentation: int
    project_structure: int

    def to_dict(self) -> dict[str, int]:
        return {
            "codeQuality": self.code_quality,
            "documentation": self.documentation,
            "projectStructure": self.project_structure,
        }


@dataclass(frozen=True)
class RepoInfo:
    """Identity fields echoed from the snapshot."""

    name: str
    description: str
    stars: int
    forks: int
    last_updated: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "stars": self.stars,
            "forks": self.forks,
            "lastUpdated": self.last_updated,
        }


@dataclass(frozen=True)
class Insights:
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    market_alignment: str
    career_level: str  # "junior" | "mid" | "senior"

    def to_dict(self) -> dict[str, Any]:
        return {
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "marketAlignment": self.market_alignment,
            "careerLevel": self.career_level,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete output of one analysis."""

    score: int
    metrics: Metrics
    technologies: tuple[TechnologyRecord, ...]
    skill_gaps: tuple[SkillGap, ...]
    recommendations: tuple[Recommendation, ...]
    repo_info: RepoInfo
    insights: Insights

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "metrics": self.metrics.to_dict(),
            "technologies": [t.to_dict() for t in self.technologies],
            "skillGaps": [g.to_dict() for g in self.skill_gaps],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "repoInfo": self.repo_info.to_dict(),
            "insights": self.insights.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        """Rebuild a result from its document form (history replay)."""
        metrics = data["metrics"]
        info = data["repoInfo"]
        insights = data["insights"]
        return cls(
            score=data["score"],
            metrics=Metrics(
                code_quality=metrics["codeQuality"],
                documentation=metrics["documentation"],
                project_structure=metrics["projectStructure"],
            ),
            technologies=tuple(TechnologyRecord.from_dict(t) for t in data.get("technologies", [])),
            skill_gaps=tuple(SkillGap.from_dict(g) for g in data.get("skillGaps", [])),
            recommendations=tuple(Recommendation.from_dict(r) for r in data.get("recommendations", [])),
            repo_info=RepoInfo(
                name=info["name"],
                description=info.get("description", ""),
                stars=info.get("stars", 0),
                forks=info.get("forks", 0),
                last_updated=info.get("lastUpdated", ""),
            ),
            insights=Insights(
                strengths=tuple(insights.get("strengths", ())),
                weaknesses=tuple(insights.get("weaknesses", ())),
                market_alignment=insights.get("marketAlignment", ""),
                career_level=insights.get("careerLevel", "junior"),
            ),
        )
