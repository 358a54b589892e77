"""Report documents: plain-text report and JSON export."""

from __future__ import annotations

import datetime
import json
from pathlib import Path

from .models import AnalysisResult

RULE = "=" * 80
BAR_CELLS = 20


def score_label(score: int) -> str:
    if score >= 90:
        return "EXCELLENT - Highly competitive for top positions"
    if score >= 80:
        return "VERY GOOD - Strong candidate profile"
    if score >= 70:
        return "GOOD - Solid foundation with room for improvement"
    if score >= 60:
        return "FAIR - Needs significant improvements"
    return "NEEDS WORK - Major improvements required"


def progress_bar(value: int) -> str:
    filled = max(0, min(BAR_CELLS, int(value / 5 + 0.5)))
    return "[" + "█" * filled + "░" * (BAR_CELLS - filled) + "]"


def metric_assessment(value: int) -> str:
    if value >= 80:
        return "Status: Excellent"
    if value >= 60:
        return "Status: Good"
    return "Status: Needs Improvement"


def _heading(title: str) -> list[str]:
    return [RULE, title.center(80).rstrip(), RULE, ""]


def _format_date(timestamp: str) -> str:
    if not timestamp:
        return "unknown"
    try:
        return datetime.datetime.fromisoformat(timestamp.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return timestamp


def render_text_report(result: AnalysisResult, generated: datetime.date | None = None) -> str:
    """Render the full plain-text report for one analysis."""
    generated = generated or datetime.date.today()
    info = result.repo_info
    m = result.metrics
    lines: list[str] = []

    lines += _heading("GITHUB REPOSITORY ANALYSIS REPORT")
    lines.append(f"Generated: {generated.isoformat()}")
    lines.append(f"Repository: {info.name}")
    lines.append(f"Description: {info.description or 'No description'}")
    lines.append("")

    lines += _heading(f"OVERALL SCORE: {result.score}/100")
    lines.append("Score Breakdown:")
    lines.append(score_label(result.score))
    lines.append("")
    lines.append(f"Stars: {info.stars}")
    lines.append(f"Forks: {info.forks}")
    lines.append(f"Last Updated: {_format_date(info.last_updated)}")
    lines.append("")

    lines += _heading("DETAILED METRICS")
    for label, value in (
        ("Code Quality", m.code_quality),
        ("Documentation", m.documentation),
        ("Project Structure", m.project_structure),
    ):
        lines.append(f"{label}: {value}/100")
        lines.append(progress_bar(value))
        lines.append(metric_assessment(value))
        lines.append("")

    lines += _heading("TECHNOLOGY STACK")
    lines.append("Detected Technologies:")
    if result.technologies:
        for i, tech in enumerate(result.technologies, 1):
            lines.append(f"{i}. {tech.name} ({tech.category}, {tech.confidence})")
    else:
        lines.append("None detected")
    lines.append("")
    lines.append(f"Market Alignment: {result.insights.market_alignment}")
    lines.append(f"Career Level: {result.insights.career_level}")
    lines.append("")

    lines += _heading("SKILL GAPS")
    lines.append("Areas for Improvement:")
    if result.skill_gaps:
        for i, gap in enumerate(result.skill_gaps, 1):
            lines.append(f"{i}. {gap.skill} - {gap.reason} ({gap.priority} priority)")
    else:
        lines.append("No skill gaps identified")
    lines.append("")

    lines += _heading("PERSONALIZED RECOMMENDATIONS")
    if result.recommendations:
        for i, rec in enumerate(result.recommendations, 1):
            lines.append(f"{i}. {rec.title} ({rec.priority} priority)")
            lines.append(f"   {rec.description}")
            lines.append(f"   Impact: +{rec.score_impact} points | Effort: {rec.estimated_effort}")
            lines.append("")
    else:
        lines.append("No recommendations - keep it up!")
        lines.append("")

    lines += _heading("NEXT STEPS")
    lines.append("1. Prioritize the recommendations based on your career goals")
    lines.append("2. Implement changes incrementally and track your progress")
    lines.append("3. Re-analyze your repository after making improvements")
    lines.append("4. Share this report with mentors or potential employers")
    lines.append("")
    lines.append(RULE)

    return "\n".join(lines) + "\n"


def render_json_report(result: AnalysisResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def write_reports(result: AnalysisResult, out_dir: Path, fmt: str = "both") -> list[Path]:
    """Write text and/or JSON reports. Returns the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    name = result.repo_info.name or "repository"
    written = []

    if fmt in ("text", "both"):
        path = out_dir / f"{name}-analysis-report.txt"
        path.write_text(render_text_report(result), encoding="utf-8")
        written.append(path)

    if fmt in ("json", "both"):
        path = out_dir / f"{name}-analysis.json"
        path.write_text(render_json_report(result), encoding="utf-8")
        written.append(path)

    return written
