"""repo-insight CLI - score a GitHub repository and suggest improvements.

Usage:
    repo-insight analyze <repo-url-or-owner/repo> [options]
    repo-insight analyze pallets/flask --save
    repo-insight history pallets/flask
"""

from __future__ import annotations

import getpass
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .analyzer import Analyzer
from .github import GitHubClient, GitHubError, parse_repo_url
from .history import HistoryError, HistoryStore
from .logging import configure_logging
from .models import AnalysisResult
from .report import render_json_report, score_label, write_reports
from .snapshot import InvalidSnapshot
from .technologies import DEFAULT_TECHNOLOGIES, TechnologyTableError, load_table

console = Console()

PRIORITY_STYLES = {
    "critical": "bold red",
    "high": "yellow",
    "medium": "blue",
    "low": "green",
}


def _score_style(value: int) -> str:
    if value >= 80:
        return "green"
    if value >= 60:
        return "yellow"
    return "red"


def _canonical_url(target: str) -> str:
    owner, repo = parse_repo_url(target)
    return f"https://github.com/{owner}/{repo}"


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "local"


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs.")
def cli(verbose: bool):
    """repo-insight - rule-based scoring and career insights for GitHub repositories.

    Fetches public metadata, scores code quality, documentation and project
    structure, and lists skill gaps and recommendations. No code is cloned.
    """
    configure_logging(verbose=verbose)


@cli.command()
@click.argument("target")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token (or GITHUB_TOKEN)")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
@click.option("--output", "-O", default=None, help="Directory for report files")
@click.option("--format", "-f", "fmt", type=click.Choice(["text", "json", "both"]), default="both", help="Report format")
@click.option("--tech-table", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON technology table")
@click.option("--save", is_flag=True, help="Store the result in local history")
@click.option("--user", "-u", default=None, help="History owner (defaults to login name)")
@click.option("--history-file", type=click.Path(dir_okay=False), default=None, help="History JSON file")
def analyze(
    target: str,
    token: str | None,
    json_only: bool,
    output: str | None,
    fmt: str,
    tech_table: str | None,
    save: bool,
    user: str | None,
    history_file: str | None,
):
    """Analyze a repository and print its scorecard.

    TARGET can be a GitHub URL or owner/repo shorthand.

    Examples:

        repo-insight analyze https://github.com/facebook/react

        repo-insight analyze pallets/flask --output reports/

        repo-insight analyze me/side-project --save
    """
    try:
        table = load_table(tech_table) if tech_table else DEFAULT_TECHNOLOGIES
        url = _canonical_url(target)

        if not json_only:
            console.print()
            console.print(Panel.fit(
                f"[bold cyan]repo-insight v{__version__}[/] - Repository Scorecard",
                border_style="cyan",
            ))
            console.print(f"  Fetching {escape(url)}...", style="dim")

        with GitHubClient(token=token) as client:
            snapshot = client.fetch_snapshot(url)

        result = Analyzer(table).analyze(snapshot)

        if json_only:
            click.echo(render_json_report(result))
        else:
            _print_result(result)

        if output:
            written = write_reports(result, Path(output), fmt)
            if not json_only:
                for path in written:
                    console.print(f"[green]Report written to {escape(str(path))}[/]")

        if save:
            store = HistoryStore(history_file)
            store.save(user or _default_user(), url, result)
            if not json_only:
                console.print(f"[green]Saved to history ({escape(str(store.path))})[/]")

    except (GitHubError, HistoryError, InvalidSnapshot, TechnologyTableError) as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("target", required=False)
@click.option("--user", "-u", default=None, help="History owner (defaults to login name)")
@click.option("--history-file", type=click.Path(dir_okay=False), default=None, help="History JSON file")
def history(target: str | None, user: str | None, history_file: str | None):
    """Show saved analyses, or progress for one repository."""
    user = user or _default_user()
    try:
        store = HistoryStore(history_file)
        if target:
            _print_progress(store, user, _canonical_url(target))
        else:
            _print_repositories(store, user)
    except (GitHubError, HistoryError) as e:
        raise click.ClickException(str(e))


@cli.command()
def version():
    """Show version information."""
    console.print(f"repo-insight v{__version__}")
    console.print("Rule-based GitHub repository scorecard")


def _print_result(result: AnalysisResult) -> None:
    """Print the scorecard, technologies, gaps, recommendations and insights."""
    info = result.repo_info
    m = result.metrics

    summary = Table(title="Repository Analysis", show_header=False, border_style="dim")
    summary.add_column("Key", style="bold")
    summary.add_column("Value")
    summary.add_row("Name", escape(info.name))
    if info.description:
        summary.add_row("Description", escape(info.description[:80]))
    summary.add_row("Stars / Forks", f"{info.stars:,} / {info.forks:,}")
    style = _score_style(result.score)
    summary.add_row("Score", f"[{style}]{result.score}/100[/] - {score_label(result.score)}")
    summary.add_row("Code Quality", f"[{_score_style(m.code_quality)}]{m.code_quality}[/]")
    summary.add_row("Documentation", f"[{_score_style(m.documentation)}]{m.documentation}[/]")
    summary.add_row("Project Structure", f"[{_score_style(m.project_structure)}]{m.project_structure}[/]")
    summary.add_row("Career Level", result.insights.career_level)
    summary.add_row("Market Alignment", result.insights.market_alignment)
    console.print(summary)

    if result.technologies:
        tech = Table(title="Technologies", show_header=True)
        tech.add_column("Name", style="bold")
        tech.add_column("Category")
        tech.add_column("Confidence")
        tech.add_column("Demand", justify="center")
        for t in result.technologies:
            tech.add_row(escape(t.name), t.category, t.confidence, t.market_demand)
        console.print(tech)
    else:
        console.print("[dim]No technologies detected[/]")

    if result.skill_gaps:
        gaps = Table(title="Skill Gaps", show_header=True)
        gaps.add_column("Skill", style="bold")
        gaps.add_column("Priority")
        gaps.add_column("Impact", justify="right")
        for g in result.skill_gaps:
            gaps.add_row(escape(g.skill), f"[{PRIORITY_STYLES[g.priority]}]{g.priority}[/]", f"+{g.estimated_impact}")
        console.print(gaps)

    if result.recommendations:
        console.print()
        console.print("[bold]Recommendations:[/]")
        for i, r in enumerate(result.recommendations, 1):
            console.print(
                f"  {i}. [{PRIORITY_STYLES[r.priority]}]{r.title}[/] "
                f"(+{r.score_impact}, {r.estimated_effort} effort)"
            )
            console.print(f"     [dim]{r.description}[/]")

    if result.insights.strengths:
        console.print()
        console.print("[bold]Strengths:[/]")
        for s in result.insights.strengths:
            console.print(f"  [green]+[/] {escape(s)}")

    if result.insights.weaknesses:
        console.print()
        console.print("[bold]Weaknesses:[/]")
        for w in result.insights.weaknesses:
            console.print(f"  [red]-[/] {escape(w)}")


def _print_repositories(store: HistoryStore, user: str) -> None:
    entries = store.unique_repositories(user)
    if not entries:
        console.print(f"[yellow]No saved analyses for {escape(user)}. Run: repo-insight analyze <repo> --save[/]")
        return

    table = Table(title=f"Saved analyses for {escape(user)}", show_header=True)
    table.add_column("Repository", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Docs", justify="right")
    table.add_column("Structure", justify="right")
    table.add_column("Analyzed")
    for e in entries:
        table.add_row(
            escape(e.repository_name),
            str(e.overall_score),
            str(e.code_quality_score),
            str(e.documentation_score),
            str(e.structure_score),
            e.created_at[:10],
        )
    console.print(table)


def _print_progress(store: HistoryStore, user: str, url: str) -> None:
    comparison = store.progress_comparison(user, url)
    if comparison is None:
        console.print(f"[yellow]No saved analyses of {escape(url)}[/]")
        return

    table = Table(title=f"Progress for {escape(comparison.current.repository_name)}", show_header=True)
    table.add_column("Metric", style="bold")
    table.add_column("Current", justify="right")
    table.add_column("Previous", justify="right")
    table.add_column("Change", justify="right")
    for label, name in (
        ("Overall", "overall_score"),
        ("Code Quality", "code_quality_score"),
        ("Documentation", "documentation_score"),
        ("Project Structure", "structure_score"),
    ):
        prev = getattr(comparison.previous, name) if comparison.previous else None
        delta = comparison.improvement[name]
        style = "green" if delta > 0 else "red" if delta < 0 else "dim"
        table.add_row(
            label,
            str(getattr(comparison.current, name)),
            "-" if prev is None else str(prev),
            f"[{style}]{delta:+d}[/]",
        )
    console.print(table)


if __name__ == "__main__":
    cli()
