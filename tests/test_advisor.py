"""Tests for skill gaps, recommendations and insights."""

import pytest

from repo_insight.advisor import (
    MARKET_DEVELOPING,
    MARKET_EXCELLENT,
    MARKET_GOOD,
    career_level,
    generate_recommendations,
    identify_skill_gaps,
    market_alignment,
    summarize_insights,
)
from repo_insight.analyzer import extract_technologies
from repo_insight.models import Metrics, TechnologyRecord
from repo_insight.snapshot import RepositorySnapshot


def tech(name, category="language", demand="high"):
    return TechnologyRecord(name=name, category=category, confidence="detected", market_demand=demand)


@pytest.fixture
def empty_repo():
    return RepositorySnapshot(name="empty", open_issues=30, commit_count=5)


def _skills(gaps):
    return [g.skill for g in gaps]


def _titles(recs):
    return [r.title for r in recs]


class TestSkillGaps:
    def test_checklist_order(self, empty_repo):
        gaps = identify_skill_gaps(empty_repo, [])
        assert _skills(gaps) == [
            "Automated Testing",
            "CI/CD Pipeline",
            "Docker & Containerization",
            "Technical Documentation",
            "Database Management",
            "Cloud Platform (AWS/Azure/GCP)",
            "Git Best Practices",
            "Open Source Licensing",
        ]
        assert [g.priority for g in gaps] == [
            "critical", "critical", "high", "high", "medium", "medium", "low", "low",
        ]
        assert [g.estimated_impact for g in gaps] == [15, 15, 10, 10, 10, 10, 5, 3]

    def test_typescript_gap_only_for_javascript(self, empty_repo):
        assert "TypeScript" in _skills(identify_skill_gaps(empty_repo, [tech("JavaScript")]))
        assert "TypeScript" not in _skills(
            identify_skill_gaps(empty_repo, [tech("JavaScript"), tech("TypeScript")])
        )
        assert "TypeScript" not in _skills(identify_skill_gaps(empty_repo, [tech("Python")]))

    def test_kubernetes_gap_requires_docker(self, empty_repo):
        docker = tech("Docker", "devops")
        gaps = _skills(identify_skill_gaps(empty_repo, [docker]))
        assert "Docker & Containerization" not in gaps
        assert "Kubernetes" in gaps
        assert "Kubernetes" not in _skills(identify_skill_gaps(empty_repo, [docker, tech("Kubernetes", "devops")]))

    def test_database_and_cloud_by_category(self, empty_repo):
        gaps = _skills(identify_skill_gaps(empty_repo, [tech("Redis", "database"), tech("AWS", "cloud")]))
        assert "Database Management" not in gaps
        assert "Cloud Platform (AWS/Azure/GCP)" not in gaps

    def test_nothing_missing(self):
        snap = RepositorySnapshot(
            name="full", has_tests=True, has_ci=True, has_documentation=True,
            has_license=True, commit_count=20,
        )
        techs = [tech("Docker", "devops"), tech("Kubernetes", "devops"), tech("Redis", "database"), tech("AWS", "cloud")]
        assert identify_skill_gaps(snap, techs) == ()

    def test_git_gap_boundary(self, empty_repo):
        from dataclasses import replace

        assert "Git Best Practices" in _skills(identify_skill_gaps(replace(empty_repo, commit_count=19), []))
        assert "Git Best Practices" not in _skills(identify_skill_gaps(replace(empty_repo, commit_count=20), []))


class TestRecommendations:
    def test_bare_repository(self, empty_repo):
        recs = generate_recommendations(empty_repo, Metrics(40, 20, 30), [], [])
        assert _titles(recs) == [
            "Implement Comprehensive Testing Suite",
            "Set Up CI/CD Pipeline",
            "Create Comprehensive README",
            "Improve Project Structure",
            "Increase Development Activity",
            "Add Open Source License",
            "Encourage Community Contributions",
            "Increase Project Visibility",
        ]
        assert recs[0].estimated_effort == "high"
        assert recs[0].score_impact == 15
        assert recs[1].score_impact == 12
        assert recs[1].category == "deployment"

    def test_readme_present_but_thin_docs(self):
        snap = RepositorySnapshot(name="r", has_readme=True)
        titles = _titles(generate_recommendations(snap, Metrics(40, 65, 30), [], []))
        assert "Enhance Documentation" in titles
        assert "Create Comprehensive README" not in titles

    def test_missing_readme_wins_over_enhance(self):
        snap = RepositorySnapshot(name="r", has_readme=False)
        titles = _titles(generate_recommendations(snap, Metrics(40, 20, 30), [], []))
        assert "Create Comprehensive README" in titles
        assert "Enhance Documentation" not in titles

    def test_good_docs_and_structure(self):
        snap = RepositorySnapshot(name="r", has_readme=True)
        titles = _titles(generate_recommendations(snap, Metrics(40, 70, 70), [], []))
        assert "Enhance Documentation" not in titles
        assert "Improve Project Structure" not in titles

    def test_docker_recommendation_needs_some_technology(self, empty_repo):
        assert "Add Docker Support" not in _titles(generate_recommendations(empty_repo, Metrics(40, 20, 30), [], []))
        recs = generate_recommendations(empty_repo, Metrics(40, 20, 30), [tech("Python")], [])
        docker = recs[-1]
        assert docker.title == "Add Docker Support"
        assert docker.priority == "medium"
        assert docker.estimated_effort == "medium"
        assert docker.score_impact == 10

    def test_no_docker_recommendation_when_docker_found(self, empty_repo):
        recs = generate_recommendations(empty_repo, Metrics(40, 20, 30), [tech("Docker", "devops")], [])
        assert "Add Docker Support" not in _titles(recs)

    def test_contributions_only_for_single_contributor(self):
        solo = RepositorySnapshot(name="r", contributor_count=1)
        team = RepositorySnapshot(name="r", contributor_count=2)
        assert "Encourage Community Contributions" in _titles(generate_recommendations(solo, Metrics(40, 20, 30), [], []))
        assert "Encourage Community Contributions" not in _titles(generate_recommendations(team, Metrics(40, 20, 30), [], []))


class TestInsights:
    @pytest.mark.parametrize("high_count,expected", [
        (0, MARKET_DEVELOPING),
        (1, MARKET_DEVELOPING),
        (2, MARKET_GOOD),
        (3, MARKET_GOOD),
        (4, MARKET_EXCELLENT),
    ])
    def test_market_alignment(self, high_count, expected):
        techs = [tech(f"T{i}") for i in range(high_count)] + [tech("Low", demand="low")]
        assert market_alignment(techs) == expected

    def test_career_levels(self):
        both = RepositorySnapshot(name="r", has_tests=True, has_ci=True)
        tests_only = RepositorySnapshot(name="r", has_tests=True)
        neither = RepositorySnapshot(name="r")
        assert career_level(both, 80, 5) == "senior"
        assert career_level(both, 79, 5) == "mid"
        assert career_level(both, 80, 4) == "mid"
        assert career_level(tests_only, 90, 6) == "mid"
        assert career_level(tests_only, 65, 3) == "mid"
        assert career_level(tests_only, 64, 3) == "junior"
        assert career_level(tests_only, 70, 2) == "junior"
        assert career_level(neither, 95, 10) == "junior"

    def test_summary_career_level_follows_score(self):
        snap = RepositorySnapshot(name="r", has_tests=True, has_ci=True)
        techs = [tech(f"T{i}") for i in range(5)]
        assert summarize_insights(snap, 80, techs, []).career_level == "senior"
        assert summarize_insights(snap, 79, techs, []).career_level == "mid"

    def test_strengths_truncated_in_checklist_order(self):
        snap = RepositorySnapshot(
            name="r", has_tests=True, has_ci=True, has_documentation=True,
            commit_count=101, contributor_count=6,
        )
        techs = [tech(f"T{i}") for i in range(6)]
        insights = summarize_insights(snap, 90, techs, [])
        assert len(insights.strengths) == 5
        assert insights.strengths[0] == "Strong testing practices demonstrate code quality focus"
        assert insights.strengths[-1] == "Comprehensive documentation demonstrates professionalism"

    def test_high_demand_strength_names_technologies(self):
        snap = RepositorySnapshot(name="r")
        techs = [tech("Go"), tech("Docker", "devops"), tech("Redis", "database"), tech("AWS", "cloud")]
        insights = summarize_insights(snap, 50, techs, [])
        assert insights.strengths == (
            "Strong alignment with in-demand technologies (Go, Docker, Redis, AWS)",
        )

    def test_weaknesses_name_critical_gaps(self):
        snap = RepositorySnapshot(name="r", has_documentation=True, commit_count=50)
        techs = [tech("Go"), tech("Rust"), tech("C")]
        gaps = identify_skill_gaps(snap, techs)
        insights = summarize_insights(snap, 40, techs, gaps)
        assert insights.weaknesses[-1] == "Critical skill gaps: Automated Testing, CI/CD Pipeline"

    def test_weaknesses_truncated(self, empty_repo):
        gaps = identify_skill_gaps(empty_repo, [])
        insights = summarize_insights(empty_repo, 31, [], gaps)
        assert len(insights.weaknesses) == 5
        assert not any(w.startswith("Critical skill gaps") for w in insights.weaknesses)

    def test_with_extracted_technologies(self):
        snap = RepositorySnapshot(
            name="r", primary_language="Python", has_tests=True,
            file_names=("requirements.txt", "fastapi_app", "dockerfile"),
        )
        techs = extract_technologies(snap)
        insights = summarize_insights(snap, 70, techs, identify_skill_gaps(snap, techs))
        # Python, FastAPI, Docker, Pytest are all high demand
        assert insights.market_alignment == MARKET_EXCELLENT
        assert insights.career_level == "mid"
