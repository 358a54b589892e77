"""Tests for snapshot validation and presence detection."""

from dataclasses import replace

import pytest

from repo_insight.snapshot import (
    InvalidSnapshot,
    RepositorySnapshot,
    detect_ci,
    detect_documentation,
    detect_license,
    detect_readme,
    detect_tests,
    validate_snapshot,
)


@pytest.fixture
def snapshot():
    return RepositorySnapshot(
        name="demo",
        description="Demo project",
        primary_language="Go",
        language_byte_counts={"Go": 1200},
        file_names=("Go.mod", "SRC"),
    )


class TestDefaults:
    def test_documented_defaults(self):
        snap = RepositorySnapshot(name="x")
        assert snap.commit_count == 0
        assert snap.contributor_count == 1
        assert dict(snap.language_byte_counts) == {}
        assert tuple(snap.file_names) == ()
        assert snap.primary_language is None

    def test_file_blob_is_lowercased(self, snapshot):
        assert snapshot.file_blob == "go.mod src"

    def test_to_dict(self, snapshot):
        d = snapshot.to_dict()
        assert d["name"] == "demo"
        assert d["file_names"] == ["Go.mod", "SRC"]
        assert d["language_byte_counts"] == {"Go": 1200}


class TestValidateSnapshot:
    def test_valid(self, snapshot):
        validate_snapshot(snapshot)

    def test_not_a_snapshot(self):
        with pytest.raises(InvalidSnapshot, match="RepositorySnapshot"):
            validate_snapshot({"name": "x"})

    @pytest.mark.parametrize("field,value", [
        ("stars", -1),
        ("forks", -3),
        ("open_issues", -1),
        ("commit_count", -10),
        ("contributor_count", -1),
    ])
    def test_negative_counts(self, snapshot, field, value):
        with pytest.raises(InvalidSnapshot, match=field):
            validate_snapshot(replace(snapshot, **{field: value}))

    def test_bool_is_not_a_count(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="stars"):
            validate_snapshot(replace(snapshot, stars=True))

    def test_float_count(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="commit_count"):
            validate_snapshot(replace(snapshot, commit_count=1.5))

    def test_flag_must_be_bool(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="has_tests"):
            validate_snapshot(replace(snapshot, has_tests="yes"))

    def test_name_required(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="name"):
            validate_snapshot(replace(snapshot, name=None))

    def test_file_names_not_a_string(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="file_names"):
            validate_snapshot(replace(snapshot, file_names="package.json"))

    def test_file_names_entries(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="file_names"):
            validate_snapshot(replace(snapshot, file_names=("src", 3)))

    def test_language_sizes(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="Go"):
            validate_snapshot(replace(snapshot, language_byte_counts={"Go": -1}))

    def test_primary_language_type(self, snapshot):
        with pytest.raises(InvalidSnapshot, match="primary_language"):
            validate_snapshot(replace(snapshot, primary_language=42))


class TestPresenceDetection:
    def test_readme(self):
        assert detect_readme(["README.md"])
        assert detect_readme(["readme.rst"])
        assert not detect_readme(["docs", "src"])

    def test_license(self):
        assert detect_license(["LICENSE"])
        assert detect_license(["licence.txt"])
        assert detect_license(["copying"])
        assert not detect_license(["readme.md"])

    def test_tests(self):
        assert detect_tests(["tests"])
        assert detect_tests(["__tests__"])
        assert detect_tests(["pyproject.toml"])
        assert detect_tests(["jest.config.js"])
        assert not detect_tests(["src", "readme.md"])

    def test_ci_is_exact_match(self):
        assert detect_ci([".github"])
        assert detect_ci([".gitlab-ci.yml"])
        assert detect_ci(["Jenkinsfile"])
        assert not detect_ci([".github-notes"])

    def test_documentation(self):
        assert detect_documentation(["docs"])
        assert detect_documentation(["CHANGELOG.md"])
        assert detect_documentation(["contributing.md"])
        assert not detect_documentation(["src", "package.json"])
