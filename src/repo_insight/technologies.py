"""Reference technology table.

Static lookup of known technologies partitioned by domain. The engine only
ever sees the flattened form, where the first partition to define a name
wins. A table can be swapped for a fixture in tests or loaded from JSON.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

CATEGORIES = ("language", "framework", "database", "devops", "cloud", "tool")
DEMAND_LEVELS = ("high", "medium", "low")

# Partition name -> category of the entries it holds
PARTITIONS = {
    "languages": "language",
    "frameworks": "framework",
    "databases": "database",
    "devops": "devops",
    "cloud": "cloud",
    "tools": "tool",
}


class TechnologyTableError(ValueError):
    """Technology table data is malformed."""


@dataclass(frozen=True)
class TechnologyInfo:
    """Reference entry for one technology."""

    category: str
    demand: str
    related: tuple[str, ...] = ()


TechnologyTable = Mapping[str, Mapping[str, TechnologyInfo]]


def _entries(category: str, rows: dict[str, tuple[str, tuple[str, ...]]]) -> dict[str, TechnologyInfo]:
    return {
        name: TechnologyInfo(category=category, demand=demand, related=related)
        for name, (demand, related) in rows.items()
    }


DEFAULT_TECHNOLOGIES: dict[str, dict[str, TechnologyInfo]] = {
    "languages": _entries("language", {
        "JavaScript": ("high", ("Node.js", "React", "TypeScript")),
        "TypeScript": ("high", ("JavaScript", "Angular", "React")),
        "Python": ("high", ("Django", "FastAPI", "Data Science")),
        "Java": ("high", ("Spring Boot", "Maven", "JVM")),
        "Go": ("high", ("Microservices", "Docker", "Kubernetes")),
        "Rust": ("medium", ("Systems Programming", "WebAssembly", "Cargo")),
        "C#": ("high", (".NET", "ASP.NET", "Azure")),
        "C++": ("medium", ("Systems Programming", "Game Development", "CMake")),
        "C": ("medium", ("Embedded Systems", "Operating Systems", "Make")),
        "Kotlin": ("medium", ("Android", "Java", "Spring Boot")),
        "Swift": ("medium", ("iOS", "SwiftUI", "Xcode")),
        "Ruby": ("medium", ("Ruby on Rails", "RSpec", "Bundler")),
        "PHP": ("medium", ("Laravel", "Symfony", "Composer")),
        "Scala": ("low", ("Spark", "Akka", "JVM")),
        "Dart": ("medium", ("Flutter", "Mobile Development")),
        "Elixir": ("low", ("Phoenix", "Erlang", "OTP")),
        "Haskell": ("low", ("Functional Programming", "Cabal")),
        "R": ("medium", ("Statistics", "Data Science", "ggplot2")),
        "Shell": ("medium", ("Bash", "Linux", "Automation")),
        "HTML": ("medium", ("CSS", "JavaScript", "Accessibility")),
        "CSS": ("medium", ("HTML", "Sass", "Tailwind CSS")),
        "SCSS": ("low", ("CSS", "Sass")),
        "Vue": ("medium", ("JavaScript", "Vuex", "Nuxt.js")),
        "Jupyter Notebook": ("medium", ("Python", "Data Science", "pandas")),
        "Dockerfile": ("high", ("Docker", "Containerization")),
        "HCL": ("high", ("Terraform", "Infrastructure as Code")),
    }),
    "frameworks": _entries("framework", {
        "React": ("high", ("JavaScript", "Redux", "Next.js")),
        "Next.js": ("high", ("React", "SSR", "Vercel")),
        "Vue": ("medium", ("JavaScript", "Vuex", "Nuxt.js")),
        "Angular": ("medium", ("TypeScript", "RxJS", "NgRx")),
        "Express": ("high", ("Node.js", "REST APIs", "Middleware")),
        "NestJS": ("medium", ("TypeScript", "Node.js", "Dependency Injection")),
        "Django": ("high", ("Python", "ORM", "REST Framework")),
        "FastAPI": ("high", ("Python", "Pydantic", "Async")),
        "Flask": ("medium", ("Python", "Jinja2", "REST APIs")),
        "Spring Boot": ("high", ("Java", "Microservices", "JPA")),
        "Ruby on Rails": ("medium", ("Ruby", "ActiveRecord", "MVC")),
        "Laravel": ("medium", ("PHP", "Eloquent", "MVC")),
        "Flutter": ("medium", ("Dart", "Mobile Development")),
    }),
    "databases": _entries("database", {
        "PostgreSQL": ("high", ("SQL", "Database Design", "Indexing")),
        "MongoDB": ("high", ("NoSQL", "Mongoose", "Aggregation")),
        "MySQL": ("medium", ("SQL", "Database Design", "Replication")),
        "Redis": ("high", ("Caching", "Pub/Sub", "Key-Value Stores")),
        "SQLite": ("medium", ("SQL", "Embedded Databases")),
        "Elasticsearch": ("medium", ("Search", "Logging", "Kibana")),
    }),
    "devops": _entries("devops", {
        "Docker": ("high", ("Containerization", "Kubernetes")),
        "Kubernetes": ("high", ("Docker", "Orchestration", "Cloud")),
        "Terraform": ("high", ("Infrastructure as Code", "Cloud", "HCL")),
        "Ansible": ("medium", ("Configuration Management", "YAML")),
        "GitHub Actions": ("high", ("CI/CD", "Automation", "YAML")),
        "Jenkins": ("medium", ("CI/CD", "Groovy", "Pipelines")),
    }),
    "cloud": _entries("cloud", {
        "AWS": ("high", ("EC2", "S3", "Lambda")),
        "Azure": ("high", ("Azure Functions", "App Service", "Active Directory")),
        "Google Cloud": ("high", ("GKE", "BigQuery", "Cloud Run")),
        "Firebase": ("medium", ("Firestore", "Authentication", "Hosting")),
        "Vercel": ("medium", ("Next.js", "Serverless", "Edge Functions")),
        "Netlify": ("medium", ("JAMstack", "Serverless", "Static Sites")),
        "Heroku": ("low", ("PaaS", "Deployment")),
    }),
    "tools": _entries("tool", {
        "Git": ("high", ("Version Control", "Branching", "Code Review")),
        "Webpack": ("medium", ("Bundling", "JavaScript", "Build Tools")),
        "Vite": ("high", ("Bundling", "ES Modules", "Build Tools")),
        "ESLint": ("medium", ("Linting", "Code Quality", "JavaScript")),
        "Jest": ("high", ("Testing", "JavaScript", "TDD")),
        "Pytest": ("high", ("Testing", "Python", "TDD")),
        "GraphQL": ("high", ("APIs", "Apollo", "Schema Design")),
    }),
}


def flatten_table(table: TechnologyTable) -> dict[str, TechnologyInfo]:
    """Merge all partitions into one lookup. First definition of a name wins."""
    flat: dict[str, TechnologyInfo] = {}
    for partition in table.values():
        for name, info in partition.items():
            flat.setdefault(name, info)
    return flat


def load_table(path: str | Path) -> dict[str, dict[str, TechnologyInfo]]:
    """Load a table from JSON shaped like ``{"languages": {"Go": {...}}}``.

    Each entry needs ``demand``. ``category`` defaults to the one implied by
    a known partition name and ``related`` to empty. Unknown partitions are
    kept but their entries must name a category.
    """
    path = Path(path)
    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TechnologyTableError(f"Cannot read technology table {path}: {e}")

    if not isinstance(raw, dict):
        raise TechnologyTableError(f"{path}: top level must be an object of partitions")

    table: dict[str, dict[str, TechnologyInfo]] = {}
    for partition, entries in raw.items():
        if not isinstance(entries, dict):
            raise TechnologyTableError(f"{path}: partition {partition!r} must be an object")
        table[partition] = {}
        for name, entry in entries.items():
            try:
                category = entry.get("category") or PARTITIONS[partition]
                demand = entry["demand"]
                related = entry.get("related", [])
            except (AttributeError, KeyError) as e:
                raise TechnologyTableError(f"{path}: entry {name!r} is missing {e}")
            if not isinstance(related, list) or not all(isinstance(r, str) for r in related):
                raise TechnologyTableError(f"{path}: entry {name!r} related must be a list of strings")
            if category not in CATEGORIES:
                raise TechnologyTableError(f"{path}: entry {name!r} has unknown category {category!r}")
            if demand not in DEMAND_LEVELS:
                raise TechnologyTableError(f"{path}: entry {name!r} has unknown demand {demand!r}")
            table[partition][name] = TechnologyInfo(category=category, demand=demand, related=tuple(related))
    return table
