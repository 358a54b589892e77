"""Point values and weights used by the metric calculators."""

CODE_QUALITY_BASE_SCORE = 40
DOCUMENTATION_BASE_SCORE = 20
PROJECT_STRUCTURE_BASE_SCORE = 30

# Code quality
TESTS_SCORE = 15
CI_SCORE = 15
LICENSE_SCORE = 5
COMMIT_SCORE = 5
VERY_ACTIVE_COMMIT_SCORE = 5
CONTRIBUTORS_SCORE = 5
STRONG_COLLABORATION_SCORE = 5
LOW_ISSUE_COUNT_SCORE = 5

ACTIVE_COMMIT_THRESHOLD = 50
VERY_ACTIVE_COMMIT_THRESHOLD = 150
COLLABORATION_THRESHOLD = 1
STRONG_COLLABORATION_THRESHOLD = 5
LOW_ISSUE_THRESHOLD = 15

# Documentation
README_SCORE = 45
ADDITIONAL_DOC_SCORE = 20
MEANINGFUL_DESCRIPTION_SCORE = 5
LICENSE_DOC_SCORE = 10

MEANINGFUL_DESCRIPTION_LENGTH = 20

# Project structure
CONFIG_SCORE = 15
SRC_DIR_SCORE = 15
PACKAGE_MANAGER_SCORE = 20
GITIGNORE_SCORE = 10
MULTI_LANG_SCORE = 10

SOURCE_DIRS = ("src", "lib", "app")
PACKAGE_MANIFESTS = ("package.json", "requirements.txt", "go.mod", "cargo.toml", "pom.xml")
MULTI_LANG_THRESHOLD = 2

# Overall score weights (must sum to 1)
CODE_QUALITY_WEIGHT = "0.4"
DOCUMENTATION_WEIGHT = "0.3"
PROJECT_STRUCTURE_WEIGHT = "0.3"

MAX_SCORE = 100

# Result caps
MAX_TECHNOLOGIES = 15
MAX_SKILL_GAPS = 10
MAX_RECOMMENDATIONS = 12
MAX_INSIGHTS = 5
