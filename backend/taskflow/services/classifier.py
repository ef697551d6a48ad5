"""Keyword-table classification of free-text task names and descriptions.

Every table is an ordered tuple: the enumeration order decides category
ties and which priority/effort tier wins when several tiers match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from taskflow.schemas.tasks import DEFAULT_CATEGORY, DEFAULT_ESTIMATED_HOURS

MAX_SUGGESTED_TAGS = 5
DEFAULT_PRIORITY = "medium"

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "development",
        (
            "code", "develop", "programming", "build", "implement", "feature", "bug",
            "fix", "debug", "api", "backend", "frontend", "database", "deploy",
            "release", "refactor", "test", "unit test", "integration",
        ),
    ),
    (
        "design",
        (
            "design", "ui", "ux", "mockup", "wireframe", "prototype", "figma", "sketch",
            "layout", "visual", "brand", "logo", "icon", "style", "color", "typography",
        ),
    ),
    (
        "marketing",
        (
            "marketing", "campaign", "social", "content", "seo", "analytics", "ads",
            "promotion", "email", "newsletter", "launch", "audience", "engagement",
        ),
    ),
    (
        "planning",
        (
            "plan", "strategy", "roadmap", "scope", "requirements", "kickoff", "meeting",
            "review", "retrospective", "sprint", "milestone", "deadline", "schedule",
        ),
    ),
    (
        "research",
        (
            "research", "analyze", "study", "explore", "investigate", "evaluate",
            "compare", "benchmark", "survey", "interview", "data",
        ),
    ),
    (
        "documentation",
        (
            "document", "write", "documentation", "readme", "guide", "tutorial",
            "manual", "specs", "wiki",
        ),
    ),
    (
        "operations",
        (
            "deploy", "server", "infrastructure", "devops", "ci/cd", "monitoring",
            "backup", "security", "performance", "scaling",
        ),
    ),
    (
        "communication",
        (
            "call", "meeting", "sync", "present", "demo", "stakeholder", "client",
            "feedback", "report", "update",
        ),
    ),
)

PRIORITY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "critical",
        (
            "urgent", "critical", "asap", "emergency", "blocker", "production",
            "outage", "security", "immediately", "hotfix",
        ),
    ),
    (
        "high",
        (
            "important", "priority", "deadline", "release", "launch", "demo", "client",
            "key", "essential", "must",
        ),
    ),
    ("medium", ("should", "needed", "planned", "scheduled", "next", "upcoming", "regular")),
    (
        "low",
        (
            "nice to have", "optional", "later", "backlog", "someday", "minor",
            "consider", "idea", "explore",
        ),
    ),
)

# (tier, keywords, hours)
EFFORT_TIERS: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("quick", ("quick", "simple", "small", "minor", "typo", "update", "tweak"), 1),
    ("short", ("add", "create", "implement", "basic", "standard"), 4),
    ("medium", ("feature", "develop", "build", "integrate", "design"), 16),
    ("long", ("complex", "major", "refactor", "overhaul", "redesign", "architecture"), 40),
    ("epic", ("epic", "project", "initiative", "platform", "system"), 80),
)

TAG_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bug", ("bug", "fix", "issue", "error", "broken")),
    ("feature", ("feature", "new", "add", "implement")),
    ("improvement", ("improve", "enhance", "optimize", "refactor")),
    ("urgent", ("urgent", "asap", "critical", "blocker")),
    ("review", ("review", "feedback", "check")),
    ("testing", ("test", "qa", "verify", "validate")),
    ("documentation", ("doc", "readme", "guide", "wiki")),
    ("meeting", ("meeting", "call", "sync", "standup")),
)

CATEGORIES: tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS)


@dataclass(frozen=True)
class Classification:
    """Everything the classifier infers for one piece of task text."""

    category: str
    priority: str
    estimated_hours: float
    tags: list[str]


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def search_text(name: Any, description: Any = "") -> str:
    """Lower-cased `name description` string the keyword tables match against."""
    return f"{_as_text(name)} {_as_text(description)}".lower()


def _any_match(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_category(name: Any, description: Any = "") -> str:
    """Return the category with the most keyword hits, or `general` when none hit."""
    text = search_text(name, description)
    best_category = DEFAULT_CATEGORY
    best_score = 0
    for category, keywords in CATEGORY_KEYWORDS:
        score = sum(1 for keyword in keywords if keyword in text)
        # Strict comparison keeps the earliest category on ties.
        if score > best_score:
            best_category, best_score = category, score
    return best_category


def suggest_priority(name: Any, description: Any = "") -> str:
    """Return the first priority tier with a keyword hit."""
    text = search_text(name, description)
    for priority, keywords in PRIORITY_KEYWORDS:
        if _any_match(text, keywords):
            return priority
    return DEFAULT_PRIORITY


def estimate_hours(name: Any, description: Any = "") -> float:
    """Return the hours of the first effort tier with a keyword hit."""
    text = search_text(name, description)
    for _tier, keywords, hours in EFFORT_TIERS:
        if _any_match(text, keywords):
            return hours
    return DEFAULT_ESTIMATED_HOURS


def suggest_tags(name: Any, description: Any = "") -> list[str]:
    text = search_text(name, description)
    tags = [tag for tag, keywords in TAG_PATTERNS if _any_match(text, keywords)]
    return tags[:MAX_SUGGESTED_TAGS]


def classify(name: Any, description: Any = "") -> Classification:
    """Run every classifier over the same text."""
    return Classification(
        category=classify_category(name, description),
        priority=suggest_priority(name, description),
        estimated_hours=estimate_hours(name, description),
        tags=suggest_tags(name, description),
    )
