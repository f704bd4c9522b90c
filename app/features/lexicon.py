"""Fixed word lists and rewrite tables used by the résumé rule engine.

Every table is an immutable tuple or a read-only mapping so that analyses running
on different threads can share them. Editing any entry changes scores, so bump
``version`` in config/scoring.yaml together with it.
"""

from __future__ import annotations

from types import MappingProxyType

WEAK_PHRASES: tuple[str, ...] = (
    "responsible for",
    "duties included",
    "worked on",
    "helped with",
    "involved in",
    "participated in",
    "assisted with",
    "contributed to",
    "tasked with",
    "assigned to",
    "duties were",
    "job involved",
    "my duties",
    "my role",
    "supported",
    "handled",
    "coordinated",
    "oversaw",
    "maintained",
)

WEAK_PHRASE_REPLACEMENTS = MappingProxyType(
    {
        "responsible for": "managed",
        "duties included": "delivered",
        "worked on": "developed",
        "helped with": "improved",
        "involved in": "led",
        "participated in": "drove",
        "assisted with": "enhanced",
        "contributed to": "delivered",
        "tasked with": "executed",
        "assigned to": "led",
        "duties were": "delivered",
        "job involved": "delivered",
        "supported": "enabled",
        "handled": "resolved",
        "coordinated": "orchestrated",
        "oversaw": "directed",
        "maintained": "strengthened",
    }
)
DEFAULT_WEAK_REPLACEMENT = "achieved"

PASSIVE_AUXILIARIES: tuple[str, ...] = ("was", "were", "is", "are", "been", "being")
PASSIVE_AGENT_SUFFIXES: tuple[str, ...] = ("by me", "by myself", "by us")

SUPERVISORY_VERBS: tuple[str, ...] = (
    "managed",
    "oversaw",
    "supervised",
    "coordinated",
    "handled",
    "administered",
    "maintained",
)

# Core verbs that claim an accomplishment and therefore need a number behind them.
METRIC_ACTION_VERBS: tuple[str, ...] = (
    "managed",
    "led",
    "developed",
    "created",
    "implemented",
    "improved",
    "achieved",
    "delivered",
)

# Broader action verbs that should at least state an outcome.
OUTCOME_ACTION_VERBS: tuple[str, ...] = (
    "built",
    "designed",
    "launched",
    "established",
    "organized",
    "prepared",
    "wrote",
    "analyzed",
    "executed",
    "drove",
    "produced",
    "planned",
    "conducted",
    "processed",
    "trained",
    "negotiated",
    "spearheaded",
    "streamlined",
    "automated",
    "migrated",
    "resolved",
    "ran",
)

IMPACT_MARKERS: tuple[str, ...] = (
    "resulted in",
    "resulting in",
    "leading to",
    "improved",
    "reduced",
    "increased",
    "boosted",
    "saved",
    "cut",
    "delivered",
    "achieved",
    "revenue",
    "cost",
    "costs",
    "accuracy",
    "compliance",
    "risk",
    "latency",
)
# Prefix matches (any word starting with these counts as an impact marker).
IMPACT_MARKER_PREFIXES: tuple[str, ...] = ("efficien",)

VAGUE_QUANTIFIERS: tuple[str, ...] = (
    "various",
    "different",
    "multiple",
    "several",
    "many",
    "numerous",
    "diverse",
)

VAGUE_QUANTIFIER_REPLACEMENTS = MappingProxyType(
    {
        "various": "15 different",
        "different": "4 distinct",
        "multiple": "5 separate",
        "several": "7 distinct",
        "many": "20+ individual",
        "numerous": "12",
        "diverse": "6 distinct",
    }
)

OUTCOME_CLAUSE = ", resulting in 20% faster turnaround and fewer escalations"

# (keywords, clause) pairs checked in order; the first keyword hit picks the clause.
METRIC_CLAUSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("data", "analysis"), ", improving accuracy by 25%"),
    (("team", "manage"), ", leading a team of 8 people"),
    (("project",), ", delivering a $200K+ project on time"),
    (("report",), ", reducing reporting time by 40%"),
)
DEFAULT_METRIC_CLAUSE = ", achieving a 15% improvement in efficiency"

STRONG_ACTION_WORDS: tuple[str, ...] = (
    "managed",
    "led",
    "developed",
    "created",
    "implemented",
    "improved",
    "achieved",
    "delivered",
    "designed",
    "optimized",
    "increased",
    "reduced",
    "generated",
    "established",
)

SKILL_KEYWORDS: tuple[str, ...] = (
    "sql",
    "excel",
    "tableau",
    "python",
    "analysis",
    "data",
    "management",
    "leadership",
)

STANDARD_HEADERS: tuple[str, ...] = ("experience", "education", "skills")
