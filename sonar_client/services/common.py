"""Response fragments shared by several services."""

from typing import TypedDict


class Paging(TypedDict, total=False):
    pageIndex: int
    pageSize: int
    total: int


class TextRange(TypedDict, total=False):
    startLine: int
    endLine: int
    startOffset: int
    endOffset: int


class Impact(TypedDict, total=False):
    softwareQuality: str
    severity: str


class Flow(TypedDict, total=False):
    locations: list[dict]
    description: str
    type: str


#: Software qualities and severities introduced with Clean Code taxonomy (10.x).
SOFTWARE_QUALITIES = frozenset({"MAINTAINABILITY", "RELIABILITY", "SECURITY"})
IMPACT_SEVERITIES = frozenset({"INFO", "LOW", "MEDIUM", "HIGH", "BLOCKER"})
SEVERITIES = frozenset({"INFO", "MINOR", "MAJOR", "CRITICAL", "BLOCKER"})
ISSUE_TYPES = frozenset({"CODE_SMELL", "BUG", "VULNERABILITY"})
CLEAN_CODE_ATTRIBUTE_CATEGORIES = frozenset({"ADAPTABLE", "CONSISTENT", "INTENTIONAL", "RESPONSIBLE"})
VISIBILITIES = frozenset({"private", "public"})
OWASP_TOP10_CATEGORIES = frozenset(f"a{n}" for n in range(1, 11))
OWASP_MOBILE_TOP10_CATEGORIES = frozenset(f"m{n}" for n in range(1, 11))
SANS_TOP25_CATEGORIES = frozenset({"insecure-interaction", "risky-resource", "porous-defenses"})

MAX_PROJECT_KEY_LENGTH = 400
MAX_PROJECT_NAME_LENGTH = 500

RULE_STATUSES = frozenset({"BETA", "DEPRECATED", "READY", "REMOVED"})
RULE_TYPES = frozenset({"CODE_SMELL", "BUG", "VULNERABILITY", "SECURITY_HOTSPOT"})
#: Membership filter of the search_groups / search_users style actions.
SELECTED_FILTERS = frozenset({"all", "deselected", "selected"})
