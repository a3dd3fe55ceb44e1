"""Security hotspots: code that needs a manual security review."""

from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import (
    OWASP_TOP10_CATEGORIES,
    SANS_TOP25_CATEGORIES,
    Paging,
)
from sonar_client.validation import (
    validate_all_allowed,
    validate_allowed,
    validate_max_length,
    validate_one_of,
    validate_required,
)

MAX_COMMENT_LENGTH = 1000

HOTSPOT_STATUSES = frozenset({"TO_REVIEW", "REVIEWED"})
HOTSPOT_RESOLUTIONS = frozenset({"FIXED", "SAFE", "ACKNOWLEDGED"})
OWASP_ASVS_LEVELS = frozenset({"1", "2", "3"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class HotspotComponent(TypedDict, total=False):
    key: str
    name: str
    longName: str
    path: str
    qualifier: str


class HotspotSummary(TypedDict, total=False):
    key: str
    component: str
    project: str
    ruleKey: str
    securityCategory: str
    vulnerabilityProbability: str
    status: str
    line: int
    message: str
    messageFormattings: list[Any]
    assignee: str
    author: str
    creationDate: str
    updateDate: str
    flows: list[Any]


class HotspotComment(TypedDict, total=False):
    key: str
    login: str
    htmlText: str
    markdown: str
    createdAt: str
    updatable: bool


class HotspotUser(TypedDict, total=False):
    login: str
    name: str
    active: bool


class HotspotDiff(TypedDict, total=False):
    key: str
    oldValue: str
    newValue: str


class HotspotChangelogEntry(TypedDict, total=False):
    user: str
    userName: str
    isUserActive: bool
    avatar: str
    creationDate: str
    diffs: list[HotspotDiff]


class HotspotMessageFormatting(TypedDict, total=False):
    start: int
    end: int
    type: str


class HotspotProject(TypedDict, total=False):
    key: str
    name: str
    longName: str
    qualifier: str


class HotspotRule(TypedDict, total=False):
    key: str
    name: str
    securityCategory: str
    vulnerabilityProbability: str


class HotspotsSearch(TypedDict, total=False):
    components: list[HotspotComponent]
    hotspots: list[HotspotSummary]
    paging: Paging


HotspotsList = HotspotsSearch
HotspotsEditComment = HotspotComment


class HotspotsShow(TypedDict, total=False):
    key: str
    component: HotspotComponent
    project: HotspotProject
    rule: HotspotRule
    status: str
    line: int
    hash: str
    message: str
    messageFormattings: list[HotspotMessageFormatting]
    assignee: str
    author: str
    creationDate: str
    updateDate: str
    changelog: list[HotspotChangelogEntry]
    comment: list[HotspotComment]
    users: list[HotspotUser]
    canChangeStatus: bool
    codeVariants: list[str]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _validate_status(status: str | None, resolution: str | None) -> None:
    validate_allowed(status, HOTSPOT_STATUSES, "status")
    validate_allowed(resolution, HOTSPOT_RESOLUTIONS, "resolution")


@dataclass(kw_only=True)
class HotspotsAddCommentOption(Options):
    hotspot: str | None = None
    comment: str | None = None

    def validate(self) -> None:
        validate_required(self.comment, "comment")
        validate_max_length(self.comment, MAX_COMMENT_LENGTH, "comment")
        validate_required(self.hotspot, "hotspot")


@dataclass(kw_only=True)
class HotspotsAssignOption(Options):
    hotspot: str | None = None
    #: Login of the assignee; unassigns when omitted.
    assignee: str | None = None
    comment: str | None = None

    def validate(self) -> None:
        validate_required(self.hotspot, "hotspot")


@dataclass(kw_only=True)
class HotspotsChangeStatusOption(Options):
    hotspot: str | None = None
    status: str | None = None
    #: Required when status is REVIEWED.
    resolution: str | None = None
    comment: str | None = None

    def validate(self) -> None:
        validate_required(self.hotspot, "hotspot")
        validate_required(self.status, "status")
        _validate_status(self.status, self.resolution)


@dataclass(kw_only=True)
class HotspotsDeleteCommentOption(Options):
    comment: str | None = None

    def validate(self) -> None:
        validate_required(self.comment, "comment")


@dataclass(kw_only=True)
class HotspotsEditCommentOption(Options):
    comment: str | None = None
    text: str | None = None

    def validate(self) -> None:
        validate_required(self.comment, "comment")
        validate_required(self.text, "text")
        validate_max_length(self.text, MAX_COMMENT_LENGTH, "text")


@dataclass(kw_only=True)
class HotspotsListOption(PaginationArgs):
    project: str | None = None
    branch: str | None = None
    pull_request: str | None = None
    status: str | None = None
    resolution: str | None = None
    in_new_code_period: bool | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")
        _validate_status(self.status, self.resolution)
        super().validate()


@dataclass(kw_only=True)
class HotspotsPullOption(Options):
    project_key: str | None = None
    branch_name: str | None = None
    languages: list[str] | None = None
    #: Epoch millis; only hotspots changed after it are returned.
    changed_since: int | None = None

    def validate(self) -> None:
        validate_required(self.branch_name, "branch_name")
        validate_required(self.project_key, "project_key")


@dataclass(kw_only=True)
class HotspotsSearchOption(PaginationArgs):
    project: str | None = None
    hotspots: list[str] | None = None
    branch: str | None = None
    pull_request: str | None = None
    files: list[str] | None = None
    status: str | None = None
    resolution: str | None = None
    in_new_code_period: bool | None = None
    only_mine: bool | None = None
    casa: list[str] | None = None
    compliance_standards: list[str] | None = None
    cwe: list[str] | None = None
    owasp_asvs_40: list[str] | None = param("owaspAsvs-4.0")
    owasp_asvs_level: str | None = None
    owasp_top10: list[str] | None = param("owaspTop10")
    owasp_top10_2021: list[str] | None = param("owaspTop10-2021")
    pci_dss_32: list[str] | None = param("pciDss-3.2")
    pci_dss_40: list[str] | None = param("pciDss-4.0")
    sans_top25: list[str] | None = param("sansTop25")
    sonarsource_security: list[str] | None = None
    stig_asd_v5r3: list[str] | None = param("stig-ASD_V5R3")

    def validate(self) -> None:
        validate_one_of("project", project=self.project, hotspots=self.hotspots)
        _validate_status(self.status, self.resolution)
        validate_allowed(self.owasp_asvs_level, OWASP_ASVS_LEVELS, "owasp_asvs_level")
        validate_all_allowed(self.owasp_top10, OWASP_TOP10_CATEGORIES, "owasp_top10")
        validate_all_allowed(self.owasp_top10_2021, OWASP_TOP10_CATEGORIES, "owasp_top10_2021")
        validate_all_allowed(self.sans_top25, SANS_TOP25_CATEGORIES, "sans_top25")
        super().validate()


@dataclass(kw_only=True)
class HotspotsShowOption(Options):
    hotspot: str | None = None

    def validate(self) -> None:
        validate_required(self.hotspot, "hotspot")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class HotspotsService(Service):

    def add_comment(self, opt: HotspotsAddCommentOption) -> None:
        self._post("hotspots/add_comment", opt)

    def assign(self, opt: HotspotsAssignOption) -> None:
        self._post("hotspots/assign", opt)

    def change_status(self, opt: HotspotsChangeStatusOption) -> None:
        """Move a hotspot between TO_REVIEW and REVIEWED (with a resolution)."""
        self._post("hotspots/change_status", opt)

    def delete_comment(self, opt: HotspotsDeleteCommentOption) -> None:
        self._post("hotspots/delete_comment", opt)

    def edit_comment(self, opt: HotspotsEditCommentOption) -> HotspotsEditComment:
        return self._post("hotspots/edit_comment", opt, expect="json")

    def list(self, opt: HotspotsListOption) -> HotspotsList:
        """Hotspots of a project branch, intended for IDE consumption."""
        return self._get("hotspots/list", opt)

    def pull(self, opt: HotspotsPullOption) -> bytes:
        """Protobuf stream of hotspots, as consumed by SonarLint."""
        return self._get("hotspots/pull", opt, expect="bytes")

    def search(self, opt: HotspotsSearchOption) -> HotspotsSearch:
        return self._get("hotspots/search", opt)

    def show(self, opt: HotspotsShowOption) -> HotspotsShow:
        return self._get("hotspots/show", opt)
