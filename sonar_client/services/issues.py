"""Issues: read and update issues raised by the analyzers."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import (
    CLEAN_CODE_ATTRIBUTE_CATEGORIES,
    IMPACT_SEVERITIES,
    ISSUE_TYPES,
    OWASP_MOBILE_TOP10_CATEGORIES,
    OWASP_TOP10_CATEGORIES,
    SANS_TOP25_CATEGORIES,
    SEVERITIES,
    SOFTWARE_QUALITIES,
    Impact,
    Paging,
    TextRange,
)
from sonar_client.validation import (
    validate_all_allowed,
    validate_allowed,
    validate_languages,
    validate_one_of,
    validate_range,
    validate_required,
)

MAX_AUTHORS_PAGE_SIZE = 100
MAX_TAGS_PAGE_SIZE = 500

ISSUE_TRANSITIONS = frozenset({
    "confirm", "unconfirm", "reopen", "resolve", "falsepositive", "wontfix", "close",
    "accept", "setinreview", "resolveasreviewed", "resetastoreview",
})
#: Legacy workflow statuses (``statuses``).
ISSUE_STATUSES = frozenset({"OPEN", "CONFIRMED", "REOPENED", "RESOLVED", "CLOSED"})
#: Simplified statuses introduced in 10.4 (``issueStatuses``).
ISSUE_SIMPLE_STATUSES = frozenset({
    "OPEN", "CONFIRMED", "FALSE_POSITIVE", "ACCEPTED", "FIXED", "IN_SANDBOX",
})
ISSUE_RESOLUTIONS = frozenset({"FALSE-POSITIVE", "WONTFIX", "FIXED", "REMOVED"})
ISSUE_SCOPES = frozenset({"MAIN", "TEST"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MessageFormatting(TypedDict, total=False):
    start: int
    end: int
    type: str


class FlowLocation(TypedDict, total=False):
    msg: str
    textRange: TextRange
    msgFormattings: list[MessageFormatting]


class IssueFlow(TypedDict, total=False):
    locations: list[FlowLocation]


class IssueComment(TypedDict, total=False):
    key: str
    login: str
    htmlText: str
    markdown: str
    createdAt: str
    updatable: bool


class Issue(TypedDict, total=False):
    key: str
    rule: str
    component: str
    project: str
    message: str
    line: int
    hash: str
    textRange: TextRange
    flows: list[IssueFlow]
    messageFormattings: list[MessageFormatting]
    status: str
    issueStatus: str
    severity: str
    type: str
    author: str
    assignee: str
    effort: str
    debt: str
    creationDate: str
    updateDate: str
    tags: list[str]
    internalTags: list[str]
    codeVariants: list[str]
    comments: list[IssueComment]
    actions: list[str]
    transitions: list[str]
    impacts: list[Impact]
    cleanCodeAttribute: str
    cleanCodeAttributeCategory: str
    ruleDescriptionContextKey: str
    linkedTicketStatus: str
    quickFixAvailable: bool
    prioritizedRule: bool


class IssueComponent(TypedDict, total=False):
    key: str
    name: str
    longName: str
    path: str
    qualifier: str
    enabled: bool


class IssueRule(TypedDict, total=False):
    key: str
    name: str
    lang: str
    langName: str
    status: str


class IssueUser(TypedDict, total=False):
    login: str
    name: str
    email: str
    avatar: str
    active: bool


class ChangelogDiff(TypedDict, total=False):
    key: str
    oldValue: str
    newValue: str


class ChangelogEntry(TypedDict, total=False):
    user: str
    userName: str
    isUserActive: bool
    externalUser: str
    webhookSource: str
    avatar: str
    creationDate: str
    diffs: list[ChangelogDiff]


class IssueFacetValue(TypedDict, total=False):
    val: str
    count: int


class IssueFacet(TypedDict, total=False):
    property: str
    values: list[IssueFacetValue]


class ComponentTag(TypedDict, total=False):
    key: str
    value: int


class IssueChange(TypedDict, total=False):
    """Returned by every action that updates a single issue."""

    issue: Issue
    components: list[IssueComponent]
    rules: list[IssueRule]
    users: list[IssueUser]


class IssuesAuthors(TypedDict, total=False):
    authors: list[str]


class IssuesBulkChange(TypedDict, total=False):
    total: int
    success: int
    ignored: int
    failures: int


class IssuesChangelog(TypedDict, total=False):
    changelog: list[ChangelogEntry]


class IssuesComponentTags(TypedDict, total=False):
    tags: list[ComponentTag]


class IssuesList(TypedDict, total=False):
    issues: list[Issue]
    components: list[IssueComponent]
    paging: Paging


class IssuesSearch(TypedDict, total=False):
    issues: list[Issue]
    components: list[IssueComponent]
    facets: list[IssueFacet]
    rules: list[IssueRule]
    users: list[IssueUser]
    paging: Paging


class IssuesTags(TypedDict, total=False):
    tags: list[str]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class IssuesAddCommentOption(Options):
    issue: str | None = None
    #: Markdown
    text: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")
        validate_required(self.text, "text")


@dataclass(kw_only=True)
class IssuesAnticipatedTransitionsOption(Options):
    project_key: str | None = None

    def validate(self) -> None:
        validate_required(self.project_key, "project_key")


@dataclass(kw_only=True)
class IssuesAssignOption(Options):
    issue: str | None = None
    #: Unassigns the issue when omitted.
    assignee: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")


@dataclass(kw_only=True)
class IssuesAuthorsOption(Options):
    project: str | None = None
    query: str | None = param("q")
    page_size: int | None = param("ps")

    def validate(self) -> None:
        validate_range(self.page_size, 1, MAX_AUTHORS_PAGE_SIZE, "page_size")


@dataclass(kw_only=True)
class IssuesBulkChangeOption(Options):
    issues: list[str] | None = None
    add_tags: list[str] | None = param("add_tags")
    remove_tags: list[str] | None = param("remove_tags")
    assign: str | None = None
    comment: str | None = None
    do_transition: str | None = param("do_transition")
    set_severity: str | None = param("set_severity")
    set_type: str | None = param("set_type")
    send_notifications: bool | None = None

    def validate(self) -> None:
        validate_required(self.issues, "issues")
        validate_allowed(self.set_severity, SEVERITIES, "set_severity")
        validate_allowed(self.set_type, ISSUE_TYPES, "set_type")
        validate_allowed(self.do_transition, ISSUE_TRANSITIONS, "do_transition")


@dataclass(kw_only=True)
class IssuesChangelogOption(Options):
    issue: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")


@dataclass(kw_only=True)
class IssuesComponentTagsOption(Options):
    component_uuid: str | None = None
    created_after: str | None = None
    page_size: int | None = param("ps")

    def validate(self) -> None:
        validate_required(self.component_uuid, "component_uuid")


@dataclass(kw_only=True)
class IssuesDeleteCommentOption(Options):
    comment: str | None = None

    def validate(self) -> None:
        validate_required(self.comment, "comment")


@dataclass(kw_only=True)
class IssuesDoTransitionOption(Options):
    issue: str | None = None
    transition: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")
        validate_required(self.transition, "transition")
        validate_allowed(self.transition, ISSUE_TRANSITIONS, "transition")


@dataclass(kw_only=True)
class IssuesEditCommentOption(Options):
    comment: str | None = None
    text: str | None = None

    def validate(self) -> None:
        validate_required(self.comment, "comment")
        validate_required(self.text, "text")


@dataclass(kw_only=True)
class IssuesListOption(PaginationArgs):
    project: str | None = None
    component: str | None = None
    branch: str | None = None
    pull_request: str | None = None
    types: list[str] | None = None
    resolved: bool | None = None
    in_new_code_period: bool | None = None

    def validate(self) -> None:
        validate_one_of("project", project=self.project, component=self.component)
        super().validate()
        validate_all_allowed(self.types, ISSUE_TYPES, "types")


@dataclass(kw_only=True)
class IssuesPullOption(Options):
    project_key: str | None = None
    branch_name: str | None = None
    languages: list[str] | None = None
    rule_repositories: list[str] | None = None
    changed_since: str | None = None
    resolved_only: bool | None = None

    def validate(self) -> None:
        validate_required(self.project_key, "project_key")
        validate_languages(self.languages)


@dataclass(kw_only=True)
class IssuesPullTaintOption(Options):
    project_key: str | None = None
    branch_name: str | None = None
    languages: list[str] | None = None
    changed_since: str | None = None

    def validate(self) -> None:
        validate_required(self.project_key, "project_key")
        validate_languages(self.languages)


@dataclass(kw_only=True)
class IssuesReindexOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class IssuesSearchOption(PaginationArgs):
    additional_fields: list[str] | None = None
    ascending: bool | None = param("asc")
    assigned: bool | None = None
    assignees: list[str] | None = None
    author: str | None = None
    branch: str | None = None
    casa: list[str] | None = None
    clean_code_attribute_categories: list[str] | None = None
    code_variants: list[str] | None = None
    compliance_standards: list[str] | None = None
    components: list[str] | None = None
    created_after: str | None = None
    created_at: str | None = None
    created_before: str | None = None
    #: e.g. ``1m2w`` for one month and two weeks
    created_in_last: str | None = None
    cwe: list[str] | None = None
    directories: list[str] | None = None
    facets: list[str] | None = None
    files: list[str] | None = None
    fixed_in_pull_request: str | None = None
    impact_severities: list[str] | None = None
    impact_software_qualities: list[str] | None = None
    in_new_code_period: bool | None = None
    issue_statuses: list[str] | None = None
    issues: list[str] | None = None
    languages: list[str] | None = None
    on_component_only: bool | None = None
    owasp_asvs_40: list[str] | None = param("owaspAsvs-4.0")
    owasp_asvs_level: int | None = None
    owasp_mobile_top10_2024: list[str] | None = param("owaspMobileTop10-2024")
    owasp_top10: list[str] | None = param("owaspTop10")
    owasp_top10_2021: list[str] | None = param("owaspTop10-2021")
    pci_dss_32: list[str] | None = param("pciDss-3.2")
    pci_dss_40: list[str] | None = param("pciDss-4.0")
    prioritized_rule: bool | None = None
    projects: list[str] | None = None
    pull_request: str | None = None
    resolutions: list[str] | None = None
    resolved: bool | None = None
    rules: list[str] | None = None
    sans_top25: list[str] | None = param("sansTop25")
    scopes: list[str] | None = None
    severities: list[str] | None = None
    sonarsource_security: list[str] | None = None
    sort: str | None = param("s")
    statuses: list[str] | None = None
    stig_asd_v5r3: list[str] | None = param("stig-ASD_V5R3")
    tags: list[str] | None = None
    time_zone: str | None = None
    types: list[str] | None = None

    def validate(self) -> None:
        super().validate()
        validate_all_allowed(self.impact_severities, IMPACT_SEVERITIES, "impact_severities")
        validate_all_allowed(self.impact_software_qualities, SOFTWARE_QUALITIES, "impact_software_qualities")
        validate_all_allowed(
            self.clean_code_attribute_categories,
            CLEAN_CODE_ATTRIBUTE_CATEGORIES,
            "clean_code_attribute_categories",
        )
        validate_all_allowed(self.severities, SEVERITIES, "severities")
        validate_all_allowed(self.types, ISSUE_TYPES, "types")
        validate_all_allowed(self.statuses, ISSUE_STATUSES, "statuses")
        validate_all_allowed(self.issue_statuses, ISSUE_SIMPLE_STATUSES, "issue_statuses")
        validate_all_allowed(self.resolutions, ISSUE_RESOLUTIONS, "resolutions")
        validate_all_allowed(self.scopes, ISSUE_SCOPES, "scopes")
        validate_languages(self.languages)
        validate_all_allowed(self.owasp_top10, OWASP_TOP10_CATEGORIES, "owasp_top10")
        validate_all_allowed(self.owasp_top10_2021, OWASP_TOP10_CATEGORIES, "owasp_top10_2021")
        validate_all_allowed(
            self.owasp_mobile_top10_2024, OWASP_MOBILE_TOP10_CATEGORIES, "owasp_mobile_top10_2024"
        )
        validate_all_allowed(self.sans_top25, SANS_TOP25_CATEGORIES, "sans_top25")


@dataclass(kw_only=True)
class IssuesSetSeverityOption(Options):
    issue: str | None = None
    severity: str | None = None
    #: ``SOFTWARE_QUALITY=SEVERITY`` pairs, since 10.8
    impact: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")
        validate_allowed(self.severity, SEVERITIES, "severity")


@dataclass(kw_only=True)
class IssuesSetTagsOption(Options):
    issue: str | None = None
    #: An empty list removes every tag.
    tags: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.tags is not None and not self.tags:
            params["tags"] = ""
        return params


@dataclass(kw_only=True)
class IssuesSetTypeOption(Options):
    issue: str | None = None
    type: str | None = None

    def validate(self) -> None:
        validate_required(self.issue, "issue")
        validate_required(self.type, "type")
        validate_allowed(self.type, ISSUE_TYPES, "type")


@dataclass(kw_only=True)
class IssuesTagsOption(Options):
    project: str | None = None
    branch: str | None = None
    query: str | None = param("q")
    page_size: int | None = param("ps")
    all: bool | None = None

    def validate(self) -> None:
        validate_range(self.page_size, 1, MAX_TAGS_PAGE_SIZE, "page_size")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class IssuesService(Service):
    """Actions that change a single issue return it with its referenced
    components, rules and users (:class:`IssueChange`).
    """

    def add_comment(self, opt: IssuesAddCommentOption) -> IssueChange:
        return self._post("issues/add_comment", opt, expect="json")

    def anticipated_transitions(self, opt: IssuesAnticipatedTransitionsOption) -> None:
        self._post("issues/anticipated_transitions", opt)

    def assign(self, opt: IssuesAssignOption) -> IssueChange:
        return self._post("issues/assign", opt, expect="json")

    def authors(self, opt: IssuesAuthorsOption | None = None) -> IssuesAuthors:
        """SCM accounts matching the query, sorted alphabetically."""
        return self._get("issues/authors", opt or IssuesAuthorsOption())

    def bulk_change(self, opt: IssuesBulkChangeOption) -> IssuesBulkChange:
        """Apply the same changes to a set of issues.

        Changes the caller has no permission for are counted as ``ignored``.
        """
        return self._post("issues/bulk_change", opt, expect="json")

    def changelog(self, opt: IssuesChangelogOption) -> IssuesChangelog:
        return self._get("issues/changelog", opt)

    def component_tags(self, opt: IssuesComponentTagsOption) -> IssuesComponentTags:
        return self._get("issues/component_tags", opt)

    def delete_comment(self, opt: IssuesDeleteCommentOption) -> IssueChange:
        return self._post("issues/delete_comment", opt, expect="json")

    def do_transition(self, opt: IssuesDoTransitionOption) -> IssueChange:
        return self._post("issues/do_transition", opt, expect="json")

    def edit_comment(self, opt: IssuesEditCommentOption) -> IssueChange:
        return self._post("issues/edit_comment", opt, expect="json")

    def list(self, opt: IssuesListOption) -> IssuesList:
        return self._get("issues/list", opt)

    def pull(self, opt: IssuesPullOption) -> bytes:
        """Protobuf stream of issues, as consumed by SonarLint."""
        return self._get("issues/pull", opt, expect="bytes")

    def pull_taint(self, opt: IssuesPullTaintOption) -> bytes:
        return self._get("issues/pull_taint", opt, expect="bytes")

    def reindex(self, opt: IssuesReindexOption) -> None:
        self._post("issues/reindex", opt)

    def search(self, opt: IssuesSearchOption | None = None) -> IssuesSearch:
        """Search issues. At most 10 000 results can be paged through."""
        return self._get("issues/search", opt or IssuesSearchOption())

    def set_severity(self, opt: IssuesSetSeverityOption) -> IssueChange:
        return self._post("issues/set_severity", opt, expect="json")

    def set_tags(self, opt: IssuesSetTagsOption) -> IssueChange:
        return self._post("issues/set_tags", opt, expect="json")

    def set_type(self, opt: IssuesSetTypeOption) -> IssueChange:
        return self._post("issues/set_type", opt, expect="json")

    def tags(self, opt: IssuesTagsOption | None = None) -> IssuesTags:
        return self._get("issues/tags", opt or IssuesTagsOption())
