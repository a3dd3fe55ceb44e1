"""Quality profiles: rule activation, inheritance and project association.

Most actions identify a profile by ``language`` + ``quality_profile`` (its
name); ``show``, ``compare``, ``copy``, ``rename`` and rule activation take
the profile key instead.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import SELECTED_FILTERS, SEVERITIES, Impact, Paging
from sonar_client.services.rules import RuleFilters, validate_impacts
from sonar_client.validation import (
    validate_allowed,
    validate_exclusive,
    validate_language,
    validate_max_length,
    validate_required,
)

MAX_QUALITY_PROFILE_NAME_LENGTH = 100

CHANGELOG_FILTER_MODES = frozenset({"MQR", "STANDARD"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class QualityProfileActions(TypedDict, total=False):
    associateProjects: bool
    copy: bool
    delete: bool
    edit: bool
    setAsDefault: bool


class QualityProfile(TypedDict, total=False):
    key: str
    name: str
    language: str
    languageName: str
    parentKey: str
    parentName: str
    isBuiltIn: bool
    isDefault: bool
    isInherited: bool
    activeRuleCount: int
    activeDeprecatedRuleCount: int
    projectCount: int
    lastUsed: str
    ruleUpdatedAt: str
    userUpdatedAt: str
    actions: QualityProfileActions


class ImpactChange(TypedDict, total=False):
    softwareQuality: str
    oldSeverity: str
    newSeverity: str


class ChangelogEventParams(TypedDict, total=False):
    severity: str
    newCleanCodeAttribute: str
    newCleanCodeAttributeCategory: str
    oldCleanCodeAttribute: str
    oldCleanCodeAttributeCategory: str
    prioritizedRule: str
    sonarQubeVersion: str
    impactChanges: list[ImpactChange]


class ChangelogEvent(TypedDict, total=False):
    date: str
    #: ACTIVATED, DEACTIVATED or UPDATED
    action: str
    authorLogin: str
    authorName: str
    ruleKey: str
    ruleName: str
    cleanCodeAttributeCategory: str
    impacts: list[Impact]
    params: ChangelogEventParams


class CompareProfile(TypedDict, total=False):
    key: str
    name: str


class CompareRule(TypedDict, total=False):
    key: str
    name: str
    pluginKey: str
    pluginName: str
    languageKey: str
    languageName: str


class RuleSetting(TypedDict, total=False):
    severity: str
    params: dict[str, str]


class CompareModifiedRule(CompareRule, total=False):
    left: RuleSetting
    right: RuleSetting


class InheritanceProfile(TypedDict, total=False):
    key: str
    name: str
    parent: str
    isBuiltIn: bool
    activeRuleCount: int
    inactiveRuleCount: int
    overridingRuleCount: int


class ProfileFormat(TypedDict, total=False):
    key: str
    name: str
    languages: list[str]


class ProfileProject(TypedDict, total=False):
    key: str
    name: str
    selected: bool


class ProfileGroup(TypedDict, total=False):
    name: str
    description: str
    selected: bool


class ProfileUser(TypedDict, total=False):
    login: str
    name: str
    avatar: str
    selected: bool


class QualityprofilesChangelog(TypedDict, total=False):
    events: list[ChangelogEvent]
    paging: Paging


class QualityprofilesCompare(TypedDict, total=False):
    left: CompareProfile
    right: CompareProfile
    inLeft: list[CompareRule]
    inRight: list[CompareRule]
    modified: list[CompareModifiedRule]
    same: list[CompareRule]


QualityprofilesCopy = QualityProfile


class QualityprofilesCreate(TypedDict, total=False):
    profile: QualityProfile
    warnings: list[str]


class QualityprofilesExporters(TypedDict, total=False):
    exporters: list[ProfileFormat]


class QualityprofilesImporters(TypedDict, total=False):
    importers: list[ProfileFormat]


class QualityprofilesInheritance(TypedDict, total=False):
    profile: InheritanceProfile
    ancestors: list[InheritanceProfile]
    children: list[InheritanceProfile]


class QualityprofilesProjects(TypedDict, total=False):
    results: list[ProfileProject]
    paging: Paging


class QualityprofilesSearchActions(TypedDict, total=False):
    create: bool


class QualityprofilesSearch(TypedDict, total=False):
    profiles: list[QualityProfile]
    actions: QualityprofilesSearchActions


class QualityprofilesSearchGroups(TypedDict, total=False):
    groups: list[ProfileGroup]
    paging: Paging


class QualityprofilesSearchUsers(TypedDict, total=False):
    users: list[ProfileUser]
    paging: Paging


class QualityprofilesShow(TypedDict, total=False):
    profile: QualityProfile
    #: Present when ``compare_to_sonar_way`` is set.
    compareToSonarWay: dict


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _validate_profile_ref(language: str | None, quality_profile: str | None) -> None:
    validate_required(language, "language")
    validate_language(language)
    validate_required(quality_profile, "quality_profile")


def _validate_profile_name(name: str | None, field: str) -> None:
    validate_required(name, field)
    validate_max_length(name, MAX_QUALITY_PROFILE_NAME_LENGTH, field)


@dataclass(kw_only=True)
class QualityprofilesProfileOption(Options):
    """A profile by language and name.

    Options of ``backup``, ``delete``, ``inheritance`` and ``set_default``.
    """

    language: str | None = None
    quality_profile: str | None = None

    def validate(self) -> None:
        _validate_profile_ref(self.language, self.quality_profile)


@dataclass(kw_only=True)
class QualityprofilesGroupOption(QualityprofilesProfileOption):
    """Shared by ``add_group`` and ``remove_group``."""

    group: str | None = None

    def validate(self) -> None:
        validate_required(self.group, "group")
        super().validate()


@dataclass(kw_only=True)
class QualityprofilesProjectOption(QualityprofilesProfileOption):
    """Shared by ``add_project`` and ``remove_project``."""

    project: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class QualityprofilesUserOption(QualityprofilesProfileOption):
    """Shared by ``add_user`` and ``remove_user``."""

    login: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.login, "login")


@dataclass(kw_only=True)
class QualityprofilesChangeParentOption(QualityprofilesProfileOption):
    #: Omit to detach the profile from its parent.
    parent_quality_profile: str | None = None


@dataclass(kw_only=True)
class QualityprofilesChangelogOption(PaginationArgs):
    language: str | None = None
    quality_profile: str | None = None
    filter_mode: str | None = None
    #: Start date (inclusive), YYYY-MM-DD or datetime.
    since: str | None = None
    #: End date (exclusive), YYYY-MM-DD or datetime.
    to: str | None = None

    def validate(self) -> None:
        super().validate()
        _validate_profile_ref(self.language, self.quality_profile)
        validate_allowed(self.filter_mode, CHANGELOG_FILTER_MODES, "filter_mode")


@dataclass(kw_only=True)
class QualityprofilesActivateRuleOption(Options):
    key: str | None = None
    rule: str | None = None
    #: Software quality -> impact severity; exclusive with ``severity``.
    impacts: dict[str, str] | None = None
    params: dict[str, str] | None = None
    prioritized_rule: bool | None = None
    #: Reset severity and parameters to the parent profile values.
    reset: bool | None = None
    severity: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        validate_required(self.rule, "rule")
        validate_exclusive("impacts", impacts=self.impacts, severity=self.severity)
        validate_allowed(self.severity, SEVERITIES, "severity")
        validate_impacts(self.impacts)


@dataclass(kw_only=True)
class QualityprofilesDeactivateRuleOption(Options):
    key: str | None = None
    rule: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        validate_required(self.rule, "rule")


@dataclass(kw_only=True)
class QualityprofilesDeactivateRulesOption(RuleFilters):
    """Bulk deactivation of the rules matching the filters."""

    target_key: str | None = None

    def validate(self) -> None:
        validate_required(self.target_key, "target_key")
        super().validate()


@dataclass(kw_only=True)
class QualityprofilesActivateRulesOption(QualityprofilesDeactivateRulesOption):
    target_severity: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_allowed(self.target_severity, SEVERITIES, "target_severity")


@dataclass(kw_only=True)
class QualityprofilesCompareOption(Options):
    left_key: str | None = None
    right_key: str | None = None

    def validate(self) -> None:
        validate_required(self.left_key, "left_key")
        validate_required(self.right_key, "right_key")


@dataclass(kw_only=True)
class QualityprofilesCopyOption(Options):
    from_key: str | None = None
    to_name: str | None = None

    def validate(self) -> None:
        validate_required(self.from_key, "from_key")
        _validate_profile_name(self.to_name, "to_name")


@dataclass(kw_only=True)
class QualityprofilesCreateOption(Options):
    language: str | None = None
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.language, "language")
        validate_language(self.language)
        _validate_profile_name(self.name, "name")


@dataclass(kw_only=True)
class QualityprofilesExportOption(Options):
    language: str | None = None
    #: Default profile of the language when omitted.
    quality_profile: str | None = None

    def validate(self) -> None:
        validate_required(self.language, "language")
        validate_language(self.language)


@dataclass(kw_only=True)
class QualityprofilesProjectsOption(PaginationArgs):
    key: str | None = None
    query: str | None = param("q")
    selected: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.key, "key")
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


@dataclass(kw_only=True)
class QualityprofilesRenameOption(Options):
    key: str | None = None
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        _validate_profile_name(self.name, "name")


@dataclass(kw_only=True)
class QualityprofilesRestoreOption(Options):
    #: XML document produced by ``backup``.
    backup: str | None = None

    def validate(self) -> None:
        validate_required(self.backup, "backup")


@dataclass(kw_only=True)
class QualityprofilesSearchOption(Options):
    defaults: bool | None = None
    language: str | None = None
    project: str | None = None
    quality_profile: str | None = None

    def validate(self) -> None:
        validate_language(self.language)


@dataclass(kw_only=True)
class QualityprofilesSearchMembersOption(PaginationArgs):
    """Options of ``search_groups`` and ``search_users``."""

    language: str | None = None
    quality_profile: str | None = None
    query: str | None = param("q")
    selected: str | None = None

    def validate(self) -> None:
        super().validate()
        _validate_profile_ref(self.language, self.quality_profile)
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


@dataclass(kw_only=True)
class QualityprofilesShowOption(Options):
    key: str | None = None
    compare_to_sonar_way: bool | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class QualityprofilesService(Service):

    def activate_rule(self, opt: QualityprofilesActivateRuleOption) -> None:
        self._post("qualityprofiles/activate_rule", opt)

    def activate_rules(self, opt: QualityprofilesActivateRulesOption) -> None:
        """Activate every rule matching the filters."""
        self._post("qualityprofiles/activate_rules", opt)

    def add_group(self, opt: QualityprofilesGroupOption) -> None:
        self._post("qualityprofiles/add_group", opt)

    def add_project(self, opt: QualityprofilesProjectOption) -> None:
        self._post("qualityprofiles/add_project", opt)

    def add_user(self, opt: QualityprofilesUserOption) -> None:
        self._post("qualityprofiles/add_user", opt)

    def backup(self, opt: QualityprofilesProfileOption) -> str:
        """Profile as an XML document, suitable for ``restore``."""
        return self._get("qualityprofiles/backup", opt, expect="text")

    def change_parent(self, opt: QualityprofilesChangeParentOption) -> None:
        self._post("qualityprofiles/change_parent", opt)

    def changelog(self, opt: QualityprofilesChangelogOption) -> QualityprofilesChangelog:
        return self._get("qualityprofiles/changelog", opt)

    def compare(self, opt: QualityprofilesCompareOption) -> QualityprofilesCompare:
        return self._get("qualityprofiles/compare", opt)

    def copy(self, opt: QualityprofilesCopyOption) -> QualityprofilesCopy:
        return self._post("qualityprofiles/copy", opt, expect="json")

    def create(self, opt: QualityprofilesCreateOption) -> QualityprofilesCreate:
        return self._post("qualityprofiles/create", opt, expect="json")

    def deactivate_rule(self, opt: QualityprofilesDeactivateRuleOption) -> None:
        self._post("qualityprofiles/deactivate_rule", opt)

    def deactivate_rules(self, opt: QualityprofilesDeactivateRulesOption) -> None:
        self._post("qualityprofiles/deactivate_rules", opt)

    def delete(self, opt: QualityprofilesProfileOption) -> None:
        """Delete a profile and all its descendants."""
        self._post("qualityprofiles/delete", opt)

    def export(self, opt: QualityprofilesExportOption) -> str:
        return self._get("qualityprofiles/export", opt, expect="text")

    def exporters(self) -> QualityprofilesExporters:
        return self._get("qualityprofiles/exporters")

    def importers(self) -> QualityprofilesImporters:
        return self._get("qualityprofiles/importers")

    def inheritance(self, opt: QualityprofilesProfileOption) -> QualityprofilesInheritance:
        return self._get("qualityprofiles/inheritance", opt)

    def projects(self, opt: QualityprofilesProjectsOption) -> QualityprofilesProjects:
        return self._get("qualityprofiles/projects", opt)

    def remove_group(self, opt: QualityprofilesGroupOption) -> None:
        self._post("qualityprofiles/remove_group", opt)

    def remove_project(self, opt: QualityprofilesProjectOption) -> None:
        self._post("qualityprofiles/remove_project", opt)

    def remove_user(self, opt: QualityprofilesUserOption) -> None:
        self._post("qualityprofiles/remove_user", opt)

    def rename(self, opt: QualityprofilesRenameOption) -> None:
        self._post("qualityprofiles/rename", opt)

    def restore(self, opt: QualityprofilesRestoreOption) -> None:
        self._post("qualityprofiles/restore", opt)

    def search(self, opt: QualityprofilesSearchOption | None = None) -> QualityprofilesSearch:
        return self._get("qualityprofiles/search", opt or QualityprofilesSearchOption())

    def search_groups(self, opt: QualityprofilesSearchMembersOption) -> QualityprofilesSearchGroups:
        return self._get("qualityprofiles/search_groups", opt)

    def search_users(self, opt: QualityprofilesSearchMembersOption) -> QualityprofilesSearchUsers:
        return self._get("qualityprofiles/search_users", opt)

    def set_default(self, opt: QualityprofilesProfileOption) -> None:
        self._post("qualityprofiles/set_default", opt)

    def show(self, opt: QualityprofilesShowOption) -> QualityprofilesShow:
        return self._get("qualityprofiles/show", opt)
