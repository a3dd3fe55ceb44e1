"""Quality gates: conditions, project association and delegated permissions."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import SELECTED_FILTERS, Paging
from sonar_client.validation import (
    validate_allowed,
    validate_max_length,
    validate_one_of,
    validate_required,
)

MAX_QUALITY_GATE_NAME_LENGTH = 100
MAX_CONDITION_ERROR_LENGTH = 64

CONDITION_OPERATORS = frozenset({"LT", "GT"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class QualityGateActions(TypedDict, total=False):
    associateProjects: bool
    copy: bool
    delegate: bool
    delete: bool
    manageAiCodeAssurance: bool
    manageConditions: bool
    rename: bool
    setAsDefault: bool


class QualityGate(TypedDict, total=False):
    name: str
    actions: QualityGateActions
    caycStatus: str
    hasMQRConditions: bool
    hasStandardConditions: bool
    isAiCodeSupported: bool
    isBuiltIn: bool
    isDefault: bool


class QualityGateCondition(TypedDict, total=False):
    id: str
    metric: str
    op: str
    error: str


class ConditionStatus(TypedDict, total=False):
    status: str
    metricKey: str
    comparator: str
    errorThreshold: str
    actualValue: str


class AnalysisPeriod(TypedDict, total=False):
    date: str
    mode: str
    parameter: str


class ProjectStatus(TypedDict, total=False):
    #: OK, ERROR or NONE
    status: str
    caycStatus: str
    conditions: list[ConditionStatus]
    period: AnalysisPeriod
    ignoredConditions: bool


class QualityGateProject(TypedDict, total=False):
    key: str
    name: str
    containsAiCode: bool
    selected: bool


class QualityGateGroup(TypedDict, total=False):
    name: str
    description: str
    selected: bool


class QualityGateUser(TypedDict, total=False):
    login: str
    name: str
    avatar: str
    selected: bool


class QualitygatesCreate(TypedDict, total=False):
    id: str
    name: str


class QualitygatesCreateCondition(QualityGateCondition, total=False):
    warning: str


class ProjectQualityGate(TypedDict, total=False):
    name: str
    default: bool


class QualitygatesGetByProject(TypedDict, total=False):
    qualityGate: ProjectQualityGate


class QualitygatesListActions(TypedDict, total=False):
    create: bool


class QualitygatesList(TypedDict, total=False):
    actions: QualitygatesListActions
    qualitygates: list[QualityGate]


class QualitygatesProjectStatus(TypedDict, total=False):
    projectStatus: ProjectStatus


class QualitygatesSearch(TypedDict, total=False):
    results: list[QualityGateProject]
    paging: Paging


class QualitygatesSearchGroups(TypedDict, total=False):
    groups: list[QualityGateGroup]
    paging: Paging


class QualitygatesSearchUsers(TypedDict, total=False):
    users: list[QualityGateUser]
    paging: Paging


class QualitygatesShow(QualityGate, total=False):
    conditions: list[QualityGateCondition]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _validate_gate_name(value: str | None, field: str) -> None:
    validate_required(value, field)
    validate_max_length(value, MAX_QUALITY_GATE_NAME_LENGTH, field)


@dataclass(kw_only=True)
class QualitygatesGroupOption(Options):
    """Shared by ``add_group`` and ``remove_group``."""

    gate_name: str | None = None
    group_name: str | None = None

    def validate(self) -> None:
        _validate_gate_name(self.gate_name, "gate_name")
        validate_required(self.group_name, "group_name")


@dataclass(kw_only=True)
class QualitygatesUserOption(Options):
    """Shared by ``add_user`` and ``remove_user``."""

    gate_name: str | None = None
    login: str | None = None

    def validate(self) -> None:
        _validate_gate_name(self.gate_name, "gate_name")
        validate_required(self.login, "login")


@dataclass(kw_only=True)
class QualitygatesCopyOption(Options):
    source_name: str | None = None
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        _validate_gate_name(self.source_name, "source_name")


@dataclass(kw_only=True)
class QualitygatesNameOption(Options):
    """Options of ``create``, ``destroy`` and ``set_as_default``."""

    name: str | None = None

    def validate(self) -> None:
        _validate_gate_name(self.name, "name")


@dataclass(kw_only=True)
class QualitygatesCreateConditionOption(Options):
    gate_name: str | None = None
    metric: str | None = None
    #: Threshold the metric value is compared to.
    error: str | None = None
    op: str | None = None

    def validate(self) -> None:
        validate_required(self.error, "error")
        validate_max_length(self.error, MAX_CONDITION_ERROR_LENGTH, "error")
        validate_required(self.gate_name, "gate_name")
        validate_required(self.metric, "metric")
        validate_allowed(self.op, CONDITION_OPERATORS, "op")


@dataclass(kw_only=True)
class QualitygatesUpdateConditionOption(Options):
    id: str | None = None
    metric: str | None = None
    error: str | None = None
    op: str | None = None

    def validate(self) -> None:
        validate_required(self.error, "error")
        validate_max_length(self.error, MAX_CONDITION_ERROR_LENGTH, "error")
        validate_required(self.id, "id")
        validate_required(self.metric, "metric")
        validate_allowed(self.op, CONDITION_OPERATORS, "op")


@dataclass(kw_only=True)
class QualitygatesDeleteConditionOption(Options):
    id: str | None = None

    def validate(self) -> None:
        validate_required(self.id, "id")


@dataclass(kw_only=True)
class QualitygatesDeselectOption(Options):
    project_key: str | None = None

    def validate(self) -> None:
        validate_required(self.project_key, "project_key")


@dataclass(kw_only=True)
class QualitygatesSelectOption(QualitygatesDeselectOption):
    gate_name: str | None = None

    def validate(self) -> None:
        _validate_gate_name(self.gate_name, "gate_name")
        super().validate()


@dataclass(kw_only=True)
class QualitygatesGetByProjectOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class QualitygatesProjectStatusOption(Options):
    analysis_id: str | None = None
    project_id: str | None = None
    project_key: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_one_of(
            "analysis_id",
            analysis_id=self.analysis_id,
            project_id=self.project_id,
            project_key=self.project_key,
        )


@dataclass(kw_only=True)
class QualitygatesRenameOption(Options):
    current_name: str | None = None
    name: str | None = None

    def validate(self) -> None:
        _validate_gate_name(self.current_name, "current_name")
        _validate_gate_name(self.name, "name")


@dataclass(kw_only=True)
class QualitygatesSearchOption(PaginationArgs):
    """Projects associated, or not, with a gate."""

    gate_name: str | None = None
    query: str | None = None
    selected: str | None = None

    def validate(self) -> None:
        super().validate()
        _validate_gate_name(self.gate_name, "gate_name")
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


@dataclass(kw_only=True)
class QualitygatesSearchMembersOption(PaginationArgs):
    """Options of ``search_groups`` and ``search_users``."""

    gate_name: str | None = None
    query: str | None = param("q")
    selected: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.gate_name, "gate_name")
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


@dataclass(kw_only=True)
class QualitygatesShowOption(Options):
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class QualitygatesService(Service):
    """Write actions require 'Administer Quality Gates' or gate delegation."""

    def add_group(self, opt: QualitygatesGroupOption) -> None:
        self._post("qualitygates/add_group", opt)

    def add_user(self, opt: QualitygatesUserOption) -> None:
        self._post("qualitygates/add_user", opt)

    def copy(self, opt: QualitygatesCopyOption) -> None:
        self._post("qualitygates/copy", opt)

    def create(self, opt: QualitygatesNameOption) -> QualitygatesCreate:
        return self._post("qualitygates/create", opt, expect="json")

    def create_condition(self, opt: QualitygatesCreateConditionOption) -> QualitygatesCreateCondition:
        return self._post("qualitygates/create_condition", opt, expect="json")

    def delete_condition(self, opt: QualitygatesDeleteConditionOption) -> None:
        self._post("qualitygates/delete_condition", opt)

    def deselect(self, opt: QualitygatesDeselectOption) -> None:
        """Put the project back on the default gate."""
        self._post("qualitygates/deselect", opt)

    def destroy(self, opt: QualitygatesNameOption) -> None:
        self._post("qualitygates/destroy", opt)

    def get_by_project(self, opt: QualitygatesGetByProjectOption) -> QualitygatesGetByProject:
        return self._get("qualitygates/get_by_project", opt)

    def list(self) -> QualitygatesList:
        return self._get("qualitygates/list")

    def project_status(self, opt: QualitygatesProjectStatusOption) -> QualitygatesProjectStatus:
        """Gate status of an analysis, or of the last analysis of a project."""
        return self._get("qualitygates/project_status", opt)

    def remove_group(self, opt: QualitygatesGroupOption) -> None:
        self._post("qualitygates/remove_group", opt)

    def remove_user(self, opt: QualitygatesUserOption) -> None:
        self._post("qualitygates/remove_user", opt)

    def rename(self, opt: QualitygatesRenameOption) -> None:
        self._post("qualitygates/rename", opt)

    def search(self, opt: QualitygatesSearchOption) -> QualitygatesSearch:
        return self._get("qualitygates/search", opt)

    def search_groups(self, opt: QualitygatesSearchMembersOption) -> QualitygatesSearchGroups:
        return self._get("qualitygates/search_groups", opt)

    def search_users(self, opt: QualitygatesSearchMembersOption) -> QualitygatesSearchUsers:
        return self._get("qualitygates/search_users", opt)

    def select(self, opt: QualitygatesSelectOption) -> None:
        self._post("qualitygates/select", opt)

    def set_as_default(self, opt: QualitygatesNameOption) -> None:
        self._post("qualitygates/set_as_default", opt)

    def show(self, opt: QualitygatesShowOption) -> QualitygatesShow:
        return self._get("qualitygates/show", opt)

    def update_condition(self, opt: QualitygatesUpdateConditionOption) -> None:
        self._post("qualitygates/update_condition", opt)
