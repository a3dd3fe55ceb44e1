"""Compute Engine: background tasks, their queue and the worker pool."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import MAX_PROJECT_KEY_LENGTH, Paging
from sonar_client.validation import (
    validate_all_allowed,
    validate_allowed,
    validate_max_length,
    validate_required,
)

#: ce/activity accepts larger pages than the rest of the API.
MAX_CE_PAGE_SIZE = 1000

TASK_STATUSES = frozenset({"SUCCESS", "FAILED", "CANCELED", "PENDING", "IN_PROGRESS"})
TASK_TYPES = frozenset({"REPORT", "ISSUE_SYNC", "AUDIT_PURGE", "PROJECT_EXPORT"})
TASK_ADDITIONAL_FIELDS = frozenset({"stacktrace", "scannerContext", "warnings"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class CeTask(TypedDict, total=False):
    id: str
    type: str
    status: str
    analysisId: str
    branch: str
    branchType: str
    pullRequest: str
    componentId: str
    componentKey: str
    componentName: str
    componentQualifier: str
    submittedAt: str
    submitterLogin: str
    startedAt: str
    executedAt: str
    finishedAt: str
    executionTimeMs: int
    errorMessage: str
    errorStacktrace: str
    errorType: str
    hasErrorStacktrace: bool
    hasScannerContext: bool
    scannerContext: str
    infoMessages: list[str]
    warningCount: int
    warnings: list[str]


class CeQueuedTask(TypedDict, total=False):
    id: str
    type: str
    status: str
    componentId: str
    componentKey: str
    componentName: str
    componentQualifier: str
    submittedAt: str


class AnalysisWarning(TypedDict, total=False):
    key: str
    message: str
    dismissable: bool


class AnalysisComponent(TypedDict, total=False):
    key: str
    name: str
    warnings: list[AnalysisWarning]


class CeActivity(TypedDict, total=False):
    tasks: list[CeTask]
    paging: Paging


class CeActivityStatus(TypedDict, total=False):
    pending: int
    inProgress: int
    failing: int
    #: Milliseconds; only present while tasks are pending.
    pendingTime: int


class CeAnalysisStatus(TypedDict, total=False):
    component: AnalysisComponent


class CeComponent(TypedDict, total=False):
    current: CeTask
    queue: list[CeQueuedTask]


class CeIndexationStatus(TypedDict, total=False):
    completedCount: int
    total: int
    hasFailures: bool
    isCompleted: bool


class CeInfo(TypedDict, total=False):
    workersPauseStatus: str


class CeSubmit(TypedDict, total=False):
    projectId: str
    taskId: str


class CeTaskDetails(TypedDict, total=False):
    task: CeTask


class CeTaskTypes(TypedDict, total=False):
    taskTypes: list[str]


class CeWorkerCount(TypedDict, total=False):
    value: int
    canSetWorkerCount: bool


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class CeActivityOption(PaginationArgs):
    MAX_PAGE_SIZE = MAX_CE_PAGE_SIZE

    component: str | None = None
    #: ISO 8601 datetime, inclusive
    max_executed_at: str | None = None
    #: ISO 8601 datetime, inclusive
    min_submitted_at: str | None = None
    only_currents: bool | None = None
    #: Component name fragment, exact component key or exact task id
    query: str | None = param("q")
    statuses: list[str] | None = param("status")
    type: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_all_allowed(self.statuses, TASK_STATUSES, "statuses")
        validate_allowed(self.type, TASK_TYPES, "type")


@dataclass(kw_only=True)
class CeActivityStatusOption(Options):
    component: str | None = None


@dataclass(kw_only=True)
class CeAnalysisStatusOption(Options):
    component: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")


@dataclass(kw_only=True)
class CeCancelOption(Options):
    id: str | None = None

    def validate(self) -> None:
        validate_required(self.id, "id")


@dataclass(kw_only=True)
class CeComponentOption(Options):
    component: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")


@dataclass(kw_only=True)
class CeDismissAnalysisWarningOption(Options):
    component: str | None = None
    warning: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")
        validate_required(self.warning, "warning")


@dataclass(kw_only=True)
class CeSubmitOption(Options):
    project_key: str | None = None
    #: Used only when the project does not exist yet; abbreviated past 500 chars.
    project_name: str | None = None
    #: key=value pairs
    characteristics: list[str] | None = param("characteristic")
    report: str | None = None

    def validate(self) -> None:
        validate_required(self.project_key, "project_key")
        validate_max_length(self.project_key, MAX_PROJECT_KEY_LENGTH, "project_key")
        validate_required(self.report, "report")


@dataclass(kw_only=True)
class CeTaskOption(Options):
    id: str | None = None
    additional_fields: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.id, "id")
        validate_all_allowed(self.additional_fields, TASK_ADDITIONAL_FIELDS, "additional_fields")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class CeService(Service):
    """Requires system administration for most actions; see each method."""

    def activity(self, opt: CeActivityOption | None = None) -> CeActivity:
        """Search Compute Engine tasks, newest first."""
        return self._get("ce/activity", opt or CeActivityOption())

    def activity_status(self, opt: CeActivityStatusOption | None = None) -> CeActivityStatus:
        return self._get("ce/activity_status", opt or CeActivityStatusOption())

    def analysis_status(self, opt: CeAnalysisStatusOption) -> CeAnalysisStatus:
        return self._get("ce/analysis_status", opt)

    def cancel(self, opt: CeCancelOption) -> None:
        """Cancel a pending task. In-progress tasks cannot be canceled."""
        self._post("ce/cancel", opt)

    def cancel_all(self) -> None:
        self._post("ce/cancel_all")

    def component(self, opt: CeComponentOption) -> CeComponent:
        """Pending, in-progress and last executed tasks of a component."""
        return self._get("ce/component", opt)

    def dismiss_analysis_warning(self, opt: CeDismissAnalysisWarningOption) -> None:
        self._post("ce/dismiss_analysis_warning", opt)

    def indexation_status(self) -> CeIndexationStatus:
        return self._get("ce/indexation_status")

    def info(self) -> CeInfo:
        return self._get("ce/info")

    def pause(self) -> None:
        self._post("ce/pause")

    def resume(self) -> None:
        self._post("ce/resume")

    def submit(self, opt: CeSubmitOption) -> CeSubmit:
        """Queue a scanner report; it is processed asynchronously."""
        return self._post("ce/submit", opt, expect="json")

    def task(self, opt: CeTaskOption) -> CeTaskDetails:
        return self._get("ce/task", opt)

    def task_types(self) -> CeTaskTypes:
        return self._get("ce/task_types")

    def worker_count(self) -> CeWorkerCount:
        return self._get("ce/worker_count")
