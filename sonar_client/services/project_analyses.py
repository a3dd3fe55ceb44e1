"""Project analyses: the history of analyses of a project and their events."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs
from sonar_client.pagination import collect_all
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    require_options,
    validate_allowed,
    validate_date,
    validate_required,
)

#: Page size used by :meth:`ProjectAnalysesService.search_all` when none is set.
SEARCH_ALL_PAGE_SIZE = 100

#: Categories of events that can be created by hand.
EVENT_CATEGORIES = frozenset({"VERSION", "OTHER"})
SEARCH_CATEGORIES = frozenset({
    "VERSION", "OTHER", "QUALITY_PROFILE", "QUALITY_GATE", "DEFINITION_CHANGE", "SQ_UPGRADE",
})


class ProjectAnalysesCondition(TypedDict, total=False):
    metric: str
    errorThreshold: str
    branch: str
    pullRequest: str


class ProjectAnalysesQualityGate(TypedDict, total=False):
    status: str
    stillFailing: bool
    failing: list[ProjectAnalysesCondition]


class ProjectAnalysesEvent(TypedDict, total=False):
    key: str
    analysis: str
    category: str
    name: str
    description: str
    qualityGate: ProjectAnalysesQualityGate


class ProjectAnalysis(TypedDict, total=False):
    key: str
    date: str
    projectVersion: str
    buildString: str
    revision: str
    detectedCI: str
    manualNewCodePeriodBaseline: bool
    events: list[ProjectAnalysesEvent]


class ProjectAnalysesSearch(TypedDict, total=False):
    analyses: list[ProjectAnalysis]
    paging: Paging


class ProjectAnalysesEventResult(TypedDict, total=False):
    event: ProjectAnalysesEvent


@dataclass(kw_only=True)
class ProjectAnalysesCreateEventOption(Options):
    analysis: str | None = None
    name: str | None = None
    category: str | None = None

    def validate(self) -> None:
        validate_required(self.analysis, "analysis")
        validate_required(self.name, "name")
        validate_allowed(self.category, EVENT_CATEGORIES, "category")


@dataclass(kw_only=True)
class ProjectAnalysesDeleteOption(Options):
    analysis: str | None = None

    def validate(self) -> None:
        validate_required(self.analysis, "analysis")


@dataclass(kw_only=True)
class ProjectAnalysesDeleteEventOption(Options):
    event: str | None = None

    def validate(self) -> None:
        validate_required(self.event, "event")


@dataclass(kw_only=True)
class ProjectAnalysesSearchOption(PaginationArgs):
    project: str | None = None
    branch: str | None = None
    pull_request: str | None = None
    category: str | None = None
    #: YYYY-MM-DD or datetime, inclusive
    from_: str | None = None
    to: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.project, "project")
        validate_allowed(self.category, SEARCH_CATEGORIES, "category")
        validate_date(self.from_, "from_")
        validate_date(self.to, "to")


@dataclass(kw_only=True)
class ProjectAnalysesUpdateEventOption(Options):
    event: str | None = None
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.event, "event")
        validate_required(self.name, "name")


class ProjectAnalysesService(Service):

    def create_event(self, opt: ProjectAnalysesCreateEventOption) -> ProjectAnalysesEventResult:
        """Attach a VERSION or OTHER event to an analysis.

        Only one VERSION event is allowed per analysis.
        """
        return self._post("project_analyses/create_event", opt, expect="json")

    def delete(self, opt: ProjectAnalysesDeleteOption) -> None:
        self._post("project_analyses/delete", opt)

    def delete_event(self, opt: ProjectAnalysesDeleteEventOption) -> None:
        self._post("project_analyses/delete_event", opt)

    def search(self, opt: ProjectAnalysesSearchOption) -> ProjectAnalysesSearch:
        """Analyses of a project, newest first."""
        return self._get("project_analyses/search", opt)

    def search_all(self, opt: ProjectAnalysesSearchOption) -> list[ProjectAnalysis]:
        """Walk every page of :meth:`search` and return the analyses."""
        require_options(opt)
        result = collect_all(
            self.search, opt, results_key="analyses", page_size=opt.page_size or SEARCH_ALL_PAGE_SIZE
        )
        return result["analyses"]

    def update_event(self, opt: ProjectAnalysesUpdateEventOption) -> ProjectAnalysesEventResult:
        return self._post("project_analyses/update_event", opt, expect="json")
