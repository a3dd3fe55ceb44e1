"""Components: projects, directories and files as seen by the indexer."""

from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    OutOfRangeError,
    validate_all_allowed,
    validate_allowed,
    validate_exclusive,
    validate_min_length,
    validate_required,
)

MIN_SEARCH_QUERY_LENGTH = 2
MIN_TREE_QUERY_LENGTH = 3
MIN_FILTER_LENGTH = 2
MAX_RECENTLY_BROWSED = 50

SEARCH_QUALIFIERS = frozenset({"TRK"})
TREE_QUALIFIERS = frozenset({"UTS", "FIL", "DIR", "TRK"})
TREE_STRATEGIES = frozenset({"all", "children", "leaves"})
TREE_SORT_FIELDS = frozenset({"name", "path", "qualifier"})
SUGGESTION_QUALIFIERS = frozenset({"VW", "SVW", "APP", "TRK"})

_RATING_METRICS = {
    "new_maintainability_rating",
    "new_reliability_rating",
    "new_security_hotspots_reviewed",
    "new_security_rating",
    "new_security_review_rating",
    "new_software_quality_maintainability_rating",
    "new_software_quality_reliability_rating",
    "new_software_quality_security_rating",
    "reliability_rating",
    "security_hotspots_reviewed",
    "security_rating",
    "security_review_rating",
    "software_quality_maintainability_rating",
    "software_quality_reliability_rating",
    "software_quality_security_rating",
    "sqale_rating",
}
_PROJECT_METRICS = {
    "alert_status",
    "coverage",
    "duplicated_lines_density",
    "ncloc",
    "new_coverage",
    "new_duplicated_lines_density",
    "new_lines",
}

SEARCH_PROJECTS_FIELDS = frozenset({"analysisDate", "leakPeriodDate", "_all"})
SEARCH_PROJECTS_FACETS = frozenset(_RATING_METRICS | _PROJECT_METRICS | {"languages", "qualifier", "tags"})
SEARCH_PROJECTS_SORT_FIELDS = frozenset(
    _RATING_METRICS
    | _PROJECT_METRICS
    | {"analysisDate", "creationDate", "lines", "name", "ncloc_language_distribution"}
)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ComponentMeasures(TypedDict, total=False):
    debt: str
    debtRatio: str
    duplicationDensity: str
    issues: str
    lines: str
    sqaleRating: str


class ComponentSearchItem(TypedDict, total=False):
    key: str
    name: str
    project: str
    qualifier: str


class ComponentProject(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    uuid: str
    visibility: str
    tags: list[str]
    isFavorite: bool
    aiCodeAssurance: str
    containsAiCode: bool
    isAiCodeFixEnabled: bool


class FacetValue(TypedDict, total=False):
    val: str
    count: int


class Facet(TypedDict, total=False):
    property: str
    values: list[FacetValue]


class ComponentAncestor(TypedDict, total=False):
    key: str
    name: str
    description: str
    path: str
    qualifier: str
    analysisDate: str
    tags: list[str]
    version: str
    visibility: str


class ComponentDetails(TypedDict, total=False):
    key: str
    name: str
    language: str
    path: str
    qualifier: str
    analysisDate: str
    leakPeriodDate: str
    version: str


class ComponentSuggestionItem(TypedDict, total=False):
    key: str
    name: str
    match: str
    project: str
    isFavorite: bool
    isRecentlyBrowsed: bool


class ComponentSuggestionGroup(TypedDict, total=False):
    q: str
    items: list[ComponentSuggestionItem]
    more: int


class ComponentTreeBase(TypedDict, total=False):
    key: str
    description: str
    qualifier: str
    tags: list[str]
    visibility: str


class ComponentTreeItem(TypedDict, total=False):
    key: str
    name: str
    language: str
    path: str
    qualifier: str


class ComponentsApp(TypedDict, total=False):
    key: str
    uuid: str
    name: str
    longName: str
    q: str
    project: str
    projectName: str
    fav: bool
    canMarkAsFavorite: bool
    canCreateManualIssue: bool
    measures: ComponentMeasures


class ComponentsSearch(TypedDict, total=False):
    components: list[ComponentSearchItem]
    paging: Paging


class ComponentsSearchProjects(TypedDict, total=False):
    components: list[ComponentProject]
    facets: list[Facet]
    paging: Paging


class ComponentsShow(TypedDict, total=False):
    component: ComponentDetails
    ancestors: list[ComponentAncestor]


class ComponentsSuggestions(TypedDict, total=False):
    projects: list[Any]
    results: list[ComponentSuggestionGroup]


class ComponentsTree(TypedDict, total=False):
    baseComponent: ComponentTreeBase
    components: list[ComponentTreeItem]
    paging: Paging


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class ComponentsAppOption(Options):
    component: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


@dataclass(kw_only=True)
class ComponentsShowOption(ComponentsAppOption):
    pass


@dataclass(kw_only=True)
class ComponentsSearchOption(PaginationArgs):
    qualifiers: list[str] | None = None
    #: Matched against names and exact keys
    query: str | None = param("q")

    def validate(self) -> None:
        super().validate()
        validate_required(self.qualifiers, "qualifiers")
        validate_all_allowed(self.qualifiers, SEARCH_QUALIFIERS, "qualifiers")
        validate_min_length(self.query, MIN_SEARCH_QUERY_LENGTH, "query")


@dataclass(kw_only=True)
class ComponentsSearchProjectsOption(PaginationArgs):
    ascending: bool | None = param("asc")
    fields: list[str] | None = param("f")
    facets: list[str] | None = None
    #: Query language, e.g. ``coverage > 80 and ncloc < 10000``
    filter: str | None = None
    sort: str | None = param("s")

    def validate(self) -> None:
        super().validate()
        validate_all_allowed(self.fields, SEARCH_PROJECTS_FIELDS, "fields")
        validate_all_allowed(self.facets, SEARCH_PROJECTS_FACETS, "facets")
        validate_min_length(self.filter, MIN_FILTER_LENGTH, "filter")
        validate_allowed(self.sort, SEARCH_PROJECTS_SORT_FIELDS, "sort")


@dataclass(kw_only=True)
class ComponentsSuggestionsOption(Options):
    #: Qualifier for which to display more results
    more: str | None = None
    recently_browsed: list[str] | None = None
    search: str | None = param("s")

    def validate(self) -> None:
        validate_allowed(self.more, SUGGESTION_QUALIFIERS, "more")
        if self.recently_browsed and len(self.recently_browsed) > MAX_RECENTLY_BROWSED:
            raise OutOfRangeError("recently_browsed", f"cannot exceed {MAX_RECENTLY_BROWSED} items")
        validate_min_length(self.search, MIN_SEARCH_QUERY_LENGTH, "search")


@dataclass(kw_only=True)
class ComponentsTreeOption(PaginationArgs):
    component: str | None = None
    branch: str | None = None
    pull_request: str | None = None
    ascending: bool | None = param("asc")
    query: str | None = param("q")
    qualifiers: list[str] | None = None
    sort: list[str] | None = param("s")
    strategy: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.component, "component")
        validate_min_length(self.query, MIN_TREE_QUERY_LENGTH, "query")
        validate_all_allowed(self.qualifiers, TREE_QUALIFIERS, "qualifiers")
        validate_all_allowed(self.sort, TREE_SORT_FIELDS, "sort")
        validate_allowed(self.strategy, TREE_STRATEGIES, "strategy")
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ComponentsService(Service):

    def app(self, opt: ComponentsAppOption) -> ComponentsApp:
        """Coverage and duplication summary used by the file viewer."""
        return self._get("components/app", opt)

    def search(self, opt: ComponentsSearchOption) -> ComponentsSearch:
        return self._get("components/search", opt)

    def search_projects(self, opt: ComponentsSearchProjectsOption | None = None) -> ComponentsSearchProjects:
        """Search projects with a filter on measures, tags and languages."""
        return self._get("components/search_projects", opt or ComponentsSearchProjectsOption())

    def show(self, opt: ComponentsShowOption) -> ComponentsShow:
        """A component and its ancestors, closest first."""
        return self._get("components/show", opt)

    def suggestions(self, opt: ComponentsSuggestionsOption | None = None) -> ComponentsSuggestions:
        return self._get("components/suggestions", opt or ComponentsSuggestionsOption())

    def tree(self, opt: ComponentsTreeOption) -> ComponentsTree:
        """Descendants of a component (project, directory)."""
        return self._get("components/tree", opt)
