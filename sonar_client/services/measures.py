"""Measures: metric values computed for components."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    validate_allowed,
    validate_date,
    validate_exclusive,
    validate_required,
)

METRIC_SORT_FILTERS = frozenset({"all", "withMeasuresOnly"})
TREE_STRATEGIES = frozenset({"all", "children", "leaves"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MeasurePeriodValue(TypedDict, total=False):
    value: str
    bestValue: bool


class Measure(TypedDict, total=False):
    metric: str
    value: str
    bestValue: bool
    period: MeasurePeriodValue


class MeasureComponent(TypedDict, total=False):
    key: str
    name: str
    description: str
    qualifier: str
    path: str
    language: str
    measures: list[Measure]


class MeasureMetric(TypedDict, total=False):
    key: str
    name: str
    description: str
    domain: str
    type: str
    higherValuesAreBetter: bool
    qualitative: bool
    hidden: bool
    decimalScale: int
    bestValue: str
    worstValue: str


class MeasurePeriod(TypedDict, total=False):
    mode: str
    date: str
    parameter: str


class MeasureSearchResult(TypedDict, total=False):
    component: str
    metric: str
    value: str
    bestValue: bool


class MeasureHistoryValue(TypedDict, total=False):
    date: str
    value: str


class MeasureHistory(TypedDict, total=False):
    metric: str
    history: list[MeasureHistoryValue]


class MeasuresComponent(TypedDict, total=False):
    component: MeasureComponent
    metrics: list[MeasureMetric]
    period: MeasurePeriod


class MeasuresComponentTree(TypedDict, total=False):
    baseComponent: MeasureComponent
    components: list[MeasureComponent]
    metrics: list[MeasureMetric]
    period: MeasurePeriod
    paging: Paging


class MeasuresSearch(TypedDict, total=False):
    measures: list[MeasureSearchResult]


class MeasuresSearchHistory(TypedDict, total=False):
    measures: list[MeasureHistory]
    paging: Paging


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class MeasuresComponentOption(Options):
    component: str | None = None
    metric_keys: list[str] | None = None
    #: ``metrics``, ``period``
    additional_fields: list[str] | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")
        validate_required(self.metric_keys, "metric_keys")
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


@dataclass(kw_only=True)
class MeasuresComponentTreeOption(PaginationArgs):
    component: str | None = None
    metric_keys: list[str] | None = None
    additional_fields: list[str] | None = None
    branch: str | None = None
    pull_request: str | None = None
    ascending: bool | None = param("asc")
    metric_period_sort: int | None = None
    metric_sort: str | None = None
    metric_sort_filter: str | None = None
    qualifiers: list[str] | None = None
    query: str | None = param("q")
    sort: list[str] | None = param("s")
    strategy: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.component, "component")
        validate_required(self.metric_keys, "metric_keys")
        validate_allowed(self.metric_sort_filter, METRIC_SORT_FILTERS, "metric_sort_filter")
        validate_allowed(self.strategy, TREE_STRATEGIES, "strategy")


@dataclass(kw_only=True)
class MeasuresSearchOption(Options):
    metric_keys: list[str] | None = None
    project_keys: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.metric_keys, "metric_keys")
        validate_required(self.project_keys, "project_keys")


@dataclass(kw_only=True)
class MeasuresSearchHistoryOption(PaginationArgs):
    component: str | None = None
    metrics: list[str] | None = None
    branch: str | None = None
    pull_request: str | None = None
    from_: str | None = None
    to: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.component, "component")
        validate_required(self.metrics, "metrics")
        validate_date(self.from_, "from_")
        validate_date(self.to, "to")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class MeasuresService(Service):

    def component(self, opt: MeasuresComponentOption) -> MeasuresComponent:
        return self._get("measures/component", opt)

    def component_tree(self, opt: MeasuresComponentTreeOption) -> MeasuresComponentTree:
        """Measures of the descendants of a component, sortable by metric."""
        return self._get("measures/component_tree", opt)

    def search(self, opt: MeasuresSearchOption) -> MeasuresSearch:
        return self._get("measures/search", opt)

    def search_history(self, opt: MeasuresSearchHistoryOption) -> MeasuresSearchHistory:
        """Past values of the given metrics, oldest first."""
        return self._get("measures/search_history", opt)
