"""Metrics: the definitions behind measures."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import PaginationArgs
from sonar_client.services.base import Service
from sonar_client.services.common import Paging


class Metric(TypedDict, total=False):
    id: str
    key: str
    name: str
    description: str
    domain: str
    type: str
    direction: int
    qualitative: bool
    hidden: bool
    custom: bool


class MetricsSearch(TypedDict, total=False):
    metrics: list[Metric]
    paging: Paging


class MetricsTypes(TypedDict, total=False):
    types: list[str]


@dataclass(kw_only=True)
class MetricsSearchOption(PaginationArgs):
    pass


class MetricsService(Service):

    def search(self, opt: MetricsSearchOption | None = None) -> MetricsSearch:
        return self._get("metrics/search", opt or MetricsSearchOption())

    def types(self) -> MetricsTypes:
        return self._get("metrics/types")
