"""Project tags."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


class ProjectTagsSearch(TypedDict, total=False):
    tags: list[str]


@dataclass(kw_only=True)
class ProjectTagsSearchOption(PaginationArgs):
    query: str | None = param("q")


@dataclass(kw_only=True)
class ProjectTagsSetOption(Options):
    project: str | None = None
    #: Replaces every tag; an empty list clears them.
    tags: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        params.setdefault("tags", "")
        return params


class ProjectTagsService(Service):

    def search(self, opt: ProjectTagsSearchOption | None = None) -> ProjectTagsSearch:
        return self._get("project_tags/search", opt or ProjectTagsSearchOption())

    def set(self, opt: ProjectTagsSetOption) -> None:
        self._post("project_tags/set", opt)
