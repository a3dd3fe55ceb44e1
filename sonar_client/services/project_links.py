"""Project links: custom URLs shown on a project's home page."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_max_length, validate_one_of, validate_required

MAX_LINK_NAME_LENGTH = 128
MAX_LINK_URL_LENGTH = 2048


class ProjectLink(TypedDict, total=False):
    id: str
    name: str
    type: str
    url: str


class ProjectLinksCreate(TypedDict, total=False):
    link: ProjectLink


class ProjectLinksSearch(TypedDict, total=False):
    links: list[ProjectLink]


@dataclass(kw_only=True)
class ProjectLinksSearchOption(Options):
    project_key: str | None = None
    project_id: str | None = None

    def validate(self) -> None:
        validate_one_of("project_key", project_key=self.project_key, project_id=self.project_id)


@dataclass(kw_only=True)
class ProjectLinksCreateOption(ProjectLinksSearchOption):
    name: str | None = None
    url: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_LINK_NAME_LENGTH, "name")
        validate_required(self.url, "url")
        validate_max_length(self.url, MAX_LINK_URL_LENGTH, "url")
        super().validate()


@dataclass(kw_only=True)
class ProjectLinksDeleteOption(Options):
    id: str | None = None

    def validate(self) -> None:
        validate_required(self.id, "id")


class ProjectLinksService(Service):

    def create(self, opt: ProjectLinksCreateOption) -> ProjectLinksCreate:
        return self._post("project_links/create", opt, expect="json")

    def delete(self, opt: ProjectLinksDeleteOption) -> None:
        self._post("project_links/delete", opt)

    def search(self, opt: ProjectLinksSearchOption) -> ProjectLinksSearch:
        return self._get("project_links/search", opt)
