"""Projects: create, delete, search and administer projects."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.alm_integrations import validate_new_code_definition
from sonar_client.services.base import Service
from sonar_client.services.common import (
    MAX_PROJECT_KEY_LENGTH,
    MAX_PROJECT_NAME_LENGTH,
    VISIBILITIES,
    Paging,
)
from sonar_client.validation import (
    validate_all_allowed,
    validate_allowed,
    validate_max_length,
    validate_one_of,
    validate_required,
)

PROJECT_QUALIFIERS = frozenset({"TRK", "VW", "APP"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class Project(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    visibility: str


class ProjectComponent(Project, total=False):
    lastAnalysisDate: str
    revision: str
    managed: bool


class MyProjectLink(TypedDict, total=False):
    name: str
    type: str
    href: str


class MyProject(TypedDict, total=False):
    key: str
    name: str
    description: str
    lastAnalysisDate: str
    qualityGate: str
    links: list[MyProjectLink]


class ScannableProject(TypedDict, total=False):
    key: str
    name: str


class ProjectsCreate(TypedDict, total=False):
    project: Project


class ProjectsSearch(TypedDict, total=False):
    components: list[ProjectComponent]
    paging: Paging


class ProjectsSearchMyProjects(TypedDict, total=False):
    projects: list[MyProject]
    paging: Paging


class ProjectsSearchMyScannableProjects(TypedDict, total=False):
    projects: list[ScannableProject]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class ProjectsSearchOption(PaginationArgs):
    #: YYYY-MM-DD or datetime; projects last analyzed before it.
    analyzed_before: str | None = None
    on_provisioned_only: bool | None = None
    projects: list[str] | None = None
    query: str | None = param("q")
    qualifiers: list[str] | None = None

    def validate(self) -> None:
        super().validate()
        validate_all_allowed(self.qualifiers, PROJECT_QUALIFIERS, "qualifiers")


@dataclass(kw_only=True)
class ProjectsBulkDeleteOption(Options):
    analyzed_before: str | None = None
    on_provisioned_only: bool | None = None
    projects: list[str] | None = None
    query: str | None = param("q")
    qualifiers: list[str] | None = None

    def validate(self) -> None:
        validate_one_of(
            "projects",
            analyzed_before=self.analyzed_before,
            projects=self.projects,
            query=self.query,
        )
        validate_all_allowed(self.qualifiers, PROJECT_QUALIFIERS, "qualifiers")


@dataclass(kw_only=True)
class ProjectsCreateOption(Options):
    project: str | None = None
    name: str | None = None
    main_branch: str | None = None
    new_code_definition_type: str | None = None
    new_code_definition_value: str | None = None
    visibility: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_PROJECT_NAME_LENGTH, "name")
        validate_required(self.project, "project")
        validate_max_length(self.project, MAX_PROJECT_KEY_LENGTH, "project")
        validate_allowed(self.visibility, VISIBILITIES, "visibility")
        validate_new_code_definition(self.new_code_definition_type, self.new_code_definition_value)


@dataclass(kw_only=True)
class ProjectsDeleteOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class ProjectsSearchMyProjectsOption(PaginationArgs):
    pass


@dataclass(kw_only=True)
class ProjectsUpdateDefaultVisibilityOption(Options):
    project_visibility: str | None = None

    def validate(self) -> None:
        validate_required(self.project_visibility, "project_visibility")
        validate_allowed(self.project_visibility, VISIBILITIES, "project_visibility")


@dataclass(kw_only=True)
class ProjectsUpdateKeyOption(Options):
    from_: str | None = None
    to: str | None = None

    def validate(self) -> None:
        validate_required(self.from_, "from_")
        validate_required(self.to, "to")


@dataclass(kw_only=True)
class ProjectsUpdateVisibilityOption(Options):
    project: str | None = None
    visibility: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")
        validate_required(self.visibility, "visibility")
        validate_allowed(self.visibility, VISIBILITIES, "visibility")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ProjectsService(Service):

    def bulk_delete(self, opt: ProjectsBulkDeleteOption) -> None:
        """Delete every project matching the filters. Irreversible."""
        self._post("projects/bulk_delete", opt)

    def create(self, opt: ProjectsCreateOption) -> ProjectsCreate:
        return self._post("projects/create", opt, expect="json")

    def delete(self, opt: ProjectsDeleteOption) -> None:
        self._post("projects/delete", opt)

    def search(self, opt: ProjectsSearchOption | None = None) -> ProjectsSearch:
        """Search projects, portfolios and applications. Requires 'Administer System'."""
        return self._get("projects/search", opt or ProjectsSearchOption())

    def search_my_projects(self, opt: ProjectsSearchMyProjectsOption | None = None) -> ProjectsSearchMyProjects:
        return self._get("projects/search_my_projects", opt or ProjectsSearchMyProjectsOption())

    def search_my_scannable_projects(self) -> ProjectsSearchMyScannableProjects:
        return self._get("projects/search_my_scannable_projects")

    def update_default_visibility(self, opt: ProjectsUpdateDefaultVisibilityOption) -> None:
        self._post("projects/update_default_visibility", opt)

    def update_key(self, opt: ProjectsUpdateKeyOption) -> None:
        self._post("projects/update_key", opt)

    def update_visibility(self, opt: ProjectsUpdateVisibilityOption) -> None:
        self._post("projects/update_visibility", opt)
