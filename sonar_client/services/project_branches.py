"""Project branches: list, rename and protect branches of a project."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_max_length, validate_required

MAX_BRANCH_NAME_LENGTH = 255


class BranchStatus(TypedDict, total=False):
    qualityGateStatus: str


class Branch(TypedDict, total=False):
    name: str
    branchId: str
    type: str
    isMain: bool
    excludedFromPurge: bool
    analysisDate: str
    status: BranchStatus


class ProjectBranchesList(TypedDict, total=False):
    branches: list[Branch]


@dataclass(kw_only=True)
class ProjectBranchesListOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class ProjectBranchOption(ProjectBranchesListOption):
    """Shared by ``delete`` and ``set_main``."""

    branch: str | None = None

    def validate(self) -> None:
        validate_required(self.branch, "branch")
        super().validate()


@dataclass(kw_only=True)
class ProjectBranchesRenameOption(ProjectBranchesListOption):
    #: New name of the main branch.
    name: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_BRANCH_NAME_LENGTH, "name")
        super().validate()


@dataclass(kw_only=True)
class ProjectBranchesSetAutomaticDeletionProtectionOption(ProjectBranchOption):
    value: bool | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.value, "value")


class ProjectBranchesService(Service):

    def delete(self, opt: ProjectBranchOption) -> None:
        """Delete a non-main branch."""
        self._post("project_branches/delete", opt)

    def list(self, opt: ProjectBranchesListOption) -> ProjectBranchesList:
        return self._get("project_branches/list", opt)

    def rename(self, opt: ProjectBranchesRenameOption) -> None:
        self._post("project_branches/rename", opt)

    def set_automatic_deletion_protection(self, opt: ProjectBranchesSetAutomaticDeletionProtectionOption) -> None:
        """Exclude (or stop excluding) a branch from inactive-branch purges."""
        self._post("project_branches/set_automatic_deletion_protection", opt)

    def set_main(self, opt: ProjectBranchOption) -> None:
        self._post("project_branches/set_main", opt)
