"""Project dump: export a project for import into another instance."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_one_of, validate_required


class ProjectDumpExport(TypedDict, total=False):
    projectId: str
    projectKey: str
    projectName: str
    taskId: str


class ProjectDumpStatus(TypedDict, total=False):
    canBeExported: bool
    canBeImported: bool
    exportedDump: str
    dumpToImport: str


@dataclass(kw_only=True)
class ProjectDumpExportOption(Options):
    key: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")


@dataclass(kw_only=True)
class ProjectDumpStatusOption(Options):
    key: str | None = None
    id: str | None = None

    def validate(self) -> None:
        validate_one_of("key", key=self.key, id=self.id)


class ProjectDumpService(Service):

    def export(self, opt: ProjectDumpExportOption) -> ProjectDumpExport:
        """Queue an export task; poll :meth:`status` for the dump path."""
        return self._post("project_dump/export", opt, expect="json")

    def status(self, opt: ProjectDumpStatusOption) -> ProjectDumpStatus:
        return self._get("project_dump/status", opt)
