"""Duplications: duplicated blocks of a file."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_exclusive, validate_required

DuplicationBlock = TypedDict("DuplicationBlock", {"_ref": str, "from": int, "size": int}, total=False)


class DuplicationGroup(TypedDict, total=False):
    blocks: list[DuplicationBlock]


class DuplicatedFile(TypedDict, total=False):
    key: str
    name: str
    projectName: str


class DuplicationsShow(TypedDict, total=False):
    duplications: list[DuplicationGroup]
    #: Keyed by the ``_ref`` of the blocks.
    files: dict[str, DuplicatedFile]


@dataclass(kw_only=True)
class DuplicationsShowOption(Options):
    key: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


class DuplicationsService(Service):

    def show(self, opt: DuplicationsShowOption) -> DuplicationsShow:
        """Duplications of a file. Requires 'Browse' permission on the project."""
        return self._get("duplications/show", opt)
