"""Source code of files: raw text, highlighted lines, SCM blame."""

from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service
from sonar_client.validation import validate_exclusive, validate_required


class SourcesComponent(TypedDict, total=False):
    key: str
    uuid: str
    name: str
    longName: str
    path: str
    qualifier: str


class SourcesLine(TypedDict, total=False):
    line: int
    code: str
    scmAuthor: str
    scmDate: str
    scmRevision: str
    lineHits: int
    conditions: int
    coveredConditions: int
    duplicated: bool
    isNew: bool


class SourcesIssueSnippet(TypedDict, total=False):
    component: SourcesComponent
    sources: list[SourcesLine]


#: Component key -> snippet around the issue locations in that file.
SourcesIssueSnippets = dict[str, SourcesIssueSnippet]


class SourcesIndex(TypedDict, total=False):
    sources: dict[str, str]


class SourcesLines(TypedDict, total=False):
    sources: list[SourcesLine]


class SourcesScm(TypedDict, total=False):
    #: [line, author, datetime, revision] tuples
    scm: list[list[Any]]


class SourcesShow(TypedDict, total=False):
    #: [line, html] pairs
    sources: list[list[Any]]


@dataclass(kw_only=True)
class SourcesKeyOption(Options):
    """A file by key; branch and pull request are mutually exclusive.

    Options of ``raw``.
    """

    key: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


@dataclass(kw_only=True)
class SourcesLinesOption(SourcesKeyOption):
    #: First line, 1-based
    from_: int | None = None
    #: Last line, inclusive
    to: int | None = None


@dataclass(kw_only=True)
class SourcesIndexOption(Options):
    resource: str | None = None
    from_: int | None = None
    to: int | None = None

    def validate(self) -> None:
        validate_required(self.resource, "resource")


@dataclass(kw_only=True)
class SourcesIssueSnippetsOption(Options):
    issue_key: str | None = None

    def validate(self) -> None:
        validate_required(self.issue_key, "issue_key")


@dataclass(kw_only=True)
class SourcesShowOption(Options):
    key: str | None = None
    from_: int | None = None
    to: int | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")


@dataclass(kw_only=True)
class SourcesScmOption(SourcesShowOption):
    #: One entry per line instead of grouping consecutive lines of a commit.
    commits_by_line: bool | None = param("commits_by_line")


class SourcesService(Service):
    """Every action requires 'See Source Code' on the project."""

    def index(self, opt: SourcesIndexOption) -> SourcesIndex:
        return self._get("sources/index", opt)

    def issue_snippets(self, opt: SourcesIssueSnippetsOption) -> SourcesIssueSnippets:
        return self._get("sources/issue_snippets", opt)

    def lines(self, opt: SourcesLinesOption) -> SourcesLines:
        return self._get("sources/lines", opt)

    def raw(self, opt: SourcesKeyOption) -> str:
        return self._get("sources/raw", opt, expect="text")

    def scm(self, opt: SourcesScmOption) -> SourcesScm:
        return self._get("sources/scm", opt)

    def show(self, opt: SourcesShowOption) -> SourcesShow:
        return self._get("sources/show", opt)
