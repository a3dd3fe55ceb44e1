"""Batch: endpoints used by the scanner to bootstrap an analysis."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service


class BatchFileData(TypedDict, total=False):
    hash: str
    revision: str


class BatchProject(TypedDict, total=False):
    fileDataByModuleAndPath: dict[str, dict[str, BatchFileData]]
    lastAnalysisDate: int
    timestamp: int


@dataclass(kw_only=True)
class BatchFileOption(Options):
    #: e.g. ``batch-library-2.3.jar``
    name: str | None = None


@dataclass(kw_only=True)
class BatchProjectOption(Options):
    key: str | None = None
    branch: str | None = None
    profile: str | None = None
    pull_request: str | None = None


class BatchService(Service):

    def file(self, opt: BatchFileOption | None = None) -> str:
        """Download a JAR file listed by :meth:`index`."""
        return self._get("batch/file", opt or BatchFileOption(), expect="text")

    def index(self) -> str:
        """List the JAR files to download, one ``name|checksum`` per line."""
        return self._get("batch/index", expect="text")

    def project(self, opt: BatchProjectOption | None = None) -> BatchProject:
        return self._get("batch/project", opt or BatchProjectOption())
