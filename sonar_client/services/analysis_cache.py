"""Analysis cache: scanner-side cache used to speed up incremental analysis."""

from dataclasses import dataclass

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


@dataclass(kw_only=True)
class AnalysisCacheClearOption(Options):
    """Without a project, the cache of every project is cleared."""

    project: str | None = None
    branch: str | None = None


@dataclass(kw_only=True)
class AnalysisCacheGetOption(Options):
    project: str | None = None
    branch: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


class AnalysisCacheService(Service):

    def clear(self, opt: AnalysisCacheClearOption | None = None) -> None:
        """Clear all or part of the scanner's cache. Requires global 'Administer'."""
        self._post("analysis_cache/clear", opt or AnalysisCacheClearOption())

    def get(self, opt: AnalysisCacheGetOption) -> bytes:
        """Return the gzipped scanner cache of a project branch.

        Requires 'Execute Analysis' permission on the project.
        """
        return self._get("analysis_cache/get", opt, expect="bytes")
