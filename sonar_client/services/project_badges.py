"""Project badges: SVG images summarising a project's status."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_allowed, validate_required

BADGE_METRICS = frozenset({
    "alert_status",
    "bugs",
    "code_smells",
    "coverage",
    "duplicated_lines_density",
    "ncloc",
    "reliability_rating",
    "security_hotspots",
    "security_rating",
    "software_quality_maintainability_issues",
    "software_quality_maintainability_rating",
    "software_quality_maintainability_remediation_effort",
    "software_quality_reliability_issues",
    "software_quality_reliability_rating",
    "software_quality_security_issues",
    "software_quality_security_rating",
    "sqale_index",
    "sqale_rating",
    "vulnerabilities",
})


class ProjectBadgesToken(TypedDict, total=False):
    token: str


@dataclass(kw_only=True)
class ProjectBadgesProjectOption(Options):
    """Shared by ``token`` and ``renew_token``."""

    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class ProjectBadgesQualityGateOption(ProjectBadgesProjectOption):
    branch: str | None = None
    #: Badge token; needed for private projects.
    token: str | None = None


@dataclass(kw_only=True)
class ProjectBadgesMeasureOption(ProjectBadgesQualityGateOption):
    metric: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.metric, "metric")
        validate_allowed(self.metric, BADGE_METRICS, "metric")


class ProjectBadgesService(Service):

    def measure(self, opt: ProjectBadgesMeasureOption) -> str:
        """SVG badge for one metric of a project."""
        return self._get("project_badges/measure", opt, expect="text")

    def quality_gate(self, opt: ProjectBadgesQualityGateOption) -> str:
        """SVG badge for the quality gate status of a project."""
        return self._get("project_badges/quality_gate", opt, expect="text")

    def renew_token(self, opt: ProjectBadgesProjectOption) -> None:
        self._post("project_badges/renew_token", opt)

    def token(self, opt: ProjectBadgesProjectOption) -> ProjectBadgesToken:
        return self._get("project_badges/token", opt)
