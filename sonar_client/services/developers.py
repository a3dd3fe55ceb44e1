"""Developers: events feed used by SonarLint."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import InvalidValueError, validate_required


class DeveloperEvent(TypedDict, total=False):
    category: str
    link: str
    message: str
    project: str


class DevelopersSearchEvents(TypedDict, total=False):
    events: list[DeveloperEvent]


@dataclass(kw_only=True)
class DevelopersSearchEventsOption(Options):
    #: One datetime per project, in the same order as ``projects``.
    from_: list[str] | None = None
    projects: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.from_, "from_")
        validate_required(self.projects, "projects")
        if len(self.from_) != len(self.projects):
            raise InvalidValueError("from_", "must have one entry per project")


class DevelopersService(Service):

    def search_events(self, opt: DevelopersSearchEventsOption) -> DevelopersSearchEvents:
        """Search for events on the given projects since the given dates."""
        return self._get("developers/search_events", opt)
