"""Notifications: the email (or other channel) subscriptions of a user."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


class Notification(TypedDict, total=False):
    channel: str
    type: str
    project: str
    projectName: str


class NotificationsList(TypedDict, total=False):
    channels: list[str]
    globalTypes: list[str]
    perProjectTypes: list[str]
    notifications: list[Notification]


@dataclass(kw_only=True)
class NotificationOption(Options):
    """Shared by ``add`` and ``remove``; ``login`` defaults to the current user."""

    type: str | None = None
    channel: str | None = None
    #: Per-project notification when set, global otherwise.
    project: str | None = None
    login: str | None = None

    def validate(self) -> None:
        validate_required(self.type, "type")


@dataclass(kw_only=True)
class NotificationsListOption(Options):
    login: str | None = None


class NotificationsService(Service):

    def add(self, opt: NotificationOption) -> None:
        self._post("notifications/add", opt)

    def list(self, opt: NotificationsListOption | None = None) -> NotificationsList:
        return self._get("notifications/list", opt or NotificationsListOption())

    def remove(self, opt: NotificationOption) -> None:
        self._post("notifications/remove", opt)
