"""Dismiss message: per-user dismissal of UI notices."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


class DismissMessageCheck(TypedDict, total=False):
    dismissed: bool


@dataclass(kw_only=True)
class DismissMessageOption(Options):
    message_type: str | None = None
    project_key: str | None = None

    def validate(self) -> None:
        validate_required(self.message_type, "message_type")


class DismissMessageService(Service):

    def check(self, opt: DismissMessageOption) -> DismissMessageCheck:
        """Whether the current user dismissed the message."""
        return self._get("dismiss_message/check", opt)

    def dismiss(self, opt: DismissMessageOption) -> None:
        self._post("dismiss_message/dismiss", opt)
