"""Emails: test the outgoing mail configuration."""

from dataclasses import dataclass

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


@dataclass(kw_only=True)
class EmailsSendOption(Options):
    to: str | None = None
    message: str | None = None
    subject: str | None = None

    def validate(self) -> None:
        validate_required(self.message, "message")
        validate_required(self.to, "to")


class EmailsService(Service):

    def send(self, opt: EmailsSendOption) -> None:
        """Send a test email. Requires 'Administer System' permission."""
        self._post("emails/send", opt)
