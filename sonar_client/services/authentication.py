"""Authentication: session login/logout and credential validation."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


class AuthenticationValidation(TypedDict, total=False):
    valid: bool


@dataclass(kw_only=True)
class AuthenticationLoginOption(Options):
    login: str | None = None
    password: str | None = None

    def validate(self) -> None:
        validate_required(self.login, "login")
        validate_required(self.password, "password")


class AuthenticationService(Service):

    def login(self, opt: AuthenticationLoginOption) -> None:
        """Authenticate a user; the session cookie is kept by the HTTP session."""
        self._post("authentication/login", opt)

    def logout(self) -> None:
        self._post("authentication/logout")

    def validate(self) -> AuthenticationValidation:
        """Check the credentials the client was configured with."""
        return self._get("authentication/validate")
