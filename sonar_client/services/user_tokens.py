"""User tokens: generate, list and revoke access tokens."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import (
    MissingRequiredError,
    validate_allowed,
    validate_date,
    validate_max_length,
    validate_required,
)

MAX_TOKEN_NAME_LENGTH = 100

TOKEN_TYPES = frozenset({"USER_TOKEN", "GLOBAL_ANALYSIS_TOKEN", "PROJECT_ANALYSIS_TOKEN"})


class TokenProject(TypedDict, total=False):
    key: str
    name: str


class UserToken(TypedDict, total=False):
    name: str
    type: str
    createdAt: str
    lastConnectionDate: str
    expirationDate: str
    isExpired: bool
    project: TokenProject


class UserTokensGenerate(TypedDict, total=False):
    login: str
    name: str
    #: The secret; only returned once.
    token: str
    type: str
    createdAt: str
    expirationDate: str


class UserTokensSearch(TypedDict, total=False):
    login: str
    userTokens: list[UserToken]


@dataclass(kw_only=True)
class UserTokensGenerateOption(Options):
    name: str | None = None
    #: Token owner; the current user when omitted.
    login: str | None = None
    type: str | None = None
    #: Required for PROJECT_ANALYSIS_TOKEN.
    project_key: str | None = None
    #: YYYY-MM-DD
    expiration_date: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_TOKEN_NAME_LENGTH, "name")
        validate_allowed(self.type, TOKEN_TYPES, "type")
        if self.type == "PROJECT_ANALYSIS_TOKEN" and not self.project_key:
            raise MissingRequiredError("project_key", "is required when type is PROJECT_ANALYSIS_TOKEN")
        validate_date(self.expiration_date, "expiration_date")


@dataclass(kw_only=True)
class UserTokensRevokeOption(Options):
    name: str | None = None
    login: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")


@dataclass(kw_only=True)
class UserTokensSearchOption(Options):
    login: str | None = None


class UserTokensService(Service):
    """Managing another user's tokens requires 'Administer System'."""

    def generate(self, opt: UserTokensGenerateOption) -> UserTokensGenerate:
        return self._post("user_tokens/generate", opt, expect="json")

    def revoke(self, opt: UserTokensRevokeOption) -> None:
        self._post("user_tokens/revoke", opt)

    def search(self, opt: UserTokensSearchOption | None = None) -> UserTokensSearch:
        return self._get("user_tokens/search", opt or UserTokensSearchOption())
