"""Users: accounts, identity providers and per-user preferences."""

from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import SELECTED_FILTERS, Paging
from sonar_client.validation import (
    MissingRequiredError,
    validate_allowed,
    validate_date,
    validate_max_length,
    validate_min_length,
    validate_required,
)

MIN_LOGIN_LENGTH = 2
MAX_LOGIN_LENGTH = 255
MIN_PASSWORD_LENGTH = 12
MAX_EMAIL_LENGTH = 100
MAX_NAME_LENGTH = 200

HOMEPAGE_TYPES = frozenset({"PROJECT", "PROJECTS", "ISSUES", "PORTFOLIOS", "PORTFOLIO", "APPLICATION"})
NOTICE_TYPES = frozenset({
    "educationPrinciples",
    "sonarlintAd",
    "showDesignAndArchitectureBanner",
    "showNewModesBanner",
    "showSandboxedIssuesIntro",
    "issueCleanCodeGuide",
    "issueNewIssueStatusAndTransitionGuide",
    "showDesignAndArchitectureOptInBanner",
    "overviewZeroNewIssuesSimplification",
    "showDesignAndArchitectureTour",
    "showEnableSca",
})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class User(TypedDict, total=False):
    login: str
    name: str
    email: str
    active: bool
    local: bool
    scmAccounts: list[str]


class SearchedUser(User, total=False):
    avatar: str
    externalIdentity: str
    externalProvider: str
    groups: list[str]
    managed: bool
    tokensCount: int
    lastConnectionDate: str
    sonarLintLastConnectionDate: str


class Homepage(TypedDict, total=False):
    type: str
    component: str
    branch: str


class UsersCurrent(TypedDict, total=False):
    id: str
    login: str
    name: str
    email: str
    avatar: str
    isLoggedIn: bool
    local: bool
    externalIdentity: str
    externalProvider: str
    groups: list[str]
    scmAccounts: list[str]
    #: ``{"global": [...]}``
    permissions: dict[str, list[str]]
    homepage: Homepage
    dismissedNotices: dict[str, bool]
    usingSonarLintConnectedMode: bool


class UserGroupMembership(TypedDict, total=False):
    id: str
    name: str
    description: str
    default: bool
    selected: bool


class IdentityProvider(TypedDict, total=False):
    key: str
    name: str
    iconPath: str
    backgroundColor: str
    helpMessage: str


class UsersCreate(TypedDict, total=False):
    user: User


UsersUpdate = UsersCreate
UsersDeactivate = UsersCreate


class UsersGroups(TypedDict, total=False):
    groups: list[UserGroupMembership]
    paging: Paging


class UsersIdentityProviders(TypedDict, total=False):
    identityProviders: list[IdentityProvider]


class UsersSearch(TypedDict, total=False):
    users: list[SearchedUser]
    paging: Paging


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def validate_login(login: str | None, field: str = "login") -> None:
    validate_required(login, field)
    validate_min_length(login, MIN_LOGIN_LENGTH, field)
    validate_max_length(login, MAX_LOGIN_LENGTH, field)


def _scm_account_params(params: dict[str, Any], scm_accounts: list[str] | None) -> dict[str, Any]:
    # One scmAccount parameter per entry
    params.pop("scmAccount", None)
    if scm_accounts:
        params["scmAccount"] = list(scm_accounts)
    return params


@dataclass(kw_only=True)
class UsersLoginOption(Options):
    """A user by login (``anonymize``)."""

    login: str | None = None

    def validate(self) -> None:
        validate_required(self.login, "login")


@dataclass(kw_only=True)
class UsersDeactivateOption(UsersLoginOption):
    #: Also anonymize the user's personal data.
    anonymize: bool | None = None


@dataclass(kw_only=True)
class UsersChangePasswordOption(UsersLoginOption):
    password: str | None = None
    #: Required when changing one's own password.
    previous_password: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.password, "password")
        validate_min_length(self.password, MIN_PASSWORD_LENGTH, "password")


@dataclass(kw_only=True)
class UsersCreateOption(Options):
    login: str | None = None
    name: str | None = None
    email: str | None = None
    #: Server default is a local user; set False for externally authenticated users.
    local: bool | None = None
    password: str | None = None
    scm_accounts: list[str] | None = param("scmAccount")

    def validate(self) -> None:
        validate_login(self.login)
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_NAME_LENGTH, "name")
        validate_max_length(self.email, MAX_EMAIL_LENGTH, "email")
        if self.local is not False and not self.password:
            raise MissingRequiredError("password", "is required for local users")
        validate_min_length(self.password, MIN_PASSWORD_LENGTH, "password")

    def to_params(self) -> dict[str, Any]:
        return _scm_account_params(super().to_params(), self.scm_accounts)


@dataclass(kw_only=True)
class UsersUpdateOption(UsersLoginOption):
    name: str | None = None
    email: str | None = None
    scm_accounts: list[str] | None = param("scmAccount")

    def validate(self) -> None:
        super().validate()
        validate_max_length(self.name, MAX_NAME_LENGTH, "name")
        validate_max_length(self.email, MAX_EMAIL_LENGTH, "email")

    def to_params(self) -> dict[str, Any]:
        return _scm_account_params(super().to_params(), self.scm_accounts)


@dataclass(kw_only=True)
class UsersDismissNoticeOption(Options):
    notice: str | None = None

    def validate(self) -> None:
        validate_required(self.notice, "notice")
        validate_allowed(self.notice, NOTICE_TYPES, "notice")


@dataclass(kw_only=True)
class UsersGroupsOption(PaginationArgs):
    login: str | None = None
    query: str | None = param("q")
    selected: str | None = None

    def validate(self) -> None:
        validate_required(self.login, "login")
        super().validate()
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


@dataclass(kw_only=True)
class UsersSearchOption(PaginationArgs):
    deactivated: bool | None = None
    external_identity: str | None = None
    last_connected_after: str | None = None
    last_connected_before: str | None = None
    managed: bool | None = None
    query: str | None = param("q")
    sl_last_connected_after: str | None = None
    sl_last_connected_before: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_date(self.last_connected_after, "last_connected_after")
        validate_date(self.last_connected_before, "last_connected_before")
        validate_date(self.sl_last_connected_after, "sl_last_connected_after")
        validate_date(self.sl_last_connected_before, "sl_last_connected_before")


@dataclass(kw_only=True)
class UsersSetHomepageOption(Options):
    type: str | None = None
    component: str | None = None
    branch: str | None = None

    def validate(self) -> None:
        validate_required(self.type, "type")
        validate_allowed(self.type, HOMEPAGE_TYPES, "type")


@dataclass(kw_only=True)
class UsersUpdateIdentityProviderOption(UsersLoginOption):
    new_external_provider: str | None = None
    new_external_identity: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.new_external_provider, "new_external_provider")


@dataclass(kw_only=True)
class UsersUpdateLoginOption(UsersLoginOption):
    new_login: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_login(self.new_login, "new_login")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class UsersService(Service):

    def anonymize(self, opt: UsersLoginOption) -> None:
        """Anonymize a deactivated user. Requires 'Administer System'."""
        self._post("users/anonymize", opt)

    def change_password(self, opt: UsersChangePasswordOption) -> None:
        self._post("users/change_password", opt)

    def create(self, opt: UsersCreateOption) -> UsersCreate:
        return self._post("users/create", opt, expect="json")

    def current(self) -> UsersCurrent:
        return self._get("users/current")

    def deactivate(self, opt: UsersDeactivateOption) -> UsersDeactivate:
        return self._post("users/deactivate", opt, expect="json")

    def dismiss_notice(self, opt: UsersDismissNoticeOption) -> None:
        self._post("users/dismiss_notice", opt)

    def groups(self, opt: UsersGroupsOption) -> UsersGroups:
        return self._get("users/groups", opt)

    def identity_providers(self) -> UsersIdentityProviders:
        return self._get("users/identity_providers")

    def search(self, opt: UsersSearchOption | None = None) -> UsersSearch:
        return self._get("users/search", opt or UsersSearchOption())

    def set_homepage(self, opt: UsersSetHomepageOption) -> None:
        self._post("users/set_homepage", opt)

    def update(self, opt: UsersUpdateOption) -> UsersUpdate:
        return self._post("users/update", opt, expect="json")

    def update_identity_provider(self, opt: UsersUpdateIdentityProviderOption) -> None:
        self._post("users/update_identity_provider", opt)

    def update_login(self, opt: UsersUpdateLoginOption) -> None:
        self._post("users/update_login", opt)
