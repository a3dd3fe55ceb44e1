"""User groups and their members."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import SELECTED_FILTERS, Paging
from sonar_client.validation import (
    validate_all_allowed,
    validate_allowed,
    validate_max_length,
    validate_required,
)

MAX_GROUP_NAME_LENGTH = 255
MAX_GROUP_DESCRIPTION_LENGTH = 200

GROUP_SEARCH_FIELDS = frozenset({"name", "description", "membersCount", "managed"})


class UserGroup(TypedDict, total=False):
    id: str
    name: str
    description: str
    membersCount: int
    default: bool
    managed: bool


class GroupMember(TypedDict, total=False):
    login: str
    name: str
    managed: bool
    selected: bool


class UserGroupsCreate(TypedDict, total=False):
    group: UserGroup


class UserGroupsSearch(TypedDict, total=False):
    groups: list[UserGroup]
    paging: Paging


class UserGroupsUsers(TypedDict, total=False):
    users: list[GroupMember]
    paging: Paging


@dataclass(kw_only=True)
class UserGroupsNameOption(Options):
    """A group by name (``delete``)."""

    name: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")


@dataclass(kw_only=True)
class UserGroupsMemberOption(UserGroupsNameOption):
    """Options of ``add_user`` and ``remove_user``."""

    #: Current user when omitted.
    login: str | None = None


@dataclass(kw_only=True)
class UserGroupsCreateOption(Options):
    name: str | None = None
    description: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")
        validate_max_length(self.name, MAX_GROUP_NAME_LENGTH, "name")
        validate_max_length(self.description, MAX_GROUP_DESCRIPTION_LENGTH, "description")


@dataclass(kw_only=True)
class UserGroupsUpdateOption(Options):
    current_name: str | None = None
    name: str | None = None
    description: str | None = None

    def validate(self) -> None:
        validate_required(self.current_name, "current_name")
        validate_max_length(self.name, MAX_GROUP_NAME_LENGTH, "name")
        validate_max_length(self.description, MAX_GROUP_DESCRIPTION_LENGTH, "description")


@dataclass(kw_only=True)
class UserGroupsSearchOption(PaginationArgs):
    fields: list[str] | None = param("f")
    #: Only groups managed (or not) by an external provisioning system.
    managed: bool | None = None
    query: str | None = param("q")

    def validate(self) -> None:
        super().validate()
        validate_all_allowed(self.fields, GROUP_SEARCH_FIELDS, "fields")


@dataclass(kw_only=True)
class UserGroupsUsersOption(PaginationArgs):
    name: str | None = None
    query: str | None = param("q")
    selected: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.name, "name")
        validate_allowed(self.selected, SELECTED_FILTERS, "selected")


class UserGroupsService(Service):
    """Requires 'Administer System'."""

    def add_user(self, opt: UserGroupsMemberOption) -> None:
        self._post("user_groups/add_user", opt)

    def create(self, opt: UserGroupsCreateOption) -> UserGroupsCreate:
        return self._post("user_groups/create", opt, expect="json")

    def delete(self, opt: UserGroupsNameOption) -> None:
        self._post("user_groups/delete", opt)

    def remove_user(self, opt: UserGroupsMemberOption) -> None:
        self._post("user_groups/remove_user", opt)

    def search(self, opt: UserGroupsSearchOption | None = None) -> UserGroupsSearch:
        return self._get("user_groups/search", opt or UserGroupsSearchOption())

    def update(self, opt: UserGroupsUpdateOption) -> None:
        self._post("user_groups/update", opt)

    def users(self, opt: UserGroupsUsersOption) -> UserGroupsUsers:
        return self._get("user_groups/users", opt)
