"""Permissions: grant rights to users and groups, directly or via templates.

Templates are referenced either by ``template_id`` or ``template_name``;
projects by ``project_key`` or the deprecated ``project_id``.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    InvalidValueError,
    validate_allowed,
    validate_min_length,
    validate_one_of,
    validate_required,
)

MIN_QUERY_LENGTH = 3

GLOBAL_PERMISSIONS = frozenset({
    "admin", "gateadmin", "profileadmin", "provisioning", "scan",
    "applicationcreator", "portfoliocreator",
})
PROJECT_PERMISSIONS = frozenset({
    "admin", "codeviewer", "issueadmin", "securityhotspotadmin", "scan", "user",
})
TEMPLATE_QUALIFIERS = frozenset({"TRK"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class PermissionGroup(TypedDict, total=False):
    id: str
    name: str
    description: str
    managed: bool
    permissions: list[str]


class PermissionUser(TypedDict, total=False):
    login: str
    name: str
    email: str
    avatar: str
    managed: bool
    permissions: list[str]


class TemplatePermission(TypedDict, total=False):
    key: str
    usersCount: int
    groupsCount: int
    withProjectCreator: bool


class PermissionTemplate(TypedDict, total=False):
    id: str
    name: str
    description: str
    projectKeyPattern: str
    createdAt: str
    updatedAt: str
    permissions: list[TemplatePermission]


class DefaultTemplate(TypedDict, total=False):
    templateId: str
    qualifier: str


class PermissionsCreateTemplate(TypedDict, total=False):
    permissionTemplate: PermissionTemplate


PermissionsUpdateTemplate = PermissionsCreateTemplate


class PermissionsGroups(TypedDict, total=False):
    groups: list[PermissionGroup]
    paging: Paging


class PermissionsUsers(TypedDict, total=False):
    users: list[PermissionUser]
    paging: Paging


PermissionsTemplateGroups = PermissionsGroups
PermissionsTemplateUsers = PermissionsUsers


class PermissionsSearchTemplates(TypedDict, total=False):
    defaultTemplates: list[DefaultTemplate]
    permissionTemplates: list[PermissionTemplate]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def validate_permission(permission: str | None) -> None:
    """Accept any global or project permission key."""
    if permission and permission not in GLOBAL_PERMISSIONS | PROJECT_PERMISSIONS:
        raise InvalidValueError("permission", "must be a valid global or project permission")


def _validate_template_ref(template_id: str | None, template_name: str | None) -> None:
    validate_one_of("template_id", template_id=template_id, template_name=template_name)


@dataclass(kw_only=True)
class PermissionsGroupOption(Options):
    """Shared by ``add_group`` and ``remove_group``."""

    group_name: str | None = None
    permission: str | None = None
    #: Global permission when no project is given.
    project_key: str | None = None
    project_id: str | None = None

    def validate(self) -> None:
        validate_required(self.group_name, "group_name")
        validate_required(self.permission, "permission")
        validate_permission(self.permission)


@dataclass(kw_only=True)
class PermissionsUserOption(Options):
    """Shared by ``add_user`` and ``remove_user``."""

    login: str | None = None
    permission: str | None = None
    project_key: str | None = None
    project_id: str | None = None

    def validate(self) -> None:
        validate_required(self.login, "login")
        validate_required(self.permission, "permission")
        validate_permission(self.permission)


@dataclass(kw_only=True)
class PermissionsTemplateOption(Options):
    """Identifies a permission template (``delete_template``)."""

    template_id: str | None = None
    template_name: str | None = None

    def validate(self) -> None:
        _validate_template_ref(self.template_id, self.template_name)


@dataclass(kw_only=True)
class PermissionsProjectCreatorTemplateOption(PermissionsTemplateOption):
    permission: str | None = None

    def validate(self) -> None:
        validate_required(self.permission, "permission")
        validate_allowed(self.permission, PROJECT_PERMISSIONS, "permission")
        super().validate()


@dataclass(kw_only=True)
class PermissionsGroupTemplateOption(PermissionsProjectCreatorTemplateOption):
    group_name: str | None = None

    def validate(self) -> None:
        validate_required(self.group_name, "group_name")
        super().validate()


@dataclass(kw_only=True)
class PermissionsUserTemplateOption(PermissionsProjectCreatorTemplateOption):
    login: str | None = None

    def validate(self) -> None:
        validate_required(self.login, "login")
        super().validate()


@dataclass(kw_only=True)
class PermissionsApplyTemplateOption(PermissionsTemplateOption):
    project_key: str | None = None
    project_id: str | None = None

    def validate(self) -> None:
        validate_one_of("project_key", project_key=self.project_key, project_id=self.project_id)
        super().validate()


@dataclass(kw_only=True)
class PermissionsBulkApplyTemplateOption(PermissionsTemplateOption):
    projects: list[str] | None = None
    query: str | None = param("q")
    qualifiers: str | None = None
    #: YYYY-MM-DD or datetime; only projects analyzed before it.
    analyzed_before: str | None = None
    on_provisioned_only: bool | None = None

    def validate(self) -> None:
        super().validate()
        validate_allowed(self.qualifiers, TEMPLATE_QUALIFIERS, "qualifiers")


@dataclass(kw_only=True)
class PermissionsCreateTemplateOption(Options):
    name: str | None = None
    description: str | None = None
    #: Java regex matched against new project keys.
    project_key_pattern: str | None = None

    def validate(self) -> None:
        validate_required(self.name, "name")


@dataclass(kw_only=True)
class PermissionsUpdateTemplateOption(Options):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    project_key_pattern: str | None = None

    def validate(self) -> None:
        validate_required(self.id, "id")


@dataclass(kw_only=True)
class PermissionsSearchOption(PaginationArgs):
    """Options of ``groups`` and ``users``."""

    permission: str | None = None
    project_key: str | None = None
    project_id: str | None = None
    query: str | None = param("q")

    def validate(self) -> None:
        super().validate()
        validate_permission(self.permission)
        validate_min_length(self.query, MIN_QUERY_LENGTH, "query")


@dataclass(kw_only=True)
class PermissionsTemplateSearchOption(PaginationArgs):
    """Options of ``template_groups`` and ``template_users``."""

    template_id: str | None = None
    template_name: str | None = None
    permission: str | None = None
    query: str | None = param("q")

    def validate(self) -> None:
        super().validate()
        _validate_template_ref(self.template_id, self.template_name)
        validate_allowed(self.permission, PROJECT_PERMISSIONS, "permission")
        validate_min_length(self.query, MIN_QUERY_LENGTH, "query")


@dataclass(kw_only=True)
class PermissionsSearchTemplatesOption(Options):
    query: str | None = param("q")


@dataclass(kw_only=True)
class PermissionsSetDefaultTemplateOption(PermissionsTemplateOption):
    qualifier: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_allowed(self.qualifier, TEMPLATE_QUALIFIERS, "qualifier")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class PermissionsService(Service):

    def add_group(self, opt: PermissionsGroupOption) -> None:
        self._post("permissions/add_group", opt)

    def add_group_to_template(self, opt: PermissionsGroupTemplateOption) -> None:
        self._post("permissions/add_group_to_template", opt)

    def add_project_creator_to_template(self, opt: PermissionsProjectCreatorTemplateOption) -> None:
        self._post("permissions/add_project_creator_to_template", opt)

    def add_user(self, opt: PermissionsUserOption) -> None:
        self._post("permissions/add_user", opt)

    def add_user_to_template(self, opt: PermissionsUserTemplateOption) -> None:
        self._post("permissions/add_user_to_template", opt)

    def apply_template(self, opt: PermissionsApplyTemplateOption) -> None:
        """Replace the permissions of a project with those of a template."""
        self._post("permissions/apply_template", opt)

    def bulk_apply_template(self, opt: PermissionsBulkApplyTemplateOption) -> None:
        self._post("permissions/bulk_apply_template", opt)

    def create_template(self, opt: PermissionsCreateTemplateOption) -> PermissionsCreateTemplate:
        return self._post("permissions/create_template", opt, expect="json")

    def delete_template(self, opt: PermissionsTemplateOption) -> None:
        self._post("permissions/delete_template", opt)

    def groups(self, opt: PermissionsSearchOption | None = None) -> PermissionsGroups:
        """Groups with their permissions, globally or on a project."""
        return self._get("permissions/groups", opt or PermissionsSearchOption())

    def remove_group(self, opt: PermissionsGroupOption) -> None:
        self._post("permissions/remove_group", opt)

    def remove_group_from_template(self, opt: PermissionsGroupTemplateOption) -> None:
        self._post("permissions/remove_group_from_template", opt)

    def remove_project_creator_from_template(self, opt: PermissionsProjectCreatorTemplateOption) -> None:
        self._post("permissions/remove_project_creator_from_template", opt)

    def remove_user(self, opt: PermissionsUserOption) -> None:
        self._post("permissions/remove_user", opt)

    def remove_user_from_template(self, opt: PermissionsUserTemplateOption) -> None:
        self._post("permissions/remove_user_from_template", opt)

    def search_templates(self, opt: PermissionsSearchTemplatesOption | None = None) -> PermissionsSearchTemplates:
        return self._get("permissions/search_templates", opt or PermissionsSearchTemplatesOption())

    def set_default_template(self, opt: PermissionsSetDefaultTemplateOption) -> None:
        self._post("permissions/set_default_template", opt)

    def template_groups(self, opt: PermissionsTemplateSearchOption) -> PermissionsTemplateGroups:
        return self._get("permissions/template_groups", opt)

    def template_users(self, opt: PermissionsTemplateSearchOption) -> PermissionsTemplateUsers:
        return self._get("permissions/template_users", opt)

    def update_template(self, opt: PermissionsUpdateTemplateOption) -> PermissionsUpdateTemplate:
        return self._post("permissions/update_template", opt, expect="json")

    def users(self, opt: PermissionsSearchOption | None = None) -> PermissionsUsers:
        return self._get("permissions/users", opt or PermissionsSearchOption())
