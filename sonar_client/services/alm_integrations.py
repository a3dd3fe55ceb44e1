"""ALM integrations: browse DevOps platforms and import their repositories.

Covers Azure DevOps, Bitbucket Server, Bitbucket Cloud, GitHub and GitLab.
The ``alm_setting`` key names a DevOps platform configuration created with
:class:`~sonar_client.services.alm_settings.AlmSettingsService`.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    InvalidValueError,
    MissingRequiredError,
    OutOfRangeError,
    validate_allowed,
    validate_max_length,
    validate_range,
    validate_required,
)

MAX_ALM_SETTING_KEY_LENGTH = 200
MAX_PAT_LENGTH = 2000
MAX_USERNAME_LENGTH = 2000
MAX_GITHUB_REPO_KEY_LENGTH = 256
MAX_PAGE_SIZE = 100
MIN_NEW_CODE_DAYS = 1
MAX_NEW_CODE_DAYS = 90

NEW_CODE_DEFINITION_TYPES = frozenset({"PREVIOUS_VERSION", "NUMBER_OF_DAYS", "REFERENCE_BRANCH"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class AzureProject(TypedDict, total=False):
    name: str
    description: str


class AzureRepository(TypedDict, total=False):
    name: str
    projectName: str


class BitbucketServerProject(TypedDict, total=False):
    key: str
    name: str


class BitbucketRepository(TypedDict, total=False):
    name: str
    slug: str
    uuid: str
    projectKey: str
    sqProjectKey: str
    workspace: str


class BitbucketCloudPaging(TypedDict, total=False):
    pageIndex: int
    pageSize: int


class GithubOrganization(TypedDict, total=False):
    key: str
    name: str


class GithubRepository(TypedDict, total=False):
    id: int
    key: str
    name: str
    url: str


class GitlabRepository(TypedDict, total=False):
    id: int
    name: str
    pathName: str
    pathSlug: str
    slug: str
    url: str


class AlmIntegrationsGithubClientId(TypedDict, total=False):
    clientId: str


class AlmIntegrationsAzureProjects(TypedDict, total=False):
    projects: list[AzureProject]


class AlmIntegrationsBitbucketServerProjects(TypedDict, total=False):
    projects: list[BitbucketServerProject]


class AlmIntegrationsGithubOrganizations(TypedDict, total=False):
    organizations: list[GithubOrganization]
    paging: Paging


class AlmIntegrationsGithubRepositories(TypedDict, total=False):
    repositories: list[GithubRepository]
    paging: Paging


class AlmIntegrationsAzureRepos(TypedDict, total=False):
    repositories: list[AzureRepository]


class AlmIntegrationsBitbucketCloudRepos(TypedDict, total=False):
    isLastPage: bool
    paging: BitbucketCloudPaging
    repositories: list[BitbucketRepository]


class AlmIntegrationsBitbucketServerRepos(TypedDict, total=False):
    isLastPage: bool
    repositories: list[BitbucketRepository]


class AlmIntegrationsGitlabRepos(TypedDict, total=False):
    repositories: list[GitlabRepository]
    paging: Paging


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def validate_new_code_definition(definition_type: str | None, definition_value: str | None) -> None:
    """NUMBER_OF_DAYS needs a value in 1..90; the other types take none."""
    if not definition_type:
        return
    validate_allowed(definition_type, NEW_CODE_DEFINITION_TYPES, "new_code_definition_type")
    if definition_type == "NUMBER_OF_DAYS":
        if not definition_value:
            raise MissingRequiredError(
                "new_code_definition_value",
                "is required when new_code_definition_type is NUMBER_OF_DAYS",
            )
        if not definition_value.isdigit() or not (
            MIN_NEW_CODE_DAYS <= int(definition_value) <= MAX_NEW_CODE_DAYS
        ):
            raise OutOfRangeError(
                "new_code_definition_value",
                f"must be a number of days between {MIN_NEW_CODE_DAYS} and {MAX_NEW_CODE_DAYS}",
            )
    elif definition_value:
        raise InvalidValueError(
            "new_code_definition_value",
            f"should not be provided when new_code_definition_type is {definition_type}",
        )


@dataclass(kw_only=True)
class AlmSettingOption(Options):
    """Options of the actions that only need the DevOps platform setting."""

    alm_setting: str | None = None

    def validate(self) -> None:
        validate_required(self.alm_setting, "alm_setting")
        validate_max_length(self.alm_setting, MAX_ALM_SETTING_KEY_LENGTH, "alm_setting")


@dataclass(kw_only=True)
class _ImportOption(Options):
    alm_setting: str | None = None
    new_code_definition_type: str | None = None
    new_code_definition_value: str | None = None

    def validate(self) -> None:
        validate_max_length(self.alm_setting, MAX_ALM_SETTING_KEY_LENGTH, "alm_setting")
        validate_new_code_definition(self.new_code_definition_type, self.new_code_definition_value)


@dataclass(kw_only=True)
class AlmIntegrationsImportAzureProjectOption(_ImportOption):
    project_name: str | None = None
    repository_name: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.project_name, "project_name")
        validate_max_length(self.project_name, MAX_ALM_SETTING_KEY_LENGTH, "project_name")
        validate_required(self.repository_name, "repository_name")
        validate_max_length(self.repository_name, MAX_ALM_SETTING_KEY_LENGTH, "repository_name")


@dataclass(kw_only=True)
class AlmIntegrationsImportBitbucketCloudRepoOption(_ImportOption):
    repository_slug: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.repository_slug, "repository_slug")
        validate_max_length(self.repository_slug, MAX_ALM_SETTING_KEY_LENGTH, "repository_slug")


@dataclass(kw_only=True)
class AlmIntegrationsImportBitbucketServerProjectOption(_ImportOption):
    project_key: str | None = None
    repository_slug: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.project_key, "project_key")
        validate_max_length(self.project_key, MAX_ALM_SETTING_KEY_LENGTH, "project_key")
        validate_required(self.repository_slug, "repository_slug")
        validate_max_length(self.repository_slug, MAX_ALM_SETTING_KEY_LENGTH, "repository_slug")


@dataclass(kw_only=True)
class AlmIntegrationsImportGithubProjectOption(_ImportOption):
    #: ``organization/repository``
    repository_key: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.repository_key, "repository_key")
        validate_max_length(self.repository_key, MAX_GITHUB_REPO_KEY_LENGTH, "repository_key")


@dataclass(kw_only=True)
class AlmIntegrationsImportGitlabProjectOption(_ImportOption):
    gitlab_project_id: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.gitlab_project_id, "gitlab_project_id")


@dataclass(kw_only=True)
class AlmIntegrationsListBitbucketServerProjectsOption(AlmSettingOption):
    #: Bitbucket Server pages with ``start``/``pageSize``.
    start: int | None = None
    page_size: int | None = None

    def validate(self) -> None:
        super().validate()
        validate_range(self.page_size, 1, MAX_PAGE_SIZE, "page_size")


@dataclass(kw_only=True)
class AlmIntegrationsListGithubOrganizationsOption(AlmSettingOption):
    page: int | None = param("p")
    page_size: int | None = param("ps")
    #: OAuth code returned by GitHub on the first call.
    token: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_max_length(self.token, MAX_ALM_SETTING_KEY_LENGTH, "token")


@dataclass(kw_only=True)
class AlmIntegrationsListGithubRepositoriesOption(AlmSettingOption):
    organization: str | None = None
    page: int | None = param("p")
    page_size: int | None = param("ps")
    query: str | None = param("q")

    def validate(self) -> None:
        super().validate()
        validate_required(self.organization, "organization")
        validate_max_length(self.organization, MAX_ALM_SETTING_KEY_LENGTH, "organization")


@dataclass(kw_only=True)
class AlmIntegrationsSearchAzureReposOption(AlmSettingOption):
    project_name: str | None = None
    search_query: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_max_length(self.project_name, MAX_ALM_SETTING_KEY_LENGTH, "project_name")
        validate_max_length(self.search_query, MAX_ALM_SETTING_KEY_LENGTH, "search_query")


@dataclass(kw_only=True)
class AlmIntegrationsSearchBitbucketCloudReposOption(AlmSettingOption):
    page: int | None = param("p")
    page_size: int | None = param("ps")
    repository_name: str | None = None

    def validate(self) -> None:
        super().validate()
        validate_range(self.page_size, 1, MAX_PAGE_SIZE, "page_size")
        validate_max_length(self.repository_name, MAX_ALM_SETTING_KEY_LENGTH, "repository_name")


@dataclass(kw_only=True)
class AlmIntegrationsSearchBitbucketServerReposOption(AlmSettingOption):
    project_name: str | None = None
    repository_name: str | None = None
    start: int | None = None
    page_size: int | None = None

    def validate(self) -> None:
        super().validate()
        validate_range(self.page_size, 1, MAX_PAGE_SIZE, "page_size")
        validate_max_length(self.project_name, MAX_ALM_SETTING_KEY_LENGTH, "project_name")
        validate_max_length(self.repository_name, MAX_ALM_SETTING_KEY_LENGTH, "repository_name")


@dataclass(kw_only=True)
class AlmIntegrationsSearchGitlabReposOption(AlmSettingOption):
    project_name: str | None = None
    page: int | None = param("p")
    page_size: int | None = param("ps")

    def validate(self) -> None:
        super().validate()
        validate_range(self.page_size, 1, MAX_PAGE_SIZE, "page_size")
        validate_max_length(self.project_name, MAX_ALM_SETTING_KEY_LENGTH, "project_name")


@dataclass(kw_only=True)
class AlmIntegrationsSetPatOption(Options):
    alm_setting: str | None = None
    pat: str | None = None
    #: Bitbucket Cloud only
    username: str | None = None

    def validate(self) -> None:
        validate_required(self.pat, "pat")
        validate_max_length(self.pat, MAX_PAT_LENGTH, "pat")
        validate_max_length(self.username, MAX_USERNAME_LENGTH, "username")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class AlmIntegrationsService(Service):
    """Most actions require the 'Create Projects' permission."""

    def check_pat(self, opt: AlmSettingOption) -> None:
        """Raise if the personal access token stored for the setting is missing or invalid."""
        self._get("alm_integrations/check_pat", opt, expect="none")

    def get_github_client_id(self, opt: AlmSettingOption) -> AlmIntegrationsGithubClientId:
        return self._get("alm_integrations/get_github_client_id", opt)

    def import_azure_project(self, opt: AlmIntegrationsImportAzureProjectOption) -> None:
        self._post("alm_integrations/import_azure_project", opt)

    def import_bitbucketcloud_repo(self, opt: AlmIntegrationsImportBitbucketCloudRepoOption) -> None:
        self._post("alm_integrations/import_bitbucketcloud_repo", opt)

    def import_bitbucketserver_project(self, opt: AlmIntegrationsImportBitbucketServerProjectOption) -> None:
        self._post("alm_integrations/import_bitbucketserver_project", opt)

    def import_github_project(self, opt: AlmIntegrationsImportGithubProjectOption) -> None:
        self._post("alm_integrations/import_github_project", opt)

    def import_gitlab_project(self, opt: AlmIntegrationsImportGitlabProjectOption) -> None:
        self._post("alm_integrations/import_gitlab_project", opt)

    def list_azure_projects(self, opt: AlmSettingOption) -> AlmIntegrationsAzureProjects:
        return self._get("alm_integrations/list_azure_projects", opt)

    def list_bitbucketserver_projects(
        self, opt: AlmIntegrationsListBitbucketServerProjectsOption
    ) -> AlmIntegrationsBitbucketServerProjects:
        return self._get("alm_integrations/list_bitbucketserver_projects", opt)

    def list_github_organizations(
        self, opt: AlmIntegrationsListGithubOrganizationsOption
    ) -> AlmIntegrationsGithubOrganizations:
        return self._get("alm_integrations/list_github_organizations", opt)

    def list_github_repositories(
        self, opt: AlmIntegrationsListGithubRepositoriesOption
    ) -> AlmIntegrationsGithubRepositories:
        return self._get("alm_integrations/list_github_repositories", opt)

    def search_azure_repos(self, opt: AlmIntegrationsSearchAzureReposOption) -> AlmIntegrationsAzureRepos:
        return self._get("alm_integrations/search_azure_repos", opt)

    def search_bitbucketcloud_repos(
        self, opt: AlmIntegrationsSearchBitbucketCloudReposOption
    ) -> AlmIntegrationsBitbucketCloudRepos:
        return self._get("alm_integrations/search_bitbucketcloud_repos", opt)

    def search_bitbucketserver_repos(
        self, opt: AlmIntegrationsSearchBitbucketServerReposOption
    ) -> AlmIntegrationsBitbucketServerRepos:
        return self._get("alm_integrations/search_bitbucketserver_repos", opt)

    def search_gitlab_repos(self, opt: AlmIntegrationsSearchGitlabReposOption) -> AlmIntegrationsGitlabRepos:
        return self._get("alm_integrations/search_gitlab_repos", opt)

    def set_pat(self, opt: AlmIntegrationsSetPatOption) -> None:
        """Store a personal access token for the current user."""
        self._post("alm_integrations/set_pat", opt)
