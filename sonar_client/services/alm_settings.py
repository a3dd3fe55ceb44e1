"""DevOps platform settings (Azure DevOps, Bitbucket, GitHub, GitLab).

Every action requires the 'Administer System' permission, except
``get_binding`` and ``list`` which need 'Browse' on the project.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_max_length, validate_required

MAX_KEY_LENGTH = 200
MAX_URL_LENGTH = 2000
MAX_PERSONAL_ACCESS_TOKEN_LENGTH = 2000
MAX_GITHUB_APP_ID_LENGTH = 80
MAX_GITHUB_CLIENT_ID_LENGTH = 80
MAX_GITHUB_CLIENT_SECRET_LENGTH = 160
MAX_GITHUB_PRIVATE_KEY_LENGTH = 2500
MAX_GITHUB_WEBHOOK_SECRET_LENGTH = 160
MAX_BITBUCKET_CLOUD_CLIENT_ID_LENGTH = 2000
MAX_BITBUCKET_CLOUD_CLIENT_SECRET_LENGTH = 2000
# update_bitbucketcloud is stricter than create_bitbucketcloud
MAX_BITBUCKET_CLOUD_CLIENT_ID_UPDATE_LENGTH = 80
MAX_BITBUCKET_CLOUD_CLIENT_SECRET_UPDATE_LENGTH = 160
MAX_BITBUCKET_CLOUD_WORKSPACE_UPDATE_LENGTH = 80


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class AlmSetting(TypedDict, total=False):
    key: str
    alm: str
    url: str


class AlmDefinition(TypedDict, total=False):
    key: str
    url: str


class BitbucketCloudDefinition(TypedDict, total=False):
    key: str
    clientId: str
    workspace: str


class GithubDefinition(TypedDict, total=False):
    key: str
    url: str
    appId: str
    clientId: str


class AlmValidationError(TypedDict, total=False):
    msg: str


class AlmSettingsCountBinding(TypedDict, total=False):
    key: str
    projects: int


class AlmSettingsGetBinding(TypedDict, total=False):
    key: str
    alm: str
    url: str
    repository: str
    repositoryUrl: str
    slug: str
    monorepo: bool
    summaryCommentEnabled: bool
    inlineAnnotationsEnabled: bool


class AlmSettingsList(TypedDict, total=False):
    almSettings: list[AlmSetting]


class AlmSettingsListDefinitions(TypedDict, total=False):
    azure: list[AlmDefinition]
    bitbucket: list[AlmDefinition]
    bitbucketcloud: list[BitbucketCloudDefinition]
    github: list[GithubDefinition]
    gitlab: list[AlmDefinition]


class AlmSettingsValidation(TypedDict, total=False):
    errors: list[AlmValidationError]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _validate_key(key: str | None, new_key: str | None = None) -> None:
    validate_required(key, "key")
    validate_max_length(key, MAX_KEY_LENGTH, "key")
    validate_max_length(new_key, MAX_KEY_LENGTH, "new_key")


def _validate_url(url: str | None) -> None:
    validate_required(url, "url")
    validate_max_length(url, MAX_URL_LENGTH, "url")


@dataclass(kw_only=True)
class AlmSettingsCountBindingOption(Options):
    alm_setting: str | None = None

    def validate(self) -> None:
        validate_required(self.alm_setting, "alm_setting")


@dataclass(kw_only=True)
class AlmSettingsKeyOption(Options):
    """Options of ``delete`` and ``validate``."""

    key: str | None = None

    def validate(self) -> None:
        _validate_key(self.key)


@dataclass(kw_only=True)
class AlmSettingsGetBindingOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class AlmSettingsListOption(Options):
    #: Only settings usable by this project.
    project: str | None = None


@dataclass(kw_only=True)
class AlmSettingsCreatePatOption(Options):
    """Azure DevOps, Bitbucket Server and GitLab use a personal access token."""

    key: str | None = None
    url: str | None = None
    personal_access_token: str | None = None

    def validate(self) -> None:
        _validate_key(self.key)
        validate_required(self.personal_access_token, "personal_access_token")
        validate_max_length(
            self.personal_access_token, MAX_PERSONAL_ACCESS_TOKEN_LENGTH, "personal_access_token"
        )
        _validate_url(self.url)


@dataclass(kw_only=True)
class AlmSettingsUpdatePatOption(Options):
    key: str | None = None
    new_key: str | None = None
    url: str | None = None
    #: Unchanged when omitted.
    personal_access_token: str | None = None

    def validate(self) -> None:
        _validate_key(self.key, self.new_key)
        validate_max_length(
            self.personal_access_token, MAX_PERSONAL_ACCESS_TOKEN_LENGTH, "personal_access_token"
        )
        _validate_url(self.url)


@dataclass(kw_only=True)
class AlmSettingsCreateBitbucketCloudOption(Options):
    key: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    workspace: str | None = None

    def validate(self) -> None:
        validate_required(self.client_id, "client_id")
        validate_max_length(self.client_id, MAX_BITBUCKET_CLOUD_CLIENT_ID_LENGTH, "client_id")
        validate_required(self.client_secret, "client_secret")
        validate_max_length(self.client_secret, MAX_BITBUCKET_CLOUD_CLIENT_SECRET_LENGTH, "client_secret")
        _validate_key(self.key)
        validate_required(self.workspace, "workspace")


@dataclass(kw_only=True)
class AlmSettingsUpdateBitbucketCloudOption(Options):
    key: str | None = None
    new_key: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    workspace: str | None = None

    def validate(self) -> None:
        validate_required(self.client_id, "client_id")
        validate_max_length(self.client_id, MAX_BITBUCKET_CLOUD_CLIENT_ID_UPDATE_LENGTH, "client_id")
        validate_max_length(
            self.client_secret, MAX_BITBUCKET_CLOUD_CLIENT_SECRET_UPDATE_LENGTH, "client_secret"
        )
        _validate_key(self.key, self.new_key)
        validate_required(self.workspace, "workspace")
        validate_max_length(self.workspace, MAX_BITBUCKET_CLOUD_WORKSPACE_UPDATE_LENGTH, "workspace")


@dataclass(kw_only=True)
class AlmSettingsCreateGithubOption(Options):
    key: str | None = None
    url: str | None = None
    app_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    private_key: str | None = None
    webhook_secret: str | None = None

    def validate(self) -> None:
        validate_required(self.app_id, "app_id")
        validate_max_length(self.app_id, MAX_GITHUB_APP_ID_LENGTH, "app_id")
        validate_required(self.client_id, "client_id")
        validate_max_length(self.client_id, MAX_GITHUB_CLIENT_ID_LENGTH, "client_id")
        validate_required(self.client_secret, "client_secret")
        validate_max_length(self.client_secret, MAX_GITHUB_CLIENT_SECRET_LENGTH, "client_secret")
        _validate_key(self.key)
        validate_required(self.private_key, "private_key")
        validate_max_length(self.private_key, MAX_GITHUB_PRIVATE_KEY_LENGTH, "private_key")
        _validate_url(self.url)
        validate_max_length(self.webhook_secret, MAX_GITHUB_WEBHOOK_SECRET_LENGTH, "webhook_secret")


@dataclass(kw_only=True)
class AlmSettingsUpdateGithubOption(Options):
    key: str | None = None
    new_key: str | None = None
    url: str | None = None
    app_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    private_key: str | None = None
    webhook_secret: str | None = None

    def validate(self) -> None:
        validate_required(self.app_id, "app_id")
        validate_max_length(self.app_id, MAX_GITHUB_APP_ID_LENGTH, "app_id")
        validate_required(self.client_id, "client_id")
        validate_max_length(self.client_id, MAX_GITHUB_CLIENT_ID_LENGTH, "client_id")
        validate_max_length(self.client_secret, MAX_GITHUB_CLIENT_SECRET_LENGTH, "client_secret")
        _validate_key(self.key, self.new_key)
        validate_max_length(self.private_key, MAX_GITHUB_PRIVATE_KEY_LENGTH, "private_key")
        _validate_url(self.url)
        validate_max_length(self.webhook_secret, MAX_GITHUB_WEBHOOK_SECRET_LENGTH, "webhook_secret")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class AlmSettingsService(Service):

    def count_binding(self, opt: AlmSettingsCountBindingOption) -> AlmSettingsCountBinding:
        """Number of projects bound to a DevOps platform setting."""
        return self._get("alm_settings/count_binding", opt)

    def create_azure(self, opt: AlmSettingsCreatePatOption) -> None:
        self._post("alm_settings/create_azure", opt)

    def create_bitbucket(self, opt: AlmSettingsCreatePatOption) -> None:
        self._post("alm_settings/create_bitbucket", opt)

    def create_bitbucketcloud(self, opt: AlmSettingsCreateBitbucketCloudOption) -> None:
        self._post("alm_settings/create_bitbucketcloud", opt)

    def create_github(self, opt: AlmSettingsCreateGithubOption) -> None:
        self._post("alm_settings/create_github", opt)

    def create_gitlab(self, opt: AlmSettingsCreatePatOption) -> None:
        self._post("alm_settings/create_gitlab", opt)

    def delete(self, opt: AlmSettingsKeyOption) -> None:
        self._post("alm_settings/delete", opt)

    def get_binding(self, opt: AlmSettingsGetBindingOption) -> AlmSettingsGetBinding:
        return self._get("alm_settings/get_binding", opt)

    def list(self, opt: AlmSettingsListOption | None = None) -> AlmSettingsList:
        return self._get("alm_settings/list", opt or AlmSettingsListOption())

    def list_definitions(self) -> AlmSettingsListDefinitions:
        """Every setting grouped by platform, including secret-free credentials."""
        return self._get("alm_settings/list_definitions")

    def update_azure(self, opt: AlmSettingsUpdatePatOption) -> None:
        self._post("alm_settings/update_azure", opt)

    def update_bitbucket(self, opt: AlmSettingsUpdatePatOption) -> None:
        self._post("alm_settings/update_bitbucket", opt)

    def update_bitbucketcloud(self, opt: AlmSettingsUpdateBitbucketCloudOption) -> None:
        self._post("alm_settings/update_bitbucketcloud", opt)

    def update_github(self, opt: AlmSettingsUpdateGithubOption) -> None:
        self._post("alm_settings/update_github", opt)

    def update_gitlab(self, opt: AlmSettingsUpdatePatOption) -> None:
        self._post("alm_settings/update_gitlab", opt)

    def validate(self, opt: AlmSettingsKeyOption) -> AlmSettingsValidation:
        """Check that the setting can reach its DevOps platform."""
        return self._get("alm_settings/validate", opt)
