"""Navigation: data backing the web UI menus and headers."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_exclusive


class NavigationExtension(TypedDict, total=False):
    key: str
    name: str


class NavigationBreadcrumb(TypedDict, total=False):
    key: str
    name: str
    qualifier: str


class NavigationConfiguration(TypedDict, total=False):
    canBrowseProject: bool
    showBackgroundTasks: bool
    showHistory: bool
    showLinks: bool
    showPermissions: bool
    showQualityGates: bool
    showQualityProfiles: bool
    showSettings: bool
    showUpdateKey: bool
    extensions: list[NavigationExtension]


class NavigationQualityGate(TypedDict, total=False):
    key: str
    name: str
    isDefault: bool


class NavigationQualityProfile(TypedDict, total=False):
    key: str
    name: str
    language: str


class NavigationComponent(TypedDict, total=False):
    id: str
    key: str
    name: str
    description: str
    version: str
    analysisDate: str
    isFavorite: bool
    canBrowseAllChildProjects: bool
    breadcrumbs: list[NavigationBreadcrumb]
    configuration: NavigationConfiguration
    extensions: list[NavigationExtension]
    qualityGate: NavigationQualityGate
    qualityProfiles: list[NavigationQualityProfile]


class NavigationGlobal(TypedDict, total=False):
    canAdmin: bool
    documentationUrl: str
    edition: str
    globalPages: list[NavigationExtension]
    logoUrl: str
    logoWidth: str
    productionDatabase: bool
    qualifiers: list[str]
    #: Keyed by property name, e.g. ``sonar.lf.enableGravatar``.
    settings: dict[str, str]
    standalone: bool
    version: str
    versionEOL: str


class NavigationMarketplace(TypedDict, total=False):
    serverId: str
    ncloc: int


class NavigationSettingsExtension(TypedDict, total=False):
    name: str
    url: str


class NavigationSettings(TypedDict, total=False):
    showUpdateCenter: bool
    extensions: list[NavigationSettingsExtension]


@dataclass(kw_only=True)
class NavigationComponentOption(Options):
    component: str | None = None
    branch: str | None = None
    pull_request: str | None = None

    def validate(self) -> None:
        validate_exclusive("branch", branch=self.branch, pull_request=self.pull_request)


class NavigationService(Service):

    def component(self, opt: NavigationComponentOption | None = None) -> NavigationComponent:
        return self._get("navigation/component", opt or NavigationComponentOption())

    def global_(self) -> NavigationGlobal:
        """Server-wide navigation; available to anonymous users."""
        return self._get("navigation/global")

    def marketplace(self) -> NavigationMarketplace:
        return self._get("navigation/marketplace")

    def settings(self) -> NavigationSettings:
        return self._get("navigation/settings")
