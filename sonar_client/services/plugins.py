"""Plugins: install, update and remove server extensions.

Changes only take effect after a server restart. Requires the
'Administer System' permission.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service
from sonar_client.validation import validate_all_allowed, validate_allowed, validate_required

PLUGIN_TYPES = frozenset({"BUNDLED", "EXTERNAL"})
PLUGIN_FIELDS = frozenset({"category"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class PluginRelease(TypedDict, total=False):
    version: str
    date: str
    description: str
    changeLogUrl: str


class PluginRequirement(TypedDict, total=False):
    key: str
    name: str
    description: str


class PluginUpdateInfo(TypedDict, total=False):
    status: str
    requires: list[PluginRequirement]


class PluginUpdateDetail(TypedDict, total=False):
    release: PluginRelease
    status: str
    requires: list[PluginRequirement]


class Plugin(TypedDict, total=False):
    """Fields common to every plugin listing."""

    key: str
    name: str
    description: str
    category: str
    license: str
    version: str
    organizationName: str
    organizationUrl: str
    editionBundled: bool
    homepageUrl: str
    issueTrackerUrl: str
    implementationBuild: str
    documentationPath: str
    termsAndConditionsUrl: str


class PluginAvailable(Plugin, total=False):
    release: PluginRelease
    update: PluginUpdateInfo


class PluginInstalled(Plugin, total=False):
    filename: str
    hash: str
    sonarLintSupported: bool
    requiredForLanguages: list[str]
    updatedAt: int


class PluginWithUpdates(Plugin, total=False):
    updates: list[PluginUpdateDetail]


class PluginsAvailable(TypedDict, total=False):
    plugins: list[PluginAvailable]
    updateCenterRefresh: str


class PluginsInstalled(TypedDict, total=False):
    plugins: list[PluginInstalled]


class PluginsPending(TypedDict, total=False):
    installing: list[Plugin]
    removing: list[Plugin]
    updating: list[Plugin]


class PluginsUpdates(TypedDict, total=False):
    plugins: list[PluginWithUpdates]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class PluginKeyOption(Options):
    """Shared by ``install``, ``uninstall`` and ``update``."""

    key: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")


@dataclass(kw_only=True)
class PluginsDownloadOption(Options):
    plugin: str | None = None

    def validate(self) -> None:
        validate_required(self.plugin, "plugin")


@dataclass(kw_only=True)
class PluginsInstalledOption(Options):
    fields: list[str] | None = param("f")
    type: str | None = None

    def validate(self) -> None:
        validate_all_allowed(self.fields, PLUGIN_FIELDS, "fields")
        validate_allowed(self.type, PLUGIN_TYPES, "type")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class PluginsService(Service):

    def available(self) -> PluginsAvailable:
        """Plugins from the Update Center that can be installed."""
        return self._get("plugins/available")

    def cancel_all(self) -> None:
        """Cancel every pending install, update and uninstall."""
        self._post("plugins/cancel_all")

    def download(self, opt: PluginsDownloadOption) -> bytes:
        """The plugin JAR."""
        return self._get("plugins/download", opt, expect="bytes")

    def install(self, opt: PluginKeyOption) -> None:
        self._post("plugins/install", opt)

    def installed(self, opt: PluginsInstalledOption | None = None) -> PluginsInstalled:
        return self._get("plugins/installed", opt or PluginsInstalledOption())

    def pending(self) -> PluginsPending:
        return self._get("plugins/pending")

    def uninstall(self, opt: PluginKeyOption) -> None:
        self._post("plugins/uninstall", opt)

    def update(self, opt: PluginKeyOption) -> None:
        self._post("plugins/update", opt)

    def updates(self) -> PluginsUpdates:
        return self._get("plugins/updates")
