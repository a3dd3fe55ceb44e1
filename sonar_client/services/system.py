"""Server administration: health, status, logs, upgrades, restarts.

Several actions authenticate with the monitoring passcode rather than a
user token; see ``SonarClient(passcode=...)``.
"""

from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_allowed, validate_required

LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO"})
LOG_NAMES = frozenset({"access", "app", "ce", "deprecation", "es", "web"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class HealthCause(TypedDict, total=False):
    message: str


class HealthNode(TypedDict, total=False):
    name: str
    type: str
    host: str
    port: int
    startedAt: str
    health: str
    causes: list[HealthCause]


class SystemHealth(TypedDict, total=False):
    #: GREEN, YELLOW or RED
    health: str
    causes: list[HealthCause]
    nodes: list[HealthNode]


class SystemDbMigrationStatus(TypedDict, total=False):
    state: str
    message: str
    startedAt: str


SystemMigrateDb = SystemDbMigrationStatus


# Section and key names of system/info are human-readable labels.
SystemInfo = TypedDict("SystemInfo", {
    "Health": str,
    "Health Causes": list[Any],
    "System": dict[str, Any],
    "Database": dict[str, Any],
    "Bundled": dict[str, str],
    "Plugins": dict[str, str],
    "Settings": dict[str, Any],
    "ALMs": dict[str, Any],
    "Web JVM State": dict[str, Any],
    "Web JVM Properties": dict[str, Any],
    "Web Logging": dict[str, Any],
    "Web Database Connection": dict[str, Any],
    "Compute Engine Tasks": dict[str, Any],
    "Compute Engine JVM State": dict[str, Any],
    "Compute Engine JVM Properties": dict[str, Any],
    "Compute Engine Logging": dict[str, Any],
    "Compute Engine Database Connection": dict[str, Any],
    "Search State": dict[str, Any],
    "Search Indexes": dict[str, Any],
    "Server Push Connections": dict[str, Any],
}, total=False)


class SystemStatus(TypedDict, total=False):
    id: str
    version: str
    #: STARTING, UP, DOWN, RESTARTING, DB_MIGRATION_NEEDED or DB_MIGRATION_RUNNING
    status: str


class UpgradePlugin(TypedDict, total=False):
    key: str
    name: str
    category: str
    description: str
    license: str
    organizationName: str
    organizationUrl: str
    termsAndConditionsUrl: str
    editionBundled: bool
    version: str


class UpgradePlugins(TypedDict, total=False):
    incompatible: list[UpgradePlugin]
    requireUpdate: list[UpgradePlugin]


class Upgrade(TypedDict, total=False):
    version: str
    description: str
    releaseDate: str
    changeLogUrl: str
    downloadUrl: str
    plugins: UpgradePlugins


class SystemUpgrades(TypedDict, total=False):
    upgrades: list[Upgrade]
    latestLTA: str
    latestLTS: str
    installedVersionActive: bool
    updateCenterRefresh: str


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class SystemChangeLogLevelOption(Options):
    level: str | None = None

    def validate(self) -> None:
        validate_required(self.level, "level")
        validate_allowed(self.level, LOG_LEVELS, "level")


@dataclass(kw_only=True)
class SystemLogsOption(Options):
    #: Process log to download; ``app`` when omitted.
    name: str | None = None

    def validate(self) -> None:
        validate_allowed(self.name, LOG_NAMES, "name")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class SystemService(Service):

    def change_log_level(self, opt: SystemChangeLogLevelOption) -> None:
        """Temporarily change the log level of every process; reset on restart."""
        self._post("system/change_log_level", opt)

    def db_migration_status(self) -> SystemDbMigrationStatus:
        return self._get("system/db_migration_status")

    def health(self) -> SystemHealth:
        return self._get("system/health")

    def info(self) -> SystemInfo:
        return self._get("system/info")

    def liveness(self) -> None:
        """Succeeds (HTTP 204) when the web process is alive."""
        self._get("system/liveness", expect="none")

    def logs(self, opt: SystemLogsOption | None = None) -> str:
        return self._get("system/logs", opt or SystemLogsOption(), expect="text")

    def migrate_db(self) -> SystemMigrateDb:
        return self._post("system/migrate_db", expect="json")

    def ping(self) -> str:
        """``pong`` whenever the server answers."""
        return self._get("system/ping", expect="text")

    def restart(self) -> None:
        self._post("system/restart")

    def status(self) -> SystemStatus:
        return self._get("system/status")

    def upgrades(self) -> SystemUpgrades:
        return self._get("system/upgrades")
