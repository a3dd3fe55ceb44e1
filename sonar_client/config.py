"""Connection settings for the command line.

A ``sonar-config.yaml`` holds the server address, credentials and a table of
project aliases; SONAR_* environment variables take precedence over it.

Usage:
    config = load()
    with config.make_client() as client:
        client.projects.search()
    config.resolve_project("billing")        # -> "com.example.billing"
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from sonar_client.client import DEFAULT_TIMEOUT, SonarClient


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """The settings file or environment is unusable."""


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass
class Config:
    url: str
    token: str = ""
    username: str = ""
    password: str = ""
    passcode: str = ""
    timeout: float = DEFAULT_TIMEOUT
    projects: dict[str, str] = field(default_factory=dict)

    def resolve_project(self, name: str) -> str:
        """Map an alias from the `projects` table to its key; other names pass through."""
        return self.projects.get(name, name)

    def make_client(self) -> SonarClient:
        return SonarClient(
            url=self.url,
            token=self.token or None,
            username=self.username or None,
            password=self.password or None,
            passcode=self.passcode or None,
            timeout=self.timeout,
        )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

_ENV_OVERRIDES = {
    "url": "SONAR_URL",
    "token": "SONAR_TOKEN",
    "username": "SONAR_USERNAME",
    "password": "SONAR_PASSWORD",
    "passcode": "SONAR_PASSCODE",
}


def environment() -> dict[str, str]:
    """The SONAR_* variables that are set, keyed by `Config` field."""
    values = {key: os.environ.get(env, "").strip() for key, env in _ENV_OVERRIDES.items()}
    return {key: value for key, value in values.items() if value}


def from_environment(url: str) -> Config:
    """Settings without a file: *url* plus whatever SONAR_* credentials are set."""
    config = Config(**{**environment(), "url": url})
    _validate(config)
    return config


def load(config_path: str = "sonar-config.yaml") -> Config:
    """Read *config_path* and apply the environment on top of it.

    Environment variables SONAR_URL, SONAR_TOKEN, SONAR_USERNAME,
    SONAR_PASSWORD and SONAR_PASSCODE override file values. The file may be
    absent when SONAR_URL is set.

    Raises:
        ConfigError: unreadable file, bad types, or no server URL at all
    """
    path = Path(config_path)

    if path.exists():
        raw = _read(path)
    elif os.environ.get("SONAR_URL"):
        raw = {}
    else:
        raise ConfigError(
            f"No settings file at '{config_path}'. "
            "Run `sonar-client init` to create one, or set SONAR_URL."
        )

    server = raw.get("server") or {}
    if not isinstance(server, dict):
        raise ConfigError(f"'server' in '{config_path}' must be a mapping.")

    env = environment()
    values = {key: env.get(key) or str(server.get(key) or "").strip() for key in _ENV_OVERRIDES}
    projects = raw.get("projects") or {}
    if not isinstance(projects, dict):
        raise ConfigError(f"'projects' in '{config_path}' must be a mapping of alias: key.")

    config = Config(
        timeout=_parse_timeout(server.get("timeout", DEFAULT_TIMEOUT)),
        projects={str(k): str(v) for k, v in projects.items()},
        **values,
    )
    _validate(config)
    return config


def _read(path: Path) -> dict:
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{path}' must be a YAML mapping at the top level.")
    return raw


def _parse_timeout(value) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'server.timeout' must be a number of seconds, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigError("'server.timeout' must be positive")
    return timeout


def _validate(config: Config) -> None:
    problems = []

    if not config.url:
        problems.append("  - no server.url (and SONAR_URL is not set)")
    if bool(config.username) != bool(config.password):
        problems.append("  - server.username and server.password must be set together")
    if problems:
        raise ConfigError("Bad configuration:\n" + "\n".join(problems))


# ---------------------------------------------------------------------------
# `sonar-client init`
# ---------------------------------------------------------------------------

TEMPLATE = """\
server:
  url: "https://sonar.example.com"
  # User token from My Account > Security; sent as the basic-auth login
  token: "squ_replace_me"
  # Or a login and password (both or neither)
  # username: "admin"
  # password: "admin"
  # sonar.web.systemPasscode, needed by system/liveness and monitoring/metrics
  # passcode: ""
  timeout: 30

# Short names accepted wherever a command takes --project / --project-key / --component
projects:
  billing: "com.example.billing"
  payments: "com.example.payments"
"""


def generate_template(output_path: str = "sonar-config.yaml") -> None:
    """Create a starter settings file; an existing file is never replaced."""
    path = Path(output_path)
    if path.exists():
        raise ConfigError(f"'{output_path}' exists already; delete it or pass another --output.")
    path.write_text(TEMPLATE, encoding="utf-8")
