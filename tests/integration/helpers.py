"""Helpers for the live-server tests.

Every resource the tests create is named with the ``e2e-`` prefix so that a
sweep can remove anything a crashed run left behind.
"""

import logging
import os
import time
from datetime import datetime

from sonar_client import NotFoundError, SonarClient
from sonar_client.services.projects import ProjectsDeleteOption, ProjectsSearchOption
from sonar_client.services.user_groups import UserGroupsNameOption, UserGroupsSearchOption
from sonar_client.services.users import UsersDeactivateOption, UsersSearchOption

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://127.0.0.1:9000"
DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin"

E2E_PREFIX = "e2e-"

DEFAULT_TIMEOUT = 60.0
DEFAULT_INTERVAL = 2.0


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

def load_env() -> dict:
    """Connection settings from SONAR_URL, SONAR_TOKEN, SONAR_USERNAME and SONAR_PASSWORD."""
    return {
        "url": os.environ.get("SONAR_URL") or DEFAULT_URL,
        "token": os.environ.get("SONAR_TOKEN") or None,
        "username": os.environ.get("SONAR_USERNAME") or DEFAULT_USERNAME,
        "password": os.environ.get("SONAR_PASSWORD") or DEFAULT_PASSWORD,
    }


def make_client(env: dict | None = None) -> SonarClient:
    """Token auth when a token is set, admin basic auth otherwise."""
    env = env or load_env()
    if env["token"]:
        return SonarClient(url=env["url"], token=env["token"])
    return SonarClient(url=env["url"], username=env["username"], password=env["password"])


def unique_name(prefix: str) -> str:
    return f"{E2E_PREFIX}{prefix}-{datetime.now():%Y%m%d-%H%M%S%f}"


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------

def ignore_not_found(fn, *args, **kwargs) -> None:
    """Call *fn*, treating a 404 as success (the test already deleted it)."""
    try:
        fn(*args, **kwargs)
    except NotFoundError:
        pass


class CleanupManager:
    """Collects cleanup callbacks and runs them last-registered first."""

    def __init__(self) -> None:
        self._resources: list[tuple[str, str, object]] = []

    def register(self, resource_type: str, identifier: str, fn) -> None:
        self._resources.append((resource_type, identifier, fn))

    def cleanup(self) -> list[str]:
        """Run every callback; return the failures instead of raising."""
        errors = []
        while self._resources:
            resource_type, identifier, fn = self._resources.pop()
            try:
                fn()
            except Exception as exc:
                errors.append(f"failed to cleanup {resource_type} '{identifier}': {exc}")
        return errors


def sweep_orphans(client: SonarClient) -> None:
    """Delete e2e projects and groups and deactivate e2e users from earlier runs."""
    projects = client.projects.search(ProjectsSearchOption(query=E2E_PREFIX))
    for project in projects.get("components", []):
        if project["key"].startswith(E2E_PREFIX):
            logger.info("Deleting orphaned project '%s'", project["key"])
            ignore_not_found(client.projects.delete, ProjectsDeleteOption(project=project["key"]))

    users = client.users.search(UsersSearchOption(query=E2E_PREFIX))
    for user in users.get("users", []):
        if user["login"].startswith(E2E_PREFIX):
            logger.info("Deactivating orphaned user '%s'", user["login"])
            ignore_not_found(client.users.deactivate, UsersDeactivateOption(login=user["login"]))

    groups = client.user_groups.search(UserGroupsSearchOption(query=E2E_PREFIX))
    for group in groups.get("groups", []):
        if group["name"].startswith(E2E_PREFIX):
            logger.info("Deleting orphaned group '%s'", group["name"])
            ignore_not_found(client.user_groups.delete, UserGroupsNameOption(name=group["name"]))


# ---------------------------------------------------------------------------
# Polling
# ---------------------------------------------------------------------------

def wait_for(condition, timeout: float = DEFAULT_TIMEOUT, interval: float = DEFAULT_INTERVAL) -> None:
    """Poll *condition* until it returns True.

    Raises:
        TimeoutError: the condition never held within *timeout* seconds
    """
    deadline = time.monotonic() + timeout
    while not condition():
        if time.monotonic() >= deadline:
            raise TimeoutError(f"Condition not met within {timeout}s")
        time.sleep(interval)


def retry(fn, max_retries: int = 3, delay: float = 1.0):
    """Call *fn* until it succeeds, re-raising the last error."""
    for attempt in range(max_retries + 1):
        try:
            return fn()
        except Exception:
            if attempt == max_retries:
                raise
            logger.debug("Attempt %d failed, retrying in %.1fs", attempt + 1, delay)
            time.sleep(delay)
