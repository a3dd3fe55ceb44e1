"""HTTP session for the SonarQube Web API, with one attribute per service.

Usage:
    client = SonarClient(url="https://sonar.example.com", token="squ_xxx")
    hooks  = client.webhooks.list()
    client.webhooks.create(WebhooksCreateOption(name="ci", url="https://ci.example.com"))

    # Raw access for anything the services do not wrap
    status   = client.get("/api/system/status")
    projects = client.get_paginated("/api/projects/search", {"q": "billing"}, results_key="components")
"""

import logging
import time
from typing import Any

import requests

from sonar_client import __version__
from sonar_client.errors import (
    APIError,
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    SonarClientError,
)
from sonar_client.pagination import PAGINATION_WARNING_THRESHOLD, warn_pagination_cap
from sonar_client.services.alm_integrations import AlmIntegrationsService
from sonar_client.services.alm_settings import AlmSettingsService
from sonar_client.services.analysis_cache import AnalysisCacheService
from sonar_client.services.analysis_reports import AnalysisReportsService
from sonar_client.services.authentication import AuthenticationService
from sonar_client.services.batch import BatchService
from sonar_client.services.ce import CeService
from sonar_client.services.components import ComponentsService
from sonar_client.services.developers import DevelopersService
from sonar_client.services.dismiss_message import DismissMessageService
from sonar_client.services.duplications import DuplicationsService
from sonar_client.services.emails import EmailsService
from sonar_client.services.favorites import FavoritesService
from sonar_client.services.features import FeaturesService
from sonar_client.services.github_provisioning import GithubProvisioningService
from sonar_client.services.hotspots import HotspotsService
from sonar_client.services.issues import IssuesService
from sonar_client.services.l10n import L10nService
from sonar_client.services.languages import LanguagesService
from sonar_client.services.measures import MeasuresService
from sonar_client.services.metrics import MetricsService
from sonar_client.services.monitoring import MonitoringService
from sonar_client.services.navigation import NavigationService
from sonar_client.services.new_code_periods import NewCodePeriodsService
from sonar_client.services.notifications import NotificationsService
from sonar_client.services.permissions import PermissionsService
from sonar_client.services.plugins import PluginsService
from sonar_client.services.project_analyses import ProjectAnalysesService
from sonar_client.services.project_badges import ProjectBadgesService
from sonar_client.services.project_branches import ProjectBranchesService
from sonar_client.services.project_dump import ProjectDumpService
from sonar_client.services.project_links import ProjectLinksService
from sonar_client.services.project_tags import ProjectTagsService
from sonar_client.services.projects import ProjectsService
from sonar_client.services.push import PushService
from sonar_client.services.qualitygates import QualitygatesService
from sonar_client.services.qualityprofiles import QualityprofilesService
from sonar_client.services.rules import RulesService
from sonar_client.services.server import ServerService
from sonar_client.services.settings import SettingsService
from sonar_client.services.sources import SourcesService
from sonar_client.services.system import SystemService
from sonar_client.services.user_groups import UserGroupsService
from sonar_client.services.user_tokens import UserTokensService
from sonar_client.services.users import UsersService
from sonar_client.services.webhooks import WebhooksService
from sonar_client.services.webservices import WebservicesService

__all__ = [
    "APIError",
    "AuthenticationError",
    "ForbiddenError",
    "NetworkError",
    "NotFoundError",
    "SonarClient",
    "SonarClientError",
]

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:9000"
DEFAULT_USER_AGENT = f"sonar-client/{__version__}"
DEFAULT_TIMEOUT = 30
PAGE_SIZE = 500

_SUCCESS_CODES = frozenset({200, 201, 202, 204, 304})
_ACCEPT = {
    "json": "application/json",
    "none": "application/json",
    "text": "text/plain",
    "bytes": "*/*",
    "stream": "text/event-stream",
}
_ERRORS_BY_STATUS: dict[int, type[APIError]] = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
}


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class SonarClient:
    """Thin wrapper around the SonarQube REST API.

    Authentication is either a user token (sent as the basic-auth username
    with an empty password) or a login/password pair. Without credentials
    requests are anonymous. A system passcode can be sent alongside either.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        passcode: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = normalize_base_url(url)
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT

        if token:
            self.set_token(token)
        if username is not None and password is not None:
            self.set_basic_auth(username, password)
        if passcode:
            self.set_passcode(passcode)

        self.alm_integrations = AlmIntegrationsService(self)
        self.alm_settings = AlmSettingsService(self)
        self.analysis_cache = AnalysisCacheService(self)
        self.analysis_reports = AnalysisReportsService(self)
        self.authentication = AuthenticationService(self)
        self.batch = BatchService(self)
        self.ce = CeService(self)
        self.components = ComponentsService(self)
        self.developers = DevelopersService(self)
        self.dismiss_message = DismissMessageService(self)
        self.duplications = DuplicationsService(self)
        self.emails = EmailsService(self)
        self.favorites = FavoritesService(self)
        self.features = FeaturesService(self)
        self.github_provisioning = GithubProvisioningService(self)
        self.hotspots = HotspotsService(self)
        self.issues = IssuesService(self)
        self.l10n = L10nService(self)
        self.languages = LanguagesService(self)
        self.measures = MeasuresService(self)
        self.metrics = MetricsService(self)
        self.monitoring = MonitoringService(self)
        self.navigation = NavigationService(self)
        self.new_code_periods = NewCodePeriodsService(self)
        self.notifications = NotificationsService(self)
        self.permissions = PermissionsService(self)
        self.plugins = PluginsService(self)
        self.project_analyses = ProjectAnalysesService(self)
        self.project_badges = ProjectBadgesService(self)
        self.project_branches = ProjectBranchesService(self)
        self.project_dump = ProjectDumpService(self)
        self.project_links = ProjectLinksService(self)
        self.project_tags = ProjectTagsService(self)
        self.projects = ProjectsService(self)
        self.push = PushService(self)
        self.qualitygates = QualitygatesService(self)
        self.qualityprofiles = QualityprofilesService(self)
        self.rules = RulesService(self)
        self.server = ServerService(self)
        self.settings = SettingsService(self)
        self.sources = SourcesService(self)
        self.system = SystemService(self)
        self.user_groups = UserGroupsService(self)
        self.user_tokens = UserTokensService(self)
        self.users = UsersService(self)
        self.webhooks = WebhooksService(self)
        self.webservices = WebservicesService(self)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def set_token(self, token: str) -> None:
        # Tokens travel as the basic-auth login with a blank password
        self._session.auth = (token, "")

    def set_basic_auth(self, username: str, password: str) -> None:
        self._session.auth = (username, password)

    def set_passcode(self, passcode: str) -> None:
        """System passcode accepted by monitoring and health actions."""
        self._session.headers["X-Sonar-Passcode"] = passcode

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "SonarClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        expect: str = "json",
    ) -> Any:
        """Send one request and decode the response according to *expect*.

        GET parameters go in the query string, POST parameters in a
        form-encoded body.

        Args:
            method:   HTTP verb (``GET`` or ``POST``)
            endpoint: API path, e.g. ``/api/webhooks/list``
            params:   Already-encoded request parameters
            expect:   ``json``, ``text``, ``bytes``, ``none`` or ``stream``

        Raises:
            APIError:     non-success status, as one of its 401/403/404 subclasses when it applies
            NetworkError: the server could not be reached in time
        """
        if expect not in _ACCEPT:
            raise ValueError(f"Unknown response type '{expect}'")

        method = method.upper()
        url = f"{self.base_url}{endpoint}"
        kwargs: dict[str, Any] = {
            "headers": {"Accept": _ACCEPT[expect]},
            "timeout": self._timeout,
            "stream": expect == "stream",
        }
        if method == "POST":
            kwargs["data"] = params or {}
        else:
            kwargs["params"] = params or {}

        start = time.perf_counter()
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(f"{method} {url}: no answer within {self._timeout}s") from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(f"{method} {url}: cannot connect to {self.base_url} ({exc})") from exc

        logger.debug(
            "%s %s -> %d (%d ms)", method, url, response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        _check_response(method, url, response)
        return _decode(response, expect)

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """JSON body of ``GET endpoint?params``."""
        return self.request("GET", endpoint, params)

    def post(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """JSON body of a form POST, None when the server sends nothing back."""
        return self.request("POST", endpoint, params)

    def get_paginated(
        self,
        endpoint: str,
        params: dict[str, Any],
        results_key: str,
    ) -> list[dict]:
        """GET every page of *endpoint* and concatenate the *results_key* lists.

        ``p`` and ``ps`` are driven here, keep them out of *params*. A response
        without a ``paging`` block is treated as the only page.
        """
        items: list[dict] = []
        page = 0
        while True:
            page += 1
            data = self.get(endpoint, {**params, "p": page, "ps": PAGE_SIZE}) or {}
            batch = data.get(results_key) or []
            items.extend(batch)
            total = (data.get("paging") or {}).get("total", len(items))
            if page == 1 and total > PAGINATION_WARNING_THRESHOLD:
                warn_pagination_cap(total)
            if not batch or len(items) >= total:
                return items
            logger.debug("%s: %d/%d %s after page %d", endpoint, len(items), total, results_key, page)


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

def normalize_base_url(url: str) -> str:
    """Strip the trailing slash and an optional ``/api`` suffix."""
    url = url.rstrip("/")
    if url.endswith("/api"):
        url = url[: -len("/api")]
    return url


def _check_response(method: str, url: str, response: requests.Response) -> None:
    if response.status_code in _SUCCESS_CODES:
        return
    error_cls = _ERRORS_BY_STATUS.get(response.status_code, APIError)
    error = error_cls(method, url, response.status_code, response.content)
    logger.debug("%s", error)
    raise error


def _decode(response: requests.Response, expect: str) -> Any:
    if expect == "stream":
        return response
    if expect == "none":
        return None
    if expect == "bytes":
        return response.content
    if expect == "text":
        return response.text
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise SonarClientError(
            f"Invalid JSON from {response.url}: {response.text[:200]!r}"
        ) from exc
