"""One module per SonarQube web service.

``SERVICES`` maps the client attribute name of each service to its class.
"""

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

SERVICES = {
    "alm_integrations": AlmIntegrationsService,
    "alm_settings": AlmSettingsService,
    "analysis_cache": AnalysisCacheService,
    "analysis_reports": AnalysisReportsService,
    "authentication": AuthenticationService,
    "batch": BatchService,
    "ce": CeService,
    "components": ComponentsService,
    "developers": DevelopersService,
    "dismiss_message": DismissMessageService,
    "duplications": DuplicationsService,
    "emails": EmailsService,
    "favorites": FavoritesService,
    "features": FeaturesService,
    "github_provisioning": GithubProvisioningService,
    "hotspots": HotspotsService,
    "issues": IssuesService,
    "l10n": L10nService,
    "languages": LanguagesService,
    "measures": MeasuresService,
    "metrics": MetricsService,
    "monitoring": MonitoringService,
    "navigation": NavigationService,
    "new_code_periods": NewCodePeriodsService,
    "notifications": NotificationsService,
    "permissions": PermissionsService,
    "plugins": PluginsService,
    "project_analyses": ProjectAnalysesService,
    "project_badges": ProjectBadgesService,
    "project_branches": ProjectBranchesService,
    "project_dump": ProjectDumpService,
    "project_links": ProjectLinksService,
    "project_tags": ProjectTagsService,
    "projects": ProjectsService,
    "push": PushService,
    "qualitygates": QualitygatesService,
    "qualityprofiles": QualityprofilesService,
    "rules": RulesService,
    "server": ServerService,
    "settings": SettingsService,
    "sources": SourcesService,
    "system": SystemService,
    "user_groups": UserGroupsService,
    "user_tokens": UserTokensService,
    "users": UsersService,
    "webhooks": WebhooksService,
    "webservices": WebservicesService,
}
