"""GitHub provisioning: status of the GitHub App used for user provisioning."""

from typing import TypedDict

from sonar_client.services.base import Service


class ProvisioningStatus(TypedDict, total=False):
    status: str
    errorMessage: str


class ProvisioningConfig(TypedDict, total=False):
    autoProvisioning: ProvisioningStatus
    jit: ProvisioningStatus


class GithubInstallation(ProvisioningConfig, total=False):
    organization: str


class GithubProvisioningCheck(TypedDict, total=False):
    application: ProvisioningConfig
    installations: list[GithubInstallation]


class GithubProvisioningService(Service):

    def check(self) -> GithubProvisioningCheck:
        """Validate the GitHub App configuration. Requires 'Administer System'."""
        return self._post("github_provisioning/check", expect="json")
