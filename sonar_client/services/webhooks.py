"""Webhooks: notify external services when a project analysis is done.

Since SonarQube 6.2.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import (
    validate_max_length,
    validate_min_length,
    validate_required,
)

MAX_NAME_LENGTH = 100
MAX_PROJECT_LENGTH = 400
MAX_SECRET_LENGTH = 200
MIN_SECRET_LENGTH = 16  # since 10.6
MAX_URL_LENGTH = 512
MAX_KEY_LENGTH = 40


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class Webhook(TypedDict, total=False):
    key: str
    name: str
    url: str
    hasSecret: bool


class WebhookDelivery(TypedDict, total=False):
    id: str
    at: str
    ceTaskId: str
    componentKey: str
    name: str
    url: str
    payload: str
    durationMs: int
    httpStatus: int
    success: bool


class WebhooksCreate(TypedDict, total=False):
    webhook: Webhook


class WebhooksDeliveries(TypedDict, total=False):
    deliveries: list[WebhookDelivery]
    paging: Paging


class WebhooksDelivery(TypedDict, total=False):
    delivery: WebhookDelivery


class WebhooksList(TypedDict, total=False):
    webhooks: list[Webhook]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _validate_name_and_url(name: str | None, url: str | None) -> None:
    validate_required(name, "name")
    validate_max_length(name, MAX_NAME_LENGTH, "name")
    validate_required(url, "url")
    validate_max_length(url, MAX_URL_LENGTH, "url")


@dataclass(kw_only=True)
class WebhooksCreateOption(Options):
    name: str | None = None
    url: str | None = None
    #: Owning project; global webhook when omitted.
    project: str | None = None
    #: HMAC secret used for the X-Sonar-Webhook-HMAC-SHA256 header.
    secret: str | None = None

    def validate(self) -> None:
        _validate_name_and_url(self.name, self.url)
        validate_max_length(self.project, MAX_PROJECT_LENGTH, "project")
        validate_min_length(self.secret, MIN_SECRET_LENGTH, "secret")
        validate_max_length(self.secret, MAX_SECRET_LENGTH, "secret")


@dataclass(kw_only=True)
class WebhooksDeleteOption(Options):
    webhook: str | None = None

    def validate(self) -> None:
        validate_required(self.webhook, "webhook")
        validate_max_length(self.webhook, MAX_KEY_LENGTH, "webhook")


@dataclass(kw_only=True)
class WebhooksDeliveriesOption(PaginationArgs):
    ce_task_id: str | None = None  # deprecated since 10.7
    component_key: str | None = None  # deprecated since 10.7
    webhook: str | None = None


@dataclass(kw_only=True)
class WebhooksDeliveryOption(Options):
    delivery_id: str | None = None

    def validate(self) -> None:
        validate_required(self.delivery_id, "delivery_id")


@dataclass(kw_only=True)
class WebhooksListOption(Options):
    project: str | None = None


@dataclass(kw_only=True)
class WebhooksUpdateOption(Options):
    webhook: str | None = None
    name: str | None = None
    url: str | None = None
    #: Blank removes the existing secret; None leaves it unchanged.
    secret: str | None = None

    def validate(self) -> None:
        _validate_name_and_url(self.name, self.url)
        validate_required(self.webhook, "webhook")
        validate_max_length(self.webhook, MAX_KEY_LENGTH, "webhook")
        validate_max_length(self.secret, MAX_SECRET_LENGTH, "secret")

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        if self.secret == "":
            params["secret"] = ""
        return params


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class WebhooksService(Service):

    def create(self, opt: WebhooksCreateOption) -> WebhooksCreate:
        """Create a webhook.

        Requires 'Administer' permission on the project, or global 'Administer'.
        """
        return self._post("webhooks/create", opt, expect="json")

    def delete(self, opt: WebhooksDeleteOption) -> None:
        self._post("webhooks/delete", opt)

    def deliveries(self, opt: WebhooksDeliveriesOption | None = None) -> WebhooksDeliveries:
        """Recent deliveries for a project, webhook or Compute Engine task.

        The payload of each delivery is only returned by :meth:`delivery`.
        """
        return self._get("webhooks/deliveries", opt or WebhooksDeliveriesOption())

    def delivery(self, opt: WebhooksDeliveryOption) -> WebhooksDelivery:
        return self._get("webhooks/delivery", opt)

    def list(self, opt: WebhooksListOption | None = None) -> WebhooksList:
        """Global webhooks, or those of ``opt.project``, ordered by name."""
        return self._get("webhooks/list", opt or WebhooksListOption())

    def update(self, opt: WebhooksUpdateOption) -> None:
        self._post("webhooks/update", opt)
