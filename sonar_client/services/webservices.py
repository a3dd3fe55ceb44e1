"""Web services: self-description of the API."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service
from sonar_client.validation import validate_required


class WebserviceParam(TypedDict, total=False):
    key: str
    description: str
    required: bool
    internal: bool
    since: str
    deprecatedSince: str
    deprecatedKey: str
    deprecatedKeySince: str
    defaultValue: str
    exampleValue: str
    possibleValues: list[str]
    maxValuesAllowed: int
    minimumLength: int
    maximumLength: int
    minimumValue: int
    maximumValue: int


class WebserviceChange(TypedDict, total=False):
    version: str
    description: str


class WebserviceAction(TypedDict, total=False):
    key: str
    description: str
    since: str
    deprecatedSince: str
    internal: bool
    post: bool
    hasResponseExample: bool
    changelog: list[WebserviceChange]
    params: list[WebserviceParam]


class Webservice(TypedDict, total=False):
    path: str
    since: str
    description: str
    actions: list[WebserviceAction]


class WebservicesList(TypedDict, total=False):
    webServices: list[Webservice]


class WebservicesResponseExample(TypedDict, total=False):
    format: str
    example: str


@dataclass(kw_only=True)
class WebservicesListOption(Options):
    include_internals: bool | None = param("include_internals")


@dataclass(kw_only=True)
class WebservicesResponseExampleOption(Options):
    #: Web service path, e.g. ``api/issues``
    controller: str | None = None
    action: str | None = None

    def validate(self) -> None:
        validate_required(self.action, "action")
        validate_required(self.controller, "controller")


class WebservicesService(Service):

    def list(self, opt: WebservicesListOption | None = None) -> WebservicesList:
        return self._get("webservices/list", opt or WebservicesListOption())

    def response_example(self, opt: WebservicesResponseExampleOption) -> WebservicesResponseExample:
        return self._get("webservices/response_example", opt)
