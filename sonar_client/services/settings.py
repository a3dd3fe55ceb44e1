"""Global and component-level settings."""

import json
from dataclasses import dataclass
from typing import Any, TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import MissingRequiredError, validate_max_length, validate_required

MAX_SETTING_VALUE_LENGTH = 4000


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class SettingField(TypedDict, total=False):
    key: str
    name: str
    description: str
    type: str
    options: list[str]


class SettingDefinition(TypedDict, total=False):
    key: str
    name: str
    description: str
    type: str
    category: str
    subCategory: str
    defaultValue: str
    multiValues: bool
    options: list[str]
    fields: list[SettingField]


class SettingValue(TypedDict, total=False):
    key: str
    value: str
    values: list[str]
    fieldValues: list[dict[str, str]]
    inherited: bool


class SettingsCheckSecretKey(TypedDict, total=False):
    secretKeyAvailable: bool


class SettingsEncrypt(TypedDict, total=False):
    encryptedValue: str


class SettingsGenerateSecretKey(TypedDict, total=False):
    secretKey: str


class SettingsListDefinitions(TypedDict, total=False):
    definitions: list[SettingDefinition]


class SettingsLoginMessage(TypedDict, total=False):
    message: str


class SettingsValues(TypedDict, total=False):
    settings: list[SettingValue]
    setSecuredSettings: list[str]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(kw_only=True)
class SettingsComponentOption(Options):
    """Options of ``list_definitions``; global settings when no component."""

    component: str | None = None


@dataclass(kw_only=True)
class SettingsValuesOption(SettingsComponentOption):
    keys: list[str] | None = None


@dataclass(kw_only=True)
class SettingsResetOption(SettingsValuesOption):
    def validate(self) -> None:
        if not self.keys:
            raise MissingRequiredError("keys", "at least one key is required")


@dataclass(kw_only=True)
class SettingsEncryptOption(Options):
    value: str | None = None

    def validate(self) -> None:
        validate_required(self.value, "value")


@dataclass(kw_only=True)
class SettingsSetOption(SettingsComponentOption):
    """Set a single, multi-valued or property-set setting.

    ``values`` and ``field_values`` are sent as repeated parameters, one per
    entry; each ``field_values`` entry is a JSON object.
    """

    key: str | None = None
    value: str | None = None
    values: list[str] | None = None
    field_values: list[dict[str, str]] | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")
        validate_max_length(self.value, MAX_SETTING_VALUE_LENGTH, "value")

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = super().to_params()
        if self.values:
            params["values"] = list(self.values)
        if self.field_values:
            params["fieldValues"] = [json.dumps(entry) for entry in self.field_values]
        return params


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class SettingsService(Service):

    def check_secret_key(self) -> SettingsCheckSecretKey:
        return self._get("settings/check_secret_key")

    def encrypt(self, opt: SettingsEncryptOption) -> SettingsEncrypt:
        """Encrypt a value with the server secret key."""
        return self._post("settings/encrypt", opt, expect="json")

    def generate_secret_key(self) -> SettingsGenerateSecretKey:
        return self._get("settings/generate_secret_key")

    def list_definitions(self, opt: SettingsComponentOption | None = None) -> SettingsListDefinitions:
        return self._get("settings/list_definitions", opt or SettingsComponentOption())

    def login_message(self) -> SettingsLoginMessage:
        return self._get("settings/login_message")

    def reset(self, opt: SettingsResetOption) -> None:
        """Remove the given settings; they fall back to their default or inherited value."""
        self._post("settings/reset", opt)

    def set(self, opt: SettingsSetOption) -> None:
        self._post("settings/set", opt)

    def values(self, opt: SettingsValuesOption | None = None) -> SettingsValues:
        """Secured values are never returned, only listed in ``setSecuredSettings``."""
        return self._get("settings/values", opt or SettingsValuesOption())
