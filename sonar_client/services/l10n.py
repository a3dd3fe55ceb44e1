"""L10n: localization bundles for the web UI."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service


class L10nIndex(TypedDict, total=False):
    effectiveLocale: str
    messages: dict[str, str]


@dataclass(kw_only=True)
class L10nIndexOption(Options):
    #: BCP47 language tag, e.g. ``en-US``
    locale: str | None = None
    #: Date of the last cache update (``YYYY-MM-DDTHH:mm:ss+hhmm``)
    timestamp: str | None = param("ts")


class L10nService(Service):

    def index(self, opt: L10nIndexOption | None = None) -> L10nIndex:
        return self._get("l10n/index", opt or L10nIndexOption())
