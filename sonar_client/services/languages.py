"""Languages supported by the installed analyzers."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, param
from sonar_client.services.base import Service
from sonar_client.validation import validate_range


class Language(TypedDict, total=False):
    key: str
    name: str


class LanguagesList(TypedDict, total=False):
    languages: list[Language]


@dataclass(kw_only=True)
class LanguagesListOption(Options):
    #: Pattern matched against language keys and names
    query: str | None = param("q")
    #: 0 returns every language
    page_size: int | None = param("ps")

    def validate(self) -> None:
        validate_range(self.page_size, 0, 500, "page_size")


class LanguagesService(Service):

    def list(self, opt: LanguagesListOption | None = None) -> LanguagesList:
        return self._get("languages/list", opt or LanguagesListOption())
