"""Favorites: components starred by the current user."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs
from sonar_client.services.base import Service
from sonar_client.services.common import Paging
from sonar_client.validation import validate_required


class Favorite(TypedDict, total=False):
    key: str
    name: str
    qualifier: str


class FavoritesSearch(TypedDict, total=False):
    favorites: list[Favorite]
    paging: Paging


@dataclass(kw_only=True)
class FavoriteOption(Options):
    component: str | None = None

    def validate(self) -> None:
        validate_required(self.component, "component")


@dataclass(kw_only=True)
class FavoritesSearchOption(PaginationArgs):
    pass


class FavoritesService(Service):

    def add(self, opt: FavoriteOption) -> None:
        """Add a project, file or directory to the current user's favorites."""
        self._post("favorites/add", opt)

    def remove(self, opt: FavoriteOption) -> None:
        self._post("favorites/remove", opt)

    def search(self, opt: FavoritesSearchOption | None = None) -> FavoritesSearch:
        return self._get("favorites/search", opt or FavoritesSearchOption())
