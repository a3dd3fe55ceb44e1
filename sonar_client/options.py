"""Option structs: the typed parameter bag of one API action.

Usage:
    @dataclass(kw_only=True)
    class WebhooksCreateOption(Options):
        name: str | None = None
        url: str | None = None

        def validate(self) -> None:
            validate_required(self.name, "name")

    WebhooksCreateOption(name="ci", url="https://ci").to_params()
    # -> {"name": "ci", "url": "https://ci"}

Field names are converted to the camelCase wire name (``ce_task_id`` ->
``ceTaskId``); use ``param("p")`` when SonarQube spells it differently.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from sonar_client.formats import list_to_separated, map_to_separated
from sonar_client.validation import MAX_PAGE_SIZE, validate_pagination


def param(name: str, default: Any = None) -> Any:
    """Declare a field whose query parameter name is not its camelCase form."""
    return field(default=default, metadata={"param": name})


def wire_name(python_name: str) -> str:
    """``in_new_code_period`` -> ``inNewCodePeriod``; trailing ``_`` is dropped."""
    head, *rest = python_name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return map_to_separated(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return list_to_separated(value)
    return str(value)


def _is_unset(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple, set, frozenset, dict)) and not value


@dataclass(kw_only=True)
class Options:
    """Base class of every option struct."""

    def validate(self) -> None:
        """Check endpoint constraints. Subclasses override; the base accepts anything."""

    def to_params(self) -> dict[str, str]:
        """Encode the set fields as request parameters, omitting empty ones."""
        params: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if _is_unset(value):
                continue
            params[f.metadata.get("param") or wire_name(f.name)] = encode_value(value)
        return params


@dataclass(kw_only=True)
class PaginationArgs(Options):
    """Mixin for actions paged with ``p`` / ``ps``."""

    MAX_PAGE_SIZE: ClassVar[int] = MAX_PAGE_SIZE

    page: int | None = param("p")
    page_size: int | None = param("ps")

    def validate(self) -> None:
        validate_pagination(self.page, self.page_size, self.MAX_PAGE_SIZE)
