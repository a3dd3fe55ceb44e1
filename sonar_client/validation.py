"""Local validation of option structs.

Every service method validates its options before a request is built, so a
missing or malformed parameter never costs a round-trip to the server.

Usage:
    validate_required(opt.name, "name")                # MissingRequiredError
    validate_max_length(opt.name, 100, "name")         # OutOfRangeError
    validate_allowed(opt.status, {"OPEN", "CLOSED"}, "status")
"""

import re
from collections.abc import Collection, Iterable, Mapping
from typing import Any

from sonar_client.errors import SonarClientError

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 500

#: Language keys known to SonarQube (Community, Developer and Enterprise).
LANGUAGES = frozenset({
    "abap", "apex", "azureresourcemanager", "c", "cloudformation", "cobol",
    "cpp", "cs", "css", "dart", "docker", "flex", "githubactions", "go",
    "ipynb", "java", "jcl", "js", "json", "jsp", "kotlin", "kubernetes",
    "objc", "php", "pli", "plsql", "py", "rpg", "ruby", "rust", "scala",
    "secrets", "swift", "terraform", "text", "ts", "tsql", "vb", "vbnet",
    "web", "xml", "yaml",
})

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(Z|[+-]\d{2}:?\d{2})$")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ValidationError(SonarClientError, ValueError):
    """Raised before any network call when an option fails validation."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"validation error for field '{field}': {message}")


class MissingRequiredError(ValidationError):
    """A required parameter (or the option struct itself) is missing."""


class InvalidValueError(ValidationError):
    """A parameter is not one of the values the server accepts."""


class InvalidFormatError(ValidationError):
    """A parameter is malformed (dates, key=value pairs, ...)."""


class OutOfRangeError(ValidationError):
    """A length or numeric range constraint is violated."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple, set, dict)) and not value)


def _allowed_list(allowed: Collection[str]) -> str:
    return ", ".join(sorted(allowed))


def require_options(opt: Any) -> None:
    """Raise when a method that needs options was called with ``None``."""
    if opt is None:
        raise MissingRequiredError("opt", "option struct is required")


def validate_required(value: Any, field: str) -> None:
    if _is_empty(value):
        raise MissingRequiredError(field, "is required")


def validate_max_length(value: str | None, max_len: int, field: str) -> None:
    if value and len(value) > max_len:
        raise OutOfRangeError(field, f"exceeds maximum length of {max_len} characters")


def validate_min_length(value: str | None, min_len: int, field: str) -> None:
    """Empty values pass; combine with validate_required when mandatory."""
    if value and len(value) < min_len:
        raise OutOfRangeError(field, f"must be at least {min_len} characters")


def validate_range(value: int | None, min_value: int, max_value: int, field: str) -> None:
    if value is None:
        return
    if value < min_value or value > max_value:
        raise OutOfRangeError(field, f"must be between {min_value} and {max_value}")


def validate_pagination(page: int | None, page_size: int | None,
                        max_page_size: int = MAX_PAGE_SIZE) -> None:
    if page is not None and page < 1:
        raise OutOfRangeError("page", "must be greater than 0")
    if page_size is not None and not MIN_PAGE_SIZE <= page_size <= max_page_size:
        raise OutOfRangeError("page_size", f"must be between {MIN_PAGE_SIZE} and {max_page_size}")


def validate_allowed(value: str | None, allowed: Collection[str], field: str) -> None:
    """Check *value* against *allowed*. Empty values pass."""
    if _is_empty(value):
        return
    if value not in allowed:
        raise InvalidValueError(field, f"must be one of: {_allowed_list(allowed)}")


def validate_all_allowed(values: Iterable[str] | None, allowed: Collection[str], field: str) -> None:
    for value in values or ():
        if value not in allowed:
            raise InvalidValueError(
                field, f"value '{value}' is not allowed. Must be one of: {_allowed_list(allowed)}"
            )


def validate_map_keys(mapping: Mapping[str, str] | None, allowed: Collection[str], field: str) -> None:
    for key in mapping or {}:
        if key not in allowed:
            raise InvalidValueError(
                field, f"key '{key}' is not allowed. Must be one of: {_allowed_list(allowed)}"
            )


def validate_map_values(mapping: Mapping[str, str] | None, allowed: Collection[str], field: str) -> None:
    for key, value in (mapping or {}).items():
        if value not in allowed:
            raise InvalidValueError(
                field,
                f"value '{value}' for key '{key}' is not allowed. "
                f"Must be one of: {_allowed_list(allowed)}",
            )


def validate_language(language: str | None, field: str = "language") -> None:
    validate_allowed(language, LANGUAGES, field)


def validate_languages(languages: Iterable[str] | None, field: str = "languages") -> None:
    validate_all_allowed(languages, LANGUAGES, field)


def is_date(value: str) -> bool:
    return bool(_DATE_RE.match(value))


def is_datetime(value: str) -> bool:
    return bool(_DATETIME_RE.match(value))


def validate_date(value: str | None, field: str) -> None:
    """Accept ``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:mm:ss+hhmm``. Empty values pass."""
    if value and not (is_date(value) or is_datetime(value)):
        raise InvalidFormatError(
            field, "must be a valid date (YYYY-MM-DD) or datetime (YYYY-MM-DDTHH:mm:ssZ)"
        )


def validate_datetime(value: str | None, field: str) -> None:
    """Accept only a full datetime, ``YYYY-MM-DDTHH:mm:ss+hhmm``. Empty values pass."""
    if value and not is_datetime(value):
        raise InvalidFormatError(field, "must be a valid datetime (YYYY-MM-DDTHH:mm:ssZ)")


def validate_exclusive(field: str, **values: Any) -> None:
    """Raise when more than one of the given parameters is set."""
    given = [name for name, value in values.items() if not _is_empty(value)]
    if len(given) > 1:
        raise InvalidValueError(field, f"only one of {', '.join(values)} may be set")


def validate_one_of(field: str, **values: Any) -> None:
    """Raise when none of the given parameters is set."""
    if all(_is_empty(value) for value in values.values()):
        raise MissingRequiredError(field, f"one of {', '.join(values)} is required")
