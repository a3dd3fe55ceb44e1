"""New code periods: what counts as "new code" globally, per project or branch."""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import (
    InvalidValueError,
    MissingRequiredError,
    OutOfRangeError,
    validate_allowed,
    validate_required,
)

MIN_DAYS = 1
MAX_DAYS = 90

NEW_CODE_PERIOD_TYPES = frozenset({
    "SPECIFIC_ANALYSIS", "PREVIOUS_VERSION", "NUMBER_OF_DAYS", "REFERENCE_BRANCH",
})


class NewCodePeriod(TypedDict, total=False):
    projectKey: str
    branchKey: str
    type: str
    value: str
    effectiveValue: str
    inherited: bool


class NewCodePeriodsList(TypedDict, total=False):
    newCodePeriods: list[NewCodePeriod]


def _check_scope(project: str | None, branch: str | None) -> None:
    if branch and not project:
        raise MissingRequiredError("project", "is required when branch is set")


@dataclass(kw_only=True)
class NewCodePeriodsListOption(Options):
    project: str | None = None

    def validate(self) -> None:
        validate_required(self.project, "project")


@dataclass(kw_only=True)
class NewCodePeriodsScopeOption(Options):
    """Global when empty, else a project or one of its branches."""

    project: str | None = None
    branch: str | None = None

    def validate(self) -> None:
        _check_scope(self.project, self.branch)


@dataclass(kw_only=True)
class NewCodePeriodsSetOption(NewCodePeriodsScopeOption):
    type: str | None = None
    #: Analysis uuid, number of days or branch name depending on ``type``.
    value: str | int | None = None

    def validate(self) -> None:
        super().validate()
        validate_required(self.type, "type")
        validate_allowed(self.type, NEW_CODE_PERIOD_TYPES, "type")
        if self.type == "PREVIOUS_VERSION":
            if self.value:
                raise InvalidValueError("value", "must not be set when type is PREVIOUS_VERSION")
            return
        validate_required(self.value, "value")
        if self.type == "NUMBER_OF_DAYS":
            days = str(self.value)
            if not days.isdigit() or not MIN_DAYS <= int(days) <= MAX_DAYS:
                raise OutOfRangeError("value", f"must be a number of days between {MIN_DAYS} and {MAX_DAYS}")
        elif self.type == "SPECIFIC_ANALYSIS" and not self.branch:
            raise MissingRequiredError("branch", "is required when type is SPECIFIC_ANALYSIS")
        elif self.type == "REFERENCE_BRANCH" and not self.project:
            raise MissingRequiredError("project", "is required when type is REFERENCE_BRANCH")


class NewCodePeriodsService(Service):

    def list(self, opt: NewCodePeriodsListOption) -> NewCodePeriodsList:
        """The new code period of every branch of a project."""
        return self._get("new_code_periods/list", opt)

    def set(self, opt: NewCodePeriodsSetOption) -> None:
        self._post("new_code_periods/set", opt)

    def show(self, opt: NewCodePeriodsScopeOption | None = None) -> NewCodePeriod:
        return self._get("new_code_periods/show", opt or NewCodePeriodsScopeOption())

    def unset(self, opt: NewCodePeriodsScopeOption | None = None) -> None:
        """Fall back to the inherited setting."""
        self._post("new_code_periods/unset", opt or NewCodePeriodsScopeOption())
