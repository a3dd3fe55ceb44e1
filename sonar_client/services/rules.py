"""Coding rules: search, inspect and maintain custom rules.

``RuleFilters`` is shared with the bulk (de)activation actions of
``qualityprofiles``, which select rules with the same filters as ``search``.
"""

from dataclasses import dataclass
from typing import TypedDict

from sonar_client.options import Options, PaginationArgs, param
from sonar_client.services.base import Service
from sonar_client.services.common import (
    CLEAN_CODE_ATTRIBUTE_CATEGORIES,
    IMPACT_SEVERITIES,
    OWASP_MOBILE_TOP10_CATEGORIES,
    OWASP_TOP10_CATEGORIES,
    RULE_STATUSES,
    RULE_TYPES,
    SANS_TOP25_CATEGORIES,
    SEVERITIES,
    SOFTWARE_QUALITIES,
    Impact,
    Paging,
)
from sonar_client.validation import (
    MAX_PAGE_SIZE,
    validate_all_allowed,
    validate_allowed,
    validate_languages,
    validate_map_keys,
    validate_map_values,
    validate_pagination,
    validate_range,
    validate_required,
)

MAX_TAGS_PAGE_SIZE = 500

INHERITANCE_TYPES = frozenset({"NONE", "INHERITED", "OVERRIDES"})
RULE_SORT_FIELDS = frozenset({"name", "updatedAt", "createdAt", "key"})
REMEDIATION_FUNCTIONS = frozenset({"LINEAR", "LINEAR_OFFSET", "CONSTANT_ISSUE"})


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class RuleParam(TypedDict, total=False):
    key: str
    desc: str
    htmlDesc: str
    defaultValue: str
    type: str


class DescriptionContext(TypedDict, total=False):
    key: str
    displayName: str


class DescriptionSection(TypedDict, total=False):
    key: str
    content: str
    context: DescriptionContext


class Rule(TypedDict, total=False):
    key: str
    repo: str
    name: str
    createdAt: str
    updatedAt: str
    htmlDesc: str
    mdDesc: str
    htmlNote: str
    mdNote: str
    noteLogin: str
    severity: str
    status: str
    internalKey: str
    isTemplate: bool
    isExternal: bool
    templateKey: str
    tags: list[str]
    sysTags: list[str]
    lang: str
    langName: str
    params: list[RuleParam]
    scope: str
    type: str
    cleanCodeAttribute: str
    cleanCodeAttributeCategory: str
    impacts: list[Impact]


class RuleDetails(Rule, total=False):
    gapDescription: str
    remFnType: str
    remFnGapMultiplier: str
    remFnBaseEffort: str
    remFnOverloaded: bool
    defaultRemFnType: str
    defaultRemFnGapMultiplier: str
    defaultRemFnBaseEffort: str
    descriptionSections: list[DescriptionSection]
    template: bool


class ParamValue(TypedDict, total=False):
    key: str
    value: str


class RuleActivation(TypedDict, total=False):
    qProfile: str
    inherit: str
    severity: str
    params: list[ParamValue]
    prioritizedRule: bool


class RuleCharacteristic(TypedDict, total=False):
    key: str
    name: str
    parent: str


class RuleRepository(TypedDict, total=False):
    key: str
    name: str
    language: str


class FacetValue(TypedDict, total=False):
    val: str
    count: int


class Facet(TypedDict, total=False):
    name: str
    values: list[FacetValue]


class RulesApp(TypedDict, total=False):
    canWrite: bool
    languages: dict[str, str]
    statuses: dict[str, str]
    characteristics: list[RuleCharacteristic]
    repositories: list[RuleRepository]


class RulesCreate(TypedDict, total=False):
    rule: Rule


RulesUpdate = RulesCreate


class RulesRepositories(TypedDict, total=False):
    repositories: list[RuleRepository]


class RulesSearch(TypedDict, total=False):
    rules: list[RuleDetails]
    #: Rule key -> activations, when ``activation`` filtering is used.
    actives: dict[str, list[RuleActivation]]
    facets: list[Facet]
    paging: Paging


class RulesShow(TypedDict, total=False):
    rule: RuleDetails
    actives: list[RuleActivation]


class RulesTags(TypedDict, total=False):
    tags: list[str]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def validate_impacts(impacts: dict[str, str] | None, field: str = "impacts") -> None:
    """Impacts map a software quality to an impact severity."""
    validate_map_keys(impacts, SOFTWARE_QUALITIES, field)
    validate_map_values(impacts, IMPACT_SEVERITIES, field)


@dataclass(kw_only=True)
class RuleFilters(Options):
    """Rule selection filters of ``rules/search`` and bulk activation."""

    #: With ``qprofile``: only rules active (True) or inactive (False) in it.
    activation: bool | None = None
    active_impact_severities: list[str] | None = param("active_impactSeverities")
    active_severities: list[str] | None = param("active_severities")
    asc: bool | None = None
    #: YYYY-MM-DD
    available_since: str | None = param("available_since")
    clean_code_attribute_categories: list[str] | None = None
    compare_to_profile: str | None = None
    cwe: list[str] | None = None
    impact_severities: list[str] | None = None
    impact_software_qualities: list[str] | None = None
    inheritance: list[str] | None = None
    is_template: bool | None = param("is_template")
    languages: list[str] | None = None
    owasp_mobile_top10_2024: list[str] | None = param("owaspMobileTop10-2024")
    owasp_top10: list[str] | None = None
    owasp_top10_2021: list[str] | None = param("owaspTop10-2021")
    prioritized_rule: bool | None = None
    qprofile: str | None = None
    query: str | None = param("q")
    repositories: list[str] | None = None
    rule_key: str | None = param("rule_key")
    sans_top25: list[str] | None = None
    severities: list[str] | None = None
    sonarsource_security: list[str] | None = None
    sort: str | None = param("s")
    statuses: list[str] | None = None
    tags: list[str] | None = None
    template_key: str | None = param("template_key")
    types: list[str] | None = None

    def validate(self) -> None:
        validate_all_allowed(self.active_impact_severities, IMPACT_SEVERITIES, "active_impact_severities")
        validate_all_allowed(self.active_severities, SEVERITIES, "active_severities")
        validate_all_allowed(
            self.clean_code_attribute_categories, CLEAN_CODE_ATTRIBUTE_CATEGORIES,
            "clean_code_attribute_categories",
        )
        validate_all_allowed(self.impact_severities, IMPACT_SEVERITIES, "impact_severities")
        validate_all_allowed(self.impact_software_qualities, SOFTWARE_QUALITIES, "impact_software_qualities")
        validate_all_allowed(self.inheritance, INHERITANCE_TYPES, "inheritance")
        validate_languages(self.languages)
        validate_all_allowed(self.owasp_top10, OWASP_TOP10_CATEGORIES, "owasp_top10")
        validate_all_allowed(self.owasp_top10_2021, OWASP_TOP10_CATEGORIES, "owasp_top10_2021")
        validate_all_allowed(
            self.owasp_mobile_top10_2024, OWASP_MOBILE_TOP10_CATEGORIES, "owasp_mobile_top10_2024"
        )
        validate_all_allowed(self.sans_top25, SANS_TOP25_CATEGORIES, "sans_top25")
        validate_all_allowed(self.severities, SEVERITIES, "severities")
        validate_all_allowed(self.statuses, RULE_STATUSES, "statuses")
        validate_all_allowed(self.types, RULE_TYPES, "types")
        validate_allowed(self.sort, RULE_SORT_FIELDS, "sort")


@dataclass(kw_only=True)
class RulesSearchOption(RuleFilters):
    page: int | None = param("p")
    page_size: int | None = param("ps")
    compliance_standards: list[str] | None = None
    #: Extra response fields, e.g. ``actives``, ``params``, ``templateKey``.
    fields: list[str] | None = param("f")
    facets: list[str] | None = None
    include_external: bool | None = param("include_external")

    def validate(self) -> None:
        validate_pagination(self.page, self.page_size, MAX_PAGE_SIZE)
        super().validate()


@dataclass(kw_only=True)
class RulesCreateOption(Options):
    """Create a custom rule from a template rule."""

    custom_key: str | None = None
    template_key: str | None = None
    name: str | None = None
    markdown_description: str | None = None
    clean_code_attribute: str | None = None
    impacts: dict[str, str] | None = None
    #: Template parameter values, ``{"format": "^[a-z]+$"}``.
    params: dict[str, str] | None = None
    #: Fail instead of reactivating a removed rule with the same key.
    prevent_reactivation: bool | None = None
    severity: str | None = None
    status: str | None = None
    type: str | None = None

    def validate(self) -> None:
        validate_required(self.custom_key, "custom_key")
        validate_required(self.template_key, "template_key")
        validate_required(self.name, "name")
        validate_required(self.markdown_description, "markdown_description")
        validate_impacts(self.impacts)
        validate_allowed(self.severity, SEVERITIES, "severity")
        validate_allowed(self.status, RULE_STATUSES, "status")
        validate_allowed(self.type, RULE_TYPES, "type")


@dataclass(kw_only=True)
class RulesKeyOption(Options):
    """Options of ``delete``."""

    key: str | None = None

    def validate(self) -> None:
        validate_required(self.key, "key")


@dataclass(kw_only=True)
class RulesShowOption(RulesKeyOption):
    #: Include the activations of the rule in every quality profile.
    actives: bool | None = None


@dataclass(kw_only=True)
class RulesListOption(PaginationArgs):
    asc: bool | None = None
    available_since: str | None = param("available_since")
    qprofile: str | None = None
    sort: str | None = param("s")

    def validate(self) -> None:
        super().validate()
        validate_allowed(self.sort, RULE_SORT_FIELDS, "sort")


@dataclass(kw_only=True)
class RulesRepositoriesOption(Options):
    language: str | None = None
    query: str | None = param("q")


@dataclass(kw_only=True)
class RulesTagsOption(Options):
    page_size: int | None = param("ps")
    query: str | None = param("q")

    def validate(self) -> None:
        validate_range(self.page_size, 1, MAX_TAGS_PAGE_SIZE, "page_size")


@dataclass(kw_only=True)
class RulesUpdateOption(RulesKeyOption):
    name: str | None = None
    markdown_description: str | None = None
    markdown_note: str | None = param("markdown_note")
    impacts: dict[str, str] | None = None
    params: dict[str, str] | None = None
    remediation_fn_base_effort: str | None = param("remediation_fn_base_effort")
    remediation_fn_type: str | None = param("remediation_fn_type")
    # The server spells this one "fy".
    remediation_fy_gap_multiplier: str | None = param("remediation_fy_gap_multiplier")
    severity: str | None = None
    status: str | None = None
    tags: list[str] | None = None

    def validate(self) -> None:
        super().validate()
        validate_impacts(self.impacts)
        validate_allowed(self.remediation_fn_type, REMEDIATION_FUNCTIONS, "remediation_fn_type")
        validate_allowed(self.severity, SEVERITIES, "severity")
        validate_allowed(self.status, RULE_STATUSES, "status")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class RulesService(Service):

    def app(self) -> RulesApp:
        """Metadata for the rules page: languages, repositories, statuses."""
        return self._get("rules/app")

    def create(self, opt: RulesCreateOption) -> RulesCreate:
        return self._post("rules/create", opt, expect="json")

    def delete(self, opt: RulesKeyOption) -> None:
        """Delete a custom rule. Requires 'Administer Quality Profiles'."""
        self._post("rules/delete", opt)

    def list(self, opt: RulesListOption | None = None) -> bytes:
        """Every rule as a protobuf stream, for scanners."""
        return self._get("rules/list", opt or RulesListOption(), expect="bytes")

    def repositories(self, opt: RulesRepositoriesOption | None = None) -> RulesRepositories:
        return self._get("rules/repositories", opt or RulesRepositoriesOption())

    def search(self, opt: RulesSearchOption | None = None) -> RulesSearch:
        return self._get("rules/search", opt or RulesSearchOption())

    def show(self, opt: RulesShowOption) -> RulesShow:
        return self._get("rules/show", opt)

    def tags(self, opt: RulesTagsOption | None = None) -> RulesTags:
        return self._get("rules/tags", opt or RulesTagsOption())

    def update(self, opt: RulesUpdateOption) -> RulesUpdate:
        return self._post("rules/update", opt, expect="json")
