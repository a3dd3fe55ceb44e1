"""Tests for the code metrics services: measures, metrics, components and
duplications."""

import pytest

from sonar_client.services.components import (
    ComponentsSearchOption,
    ComponentsSearchProjectsOption,
    ComponentsShowOption,
    ComponentsSuggestionsOption,
    ComponentsTreeOption,
)
from sonar_client.services.duplications import DuplicationsShowOption
from sonar_client.services.measures import (
    MeasuresComponentOption,
    MeasuresComponentTreeOption,
    MeasuresSearchHistoryOption,
    MeasuresSearchOption,
)
from sonar_client.services.metrics import MetricsSearchOption
from sonar_client.validation import (
    InvalidFormatError,
    InvalidValueError,
    MissingRequiredError,
    OutOfRangeError,
)

from support import BASE, query


# ---------------------------------------------------------------------------
# measures
# ---------------------------------------------------------------------------

def test_component_measures(client, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/measures/component",
        json={"component": {"key": "my-app", "measures": [{"metric": "coverage", "value": "81.5"}]}},
    )
    data = client.measures.component(MeasuresComponentOption(
        component="my-app", metric_keys=["coverage", "ncloc"], additional_fields=["period"], branch="main",
    ))
    assert data["component"]["measures"][0]["value"] == "81.5"
    assert query(adapter.last_request) == {
        "component": "my-app", "metricKeys": "coverage,ncloc", "additionalFields": "period", "branch": "main",
    }


@pytest.mark.parametrize("opt, field", [
    (MeasuresComponentOption(metric_keys=["coverage"]), "component"),
    (MeasuresComponentOption(component="my-app"), "metric_keys"),
])
def test_component_measures_required(client, opt, field):
    with pytest.raises(MissingRequiredError) as info:
        client.measures.component(opt)
    assert info.value.field == field


def test_component_tree(client, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/measures/component_tree",
        json={"baseComponent": {"key": "my-app"}, "components": [], "paging": {"total": 0}},
    )
    client.measures.component_tree(MeasuresComponentTreeOption(
        component="my-app",
        metric_keys=["ncloc"],
        strategy="leaves",
        qualifiers=["FIL"],
        sort=["metric", "name"],
        metric_sort="ncloc",
        ascending=False,
    ))
    assert query(adapter.last_request) == {
        "component": "my-app",
        "metricKeys": "ncloc",
        "strategy": "leaves",
        "qualifiers": "FIL",
        "s": "metric,name",
        "metricSort": "ncloc",
        "asc": "false",
    }


def test_component_tree_strategy(client):
    with pytest.raises(InvalidValueError):
        client.measures.component_tree(MeasuresComponentTreeOption(
            component="my-app", metric_keys=["ncloc"], strategy="descendants",
        ))


def test_search(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/measures/search", json={"measures": []})
    client.measures.search(MeasuresSearchOption(metric_keys=["alert_status"], project_keys=["a", "b"]))
    assert query(adapter.last_request) == {"metricKeys": "alert_status", "projectKeys": "a,b"}


def test_search_history(client, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/measures/search_history",
        json={"measures": [{"metric": "coverage", "history": [{"date": "2024-01-01T00:00:00+0000", "value": "80"}]}]},
    )
    data = client.measures.search_history(MeasuresSearchHistoryOption(
        component="my-app", metrics=["coverage"], from_="2024-01-01",
    ))
    assert data["measures"][0]["history"][0]["value"] == "80"
    assert query(adapter.last_request) == {"component": "my-app", "metrics": "coverage", "from": "2024-01-01"}


def test_search_history_bad_date(client):
    with pytest.raises(InvalidFormatError):
        client.measures.search_history(MeasuresSearchHistoryOption(
            component="my-app", metrics=["coverage"], to="tomorrow",
        ))


# ---------------------------------------------------------------------------
# metrics
# ---------------------------------------------------------------------------

def test_metrics_search(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/metrics/search", json={"metrics": [], "total": 0, "p": 1, "ps": 100})
    client.metrics.search(MetricsSearchOption(page=2, page_size=100))
    assert query(adapter.last_request) == {"p": "2", "ps": "100"}


def test_metrics_types(client, requests_mock):
    requests_mock.get(f"{BASE}/api/metrics/types", json={"types": ["INT", "PERCENT"]})
    assert client.metrics.types()["types"] == ["INT", "PERCENT"]


# ---------------------------------------------------------------------------
# components
# ---------------------------------------------------------------------------

def test_components_search(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/components/search", json={"components": [], "paging": {"total": 0}})
    client.components.search(ComponentsSearchOption(qualifiers=["TRK"], query="ap"))
    assert query(adapter.last_request) == {"qualifiers": "TRK", "q": "ap"}


@pytest.mark.parametrize("opt, error", [
    (ComponentsSearchOption(), MissingRequiredError),
    (ComponentsSearchOption(qualifiers=["FIL"]), InvalidValueError),
    (ComponentsSearchOption(qualifiers=["TRK"], query="a"), OutOfRangeError),
])
def test_components_search_validation(client, opt, error):
    with pytest.raises(error):
        client.components.search(opt)


def test_search_projects_filter(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/components/search_projects", json={"components": [], "facets": []})
    client.components.search_projects(ComponentsSearchProjectsOption(
        filter="coverage > 80 and ncloc < 10000", facets=["languages"], sort="coverage", ascending=True,
    ))
    assert query(adapter.last_request) == {
        "filter": "coverage > 80 and ncloc < 10000", "facets": "languages", "s": "coverage", "asc": "true",
    }


def test_search_projects_rejects_unknown_sort(client):
    with pytest.raises(InvalidValueError):
        client.components.search_projects(ComponentsSearchProjectsOption(sort="bugs"))


def test_show(client, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/components/show",
        json={"component": {"key": "my-app:src"}, "ancestors": [{"key": "my-app"}]},
    )
    assert client.components.show(ComponentsShowOption(component="my-app:src"))["ancestors"][0]["key"] == "my-app"
    assert query(adapter.last_request) == {"component": "my-app:src"}


def test_suggestions_recently_browsed_limit(client):
    with pytest.raises(OutOfRangeError):
        client.components.suggestions(ComponentsSuggestionsOption(recently_browsed=[f"p{i}" for i in range(51)]))


def test_suggestions(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/components/suggestions", json={"results": []})
    client.components.suggestions(ComponentsSuggestionsOption(search="sonar", more="TRK"))
    assert query(adapter.last_request) == {"s": "sonar", "more": "TRK"}


def test_tree(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/components/tree", json={"components": [], "paging": {"total": 0}})
    client.components.tree(ComponentsTreeOption(component="my-app", qualifiers=["DIR", "FIL"], strategy="children"))
    assert query(adapter.last_request) == {"component": "my-app", "qualifiers": "DIR,FIL", "strategy": "children"}


@pytest.mark.parametrize("opt, error", [
    (ComponentsTreeOption(component="my-app", query="ab"), OutOfRangeError),
    (ComponentsTreeOption(component="my-app", sort=["size"]), InvalidValueError),
    (ComponentsTreeOption(component="my-app", branch="main", pull_request="1"), InvalidValueError),
])
def test_tree_validation(client, opt, error):
    with pytest.raises(error):
        client.components.tree(opt)


# ---------------------------------------------------------------------------
# duplications
# ---------------------------------------------------------------------------

def test_duplications_show(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/duplications/show", json={"duplications": [], "files": {}})
    client.duplications.show(DuplicationsShowOption(key="my-app:src/a.py", pull_request="7"))
    assert query(adapter.last_request) == {"key": "my-app:src/a.py", "pullRequest": "7"}


def test_duplications_show_requires_key(client):
    with pytest.raises(MissingRequiredError):
        client.duplications.show(DuplicationsShowOption())
