"""Tests for sonar_client/services/push.py"""

import pytest

from sonar_client.services.push import PushSonarlintEventsOption, parse_event_stream
from sonar_client.validation import InvalidValueError, MissingRequiredError

from support import BASE, query

STREAM = (
    ": keep-alive\n"
    "event: IssueChanged\n"
    'data: {"projectKey": "my-app", "issues": [{"issueKey": "AX-1"}]}\n'
    "\n"
    "event: RuleSetChanged\n"
    "data: {\"projects\": [\"my-app\"],\n"
    "data: \"activatedRules\": []}\n"
    "\n"
)


def test_parse_event_stream():
    events = list(parse_event_stream(STREAM.splitlines()))
    assert events == [
        {"event": "IssueChanged", "data": '{"projectKey": "my-app", "issues": [{"issueKey": "AX-1"}]}'},
        {"event": "RuleSetChanged", "data": '{"projects": ["my-app"],\n"activatedRules": []}'},
    ]


def test_parse_event_stream_flushes_last_event():
    assert list(parse_event_stream(["event: Ping", "data:ok"])) == [{"event": "Ping", "data": "ok"}]


def test_parse_event_stream_ignores_blank_runs():
    assert list(parse_event_stream(["", "", ": comment", ""])) == []


def test_sonarlint_events_returns_open_response(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/push/sonarlint_events", text=STREAM)
    response = client.push.sonarlint_events(PushSonarlintEventsOption(languages=["java", "py"], project_keys=["my-app"]))
    try:
        assert response.status_code == 200
    finally:
        response.close()
    assert query(adapter.last_request) == {"languages": "java,py", "projectKeys": "my-app"}
    assert adapter.last_request.headers["Accept"] == "text/event-stream"


def test_iter_sonarlint_events(client, requests_mock):
    requests_mock.get(f"{BASE}/api/push/sonarlint_events", text=STREAM)
    events = list(client.push.iter_sonarlint_events(
        PushSonarlintEventsOption(languages=["java"], project_keys=["my-app"])
    ))
    assert [e["event"] for e in events] == ["IssueChanged", "RuleSetChanged"]


@pytest.mark.parametrize("opt, error", [
    (PushSonarlintEventsOption(project_keys=["my-app"]), MissingRequiredError),
    (PushSonarlintEventsOption(languages=["java"]), MissingRequiredError),
    (PushSonarlintEventsOption(languages=["cobra"], project_keys=["my-app"]), InvalidValueError),
])
def test_sonarlint_events_validation(client, opt, error):
    with pytest.raises(error):
        client.push.sonarlint_events(opt)


def test_iter_sonarlint_events_rejects_options_before_iteration(client, requests_mock):
    with pytest.raises(MissingRequiredError):
        client.push.iter_sonarlint_events(PushSonarlintEventsOption(languages=["java"]))
    assert not requests_mock.called


def test_iter_sonarlint_events_sends_request_on_call(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/push/sonarlint_events", text=STREAM)
    events = client.push.iter_sonarlint_events(PushSonarlintEventsOption(languages=["java"], project_keys=["my-app"]))
    assert adapter.call_count == 1
    assert next(events)["event"] == "IssueChanged"
