"""Push: server-sent events stream consumed by SonarLint."""

from collections.abc import Iterator
from dataclasses import dataclass

import requests

from sonar_client.options import Options
from sonar_client.services.base import Service
from sonar_client.validation import validate_languages, validate_required


@dataclass(kw_only=True)
class PushSonarlintEventsOption(Options):
    languages: list[str] | None = None
    project_keys: list[str] | None = None

    def validate(self) -> None:
        validate_required(self.languages, "languages")
        validate_languages(self.languages)
        validate_required(self.project_keys, "project_keys")


class PushService(Service):

    def sonarlint_events(self, opt: PushSonarlintEventsOption) -> requests.Response:
        """Open the event stream. The caller must close the returned response."""
        return self._get("push/sonarlint_events", opt, expect="stream")

    def iter_sonarlint_events(self, opt: PushSonarlintEventsOption) -> Iterator[dict[str, str]]:
        """Open the stream now and return an iterator of ``{"event": ..., "data": ...}``.

        Options are checked and the request is sent before this returns; the
        response is closed once the iterator is exhausted or discarded.
        """
        response = self.sonarlint_events(opt)
        response.encoding = response.encoding or "utf-8"
        return _closing_events(response)


def _closing_events(response: requests.Response) -> Iterator[dict[str, str]]:
    try:
        yield from parse_event_stream(response.iter_lines(decode_unicode=True))
    finally:
        response.close()


def parse_event_stream(lines) -> Iterator[dict[str, str]]:
    """Group ``field: value`` lines into events; a blank line ends an event."""
    event: dict[str, str] = {}
    for line in lines:
        if not line:
            if event:
                yield event
                event = {}
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        value = value[1:] if value.startswith(" ") else value
        event[name] = f"{event[name]}\n{value}" if name in event else value
    if event:
        yield event
