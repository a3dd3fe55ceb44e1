"""Shared plumbing for every service: validate -> encode -> send -> decode."""

from typing import TYPE_CHECKING, Any

from sonar_client.options import Options
from sonar_client.validation import require_options

if TYPE_CHECKING:
    from sonar_client.client import SonarClient

# Passed by actions that take no parameters at all.
NO_OPTIONS: Any = object()


class Service:
    """One namespaced group of API actions (one SonarQube web service)."""

    def __init__(self, client: "SonarClient") -> None:
        self._client = client

    def _get(self, path: str, opt: Options | None = NO_OPTIONS, *, expect: str = "json") -> Any:
        return self._send("GET", path, opt, expect)

    def _post(self, path: str, opt: Options | None = NO_OPTIONS, *, expect: str = "none") -> Any:
        return self._send("POST", path, opt, expect)

    def _send(self, method: str, path: str, opt: Options | None, expect: str) -> Any:
        if opt is NO_OPTIONS:
            params: dict[str, str] = {}
        else:
            require_options(opt)
            opt.validate()
            params = opt.to_params()
        return self._client.request(method, f"/api/{path}", params, expect=expect)
