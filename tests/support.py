"""Helpers shared by the unit tests."""

from urllib.parse import parse_qs, urlparse

BASE = "https://sonar.example.com"


def query(request) -> dict[str, str]:
    """Query parameters of a mocked request, case preserved, one value per key."""
    return {k: v[-1] for k, v in parse_qs(urlparse(request.url).query, keep_blank_values=True).items()}


def form(request) -> dict[str, str]:
    """Form body of a mocked POST, case preserved, one value per key."""
    return {k: v[-1] for k, v in parse_qs(request.text or "", keep_blank_values=True).items()}


def form_lists(request) -> dict[str, list[str]]:
    """Form body keeping repeated keys."""
    return parse_qs(request.text or "", keep_blank_values=True)
