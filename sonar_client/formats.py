"""Conversions between Python containers and SonarQube's separated strings.

SonarQube takes list parameters as ``a,b,c`` and a few map parameters as
``KEY=VALUE;KEY=VALUE`` (e.g. ``impacts=MAINTAINABILITY=HIGH;SECURITY=LOW``).
"""

from collections.abc import Iterable, Mapping


def list_to_separated(items: Iterable[str], separator: str = ",") -> str:
    return separator.join(str(i) for i in items)


def separated_to_list(value: str, separator: str = ",") -> list[str]:
    if not value:
        return []
    return value.split(separator)


def map_to_separated(mapping: Mapping[str, str], entry_sep: str = ";", kv_sep: str = "=") -> str:
    return entry_sep.join(f"{k}{kv_sep}{v}" for k, v in mapping.items())


def separated_to_map(value: str, entry_sep: str = ";", kv_sep: str = "=") -> dict[str, str]:
    """Parse ``a=1;b=2`` into a dict. Entries without *kv_sep* are ignored."""
    result: dict[str, str] = {}
    if not value:
        return result
    for entry in value.split(entry_sep):
        key, sep, val = entry.partition(kv_sep)
        if sep:
            result[key] = val
    return result
