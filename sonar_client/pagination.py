"""Collect every page of a paginated service method.

Usage:
    result = collect_all(client.issues.search, IssuesSearchOption(components=["my-app"]))
    result["issues"]    # every issue, across pages
    result["paging"]    # {"pageIndex": 1, "pageSize": <n>, "total": <n>}
"""

import logging
import warnings
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from sonar_client.options import Options, PaginationArgs
from sonar_client.validation import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

# SonarQube refuses to page past the 10 000th result of an Elasticsearch query.
PAGINATION_WARNING_THRESHOLD = 10_000


def is_paginated(option_cls: type) -> bool:
    """True for option structs built on `PaginationArgs`.

    Actions that merely carry ``p``/``ps`` fields (ALM repository listings,
    rules search) page under their own limits and are not walked.
    """
    return isinstance(option_cls, type) and issubclass(option_cls, PaginationArgs)


def collect_all(
    fetch: Callable[[Any], dict],
    opt: Options,
    results_key: str | None = None,
    page_size: int | None = None,
) -> dict:
    """Call *fetch* page by page and merge the result lists.

    Args:
        fetch:       Service method taking a paginated option struct.
        opt:         Filters; its ``page`` and ``page_size`` are overridden.
        results_key: Response field holding the items. Defaults to the first
                     list-valued field of the first page.
        page_size:   Defaults to the largest size the option accepts.

    Returns:
        The first page's response with *results_key* holding every item and
        ``paging`` rewritten to describe the merged result.
    """
    size = page_size or getattr(opt, "MAX_PAGE_SIZE", MAX_PAGE_SIZE)
    page = 1
    first = fetch(replace(opt, page=page, page_size=size))
    key = results_key or _guess_results_key(first)
    items = list(first.get(key) or [])
    total = _total(first)

    if total > PAGINATION_WARNING_THRESHOLD:
        warn_pagination_cap(total)

    while len(items) < total:
        page += 1
        batch = fetch(replace(opt, page=page, page_size=size)).get(key) or []
        if not batch:
            break
        items.extend(batch)
        logger.debug("Fetched page %d (%d/%d %s)", page, len(items), total, key)

    merged = dict(first)
    merged[key] = items
    merged["paging"] = {"pageIndex": 1, "pageSize": len(items), "total": total}
    return merged


def warn_pagination_cap(total: int) -> None:
    warnings.warn(
        f"Result set exceeds {PAGINATION_WARNING_THRESHOLD} items (total={total}). "
        "SonarQube caps pagination at 10 000, some results may be missing. "
        "Consider narrowing the query to reduce the result set.",
        UserWarning,
        stacklevel=3,
    )


def _guess_results_key(response: dict) -> str:
    for name, value in response.items():
        if isinstance(value, list):
            return name
    raise ValueError(f"No list field in paginated response: {sorted(response)}")


def _total(response: dict) -> int:
    paging = response.get("paging") or {}
    if "total" in paging:
        return int(paging["total"])
    # Older actions report the total at the top level
    return int(response.get("total") or 0)
