"""Helpers for turning raw search-box input into index terms."""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import quote

_SEPARATOR = re.compile(r"[^A-Za-z0-9]+")
_ENCODED_SEPARATOR = "%26"


def tokenize(raw: str) -> list[str]:
    """Split on runs of non-alphanumeric characters and lowercase the rest."""

    if not raw:
        return []
    return [fragment.lower() for fragment in _SEPARATOR.split(raw) if fragment]


def limit_terms(terms: Iterable[str], max_terms: int, max_bytes: int) -> list[str]:
    """Drop repeated terms and cap the list to what the index accepts.

    ``max_bytes`` bounds the percent-encoded ``<mode>_<term>`` query as it is
    sent in the ``q`` parameter, where each ``&`` separator becomes ``%26``.
    """

    seen: set[str] = set()
    limited: list[str] = []
    used_bytes = 0
    for term in terms:
        if term in seen:
            continue
        if len(limited) >= max_terms:
            break
        cost = len(quote(term, safe="")) + 2
        if limited:
            cost += len(_ENCODED_SEPARATOR)
        if used_bytes + cost > max_bytes:
            break
        seen.add(term)
        limited.append(term)
        used_bytes += cost
    return limited


__all__ = ["tokenize", "limit_terms"]
