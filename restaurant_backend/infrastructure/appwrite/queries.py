"""Appwrite query strings (server-side filter / order / pagination).

Appwrite 1.5+ takes queries as JSON objects passed in repeated
queries[] parameters, e.g. {"method":"equal","attribute":"isActive","values":[true]}.
"""

from __future__ import annotations

import json
from typing import Any


def _query(method: str, attribute: str | None = None, values: Any = None) -> str:
    payload: dict[str, Any] = {"method": method}
    if attribute is not None:
        payload["attribute"] = attribute
    if values is not None:
        payload["values"] = values if isinstance(values, list) else [values]
    return json.dumps(payload, separators=(",", ":"))


class Query:
    """Builders for Appwrite query strings; matches the SDK's Query helpers."""

    @staticmethod
    def equal(attribute: str, value: Any) -> str:
        return _query("equal", attribute, value)

    @staticmethod
    def not_equal(attribute: str, value: Any) -> str:
        return _query("notEqual", attribute, value)

    @staticmethod
    def less_than_equal(attribute: str, value: Any) -> str:
        return _query("lessThanEqual", attribute, value)

    @staticmethod
    def greater_than_equal(attribute: str, value: Any) -> str:
        return _query("greaterThanEqual", attribute, value)

    @staticmethod
    def search(attribute: str, value: str) -> str:
        return _query("search", attribute, value)

    @staticmethod
    def order_asc(attribute: str) -> str:
        return _query("orderAsc", attribute)

    @staticmethod
    def order_desc(attribute: str) -> str:
        return _query("orderDesc", attribute)

    @staticmethod
    def limit(n: int) -> str:
        return _query("limit", values=n)

    @staticmethod
    def offset(n: int) -> str:
        return _query("offset", values=n)


def parse_query(raw: str) -> dict[str, Any]:
    """Decode a query string back to its dict form (used by fakes and logging)."""
    return json.loads(raw)
