"""Supabase (PostgREST) client wrapper for read-only view queries."""

from __future__ import annotations

import hashlib
import json
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

from .config import PROVIDER_CACHE_TTL_SECONDS

_FILTER_OPS = frozenset({"eq", "gte", "lt", "in"})


@dataclass(frozen=True, slots=True)
class ViewQuery:
    """Description of a single read against a table or view."""

    view: str
    columns: str = "*"
    filters: tuple[tuple[str, str, Any], ...] = ()
    order_by: str | None = None
    descending: bool = False
    limit: int | None = None
    single: bool = False

    def where(self, op: str, column: str, value: Any) -> ViewQuery:
        if op not in _FILTER_OPS:
            raise ValueError(f"Unsupported filter operator: {op}")
        if op == "in":
            value = tuple(value)
        return replace(self, filters=self.filters + ((op, column, value),))

    def eq(self, column: str, value: Any) -> ViewQuery:
        return self.where("eq", column, value)

    def ordered(self, column: str, *, descending: bool = False) -> ViewQuery:
        return replace(self, order_by=column, descending=descending)

    def limited(self, limit: int) -> ViewQuery:
        return replace(self, limit=limit)

    def payload(self) -> dict[str, Any]:
        return {
            "view": self.view,
            "columns": self.columns,
            "filters": [[op, column, list(value) if isinstance(value, tuple) else value] for op, column, value in self.filters],
            "order_by": self.order_by,
            "descending": self.descending,
            "limit": self.limit,
            "single": self.single,
        }


class SupabaseProvider:
    def __init__(self, url: str, key: str, *, cache_ttl: float = PROVIDER_CACHE_TTL_SECONDS):
        self.url = url.rstrip("/")
        self.client: Client = create_client(self.url, key)
        # Simple in-memory cache: {(hash): (timestamp, rows)}
        self._cache: dict[str, tuple[float, list[dict[str, Any]]]] = {}
        self._cache_ttl = cache_ttl

    def clear_cache(self) -> None:
        """Reset the in-memory query cache."""
        cache = getattr(self, "_cache", None)
        if isinstance(cache, dict):
            cache.clear()

    def _cache_key(self, query: ViewQuery) -> str:
        return hashlib.sha256(json.dumps(query.payload(), sort_keys=True, default=str).encode()).hexdigest()

    def _evict_expired(self, cache: dict[str, tuple[float, list[dict[str, Any]]]], now: float) -> None:
        expired = [k for k, (stamp, _) in cache.items() if now - stamp >= self._cache_ttl]
        for k in expired:
            del cache[k]

    def fetch(self, query: ViewQuery) -> list[dict[str, Any]]:
        key = self._cache_key(query)
        now = time.time()
        cache = getattr(self, "_cache", {})
        self._evict_expired(cache, now)
        cached = cache.get(key)
        if cached:
            return cached[1]

        request = self.client.table(query.view).select(query.columns)
        for op, column, value in query.filters:
            if op == "eq":
                request = request.eq(column, value)
            elif op == "gte":
                request = request.gte(column, value)
            elif op == "lt":
                request = request.lt(column, value)
            elif op == "in":
                request = request.in_(column, list(value))
        if query.order_by:
            request = request.order(query.order_by, desc=query.descending)
        limit = 1 if query.single else query.limit
        if limit is not None:
            request = request.limit(limit)
        try:
            response = request.execute()
        except APIError as exc:
            raise RuntimeError(f"Query on {query.view} failed: {exc.message or exc}") from exc

        data = getattr(response, "data", None) or []
        rows: list[dict[str, Any]] = [r for r in data if isinstance(r, dict)]
        if query.single:
            rows = rows[:1]
        cache[key] = (now, rows)
        return rows

    def fetch_one(self, query: ViewQuery) -> dict[str, Any] | None:
        rows = self.fetch(replace(query, single=True, limit=None))
        return rows[0] if rows else None


def view(name: str, columns: str | Sequence[str] = "*") -> ViewQuery:
    if not isinstance(columns, str):
        columns = ",".join(columns)
    return ViewQuery(view=name, columns=columns)
