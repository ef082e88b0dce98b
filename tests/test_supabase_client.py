from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError

from gpdesk_app.core import supabase_client
from gpdesk_app.core.supabase_client import SupabaseProvider, view


class FakeRequest:
    def __init__(self, client, name):
        self.client = client
        self.calls = [("table", name)]

    def __getattr__(self, attr):
        def record(*args, **kwargs):
            self.calls.append((attr, args, kwargs))
            return self

        return record

    def execute(self):
        self.client.executed.append(self.calls)
        if self.client.error:
            raise APIError({"message": "boom", "code": "42P01"})
        return SimpleNamespace(data=list(self.client.rows))


class FakeClient:
    def __init__(self, rows=(), error=False):
        self.rows = rows
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeRequest(self, name)


class DummyProvider(SupabaseProvider):
    def __init__(self, client, ttl=300.0):
        self.url = "https://example.supabase.co"
        self.client = client
        self._cache = {}
        self._cache_ttl = ttl


def test_view_query_is_immutable_builder():
    base = view("issues", ["clave", "estado"])
    q = base.eq("proyecto", "ACME").where("in", "clave", ["A-1", "A-2"]).ordered("clave", descending=True).limited(5)
    assert base.filters == ()
    assert q.columns == "clave,estado"
    assert q.filters == (("eq", "proyecto", "ACME"), ("in", "clave", ("A-1", "A-2")))
    assert q.payload()["filters"][1] == ["in", "clave", ["A-1", "A-2"]]
    with pytest.raises(ValueError):
        base.where("like", "clave", "A%")


def test_fetch_builds_request_and_caches():
    client = FakeClient(rows=[{"clave": "A-1"}])
    provider = DummyProvider(client)
    q = view("issues").eq("proyecto", "ACME").ordered("clave").limited(3)
    assert provider.fetch(q) == [{"clave": "A-1"}]
    assert provider.fetch(q) == [{"clave": "A-1"}]
    assert len(client.executed) == 1
    names = [c[0] for c in client.executed[0]]
    assert names == ["table", "select", "eq", "order", "limit"]

    provider.clear_cache()
    provider.fetch(q)
    assert len(client.executed) == 2


def test_fetch_one_limits_to_single_row():
    provider = DummyProvider(FakeClient(rows=[{"id": 1}, {"id": 2}]))
    assert provider.fetch_one(view("proyectos").eq("id", 1)) == {"id": 1}


def test_api_errors_become_runtime_errors():
    provider = DummyProvider(FakeClient(error=True))
    with pytest.raises(RuntimeError, match="issues"):
        provider.fetch(view("issues"))


def test_expired_entries_are_evicted(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(supabase_client.time, "time", lambda: clock[0])
    client = FakeClient(rows=[{"clave": "A-1"}])
    provider = DummyProvider(client, ttl=60.0)
    provider.fetch(view("issues").eq("proyecto", "OLD"))
    provider.fetch(view("issues").eq("proyecto", "ACME"))
    assert len(provider._cache) == 2

    clock[0] += 61
    provider.fetch(view("issues").eq("proyecto", "ACME"))
    assert len(provider._cache) == 1
    assert len(client.executed) == 3
