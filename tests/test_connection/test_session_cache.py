"""Tests for the per-database session cache."""

from odoo_bridge.connection.session_cache import SessionCache


class TestSessionCache:

    def test_empty(self):
        cache = SessionCache()
        assert cache.get("odoo") is None
        assert len(cache) == 0
        assert "odoo" not in cache

    def test_put_and_get(self):
        cache = SessionCache()
        cache.put("odoo", 2)
        assert cache.get("odoo") == 2
        assert "odoo" in cache

    def test_databases_are_independent(self):
        cache = SessionCache()
        cache.put("acme", 7)
        cache.put("globex", 9)
        assert cache.get("acme") == 7
        assert cache.get("globex") == 9
        assert sorted(cache.databases()) == ["acme", "globex"]

    def test_last_write_wins(self):
        cache = SessionCache()
        cache.put("acme", 7)
        cache.put("acme", 8)
        assert cache.get("acme") == 8
        assert len(cache) == 1

    def test_instances_do_not_share_state(self):
        a, b = SessionCache(), SessionCache()
        a.put("acme", 7)
        assert b.get("acme") is None
