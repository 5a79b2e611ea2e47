"""
Unit tests for RouteTable.
"""

import threading

import pytest

from servo.http.response import ok
from servo.http.routes import RouteTable, is_wildcard_key, route_key, validate_route_key


def first(request, config):
    return ok("first")


def second(request, config):
    return ok("second")


class TestRouteKeys:
    """Tests for route key helpers."""

    def test_route_key(self):
        assert route_key("GET", "/users/{}") == "GET /users/{}"

    def test_is_wildcard_key(self):
        assert is_wildcard_key("GET /static/{}")
        assert is_wildcard_key("GET /{}")
        assert not is_wildcard_key("GET /static")

    @pytest.mark.parametrize("key", [
        "GET /",
        "GET /a",
        "GET /a/b/c",
        "GET /a/{}",
        "GET /{}",
        "DELETE /users/{}",
    ])
    def test_valid_keys(self, key):
        """Test that well-formed keys pass validation."""
        validate_route_key(key)

    @pytest.mark.parametrize("key", [
        "/a",            # no method
        " /a",           # empty method
        "GET a",         # path without leading slash
        "GET /a/",       # trailing slash
        "GET /{}/a",     # wildcard not final
        "GET /a/x{}",    # wildcard not a whole segment
    ])
    def test_invalid_keys(self, key):
        """Test that malformed keys are rejected."""
        with pytest.raises(ValueError):
            validate_route_key(key)


class TestRouteTable:
    """Tests for RouteTable registration and lookup."""

    def test_add_and_get(self):
        """Test adding and retrieving a handler."""
        routes = RouteTable()
        routes.add("GET /a", first)

        assert routes.contains("GET /a")
        assert "GET /a" in routes
        assert routes.get("GET /a") is first
        assert routes.get("GET /b") is None

    def test_readd_replaces_handler(self):
        """Test that re-adding a key replaces the handler without growing."""
        routes = RouteTable({"GET /a": first})
        routes.add("GET /a", second)

        assert len(routes) == 1
        assert routes.get("GET /a") is second

    def test_add_rejects_bad_key(self):
        """Test that add() validates keys."""
        routes = RouteTable()

        with pytest.raises(ValueError):
            routes.add("GET /a/", first)
        assert len(routes) == 0

    def test_constructor_validates(self):
        """Test that initial routes are validated too."""
        with pytest.raises(ValueError):
            RouteTable({"nope": first})

    def test_route_decorator(self):
        """Test decorator registration returns the handler unchanged."""
        routes = RouteTable()

        @routes.route("GET /deco")
        def deco(request, config):
            return ok("deco")

        assert routes.get("GET /deco") is deco
        assert deco(None, None).body == b"deco"

    def test_keys_sorted_and_iteration(self):
        """Test keys() and iteration are sorted."""
        routes = RouteTable({"GET /b": first, "GET /a": second})

        assert routes.keys() == ["GET /a", "GET /b"]
        assert list(routes) == ["GET /a", "GET /b"]

    def test_as_mapping_is_read_only(self):
        """Test the mapping view cannot be mutated."""
        routes = RouteTable({"GET /a": first})
        view = routes.as_mapping()

        assert view["GET /a"] is first
        with pytest.raises(TypeError):
            view["GET /b"] = second

    def test_repr(self):
        assert repr(RouteTable({"GET /a": first})) == "RouteTable(['GET /a'])"

    def test_print_routes(self, capsys):
        """Test the debug listing."""
        RouteTable({"GET /static/{}": first}).print_routes()

        out = capsys.readouterr().out
        assert "Registered Routes:" in out
        assert "GET      /static/{}" in out


class TestSnapshot:
    """Tests for snapshot isolation."""

    def test_snapshot_does_not_see_later_adds(self):
        """Test that a snapshot is fixed at the time it was taken."""
        routes = RouteTable({"GET /a": first})
        snap = routes.snapshot()

        routes.add("GET /b", second)

        assert "GET /b" in routes
        assert "GET /b" not in snap
        assert len(snap) == 1

    def test_adding_to_snapshot_leaves_table(self):
        """Test that a snapshot is independent in the other direction too."""
        routes = RouteTable({"GET /a": first})
        snap = routes.snapshot()

        snap.add("GET /c", second)

        assert "GET /c" not in routes

    def test_concurrent_adds(self):
        """Test that concurrent adds from many threads all land."""
        routes = RouteTable()

        def register(n):
            for i in range(50):
                routes.add(f"GET /t{n}/r{i}", first)

        threads = [threading.Thread(target=register, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(routes) == 8 * 50
