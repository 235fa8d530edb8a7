from __future__ import annotations

import pytest

from devrunner.runner.errors import EmptyCommandError
from devrunner.runner.types import CommandSpec, Endpoint


class TestEndpoint:
    def test_equality_by_value(self):
        assert Endpoint("http://localhost:4000/") == Endpoint("http://localhost:4000/")
        assert len({Endpoint("http://localhost:4000/"), Endpoint("http://localhost:4000/")}) == 1

    @pytest.mark.parametrize("url", ["", "localhost:4000", "/graphql", "http://"])
    def test_rejects_partial_urls(self, url):
        with pytest.raises(ValueError):
            Endpoint(url)

    @pytest.mark.parametrize("host, port, path, expected", [
        ("127.0.0.1", 4000, "/", "http://127.0.0.1:4000/"),
        ("0.0.0.0", 4000, "/graphql", "http://127.0.0.1:4000/graphql"),
        ("::", 4000, "/", "http://[::1]:4000/"),
        ("fe80::1", 8080, "query", "http://[fe80::1]:8080/query"),
        ("localhost", 3000, "/", "http://localhost:3000/"),
    ])
    def test_from_socket(self, host, port, path, expected):
        assert Endpoint.from_socket(host, port, path).url == expected

    def test_origin(self):
        assert Endpoint("http://127.0.0.1:4000/graphql?x=1").origin() == Endpoint("http://127.0.0.1:4000/")

    def test_str(self):
        assert str(Endpoint("http://127.0.0.1:4000/graphql")) == "http://127.0.0.1:4000/graphql"


class TestCommandSpec:
    def test_parse_splits_on_whitespace(self):
        spec = CommandSpec.parse("  npm\trun   start\n")

        assert spec == CommandSpec("npm", ("run", "start"))
        assert spec.argv == ("npm", "run", "start")

    @pytest.mark.parametrize("line", ["", "   "])
    def test_parse_blank(self, line):
        with pytest.raises(EmptyCommandError):
            CommandSpec.parse(line)
