"""
Tests for request_builder.py
Logic testing: Decision/Branch, Boundary Value, Path coverage
"""
import asyncio

import pytest

from rest_api_client.core.request_builder import (
    ConfigShape,
    NoConfigShape,
    ParamsDataConfigShape,
    PayloadConfigShape,
    classify_args,
    config_from_shape,
    parse_args,
    split_args,
)

BASE = "https://api.example.com/v1/"


async def _value(value):
    await asyncio.sleep(0)
    return value


async def _fail():
    raise ConnectionError("token service down")


class TestSplitArgs:
    """Tests for split_args."""

    # Path: slugs only
    def test_slugs_only(self):
        assert split_args(["a", ["b"]]) == (("a", ["b"]), ())

    # Path: trailing mappings and None form the config run
    def test_trailing_run(self):
        slugs, configs = split_args(["a", {"p": 1}, None, {"c": 2}])
        assert slugs == ("a",)
        assert configs == ({"p": 1}, None, {"c": 2})

    # Decision: a mapping before a slug is not part of the trailing run
    def test_mapping_before_slug(self):
        slugs, configs = split_args([{"x": 1}, "a", {"p": 1}])
        assert slugs == ({"x": 1}, "a")
        assert configs == ({"p": 1},)

    # Boundary: no args
    def test_empty(self):
        assert split_args([]) == ((), ())


class TestClassifyArgs:
    """Tests for classify_args."""

    def test_zero(self):
        assert classify_args(("a",), []) == NoConfigShape(("a",))

    def test_one(self):
        assert classify_args(("a",), [{"m": 1}]) == ConfigShape(("a",), {"m": 1})

    def test_two(self):
        assert classify_args(("a",), [{"p": 1}, None]) == PayloadConfigShape(("a",), {"p": 1}, None)

    def test_three_or_more(self):
        shape = classify_args((), [{"p": 1}, {"d": 2}, {"x": 1}, {"y": 2}])
        assert shape == ParamsDataConfigShape((), {"p": 1}, {"d": 2}, ({"x": 1}, {"y": 2}))


class TestConfigFromShape:
    """Tests for config_from_shape."""

    # Path: 0 config objects
    def test_no_config(self):
        config = config_from_shape(NoConfigShape(()), BASE + "a", "get")
        assert config == {"url": BASE + "a", "method": "get", "data": None, "params": None}

    # Path: 1 config object passed through, defaults filled
    def test_single_config(self):
        config = config_from_shape(
            ConfigShape((), {"params": {"q": 1}, "timeout": 5}), BASE, "get"
        )
        assert config == {"params": {"q": 1}, "timeout": 5, "url": BASE, "method": "get", "data": None}

    # Decision: 1 config object None becomes empty config
    def test_single_none(self):
        config = config_from_shape(ConfigShape((), None), BASE, "delete")
        assert config["method"] == "delete"

    # Decision: 2 config objects, post routes payload to data
    def test_payload_post(self):
        config = config_from_shape(PayloadConfigShape((), {"name": "w"}, None), BASE, "post")
        assert config["data"] == {"name": "w"}
        assert config["params"] is None

    # Decision: 2 config objects, get routes payload to params
    def test_payload_get(self):
        config = config_from_shape(PayloadConfigShape((), {"page": 2}, None), BASE, "get")
        assert config["params"] == {"page": 2}
        assert config["data"] is None

    # Decision: method in config overrides routing, case-insensitive
    def test_payload_method_override(self):
        config = config_from_shape(
            PayloadConfigShape((), {"name": "w"}, {"method": "PATCH"}), BASE, "get"
        )
        assert config["data"] == {"name": "w"}
        assert config["method"] == "patch"

    # Decision: a None method falls back to the verb default
    def test_none_method_uses_default(self):
        config = config_from_shape(ConfigShape((), {"method": None}), BASE, "get")
        assert config["method"] == "get"

        config = config_from_shape(
            PayloadConfigShape((), {"name": "w"}, {"method": None}), BASE, "post"
        )
        assert config["method"] == "post"
        assert config["data"] == {"name": "w"}

    # Path: 3+ config objects merged in order
    def test_params_data_configs(self):
        shape = ParamsDataConfigShape(
            (), {"q": 1}, {"name": "w"}, ({"timeout": 1, "headers": {"A": "1"}}, None, {"timeout": 2})
        )
        config = config_from_shape(shape, BASE, "put")
        assert config == {
            "timeout": 2,
            "headers": {"A": "1"},
            "url": BASE,
            "method": "put",
            "data": {"name": "w"},
            "params": {"q": 1},
        }

    # Decision: explicit config values win over inferred ones
    def test_explicit_values_win(self):
        shape = PayloadConfigShape(
            (), {"page": 2}, {"url": "https://other/", "params": {"page": 9}}
        )
        config = config_from_shape(shape, BASE, "get")
        assert config["url"] == "https://other/"
        assert config["params"] == {"page": 9}

    # Invariant: caller mapping is not mutated
    def test_caller_config_not_mutated(self):
        caller = {"timeout": 3}
        config_from_shape(ConfigShape((), caller), BASE, "get")
        assert caller == {"timeout": 3}


class TestParseArgs:
    """Tests for parse_args."""

    # Path: slugs only
    @pytest.mark.asyncio
    async def test_slugs_only(self):
        config = await parse_args(BASE, "widgets", 42, default_method="get")
        assert config["url"] == BASE + "widgets/42"
        assert config["method"] == "get"

    # Path: single config object passed through
    @pytest.mark.asyncio
    async def test_one_config_object(self):
        config = await parse_args(BASE, "widgets", {"params": {"q": "x"}}, default_method="get")
        assert config["params"] == {"q": "x"}
        assert config["data"] is None

    # Decision: post with two config objects routes to data
    @pytest.mark.asyncio
    async def test_post_routes_to_data(self):
        config = await parse_args(BASE, "widgets", {"name": "w"}, None, default_method="post")
        assert config["data"] == {"name": "w"}
        assert config["params"] is None

    # Decision: get with two config objects routes to params
    @pytest.mark.asyncio
    async def test_get_routes_to_params(self):
        config = await parse_args(BASE, "widgets", {"page": 1}, {}, default_method="get")
        assert config["params"] == {"page": 1}
        assert config["data"] is None

    # Path: awaitables in config objects are resolved
    @pytest.mark.asyncio
    async def test_awaitables_resolved(self):
        config = await parse_args(
            BASE,
            "widgets",
            {"ids": [_value(1), _value(2)]},
            {"headers": {"X-Token": _value("t")}},
            default_method="get",
        )
        assert config["params"] == {"ids": [1, 2]}
        assert config["headers"] == {"X-Token": "t"}

    # Error Path: failing awaitable propagates
    @pytest.mark.asyncio
    async def test_failing_awaitable(self):
        with pytest.raises(ConnectionError):
            await parse_args(BASE, "widgets", {"token": _fail()}, default_method="get")

    # Boundary: no slugs targets the base URL
    @pytest.mark.asyncio
    async def test_no_slugs(self):
        config = await parse_args(BASE, default_method="options")
        assert config["url"] == BASE
        assert config["method"] == "options"
