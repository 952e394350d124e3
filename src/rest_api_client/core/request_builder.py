"""
Request config building for rest_api_client.

Verb methods accept URL slugs followed by up to N config-object arguments
(mappings or None). The trailing run of config objects is classified into a
call shape, then turned into a single request config:

==========  =====================================================
count       meaning
==========  =====================================================
0           ``(slugs...)``: default method, no params, no data
1           ``(slugs..., config)``: the object is the request config
2           ``(slugs..., payload, config)``: payload is ``data`` for
            put/post/patch and ``params`` otherwise
3+          ``(slugs..., params, data, config, ...)``: trailing
            configs are shallow-merged, later keys win
==========  =====================================================

Values placed directly in the config (``url``, ``method``, ``params``,
``data``) always win over the inferred ones.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..types import BODY_METHODS, RequestConfig
from .resolver import deep_resolve
from .url_builder import build_url

logger = logging.getLogger("rest_api_client.request_builder")


@dataclass(frozen=True)
class NoConfigShape:
    """Only URL slugs were given."""

    url_slugs: Tuple[Any, ...]


@dataclass(frozen=True)
class ConfigShape:
    """A single config object."""

    url_slugs: Tuple[Any, ...]
    config: Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class PayloadConfigShape:
    """Params-or-data followed by a config object."""

    url_slugs: Tuple[Any, ...]
    payload: Optional[Mapping[str, Any]]
    config: Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class ParamsDataConfigShape:
    """Params, data, then one or more config objects to merge."""

    url_slugs: Tuple[Any, ...]
    params: Optional[Mapping[str, Any]]
    data: Optional[Mapping[str, Any]]
    configs: Tuple[Optional[Mapping[str, Any]], ...]


CallShape = Union[NoConfigShape, ConfigShape, PayloadConfigShape, ParamsDataConfigShape]


def is_config_object(arg: Any) -> bool:
    return arg is None or isinstance(arg, Mapping)


def split_args(args: Sequence[Any]) -> Tuple[Tuple[Any, ...], Tuple[Any, ...]]:
    """Split args into (url_slugs, config_objects) at the trailing config run."""
    index = len(args)
    while index > 0 and is_config_object(args[index - 1]):
        index -= 1
    return tuple(args[:index]), tuple(args[index:])


def classify_args(url_slugs: Sequence[Any], config_objects: Sequence[Any]) -> CallShape:
    """Build the call shape for the given config-object count."""
    url_slugs = tuple(url_slugs)
    count = len(config_objects)
    if count == 0:
        return NoConfigShape(url_slugs)
    if count == 1:
        return ConfigShape(url_slugs, config_objects[0])
    if count == 2:
        return PayloadConfigShape(url_slugs, config_objects[0], config_objects[1])
    return ParamsDataConfigShape(
        url_slugs, config_objects[0], config_objects[1], tuple(config_objects[2:])
    )


def config_from_shape(shape: CallShape, url: str, default_method: str) -> RequestConfig:
    """Turn a resolved call shape into a request config."""
    method = default_method
    params = None
    data = None
    config: Dict[str, Any] = {}

    if isinstance(shape, ConfigShape):
        if shape.config is not None:
            config = dict(shape.config)

    elif isinstance(shape, PayloadConfigShape):
        if shape.config is not None:
            config = dict(shape.config)

        routed_method = str(config.get("method") or default_method).lower()
        if shape.payload is not None:
            if routed_method in BODY_METHODS:
                data = shape.payload
            else:
                params = shape.payload

    elif isinstance(shape, ParamsDataConfigShape):
        params = shape.params
        data = shape.data
        for extra in shape.configs:
            if extra is not None:
                config.update(extra)

    config.setdefault("url", url)
    if config.get("method") is None:
        config["method"] = method
    config.setdefault("data", data)
    config.setdefault("params", params)
    config["method"] = str(config["method"]).lower()
    return config


async def parse_args(base_url: str, *args: Any, default_method: str) -> RequestConfig:
    """
    Build a request config from verb-method arguments.

    Config objects are deep-resolved first, so any awaitable nested in them
    is materialized before the request is built. A failing awaitable
    propagates and no config is returned.
    """
    url_slugs, config_objects = split_args(args)
    resolved = await deep_resolve(list(config_objects))
    shape = classify_args(url_slugs, resolved)
    url = build_url(base_url, *url_slugs)

    logger.debug(
        f"parse_args: shape={type(shape).__name__}, slugs={len(url_slugs)}, "
        f"config_objects={len(config_objects)}, default_method={default_method}"
    )
    return config_from_shape(shape, url, default_method.lower())
