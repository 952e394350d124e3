"""
Core modules for rest_api_client.
"""
from .base_client import ApiClient, prepare_multipart
from .form_data import FormData, serialize_to_form_data
from .resolver import deep_resolve
from .url_builder import build_url
from .request_builder import (
    CallShape,
    NoConfigShape,
    ConfigShape,
    PayloadConfigShape,
    ParamsDataConfigShape,
    split_args,
    classify_args,
    parse_args,
)

__all__ = [
    "ApiClient",
    "prepare_multipart",
    "FormData",
    "serialize_to_form_data",
    "deep_resolve",
    "build_url",
    "CallShape",
    "NoConfigShape",
    "ConfigShape",
    "PayloadConfigShape",
    "ParamsDataConfigShape",
    "split_args",
    "classify_args",
    "parse_args",
]
