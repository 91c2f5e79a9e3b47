"""Bracket-notation form encoding for request parameters.

    {"metadata": {"tier": "gold"}, "preferred_locales": ["en", "fr"]}

becomes

    metadata[tier]=gold&preferred_locales[]=en&preferred_locales[]=fr

Lists of maps are indexed (`items[0][price]=...`). The same pairs are used
for the query string of GET/DELETE calls and for POST bodies.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from stripeclient.resources.base import StripeObject, StripeValue


def _scalar(value: Any) -> str:
    if value is None:
        # Empty string unsets a field on the API side.
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, StripeObject) and value.id:
        return value.id
    return str(value)


def _flatten(key: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if isinstance(value, StripeValue):
        value = value.model_dump(exclude_none=True)
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(f"{key}[{sub_key}]", sub_value, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            if isinstance(item, (Mapping, StripeValue)):
                _flatten(f"{key}[{index}]", item, pairs)
            else:
                pairs.append((f"{key}[]", _scalar(item)))
    else:
        pairs.append((key, _scalar(value)))


def encode_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten a parameter map into ordered `(key, value)` pairs."""

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return pairs


def encode_body(params: Mapping[str, Any]) -> bytes:
    return urlencode(encode_params(params)).encode("utf-8")
