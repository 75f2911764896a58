from __future__ import annotations

from dataclasses import fields
from typing import Any

from .errors import DecodeError
from .models import LookupResult, Rating, SearchResult, SearchResultItem

NESTED_LISTS = {"Ratings": Rating, "Search": SearchResultItem}


def _as_text(name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise DecodeError(f"expected a string for {name!r}, got {type(value).__name__}")
    # OMDB is not consistent about quoting numbers; keep them as text.
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def _decode(cls: type, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object for {cls.__name__}, got {type(payload).__name__}")
    values: dict[str, Any] = {}
    for item in fields(cls):
        name = item.metadata["omdb"]
        raw = payload.get(name)
        if name in NESTED_LISTS:
            if raw is None:
                continue
            if not isinstance(raw, list):
                raise DecodeError(f"expected a list for {name!r}, got {type(raw).__name__}")
            values[item.name] = [_decode(NESTED_LISTS[name], entry) for entry in raw]
        else:
            values[item.name] = _as_text(name, raw)
    return cls(**values)


def _serialize(obj: Any) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for item in fields(obj):
        value = getattr(obj, item.name)
        if value is None:
            continue
        if isinstance(value, list):
            value = [_serialize(entry) for entry in value]
        data[item.metadata["omdb"]] = value
    return data


def decode_lookup_result(payload: Any) -> LookupResult:
    return _decode(LookupResult, payload)


def decode_search_result(payload: Any) -> SearchResult:
    return _decode(SearchResult, payload)


def serialize_rating(rating: Rating) -> dict[str, Any]:
    return _serialize(rating)


def serialize_lookup_result(result: LookupResult) -> dict[str, Any]:
    return _serialize(result)


def serialize_search_result(result: SearchResult) -> dict[str, Any]:
    return _serialize(result)
