"""Bind store sections into pydantic models and coerce loose scalars.

Contents:
    * :func:`bind_section` - case-insensitive section → model binding.
    * :func:`coerce_value` - JSON-literal coercion with string fallback.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from types import UnionType
from typing import TypeVar, Union, get_args, get_origin

import orjson
from pydantic import BaseModel, ValidationError

from layered_appsettings.domain.errors import ConfigurationError
from layered_appsettings.domain.store import ConfigData, ConfigurationSection, ConfigurationStore

ModelT = TypeVar("ModelT", bound=BaseModel)

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


def coerce_value(raw: str | None) -> CoercedValue:
    """Coerce a raw string value using JSON parsing with string fallback.

    Attempts ``orjson.loads`` first (handling booleans, numbers, null, arrays,
    objects). Falls back to the raw string if JSON parsing fails.

    Examples:
        >>> coerce_value("true")
        True
        >>> coerce_value("42")
        42
        >>> coerce_value("3.14")
        3.14
        >>> coerce_value("null")
        >>> coerce_value('["a","b"]')
        ['a', 'b']
        >>> coerce_value("DEBUG")
        'DEBUG'
        >>> coerce_value("")
        ''
    """
    if raw is None or raw == "":
        return raw
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence, MutableSequence, AbstractSet, MutableSet)
_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)


def _model_type(annotation: object) -> type[BaseModel] | None:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _without_none(annotation: object) -> object:
    """Strip ``None`` from ``Optional[X]`` / ``X | None`` annotations."""
    if get_origin(annotation) in (Union, UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _bind_models(view: ConfigurationSection, annotation: object) -> object | None:
    """Bind *view* for a model, a collection of models, or a mapping of models.

    Returns None when *annotation* holds no model, leaving the raw data to pydantic.
    """
    annotation = _without_none(annotation)
    model = _model_type(annotation)
    if model is not None:
        return _payload(view, model)

    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin in _SEQUENCE_ORIGINS and args:
        element = _model_type(_without_none(args[0]))
        if element is not None:
            return [_payload(child, element) for child in view.get_children()]
    if origin in _MAPPING_ORIGINS and len(args) == 2:
        element = _model_type(_without_none(args[1]))
        if element is not None:
            return {child.key: _payload(child, element) for child in view.get_children()}
    return None


def _compact_indexes(data: ConfigData) -> ConfigData:
    """Turn a sparse index family into a list ordered by index.

    Example:
        >>> _compact_indexes({"0": "GET", "4": "PATCH"})
        ['GET', 'PATCH']
        >>> _compact_indexes({"a": "1"})
        {'a': '1'}
    """
    if isinstance(data, dict) and data and all(name.isascii() and name.isdigit() for name in data):
        return [data[name] for name in sorted(data, key=int)]
    return data


def _payload(view: ConfigurationStore | ConfigurationSection, model: type[BaseModel]) -> dict[str, object]:
    children = {}
    for child in view.get_children():
        children.setdefault(child.key.casefold(), child)

    payload: dict[str, object] = {}
    for field_name, field in model.model_fields.items():
        names = [field_name] if field.alias is None else [field.alias, field_name]
        child = next((children[n.casefold()] for n in names if n.casefold() in children), None)
        if child is None:
            continue
        target = field.alias or field_name
        bound = _bind_models(child, field.annotation)
        if bound is not None:
            payload[target] = bound
            continue
        data = child.to_data()
        if data is not None:
            payload[target] = _compact_indexes(data)
    return payload


def bind_section(store: ConfigurationStore, section: str | None, model: type[ModelT]) -> ModelT:
    """Bind the section at *section* (the whole store when None) into *model*.

    Field names (or aliases) match child keys ignoring case. Nested models
    bind from nested sections, and so do the elements of ``list[Model]`` (in
    index order) and the values of ``dict[str, Model]`` (by child name).
    Other index families become lists. Fields with no matching key keep
    their defaults.

    Raises:
        ConfigurationError: When pydantic rejects the bound values.

    Example:
        >>> from layered_appsettings.adapters.config.sources import CommandLineSource
        >>> from layered_appsettings.adapters.config.merger import overlay
        >>> class ApiTester(BaseModel):
        ...     SupportedMethods: list[str] = []
        ...     MaxRetries: int = 0
        ...     BaseUrl: str = ""
        >>> store = overlay([CommandLineSource(["--apitester:maxretries=3", "--ApiTester:SupportedMethods:0=GET"])])
        >>> bind_section(store, "ApiTester", ApiTester)
        ApiTester(SupportedMethods=['GET'], MaxRetries=3, BaseUrl='')
    """
    view: ConfigurationStore | ConfigurationSection = store if not section else store.get_section(section)
    try:
        return model.model_validate(_payload(view, model))
    except ValidationError as exc:
        raise ConfigurationError(f"Cannot bind section '{section or '<root>'}' to {model.__name__}: {exc}") from exc


__all__ = [
    "CoercedValue",
    "bind_section",
    "coerce_value",
]
