"""Typed binding of deeplink parameters onto destination dataclasses.

A destination declares which route and query parameters it consumes::

    @dataclass(frozen=True)
    class ProductScreen:
        product_id: int = route_param("id")
        campaign: str = query_param("utm_campaign", default="")

``declared_parameters()`` reads those declarations (the registry uses
them as the route's parameter contract) and ``bind()`` builds an
instance from a resolved ``Deeplink``, converting string values to the
annotated field types.

Supported field types: ``str``, ``int``, ``float``, ``bool``.
Route parameters are always required. Query parameters are optional
unless declared with ``required=True``; a missing or unconvertible
optional value falls back to the field default.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, TypeVar

from linkway.errors import BindingError

if TYPE_CHECKING:
    from linkway.deeplink import Deeplink

_METADATA_KEY = "linkway"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ParamBinding:
    """Where a dataclass field takes its value from."""

    source: Literal["route", "query"]
    name: str | None
    required: bool


def route_param(name: str | None = None) -> Any:
    """Bind a field to the route placeholder *name* (defaults to the field name)."""
    return dataclasses.field(
        kw_only=True,
        metadata={_METADATA_KEY: ParamBinding("route", name, required=True)},
    )


def query_param(
    name: str | None = None,
    *,
    default: Any = dataclasses.MISSING,
    required: bool = False,
) -> Any:
    """Bind a field to the query parameter *name* (defaults to the field name).

    An optional query parameter needs a *default*.
    """
    if not required and default is dataclasses.MISSING:
        msg = "query_param() needs a default unless required=True"
        raise TypeError(msg)
    return dataclasses.field(
        default=default,
        kw_only=True,
        metadata={_METADATA_KEY: ParamBinding("query", name, required=required)},
    )


def _bindings(cls: type) -> list[tuple[dataclasses.Field[Any], str, ParamBinding]]:
    if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
        msg = f"{cls!r} is not a dataclass type"
        raise TypeError(msg)
    result = []
    for f in dataclasses.fields(cls):
        binding = f.metadata.get(_METADATA_KEY)
        if binding is not None:
            result.append((f, binding.name or f.name, binding))
    return result


def is_destination(obj: Any) -> bool:
    """Return True if *obj* is a dataclass type with at least one bound field."""
    if not isinstance(obj, type) or not dataclasses.is_dataclass(obj):
        return False
    return bool(_bindings(obj))


def declared_parameters(cls: type) -> tuple[frozenset[str], frozenset[str]]:
    """Return ``(route_param_names, query_param_names)`` declared by *cls*."""
    route_names: set[str] = set()
    query_names: set[str] = set()
    for _field, name, binding in _bindings(cls):
        (route_names if binding.source == "route" else query_names).add(name)
    return frozenset(route_names), frozenset(query_names)


def bind(cls: type[T], deeplink: Deeplink) -> T:
    """Create a *cls* instance from the parameters of *deeplink*.

    Raises ``BindingError`` when a required parameter is missing or
    cannot be converted to the field type.
    """
    kwargs: dict[str, Any] = {}

    for f, name, binding in _bindings(cls):
        if binding.source == "route":
            source = deeplink.route_parameters
        else:
            source = deeplink.query_parameters
        if name not in source:
            if binding.required:
                raise BindingError(name, f"missing {binding.source} parameter")
            continue

        target_type = f.type
        if isinstance(target_type, str):
            target_type = _resolve_type(target_type)

        try:
            kwargs[f.name] = _convert(source[name], target_type)
        except ValueError as exc:
            if binding.required:
                raise BindingError(name, str(exc)) from exc

    return cls(**kwargs)


def _convert(value: str, target_type: Any) -> Any:
    """Convert *value* to *target_type*. Raises ``ValueError`` on failure."""
    if target_type is str:
        return value

    if target_type is int:
        return int(value)

    if target_type is float:
        return float(value)

    if target_type is bool:
        lowered = value.lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
        msg = f"{value!r} is not a boolean"
        raise ValueError(msg)

    # Unknown type — return raw value
    return value


def _resolve_type(name: str) -> type | str:
    """Resolve common type names from string annotations."""
    _builtins: dict[str, type] = {
        "str": str,
        "int": int,
        "float": float,
        "bool": bool,
    }
    return _builtins.get(name, name)
