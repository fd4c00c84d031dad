"""Checked access to parameter values, arrays and structs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


class ParameterError(LookupError):
    """Raised when a parameter or one of its parts cannot be found."""


def fetch_param(params: Mapping[str, Any], name: str, namespace: str = "/") -> Any:
    """Return the parameter called name, or raise ParameterError."""
    try:
        return params[name]
    except KeyError:
        raise ParameterError(
            f"could not load parameter '{name}'. (namespace: {namespace})"
        ) from None


def _is_array(collection: Any) -> bool:
    return isinstance(collection, Sequence) and not isinstance(collection, (str, bytes))


def get_array_item(collection: Any, index: int) -> Any:
    """Return collection[index] after checking it is an array large enough."""
    if not _is_array(collection):
        raise ParameterError("not an array")
    if index >= len(collection):
        raise ParameterError(f"index '{index}' is over array capacity")
    return collection[index]


def get_struct_member(collection: Any, member: str) -> Any:
    """Return collection[member] after checking it is a struct holding it."""
    if not isinstance(collection, Mapping):
        raise ParameterError("not a struct")
    if member not in collection:
        raise ParameterError(f"could not find member '{member}'")
    return collection[member]