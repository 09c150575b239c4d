"""
Convert Markdown to Confluence wiki markup or storage format.

Copyright 2022-2026, Levente Hunyadi
"""

import dataclasses
import types
import typing
from typing import Any, TypeVar

from cattrs.gen import make_dict_unstructure_fn
from cattrs.preconf.pyyaml import make_converter

T = TypeVar("T")

# scalar types that a YAML document maps to without conversion
_SCALAR_TYPES: tuple[type, ...] = (bool, int, str, type(None))


_converter = make_converter(forbid_extra_keys=False)


def _is_scalar_union(tp: Any) -> bool:
    "True for unions of scalar types, e.g. `bool | str | None` or `int | None`."

    if typing.get_origin(tp) not in (typing.Union, types.UnionType):
        return False
    return all(arg in _SCALAR_TYPES for arg in typing.get_args(tp))


def _scalar_union_structure_hook(value: Any, tp: Any) -> Any:
    # compare exact types such that `true` in YAML is not accepted as an integer
    if type(value) in typing.get_args(tp):
        return value
    raise TypeError(f"expected: {tp}; got: {value!r}")


_converter.register_structure_hook_func(_is_scalar_union, _scalar_union_structure_hook)

# omit unset (default) values when producing YAML
_converter.register_unstructure_hook_factory(
    dataclasses.is_dataclass,
    lambda cls: make_dict_unstructure_fn(cls, _converter, _cattrs_omit_if_default=True),
)


def yaml_to_object(typ: type[T], data: Any) -> T:
    """
    Converts data loaded from a YAML document to a structured object, validating input data.

    :param typ: Target structured type.
    :param data: Source data as loaded by `yaml.safe_load`.
    :returns: A valid object instance of the expected type.
    """

    return _converter.structure(data, typ)


def object_to_yaml(data: object) -> str:
    """
    Converts a structured object to a YAML document, omitting fields that have their default value.

    :param data: Object to convert to YAML.
    :returns: YAML document as a string.
    """

    return _converter.dumps(data, sort_keys=False)
