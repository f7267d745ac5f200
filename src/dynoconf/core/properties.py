"""Property tables for pool factory types

A property table maps lower-camel property names to typed accessors for one
target type. Tables are built once per type from its attrs fields and
annotated ``property`` objects, then reused for every extraction and build.
"""

import collections.abc
import functools
import inspect
import re
import typing
from types import MappingProxyType
from typing import Any, Mapping, Tuple

import attrs
from attrs import define, field

from dynoconf.core.naming import to_lower_camel

# Scalar types that can be carried in a flat property map
GENERAL_SCALAR_TYPES: Tuple[type, ...] = (bool, int, str)

# Container origins accepted as "sequence" properties
GENERAL_SEQUENCE_TYPES: Tuple[type, ...] = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
)

# Base-10 integer text: optional sign and ASCII digits only
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


def string_form(value: Any) -> str:
    """Render a property value the way it is compared and parsed

    Booleans render as ``true``/``false``, ``None`` as ``null`` and sequences
    as ``[a, b]`` with each element rendered recursively.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(string_form(each) for each in value) + "]"
    return str(value)


def _unwrap_optional(value_type: Any) -> Any:
    if typing.get_origin(value_type) is typing.Union:
        args = [arg for arg in typing.get_args(value_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return value_type


def is_general_type(value_type: Any) -> bool:
    """Check whether a declared type belongs to the extractable whitelist"""
    value_type = _unwrap_optional(value_type)
    if value_type in GENERAL_SCALAR_TYPES:
        return True
    origin = typing.get_origin(value_type) or value_type
    return origin in GENERAL_SEQUENCE_TYPES


def coerce(value: Any, value_type: Any) -> Any:
    """
    Coerce a property value to the declared type of its setter

    Args:
        value: Raw value from a property map (text, prior extraction or user code)
        value_type: Declared type of the target property

    Returns:
        The coerced value; sequences bound for sequence properties are copied
        into the declared container (tuple or list),
        values for any other type are returned unchanged

    Raises:
        ValueError: If the text of a numeric or boolean value is malformed
    """
    value_type = _unwrap_optional(value_type)
    if value_type is bool:
        text = string_form(value).lower()
        if text not in ("true", "false"):
            raise ValueError(f"'{string_form(value)}' is not a valid boolean")
        return text == "true"
    if value_type is int:
        text = string_form(value)
        if not _INTEGER_TEXT.fullmatch(text):
            raise ValueError(f"'{text}' is not a valid base-10 integer")
        return int(text, 10)
    if value_type is str:
        return string_form(value)
    if isinstance(value, (list, tuple)) and is_general_type(value_type):
        origin = typing.get_origin(value_type) or value_type
        return tuple(value) if origin is tuple else list(value)
    return value


@define(frozen=True)
class PropertyAccessor:
    """Typed getter/setter pair for a single property of a factory type"""

    name: str = field()
    attribute: str = field()
    value_type: Any = field()
    writable: bool = field(default=True)

    @property
    def extractable(self) -> bool:
        return is_general_type(self.value_type)

    def get(self, target: Any) -> Any:
        return getattr(target, self.attribute)

    def set(self, target: Any, value: Any):
        """Coerce ``value`` to the property type and assign it on ``target``"""
        if not self.writable:
            raise AttributeError(f"Property '{self.name}' is read-only")
        setattr(target, self.attribute, coerce(value, self.value_type))


def _is_frozen_class(cls: type) -> bool:
    return getattr(cls.__setattr__, "__name__", "") == "_frozen_setattrs"


def _attrs_accessors(cls: type):
    frozen = _is_frozen_class(cls)
    attrs.resolve_types(cls)
    for each in attrs.fields(cls):
        if each.name.startswith("_"):
            continue
        yield PropertyAccessor(
            name=to_lower_camel(each.name),
            attribute=each.name,
            value_type=each.type,
            writable=not frozen and each.on_setattr is not attrs.setters.frozen,
        )


def _property_accessors(cls: type):
    for attribute, member in inspect.getmembers(cls, lambda m: isinstance(m, property)):
        if attribute.startswith("_"):
            continue
        try:
            hints = typing.get_type_hints(member.fget)
        except (NameError, TypeError):
            continue
        if "return" not in hints:
            continue
        yield PropertyAccessor(
            name=to_lower_camel(attribute),
            attribute=attribute,
            value_type=hints["return"],
            writable=member.fset is not None,
        )


@functools.lru_cache(maxsize=None)
def property_table(cls: type) -> Mapping[str, PropertyAccessor]:
    """
    Build (once) the property table of a factory type

    Args:
        cls: Factory class to describe

    Returns:
        Read-only mapping from lower-camel property name to its accessor,
        in declaration order (attrs fields first, then annotated properties)
    """
    table = {}
    if attrs.has(cls):
        for accessor in _attrs_accessors(cls):
            table[accessor.name] = accessor
    for accessor in _property_accessors(cls):
        table.setdefault(accessor.name, accessor)
    return MappingProxyType(table)
