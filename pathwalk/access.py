"""Collaborators used to access records and map keys.

Readers and writers never inspect records themselves. They go through a
``PropertyAccessor`` to get and set properties by name and through a
``ValueConverter`` before assigning to a property, so records can be
dataclasses, pydantic models, slotted classes or anything else an accessor
knows how to handle.
"""

import inspect
import logging
import typing
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from pydantic import ConfigDict, PydanticSchemaGenerationError, TypeAdapter, ValidationError

from pathwalk.errors import IllegalAssignment, NoSuchProperty


logger = logging.getLogger(__name__)

KeyDeserializer = Callable[[Optional[str]], Any]
"""Turns a path segment into the key of a map."""


def identity(segment: Optional[str]) -> Any:
    """Default key deserializer: the segment itself is the key."""
    return segment


def int_keys(segment: Optional[str]) -> Optional[int]:
    """Key deserializer for maps keyed by integers.

    Examples:
        >>> int_keys('42')
        42
    """
    if segment is None:
        return None
    return int(segment)


class PropertyAccessor(typing.Protocol):
    """Reads and writes record properties by name.

    ``get`` and ``set`` raise ``NoSuchProperty`` if ``name`` does not denote
    an accessible property. Any other exception is treated as a failure of
    the record itself. ``writable`` tells whether ``set`` would accept the
    name; writers ask it before converting the value.
    """

    def get(self, record: Any, name: str) -> Any:
        ...

    def set(self, record: Any, name: str, value: Any) -> None:
        ...

    def writable(self, record: Any, name: str) -> bool:
        ...


class ValueConverter(typing.Protocol):
    """Converts a value to the declared type of a record property.

    Raises ``IllegalAssignment`` if the value cannot be converted.
    """

    def convert(self, record: Any, name: str, value: Any) -> Any:
        ...


class AttributeAccessor:
    """Property access through attribute introspection.

    Public attributes, dataclass fields, ``__slots__`` members and properties
    are accessible. Names starting with an underscore and methods are not.
    Only existing or declared properties can be set; the accessor never
    creates new attributes.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Address:
        ...     street: str = ''
        >>> a = Address('Main St')
        >>> AttributeAccessor().get(a, 'street')
        'Main St'
    """

    def get(self, record: Any, name: str) -> Any:
        if not _is_public(name):
            raise NoSuchProperty(type(record), name)
        try:
            value = getattr(record, name)
        except AttributeError as exc:
            raise NoSuchProperty(type(record), name) from exc
        if inspect.isroutine(value):
            raise NoSuchProperty(type(record), name)
        return value

    def set(self, record: Any, name: str, value: Any) -> None:
        if not self.writable(record, name):
            raise NoSuchProperty(type(record), name)
        setattr(record, name, value)

    def writable(self, record: Any, name: str) -> bool:
        return _is_public(name) and _is_writable(type(record), record, name)


def _is_public(name) -> bool:
    return isinstance(name, str) and name != '' and not name.startswith('_')


def _is_writable(cls: type, record: Any, name: str) -> bool:
    attr = inspect.getattr_static(cls, name, None)
    if isinstance(attr, property):
        return attr.fset is not None
    if inspect.isroutine(attr) or isinstance(attr, (staticmethod, classmethod)):
        return False
    if name in getattr(record, '__dict__', {}):
        return True
    return name in _declared_names(cls)


@lru_cache(maxsize=256)
def _declared_names(cls: type) -> frozenset:
    names = set()
    for klass in cls.__mro__:
        names.update(getattr(klass, '__annotations__', {}))
        slots = getattr(klass, '__slots__', ())
        names.update([slots] if isinstance(slots, str) else slots)
    names.update(getattr(cls, 'model_fields', {}))
    return frozenset(names)


class TypeHintConverter:
    """Validates values against the record class's type hints using pydantic.

    Properties without a type hint accept any value. In the default lax mode
    pydantic's coercions apply (``'42'`` becomes ``42`` for an ``int``
    property); with ``strict=True`` the value must already have the declared
    type. Values that already have the declared type are returned
    unchanged, so containers keep their identity.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Person:
        ...     age: int = 0
        >>> TypeHintConverter().convert(Person(), 'age', '42')
        42
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def convert(self, record: Any, name: str, value: Any) -> Any:
        hints = _type_hints(type(record))
        if name not in hints:
            return value
        declared = hints[name]
        if declared is Any:
            return value
        adapter = _adapter(declared)
        try:
            # a value that already fits is assigned as is, not as a validated copy
            adapter.validate_python(value, strict=True)
            return value
        except ValidationError as exc:
            if self.strict:
                raise IllegalAssignment(type(record), name, declared, value) from exc
        try:
            return adapter.validate_python(value, strict=False)
        except ValidationError as exc:
            raise IllegalAssignment(type(record), name, declared, value) from exc


@lru_cache(maxsize=256)
def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        logger.debug("Cannot resolve type hints of %s, accepting any value: %s", cls, exc)
        return {}


def _adapter(declared: Any) -> TypeAdapter:
    try:
        return _cached_adapter(declared)
    except TypeError:
        # unhashable type hint
        return _build_adapter(declared)


@lru_cache(maxsize=512)
def _cached_adapter(declared: Any) -> TypeAdapter:
    return _build_adapter(declared)


def _build_adapter(declared: Any) -> TypeAdapter:
    try:
        return TypeAdapter(declared)
    except PydanticSchemaGenerationError:
        # plain classes pydantic knows nothing about: isinstance checks
        return TypeAdapter(declared, config=ConfigDict(arbitrary_types_allowed=True))
