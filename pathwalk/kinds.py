"""Classification of runtime values into the container kinds a path can walk.

Every value falls into exactly one ``ContainerKind``. Readers and writers
are registered per kind, so supporting a new kind of container means adding
one member here plus one reader and one writer.
"""

import array
import datetime
import decimal
import enum
import fractions
import pathlib
import uuid
from collections.abc import Mapping, MutableSequence, Sequence, Set
from typing import Any

import numpy as np


class ContainerKind(enum.Enum):
    """The shape of a value as far as path traversal is concerned."""

    RECORD = 'record'
    LIST = 'list'
    OBJECT_ARRAY = 'object_array'
    PRIMITIVE_ARRAY = 'primitive_array'
    MAP = 'map'
    NULL = 'null'
    TERMINAL = 'terminal'


TERMINAL_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    fractions.Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    enum.Enum,
    uuid.UUID,
    pathlib.PurePath,
    np.generic,
    Set,
)
"""Types whose instances a path can never descend into."""

PRIMITIVE_ARRAY_TYPES = (array.array, bytearray)


def kind_of(value: Any) -> ContainerKind:
    """Classify a value.

    Examples:
        >>> kind_of({'a': 1})
        <ContainerKind.MAP: 'map'>
        >>> kind_of([1, 2])
        <ContainerKind.LIST: 'list'>
        >>> kind_of((1, 2))
        <ContainerKind.OBJECT_ARRAY: 'object_array'>
        >>> kind_of(np.zeros(3))
        <ContainerKind.PRIMITIVE_ARRAY: 'primitive_array'>
        >>> kind_of('text')
        <ContainerKind.TERMINAL: 'terminal'>
    """
    if value is None:
        return ContainerKind.NULL
    if isinstance(value, TERMINAL_TYPES):
        return ContainerKind.TERMINAL
    if isinstance(value, Mapping):
        return ContainerKind.MAP
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return ContainerKind.TERMINAL
        if value.dtype == object:
            return ContainerKind.OBJECT_ARRAY
        return ContainerKind.PRIMITIVE_ARRAY
    if isinstance(value, PRIMITIVE_ARRAY_TYPES):
        return ContainerKind.PRIMITIVE_ARRAY
    if isinstance(value, MutableSequence):
        return ContainerKind.LIST
    if isinstance(value, Sequence):
        # tuples and other read-only sequences are fixed-size object arrays
        return ContainerKind.OBJECT_ARRAY
    if hasattr(value, '__dict__') or hasattr(type(value), '__slots__'):
        return ContainerKind.RECORD
    return ContainerKind.TERMINAL


def is_terminal(value: Any) -> bool:
    """Whether a path must end at ``value``."""
    return kind_of(value) in (ContainerKind.NULL, ContainerKind.TERMINAL)
