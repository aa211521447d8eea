"""Segment readers: one strategy per container kind.

A segment reader consumes a single path segment and returns the child value
it designates. ``ObjectReader`` strings them together, choosing the reader
for each intermediate value from the ``READERS`` registry.

Readers never apply an error policy. Every failure is raised as a
``PathWalkerException`` carrying its ``ErrorCode``; the caller decides what
to make of it.
"""

from typing import Any, Dict, Optional, Type

import numpy as np

from pathwalk.access import AttributeAccessor, KeyDeserializer, PropertyAccessor, identity
from pathwalk.errors import NoSuchProperty, PathWalkerException
from pathwalk.kinds import ContainerKind, kind_of
from pathwalk.paths import Path, is_array_index


def index_of(path: Path, segment: int, length: int) -> int:
    """Validate the segment at ``segment`` as an index into a sequence of ``length``.

    Raises:
        PathWalkerException: With ``EMPTY_SEGMENT``, ``INDEX_EXPECTED`` or
            ``INDEX_OUT_OF_BOUNDS``
    """
    s = path.segment(segment)
    if not s:
        raise PathWalkerException.empty_segment(path, segment)
    if not is_array_index(s):
        raise PathWalkerException.index_expected(path, segment)
    idx = int(s)
    if idx >= length:
        raise PathWalkerException.index_out_of_bounds(path, segment, length)
    return idx


def deserialize_key(
    key_deserializer: KeyDeserializer, path: Path, segment: int
) -> Any:
    """Turn a segment into a map key; the null segment is always the ``None`` key."""
    s = path.segment(segment)
    if s is None:
        return None
    try:
        return key_deserializer(s)
    except Exception as exc:
        raise PathWalkerException.key_deserialization_failed(path, segment, exc) from exc


class SegmentReader:
    """Base class for segment readers."""

    def __init__(
        self,
        key_deserializer: KeyDeserializer = identity,
        accessor: Optional[PropertyAccessor] = None
    ):
        self.key_deserializer = key_deserializer
        self.accessor = accessor if accessor is not None else AttributeAccessor()

    def read(self, obj: Any, path: Path, segment: int) -> Any:
        """Return the child of ``obj`` designated by ``path.segment(segment)``."""
        raise NotImplementedError


class RecordSegmentReader(SegmentReader):
    """Reads a property of a structured record through the accessor."""

    def read(self, obj: Any, path: Path, segment: int) -> Any:
        name = path.segment(segment)
        if not name:
            raise PathWalkerException.empty_segment(path, segment)
        try:
            return self.accessor.get(obj, name)
        except NoSuchProperty as exc:
            raise PathWalkerException.not_applicable(path, segment, obj) from exc
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc


class MapSegmentReader(SegmentReader):
    """Looks up a key. A missing key reads as ``None``."""

    def read(self, obj: Any, path: Path, segment: int) -> Any:
        key = deserialize_key(self.key_deserializer, path, segment)
        try:
            return obj.get(key)
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc


class ListSegmentReader(SegmentReader):
    """Reads an element of a mutable sequence."""

    def read(self, obj: Any, path: Path, segment: int) -> Any:
        return obj[index_of(path, segment, len(obj))]


class ArraySegmentReader(ListSegmentReader):
    """Reads an element of a fixed-size object array (tuple, object ndarray)."""


class PrimitiveArraySegmentReader(SegmentReader):
    """Reads an element of a typed array (numeric ndarray, ``array.array``, ``bytearray``).

    numpy scalars are returned as the equivalent Python value.
    """

    def read(self, obj: Any, path: Path, segment: int) -> Any:
        value = obj[index_of(path, segment, len(obj))]
        if isinstance(value, np.generic):
            return value.item()
        return value


READERS: Dict[ContainerKind, Type[SegmentReader]] = {
    ContainerKind.RECORD: RecordSegmentReader,
    ContainerKind.MAP: MapSegmentReader,
    ContainerKind.LIST: ListSegmentReader,
    ContainerKind.OBJECT_ARRAY: ArraySegmentReader,
    ContainerKind.PRIMITIVE_ARRAY: PrimitiveArraySegmentReader,
}
"""The reader for each kind of container a path can descend into."""


class ObjectReader:
    """Follows a path through an object graph, one segment reader per step.

    Examples:
        >>> ObjectReader().read({'a': [10, {'b': 'x'}]}, Path.of('a.1.b'))
        'x'
    """

    def __init__(
        self,
        key_deserializer: KeyDeserializer = identity,
        accessor: Optional[PropertyAccessor] = None
    ):
        self._readers = {
            kind: reader_class(key_deserializer, accessor)
            for kind, reader_class in READERS.items()
        }

    def read(self, obj: Any, path: Path, start: int = 0) -> Any:
        """Return the value at ``path``, starting with segment ``start``.

        Raises:
            PathWalkerException: If the path cannot be followed to its end
        """
        value = obj
        for segment in range(start, len(path)):
            kind = kind_of(value)
            if kind in (ContainerKind.NULL, ContainerKind.TERMINAL):
                raise PathWalkerException.terminal_value(path, segment, value)
            value = self._readers[kind].read(value, path, segment)
        return value

    def reader_for(self, kind: ContainerKind) -> SegmentReader:
        return self._readers[kind]
