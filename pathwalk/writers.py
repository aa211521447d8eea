"""Segment writers: one strategy per container kind.

A segment writer handles one segment of the path being written. On the last
segment it assigns the value; on any other segment it looks up the child the
segment designates and hands the rest of the path to the writer for the
child's kind. Lists and arrays are never grown. Maps can have missing
intermediate maps created on the way (``create_missing=True``).

Like the readers, writers raise every failure as a ``PathWalkerException``
and leave the error policy to the caller.
"""

import array
from typing import Any, Dict, Optional, Type

import numpy as np

from pathwalk.access import (
    KeyDeserializer,
    PropertyAccessor,
    TypeHintConverter,
    ValueConverter,
    identity,
)
from pathwalk.errors import IllegalAssignment, NoSuchProperty, PathWalkerException
from pathwalk.kinds import ContainerKind, kind_of
from pathwalk.paths import Path
from pathwalk.readers import ObjectReader, deserialize_key, index_of


class SegmentWriter:
    """Base class for segment writers.

    Subclasses implement ``assign``. The default ``child`` uses the segment
    reader registered for the same kind of container.
    """

    kind: ContainerKind = None

    def __init__(self, owner: 'ObjectWriter'):
        self.owner = owner

    def write(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        if segment == len(path) - 1:
            self.assign(obj, path, segment, value)
        else:
            child = self.child(obj, path, segment)
            self.owner.write(child, path, value, start=segment + 1)

    def child(self, obj: Any, path: Path, segment: int) -> Any:
        return self.owner.reader.reader_for(self.kind).read(obj, path, segment)

    def assign(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        raise NotImplementedError


class RecordSegmentWriter(SegmentWriter):
    """Sets a property, converting the value to the property's declared type."""

    kind = ContainerKind.RECORD

    def assign(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        name = path.segment(segment)
        if not name:
            raise PathWalkerException.empty_segment(path, segment)
        try:
            if not self.owner.accessor.writable(obj, name):
                raise NoSuchProperty(type(obj), name)
            converted = self.owner.converter.convert(obj, name, value)
            self.owner.accessor.set(obj, name, converted)
        except NoSuchProperty as exc:
            raise PathWalkerException.not_applicable(path, segment, obj) from exc
        except IllegalAssignment as exc:
            raise PathWalkerException.illegal_assignment(path, segment, exc) from exc
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc


class MapSegmentWriter(SegmentWriter):
    """Puts a key, optionally creating missing intermediate maps."""

    kind = ContainerKind.MAP

    def child(self, obj: Any, path: Path, segment: int) -> Any:
        if not self.owner.create_missing:
            return super().child(obj, path, segment)
        key = deserialize_key(self.owner.key_deserializer, path, segment)
        try:
            if key not in obj:
                obj[key] = {}
            return obj[key]
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc

    def assign(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        key = deserialize_key(self.owner.key_deserializer, path, segment)
        try:
            obj[key] = value
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc


class ListSegmentWriter(SegmentWriter):
    """Replaces an element of a mutable sequence."""

    kind = ContainerKind.LIST

    def assign(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        idx = index_of(path, segment, len(obj))
        try:
            obj[idx] = value
        except Exception as exc:
            raise PathWalkerException.unexpected_error(path, segment, exc) from exc


class ArraySegmentWriter(ListSegmentWriter):
    """Replaces an element of an object array.

    Tuples are immutable, so writing into one fails with ``EXCEPTION``.
    """

    kind = ContainerKind.OBJECT_ARRAY


class PrimitiveArraySegmentWriter(SegmentWriter):
    """Replaces an element of a typed array.

    ``None`` and values the array cannot store are illegal assignments, and
    so are values numpy would have to narrow (``7.9`` into an integer array).
    """

    kind = ContainerKind.PRIMITIVE_ARRAY

    def assign(self, obj: Any, path: Path, segment: int, value: Any) -> None:
        idx = index_of(path, segment, len(obj))
        if value is None or isinstance(obj, np.ndarray) and not _fits(obj, value):
            exc = IllegalAssignment(type(obj), path.segment(segment), _element_type(obj), value)
            raise PathWalkerException.illegal_assignment(path, segment, exc)
        try:
            obj[idx] = value
        except (TypeError, ValueError, OverflowError) as cause:
            exc = IllegalAssignment(type(obj), path.segment(segment), _element_type(obj), value)
            raise PathWalkerException.illegal_assignment(path, segment, exc) from cause


def _fits(arr: np.ndarray, value: Any) -> bool:
    if arr.ndim > 1:
        return False
    if isinstance(value, int) and not isinstance(value, bool) and arr.dtype.kind in 'iu':
        info = np.iinfo(arr.dtype)
        return info.min <= value <= info.max
    try:
        source = np.asarray(value).dtype
    except (TypeError, ValueError):
        return False
    return np.can_cast(source, arr.dtype, casting='same_kind')


def _element_type(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.dtype.type
    if isinstance(obj, array.array):
        if obj.typecode in 'fd':
            return float
        if obj.typecode == 'u':
            return str
    return int


WRITERS: Dict[ContainerKind, Type[SegmentWriter]] = {
    ContainerKind.RECORD: RecordSegmentWriter,
    ContainerKind.MAP: MapSegmentWriter,
    ContainerKind.LIST: ListSegmentWriter,
    ContainerKind.OBJECT_ARRAY: ArraySegmentWriter,
    ContainerKind.PRIMITIVE_ARRAY: PrimitiveArraySegmentWriter,
}
"""The writer for each kind of container a path can descend into."""


class ObjectWriter:
    """Writes a value at the end of a path, one segment writer per step.

    Examples:
        >>> data = {'a': [0, {'b': 1}]}
        >>> ObjectWriter().write(data, Path.of('a.1.b'), 2)
        >>> data
        {'a': [0, {'b': 2}]}
        >>> ObjectWriter(create_missing=True).write(data, Path.of('c.d'), 3)
        >>> data['c']
        {'d': 3}
    """

    def __init__(
        self,
        key_deserializer: KeyDeserializer = identity,
        accessor: Optional[PropertyAccessor] = None,
        converter: Optional[ValueConverter] = None,
        create_missing: bool = False
    ):
        self.reader = ObjectReader(key_deserializer, accessor)
        self.key_deserializer = key_deserializer
        self.accessor = self.reader.reader_for(ContainerKind.RECORD).accessor
        self.converter = converter if converter is not None else TypeHintConverter()
        self.create_missing = create_missing
        self._writers = {kind: writer_class(self) for kind, writer_class in WRITERS.items()}

    def write(self, obj: Any, path: Path, value: Any, start: int = 0) -> None:
        """Assign ``value`` at ``path`` inside ``obj``, starting with segment ``start``.

        Raises:
            ValueError: If the path is empty
            PathWalkerException: If the path cannot be followed or the value
                cannot be assigned
        """
        if path.is_empty():
            raise ValueError("Cannot write to an empty path")
        kind = kind_of(obj)
        if kind in (ContainerKind.NULL, ContainerKind.TERMINAL):
            raise PathWalkerException.terminal_value(path, start, obj)
        self._writers[kind].write(obj, path, start, value)
