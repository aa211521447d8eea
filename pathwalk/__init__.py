"""Read and write values at dotted paths inside nested object graphs.

This package navigates any mix of containers with a single path syntax:
- Maps (dicts and other mappings), with pluggable key deserialization
- Lists and other mutable sequences
- Fixed-size object arrays (tuples, object-dtype numpy arrays)
- Primitive arrays (numeric numpy arrays, ``array.array``, ``bytearray``)
- Records (dataclasses, pydantic models, plain objects)

Basic usage:
    >>> from pathwalk import PathWalker, Path
    >>> data = {'people': [{'name': 'Ann', 'scores': (3, 5)}]}
    >>> PathWalker('people.0.scores.1').read(data)
    5
    >>> Path.of('people.0.name').get_canonical_path()
    Path('people.name')

Error policies:
    >>> from pathwalk import OnError, ErrorCode
    >>> PathWalker('people.x', on_error=OnError.RETURN_CODE).read(data)
    <ErrorCode.INDEX_EXPECTED: 'INDEX_EXPECTED'>

Building maps:
    >>> from pathwalk import MapWriter
    >>> MapWriter().write('a.b', 1).write('a.c', 2).get_map()
    {'a': {'b': 1, 'c': 2}}
"""

from pathwalk.paths import (
    Path,
    EMPTY_PATH,
    SEP,
    ESC,
    NULL_SEGMENT,
    escape,
    is_array_index,
)

from pathwalk.errors import (
    ErrorCode,
    OnError,
    PathWalkerException,
    PathBlockedError,
    InvalidPathError,
    NoSuchProperty,
    IllegalAssignment,
)

from pathwalk.kinds import (
    ContainerKind,
    kind_of,
    is_terminal,
)

from pathwalk.access import (
    PropertyAccessor,
    ValueConverter,
    AttributeAccessor,
    TypeHintConverter,
    KeyDeserializer,
    identity,
    int_keys,
)

from pathwalk.readers import (
    SegmentReader,
    ObjectReader,
    READERS,
)

from pathwalk.writers import (
    SegmentWriter,
    ObjectWriter,
    WRITERS,
)

from pathwalk.walker import (
    PathWalker,
    read_path,
    write_path,
)

from pathwalk.mapwriter import MapWriter

__version__ = "0.1.0"  # Keep in sync with package version

__all__ = [
    # Paths
    "Path",
    "EMPTY_PATH",
    "SEP",
    "ESC",
    "NULL_SEGMENT",
    "escape",
    "is_array_index",
    # Walking
    "PathWalker",
    "read_path",
    "write_path",
    "ObjectReader",
    "ObjectWriter",
    "SegmentReader",
    "SegmentWriter",
    "READERS",
    "WRITERS",
    # Container kinds
    "ContainerKind",
    "kind_of",
    "is_terminal",
    # Collaborators
    "PropertyAccessor",
    "ValueConverter",
    "AttributeAccessor",
    "TypeHintConverter",
    "KeyDeserializer",
    "identity",
    "int_keys",
    # Maps
    "MapWriter",
    # Exceptions
    "ErrorCode",
    "OnError",
    "PathWalkerException",
    "PathBlockedError",
    "InvalidPathError",
    "NoSuchProperty",
    "IllegalAssignment",
]
