"""Path addressing for nested object graphs.

A ``Path`` is an immutable sequence of segments parsed from a dotted path
string. Segments are map keys, record properties or sequence indices:

    >>> p = Path.of('employees.3.address.street')
    >>> p.size()
    4
    >>> p.segment(-1)
    'street'

Map keys that contain the separator ('.') are escaped with a circumflex:

    >>> Path.of('lookups.my^.awkward^.key.name').segment(1)
    'my.awkward.key'

The character sequence ``^0`` denotes the ``None`` key:

    >>> Path.of('lookups.^0.name').segment(1) is None
    True
"""

import re
from functools import total_ordering
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pathwalk.errors import InvalidPathError


SEP = '.'
"""Segment separator."""

ESC = '^'
"""Escape character."""

NULL_SEGMENT = ESC + '0'
"""Character sequence denoting the ``None`` segment."""

_INDEX = re.compile(r'[0-9]+')

Segment = Optional[str]


def escape(segment: Segment) -> str:
    """Escape a single segment so it can be embedded in a path string.

    Only complete path strings should contain escaped segments. Segments
    passed to ``Path(...)`` as a list are taken literally.

    Args:
        segment: The raw segment (``None`` for the null key)

    Returns:
        The escaped segment

    Examples:
        >>> escape('identifications.')
        'identifications^.'
        >>> escape('^.identifications')
        '^^.identifications'
        >>> escape(None)
        '^0'
    """
    if segment is None:
        return NULL_SEGMENT
    if SEP not in segment:
        return segment
    return segment.replace(SEP, ESC + SEP)


def is_array_index(segment: Segment) -> bool:
    """Whether a segment is a plain non-negative base-10 integer.

    Examples:
        >>> is_array_index('12')
        True
        >>> is_array_index('-1')
        False
    """
    return segment is not None and _INDEX.fullmatch(segment) is not None


def _decode(segment: str) -> Segment:
    return None if segment == NULL_SEGMENT else segment


def _parse(path: str) -> Tuple[Segment, ...]:
    """Split a path string into segments in a single pass.

    A circumflex only escapes a directly following separator. Any other
    circumflex is literal, so ``^^^.`` yields ``^^.``.
    """
    segments: List[Segment] = []
    buf: List[str] = []
    i = 0
    n = len(path)
    while i < n:
        c = path[i]
        if c == SEP:
            segments.append(_decode(''.join(buf)))
            buf = []
        elif c == ESC and i + 1 < n and path[i + 1] == SEP:
            buf.append(SEP)
            i += 1
        else:
            buf.append(c)
        i += 1
    if buf or path:
        # path ending with an unescaped separator has an empty last segment
        segments.append(_decode(''.join(buf)))
    return tuple(segments)


@total_ordering
class Path:
    """Immutable sequence of path segments.

    ``Path`` accepts a path string (parsed and unescaped), another ``Path``
    or any iterable of raw segments (``str`` or ``None``):

        >>> Path('a.b.c') == Path(['a', 'b', 'c'])
        True
        >>> Path(['a.b', None])
        Path('a^.b.^0')

    The zero-length path is a singleton:

        >>> Path('') is EMPTY_PATH
        True
    """

    __slots__ = ('_segments', '_str', '_hash')

    _empty = None

    def __new__(cls, path: Union[str, 'Path', Iterable[Segment]] = ()):
        if isinstance(path, Path):
            return path
        if isinstance(path, str):
            segments = _parse(path)
        elif path is None:
            raise InvalidPathError("Path must not be None")
        else:
            segments = tuple(path)
            for s in segments:
                if s is not None and not isinstance(s, str):
                    raise TypeError(
                        f"Path segments must be str or None, got {type(s).__name__}"
                    )
        if not segments and cls._empty is not None:
            return cls._empty
        self = super().__new__(cls)
        self._segments = segments
        self._str = None
        self._hash = None
        return self

    @classmethod
    def of(cls, path: Union[str, 'Path']) -> 'Path':
        """Parse a path string.

        Examples:
            >>> Path.of('identifications.0.scientificName').size()
            3
        """
        if path is None:
            raise InvalidPathError("Path must not be None")
        return cls(path)

    @classmethod
    def copy_of(cls, other: 'Path') -> 'Path':
        """Return a path with the same segments as ``other``.

        Paths are immutable, so this is only useful to normalise input.
        """
        return cls(other.segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        """The raw segments as a tuple."""
        return self._segments

    def segment(self, index: int) -> Segment:
        """Return the segment at ``index``; negative indices count from the end.

        Raises:
            IndexError: If ``index`` is outside the path
        """
        i = index + len(self._segments) if index < 0 else index
        if not 0 <= i < len(self._segments):
            raise IndexError(f"Segment index {index} out of range for path {self}")
        return self._segments[i]

    def size(self) -> int:
        return len(self._segments)

    def is_empty(self) -> bool:
        return not self._segments

    def append(self, path: Union[str, 'Path']) -> 'Path':
        """Return a new path with ``path`` appended.

        A string argument is parsed as a path string, so it may contain
        several (escaped) segments.

        Examples:
            >>> Path.of('identifications.0').append('scientificName')
            Path('identifications.0.scientificName')
        """
        if path is None:
            raise InvalidPathError("Cannot append None; use Path([None]) for a null segment")
        other = Path(path)
        if other.is_empty():
            return self
        return Path(self._segments + other._segments)

    def shift(self) -> 'Path':
        """Return this path without its first segment.

        Shifting a path with zero or one segments yields ``EMPTY_PATH``.
        """
        return Path(self._segments[1:])

    def parent(self) -> Optional['Path']:
        """Return this path without its last segment, or ``None`` if it is empty."""
        if not self._segments:
            return None
        return Path(self._segments[:-1])

    def subpath(self, start: int, length: Optional[int] = None) -> 'Path':
        """Return ``length`` segments beginning at ``start``.

        Args:
            start: Index of the first segment (negative counts from the end)
            length: Number of segments (defaults to all remaining ones)

        Raises:
            IndexError: If ``start`` is outside the path or the range extends
                beyond its end

        Examples:
            >>> Path.of('a.b.c').subpath(1, 2)
            Path('b.c')
            >>> Path.of('a.b.c').subpath(-2, 1)
            Path('b')
        """
        size = len(self._segments)
        i = start + size if start < 0 else start
        if not 0 <= i < size:
            raise IndexError(f"Invalid start index {start} for path {self}")
        if length is None:
            return Path(self._segments[i:])
        j = i + length
        if length < 0 or j > size:
            raise IndexError(
                f"Invalid length {length} for path {self} starting at {start}"
            )
        return Path(self._segments[i:j])

    def replace(self, index: int, segment: Segment) -> 'Path':
        """Return a new path with the segment at ``index`` replaced.

        Examples:
            >>> Path.of('a.b.c').replace(1, 'x')
            Path('a.x.c')
        """
        i = index + len(self._segments) if index < 0 else index
        if not 0 <= i < len(self._segments):
            raise IndexError(f"Segment index {index} out of range for path {self}")
        copy = list(self._segments)
        copy[i] = segment
        return Path(copy)

    def get_canonical_path(self) -> 'Path':
        """Return this path without its array indices.

        Examples:
            >>> Path.of('identifications.0.scientificName').get_canonical_path()
            Path('identifications.scientificName')
        """
        return Path(s for s in self._segments if not is_array_index(s))

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __contains__(self, segment) -> bool:
        return segment in self._segments

    def __bool__(self) -> bool:
        return bool(self._segments)

    def _sort_key(self):
        # the null segment sorts before every string
        return tuple((0, '') if s is None else (1, s) for s in self._segments)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments

    def __lt__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._segments)
        return self._hash

    def __str__(self) -> str:
        if self._str is None:
            self._str = SEP.join(escape(s) for s in self._segments)
        return self._str

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"

    def __reduce__(self):
        # rebuild through __new__ so the empty path stays a singleton
        return (Path, (self._segments,))

    def __copy__(self) -> 'Path':
        return self

    def __deepcopy__(self, memo) -> 'Path':
        return self


EMPTY_PATH = Path.__new__(Path, ())
Path._empty = EMPTY_PATH
