"""Incremental construction of nested maps from path/value pairs."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pathwalk.errors import InvalidPathError, PathBlockedError
from pathwalk.paths import EMPTY_PATH, Path


logger = logging.getLogger(__name__)

_MISSING = object()


class MapWriter:
    """Builds a nested ``dict`` from (path, value) pairs.

    Intermediate maps are created as needed. A key that holds a value can
    never be turned into a map, and a key that holds a map can never be
    overwritten with a value; both raise ``PathBlockedError``. Writing a
    value over a value simply replaces it.

    Examples:
        >>> mw = MapWriter()
        >>> mw.write('person.address.street', 'X').write('person.firstName', 'John')
        MapWriter(root='')
        >>> mw.get_map()
        {'person': {'address': {'street': 'X'}, 'firstName': 'John'}}

        >>> mw.in_('person.address').write('city', 'Springfield').get_map()
        {'person': {'address': {'street': 'X', 'city': 'Springfield'}, 'firstName': 'John'}}
    """

    def __init__(self, root: Optional[Dict[str, Any]] = None):
        """Initialize a MapWriter.

        Args:
            root: Map to write into. It is used as is, not copied.

        Raises:
            TypeError: If the map contains non-string keys
        """
        self._root = root if root is not None else {}
        _check_keys(self._root, EMPTY_PATH)
        self._prefix = EMPTY_PATH
        self._map = self._root

    @classmethod
    def _scoped(cls, parent: 'MapWriter', prefix: Path, submap: Dict[str, Any]) -> 'MapWriter':
        writer = cls.__new__(cls)
        writer._root = parent._root
        writer._prefix = prefix
        writer._map = submap
        return writer

    def in_(self, path: Union[str, Path]) -> 'MapWriter':
        """Return a writer for the map at ``path``, relative to this writer.

        Missing maps along the way are created.

        Raises:
            PathBlockedError: If a value is already bound along ``path``
        """
        rel = _relative(path)
        target = self._map
        for i, key in enumerate(rel):
            here = self._absolute(rel, i)
            child = target.get(key, _MISSING)
            if child is _MISSING:
                child = target[key] = {}
            elif not isinstance(child, Mapping):
                self._blocked(here, child)
            target = child
        return MapWriter._scoped(self, Path(self._prefix.segments + rel.segments), target)

    def write(self, path: Union[str, Path], value: Any) -> 'MapWriter':
        """Bind ``value`` to ``path``, relative to this writer.

        Returns:
            This writer, so calls can be chained

        Raises:
            TypeError: If ``value`` is a mapping
            PathBlockedError: If ``path`` runs through a value, or ends at
                a map
        """
        if isinstance(value, Mapping):
            raise TypeError("Maps are created implicitly; write their entries instead")
        rel = _relative(path)
        target = self._map
        last = len(rel) - 1
        for i, key in enumerate(rel):
            current = target.get(key, _MISSING)
            if i == last:
                if isinstance(current, Mapping):
                    self._blocked(self._absolute(rel, i), current)
                target[key] = value
            elif current is _MISSING:
                child = target[key] = {}
                target = child
            elif isinstance(current, Mapping):
                target = current
            else:
                self._blocked(self._absolute(rel, i), current)
        return self

    def wrote(self, path: Union[str, Path]) -> bool:
        """Whether a value or map is bound to ``path``, relative to this writer."""
        target: Any = self._map
        for key in _relative(path):
            if not isinstance(target, Mapping) or key not in target:
                return False
            target = target[key]
        return True

    def get_map(self) -> Dict[str, Any]:
        """Return the root map (the live object, not a copy)."""
        return self._root

    def _absolute(self, rel: Path, i: int) -> Path:
        return Path(self._prefix.segments + rel.segments[:i + 1])

    def _blocked(self, path: Path, value: Any):
        logger.debug("Path %s blocked by %r", path, value)
        raise PathBlockedError(path, value)

    def __repr__(self) -> str:
        return f"MapWriter(root={str(self._prefix)!r})"


def _relative(path: Union[str, Path]) -> Path:
    if path is None:
        raise InvalidPathError("Path must not be None")
    rel = Path.of(path)
    if rel.is_empty():
        raise InvalidPathError("Path must not be empty")
    if None in rel:
        raise InvalidPathError(f"Null segments are not allowed in map paths: {rel}")
    return rel


def _check_keys(mapping: Mapping, path: Path) -> None:
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise TypeError(
                f"Illegal key type in map at path [{path}]: {type(key).__name__}"
            )
        if isinstance(value, Mapping):
            _check_keys(value, Path(path.segments + (key,)))
