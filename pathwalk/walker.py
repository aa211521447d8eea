"""Reading and writing values at paths inside arbitrary object graphs.

``PathWalker`` is the public entry point. It is created for one or more
paths and an error policy, and can then be applied to any number of
objects:

    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Employee:
    ...     name: str
    ...     skills: list = field(default_factory=list)
    >>> company = {'employees': [Employee('Ann', ['python']), Employee('Bob')]}
    >>> PathWalker('employees.0.name', 'employees.0.skills.0').read_values(company)
    ['Ann', 'python']

A path that cannot be followed is a dead end. What happens then depends on
the ``OnError`` policy chosen when the walker was created:

    >>> PathWalker('employees.5.name').read(company) is None
    True
    >>> PathWalker('employees.5.name', on_error='RETURN_CODE').read(company)
    <ErrorCode.INDEX_OUT_OF_BOUNDS: 'INDEX_OUT_OF_BOUNDS'>
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Iterable, List, Optional, Union

from pathwalk.access import KeyDeserializer, PropertyAccessor, ValueConverter, identity
from pathwalk.errors import ErrorCode, InvalidPathError, OnError, PathWalkerException
from pathwalk.paths import Path
from pathwalk.readers import ObjectReader
from pathwalk.writers import ObjectWriter


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _to_path(path: PathLike) -> Path:
    if path is None:
        raise InvalidPathError("Paths must not be None")
    return Path.of(path)


class PathWalker:
    """Reads and writes the values at a fixed set of paths.

    Each path is walked independently from the object passed in. The walker
    keeps no state between calls besides its configuration, so it can be
    reused for any number of objects.

    Args:
        *paths: The paths to walk (strings are parsed); a single list or
            tuple of paths is accepted as well
        on_error: What to do with dead ends: return ``None``, raise a
            ``PathWalkerException`` or return the ``ErrorCode``. Accepts the
            enum member or its name.
        key_deserializer: Turns segments into map keys (default: the
            segment itself)
        accessor: Gets and sets record properties (default:
            ``AttributeAccessor``)
        converter: Converts values before they are assigned to record
            properties (default: ``TypeHintConverter``)
        create_missing: Whether writes create missing intermediate maps

    Raises:
        ValueError: If no paths are given or a path is ``None``
    """

    def __init__(
        self,
        *paths: PathLike,
        on_error: Union[OnError, str] = OnError.RETURN_NULL,
        key_deserializer: Optional[KeyDeserializer] = None,
        accessor: Optional[PropertyAccessor] = None,
        converter: Optional[ValueConverter] = None,
        create_missing: bool = False
    ):
        if len(paths) == 1 and isinstance(paths[0], (list, tuple)):
            paths = tuple(paths[0])
        if not paths:
            raise ValueError("At least one path is required")
        self.paths = tuple(_to_path(p) for p in paths)
        self.on_error = OnError(on_error)
        kd = key_deserializer if key_deserializer is not None else identity
        self._reader = ObjectReader(kd, accessor)
        self._writer = ObjectWriter(kd, accessor, converter, create_missing)

    def read(self, obj: Any) -> Any:
        """Return the value of the first path."""
        return self._read(obj, self.paths[0])

    def read_values(self, obj: Any) -> List[Any]:
        """Return the values of all paths, in the order the paths were given."""
        return [self._read(obj, path) for path in self.paths]

    def read_values_into(self, obj: Any, output: Union[list, MutableMapping]) -> None:
        """Store the values of all paths in ``output``.

        A list receives the values by position (as many as fit); a mutable
        mapping receives them keyed by ``Path``.
        """
        if output is None:
            raise ValueError("output must not be None")
        if isinstance(output, MutableMapping):
            for path in self.paths:
                output[path] = self._read(obj, path)
        else:
            for i in range(min(len(self.paths), len(output))):
                output[i] = self._read(obj, self.paths[i])

    def write(self, obj: Any, value: Any) -> Optional[ErrorCode]:
        """Assign ``value`` at the first path.

        Returns:
            ``None`` on success. On failure, ``None`` or the ``ErrorCode``
            depending on the policy (or a ``PathWalkerException`` is raised).
        """
        return self._write(obj, self.paths[0], value)

    def write_values(self, obj: Any, values: Iterable[Any]) -> List[Optional[ErrorCode]]:
        """Assign each value at the path in the same position.

        Returns:
            One result per path written, as for ``write``
        """
        return [self._write(obj, path, value) for path, value in zip(self.paths, values)]

    def _read(self, obj: Any, path: Path) -> Any:
        try:
            return self._reader.read(obj, path)
        except PathWalkerException as exc:
            return self._dead_end(exc)

    def _write(self, obj: Any, path: Path, value: Any) -> Optional[ErrorCode]:
        try:
            self._writer.write(obj, path, value)
        except PathWalkerException as exc:
            return self._dead_end(exc)
        return None

    def _dead_end(self, exc: PathWalkerException) -> Optional[ErrorCode]:
        if self.on_error is OnError.THROW_EXCEPTION:
            raise exc
        logger.debug("Dead end %s: %s", exc.error_code.name, exc)
        if self.on_error is OnError.RETURN_CODE:
            return exc.error_code
        return None

    def __repr__(self) -> str:
        paths = ', '.join(repr(str(p)) for p in self.paths)
        return f"PathWalker({paths}, on_error={self.on_error.name})"


def read_path(obj: Any, path: PathLike, on_error: Union[OnError, str] = OnError.RETURN_NULL, **kwargs) -> Any:
    """Read a single path.

    Args:
        obj: The object to read from
        path: Path string, ``Path`` or list of raw segments
        on_error: Dead-end policy
        **kwargs: Passed on to ``PathWalker``

    Examples:
        >>> read_path({'user': {'tags': ('a', 'b')}}, 'user.tags.1')
        'b'
    """
    return PathWalker(_to_path(path), on_error=on_error, **kwargs).read(obj)


def write_path(
    obj: Any,
    path: PathLike,
    value: Any,
    on_error: Union[OnError, str] = OnError.THROW_EXCEPTION,
    **kwargs
) -> Optional[ErrorCode]:
    """Write a single path.

    Unlike ``PathWalker``, failures raise by default.

    Examples:
        >>> data = {'user': {'tags': ['a', 'b']}}
        >>> write_path(data, 'user.tags.1', 'c')
        >>> data
        {'user': {'tags': ['a', 'c']}}
    """
    return PathWalker(_to_path(path), on_error=on_error, **kwargs).write(obj, value)
