"""Error vocabulary shared by path readers and writers."""

from enum import Enum
from typing import Any, Optional


class InvalidPathError(ValueError):
    """Raised when a path argument is malformed or missing."""
    pass


class ErrorCode(Enum):
    """Symbolic constants for read/write failures."""

    NOT_APPLICABLE = 'NOT_APPLICABLE'
    """The segment does not name a property of the record being processed."""

    INDEX_EXPECTED = 'INDEX_EXPECTED'
    """A list or array was reached but the segment is not an array index."""

    INDEX_OUT_OF_BOUNDS = 'INDEX_OUT_OF_BOUNDS'
    """The array index is outside the list or array being processed."""

    EMPTY_SEGMENT = 'EMPTY_SEGMENT'
    """A null or empty segment was found where only map keys may be empty."""

    TERMINAL_VALUE = 'TERMINAL_VALUE'
    """The path continues past a value that cannot be descended into."""

    EXCEPTION = 'EXCEPTION'
    """Key deserialization or the underlying container raised an exception."""

    ILLEGAL_ASSIGNMENT = 'ILLEGAL_ASSIGNMENT'
    """The value cannot be assigned to the property or array element."""


class OnError(Enum):
    """What a walker or writer does when a path cannot be followed."""

    RETURN_NULL = 'RETURN_NULL'
    THROW_EXCEPTION = 'THROW_EXCEPTION'
    RETURN_CODE = 'RETURN_CODE'


_INVALID_PATH = 'Invalid path "{path}" (segment {segment}). '


class PathWalkerException(Exception):
    """Raised when a path cannot be read or written.

    Attributes:
        error_code: The ``ErrorCode`` classifying the failure
        path: The path being walked
        segment: Index of the offending segment (``None`` if not known)
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        path: Any = None,
        segment: Optional[int] = None
    ):
        super().__init__(message)
        self.error_code = error_code
        self.path = path
        self.segment = segment

    @classmethod
    def _at(cls, code: ErrorCode, path, segment: int, detail: str):
        msg = _INVALID_PATH.format(path=path, segment=segment) + detail
        return cls(code, msg, path=path, segment=segment)

    @classmethod
    def not_applicable(cls, path, segment: int, host: Any) -> 'PathWalkerException':
        detail = f'No accessible property named "{path.segment(segment)}" in {_type_name(host)}'
        return cls._at(ErrorCode.NOT_APPLICABLE, path, segment, detail)

    @classmethod
    def index_expected(cls, path, segment: int) -> 'PathWalkerException':
        detail = f'Array index expected. Found: "{path.segment(segment)}"'
        return cls._at(ErrorCode.INDEX_EXPECTED, path, segment, detail)

    @classmethod
    def index_out_of_bounds(cls, path, segment: int, length: int) -> 'PathWalkerException':
        detail = f'Index out of bounds: {path.segment(segment)} (length {length})'
        return cls._at(ErrorCode.INDEX_OUT_OF_BOUNDS, path, segment, detail)

    @classmethod
    def empty_segment(cls, path, segment: int) -> 'PathWalkerException':
        return cls._at(
            ErrorCode.EMPTY_SEGMENT, path, segment, 'Segment must not be null or empty'
        )

    @classmethod
    def terminal_value(cls, path, segment: int, value: Any) -> 'PathWalkerException':
        if value is None:
            detail = 'Cannot proceed past null value'
        else:
            detail = f'Cannot proceed past terminal value: ({_type_name(value)}) {value!r}'
        return cls._at(ErrorCode.TERMINAL_VALUE, path, segment, detail)

    @classmethod
    def key_deserialization_failed(
        cls, path, segment: int, exc: BaseException
    ) -> 'PathWalkerException':
        detail = f'Failed to deserialize "{path.segment(segment)}" into map key: {exc}'
        return cls._at(ErrorCode.EXCEPTION, path, segment, detail)

    @classmethod
    def unexpected_error(cls, path, segment: int, exc: BaseException) -> 'PathWalkerException':
        detail = f'{type(exc).__name__}: {exc}'
        return cls._at(ErrorCode.EXCEPTION, path, segment, detail)

    @classmethod
    def illegal_assignment(
        cls, path, segment: int, exc: 'IllegalAssignment'
    ) -> 'PathWalkerException':
        return cls._at(ErrorCode.ILLEGAL_ASSIGNMENT, path, segment, str(exc))


class NoSuchProperty(LookupError):
    """Raised by a property accessor for names that are not accessible."""

    def __init__(self, record_type: type, name):
        super().__init__(f"{record_type.__name__} has no accessible property {name!r}")
        self.record_type = record_type
        self.name = name


class IllegalAssignment(TypeError):
    """Raised by a value converter when a value does not fit a property.

    Attributes:
        record_type: Class of the record being written
        name: Property name
        declared_type: The property's declared type
        value: The offending value
    """

    def __init__(self, record_type: type, name: str, declared_type: Any, value: Any):
        super().__init__(
            f"Cannot assign ({type(value).__name__}) {value!r} to "
            f"{record_type.__name__}.{name} (declared type: {_declared_name(declared_type)})"
        )
        self.record_type = record_type
        self.name = name
        self.declared_type = declared_type
        self.value = value


class PathBlockedError(ValueError):
    """Raised by ``MapWriter`` when a path runs into an existing value."""

    def __init__(self, path, value: Any):
        super().__init__(f"Key {path} already written: {value!r}")
        self.path = path
        self.value = value


def _type_name(obj: Any) -> str:
    return obj.__name__ if isinstance(obj, type) else type(obj).__name__


def _declared_name(declared_type: Any) -> str:
    if isinstance(declared_type, type):
        return declared_type.__name__
    return str(declared_type)
