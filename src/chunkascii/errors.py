import operator


class ChunkAsciiError(Exception):
    """Base class for errors raised by chunkascii."""


class LoadError(ChunkAsciiError):
    """The referenced image could not be fetched or decoded."""


class InvalidParameter(ChunkAsciiError, ValueError):
    """A chunk size or pixel buffer argument is out of range."""


def check_integer(name: str, value) -> int:
    """Return value as a plain int, accepting any integer type (numpy included) except bool."""
    if isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError as e:
        raise InvalidParameter(f"{name} must be an integer, got {value!r}") from e


def check_chunk_size(name: str, value) -> int:
    value = check_integer(name, value)
    if value < 1:
        raise InvalidParameter(f"{name} must be >= 1, got {value}")
    return value
