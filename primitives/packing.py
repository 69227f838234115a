"""Byte string to field element packing.

Bytes are cut into chunks of byte_size(field) bytes (32 for 254/255-bit fields,
48 for 381-bit ones), the trailing partial chunk is padded with zero bytes, and
each chunk is read as a little-endian integer. The in-circuit packing in
constraints.packing uses the same chunking so both paths agree element for
element.
"""

from typing import List, Sequence, TypeVar

from primitives.errors import NonCanonicalInputError, WidthOverflowError
from primitives.field import FieldType, byte_size

T = TypeVar("T")


def chunk_size(field: FieldType) -> int:
    """Number of input bytes packed into one field element."""
    return byte_size(field)


def num_chunks(field: FieldType, length: int) -> int:
    """Number of field elements a byte string of the given length packs into."""
    size = chunk_size(field)
    return (length + size - 1) // size


def check_width(field: FieldType, length: int, width: int) -> None:
    """Reject inputs that pack into more than width elements.

    Runs before any packing or hashing so that nothing is produced for an
    oversized input.
    """
    count = num_chunks(field, length)
    if count > width:
        raise WidthOverflowError(count, width)


def pad_bytes(data: Sequence[T], field: FieldType, zero: T) -> List[T]:
    """Right-pad a byte sequence with zero up to a multiple of the chunk size."""
    size = chunk_size(field)
    padding = (size - len(data) % size) % size
    return list(data) + [zero] * padding


def to_field_elements(field: FieldType, data: bytes) -> list:
    """Pack bytes into field elements.

    Raises:
        NonCanonicalInputError: If a chunk's integer value is not below the modulus.
    """
    size = chunk_size(field)
    padded = bytes(pad_bytes(data, field, 0))
    elements = []
    for i in range(0, len(padded), size):
        value = int.from_bytes(padded[i:i + size], "little")
        if value >= field.characteristic:
            raise NonCanonicalInputError(
                f"chunk {i // size} of the input is not a canonical field element"
            )
        elements.append(field(value))
    return elements


def pad_to_width(elements: Sequence[T], width: int, zero: T) -> List[T]:
    """Right-pad packed elements with zero up to exactly width elements."""
    if len(elements) > width:
        raise WidthOverflowError(len(elements), width)
    return list(elements) + [zero] * (width - len(elements))
