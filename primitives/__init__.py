"""Primitives - prime fields, byte packing and hash errors."""

from primitives.errors import (
    CRHError,
    LengthMismatchError,
    NonCanonicalInputError,
    ParameterMismatchError,
    UnsupportedSboxError,
    WidthOverflowError,
)
from primitives.field import (
    BLS12_381_FQ,
    BLS12_381_FR,
    BN254_FR,
    byte_size,
    from_bytes,
    modulus_bits,
    to_bytes,
)
from primitives.packing import (
    check_width,
    chunk_size,
    num_chunks,
    pad_to_width,
    to_field_elements,
)

__all__ = [
    # Field
    "BN254_FR",
    "BLS12_381_FR",
    "BLS12_381_FQ",
    "modulus_bits",
    "byte_size",
    "to_bytes",
    "from_bytes",
    # Packing
    "chunk_size",
    "num_chunks",
    "check_width",
    "pad_to_width",
    "to_field_elements",
    # Errors
    "CRHError",
    "WidthOverflowError",
    "LengthMismatchError",
    "NonCanonicalInputError",
    "ParameterMismatchError",
    "UnsupportedSboxError",
]
