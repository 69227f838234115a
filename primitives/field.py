"""Prime fields GF(p) for the pairing-friendly curves the hashes are instantiated over.

Uses galois library for all field arithmetic. Each field is built with a known
multiplicative generator and verify=False, which skips factoring p - 1 (a few
seconds for 254+ bit primes) at import time.

Serialization matches the arkworks ToBytes layout: little-endian, padded to a
whole number of 64-bit limbs.
"""

import galois
from typing import Type

from primitives.errors import NonCanonicalInputError

# --- Field Construction ---

BN254_FR_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

BLS12_381_FR_PRIME = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

BLS12_381_FQ_PRIME = int(
    "1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffaaab",
    16,
)

BN254_FR = galois.GF(BN254_FR_PRIME, primitive_element=5, verify=False)
"""Scalar field of BN254 (base field of ed-on-bn254), 254 bits."""

BLS12_381_FR = galois.GF(BLS12_381_FR_PRIME, primitive_element=7, verify=False)
"""Scalar field of BLS12-381 (base field of ed-on-bls12-381), 255 bits."""

BLS12_381_FQ = galois.GF(BLS12_381_FQ_PRIME, primitive_element=2, verify=False)
"""Base field of BLS12-381, 381 bits."""

FieldType = Type[galois.FieldArray]


# --- Field Properties ---

def modulus_bits(field: FieldType) -> int:
    """Bit length of the field characteristic."""
    return int(field.characteristic).bit_length()


def byte_size(field: FieldType) -> int:
    """Serialized size of one element: the modulus rounded up to whole 64-bit limbs."""
    return (modulus_bits(field) + 63) // 64 * 8


# --- Serialization ---

def to_bytes(field: FieldType, *elements) -> bytes:
    """Serialize elements as concatenated little-endian fixed-width integers."""
    size = byte_size(field)
    return b"".join(int(field(e)).to_bytes(size, "little") for e in elements)


def from_bytes(field: FieldType, data: bytes):
    """Deserialize one element written by to_bytes.

    Raises:
        ValueError: If data is not exactly byte_size(field) long.
        NonCanonicalInputError: If the encoded integer is not below the modulus.
    """
    size = byte_size(field)
    if len(data) != size:
        raise ValueError(f"expected {size} bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= field.characteristic:
        raise NonCanonicalInputError(
            f"encoded value is not below the field modulus ({modulus_bits(field)}-bit field)"
        )
    return field(value)
