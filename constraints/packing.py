"""In-circuit byte to field element packing.

Mirrors primitives.packing chunk for chunk: same chunk size, same
little-endian order, same zero padding of the trailing chunk (as constant
bytes, so padding costs no variables).
"""

from typing import List, Sequence

from constraints.boolean import Boolean, UInt8
from constraints.fp_var import FpVar
from primitives.field import FieldType
from primitives.packing import chunk_size, pad_bytes


def to_field_var_elements(field: FieldType, data: Sequence[UInt8]) -> List[FpVar]:
    """Pack byte variables into field variables.

    A chunk that does not encode a canonical field element leaves the
    circuit unsatisfiable, where native packing raises NonCanonicalInputError.
    """
    size = chunk_size(field)
    padded = pad_bytes(data, field, UInt8.constant(0))
    elements = []
    for i in range(0, len(padded), size):
        bits = [bit for byte in padded[i:i + size] for bit in byte.to_bits_le()]
        elements.append(Boolean.le_bits_to_fp_var(field, bits))
    return elements
