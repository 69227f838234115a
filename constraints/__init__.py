"""Constraint system and circuit variables.

The hash gadgets only use a small capability surface from this package:
allocate constants, inputs and witnesses, add, multiply, enforce equality and
read back values. ConstraintSystem records rank-1 constraints over a galois
prime field; FpVar, Boolean and UInt8 are the variable types built on it.
"""

from .boolean import Boolean, UInt8, bytes_value
from .errors import AssignmentMissingError, SynthesisError, UnsatisfiableConstraintError
from .fp_var import FpVar
from .packing import to_field_var_elements
from .system import (
    ONE,
    AllocationMode,
    ConstraintSystem,
    LinearCombination,
    SynthesisMode,
)

__all__ = [
    # System
    "ConstraintSystem",
    "LinearCombination",
    "AllocationMode",
    "SynthesisMode",
    "ONE",
    # Variables
    "FpVar",
    "Boolean",
    "UInt8",
    "bytes_value",
    # Packing
    "to_field_var_elements",
    # Errors
    "SynthesisError",
    "AssignmentMissingError",
    "UnsatisfiableConstraintError",
]
