"""Errors raised by the hash layer.

All of these are caller or configuration mistakes. They are raised at the point
of misuse, before any partial output is produced, and are never retried.
"""


class CRHError(ValueError):
    """Base class for hash misuse errors."""


class WidthOverflowError(CRHError):
    """Input packs into more field elements than the permutation width."""

    def __init__(self, num_elements: int, width: int):
        self.num_elements = num_elements
        self.width = width
        super().__init__(
            f"incorrect input length {num_elements} for width {width}: "
            f"choose a parameter set with a wider state"
        )


class LengthMismatchError(CRHError):
    """Two-to-one combination called with operands of different lengths."""

    def __init__(self, left_len: int, right_len: int):
        self.left_len = left_len
        self.right_len = right_len
        super().__init__(
            f"two-to-one inputs must have equal length, got {left_len} and {right_len}"
        )


class NonCanonicalInputError(CRHError):
    """A packed chunk encodes an integer that is not below the field modulus."""


class ParameterMismatchError(CRHError):
    """Hash parameters do not fit the rounds configuration they are used with."""


class UnsupportedSboxError(CRHError):
    """S-box variant with no definition, or no circuit realization."""
