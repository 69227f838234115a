"""Hash interface shared by the MiMC and Poseidon instantiations.

evaluate(parameters, data) packs bytes into field elements, zero-pads them to
the permutation width and runs the permutation; combine(parameters, left,
right) is the two-to-one variant used by Merkle-style accumulators.
"""

from abc import ABC, abstractmethod
from typing import Sized

from primitives.errors import LengthMismatchError
from primitives.field import FieldType
from primitives.packing import check_width, pad_to_width, to_field_elements


def check_equal_length(left: Sized, right: Sized) -> None:
    """Reject two-to-one operands of different lengths before any work is done."""
    if len(left) != len(right):
        raise LengthMismatchError(len(left), len(right))


class CRH(ABC):
    """Collision-resistant hash over a prime field, evaluated natively.

    Attributes:
        field: galois field type
        rounds: Rounds configuration (MiMCRounds or PoseidonRounds)
    """

    def __init__(self, field: FieldType, rounds):
        self.field = field
        self.rounds = rounds

    @property
    def width(self) -> int:
        return self.rounds.width

    def pack(self, data: bytes) -> list:
        """Pack bytes into exactly width field elements."""
        check_width(self.field, len(data), self.width)
        return pad_to_width(to_field_elements(self.field, data), self.width, self.field(0))

    def evaluate(self, parameters, data: bytes):
        """Hash a byte string to a field element.

        Raises:
            WidthOverflowError: If data packs into more than width elements.
            ParameterMismatchError: If parameters do not fit the rounds configuration.
        """
        self.rounds.check_parameters(parameters)
        return self.permute(parameters, self.pack(bytes(data)))[0]

    def combine(self, parameters, left: bytes, right: bytes):
        """Hash the concatenation of two equal-length byte strings.

        Raises:
            LengthMismatchError: If left and right differ in length.
        """
        check_equal_length(left, right)
        return self.evaluate(parameters, bytes(left) + bytes(right))

    @abstractmethod
    def permute(self, parameters, state: list) -> list:
        """Run the permutation on width packed elements; the hash is element 0."""
        pass
