"""In-circuit hash interface.

CRHGadget mirrors crh.base.CRH step for step: the same width check, the same
byte packing (constraints.packing), the same zero padding and the same
permutation code, applied to FpVars. Parameters must be allocated as circuit
constants (see the ParametersVar classes) since they are public.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from constraints.boolean import UInt8
from constraints.fp_var import FpVar
from constraints.packing import to_field_var_elements
from crh.base import check_equal_length
from primitives.field import FieldType
from primitives.packing import check_width, pad_to_width

logger = logging.getLogger(__name__)


class CRHGadget(ABC):
    """Collision-resistant hash evaluated as constraints.

    Attributes:
        field: galois field type of the constraint system
        rounds: Rounds configuration, identical to the native hash's
    """

    def __init__(self, field: FieldType, rounds):
        self.field = field
        self.rounds = rounds

    @property
    def width(self) -> int:
        return self.rounds.width

    def pack(self, data: Sequence[UInt8]) -> List[FpVar]:
        """Pack byte variables into exactly width field variables."""
        check_width(self.field, len(data), self.width)
        return pad_to_width(to_field_var_elements(self.field, data), self.width, FpVar.zero(self.field))

    def evaluate(self, parameters, data: Sequence[UInt8]) -> FpVar:
        """Hash byte variables to a field variable.

        Raises:
            WidthOverflowError: If data packs into more than width elements;
                raised before any constraint is added.
        """
        self.rounds.check_parameters(parameters)
        output = self.permute(parameters, self.pack(data))[0]
        if output.cs is not None:
            logger.debug(
                "%s: %d input bytes, constraint system now has %d constraints",
                type(self).__name__, len(data), output.cs.num_constraints,
            )
        return output

    def combine(self, parameters, left: Sequence[UInt8], right: Sequence[UInt8]) -> FpVar:
        """Hash the concatenation of two equal-length byte vectors.

        Raises:
            LengthMismatchError: If left and right differ in length.
        """
        check_equal_length(left, right)
        return self.evaluate(parameters, list(left) + list(right))

    @abstractmethod
    def permute(self, parameters, state: List[FpVar]) -> List[FpVar]:
        """Run the permutation on width packed variables; the hash is element 0."""
        pass
