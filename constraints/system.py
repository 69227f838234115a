"""Rank-1 constraint system.

A ConstraintSystem records constraints of the form <a, w> * <b, w> = <c, w>
over a single assignment vector w, where w[0] is the constant one. Variables
are numbered sequentially as they are allocated, so one instance must be built
by one thread of control at a time.

Coefficients and assignments are kept as plain ints reduced mod p; the galois
field type is only used at the boundary (FpVar.value()).

Example:
    cs = ConstraintSystem(BN254_FR)
    x = cs.new_witness_variable(lambda: 3)
    y = cs.new_witness_variable(lambda: 9)
    cs.enforce_constraint(LinearCombination.variable(x),
                          LinearCombination.variable(x),
                          LinearCombination.variable(y))
    assert cs.is_satisfied()
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from constraints.errors import AssignmentMissingError
from primitives.field import FieldType

logger = logging.getLogger(__name__)

# Index of the constant-one variable
ONE = 0


class SynthesisMode(Enum):
    """SETUP builds only the constraint graph; PROVE also computes the witness."""
    SETUP = "setup"
    PROVE = "prove"


class AllocationMode(Enum):
    """How a value enters the circuit."""
    CONSTANT = "constant"
    INPUT = "input"
    WITNESS = "witness"


# --- Linear Combinations ---

class LinearCombination:
    """Sparse map from variable index to coefficient."""

    __slots__ = ("terms",)

    def __init__(self, terms: Optional[Dict[int, int]] = None):
        self.terms: Dict[int, int] = terms if terms is not None else {}

    @classmethod
    def zero(cls) -> "LinearCombination":
        return cls()

    @classmethod
    def variable(cls, index: int, coeff: int = 1) -> "LinearCombination":
        return cls({index: coeff})

    @classmethod
    def constant(cls, value: int) -> "LinearCombination":
        return cls({ONE: value}) if value else cls()

    def add(self, other: "LinearCombination", modulus: int, scale: int = 1) -> "LinearCombination":
        """Return self + scale * other."""
        terms = dict(self.terms)
        for index, coeff in other.terms.items():
            c = (terms.get(index, 0) + scale * coeff) % modulus
            if c:
                terms[index] = c
            else:
                terms.pop(index, None)
        return LinearCombination(terms)

    def scale(self, factor: int, modulus: int) -> "LinearCombination":
        factor %= modulus
        if not factor:
            return LinearCombination()
        return LinearCombination({i: c * factor % modulus for i, c in self.terms.items()})

    def evaluate(self, assignment: List[int], modulus: int) -> int:
        return sum(c * assignment[i] for i, c in self.terms.items()) % modulus

    def __len__(self) -> int:
        return len(self.terms)

    def __repr__(self) -> str:
        return f"LinearCombination({self.terms})"


Constraint = Tuple[LinearCombination, LinearCombination, LinearCombination]


# --- Constraint System ---

class ConstraintSystem:
    """Sequentially allocated R1CS over a galois prime field.

    Attributes:
        field: galois field type the circuit is defined over
        modulus: Field characteristic as an int
        mode: SETUP (no witness values) or PROVE
        constraints: Recorded (a, b, c) triples
    """

    def __init__(self, field: FieldType, mode: SynthesisMode = SynthesisMode.PROVE):
        self.field = field
        self.modulus = int(field.characteristic)
        self.mode = mode
        self.constraints: List[Constraint] = []
        self._modes: List[AllocationMode] = [AllocationMode.INPUT]
        self._assignment: List[Optional[int]] = [1]

    def is_in_setup_mode(self) -> bool:
        return self.mode is SynthesisMode.SETUP

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)

    @property
    def num_instance_variables(self) -> int:
        """Public variables, including the constant one."""
        return sum(1 for m in self._modes if m is AllocationMode.INPUT)

    @property
    def num_variables(self) -> int:
        """All variables, including the constant one."""
        return len(self._assignment)

    @property
    def num_witness_variables(self) -> int:
        return sum(1 for m in self._modes if m is AllocationMode.WITNESS)

    def _new_variable(self, value_fn: Optional[Callable[[], object]], mode: AllocationMode) -> int:
        value = None
        if not self.is_in_setup_mode():
            if value_fn is None:
                raise AssignmentMissingError("no value supplied for a variable in prove mode")
            value = int(value_fn()) % self.modulus
        self._modes.append(mode)
        self._assignment.append(value)
        return len(self._assignment) - 1

    def new_input_variable(self, value_fn: Optional[Callable[[], object]]) -> int:
        """Allocate a public variable. value_fn is not called in setup mode."""
        return self._new_variable(value_fn, AllocationMode.INPUT)

    def new_witness_variable(self, value_fn: Optional[Callable[[], object]]) -> int:
        """Allocate a private variable. value_fn is not called in setup mode."""
        return self._new_variable(value_fn, AllocationMode.WITNESS)

    def assigned_value(self, index: int) -> Optional[int]:
        return self._assignment[index]

    def set_assigned_value(self, index: int, value: int) -> None:
        """Overwrite an assignment. Only useful for testing soundness."""
        self._assignment[index] = int(value) % self.modulus

    def enforce_constraint(self, a: LinearCombination, b: LinearCombination, c: LinearCombination) -> None:
        self.constraints.append((a, b, c))

    def which_is_unsatisfied(self) -> Optional[int]:
        """Index of the first violated constraint, or None if all hold.

        Raises:
            AssignmentMissingError: In setup mode, where there is no witness.
        """
        if self.is_in_setup_mode():
            raise AssignmentMissingError("constraint system in setup mode has no assignment")
        p = self.modulus
        w = self._assignment
        for i, (a, b, c) in enumerate(self.constraints):
            if a.evaluate(w, p) * b.evaluate(w, p) % p != c.evaluate(w, p):
                logger.debug("constraint %d of %d is unsatisfied", i, len(self.constraints))
                return i
        return None

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None
