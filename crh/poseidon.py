"""Poseidon substitution-permutation-network hash.

Rounds run in three phases: full_rounds/2 full rounds, partial_rounds partial
rounds, full_rounds/2 full rounds. Every round adds one round key to every
state element, so the round keys are consumed as a single sequential stream.
The position in that stream (the cursor) is passed into and returned from
every round function rather than kept as hidden state, so the lock-step
consumption of keys can be checked round by round.

As with MiMC, the round functions are written against +, * only and are shared
between PoseidonCRH (galois elements) and gadgets.poseidon.PoseidonCRHGadget
(FpVars). The S-box is passed in as sbox_fn: PoseidonSbox.apply natively,
PoseidonSbox.synthesize in-circuit.
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from crh.base import CRH
from crh.sbox import PoseidonSbox
from primitives.errors import ParameterMismatchError
from primitives.field import FieldType

SboxFn = Callable[[object], object]

# --- Configuration ---


@dataclass(frozen=True)
class PoseidonRounds:
    """Static Poseidon configuration.

    Attributes:
        width: State size
        full_rounds: Total full rounds, split evenly before and after the partial rounds
        partial_rounds: Rounds that apply the S-box to element 0 only
        sbox: Nonlinear step
    """
    width: int
    full_rounds: int
    partial_rounds: int
    sbox: PoseidonSbox

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.full_rounds % 2:
            raise ValueError(f"full_rounds must be even, got {self.full_rounds}")
        if self.partial_rounds < 0:
            raise ValueError(f"partial_rounds must be >= 0, got {self.partial_rounds}")

    @property
    def num_round_keys(self) -> int:
        return (self.full_rounds + self.partial_rounds) * self.width

    def check_parameters(self, parameters: "PoseidonParameters") -> None:
        if len(parameters.round_keys) != self.num_round_keys:
            raise ParameterMismatchError(
                f"Poseidon width {self.width} with {self.full_rounds}+{self.partial_rounds} rounds "
                f"needs {self.num_round_keys} round keys, got {len(parameters.round_keys)}"
            )
        if len(parameters.mds_matrix) != self.width or any(
            len(row) != self.width for row in parameters.mds_matrix
        ):
            raise ParameterMismatchError(f"mixing matrix must be {self.width}x{self.width}")


@dataclass(frozen=True)
class PoseidonParameters:
    """Concrete Poseidon constants, read-only once built.

    Attributes:
        round_keys: (full_rounds + partial_rounds) * width round constants
        mds_matrix: width x width mixing matrix, row-major
    """
    round_keys: Tuple
    mds_matrix: Tuple[Tuple, ...]

    def __post_init__(self):
        object.__setattr__(self, "round_keys", tuple(self.round_keys))
        object.__setattr__(self, "mds_matrix", tuple(tuple(row) for row in self.mds_matrix))

    @classmethod
    def new(
        cls,
        field: FieldType,
        round_keys: Sequence[int],
        mds_matrix: Sequence[Sequence[int]],
    ) -> "PoseidonParameters":
        """Build parameters from plain integers."""
        return cls(
            tuple(field(c) for c in round_keys),
            tuple(tuple(field(m) for m in row) for row in mds_matrix),
        )


# --- Round Functions ---


def add_round_keys(state: Sequence, round_keys: Sequence, offset: int) -> Tuple[List, int]:
    """Add the next len(state) round keys; returns (state, advanced cursor)."""
    return [x + round_keys[offset + i] for i, x in enumerate(state)], offset + len(state)


def apply_linear_layer(state: Sequence, mds_matrix: Sequence[Sequence]) -> List:
    """state <- mds_matrix * state."""
    new_state = []
    for row in mds_matrix:
        acc = row[0] * state[0]
        for m, x in zip(row[1:], state[1:]):
            acc = acc + m * x
        new_state.append(acc)
    return new_state


def full_round(state: Sequence, parameters, offset: int, sbox_fn: SboxFn) -> Tuple[List, int]:
    """Round keys and S-box on every element, then mix."""
    state, offset = add_round_keys(state, parameters.round_keys, offset)
    state = [sbox_fn(x) for x in state]
    return apply_linear_layer(state, parameters.mds_matrix), offset


def partial_round(state: Sequence, parameters, offset: int, sbox_fn: SboxFn) -> Tuple[List, int]:
    """Round keys on every element, S-box on element 0 only, then mix."""
    state, offset = add_round_keys(state, parameters.round_keys, offset)
    state[0] = sbox_fn(state[0])
    return apply_linear_layer(state, parameters.mds_matrix), offset


def poseidon_permutation(rounds: PoseidonRounds, parameters, state: Sequence, sbox_fn: SboxFn) -> List:
    """Full permutation of a width-element state.

    Raises:
        ParameterMismatchError: If parameters or state do not fit rounds.
    """
    rounds.check_parameters(parameters)
    if len(state) != rounds.width:
        raise ParameterMismatchError(f"Poseidon state must have {rounds.width} elements, got {len(state)}")

    state = list(state)
    offset = 0
    for _ in range(rounds.full_rounds // 2):
        state, offset = full_round(state, parameters, offset, sbox_fn)
    for _ in range(rounds.partial_rounds):
        state, offset = partial_round(state, parameters, offset, sbox_fn)
    for _ in range(rounds.full_rounds // 2):
        state, offset = full_round(state, parameters, offset, sbox_fn)

    if offset != rounds.num_round_keys:
        raise ParameterMismatchError(f"consumed {offset} of {rounds.num_round_keys} round keys")
    return state


# --- Hash ---


class PoseidonCRH(CRH):
    """Poseidon hash evaluated on galois field elements."""

    def permute(self, parameters: PoseidonParameters, state: list) -> list:
        return poseidon_permutation(self.rounds, parameters, state, self.rounds.sbox.apply)
