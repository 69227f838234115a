"""MiMC Feistel-network hash.

The permutation functions here only use +, * on their operands, so the same
code runs natively on galois elements (MiMCCRH) and in-circuit on FpVars
(gadgets.mimc.MiMCCRHGadget). Both evaluators therefore consume the same round
constants in the same order by construction.

Round schedule of one Feistel evaluation over R rounds:
    i = 0       : swap the halves, no round key
    0 < i < R-1 : t = k + x_l + c[i-1];  (x_l, x_r) <- (x_r + t^5, x_l)
    i = R-1     : t = k + x_l;           x_r <- x_r + t^5, no swap
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from crh.base import CRH
from primitives.errors import ParameterMismatchError
from primitives.field import FieldType

# --- Configuration ---


@dataclass(frozen=True)
class MiMCRounds:
    """Static MiMC configuration.

    Attributes:
        rounds: Rounds per Feistel evaluation
        width: Number of packed input elements absorbed
    """
    rounds: int
    width: int

    def __post_init__(self):
        if self.rounds < 3:
            raise ValueError(f"MiMC needs at least 3 rounds, got {self.rounds}")
        if self.width < 1:
            raise ValueError(f"width must be positive, got {self.width}")

    @property
    def num_round_keys(self) -> int:
        """First and last rounds use no round key."""
        return self.rounds - 2

    def check_parameters(self, parameters: "MiMCParameters") -> None:
        if len(parameters.round_keys) != self.num_round_keys:
            raise ParameterMismatchError(
                f"MiMC with {self.rounds} rounds needs {self.num_round_keys} round keys, "
                f"got {len(parameters.round_keys)}"
            )
        if parameters.num_outputs < 0:
            raise ParameterMismatchError(f"num_outputs must be >= 0, got {parameters.num_outputs}")


@dataclass(frozen=True)
class MiMCParameters:
    """Concrete MiMC constants, read-only once built.

    Attributes:
        k: Key constant added every round (public, despite the name)
        round_keys: rounds - 2 round constants
        num_outputs: Extra Feistel evaluations squeezed after absorption
    """
    k: object
    round_keys: Tuple
    num_outputs: int = 1

    def __post_init__(self):
        object.__setattr__(self, "round_keys", tuple(self.round_keys))

    @classmethod
    def new(cls, field: FieldType, k: int, round_keys: Sequence[int], num_outputs: int = 1) -> "MiMCParameters":
        """Build parameters from plain integers."""
        return cls(field(k), tuple(field(c) for c in round_keys), num_outputs)


# --- Permutation ---


def feistel(rounds: MiMCRounds, parameters, left, right) -> Tuple:
    """One Feistel evaluation; returns (x_l, x_r).

    Raises:
        ParameterMismatchError: If parameters do not fit rounds.
    """
    rounds.check_parameters(parameters)
    x_l, x_r = left, right
    last = rounds.rounds - 1
    for i in range(rounds.rounds):
        if i == 0:
            x_l, x_r = x_r, x_l
            continue
        t = parameters.k + x_l
        if i < last:
            t = t + parameters.round_keys[i - 1]
        t2 = t * t
        t4 = t2 * t2
        t5 = t4 * t
        if i < last:
            x_l, x_r = x_r + t5, x_l
        else:
            x_r = x_r + t5
    return x_l, x_r


def mimc_sponge(rounds: MiMCRounds, parameters, state: Sequence, zero) -> List:
    """Absorb width elements, then squeeze num_outputs more.

    Returns [l after absorption, l after squeeze 1, ..., l after squeeze n].
    zero is the additive identity of the operand type (field element or FpVar).
    """
    rounds.check_parameters(parameters)
    if len(state) != rounds.width:
        raise ParameterMismatchError(f"MiMC state must have {rounds.width} elements, got {len(state)}")

    l_out, r_out = feistel(rounds, parameters, state[0], zero)
    for x in state[1:]:
        l_out, r_out = feistel(rounds, parameters, l_out + x, r_out)

    outputs = [l_out]
    for _ in range(parameters.num_outputs):
        l_out, r_out = feistel(rounds, parameters, l_out, r_out)
        outputs.append(l_out)
    return outputs


# --- Hash ---


class MiMCCRH(CRH):
    """MiMC hash evaluated on galois field elements."""

    def permute(self, parameters: MiMCParameters, state: list) -> list:
        return mimc_sponge(self.rounds, parameters, state, self.field(0))
