"""Poseidon hash gadget."""

from dataclasses import dataclass
from typing import List, Tuple

from constraints.fp_var import FpVar
from crh.poseidon import PoseidonParameters, PoseidonRounds, poseidon_permutation
from gadgets.base import CRHGadget
from primitives.field import FieldType


@dataclass(frozen=True)
class PoseidonParametersVar:
    """Poseidon parameters as circuit constants."""
    round_keys: Tuple[FpVar, ...]
    mds_matrix: Tuple[Tuple[FpVar, ...], ...]

    @classmethod
    def new_constant(cls, field: FieldType, parameters: PoseidonParameters) -> "PoseidonParametersVar":
        return cls(
            round_keys=tuple(FpVar.constant(field, c) for c in parameters.round_keys),
            mds_matrix=tuple(tuple(FpVar.constant(field, m) for m in row) for row in parameters.mds_matrix),
        )


class PoseidonCRHGadget(CRHGadget):
    """Poseidon hash over FpVars; matches crh.poseidon.PoseidonCRH.

    Raises UnsupportedSboxError at construction if the configured S-box has no
    circuit realization.
    """

    def __init__(self, field: FieldType, rounds: PoseidonRounds):
        rounds.sbox.check_synthesizable()
        super().__init__(field, rounds)

    def permute(self, parameters: PoseidonParametersVar, state: List[FpVar]) -> List[FpVar]:
        return poseidon_permutation(self.rounds, parameters, state, self.rounds.sbox.synthesize)
