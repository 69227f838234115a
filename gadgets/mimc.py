"""MiMC hash gadget."""

from dataclasses import dataclass
from typing import List, Tuple

from constraints.fp_var import FpVar
from crh.mimc import MiMCParameters, mimc_sponge
from gadgets.base import CRHGadget
from primitives.field import FieldType


@dataclass(frozen=True)
class MiMCParametersVar:
    """MiMC parameters as circuit constants."""
    k: FpVar
    round_keys: Tuple[FpVar, ...]
    num_outputs: int = 1

    @classmethod
    def new_constant(cls, field: FieldType, parameters: MiMCParameters) -> "MiMCParametersVar":
        return cls(
            k=FpVar.constant(field, parameters.k),
            round_keys=tuple(FpVar.constant(field, c) for c in parameters.round_keys),
            num_outputs=parameters.num_outputs,
        )


class MiMCCRHGadget(CRHGadget):
    """MiMC hash over FpVars; matches crh.mimc.MiMCCRH."""

    def permute(self, parameters: MiMCParametersVar, state: List[FpVar]) -> List[FpVar]:
        return mimc_sponge(self.rounds, parameters, state, FpVar.zero(self.field))
