"""Mixer commitment scheme in-circuit.

The secrets are allocated as witnesses and decomposed into their canonical
little-endian bytes (FpVar.to_bytes), which are exactly the bytes
leaf.mixer.MixerLeaf hashes natively.
"""

from dataclasses import dataclass
from typing import Optional

from constraints.fp_var import FpVar
from constraints.system import ConstraintSystem
from gadgets.base import CRHGadget
from leaf.mixer import Private


@dataclass
class PrivateVar:
    """Deposit secrets as circuit witnesses."""
    r: FpVar
    nullifier: FpVar
    rho: FpVar

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, secrets: Optional[Private]) -> "PrivateVar":
        """Allocate the secrets; secrets may be None in setup mode."""
        def value_of(name):
            if secrets is None:
                return None
            return lambda: getattr(secrets, name)

        return cls(
            r=FpVar.new_witness(cs, value_of("r")),
            nullifier=FpVar.new_witness(cs, value_of("nullifier")),
            rho=FpVar.new_witness(cs, value_of("rho")),
        )


class MixerLeafGadget:
    """Computes mixer leaves and nullifier hashes as constraints."""

    def __init__(self, crh: CRHGadget):
        self.crh = crh

    def create_leaf(self, secrets: PrivateVar, public: Optional[object], parameters) -> FpVar:
        if public is not None:
            raise ValueError("mixer leaves take no public input")
        data = secrets.r.to_bytes() + secrets.nullifier.to_bytes() + secrets.rho.to_bytes()
        return self.crh.evaluate(parameters, data)

    def create_nullifier(self, secrets: PrivateVar, parameters) -> FpVar:
        nullifier_bytes = secrets.nullifier.to_bytes()
        return self.crh.evaluate(parameters, nullifier_bytes + nullifier_bytes)
