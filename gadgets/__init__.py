"""Circuit gadgets mirroring the native hashes and the mixer scheme."""

from .base import CRHGadget
from .mimc import MiMCCRHGadget, MiMCParametersVar
from .mixer import MixerLeafGadget, PrivateVar
from .poseidon import PoseidonCRHGadget, PoseidonParametersVar

__all__ = [
    "CRHGadget",
    "MiMCCRHGadget",
    "MiMCParametersVar",
    "PoseidonCRHGadget",
    "PoseidonParametersVar",
    "MixerLeafGadget",
    "PrivateVar",
]
