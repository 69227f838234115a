"""Native hash evaluation: S-box, MiMC and Poseidon permutations, CRH interface."""

from .base import CRH, check_equal_length
from .mimc import MiMCCRH, MiMCParameters, MiMCRounds, feistel, mimc_sponge
from .poseidon import (
    PoseidonCRH,
    PoseidonParameters,
    PoseidonRounds,
    add_round_keys,
    apply_linear_layer,
    full_round,
    partial_round,
    poseidon_permutation,
)
from .presets import MIMC_220, POSEIDON_X5_3, POSEIDON_X5_5
from .sbox import PoseidonSbox, SboxKind

__all__ = [
    # Interface
    "CRH",
    "check_equal_length",
    # S-box
    "PoseidonSbox",
    "SboxKind",
    # MiMC
    "MiMCRounds",
    "MiMCParameters",
    "MiMCCRH",
    "feistel",
    "mimc_sponge",
    # Poseidon
    "PoseidonRounds",
    "PoseidonParameters",
    "PoseidonCRH",
    "add_round_keys",
    "apply_linear_layer",
    "full_round",
    "partial_round",
    "poseidon_permutation",
    # Presets
    "POSEIDON_X5_3",
    "POSEIDON_X5_5",
    "MIMC_220",
]
