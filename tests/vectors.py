"""Deterministic test parameters.

Round keys are BLAKE2b expansions of a seed reduced mod p, and mixing matrices
are Cauchy matrices M[i][j] = 1 / (i + width + j). They are reproducible, not
secure; real parameter sets come from external parameter generation.
"""

import hashlib
from typing import List

from crh.mimc import MiMCParameters, MiMCRounds
from crh.poseidon import PoseidonParameters, PoseidonRounds


def derive_constants(field, seed: bytes, count: int) -> List[int]:
    p = int(field.characteristic)
    constants = []
    for i in range(count):
        digest = hashlib.blake2b(seed + i.to_bytes(4, "little"), digest_size=64).digest()
        constants.append(int.from_bytes(digest, "little") % p)
    return constants


def cauchy_matrix(field, width: int) -> List[List[int]]:
    p = int(field.characteristic)
    return [[pow(i + width + j, -1, p) for j in range(width)] for i in range(width)]


def poseidon_parameters(field, rounds: PoseidonRounds, seed: bytes = b"poseidon") -> PoseidonParameters:
    return PoseidonParameters.new(
        field,
        derive_constants(field, seed, rounds.num_round_keys),
        cauchy_matrix(field, rounds.width),
    )


def mimc_parameters(
    field,
    rounds: MiMCRounds,
    k: int = 3,
    num_outputs: int = 1,
    seed: bytes = b"mimc",
) -> MiMCParameters:
    return MiMCParameters.new(field, k, derive_constants(field, seed, rounds.num_round_keys), num_outputs)
