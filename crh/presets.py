"""Named rounds configurations.

Parameters (round keys, mixing matrices) for these are produced by external
parameter generation and are not shipped here.
"""

from crh.mimc import MiMCRounds
from crh.poseidon import PoseidonRounds
from crh.sbox import PoseidonSbox

# Poseidon, x^5 S-box, state width 3
POSEIDON_X5_3 = PoseidonRounds(
    width=3,
    full_rounds=8,
    partial_rounds=57,
    sbox=PoseidonSbox.exponentiation(5),
)

# Poseidon, x^5 S-box, state width 5
POSEIDON_X5_5 = PoseidonRounds(
    width=5,
    full_rounds=8,
    partial_rounds=60,
    sbox=PoseidonSbox.exponentiation(5),
)

# MiMC with 220 rounds over ed-on-bn254's base field
MIMC_220 = MiMCRounds(rounds=220, width=3)
