"""Poseidon S-box strategy.

The S-box is a closed tagged variant: every kind must have both a native
evaluation (apply) and an in-circuit one (synthesize) before it is admitted,
because an S-box without a sound circuit definition would produce a circuit
that does not match the native hash.

Only the exponentiation family x^d is defined. Inverse S-boxes need a
non-deterministic witness and are not provided.
"""

from dataclasses import dataclass
from enum import Enum

from constraints.fp_var import FpVar
from primitives.errors import UnsupportedSboxError


class SboxKind(Enum):
    EXPONENTIATION = "exponentiation"


# Kinds with an in-circuit realization
SYNTHESIZABLE_KINDS = frozenset({SboxKind.EXPONENTIATION})


def exponentiate(x, degree: int):
    """x^degree by square-and-multiply.

    Computes x^2, x^4, ... and multiplies together the powers selected by the
    binary expansion of degree, lowest first. Works on galois elements and on
    FpVars; on FpVars each product is one multiplication constraint
    (x^5 costs three: x^2, x^4, x * x^4).
    """
    result = None
    power = x
    while True:
        if degree & 1:
            result = power if result is None else result * power
        degree >>= 1
        if not degree:
            return result
        power = power * power


@dataclass(frozen=True)
class PoseidonSbox:
    """Nonlinear step applied to state elements.

    Attributes:
        kind: Variant tag
        degree: Exponent for SboxKind.EXPONENTIATION
    """
    kind: SboxKind
    degree: int

    def __post_init__(self):
        if not isinstance(self.kind, SboxKind):
            raise UnsupportedSboxError(f"unknown S-box kind: {self.kind!r}")
        if self.kind is SboxKind.EXPONENTIATION and self.degree < 2:
            raise UnsupportedSboxError(f"exponentiation S-box needs degree >= 2, got {self.degree}")

    @classmethod
    def exponentiation(cls, degree: int) -> "PoseidonSbox":
        return cls(SboxKind.EXPONENTIATION, degree)

    def check_synthesizable(self) -> None:
        """Raise UnsupportedSboxError if this kind has no circuit realization."""
        if self.kind not in SYNTHESIZABLE_KINDS:
            raise UnsupportedSboxError(f"S-box kind {self.kind.value} has no circuit realization")

    def apply(self, x):
        """Evaluate on a native field element."""
        if self.kind is SboxKind.EXPONENTIATION:
            return exponentiate(x, self.degree)
        raise UnsupportedSboxError(f"S-box kind {self.kind.value} has no native evaluation")

    def synthesize(self, x: FpVar) -> FpVar:
        """Evaluate on a circuit variable, recording its multiplication constraints."""
        self.check_synthesizable()
        if not isinstance(x, FpVar):
            raise TypeError(f"synthesize expects an FpVar, got {type(x).__name__}")
        return exponentiate(x, self.degree)
