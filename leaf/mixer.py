"""Mixer commitment scheme.

A deposit commits to three random secrets through its leaf,
    leaf = H(r || nullifier || rho),
which an external membership accumulator records. A withdrawal reveals
    nullifier_hash = H(nullifier || nullifier),
which an external registry checks for reuse. This module only computes the
two values; storing them and rejecting repeats is the caller's job.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from crh.base import CRH
from primitives.field import FieldType, to_bytes

Seed = Union[int, np.random.Generator, None]


@dataclass(frozen=True)
class Private:
    """Deposit secrets. Excluded from repr so they do not end up in logs."""
    r: object = field(repr=False)
    nullifier: object = field(repr=False)
    rho: object = field(repr=False)

    @classmethod
    def generate(cls, field_type: FieldType, rng: Seed = None) -> "Private":
        """Sample three independent uniform field elements."""
        values = field_type.Random(3, seed=rng)
        return cls(values[0], values[1], values[2])


@dataclass(frozen=True)
class MixerOutput:
    """Public values of one deposit: the leaf and the nullifier hash."""
    leaf: object
    nullifier_hash: object

    def to_bytes(self, field_type: FieldType) -> bytes:
        return to_bytes(field_type, self.leaf, self.nullifier_hash)


class MixerLeaf:
    """Derives mixer leaves and nullifier hashes with a native CRH."""

    def __init__(self, crh: CRH):
        self.crh = crh

    @property
    def field(self) -> FieldType:
        return self.crh.field

    def generate_secrets(self, rng: Seed = None) -> Private:
        return Private.generate(self.field, rng)

    def create_leaf(self, secrets: Private, public: Optional[object], parameters):
        """leaf = H(r || nullifier || rho). Mixer leaves have no public input, so public must be None."""
        if public is not None:
            raise ValueError("mixer leaves take no public input")
        data = to_bytes(self.field, secrets.r, secrets.nullifier, secrets.rho)
        return self.crh.evaluate(parameters, data)

    def create_nullifier(self, secrets: Private, parameters):
        """nullifier_hash = H(nullifier || nullifier)."""
        data = to_bytes(self.field, secrets.nullifier, secrets.nullifier)
        return self.crh.evaluate(parameters, data)

    def create(self, secrets: Private, parameters) -> MixerOutput:
        return MixerOutput(
            leaf=self.create_leaf(secrets, None, parameters),
            nullifier_hash=self.create_nullifier(secrets, parameters),
        )
