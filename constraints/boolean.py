"""Boolean and byte variables.

Booleans are constants or allocated linear combinations constrained to {0, 1}.
UInt8 is eight little-endian Booleans; hash gadgets take their input as a list
of UInt8 and repack the bits into field elements.
"""

from functools import reduce
from typing import Callable, List, Optional, Sequence

from constraints.errors import AssignmentMissingError, UnsatisfiableConstraintError
from constraints.fp_var import FpVar
from constraints.system import AllocationMode, ConstraintSystem, LinearCombination
from primitives.field import FieldType, modulus_bits


class Boolean:
    """A bit, either constant or allocated.

    Attributes:
        cs: Owning constraint system, None for constants
        lc: Linear combination equal to the bit, None for constants
    """

    __slots__ = ("cs", "lc", "_value")

    def __init__(
        self,
        value: Optional[bool] = None,
        cs: Optional[ConstraintSystem] = None,
        lc: Optional[LinearCombination] = None,
    ):
        self.cs = cs
        self.lc = lc
        self._value = value

    # --- Construction ---

    @classmethod
    def constant(cls, value: bool) -> "Boolean":
        return cls(bool(value))

    @classmethod
    def new_variable(
        cls,
        cs: ConstraintSystem,
        value_fn: Optional[Callable[[], object]],
        mode: AllocationMode,
    ) -> "Boolean":
        if mode is AllocationMode.CONSTANT:
            return cls.constant(bool(value_fn()))
        fn = None if value_fn is None else (lambda: 1 if value_fn() else 0)
        if mode is AllocationMode.INPUT:
            index = cs.new_input_variable(fn)
        else:
            index = cs.new_witness_variable(fn)
        lc = LinearCombination.variable(index)
        # b * (1 - b) = 0
        cs.enforce_constraint(lc, LinearCombination.constant(1).add(lc, cs.modulus, -1), LinearCombination.zero())
        value = cs.assigned_value(index)
        return cls(None if value is None else bool(value), cs, lc)

    @classmethod
    def new_input(cls, cs: ConstraintSystem, value_fn: Optional[Callable[[], object]]) -> "Boolean":
        return cls.new_variable(cs, value_fn, AllocationMode.INPUT)

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, value_fn: Optional[Callable[[], object]]) -> "Boolean":
        return cls.new_variable(cs, value_fn, AllocationMode.WITNESS)

    # --- Accessors ---

    def is_constant(self) -> bool:
        return self.cs is None

    def value(self) -> bool:
        if self._value is None:
            raise AssignmentMissingError("boolean has no assigned value")
        return self._value

    def to_lc(self) -> LinearCombination:
        if self.is_constant():
            return LinearCombination.constant(1 if self._value else 0)
        return self.lc

    # --- Gates ---

    def not_(self) -> "Boolean":
        if self.is_constant():
            return Boolean.constant(not self._value)
        value = None if self._value is None else not self._value
        lc = LinearCombination.constant(1).add(self.lc, self.cs.modulus, -1)
        return Boolean(value, self.cs, lc)

    def and_(self, other: "Boolean") -> "Boolean":
        if self.is_constant():
            return other if self._value else Boolean.constant(False)
        if other.is_constant():
            return self if other._value else Boolean.constant(False)
        cs = self.cs
        index = cs.new_witness_variable(lambda: self.value() and other.value())
        result = LinearCombination.variable(index)
        cs.enforce_constraint(self.lc, other.lc, result)
        value = cs.assigned_value(index)
        return Boolean(None if value is None else bool(value), cs, result)

    def or_(self, other: "Boolean") -> "Boolean":
        # a | b == !(!a & !b)
        return self.not_().and_(other.not_()).not_()

    def enforce_equal(self, other: "Boolean") -> None:
        if self.is_constant() and other.is_constant():
            if self._value != other._value:
                raise UnsatisfiableConstraintError("boolean constants are not equal")
            return
        cs = self.cs if self.cs is not None else other.cs
        diff = self.to_lc().add(other.to_lc(), cs.modulus, -1)
        cs.enforce_constraint(diff, LinearCombination.constant(1), LinearCombination.zero())

    @staticmethod
    def kary_and(bits: Sequence["Boolean"]) -> "Boolean":
        if not bits:
            raise ValueError("kary_and needs at least one bit")
        return reduce(lambda acc, b: acc.and_(b), bits[1:], bits[0])

    @staticmethod
    def enforce_kary_nand(bits: Sequence["Boolean"]) -> None:
        """Constrain at least one of bits to be false."""
        Boolean.kary_and(bits).enforce_equal(Boolean.constant(False))

    # --- Packing ---

    @staticmethod
    def le_bits_to_fp_var(field: FieldType, bits: Sequence["Boolean"]) -> FpVar:
        """Pack little-endian bits into one field variable.

        The result is a linear combination of the bits, so packing adds no
        multiplication constraints. When there are at least modulus_bits(field)
        bits the integer could exceed the modulus, so the bits are additionally
        constrained to encode a canonical element.

        Raises:
            UnsatisfiableConstraintError: If every bit is constant and they
                encode an integer that is not below the modulus.
        """
        p = int(field.characteristic)
        if all(b.is_constant() for b in bits):
            value = sum(1 << i for i, b in enumerate(bits) if b._value)
            if value >= p:
                raise UnsatisfiableConstraintError(
                    f"constant bits encode a value not below the {modulus_bits(field)}-bit modulus"
                )
            return FpVar.constant(field, value)

        cs = next(b.cs for b in bits if not b.is_constant())
        value = None
        if not cs.is_in_setup_mode():
            value = sum(1 << i for i, b in enumerate(bits) if b.value()) % p

        lc = LinearCombination()
        power = 1
        for bit in bits:
            lc = lc.add(bit.to_lc(), p, power)
            power = power * 2 % p
        if len(bits) >= modulus_bits(field):
            Boolean.enforce_in_field_le(field, bits)
        return FpVar(field, value, cs, lc)

    @staticmethod
    def enforce_in_field_le(field: FieldType, bits: Sequence["Boolean"]) -> None:
        """Constrain little-endian bits to encode an integer below the modulus."""
        # p is odd, so p - 1 ends in a zero bit and the final run is always flushed
        run = Boolean.enforce_smaller_or_equal_than_le(bits, int(field.characteristic) - 1)
        assert not run

    @staticmethod
    def enforce_smaller_or_equal_than_le(bits: Sequence["Boolean"], element: int) -> List["Boolean"]:
        """Constrain little-endian bits to encode an integer <= element.

        Walks element's bits from the most significant one. last_run tracks
        "the input matched every one-bit of element so far"; at each zero bit
        of element, last_run and the input bit cannot both be set. Returns the
        trailing run of ones that was never flushed.
        """
        n = element.bit_length()
        for bit in bits[n:]:
            bit.enforce_equal(Boolean.constant(False))

        low = list(bits[:n]) + [Boolean.constant(False)] * (n - len(bits))
        element_bits = [element >> i & 1 for i in reversed(range(n))]
        current_run: List[Boolean] = []
        last_run = Boolean.constant(True)
        for b, a in zip(element_bits, reversed(low)):
            if b:
                current_run.append(a)
            else:
                if current_run:
                    current_run.append(last_run)
                    last_run = Boolean.kary_and(current_run)
                    current_run = []
                Boolean.enforce_kary_nand([last_run, a])
        return current_run

    def __repr__(self) -> str:
        kind = "Constant" if self.is_constant() else "Var"
        return f"Boolean.{kind}({self._value})"


class UInt8:
    """A byte as eight little-endian Booleans."""

    __slots__ = ("bits",)

    def __init__(self, bits: Sequence[Boolean]):
        if len(bits) != 8:
            raise ValueError(f"UInt8 needs 8 bits, got {len(bits)}")
        self.bits = list(bits)

    @classmethod
    def constant(cls, value: int) -> "UInt8":
        return cls([Boolean.constant(value >> i & 1) for i in range(8)])

    @classmethod
    def constant_vec(cls, data: bytes) -> List["UInt8"]:
        return [cls.constant(b) for b in data]

    @classmethod
    def _new_vec(cls, cs: ConstraintSystem, data: Sequence[int], mode: AllocationMode) -> List["UInt8"]:
        # data is only read outside setup mode, but its length fixes the circuit shape
        return [
            cls([Boolean.new_variable(cs, lambda b=b, i=i: b >> i & 1, mode) for i in range(8)])
            for b in data
        ]

    @classmethod
    def new_input_vec(cls, cs: ConstraintSystem, data: Sequence[int]) -> List["UInt8"]:
        return cls._new_vec(cs, data, AllocationMode.INPUT)

    @classmethod
    def new_witness_vec(cls, cs: ConstraintSystem, data: Sequence[int]) -> List["UInt8"]:
        return cls._new_vec(cs, data, AllocationMode.WITNESS)

    @classmethod
    def from_bits_le(cls, bits: Sequence[Boolean]) -> "UInt8":
        return cls(bits)

    def to_bits_le(self) -> List[Boolean]:
        return list(self.bits)

    def is_constant(self) -> bool:
        return all(b.is_constant() for b in self.bits)

    def value(self) -> int:
        return sum(1 << i for i, b in enumerate(self.bits) if b.value())

    def __repr__(self) -> str:
        try:
            return f"UInt8({self.value()})"
        except AssignmentMissingError:
            return "UInt8(<unassigned>)"


def bytes_value(data: Sequence[UInt8]) -> bytes:
    """Concrete byte string of a UInt8 vector."""
    return bytes(b.value() for b in data)
