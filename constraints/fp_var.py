"""Field element variables.

An FpVar is either a constant (known value, no constraint system) or an
allocated linear combination over a ConstraintSystem together with its
concrete value when one is known. Addition, subtraction and multiplication by
a constant only rewrite linear combinations; multiplying two non-constant
variables allocates a witness and records exactly one constraint.

The same arithmetic code therefore runs on galois field elements (native) and
on FpVars (in-circuit), which is how the permutations in crh/ are shared.
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Union

from constraints.errors import AssignmentMissingError, UnsatisfiableConstraintError
from constraints.system import AllocationMode, ConstraintSystem, LinearCombination
from primitives.field import FieldType, byte_size, modulus_bits

if TYPE_CHECKING:
    from constraints.boolean import Boolean, UInt8


class FpVar:
    """In-circuit counterpart of a field element.

    Attributes:
        field: galois field type
        cs: Owning constraint system, None for constants
        lc: Linear combination over cs variables, None for constants
    """

    __slots__ = ("field", "cs", "lc", "_value")

    def __init__(
        self,
        field: FieldType,
        value: Optional[int] = None,
        cs: Optional[ConstraintSystem] = None,
        lc: Optional[LinearCombination] = None,
    ):
        self.field = field
        self.cs = cs
        self.lc = lc
        self._value = value

    # --- Construction ---

    @classmethod
    def constant(cls, field: FieldType, value) -> "FpVar":
        return cls(field, int(value) % int(field.characteristic))

    @classmethod
    def zero(cls, field: FieldType) -> "FpVar":
        return cls(field, 0)

    @classmethod
    def one(cls, field: FieldType) -> "FpVar":
        return cls(field, 1)

    @classmethod
    def new_variable(
        cls,
        cs: ConstraintSystem,
        value_fn: Optional[Callable[[], object]],
        mode: AllocationMode,
    ) -> "FpVar":
        """Allocate a variable; value_fn is only called when a value is needed."""
        if mode is AllocationMode.CONSTANT:
            if value_fn is None:
                raise AssignmentMissingError("constants need a value")
            return cls.constant(cs.field, value_fn())
        if mode is AllocationMode.INPUT:
            index = cs.new_input_variable(value_fn)
        else:
            index = cs.new_witness_variable(value_fn)
        return cls(cs.field, cs.assigned_value(index), cs, LinearCombination.variable(index))

    @classmethod
    def new_input(cls, cs: ConstraintSystem, value_fn: Optional[Callable[[], object]]) -> "FpVar":
        return cls.new_variable(cs, value_fn, AllocationMode.INPUT)

    @classmethod
    def new_witness(cls, cs: ConstraintSystem, value_fn: Optional[Callable[[], object]]) -> "FpVar":
        return cls.new_variable(cs, value_fn, AllocationMode.WITNESS)

    # --- Accessors ---

    @property
    def modulus(self) -> int:
        return int(self.field.characteristic)

    def is_constant(self) -> bool:
        return self.cs is None

    def value(self):
        """Concrete value as a field element.

        Raises:
            AssignmentMissingError: If the variable has no witness value.
        """
        if self._value is None:
            raise AssignmentMissingError("variable has no assigned value")
        return self.field(self._value)

    def to_lc(self) -> LinearCombination:
        if self.is_constant():
            return LinearCombination.constant(self._value)
        return self.lc

    def _coerce(self, other: Union["FpVar", int]) -> "FpVar":
        if isinstance(other, FpVar):
            if other.field is not self.field:
                raise TypeError("cannot combine variables over different fields")
            if self.cs is not None and other.cs is not None and other.cs is not self.cs:
                raise ValueError("cannot combine variables from different constraint systems")
            return other
        return FpVar.constant(self.field, other)

    # --- Arithmetic ---

    def _linear(self, other: "FpVar", scale: int) -> "FpVar":
        p = self.modulus
        value = None
        if self._value is not None and other._value is not None:
            value = (self._value + scale * other._value) % p
        if self.is_constant() and other.is_constant():
            return FpVar(self.field, value)
        cs = self.cs if self.cs is not None else other.cs
        return FpVar(self.field, value, cs, self.to_lc().add(other.to_lc(), p, scale))

    def __add__(self, other: Union["FpVar", int]) -> "FpVar":
        return self._linear(self._coerce(other), 1)

    def __radd__(self, other: int) -> "FpVar":
        return self + other

    def __sub__(self, other: Union["FpVar", int]) -> "FpVar":
        return self._linear(self._coerce(other), -1)

    def __rsub__(self, other: int) -> "FpVar":
        return self._coerce(other) - self

    def __neg__(self) -> "FpVar":
        return FpVar.zero(self.field) - self

    def __mul__(self, other: Union["FpVar", int]) -> "FpVar":
        other = self._coerce(other)
        p = self.modulus
        value = None
        if self._value is not None and other._value is not None:
            value = self._value * other._value % p
        if self.is_constant() and other.is_constant():
            return FpVar(self.field, value)
        if self.is_constant() or other.is_constant():
            const, var = (self, other) if self.is_constant() else (other, self)
            return FpVar(self.field, value, var.cs, var.lc.scale(const._value, p))

        cs = self.cs
        index = cs.new_witness_variable(lambda: self.value() * other.value())
        product = LinearCombination.variable(index)
        cs.enforce_constraint(self.lc, other.lc, product)
        return FpVar(self.field, cs.assigned_value(index), cs, product)

    def __rmul__(self, other: int) -> "FpVar":
        return self * other

    def square(self) -> "FpVar":
        return self * self

    # --- Constraints ---

    def enforce_equal(self, other: Union["FpVar", int]) -> None:
        """Constrain self == other."""
        other = self._coerce(other)
        if self.is_constant() and other.is_constant():
            if self._value != other._value:
                raise UnsatisfiableConstraintError("constants are not equal")
            return
        cs = self.cs if self.cs is not None else other.cs
        diff = self.to_lc().add(other.to_lc(), self.modulus, -1)
        cs.enforce_constraint(diff, LinearCombination.constant(1), LinearCombination.zero())

    # --- Bit and Byte Decomposition ---

    def to_bits_le(self) -> List["Boolean"]:
        """Canonical little-endian bit decomposition, modulus_bits(field) bits long.

        For allocated variables this allocates one Boolean witness per bit,
        constrains their weighted sum to equal self and constrains the bits to
        encode an integer below the modulus.
        """
        from constraints.boolean import Boolean

        n = modulus_bits(self.field)
        if self.is_constant():
            return [Boolean.constant(bool(self._value >> i & 1)) for i in range(n)]

        bits = [
            Boolean.new_witness(self.cs, lambda i=i: int(self.value()) >> i & 1)
            for i in range(n)
        ]
        packed = LinearCombination()
        for i, bit in enumerate(bits):
            packed = packed.add(bit.to_lc(), self.modulus, pow(2, i, self.modulus))
        self.cs.enforce_constraint(
            packed.add(self.lc, self.modulus, -1),
            LinearCombination.constant(1),
            LinearCombination.zero(),
        )
        Boolean.enforce_in_field_le(self.field, bits)
        return bits

    def to_bytes(self) -> List["UInt8"]:
        """Little-endian bytes, byte_size(field) long, matching primitives.field.to_bytes."""
        from constraints.boolean import Boolean, UInt8

        bits = self.to_bits_le()
        bits += [Boolean.constant(False)] * (byte_size(self.field) * 8 - len(bits))
        return [UInt8.from_bits_le(bits[i:i + 8]) for i in range(0, len(bits), 8)]

    def __repr__(self) -> str:
        kind = "Constant" if self.is_constant() else "Var"
        return f"FpVar.{kind}(value={self._value})"
