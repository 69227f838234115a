"""Tests for the MiMC hash, native and in-circuit."""

import dataclasses

import pytest

from constraints import ConstraintSystem, FpVar, SynthesisMode, UInt8
from constraints.errors import AssignmentMissingError, UnsatisfiableConstraintError
from crh.mimc import MiMCCRH, MiMCParameters, MiMCRounds, feistel, mimc_sponge
from crh.presets import MIMC_220
from gadgets.mimc import MiMCCRHGadget, MiMCParametersVar
from primitives.errors import (
    LengthMismatchError,
    NonCanonicalInputError,
    ParameterMismatchError,
    WidthOverflowError,
)
from primitives.field import BN254_FR, to_bytes
from tests.vectors import mimc_parameters

F = BN254_FR
P = F.characteristic

ALIGNED = to_bytes(F, 0, 1, 2)
UNALIGNED = bytes([1, 2, 3, 4, 5, 6])


def reference_feistel(rounds: int, k: int, keys, left: int, right: int):
    """Round schedule on plain ints."""
    x_l, x_r = right, left
    for i in range(1, rounds - 1):
        t = (k + x_l + keys[i - 1]) % P
        x_l, x_r = (x_r + pow(t, 5, P)) % P, x_l
    t = (k + x_l) % P
    return x_l, (x_r + pow(t, 5, P)) % P


def reference_hash(rounds: int, k: int, keys, elements) -> int:
    x_l, x_r = reference_feistel(rounds, k, keys, elements[0], 0)
    for x in elements[1:]:
        x_l, x_r = reference_feistel(rounds, k, keys, (x_l + x) % P, x_r)
    return x_l


@pytest.fixture(scope="module")
def params():
    return mimc_parameters(F, MIMC_220, num_outputs=3)


@pytest.fixture(scope="module")
def crh():
    return MiMCCRH(F, MIMC_220)


def synthesize(params, data: bytes, mode=SynthesisMode.PROVE):
    cs = ConstraintSystem(F, mode=mode)
    data_var = UInt8.new_witness_vec(cs, data)
    gadget = MiMCCRHGadget(F, MIMC_220)
    output = gadget.evaluate(MiMCParametersVar.new_constant(F, params), data_var)
    return cs, output


class TestFeistel:
    """Round schedule of a single Feistel evaluation."""

    def test_three_rounds_by_hand(self) -> None:
        """Swap, one keyed round, then the unswapped last round."""
        rounds = MiMCRounds(3, 1)
        params = MiMCParameters.new(F, 3, [5])
        # swap -> (0, 1); t = 3 + 0 + 5 = 8 -> (1 + 8^5, 0); t = 3 + 32769 -> r += t^5
        assert feistel(rounds, params, F(1), F(0)) == (F(32769), F(32772 ** 5))

    def test_matches_reference(self, params) -> None:
        """220 rounds agree with the plain-int schedule."""
        keys = [int(c) for c in params.round_keys]
        got = feistel(MIMC_220, params, F(7), F(9))
        want = reference_feistel(220, int(params.k), keys, 7, 9)
        assert (int(got[0]), int(got[1])) == want

    def test_too_few_rounds(self) -> None:
        """Fewer than 3 rounds has no keyed round."""
        with pytest.raises(ValueError):
            MiMCRounds(2, 1)

    def test_feistel_checks_round_key_count(self, params) -> None:
        """A direct call with a short key list raises before indexing."""
        short = MiMCParameters(params.k, params.round_keys[:-1], params.num_outputs)
        with pytest.raises(ParameterMismatchError):
            feistel(MIMC_220, short, F(1), F(2))

    def test_sponge_checks_round_key_count(self, params) -> None:
        """mimc_sponge rejects mismatched parameters itself."""
        long = MiMCParameters(params.k, params.round_keys + (F(0),), params.num_outputs)
        with pytest.raises(ParameterMismatchError):
            mimc_sponge(MIMC_220, long, [F(0)] * 3, F(0))


class TestParameters:
    """Parameters are read-only once built."""

    def test_round_keys_are_a_tuple(self) -> None:
        """Lists passed in are stored as tuples."""
        params = MiMCParameters(F(3), [F(5)])
        assert isinstance(params.round_keys, tuple)

    def test_frozen(self, params) -> None:
        """Fields cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.num_outputs = 0


class TestNativeHash:
    """MiMCCRH.evaluate / combine."""

    @pytest.mark.parametrize("data", [ALIGNED, UNALIGNED])
    def test_matches_reference(self, crh, params, data: bytes) -> None:
        """The hash is the absorbed left half of the plain-int sponge."""
        keys = [int(c) for c in params.round_keys]
        elements = [int(e) for e in crh.pack(data)]
        assert int(crh.evaluate(params, data)) == reference_hash(220, int(params.k), keys, elements)

    def test_deterministic(self, crh, params) -> None:
        """Repeated evaluation gives the same element."""
        assert crh.evaluate(params, UNALIGNED) == crh.evaluate(params, UNALIGNED)

    def test_input_sensitivity(self, crh, params) -> None:
        """Different inputs give different hashes."""
        assert crh.evaluate(params, bytes([1])) != crh.evaluate(params, bytes([2]))

    def test_squeeze_length(self, crh, params) -> None:
        """permute returns the absorbed value plus num_outputs squeezes."""
        assert len(crh.permute(params, crh.pack(ALIGNED))) == 4

    def test_squeeze_does_not_change_digest(self, crh, params) -> None:
        """The digest is independent of num_outputs."""
        single = MiMCParameters(params.k, params.round_keys, num_outputs=1)
        assert crh.evaluate(params, ALIGNED) == crh.evaluate(single, ALIGNED)

    def test_combine_is_concatenation(self, crh, params) -> None:
        """combine hashes left || right."""
        assert crh.combine(params, bytes([1, 2, 3]), bytes([4, 5, 6])) == crh.evaluate(params, UNALIGNED)

    def test_combine_length_mismatch(self, crh, params) -> None:
        """Operands of different lengths are rejected."""
        with pytest.raises(LengthMismatchError):
            crh.combine(params, bytes(3), bytes(5))

    def test_width_overflow(self, crh, params) -> None:
        """Input packing into more than width elements is rejected."""
        with pytest.raises(WidthOverflowError) as exc_info:
            crh.evaluate(params, bytes(97))
        assert exc_info.value.num_elements == 4

    def test_non_canonical_input(self, crh, params) -> None:
        """A chunk of value >= p is rejected."""
        with pytest.raises(NonCanonicalInputError):
            crh.evaluate(params, b"\xff" * 32)

    def test_wrong_round_key_count(self, crh, params) -> None:
        """evaluate rejects parameters for another round count."""
        short = MiMCParameters(params.k, params.round_keys[:-1], params.num_outputs)
        with pytest.raises(ParameterMismatchError):
            crh.evaluate(short, ALIGNED)

    def test_negative_num_outputs(self, crh, params) -> None:
        """A negative squeeze count is rejected."""
        bad = MiMCParameters(params.k, params.round_keys, num_outputs=-1)
        with pytest.raises(ParameterMismatchError):
            crh.evaluate(bad, ALIGNED)


class TestGadget:
    """MiMCCRHGadget agrees with MiMCCRH."""

    @pytest.mark.parametrize("data", [ALIGNED, UNALIGNED])
    def test_matches_native(self, crh, params, data: bytes) -> None:
        """Witnessed input yields the native hash and a satisfied circuit."""
        cs, output = synthesize(params, data)
        assert output.value() == crh.evaluate(params, data)
        assert cs.is_satisfied()

    def test_wrong_public_output_is_unsatisfied(self, crh, params) -> None:
        """The output cannot be bound to a different public value."""
        cs, output = synthesize(params, UNALIGNED)
        expected = crh.evaluate(params, UNALIGNED)
        output.enforce_equal(FpVar.new_input(cs, lambda: expected + F(1)))
        assert not cs.is_satisfied()

    def test_correct_public_output_is_satisfied(self, crh, params) -> None:
        """Binding the output to the native hash keeps the circuit satisfied."""
        cs, output = synthesize(params, UNALIGNED)
        expected = crh.evaluate(params, UNALIGNED)
        output.enforce_equal(FpVar.new_input(cs, lambda: expected))
        assert cs.is_satisfied()

    def test_constant_input(self, crh, params) -> None:
        """Constant input bytes fold to the native hash as a constant."""
        gadget = MiMCCRHGadget(F, MIMC_220)
        output = gadget.evaluate(MiMCParametersVar.new_constant(F, params), UInt8.constant_vec(UNALIGNED))
        assert output.is_constant()
        assert output.value() == crh.evaluate(params, UNALIGNED)

    def test_constant_non_canonical_input_rejected(self, crh, params) -> None:
        """Bytes the native hash rejects are not reduced mod p in-circuit."""
        data = b"\xff" * 32
        with pytest.raises(NonCanonicalInputError):
            crh.evaluate(params, data)
        gadget = MiMCCRHGadget(F, MIMC_220)
        with pytest.raises(UnsatisfiableConstraintError):
            gadget.evaluate(MiMCParametersVar.new_constant(F, params), UInt8.constant_vec(data))

    def test_witnessed_non_canonical_input_unsatisfiable(self, params) -> None:
        """The same bytes as witnesses leave the circuit unsatisfiable."""
        cs, _ = synthesize(params, b"\xff" * 32)
        assert not cs.is_satisfied()

    def test_combine_length_mismatch(self, params) -> None:
        """Operands of different lengths are rejected in-circuit too."""
        gadget = MiMCCRHGadget(F, MIMC_220)
        params_var = MiMCParametersVar.new_constant(F, params)
        with pytest.raises(LengthMismatchError):
            gadget.combine(params_var, UInt8.constant_vec(bytes(3)), UInt8.constant_vec(bytes(5)))

    def test_width_overflow_adds_no_constraints(self, params) -> None:
        """Oversized input is rejected before any hash constraint is added."""
        cs = ConstraintSystem(F)
        data_var = UInt8.new_witness_vec(cs, bytes(97))
        before = cs.num_constraints
        gadget = MiMCCRHGadget(F, MIMC_220)
        with pytest.raises(WidthOverflowError):
            gadget.evaluate(MiMCParametersVar.new_constant(F, params), data_var)
        assert cs.num_constraints == before

    def test_setup_mode_has_same_shape(self, params) -> None:
        """Setup mode builds the same circuit without values."""
        prove_cs, _ = synthesize(params, UNALIGNED)
        setup_cs, output = synthesize(params, UNALIGNED, mode=SynthesisMode.SETUP)
        assert setup_cs.num_constraints == prove_cs.num_constraints
        assert setup_cs.num_variables == prove_cs.num_variables
        with pytest.raises(AssignmentMissingError):
            output.value()
