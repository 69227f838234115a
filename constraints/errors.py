"""Errors raised while synthesizing circuits."""


class SynthesisError(Exception):
    """Base class for circuit construction failures.

    These indicate misuse of the circuit-building API. The constraint system
    being built is left in an unusable state and must be discarded.
    """


class AssignmentMissingError(SynthesisError):
    """A concrete value was requested for a variable that has no witness assignment."""


class UnsatisfiableConstraintError(SynthesisError):
    """Two constants were forced equal but differ, with no constraint system to record it."""
