"""Leaf commitment schemes built on the hashes in crh/."""

from .mixer import MixerLeaf, MixerOutput, Private

__all__ = [
    "MixerLeaf",
    "MixerOutput",
    "Private",
]
