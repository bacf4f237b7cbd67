"""
Guillotine image splitting.

Recursively cuts an image along the full-width or full-height line with
the strongest discontinuity, producing independent leaf sub-images.
"""

from .base import (
    Axis,
    CutDecision,
    Discontinuity,
    EmptyAxisError,
    GuillotineError,
    ImageChunk,
    MalformedImageError,
    SplitResult,
)
from .profiler import difference_profile, profile_both, strongest_discontinuity
from .partitioner import GuillotineSplitter, guillotine

__all__ = [
    "Axis",
    "CutDecision",
    "Discontinuity",
    "EmptyAxisError",
    "GuillotineError",
    "ImageChunk",
    "MalformedImageError",
    "SplitResult",
    "difference_profile",
    "profile_both",
    "strongest_discontinuity",
    "GuillotineSplitter",
    "guillotine",
]
