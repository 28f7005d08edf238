"""Pure similarity functions used by the semantic ranking strategy."""

from collections.abc import Sequence
from math import sqrt

from .types import Score

NORM_EPSILON = 1e-12


def cosine(u: Sequence[float], v: Sequence[float]) -> Score:
    """Compute cosine similarity between two vectors.

    The norm product is floored at ``NORM_EPSILON`` so all-zero vectors score 0
    instead of dividing by zero.

    Args:
        u: First vector
        v: Second vector

    Returns:
        Cosine similarity score between -1 and 1
    """
    dot = sum(a * b for a, b in zip(u, v, strict=False))
    nu = sqrt(sum(a * a for a in u))
    nv = sqrt(sum(b * b for b in v))
    return dot / max(nu * nv, NORM_EPSILON)
