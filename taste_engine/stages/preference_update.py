"""
Online pairwise preference update (Bradley-Terry-Luce style logistic SGD).

One vote = one step:
    diff = phi(winner) - phi(loser)
    p    = sigmoid(w . diff)          model's belief that the winner wins
    w    = (1 - l2) * w + eta * (1 - p) * diff
    w    = w / ||w||                  skipped when ||w|| == 0

The public entry point is update_weights.
"""

from typing import List, Sequence

import numpy as np

from ..utils.vector_math import VectorLike, as_vector, normalize, pad_pair, sigmoid


def win_probability(w: Sequence[float], phi_a: VectorLike, phi_b: VectorLike) -> float:
    """Model probability that item a beats item b under weights w."""
    a, b = pad_pair(phi_a, phi_b)
    diff = a - b
    w_arr, diff = pad_pair(w, diff)
    return sigmoid(float(np.dot(w_arr, diff)))


def update_weights(
    w: Sequence[float],
    phi_winner: VectorLike,
    phi_loser: VectorLike,
    eta: float = 0.6,
    l2: float = 0.01,
) -> List[float]:
    """
    Apply one logistic pairwise update and return the new weight vector.

    Never raises: vectors of different lengths are zero-padded, and two all-zero
    vectors reduce the step to pure shrinkage. The input w is not mutated.

    Args:
        w: Current weights.
        phi_winner: Feature vector of the chosen item.
        phi_loser: Feature vector of the rejected item.
        eta: Learning rate; larger moves faster toward the latest vote.
        l2: Shrinkage toward zero applied before the gradient step.

    Returns:
        Updated weights, unit L2 norm unless they collapsed to zero.
    """
    # --- 1. Difference vector (zero-pad length mismatches) ---
    winner, loser = pad_pair(phi_winner, phi_loser)
    diff = winner - loser
    weights, diff = pad_pair(as_vector(w), diff)

    # --- 2. Current prediction and logistic gradient ---
    p = sigmoid(float(np.dot(weights, diff)))
    gradient = 1.0 - p

    # --- 3. Shrink, ascend, renormalize ---
    weights = (1.0 - l2) * weights
    weights = weights + eta * gradient * diff
    return [float(x) for x in normalize(weights)]
