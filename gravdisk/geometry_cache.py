from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the geometric kernel behind the force calculations. block_geometry computes, for a block of target rows against every body, the displacement vectors p_j - p_i, squared distances and softened inverse-cube distances (r^2 + eps^2)^-1.5 in a single pass, using Einstein summation for the distance reduction. Self-interaction cells are zeroed so a body never attracts itself, and cells whose softened distance is exactly zero (possible only with eps == 0) are left at zero instead of overflowing. Working per block keeps the temporary arrays at (rows, N, 3) so the worker pool can bound memory by choosing the block size. It assumes (N, 3) position arrays and a non-negative softening length.

"""




__all__ = ["block_geometry"]

def block_geometry(
    rows: np.ndarray,
    pos: np.ndarray,
    eps: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pos = np.asarray(pos)
    rows = np.asarray(rows, dtype=np.intp).ravel()

    diff = pos[None, :, :] - pos[rows, None, :]
    r2 = np.einsum("ijk,ijk->ij", diff, diff, optimize=True)

    r2_soft = r2 + eps * eps
    inv_r3 = np.zeros_like(r2)
    mask = r2_soft > 0.0
    if np.any(mask):
        inv_r3[mask] = np.power(r2_soft[mask], -1.5)

    inv_r3[np.arange(rows.size), rows] = 0.0
    return diff, r2, inv_r3
