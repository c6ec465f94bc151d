from __future__ import annotations
import numpy as np
from numpy.typing import NDArray

"""
This module computes the softened gravitational potential energy of the disk. pair_potential sums -G m_i m_j / sqrt(r_ij^2 + eps^2) over unordered body pairs, central_potential adds -G M m_i / sqrt(r_i^2 + eps^2) for the fixed central mass, and softened_potential returns their sum. These are the potentials whose negative gradients are the accelerations in forces, so together with the kinetic energy they give the total energy the diagnostics track. Both functions handle single bodies and zero gravity by returning 0.0. They assume packed (N, 4) position+mass arrays.

"""

__all__ = ["pair_potential", "central_potential", "softened_potential"]


def pair_potential(
    pos4: NDArray[np.floating],
    G: float,
    eps: float,
) -> float:

    q = np.asarray(pos4, dtype=np.float64)
    if q.ndim != 2 or q.shape[1] != 4:
        return 0.0

    n = int(q.shape[0])
    if n < 2:
        return 0.0
    if float(G) == 0.0:
        return 0.0

    pos = q[:, :3]
    m = q[:, 3]
    diff = pos[:, None, :] - pos[None, :, :]
    r2 = np.einsum("ijk,ijk->ij", diff, diff, optimize=True)

    iu = np.triu_indices(n, 1)
    inv_r = 1.0 / np.sqrt(r2[iu] + float(eps) * float(eps))

    term = (m[iu[0]] * m[iu[1]]) * inv_r
    return -float(G) * float(np.sum(term))


def central_potential(
    pos4: NDArray[np.floating],
    G: float,
    central_mass: float,
    eps: float,
) -> float:

    q = np.asarray(pos4, dtype=np.float64)
    if q.ndim != 2 or q.shape[0] == 0:
        return 0.0
    if float(G) == 0.0 or float(central_mass) == 0.0:
        return 0.0

    pos = q[:, :3]
    r_soft = np.sqrt(np.einsum("ij,ij->i", pos, pos) + float(eps) * float(eps))
    return -float(G) * float(central_mass) * float(np.sum(q[:, 3] / r_soft))


def softened_potential(
    pos4: NDArray[np.floating],
    G: float,
    central_mass: float,
    eps: float,
) -> float:

    return pair_potential(pos4, G, eps) + central_potential(pos4, G, central_mass, eps)
