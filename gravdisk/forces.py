"""
This module implements the softened gravitational acceleration calculations.

accelerate returns the net acceleration on one body: the sum over every other body j of
G * m_j * r_vec / (|r_vec|^2 + eps^2)^1.5, with r_vec the displacement from the queried
body to body j, plus the same softened term for the central mass at the origin.
accelerate_block evaluates a block of rows in one vectorized pass and is the unit of
work the integrator schedules on its worker pool; accelerations evaluates every row.
All functions are pure over the packed (N, 4) position+mass snapshot they are given and
stay finite for finite positions because the softening length is positive. The central
mass is a constant argument, never a row of the snapshot.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
from .geometry_cache import block_geometry
from .nbody_constants import NBodyConstants









def _packed(population) -> np.ndarray:
    pos4 = getattr(population, "pos4", population)
    if callable(pos4):
        pos4 = pos4()
    return np.asarray(pos4)


def central_acceleration(
    pos: NDArray[np.floating],
    G: float,
    central_mass: float,
    eps: float,
) -> NDArray[np.floating]:
    p = np.asarray(pos)
    if float(G) == 0.0 or float(central_mass) == 0.0:
        return np.zeros_like(p)
    r2 = np.einsum("ij,ij->i", p, p)
    inv_r3 = np.power(r2 + eps * eps, -1.5)
    return -(G * central_mass) * p * inv_r3[:, None]


def pairwise_acceleration(
    rows: NDArray[np.integer],
    pos4: NDArray[np.floating],
    G: float,
    eps: float,
) -> NDArray[np.floating]:
    pos4 = np.asarray(pos4)
    rows = np.asarray(rows, dtype=np.intp).ravel()

    if pos4.shape[0] < 2 or float(G) == 0.0:
        return np.zeros((rows.size, 3), dtype=pos4.dtype)

    diff, _, inv_r3 = block_geometry(rows, pos4[:, :3], eps)
    weight = G * pos4[None, :, 3] * inv_r3
    return np.einsum("ij,ijk->ik", weight, diff, optimize=True)


def accelerate_block(
    rows: NDArray[np.integer],
    pos4: NDArray[np.floating],
    G: float,
    eps: float,
    central_mass: float,
    out: NDArray[np.floating] | None = None,
) -> NDArray[np.floating]:
    pos4 = np.asarray(pos4)
    rows = np.asarray(rows, dtype=np.intp).ravel()

    acc = pairwise_acceleration(rows, pos4, G, eps)
    acc += central_acceleration(pos4[rows, :3], G, central_mass, eps)

    if out is not None:
        out[rows] = acc
    return acc


def accelerate(
    body_index: int,
    population,
    G: float = NBodyConstants.G,
    eps: float = NBodyConstants.SOFTENING,
    central_mass: float = NBodyConstants.CENTRAL_MASS,
) -> NDArray[np.floating]:
    pos4 = _packed(population)
    rows = np.array([int(body_index)], dtype=np.intp)
    return accelerate_block(rows, pos4, G, eps, central_mass)[0]


def accelerations(
    population,
    G: float = NBodyConstants.G,
    eps: float = NBodyConstants.SOFTENING,
    central_mass: float = NBodyConstants.CENTRAL_MASS,
) -> NDArray[np.floating]:
    pos4 = _packed(population)
    rows = np.arange(pos4.shape[0], dtype=np.intp)
    return accelerate_block(rows, pos4, G, eps, central_mass)
