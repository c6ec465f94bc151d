"""
This module generates the initial planar disk of bodies orbiting the central mass.

The SceneInitializer class derives every position from (seed, body index, axis) through
the versioned integer hash in scene_hash, maps each value to [-0.5, 0.5), scales it by the
spatial scale and clamps z to zero so all bodies start in the orbital plane. Every body
receives the same mass. Velocities follow from each body's softened distance to the
origin: the circular-orbit speed sqrt(G*M/r) along the direction perpendicular to both the
radial vector and the reference axis. The SceneConfig dataclass encapsulates generation
parameters. Generation is a pure function of its inputs; the orbits are only approximately
circular because body-body attraction and softening are ignored when choosing speeds.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .body_store import BodyStore
from .nbody_constants import HASH_VERSION, REFERENCE_AXIS
from .physics_utils import circular_speed, orbital_direction, softened_radius
from .scene_hash import UniformSampler
from .sim_config import SimConfig




@dataclass
class SceneConfig:
	seed: int = 42
	spatial_scale: float = 20.0
	body_mass: float = 1.0e-2
	G: float = 1.0
	central_mass: float = 1.0e3
	softening: float = 0.05
	reference_axis: Tuple[float, float, float] = REFERENCE_AXIS
	hash_version: int = HASH_VERSION

	@classmethod
	def from_sim_config(cls, cfg: SimConfig) -> "SceneConfig":
		return cls(
			seed=int(cfg.seed),
			spatial_scale=float(cfg.spatial_scale),
			body_mass=float(cfg.body_mass),
			G=float(cfg.G),
			central_mass=float(cfg.central_mass),
			softening=float(cfg.softening),
		)


class SceneInitializer:

	def __init__(self, config: SceneConfig | None = None):
		self.config: SceneConfig = config or SceneConfig()
		self._sampler = UniformSampler(self.config.seed, self.config.hash_version)


	def _generate_positions(self, n: int) -> np.ndarray:
		u = self._sampler.uniform_block(n, 3)
		pos = (u - 0.5) * float(self.config.spatial_scale)
		pos[:, 2] = 0.0
		return pos

	def _generate_velocities(self, pos: np.ndarray) -> np.ndarray:
		cfg = self.config
		r = softened_radius(pos, cfg.softening)
		speed = circular_speed(r, cfg.G, cfg.central_mass)
		return speed[:, None] * orbital_direction(pos, cfg.reference_axis)


	def generate(self, n_bodies: int) -> Tuple[np.ndarray, np.ndarray]:
		n = max(0, int(n_bodies))
		pos = self._generate_positions(n)
		pos4 = np.empty((n, 4), dtype=np.float64)
		pos4[:, :3] = pos
		pos4[:, 3] = float(self.config.body_mass)
		vel = self._generate_velocities(pos)
		return pos4, vel

	def populate(self, store: BodyStore, n_bodies: int) -> bool:
		pos4, vel = self.generate(n_bodies)
		return store.load(pos4, vel)


def initialize_scene(
	seed: int,
	n_bodies: int,
	spatial_scale: float,
	body_mass: float,
	**kwargs,
) -> Tuple[np.ndarray, np.ndarray]:
	cfg = SceneConfig(
		seed=seed,
		spatial_scale=spatial_scale,
		body_mass=body_mass,
		**kwargs,
	)
	return SceneInitializer(cfg).generate(n_bodies)
