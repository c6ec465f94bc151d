"""
This module manages the per-body state arrays for the disk simulation.

The BodyStore class keeps three index-aligned numpy arrays: the packed position+mass
array (N, 4) whose last column holds each body's mass, the velocity array (N, 3) and the
acceleration array (N, 3) that the integrator rewrites every step. It provides property
accessors with shape validation, builds state from explicit initial conditions, supports
snapshot/restore copies and a float32 storage mode. Mass is exposed only as a read-only
view; nothing outside population construction writes it. Row i of every array refers to
the same body for the whole lifetime of the store.
"""

from __future__ import annotations
import numpy as np
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .body import Body




def _as_xyz(value, n: int, dtype) -> np.ndarray | None:
	arr = np.asarray(value, dtype=dtype)
	if arr.ndim == 1:
		if arr.size != 3 * n:
			return None
		arr = arr.reshape(-1, 3)
	elif arr.ndim == 2 and arr.shape[1] == 2:
		arr = np.concatenate([arr, np.zeros((arr.shape[0], 1), dtype=dtype)], axis=1)
	elif arr.ndim == 2 and arr.shape[1] >= 3:
		arr = arr[:, :3]
	else:
		return None
	if arr.shape[0] != n:
		return None
	return arr


class BodyStore:

	def __init__(self):
		self.n_bodies: int = 0
		self._pos4: np.ndarray = np.empty((0, 4), dtype=np.float64)
		self._vel: np.ndarray = np.empty((0, 3), dtype=np.float64)
		self._acc: np.ndarray = np.empty((0, 3), dtype=np.float64)

	@property
	def dtype(self) -> np.dtype:
		return self._pos4.dtype

	@property
	def pos4(self) -> np.ndarray:
		return self._pos4

	@property
	def pos(self) -> np.ndarray:
		return self._pos4[:, :3]

	@property
	def mass(self) -> np.ndarray:
		view = self._pos4[:, 3]
		view.flags.writeable = False
		return view

	@property
	def vel(self) -> np.ndarray:
		return self._vel

	@property
	def acc(self) -> np.ndarray:
		return self._acc

	@pos.setter
	def pos(self, value: np.ndarray) -> None:
		arr = _as_xyz(value, self.n_bodies, self.dtype)
		if arr is None:
			print(f"shape mismatch when assigning to store.pos: "
				  f"expected ({self.n_bodies}, 3), got {np.shape(value)}")
			return
		self._pos4[:, :3] = arr

	@vel.setter
	def vel(self, value: np.ndarray) -> None:
		arr = _as_xyz(value, self.n_bodies, self.dtype)
		if arr is None:
			print(f"shape mismatch when assigning to store.vel: "
				  f"expected ({self.n_bodies}, 3), got {np.shape(value)}")
			return
		self._vel[...] = arr

	def allocate(self, n: int, dtype=np.float64) -> None:
		n = max(0, int(n))
		self.n_bodies = n
		self._pos4 = np.zeros((n, 4), dtype=dtype)
		self._vel = np.zeros((n, 3), dtype=dtype)
		self._acc = np.zeros((n, 3), dtype=dtype)

	def load(self, pos4: np.ndarray, vel: np.ndarray) -> bool:
		pos4 = np.asarray(pos4, dtype=self.dtype)
		vel = np.asarray(vel, dtype=self.dtype)
		if pos4.ndim != 2 or pos4.shape[1] != 4:
			return False
		if vel.shape != (pos4.shape[0], 3):
			return False
		self.n_bodies = int(pos4.shape[0])
		self._pos4 = pos4.copy()
		self._vel = vel.copy()
		self._acc = np.zeros_like(self._vel)
		return True

	def build_state(self, bodies: List[Body] | None, masses=None, positions=None, velocities=None) -> bool:
		if bodies is None:
			if masses is None or positions is None:
				return False

			m = np.asarray(masses, dtype=np.float64).ravel()
			n = int(m.size)
			p = _as_xyz(positions, n, np.float64)
			if p is None:
				return False

			if velocities is None or len(velocities) == 0:
				v = np.zeros((n, 3), dtype=np.float64)
			elif len(velocities) == 1 and n > 1:
				v = _as_xyz(list(velocities) * n, n, np.float64)
			else:
				v = _as_xyz(velocities, n, np.float64)
			if v is None:
				return False
		else:
			n = len(bodies)
			m = np.array([b.mass for b in bodies], dtype=np.float64)
			p = np.array([(b.x, b.y, b.z) for b in bodies], dtype=np.float64).reshape(n, 3)
			v = np.array([(b.vx, b.vy, b.vz) for b in bodies], dtype=np.float64).reshape(n, 3)

		if np.any(m < 0) or not np.all(np.isfinite(m)):
			return False

		pos4 = np.empty((n, 4), dtype=np.float64)
		pos4[:, :3] = p
		pos4[:, 3] = m
		self._pos4 = pos4.astype(self.dtype, copy=False)
		self._vel = v.astype(self.dtype, copy=True)
		self._acc = np.zeros_like(self._vel)
		self.n_bodies = n
		return True

	def disable(self) -> None:
		self.allocate(0, dtype=self.dtype)

	def snapshot(self) -> dict:
		return {
			"pos4": self._pos4.copy(),
			"vel": self._vel.copy(),
			"acc": self._acc.copy(),
		}

	def restore(self, snap: dict) -> bool:
		if snap is None or "pos4" not in snap or "vel" not in snap:
			return False

		pos4 = np.array(snap["pos4"], dtype=self.dtype, copy=True)
		vel = np.array(snap["vel"], dtype=self.dtype, copy=True)
		if pos4.ndim != 2 or pos4.shape[1] != 4:
			return False
		n = int(pos4.shape[0])
		if vel.shape != (n, 3):
			return False
		if "acc" in snap:
			acc = np.array(snap["acc"], dtype=self.dtype, copy=True)
			if acc.shape != (n, 3):
				return False
		else:
			acc = np.zeros_like(vel)

		m = pos4[:, 3]
		if np.any(m < 0) or not np.all(np.isfinite(m)):
			return False

		self._pos4 = pos4
		self._vel = vel
		self._acc = acc
		self.n_bodies = n
		return True

	def set_fast_mode(self, float32: bool = True) -> None:
		if float32:
			dtype = np.float32
		else:
			dtype = np.float64
		self._pos4 = self._pos4.astype(dtype, copy=False)
		self._vel = self._vel.astype(dtype, copy=False)
		self._acc = self._acc.astype(dtype, copy=False)
