"""
This module implements BodyView, a proxy class providing Body-like access to individual
bodies stored in the body store's numpy arrays.

Properties map attribute access (x, y, z, vx, vy, vz, ax, ay, az) directly to the
appropriate array cells, maintaining the same interface as Body while operating on the
packed storage. Mass is read-only: it is fixed when the population is created. The view
assumes the parent store keeps valid array structures and that the body index remains
within bounds.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .body_store import BodyStore




class BodyView:
	__slots__ = ("_store", "_i")

	def __init__(self, store: "BodyStore", idx: int) -> None:
		self._store = store
		self._i = int(idx)

	@property
	def index(self) -> int:
		return self._i

	@property
	def mass(self) -> float:
		return float(self._store._pos4[self._i, 3])

	@property
	def x(self) -> float:
		return float(self._store._pos4[self._i, 0])
	@x.setter
	def x(self, v: float) -> None:
		self._store._pos4[self._i, 0] = float(v)

	@property
	def y(self) -> float:
		return float(self._store._pos4[self._i, 1])
	@y.setter
	def y(self, v: float) -> None:
		self._store._pos4[self._i, 1] = float(v)

	@property
	def z(self) -> float:
		return float(self._store._pos4[self._i, 2])
	@z.setter
	def z(self, v: float) -> None:
		self._store._pos4[self._i, 2] = float(v)

	@property
	def vx(self) -> float:
		return float(self._store._vel[self._i, 0])
	@vx.setter
	def vx(self, v: float) -> None:
		self._store._vel[self._i, 0] = float(v)

	@property
	def vy(self) -> float:
		return float(self._store._vel[self._i, 1])
	@vy.setter
	def vy(self, v: float) -> None:
		self._store._vel[self._i, 1] = float(v)

	@property
	def vz(self) -> float:
		return float(self._store._vel[self._i, 2])
	@vz.setter
	def vz(self, v: float) -> None:
		self._store._vel[self._i, 2] = float(v)

	@property
	def ax(self) -> float:
		return float(self._store._acc[self._i, 0])

	@property
	def ay(self) -> float:
		return float(self._store._acc[self._i, 1])

	@property
	def az(self) -> float:
		return float(self._store._acc[self._i, 2])

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
