import numpy as np

"""
This module provides small orbital helpers shared by the scene initializer, the diagnostics and the tests. softened_radius returns each body's distance from the origin with the softening length folded in, so it never reaches zero, and circular_speed converts such a radius into the speed of a circular orbit around the central mass. orbital_direction returns unit vectors perpendicular to both the radial direction and a reference axis; bodies lying on the axis get a zero vector. All functions accept (N, 3) position arrays.


"""

def softened_radius(positions: np.ndarray, eps: float) -> np.ndarray:
	p = np.asarray(positions, dtype=np.float64)
	return np.sqrt(np.sum(p * p, axis=-1) + float(eps) * float(eps))


def circular_speed(radius, G: float, central_mass: float) -> np.ndarray:
	r = np.asarray(radius, dtype=np.float64)
	return np.sqrt(float(G) * float(central_mass) / r)


def orbital_direction(positions: np.ndarray, axis=(0.0, 0.0, 1.0)) -> np.ndarray:
	p = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
	ref = np.asarray(axis, dtype=np.float64)
	d = np.cross(np.broadcast_to(ref, p.shape), p)
	norm = np.linalg.norm(d, axis=1, keepdims=True)
	safe = np.where(norm > 0.0, norm, 1.0)
	return np.where(norm > 0.0, d / safe, 0.0)
