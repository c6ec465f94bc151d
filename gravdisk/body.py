"""
This module defines the Body class, a simple data container for individual bodies in
the disk simulation.

The class stores fundamental properties (mass, position x/y/z, velocity vx/vy/vz) as
floating-point attributes and provides a clean string representation for debugging. It
serves as the basic building block for explicit initial condition specification before
conversion to the packed numpy array format used by the body store. The central mass is
never a Body; it lives in the configuration as a constant.
"""
class Body:
	def __init__(
		self,
		mass: float,
		x: float,
		y: float,
		z: float = 0.0,
		vx: float = 0.0,
		vy: float = 0.0,
		vz: float = 0.0,
	):
		self.mass = float(mass)
		self.x = float(x)
		self.y = float(y)
		self.z = float(z)
		self.vx = float(vx)
		self.vy = float(vy)
		self.vz = float(vz)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, z={self.z}, "
				f"vx={self.vx}, vy={self.vy}, vz={self.vz})")
