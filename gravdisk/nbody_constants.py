from __future__ import annotations

from typing import Final

from .sim_config import SimConfig

"""
This module centralizes numerical constants and configuration defaults shared by the scene, force and integration code. The NBodyConstants class sources its defaults from SimConfig so that modules needing a constant without holding a configuration object (the force kernels) read the same values the simulation driver starts from. It also pins HASH_VERSION, the version of the integer hash used to derive initial positions, and the fixed reference axis around which the initial disk rotates.


"""


HASH_VERSION: Final[int] = 1
UINT32_SPAN: Final[float] = 4294967296.0
REFERENCE_AXIS: Final[tuple] = (0.0, 0.0, 1.0)


class NBodyConstants:
    _cfg = SimConfig()

    G            = float(getattr(_cfg, "G", 1.0))
    SOFTENING    = float(getattr(_cfg, "softening", 0.05))
    CENTRAL_MASS = float(getattr(_cfg, "central_mass", 1.0e3))


__all__ = ["NBodyConstants", "HASH_VERSION", "UINT32_SPAN", "REFERENCE_AXIS"]
