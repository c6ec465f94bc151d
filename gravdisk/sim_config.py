from __future__ import annotations
from dataclasses import dataclass

"""
This central configuration module defines all simulation parameters through the SimConfig dataclass. Key parameters include the body count, gravitational constant, softening length, central mass, the spatial scale and per-body mass of the initial disk, the default timestep and the scene seed, plus execution settings for the worker pool (worker count and rows per work block), float32 storage, the optional non-finite state guard and the rate limits for diagnostic printing. The class provides a copy method for configuration inheritance. It serves as the single source of truth for simulation behavior, with all components referencing this configuration. The module assumes reasonable default values and that users understand the physical implications of parameter choices.

"""


@dataclass
class SimConfig:
    n_bodies: int = 1024
    G: float = 1.0
    softening: float = 0.05
    central_mass: float = 1.0e3
    spatial_scale: float = 20.0
    body_mass: float = 1.0e-2
    dt: float = 1.0e-3
    seed: int = 42
    n_workers: int = 0
    block_rows: int = 256
    fast_float32: bool = False
    enable_runtime_guard: bool = False
    diag_prints: bool = True
    diag_print_limit: int = 3
    diag_print_interval: int = 1000

    def copy(self) -> "SimConfig":
        new = object.__new__(SimConfig)
        new.__dict__ = dict(getattr(self, "__dict__", {}))
        return new
