"""
This initialization file serves as the main entry point for the disk simulation
package, exposing all public APIs through a clean namespace.

It imports and re-exports the configuration (SimConfig, NBodyConstants), the body
containers and store (Body, BodyView, BodyStore), scene generation (SceneInitializer,
SceneConfig, UniformSampler, hash_u32), the force evaluator and potential functions, the
worker pool and integrator, validation and diagnostics, and the simulation driver with
its functional initialize/advance entry points. Users can import any major component
directly from the package root while the internal module organization stays intact.
"""

from .sim_config import SimConfig
from .nbody_constants import NBodyConstants, HASH_VERSION
from .simulation_validator import SimulationValidator

from .body import Body
from .body_view import BodyView
from .body_store import BodyStore

from .scene_hash import hash_u32, UniformSampler
from .scene_initializer import SceneConfig, SceneInitializer, initialize_scene
from .physics_utils import circular_speed, softened_radius, orbital_direction

from .geometry_cache import block_geometry
from .forces import (
    accelerate,
    accelerate_block,
    accelerations,
    central_acceleration,
    pairwise_acceleration,
)
from .potential import pair_potential, central_potential, softened_potential

from .force_pool import ForcePool
from .integrator import Integrator
from .diagnostics import Diagnostics
from .simulation import NBodySimulation, initialize, advance




__all__ = [
    "SimConfig",
    "NBodyConstants",
    "HASH_VERSION",
    "SimulationValidator",
    "Body",
    "BodyView",
    "BodyStore",
    "hash_u32",
    "UniformSampler",
    "SceneConfig",
    "SceneInitializer",
    "initialize_scene",
    "circular_speed",
    "softened_radius",
    "orbital_direction",
    "block_geometry",
    "accelerate",
    "accelerate_block",
    "accelerations",
    "central_acceleration",
    "pairwise_acceleration",
    "pair_potential",
    "central_potential",
    "softened_potential",
    "ForcePool",
    "Integrator",
    "Diagnostics",
    "NBodySimulation",
    "initialize",
    "advance",
]
