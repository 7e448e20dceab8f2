from raystream.simulation.config import Path, RayPoint, SimulationConfig, SimulationResult
from raystream.simulation.simulator import RaySimulator, simulate_rays

__all__ = [
    "Path",
    "RayPoint",
    "RaySimulator",
    "SimulationConfig",
    "SimulationResult",
    "simulate_rays",
]
