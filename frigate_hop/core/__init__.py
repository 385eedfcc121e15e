"""
Frigate Hop Core - the simulation and its environment wrapper.

Main exports:
- SimulationLoop: Per-frame game orchestrator
- FrigateHopEnv: Gymnasium environment for agents
- Scheduler, RealClock, ManualClock: Frame and timer scheduling
- GameConfig: Configuration loaded from game_config.yaml
"""

from frigate_hop.core.config_loader import GameConfig, get_config, load_config
from frigate_hop.core.orientation import Orientation, parse_direction
from frigate_hop.core.scaler import CoordinateScaler
from frigate_hop.core.scheduler import ManualClock, RealClock, Scheduler
from frigate_hop.core.rules import LevelConfig, get_level_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.env_gym import FrigateHopEnv

__all__ = [
    "GameConfig",
    "get_config",
    "load_config",
    "Orientation",
    "parse_direction",
    "CoordinateScaler",
    "ManualClock",
    "RealClock",
    "Scheduler",
    "LevelConfig",
    "get_level_config",
    "SimulationLoop",
    "FrigateHopEnv",
]
