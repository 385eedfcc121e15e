"""
Frigate Hop for reinforcement learning
======================================

Provides a standard Gymnasium interface to Frigate Hop. One environment step
applies one input and advances the simulation by one frame of simulated time,
so runs are deterministic for a given seed and action sequence.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from frigate_hop.core.config_loader import GameConfig, load_config
from frigate_hop.core.game import SimulationLoop
from frigate_hop.core.orientation import Orientation
from frigate_hop.core.scheduler import ManualClock, Scheduler

# Discrete action index -> input direction (None = hold position)
ACTIONS: Tuple[Optional[Orientation], ...] = (
    None,
    Orientation.UP,
    Orientation.DOWN,
    Orientation.LEFT,
    Orientation.RIGHT,
)


class FrigateHopEnv(gym.Env):
    """
    Frigate Hop as a Gymnasium environment.

    Action Space:
        Discrete(5): 0 stay, 1 up, 2 down, 3 left, 4 right.

    Observation Space:
        Dict with run state, vessel position and padded hazard arrays.

    Reward:
        Score gained this step (1 for every forward move).

    Termination:
        terminated on collision; truncated after env.max_episode_frames steps.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        output_size: Optional[Tuple[int, int]] = None,
        image_obs: bool = False,
        debug: bool = False,
    ):
        """
        Args:
            config_path: YAML file to load instead of the packaged game_config.yaml.
            render_mode: One of metadata["render_modes"], or None to run without drawing.
            output_size: (width, height) of the simulated surface; config default when None.
            image_obs: Add a rendered "board_rgb" frame to every observation.
            debug: Print [DEBUG] traces while stepping.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")

        self.render_mode = render_mode
        self._config = load_config(config_path)
        self._image_obs = bool(image_obs)
        self._debug = debug

        self._clock = ManualClock()
        self._scheduler = Scheduler(self._clock)
        self._game = SimulationLoop(
            config=self._config,
            scheduler=self._scheduler,
            output_size=output_size,
            debug=debug
        )

        self._renderer = None
        self._solid_renderer = None

        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = self._build_observation_space()

        if self._debug:
            width, height = self._game.output_size
            print(f"[DEBUG] FrigateHopEnv initialized")
            print(f"[DEBUG]   Surface: {width}x{height}")
            print(f"[DEBUG]   Max hazards: {self._config.max_obstacles}")

    def _build_observation_space(self) -> spaces.Dict:
        """Describe the arrays produced by StateSnapshot.to_obs_dict()."""
        max_obj = self._config.max_obstacles
        width, height = self._game.output_size

        unbounded = dict(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32)
        positive = dict(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32)
        level_max = np.iinfo(np.int32).max
        score_max = np.iinfo(np.int64).max

        fields = {
            "level": spaces.Box(low=1, high=level_max, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=score_max, shape=(), dtype=np.int64),
            "transitioning": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "vessel_x": spaces.Box(low=0, high=width, shape=(), dtype=np.float32),
            "vessel_y": spaces.Box(low=0, high=height, shape=(), dtype=np.float32),
            "vessel_orientation": spaces.Box(low=0, high=3, shape=(), dtype=np.int32),
            "distance_to_goal": spaces.Box(low=0, high=height, shape=(), dtype=np.float32),
            "nearest_hazard_distance": spaces.Box(low=-1, high=np.inf, shape=(), dtype=np.float32),
            "objects_count": spaces.Box(low=0, high=max_obj, shape=(), dtype=np.int32),
            "obj_kind": spaces.Box(low=-1, high=1, shape=(max_obj,), dtype=np.int8),
            "obj_x": spaces.Box(**unbounded),
            "obj_y": spaces.Box(**unbounded),
            "obj_width": spaces.Box(**positive),
            "obj_height": spaces.Box(**positive),
            "obj_vx": spaces.Box(**unbounded),
            "obj_mask": spaces.MultiBinary(n=max_obj),
        }
        if self._image_obs:
            fields["board_rgb"] = spaces.Box(low=0, high=255, shape=(height, width, 3), dtype=np.uint8)
        return spaces.Dict(fields)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a fresh run at level 1.

        The seed feeds the hazard generator; the same seed replays the same field.
        """
        super().reset(seed=seed)

        self._game.start(seed=seed)

        info = dict(self._game.get_info(), delta_score=0)
        return self._get_obs(), info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step: apply the input, then advance one frame.

        Args:
            action: Index into ACTIONS.

        Raises:
            ValueError: If the action is outside the action space.
        """
        action = int(np.asarray(action).item())
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action}, expected 0..{len(ACTIONS) - 1}")

        score_before = self._game.score

        if not self._game.is_over:
            direction = ACTIONS[action]
            if direction is not None:
                self._game.handle_input(direction)
            self._clock.advance(self._config.env.frame_dt)
            self._scheduler.pump()

        delta_score = self._game.score - score_before
        terminated = self._game.is_over
        truncated = (
            not terminated
            and self._game.state.frames >= self._config.env.max_episode_frames
        )

        obs = self._get_obs()
        info = dict(self._game.get_info(), delta_score=delta_score)

        if self._debug:
            print(f"[DEBUG] Step: action={action}, delta_score={delta_score}, "
                  f"level={info['level']}, y={float(obs['vessel_y']):.1f}")
            if terminated:
                print(f"[DEBUG] TERMINATED: collision at level {info['level']}")

        if self.render_mode == "human":
            self.render()

        return obs, float(delta_score), terminated, truncated, info

    def _get_obs(self) -> Dict[str, np.ndarray]:
        """Observation arrays for the current frame."""
        obs = self._game.snapshot().to_obs_dict()
        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()
        return obs

    def _render_to_array(self) -> np.ndarray:
        """Rasterize the field with SolidRenderer (no display needed)."""
        if self._solid_renderer is None:
            from frigate_hop.core.render_solid import SolidRenderer
            self._solid_renderer = SolidRenderer(self._config)

        return self._solid_renderer.render(self._game.get_render_data())

    def render(self) -> Optional[np.ndarray]:
        """Draw the field; only "rgb_array" mode returns a frame."""
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode != "human":
            return None
        if self._renderer is None:
            from frigate_hop.core.render_pygame import PygameRenderer
            self._renderer = PygameRenderer(self._config)
        self._renderer.render_to_screen(self._game.get_render_data())
        return None

    def close(self) -> None:
        """Stop the run and release any window."""
        self._game.stop()
        renderer, self._renderer = self._renderer, None
        if renderer is not None:
            renderer.close()
        self._solid_renderer = None

    @property
    def game(self) -> SimulationLoop:
        """The wrapped SimulationLoop."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Configuration the environment was built from."""
        return self._config
