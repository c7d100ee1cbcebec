"""Frame driver: instruction budgets, timer ticks and a stateful session.

The engine itself has no notion of time. A frame is a fixed budget of
instructions followed by one 60Hz timer tick.
"""

import enum
import os
from functools import partial
from typing import Iterable, Optional, Union

import jax
import jax.numpy as jnp

from chip8jax.config import EmulatorConfig
from chip8jax.disassemble import trace
from chip8jax.emulator import step
from chip8jax.logging import ConsoleLogger, build_tqdm_progress_bar
from chip8jax.state import (EmulatorState, reset_and_load, load_rom_file, press_keys, tick_timers,
    sound_active)


def run_instruction(state, _):
    state = step(state)
    return state, None


@partial(jax.jit, static_argnums=1)
def run_n_instructions(state: EmulatorState, n: int) -> EmulatorState:
    """Run ``n`` instructions without touching the timers."""
    state, _ = jax.lax.scan(run_instruction, state, length=n)
    return state


@partial(jax.jit, static_argnums=1)
def run_frame(state: EmulatorState, instructions_per_frame: int) -> EmulatorState:
    """Run one frame: the instruction budget, then a single timer tick."""
    return tick_timers(run_n_instructions(state, instructions_per_frame))


@partial(jax.jit, static_argnums=(1, 2, 3))
def run_frames(
    state: EmulatorState,
    num_frames: int,
    instructions_per_frame: int,
    progress: bool = False,
) -> tuple[EmulatorState, jnp.ndarray]:
    """Run ``num_frames`` frames with a fixed keypad.

    Returns the final state and the display after every frame, shaped
    (num_frames, 32, 64).
    """
    if progress:
        on_start, on_end = build_tqdm_progress_bar(num_frames)
    else:
        on_start, on_end = (lambda i: None), (lambda result, i: result)

    def frame(state, iter_num):
        on_start(iter_num)
        state = run_frame(state, instructions_per_frame)
        return on_end((state, state.display), iter_num)

    return jax.lax.scan(frame, state, jnp.arange(num_frames))


_jit_step = jax.jit(step)


class RunStatus(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    QUIT = "quit"


class Chip8Session:
    """Owns the current machine state for an interactive or headless driver.

    Args:
        rom: ROM bytes or a path to a ROM file
        config: Pacing and presentation settings
        rng: Key feeding CXNN
        logger: Receives instruction traces when ``config.trace`` is set
    """

    def __init__(
        self,
        rom: Union[bytes, str, os.PathLike],
        config: Optional[EmulatorConfig] = None,
        rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
        logger: Optional[ConsoleLogger] = None,
    ):
        self.config = config or EmulatorConfig()
        from_file = isinstance(rom, (str, os.PathLike))
        self.rom_name = os.fspath(rom) if from_file else "<bytes>"
        self.rom_data = load_rom_file(self.rom_name) if from_file else bytes(rom)
        self.rng = rng
        self.logger = logger or ConsoleLogger(name="Session")
        self.frames = 0
        self.status = RunStatus.RUNNING
        self.state = reset_and_load(self.rom_data, rng)

    def reset(self) -> EmulatorState:
        """Reload the ROM into a fresh machine and resume running."""
        self.state = reset_and_load(self.rom_data, self.rng)
        self.frames = 0
        self.status = RunStatus.RUNNING
        return self.state

    def toggle_pause(self) -> RunStatus:
        if self.status == RunStatus.RUNNING:
            self.status = RunStatus.PAUSED
        elif self.status == RunStatus.PAUSED:
            self.status = RunStatus.RUNNING
        return self.status

    def quit(self):
        self.status = RunStatus.QUIT

    @property
    def running(self) -> bool:
        return self.status == RunStatus.RUNNING

    @property
    def sound_active(self) -> bool:
        return bool(sound_active(self.state))

    def set_keys(self, keys: Iterable) -> EmulatorState:
        """Replace the keypad with a bool[16] array or pressed key indices."""
        self.state = press_keys(self.state, keys)
        return self.state

    def _traced_frame(self):
        state = self.state
        for _ in range(self.config.instructions_per_frame):
            trace(state, self.logger)
            state = _jit_step(state)
        return tick_timers(state)

    def frame(self, keys: Optional[Iterable] = None) -> jnp.ndarray:
        """Advance one frame and return the display.

        Paused or quit sessions return the current display unchanged.
        """
        if keys is not None:
            self.set_keys(keys)
        if not self.running:
            return self.state.display

        if self.config.trace:
            self.state = self._traced_frame()
        else:
            self.state = run_frame(self.state, self.config.instructions_per_frame)
        self.frames += 1
        return self.state.display
