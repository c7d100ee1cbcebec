"""CHIP-8 emulator state structures."""

from typing import Iterable, Union

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, field, PyTreeNode

from chip8jax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    STACK_SIZE, MEMORY_SIZE, MAX_ROM_SIZE, NUM_KEYS, NUM_REGISTERS,
)
from chip8jax.errors import RomTooLarge, RomUnreadable


@dataclass(frozen=True)
class StackState:
    """Fixed-capacity return address stack for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.int32))


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is row-major: ``display[y, x]``, flat index ``y * 64 + x``.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def reset_and_load(
    rom_bytes: Union[bytes, bytearray, Iterable[int]],
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
) -> EmulatorState:
    """Build a fresh machine with ``rom_bytes`` loaded at the entry point.

    Args:
        rom_bytes: Program image, at most ``MAX_ROM_SIZE`` bytes
        rng: Key feeding the CXNN random byte source

    Returns:
        State with font at 0x000, ROM at 0x200 and PC at 0x200

    Raises:
        RomTooLarge: If the ROM does not fit in memory after 0x200
    """
    rom = bytes(rom_bytes)
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom), MAX_ROM_SIZE)

    state = create_state(rng)
    if not rom:
        return state
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom_file(filename: str) -> bytes:
    """Read a ROM image from disk."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomUnreadable(str(filename), e.strerror or str(e)) from e


def load_rom(filename: str, rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> EmulatorState:
    """Load ROM file into a fresh machine, starting at 0x200."""
    rom = load_rom_file(filename)
    try:
        return reset_and_load(rom, rng)
    except RomTooLarge as e:
        e.path = str(filename)
        raise


def press_keys(state: EmulatorState, keys) -> EmulatorState:
    """Replace the keypad with ``keys``.

    ``keys`` is either a mask of 16 booleans (array or list) or an
    iterable of pressed key indices.
    """
    if hasattr(keys, "dtype") and keys.dtype == jnp.bool_:
        return state.replace(keypad=jnp.asarray(keys, dtype=jnp.bool_))
    keys = list(keys)
    if len(keys) == NUM_KEYS and all(isinstance(k, (bool, np.bool_)) for k in keys):
        return state.replace(keypad=jnp.asarray(keys, dtype=jnp.bool_))
    indices = jnp.asarray([int(k) for k in keys], dtype=jnp.int32)
    return state.replace(keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_).at[indices].set(True))


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers at 60Hz, saturating at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer).astype(jnp.uint8),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer).astype(jnp.uint8),
    )


def sound_active(state: EmulatorState) -> jnp.ndarray:
    """Whether the audio collaborator should emit a tone."""
    return state.sound_timer > 0
