"""CHIP-8 immediate loads, index register and random byte (6xxx, 7xxx, Axxx, Cxxx)."""

import jax
import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction


def random_byte(rng: jax.random.PRNGKey) -> tuple[jax.random.PRNGKey, jnp.ndarray]:
    """Draw one byte from ``rng``, returning the advanced key."""
    rng, subkey = jax.random.split(rng)
    return rng, jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)


def _write_register(state: EmulatorState, index, value) -> EmulatorState:
    return state.replace(V=state.V.at[index].set(jnp.astype(value & 0xFF, jnp.uint8)))


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return _write_register(state, instruction.x, instruction.nn)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - VX += NN modulo 256; VF is left alone."""
    total = jnp.astype(state.V[instruction.x], jnp.int32) + instruction.nn
    return _write_register(state, instruction.x, total)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random byte & NN."""
    rng, value = random_byte(state.rng)
    state = _write_register(state, instruction.x, value & instruction.nn)
    return state.replace(rng=rng)
