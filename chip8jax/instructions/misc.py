"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.constants import FONT_START, FONT_GLYPH_SIZE, NUM_REGISTERS
from chip8jax.instructions.system import no_op


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. VF is not affected."""
    return state.replace(I=jnp.astype(state.I + jnp.astype(state.V[instruction.x], jnp.uint16), jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Stores the lowest pressed key index in VX. With no key down, PC is
    rewound so the same instruction is fetched again on the next step.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(pressed_key))

    def wait_action(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = jnp.arange(3) + jnp.astype(state.I, jnp.int32)
    return state.replace(memory=state.memory.at[indices].set(digits))


def _register_window(state: EmulatorState, instruction: DecodedInstruction):
    """Memory addresses I..I+15 and a mask selecting V0..VX."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    addresses = jnp.astype(state.I, jnp.int32) + jnp.arange(NUM_REGISTERS)
    return addresses, register_mask


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I. I is unchanged."""
    addresses, register_mask = _register_window(state, instruction)
    new_values = jnp.where(register_mask, state.V, state.memory[addresses])
    # Addresses outside the window keep their value; out of range ones are dropped.
    return state.replace(memory=state.memory.at[addresses].set(new_values, mode="drop"))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I. I is unchanged."""
    addresses, register_mask = _register_window(state, instruction)
    return state.replace(V=jnp.where(register_mask, state.memory[addresses], state.V))


MISC_OPERATIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}

# NN -> handler slot, unknown NN lands on the trailing no-op.
_MISC_SLOTS = jnp.full(256, len(MISC_OPERATIONS), dtype=jnp.int32).at[
    jnp.array(list(MISC_OPERATIONS.keys()))
].set(jnp.arange(len(MISC_OPERATIONS)))


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch FX instructions on NN."""
    return jax.lax.switch(
        _MISC_SLOTS[instruction.nn],
        list(MISC_OPERATIONS.values()) + [no_op],
        state, instruction
    )
