"""CHIP-8 system instructions (0x0xxx).

Only 00E0 and 00EE are implemented; the remaining 0NNN machine code
routine calls are ignored.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.stack import pop, is_empty


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine. Ignored when the stack is empty."""
    def _return(state):
        stack, address = pop(state.stack)
        return state.replace(stack=stack, pc=address)

    return jax.lax.cond(is_empty(state.stack), lambda s: s, _return, state)


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    index = jnp.where(
        instruction.raw == 0x00E0, 0,
        jnp.where(instruction.raw == 0x00EE, 1, 2)
    )
    return jax.lax.switch(
        index,
        [execute_clear_screen, execute_return, no_op],
        state, instruction
    )
