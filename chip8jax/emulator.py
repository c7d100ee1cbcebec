"""Main CHIP-8 emulator execution engine."""

from typing import Union

import jax
import jax.lax
import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction, decode, pack_opcode
from chip8jax.constants import MEMORY_SIZE
from chip8jax.instructions.system import execute_system_instruction
from chip8jax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key
)
from chip8jax.instructions.alu import execute_alu_operation
from chip8jax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8jax.instructions.display import execute_display
from chip8jax.instructions.misc import execute_misc_instruction

# Indexed by the opcode family nibble.
INSTRUCTION_FAMILIES = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: Union[int, DecodedInstruction]) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    ``instruction`` is a raw opcode or an already decoded one. The program
    counter is expected to have been advanced past it by ``fetch``.
    """
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)

    return jax.lax.switch(instruction.opcode, INSTRUCTION_FAMILIES, state, instruction)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance PC by 2."""
    address = jnp.astype(state.pc, jnp.int32)
    instruction = pack_opcode(state.memory[address], state.memory[(address + 1) % MEMORY_SIZE])
    return state.replace(pc=state.pc + 2), instruction


def fetch_and_decode(state: EmulatorState) -> tuple[EmulatorState, DecodedInstruction]:
    """Fetch next instruction and split it into operands."""
    state, instruction = fetch(state)
    return state, decode(instruction)


def step(state: EmulatorState) -> EmulatorState:
    """Run exactly one instruction."""
    state, instruction = fetch_and_decode(state)
    return execute(state, instruction)
