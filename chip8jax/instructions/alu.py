"""CHIP-8 ALU operations (8xxx).

Every operation maps ``(vx, vy, vf)`` to ``(result, vf)``. The flag is
stored before the result, so ``8FYn`` keeps the arithmetic result in VF.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.constants import FLAG_REGISTER


def _u8(value) -> jnp.ndarray:
    return jnp.astype(value & 0xFF, jnp.uint8)


def alu_set(vx, vy, vf):
    """8XY0 - Set: VX = VY."""
    return _u8(vy), vf


def alu_or(vx, vy, vf):
    """8XY1 - Binary OR: VX |= VY."""
    return _u8(vx | vy), vf


def alu_and(vx, vy, vf):
    """8XY2 - Binary AND: VX &= VY."""
    return _u8(vx & vy), vf


def alu_xor(vx, vy, vf):
    """8XY3 - Logical XOR: VX ^= VY."""
    return _u8(vx ^ vy), vf


def alu_add(vx, vy, vf):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return _u8(result), _u8(result > 0xFF)


def alu_sub_xy(vx, vy, vf):
    """8XY5 - Subtract: VX -= VY, VF = not borrow."""
    return _u8(vx - vy), _u8(vx >= vy)


def alu_shift_right(vx, vy, vf):
    """8XY6 - Shift right: VX >>= 1, VF = shifted out bit."""
    return _u8(vx >> 1), _u8(vx & 1)


def alu_sub_yx(vx, vy, vf):
    """8XY7 - Subtract: VX = VY - VX, VF = not borrow."""
    return _u8(vy - vx), _u8(vy >= vx)


def alu_shift_left(vx, vy, vf):
    """8XYE - Shift left: VX <<= 1, VF = shifted out bit."""
    return _u8(vx << 1), _u8((vx & 0x80) >> 7)


def alu_undefined(vx, vy, vf):
    """8XY8-8XYD, 8XYF - Not instructions, leave registers unchanged."""
    return _u8(vx), vf


# Low nibble -> handler slot. Slots 0-7 follow the nibble, 8 is 8XYE.
ALU_OPERATIONS = [
    alu_set, alu_or, alu_and, alu_xor, alu_add,
    alu_sub_xy, alu_shift_right, alu_sub_yx, alu_shift_left, alu_undefined,
]
_ALU_SLOTS = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = jnp.astype(state.V[instruction.x], jnp.int32)
    vy = jnp.astype(state.V[instruction.y], jnp.int32)
    vf = state.V[FLAG_REGISTER]

    result, flag = jax.lax.switch(_ALU_SLOTS[instruction.n], ALU_OPERATIONS, vx, vy, vf)

    new_V = state.V.at[FLAG_REGISTER].set(flag)
    new_V = new_V.at[instruction.x].set(result)
    return state.replace(V=new_V)
