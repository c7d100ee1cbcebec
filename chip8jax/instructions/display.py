"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8jax.state import EmulatorState
from chip8jax.decode import DecodedInstruction
from chip8jax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, FLAG_REGISTER, ADDRESS_MASK

# Pre-computed row/column grids matching the (height, width) display
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def sprite_mask(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    """Boolean screen-sized mask of the sprite bits DXYN would draw.

    The origin wraps, the sprite body is clipped at the right and bottom
    edges. Sprite rows read past 0xFFF wrap to the start of memory.
    """
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % SCREEN_HEIGHT

    in_sprite = (
        (xx >= sprite_x) & (xx < sprite_x + SPRITE_WIDTH) &
        (yy >= sprite_y) & (yy < sprite_y + instruction.n)
    )

    row_offset = jnp.clip(yy - sprite_y, 0, 15)
    col_offset = jnp.clip(xx - sprite_x, 0, SPRITE_WIDTH - 1)
    sprite_rows = state.memory[(jnp.astype(state.I, jnp.int32) + row_offset) & ADDRESS_MASK]
    bits = (jnp.astype(sprite_rows, jnp.int32) >> (SPRITE_WIDTH - 1 - col_offset)) & 1
    return (bits == 1) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite = sprite_mask(state, instruction)
    collision = jnp.any(state.display & sprite)

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
