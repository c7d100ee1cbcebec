"""CHIP-8 instruction decoding.

An opcode is a big-endian 16-bit word. Its top nibble selects the family,
the remaining bits are sliced into the conventional X/Y/N/NN/NNN operands.
Decoding works on Python ints as well as traced JAX scalars.
"""

import jax.numpy as jnp
from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Opcode word split into its operand fields."""
    raw: int     # Full 16-bit word
    opcode: int  # Family, bits 12-15
    x: int       # Register index, bits 8-11
    y: int       # Register index, bits 4-7
    n: int       # 4-bit constant
    nn: int      # 8-bit constant
    nnn: int     # 12-bit address


def pack_opcode(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Join two memory bytes into a big-endian opcode."""
    return (jnp.astype(high, jnp.uint16) << 8) | jnp.astype(low, jnp.uint16)


def decode(instruction: int) -> DecodedInstruction:
    """Slice a 16-bit opcode into its fields."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction >> 12) & 0xF,
        x=(instruction >> 8) & 0xF,
        y=(instruction >> 4) & 0xF,
        n=instruction & 0xF,
        nn=instruction & 0xFF,
        nnn=instruction & 0xFFF,
    )
