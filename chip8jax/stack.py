"""CHIP-8 stack operations.

The stack holds at most ``STACK_SIZE`` return addresses. Callers check
``is_full``/``is_empty`` first; push and pop on a full/empty stack leave it
unchanged.
"""

import jax.numpy as jnp
from chip8jax.constants import ADDRESS_MASK, STACK_SIZE
from chip8jax.state import StackState


def is_full(stack: StackState) -> jnp.ndarray:
    return stack.pointer >= STACK_SIZE


def is_empty(stack: StackState) -> jnp.ndarray:
    return stack.pointer <= 0


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    full = is_full(stack)
    slot = jnp.clip(stack.pointer, 0, STACK_SIZE - 1)
    masked_address = jnp.astype(address & ADDRESS_MASK, jnp.uint16)
    new_data = jnp.where(full, stack.data, stack.data.at[slot].set(masked_address))
    new_pointer = jnp.where(full, stack.pointer, stack.pointer + 1)
    return stack.replace(data=new_data, pointer=jnp.astype(new_pointer, jnp.int32))


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack. An empty stack yields address 0."""
    empty = is_empty(stack)
    slot = jnp.clip(stack.pointer - 1, 0, STACK_SIZE - 1)
    popped_address = jnp.where(empty, jnp.zeros((), dtype=jnp.uint16), stack.data[slot])
    new_data = jnp.where(empty, stack.data, stack.data.at[slot].set(0))
    new_pointer = jnp.where(empty, stack.pointer, stack.pointer - 1)
    return stack.replace(data=new_data, pointer=jnp.astype(new_pointer, jnp.int32)), popped_address
