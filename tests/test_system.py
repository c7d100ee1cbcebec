"""Tests for system instructions (0xxx) and the call stack."""

import jax.numpy as jnp
from chip8jax import execute, STACK_SIZE


def test_execute_call_and_return(fresh_state):
    """2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)
    assert state.pc == 0x300
    assert state.stack.pointer == 1
    assert state.stack.data[0] == initial_pc

    state = execute(state, 0x00EE)
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_return_in_order(fresh_state):
    state = execute(fresh_state, 0x2300)
    state = state.replace(pc=state.pc + 6)
    state = execute(state, 0x2400)
    assert state.pc == 0x400
    assert state.stack.pointer == 2

    state = execute(state, 0x00EE)
    assert state.pc == 0x306
    state = execute(state, 0x00EE)
    assert state.pc == 0x200


def test_return_with_empty_stack_is_ignored(fresh_state):
    """00EE on an empty stack leaves PC and the stack untouched."""
    state = fresh_state.replace(pc=jnp.astype(0x234, jnp.uint16))

    state = execute(state, 0x00EE)

    assert state.pc == 0x234
    assert state.stack.pointer == 0
    assert jnp.all(state.stack.data == 0)


def test_call_with_full_stack_is_ignored(fresh_state):
    """2NNN beyond the stack capacity neither pushes nor jumps."""
    state = fresh_state
    for depth in range(STACK_SIZE):
        state = execute(state, 0x2300 + 2 * depth)
    assert state.stack.pointer == STACK_SIZE
    full_pc = state.pc
    full_data = state.stack.data

    state = execute(state, 0x2500)

    assert state.pc == full_pc
    assert state.stack.pointer == STACK_SIZE
    assert jnp.array_equal(state.stack.data, full_data)


def test_stack_holds_twelve_frames(fresh_state):
    state = fresh_state
    for depth in range(STACK_SIZE):
        state = execute(state, 0x2300 + 2 * depth)
    for depth in reversed(range(STACK_SIZE)):
        expected = 0x200 if depth == 0 else 0x300 + 2 * (depth - 1)
        state = execute(state, 0x00EE)
        assert state.pc == expected
    assert state.stack.pointer == 0


def test_machine_code_routine_is_ignored(fresh_state):
    """0NNN other than 00E0/00EE does nothing."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True))

    for instruction in (0x0000, 0x0123, 0x00E1, 0x00FF, 0x0FFF):
        result = execute(state, instruction)
        assert result.pc == state.pc
        assert bool(result.display[0, 0])
        assert result.stack.pointer == 0
