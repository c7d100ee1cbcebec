"""Tests for fetch, decode and whole-program stepping."""

import jax
import jax.numpy as jnp
import pytest
from chip8jax import (
    decode, fetch, fetch_and_decode, execute, step, reset_and_load, DecodedInstruction,
)
from chip8jax.driver import run_n_instructions


class TestDecode:

    def test_decode_fields(self):
        d = decode(0xD125)
        assert (d.opcode, d.x, d.y, d.n, d.nn, d.nnn) == (0xD, 0x1, 0x2, 0x5, 0x25, 0x125)
        assert d.raw == 0xD125

    def test_decode_extremes(self):
        d = decode(0xFFFF)
        assert (d.opcode, d.x, d.y, d.n, d.nn, d.nnn) == (0xF, 0xF, 0xF, 0xF, 0xFF, 0xFFF)
        d = decode(0x0000)
        assert (d.opcode, d.x, d.y, d.n, d.nn, d.nnn) == (0, 0, 0, 0, 0, 0)

    def test_execute_accepts_decoded(self, fresh_state):
        state = execute(fresh_state, decode(0x6A7B))
        assert state.V[0xA] == 0x7B


class TestFetch:

    def test_fetch_big_endian_and_advances(self):
        state = reset_and_load(b"\xA2\xF0")
        state, instruction = fetch(state)
        assert instruction == 0xA2F0
        assert state.pc == 0x202

    def test_fetch_and_decode(self):
        state = reset_and_load(b"\x00\xE0\x8A\xB4")
        state = state.replace(pc=jnp.astype(0x202, jnp.uint16))
        state, decoded = fetch_and_decode(state)
        assert isinstance(decoded, DecodedInstruction)
        assert decoded.opcode == 0x8
        assert decoded.x == 0xA
        assert decoded.y == 0xB
        assert state.pc == 0x204


class TestStep:

    def test_step_skip_accounts_for_fetch(self):
        # 3000: skip if V0 == 0 -> skips 6001, lands on 6102
        state = reset_and_load(b"\x30\x00\x60\x01\x61\x02")
        state = step(state)
        assert state.pc == 0x204
        state = step(state)
        assert state.V[1] == 0x02
        assert state.V[0] == 0x00

    def test_step_call_pushes_return_address(self):
        # 2206: call 0x206 -> return address is 0x202
        state = reset_and_load(b"\x22\x06\x00\x00\x00\x00\x00\xEE")
        state = step(state)
        assert state.pc == 0x206
        assert state.stack.data[0] == 0x202
        state = step(state)
        assert state.pc == 0x202

    def test_wait_for_key_refetches(self):
        state = reset_and_load(b"\xF2\x0A\x12\x02")
        for _ in range(3):
            state = step(state)
            assert state.pc == 0x200
        state = state.replace(keypad=state.keypad.at[0x7].set(True))
        state = step(state)
        assert state.pc == 0x202
        assert state.V[2] == 0x7

    def test_step_is_jittable(self):
        state = reset_and_load(b"\x60\x05\x70\x03")
        jitted = jax.jit(step)
        state = jitted(jitted(state))
        assert state.V[0] == 8


class TestPrograms:

    def test_counting_loop(self):
        """V0 counts to 10 in a loop, then the program spins on itself."""
        program = bytes([
            0x60, 0x00,  # 200: V0 = 0
            0x70, 0x01,  # 202: V0 += 1
            0x30, 0x0A,  # 204: skip if V0 == 10
            0x12, 0x02,  # 206: jump 202
            0x12, 0x08,  # 208: jump 208
        ])
        state = run_n_instructions(reset_and_load(program), 100)
        assert state.V[0] == 10
        assert state.pc == 0x208

    def test_draw_digit_from_bcd(self):
        """Convert 137 to BCD, load the hundreds digit and draw its glyph."""
        program = bytes([
            0x63, 0x89,  # V3 = 137
            0xA3, 0x00,  # I = 0x300
            0xF3, 0x33,  # BCD V3
            0xF2, 0x65,  # V0..V2 = memory[I..I+2]
            0xF0, 0x29,  # I = glyph(V0)
            0x64, 0x00,  # V4 = 0
            0xD4, 0x45,  # draw at (0, 0)
        ])
        state = run_n_instructions(reset_and_load(program), 7)
        assert [int(v) for v in state.V[:3]] == [1, 3, 7]
        assert state.I == 5
        assert jnp.sum(state.display) == 8  # glyph "1"

    def test_independent_machines(self):
        a = reset_and_load(b"\x60\x01")
        b = reset_and_load(b"\x60\x02")
        a = step(a)
        assert b.V[0] == 0
        b = step(b)
        assert (int(a.V[0]), int(b.V[0])) == (1, 2)

    def test_vmapped_machines(self):
        states = jax.vmap(lambda key: reset_and_load(b"\xC0\xFF", key))(
            jax.random.split(jax.random.PRNGKey(0), 4)
        )
        states = jax.vmap(step)(states)
        assert states.V.shape == (4, 16)
        assert jnp.all(states.pc == 0x202)
