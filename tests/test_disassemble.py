"""Tests for opcode mnemonics and instruction tracing."""

import pytest
from chip8jax import disassemble, trace, reset_and_load
from chip8jax.logging import ConsoleLogger


@pytest.mark.parametrize("instruction,text", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1228, "JP 0x228"),
    (0x2ABC, "CALL 0xABC"),
    (0x3A2A, "SE VA, 0x2A"),
    (0x4B00, "SNE VB, 0x00"),
    (0x5120, "SE V1, V2"),
    (0x612A, "LD V1, 0x2A"),
    (0x7F01, "ADD VF, 0x01"),
    (0x8124, "ADD V1, V2"),
    (0x812E, "SHL V1, V2"),
    (0x9340, "SNE V3, V4"),
    (0xA22A, "LD I, 0x22A"),
    (0xB300, "JP V0, 0x300"),
    (0xC50F, "RND V5, 0x0F"),
    (0xD015, "DRW V0, V1, 5"),
    (0xE19E, "SKP V1"),
    (0xE1A1, "SKNP V1"),
    (0xF20A, "LD V2, K"),
    (0xF333, "LD B, V3"),
    (0xFF65, "LD VF, [I]"),
])
def test_disassemble(instruction, text):
    assert disassemble(instruction) == text


@pytest.mark.parametrize("instruction", [0x0123, 0x5121, 0x8128, 0x9341, 0xE1FF, 0xF1FF])
def test_disassemble_data_words(instruction):
    assert disassemble(instruction) == f"DATA 0x{instruction:04X}"


def test_trace_logs_at_debug(capsys):
    state = reset_and_load(b"\x61\x2A")
    logger = ConsoleLogger(name="Trace", log_level="DEBUG", use_colors=False, show_timestamps=False)

    line = trace(state, logger)

    assert line == "0x0200: 612A  LD V1, 0x2A"
    assert capsys.readouterr().out.strip() == "[   DEBUG][Trace] 0x0200: 612A  LD V1, 0x2A"


def test_trace_silent_above_debug(capsys):
    state = reset_and_load(b"\x00\xE0")
    logger = ConsoleLogger(log_level="INFO", use_colors=False)

    trace(state, logger)

    assert capsys.readouterr().out == ""
