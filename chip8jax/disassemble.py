"""Human readable rendering of CHIP-8 opcodes for tracing."""

from typing import Optional

from chip8jax.decode import decode
from chip8jax.logging import ConsoleLogger

_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instruction: int) -> str:
    """Return the mnemonic form of a 16-bit opcode.

    Words that are not instructions come back as ``DATA 0xXXXX``.

    >>> disassemble(0xD015)
    'DRW V0, V1, 5'
    """
    instruction = int(instruction) & 0xFFFF
    d = decode(instruction)
    x, y, n, nn, nnn = d.x, d.y, d.n, d.nn, d.nnn
    family = d.opcode

    text: Optional[str] = None
    if instruction == 0x00E0:
        text = "CLS"
    elif instruction == 0x00EE:
        text = "RET"
    elif family == 0x1:
        text = f"JP 0x{nnn:03X}"
    elif family == 0x2:
        text = f"CALL 0x{nnn:03X}"
    elif family == 0x3:
        text = f"SE V{x:X}, 0x{nn:02X}"
    elif family == 0x4:
        text = f"SNE V{x:X}, 0x{nn:02X}"
    elif family == 0x5 and n == 0:
        text = f"SE V{x:X}, V{y:X}"
    elif family == 0x6:
        text = f"LD V{x:X}, 0x{nn:02X}"
    elif family == 0x7:
        text = f"ADD V{x:X}, 0x{nn:02X}"
    elif family == 0x8 and n in _ALU_MNEMONICS:
        text = f"{_ALU_MNEMONICS[n]} V{x:X}, V{y:X}"
    elif family == 0x9 and n == 0:
        text = f"SNE V{x:X}, V{y:X}"
    elif family == 0xA:
        text = f"LD I, 0x{nnn:03X}"
    elif family == 0xB:
        text = f"JP V0, 0x{nnn:03X}"
    elif family == 0xC:
        text = f"RND V{x:X}, 0x{nn:02X}"
    elif family == 0xD:
        text = f"DRW V{x:X}, V{y:X}, {n}"
    elif family == 0xE and nn == 0x9E:
        text = f"SKP V{x:X}"
    elif family == 0xE and nn == 0xA1:
        text = f"SKNP V{x:X}"
    elif family == 0xF and nn in _MISC_FORMATS:
        text = _MISC_FORMATS[nn].format(x=x)

    return text if text is not None else f"DATA 0x{instruction:04X}"


def trace(state, logger: ConsoleLogger) -> str:
    """Log the instruction about to execute at ``state.pc``."""
    pc = int(state.pc)
    instruction = (int(state.memory[pc]) << 8) | int(state.memory[(pc + 1) % len(state.memory)])
    line = f"0x{pc:04X}: {instruction:04X}  {disassemble(instruction)}"
    logger.debug(line)
    return line
