"""CHIP-8 interpreter built on JAX."""

from chip8jax.state import (
    EmulatorState, StackState, create_state, reset_and_load, load_rom, load_rom_file,
    press_keys, tick_timers, sound_active,
)
from chip8jax.emulator import execute, fetch, fetch_and_decode, step
from chip8jax.decode import DecodedInstruction, decode
from chip8jax.constants import *
from chip8jax.errors import Chip8Error, RomLoadError, RomTooLarge, RomUnreadable
from chip8jax.config import EmulatorConfig
from chip8jax.disassemble import disassemble, trace
from chip8jax.driver import Chip8Session, RunStatus, run_frame, run_frames, run_n_instructions
from chip8jax.keypad import KEYMAP, keypad_from_keys
from chip8jax.rendering import display_to_rgb, create_color_scheme, batch_render, save_frame, rgba_from_hex

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "reset_and_load",
    "load_rom",
    "load_rom_file",
    "press_keys",
    "tick_timers",
    "sound_active",
    "fetch",
    "fetch_and_decode",
    "execute",
    "step",
    "DecodedInstruction",
    "decode",
    "PROGRAM_START",
    "FONT_START",
    "MAX_ROM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "Chip8Error",
    "RomLoadError",
    "RomTooLarge",
    "RomUnreadable",
    "EmulatorConfig",
    "disassemble",
    "trace",
    "Chip8Session",
    "RunStatus",
    "run_frame",
    "run_frames",
    "run_n_instructions",
    "KEYMAP",
    "keypad_from_keys",
    "display_to_rgb",
    "create_color_scheme",
    "batch_render",
    "save_frame",
    "rgba_from_hex",
]
