"""Exceptions raised while preparing a CHIP-8 machine.

Instruction execution never raises: unknown opcodes and stack misuse are
no-ops. Only ROM loading can fail.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base exception for all chip8jax errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RomLoadError(Chip8Error):
    """A ROM could not be turned into a runnable machine."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class RomTooLarge(RomLoadError):
    """ROM does not fit between the entry point and the end of memory."""

    def __init__(self, size: int, max_size: int, path: Optional[str] = None):
        super().__init__(
            f"ROM is {size} bytes, max size allowed is {max_size}", path=path
        )
        self.size = size
        self.max_size = max_size


class RomUnreadable(RomLoadError):
    """ROM source could not be read."""

    def __init__(self, path: str, reason: str = ""):
        message = f"ROM file {path} is invalid or doesn't exist"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path=path)
