"""Host keyboard to CHIP-8 keypad mapping.

The 4x4 hex keypad is laid over the left block of a QWERTY keyboard::

    1 2 3 C        1 2 3 4
    4 5 6 D   <-   q w e r
    7 8 9 E        a s d f
    A 0 B F        z x c v
"""

from typing import Iterable

import jax.numpy as jnp

from chip8jax.constants import NUM_KEYS

KEYMAP = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def keypad_from_keys(keys: Iterable[str]) -> jnp.ndarray:
    """Boolean keypad with the CHIP-8 keys for the held host ``keys`` set.

    Unmapped keys are ignored.
    """
    keypad = jnp.zeros(NUM_KEYS, dtype=jnp.bool_)
    indices = [KEYMAP[k.lower()] for k in keys if k.lower() in KEYMAP]
    if indices:
        keypad = keypad.at[jnp.array(indices)].set(True)
    return keypad
