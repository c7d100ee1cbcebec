"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np
from PIL import Image

from chip8jax.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def rgba_from_hex(color: int) -> Tuple[int, int, int, int]:
    """Split a packed 0xRRGGBBAA colour into channels."""
    return (
        (color >> 24) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
    )


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
    pixel_outlines: bool = False,
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (32, 64), indexed ``[y, x]``
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)
        pixel_outlines: Draw a one pixel ``off_color`` border around each
            lit cell so neighbouring cells look separate (needs scale > 2)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = np.array(display, dtype=np.bool_)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color[:3]
    rgb_frame[~pixels] = off_color[:3]

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    if pixel_outlines and scale > 2:
        lit = np.repeat(np.repeat(pixels, scale, axis=0), scale, axis=1)
        offsets = np.arange(height * scale) % scale
        row_edge = (offsets == 0) | (offsets == scale - 1)
        offsets = np.arange(width * scale) % scale
        col_edge = (offsets == 0) | (offsets == scale - 1)
        border = (row_edge[:, None] | col_edge[None, :]) & lit
        rgb_frame[border] = off_color[:3]

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("yellow", "classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "yellow": ((255, 255, 0), (0, 0, 0)),  # Yellow on black
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def batch_render(
    displays: jnp.ndarray, scale: int = 4, color_scheme: str = "classic", padding: int = 5
) -> np.ndarray:
    """Render many displays (e.g. from vmapped machines) in a grid.

    Args:
        displays: Array of shape (batch_size, 32, 64)
        scale: Upscaling factor (smaller for batch rendering)
        color_scheme: Color scheme name
        padding: Transparent gap between displays in pixels

    Returns:
        RGBA array with every display laid out row by row
    """
    batch_size = displays.shape[0]
    on_color, off_color = create_color_scheme(color_scheme)

    grid_cols = int(np.ceil(np.sqrt(batch_size)))
    grid_rows = int(np.ceil(batch_size / grid_cols))

    cell_height, cell_width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    grid_height = grid_rows * cell_height + (grid_rows - 1) * padding
    grid_width = grid_cols * cell_width + (grid_cols - 1) * padding
    grid_image = np.zeros((grid_height, grid_width, 4), dtype=np.uint8)

    for i in range(batch_size):
        row, col = divmod(i, grid_cols)
        y_start = row * (cell_height + padding)
        x_start = col * (cell_width + padding)
        rgb = display_to_rgb(displays[i], scale, on_color, off_color)
        grid_image[y_start:y_start + cell_height, x_start:x_start + cell_width, :3] = rgb
        grid_image[y_start:y_start + cell_height, x_start:x_start + cell_width, 3] = 255

    return grid_image


def save_frame(
    display: jnp.ndarray,
    filename: str,
    scale: int = 8,
    on_color: Tuple[int, ...] = (0, 255, 0),
    off_color: Tuple[int, ...] = (0, 0, 0),
    pixel_outlines: bool = False,
) -> np.ndarray:
    """Render ``display`` and write it as an image file (format from the extension)."""
    rgb = display_to_rgb(display, scale, on_color, off_color, pixel_outlines)
    Image.fromarray(rgb).save(filename)
    return rgb
