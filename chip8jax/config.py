"""Emulator run configuration."""

import dataclasses
from typing import Any, Dict, Mapping


@dataclasses.dataclass(frozen=True)
class EmulatorConfig:
    """Pacing and presentation settings for a CHIP-8 run.

    Attributes:
        instructions_per_second: CPU clock rate in instructions per second
        fps: Frame rate; timers tick once per frame
        scale: Upscaling factor for rendered frames
        fg_color: Foreground colour as 0xRRGGBBAA
        bg_color: Background colour as 0xRRGGBBAA
        pixel_outlines: Draw lit cells with a background coloured outline
        trace: Log every executed instruction at DEBUG level
    """
    instructions_per_second: int = 500
    fps: int = 60
    scale: int = 20
    fg_color: int = 0xFFFF00FF
    bg_color: int = 0x00000000
    pixel_outlines: bool = True
    trace: bool = False

    def __post_init__(self):
        if self.instructions_per_second <= 0:
            raise ValueError(f"instructions_per_second must be positive, got {self.instructions_per_second}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")

    @property
    def instructions_per_frame(self) -> int:
        """Number of instructions to run between two timer ticks."""
        return self.instructions_per_second // self.fps

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "EmulatorConfig":
        """Build from a mapping, ignoring keys that are not fields."""
        names = {field.name for field in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in names})

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
