"""Console logging utilities for chip8jax runs.

Provides a levelled console logger, a run logger that reports emulation
progress, and a real-time progress bar for jitted scans using io_callback.
"""

import time
import sys
from typing import Any, Dict, Optional, Callable, Tuple

import jax
from jax.experimental import io_callback

from tqdm import tqdm


class ConsoleLogger:
    """Console logger with levels, colors and timestamps."""

    def __init__(
        self,
        name: str = "chip8jax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class RunLogger(ConsoleLogger):
    """Logger for emulation runs: configuration, frame progress and summary."""

    def __init__(self, name: str = "Run", **kwargs):
        super().__init__(name, **kwargs)

    def log_run_start(self, rom: str, config: Dict[str, Any]):
        """Log ROM and configuration before the first frame."""
        self.info("=" * 60)
        self.info(f"Running {rom} with configuration:")
        for key, value in config.items():
            if isinstance(value, int) and key.endswith("color"):
                self.info(f"  {key}: 0x{value:08X}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_frame(self, frame: int, total_frames: int, state, log_interval: int = 60):
        """Log a one-line machine summary every ``log_interval`` frames."""
        if frame % log_interval != 0 and frame != total_frames - 1:
            return
        lit = int(state.display.sum())
        self.info(
            f"Frame {frame + 1:5d}/{total_frames} | "
            f"PC=0x{int(state.pc):04X} I=0x{int(state.I):04X} "
            f"DT={int(state.delay_timer):3d} ST={int(state.sound_timer):3d} "
            f"SP={int(state.stack.pointer):2d} lit={lit}"
        )

    def log_run_end(self, frames: int, instructions: int):
        """Log totals and throughput."""
        elapsed = time.time() - self.start_time
        rate = instructions / elapsed if elapsed > 0 else 0.0
        self.info("=" * 60)
        self.info(f"Ran {frames} frames ({instructions:,} instructions) in {elapsed:.2f}s")
        self.info(f"Throughput: {rate:,.0f} instructions/s")
        self.info("=" * 60)


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: str = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build a tqdm progress bar driven from inside a jitted scan of ``n`` iterations.

    Returns ``(on_start, on_end)``: call ``on_start(i)`` at the top of the
    scan body and ``on_end(result, i)`` before returning ``result``.
    """
    if desc is None:
        desc = f"Emulating ({n:,} frames)"
    if print_rate is None:
        print_rate = max(1, min(n // 20, 50))
    print_rate = max(1, min(print_rate, n))

    for kwarg in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(kwarg, None)

    bars = {}

    def _open():
        bars["bar"] = tqdm(total=n, desc=desc, unit="frame", **kwargs)

    def _advance(count):
        if "bar" in bars:
            bars["bar"].update(int(count))

    def _close():
        if "bar" in bars:
            bars.pop("bar").close()

    def on_start(iter_num):
        jax.lax.cond(
            iter_num == 0,
            lambda _: io_callback(_open, None, ordered=True),
            lambda _: None,
            operand=None,
        )

    def on_end(result, iter_num):
        done = iter_num + 1
        # Frames since the previous report: print_rate, or the tail at the end.
        pending = done - ((done - 1) // print_rate) * print_rate
        jax.lax.cond(
            (done % print_rate == 0) | (done == n),
            lambda count: io_callback(_advance, None, count, ordered=True),
            lambda count: None,
            pending,
        )
        jax.lax.cond(
            done == n,
            lambda _: io_callback(_close, None, ordered=True),
            lambda _: None,
            operand=None,
        )
        return result

    return on_start, on_end
