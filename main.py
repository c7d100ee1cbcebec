"""
Headless CHIP-8 runner: plays a ROM for a number of frames and saves the last one.

    python main.py rom=roms/IBM.ch8 frames=120 emulator.trace=true log_level=DEBUG
"""

import hydra
import jax
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from chip8jax import Chip8Session, EmulatorConfig, RomLoadError, run_frames, save_frame, rgba_from_hex
from chip8jax.logging import RunLogger


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    logger = RunLogger(name="chip8jax", log_level=cfg.log_level)
    config = EmulatorConfig.from_dict(OmegaConf.to_container(cfg.emulator, resolve=True))
    rom_path = to_absolute_path(cfg.rom)

    logger.log_run_start(rom_path, config.to_dict())
    try:
        session = Chip8Session(rom_path, config, jax.random.PRNGKey(cfg.seed), logger)
    except RomLoadError as e:
        logger.error(e.message)
        raise SystemExit(1) from e

    if cfg.progress and not config.trace:
        session.state, _ = run_frames(session.state, cfg.frames, config.instructions_per_frame, True)
        session.frames = cfg.frames
    else:
        beeping = False
        for frame in range(cfg.frames):
            session.frame()
            if session.sound_active != beeping:
                beeping = session.sound_active
                logger.debug(f"Sound {'on' if beeping else 'off'} at frame {frame + 1}")
            logger.log_frame(frame, cfg.frames, session.state, cfg.log_interval)

    logger.log_run_end(session.frames, session.frames * config.instructions_per_frame)

    if cfg.output:
        output = to_absolute_path(cfg.output)
        save_frame(
            session.state.display,
            output,
            scale=config.scale,
            on_color=rgba_from_hex(config.fg_color),
            off_color=rgba_from_hex(config.bg_color),
            pixel_outlines=config.pixel_outlines,
        )
        logger.info(f"Final frame saved: {output}")


if __name__ == "__main__":
    main()
