import time

import jax
import jax.numpy as jnp
from PIL import Image

from chip8jax import reset_and_load, run_frames, batch_render

# Scatters random glyphs: V0/V1 random position, V2 random digit, draw, repeat.
RANDOM_GLYPHS = bytes([
    0xC0, 0x3F,  # 200: V0 = rand & 63
    0xC1, 0x1F,  # 202: V1 = rand & 31
    0xC2, 0x0F,  # 204: V2 = rand & 15
    0xF2, 0x29,  # 206: I = glyph(V2)
    0xD0, 0x15,  # 208: draw
    0x12, 0x00,  # 20A: jump 200
])


if __name__ == "__main__":
    num_machines = 16
    num_frames = 120
    instructions_per_frame = 8

    rngs = jax.random.split(jax.random.PRNGKey(0), num_machines)
    states = jax.vmap(lambda rng: reset_and_load(RANDOM_GLYPHS, rng))(rngs)

    rollout = jax.jit(jax.vmap(lambda s: run_frames(s, num_frames, instructions_per_frame)))

    start_compile = time.perf_counter()
    compiled = rollout.lower(states).compile()
    print(f"Compilation: {time.perf_counter() - start_compile:.2f}s")

    start = time.perf_counter()
    final_states, displays = jax.block_until_ready(compiled(states))
    elapsed = time.perf_counter() - start
    total = num_machines * num_frames * instructions_per_frame
    print(f"{total:,} instructions in {elapsed:.3f}s ({total / elapsed:,.0f} instructions/s)")
    print(f"Lit pixels per machine: {jnp.sum(final_states.display, axis=(1, 2))}")

    Image.fromarray(batch_render(final_states.display, scale=4)).save("vmap_demo.png")
    print("Saved vmap_demo.png")
