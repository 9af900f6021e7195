"""A block-world sandbox: chunked Perlin-noise terrain, meshing and a first-person camera."""

__version__ = "0.1.0"