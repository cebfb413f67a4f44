"""Building blocks for small 2D games on pygame: input state, textures, fonts, sprite models and wave sound buffers."""

__version__ = "0.1.0"

__all__ = [
    "font",
    "input",
    "model",
    "soundbuffer",
    "texture",
    "wavefile",
    "wavewriter",
]