"""Texture loading and an id-keyed registry of loaded images."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from os import PathLike

import pygame

DEFAULT_COLOR_KEY = 0x00FFFFFF


class TextureError(Exception):
    """Raised when a texture cannot be loaded or is not registered."""


@dataclass
class Texture:
    """A loaded image and the id it is registered under."""

    id: int
    name: str
    surface: pygame.Surface

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def image_rect(self) -> tuple[int, int, int, int]:
        """The full image as (left, top, right, bottom)."""
        return (0, 0, self.width, self.height)


def _apply_color_key(surface: pygame.Surface, color_key: int) -> pygame.Surface:
    """Replace pixels equal to the ARGB key with transparent black; 0 disables."""
    result = pygame.Surface(surface.get_size(), pygame.SRCALPHA, 32)
    result.blit(surface, (0, 0))
    if color_key == 0:
        return result
    key = (
        (color_key >> 16) & 0xFF,
        (color_key >> 8) & 0xFF,
        color_key & 0xFF,
        (color_key >> 24) & 0xFF,
    )
    width, height = result.get_size()
    for x, y in product(range(width), range(height)):
        if tuple(result.get_at((x, y))) == key:
            result.set_at((x, y), (0, 0, 0, 0))
    return result


class TextureRegistry:
    """Loads textures once per file name and hands out increasing ids."""

    def __init__(self) -> None:
        self._textures: list[Texture] = []
        self._last_id = 0

    def load(self, path: str | PathLike, color_key: int = DEFAULT_COLOR_KEY) -> int:
        """Load an image file and return its id; a known file returns its old id."""
        name = str(path)
        existing = self.find_by_name(name)
        if existing is not None:
            return existing.id
        try:
            image = pygame.image.load(name)
        except (pygame.error, OSError, FileNotFoundError) as exc:
            raise TextureError(f"Create Texture Failed: {name}") from exc
        self._last_id += 1
        texture = Texture(self._last_id, name, _apply_color_key(image, color_key))
        self._textures.append(texture)
        return texture.id

    def release(self, texture_id: int) -> int:
        """Drop a texture and return how many remain."""
        texture = self._require(texture_id)
        self._textures.remove(texture)
        return len(self._textures)

    def find(self, texture_id: int) -> Texture | None:
        return next((t for t in self._textures if t.id == texture_id), None)

    def find_by_name(self, name: str | PathLike) -> Texture | None:
        wanted = str(name).casefold()
        return next((t for t in self._textures if t.name.casefold() == wanted), None)

    def width(self, texture_id: int) -> int:
        return self._require(texture_id).width

    def height(self, texture_id: int) -> int:
        return self._require(texture_id).height

    def clear(self) -> None:
        self._textures.clear()

    def __len__(self) -> int:
        return len(self._textures)

    def _require(self, texture_id: int) -> Texture:
        texture = self.find(texture_id)
        if texture is None:
            raise TextureError(f"no texture with id {texture_id}")
        return texture