"""Sprite models: an animation description file bound to a texture."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike

import pygame

from splib.texture import Texture, TextureError, TextureRegistry

_DWORD_MASK = 0xFFFFFFFF
WHITE = 0xFFFFFFFF

Rect = tuple[int, int, int, int]


class ModelError(Exception):
    """Raised when a model file cannot be read or its texture cannot be loaded."""


@dataclass(frozen=True)
class AnimationFrame:
    """One animation step: its start time and the image rectangle it shows."""

    time: int
    rect: Rect


def _header_int(line: str, what: str) -> int:
    fields = line.split()
    if len(fields) < 2:
        raise ModelError(f"model header has no {what}")
    try:
        return int(fields[1])
    except ValueError as exc:
        raise ModelError(f"model header has a bad {what}: {fields[1]!r}") from exc


@dataclass(frozen=True)
class ModelDefinition:
    """The parsed contents of a model description file."""

    texture_file: str
    color_key: int
    total: int
    delta: int
    frames: tuple[AnimationFrame, ...]

    @classmethod
    def from_text(cls, text: str) -> ModelDefinition:
        """Parse the texture line, frame count, frame interval and frame lines."""
        lines = text.splitlines()
        if len(lines) < 3:
            raise ModelError("model header is incomplete")

        head = lines[0].split()
        if len(head) < 2:
            raise ModelError("model header has no texture file")
        texture_file = head[1]
        color_key = 0
        if len(head) > 2:
            try:
                color_key = int(head[2], 16)
            except ValueError:
                color_key = 0

        total = _header_int(lines[1], "frame total")
        delta = _header_int(lines[2], "frame interval")

        frames: list[AnimationFrame] = []
        for line in lines[3:]:
            if len(line.strip()) < 5:
                continue
            fields = line.split()
            if len(fields) < 5:
                raise ModelError(f"bad frame line: {line!r}")
            try:
                time, left, top, right, bottom = (int(v) for v in fields[:5])
            except ValueError as exc:
                raise ModelError(f"bad frame line: {line!r}") from exc
            frames.append(AnimationFrame(time, (left, top, right, bottom)))
            if len(frames) >= total:
                break

        return cls(texture_file, color_key, total, delta, tuple(frames))


@dataclass
class Model:
    """A loaded model with its rendering rectangle, position and colour."""

    id: int
    name: str
    texture: Texture
    definition: ModelDefinition
    rect: Rect | None = None
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    color: int = WHITE
    _unused: None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.rect is None:
            self.reset_rect()

    def frame_index(self, now: int, start: int) -> int | None:
        """Index of the frame shown at `now` for an animation begun at `start`."""
        elapsed = (now - start) & _DWORD_MASK
        step = self.definition.delta
        return next(
            (
                i
                for i, frame in enumerate(self.definition.frames)
                if frame.time <= elapsed < frame.time + step
            ),
            None,
        )

    def frame_rect(self, index: int) -> Rect:
        """The image rectangle of one frame."""
        frames = self.definition.frames
        if not 0 <= index < len(frames):
            raise IndexError(f"frame {index} out of range 0..{len(frames) - 1}")
        return frames[index].rect

    def reset_rect(self) -> None:
        """Make the rendering rectangle cover the whole texture."""
        self.rect = self.texture.image_rect()

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current rectangle of the texture at the model's position."""
        left, top, right, bottom = self.rect
        source = self.texture.surface
        area = pygame.Rect(left, top, right - left, bottom - top).clip(source.get_rect())
        image = source.subsurface(area).copy()
        if self.color != WHITE:
            rgba = (
                (self.color >> 16) & 0xFF,
                (self.color >> 8) & 0xFF,
                self.color & 0xFF,
                (self.color >> 24) & 0xFF,
            )
            image.fill(rgba, special_flags=pygame.BLEND_RGBA_MULT)
        surface.blit(image, (int(self.position[0]), int(self.position[1])))


class ModelRegistry:
    """Loads model files once per name and hands out increasing ids."""

    def __init__(self, textures: TextureRegistry) -> None:
        self.textures = textures
        self._models: list[Model] = []
        self._last_id = 0

    def load(self, path: str | PathLike) -> int:
        """Load a model file and return its id; a known name returns its old id."""
        name = str(path)
        existing = self.find_by_name(name)
        if existing is not None:
            return existing.id
        try:
            with open(name, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise ModelError(f"cannot open model file: {name}") from exc
        definition = ModelDefinition.from_text(text)
        try:
            texture_id = self.textures.load(definition.texture_file, definition.color_key)
        except TextureError as exc:
            raise ModelError(f"cannot load model texture: {definition.texture_file}") from exc
        texture = self.textures.find(texture_id)
        self._last_id += 1
        model = Model(self._last_id, name, texture, definition)
        self._models.append(model)
        return model.id

    def find(self, model_id: int) -> Model | None:
        return next((m for m in self._models if m.id == model_id), None)

    def find_by_name(self, name: str | PathLike) -> Model | None:
        wanted = str(name).casefold()
        return next((m for m in self._models if m.name.casefold() == wanted), None)

    def clear(self) -> None:
        self._models.clear()

    def __len__(self) -> int:
        return len(self._models)