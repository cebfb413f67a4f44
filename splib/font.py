"""Font creation and text drawing through an id-keyed registry."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

RECT_RIGHT_PAD = 20


class FontError(Exception):
    """Raised when a font cannot be created or is not registered."""


@dataclass
class Font:
    """A created font and the id it is registered under."""

    id: int
    name: str
    height: int
    italic: bool
    face: pygame.font.Font


class FontRegistry:
    """Creates fonts, hands out increasing ids and draws text with them."""

    def __init__(self) -> None:
        pygame.font.init()
        self._fonts: list[Font] = []
        self._last_id = 0

    def create(self, name: str, height: int, italic: int = 0) -> int:
        """Create a font by face name and pixel height; return its id."""
        try:
            face = pygame.font.SysFont(name, height, bold=False, italic=bool(italic))
        except (pygame.error, OSError, ValueError) as exc:
            raise FontError(f"cannot create font {name!r}") from exc
        self._last_id += 1
        font = Font(self._last_id, name, height, bool(italic), face)
        self._fonts.append(font)
        return font.id

    def find(self, font_id: int) -> Font | None:
        return next((f for f in self._fonts if f.id == font_id), None)

    def draw_text(
        self,
        surface: pygame.Surface,
        font_id: int,
        rect: tuple[int, int, int, int],
        color: int,
        text: str,
    ) -> int:
        """Draw text top-left in rect, clipped to it; return the text height."""
        font = self.find(font_id)
        if font is None:
            raise FontError(f"no font with id {font_id}")
        left, top, right, bottom = rect
        clip = pygame.Rect(left, top, right + RECT_RIGHT_PAD - left, bottom - top)
        rgb = ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
        alpha = (color >> 24) & 0xFF

        previous_clip = surface.get_clip()
        surface.set_clip(clip.clip(previous_clip))
        try:
            line_height = font.face.get_linesize()
            lines = text.split("\n")
            for row, line in enumerate(lines):
                if not line:
                    continue
                image = font.face.render(line, True, rgb)
                if alpha < 0xFF:
                    image.set_alpha(alpha)
                surface.blit(image, (left, top + row * line_height))
        finally:
            surface.set_clip(previous_clip)
        return line_height * len(lines)

    def release(self, font_id: int) -> int:
        """Drop a font and return how many remain."""
        font = self.find(font_id)
        if font is None:
            raise FontError(f"no font with id {font_id}")
        self._fonts.remove(font)
        return len(self._fonts)

    def clear(self) -> None:
        self._fonts.clear()

    def __len__(self) -> int:
        return len(self._fonts)