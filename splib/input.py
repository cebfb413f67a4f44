"""Keyboard and mouse state tracking with edge detection and double clicks."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

MAX_INPUT_KEY = 256
MAX_INPUT_BTN = 8

# Virtual key codes that carry the mouse buttons inside the keyboard state.
VK_LBUTTON = 0x01
VK_RBUTTON = 0x02
VK_MBUTTON = 0x04

_BUTTON_KEYS = (VK_LBUTTON, VK_RBUTTON, VK_MBUTTON)


class InputEvent(IntEnum):
    """Per-frame state of a key or mouse button."""

    NONE = 0
    DOWN = 1
    UP = 2
    PRESS = 3
    DBLCLICK = 4


def _transition(old: bool, cur: bool) -> InputEvent:
    if cur and not old:
        return InputEvent.DOWN
    if old and not cur:
        return InputEvent.UP
    if old and cur:
        return InputEvent.PRESS
    return InputEvent.NONE


def _check_index(index: int, limit: int, what: str) -> int:
    if not 0 <= index < limit:
        raise IndexError(f"{what} {index} out of range 0..{limit - 1}")
    return index


class InputState:
    """Tracks keys, mouse buttons, cursor position and the wheel frame by frame."""

    def __init__(self, double_click_ms: int = 500) -> None:
        self.double_click_ms = double_click_ms
        self._key_cur = [False] * MAX_INPUT_KEY
        self._key_map = [InputEvent.NONE] * MAX_INPUT_KEY
        self._btn_cur = [False] * MAX_INPUT_BTN
        self._btn_map = [InputEvent.NONE] * MAX_INPUT_BTN
        self._pos = [0.0, 0.0, 0.0]
        self._old = (0.0, 0.0, 0.0)
        self._eps = (0.0, 0.0, 0.0)
        self._click_start = [0] * MAX_INPUT_BTN
        self._click_count = [0] * MAX_INPUT_BTN

    def update(
        self,
        pressed_keys: Iterable[int],
        mouse_pos: tuple[float, float],
        now_ms: int,
    ) -> None:
        """Advance one frame from the set of held key codes and the cursor position."""
        pressed = {k for k in pressed_keys if 0 <= k < MAX_INPUT_KEY}

        key_old = self._key_cur
        self._key_cur = [code in pressed for code in range(MAX_INPUT_KEY)]
        self._key_map = [_transition(o, c) for o, c in zip(key_old, self._key_cur)]

        btn_old = self._btn_cur
        held_buttons = [self._key_cur[vk] for vk in _BUTTON_KEYS]
        self._btn_cur = held_buttons + [False] * (MAX_INPUT_BTN - len(held_buttons))
        self._btn_map = [_transition(o, c) for o, c in zip(btn_old, self._btn_cur)]

        self._pos[0] = float(mouse_pos[0])
        self._pos[1] = float(mouse_pos[1])
        current = tuple(self._pos)
        self._eps = tuple(c - o for c, o in zip(current, self._old))
        self._old = current

        self._detect_double_clicks(now_ms)

    def _detect_double_clicks(self, now: int) -> None:
        for i, state in enumerate(self._btn_map):
            if state == InputEvent.DOWN:
                if (
                    self._click_count[i] == 1
                    and now - self._click_start[i] >= self.double_click_ms
                ):
                    self._click_count[i] = 0
                self._click_count[i] += 1
                if self._click_count[i] == 1:
                    self._click_start[i] = now
            if state == InputEvent.UP:
                if self._click_count[i] == 1:
                    if now - self._click_start[i] >= self.double_click_ms:
                        self._click_count[i] = 0
                elif self._click_count[i] == 2:
                    if now - self._click_start[i] <= self.double_click_ms:
                        self._btn_map[i] = InputEvent.DBLCLICK
                    self._click_count[i] = 0

    def wheel(self, delta: int) -> None:
        """Apply a raw wheel delta, where 120 is one notch."""
        self._pos[2] += delta / 120.0

    def key_down(self, key: int) -> bool:
        return self.key_state(key) == InputEvent.DOWN

    def key_up(self, key: int) -> bool:
        return self.key_state(key) == InputEvent.UP

    def key_press(self, key: int) -> bool:
        return self.key_state(key) == InputEvent.PRESS

    def key_state(self, key: int) -> InputEvent:
        return self._key_map[_check_index(key, MAX_INPUT_KEY, "key")]

    def button_down(self, button: int) -> bool:
        return self.button_state(button) == InputEvent.DOWN

    def button_up(self, button: int) -> bool:
        return self.button_state(button) == InputEvent.UP

    def button_press(self, button: int) -> bool:
        return self.button_state(button) == InputEvent.PRESS

    def button_state(self, button: int) -> InputEvent:
        return self._btn_map[_check_index(button, MAX_INPUT_BTN, "button")]

    def mouse_pos(self) -> tuple[float, float, float]:
        """Cursor position; the third component is the accumulated wheel."""
        return tuple(self._pos)

    def mouse_delta(self) -> tuple[float, float, float]:
        """Change of the cursor position and wheel since the previous frame."""
        return self._eps

    def key_map(self) -> tuple[InputEvent, ...]:
        return tuple(self._key_map)

    def button_map(self) -> tuple[InputEvent, ...]:
        return tuple(self._btn_map)