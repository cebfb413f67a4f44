import pytest

from splib.input import (
    MAX_INPUT_BTN,
    MAX_INPUT_KEY,
    VK_LBUTTON,
    VK_RBUTTON,
    InputEvent,
    InputState,
)


def test_key_transitions():
    state = InputState(500)
    state.update({65}, (0, 0), 0)
    assert state.key_down(65)
    assert state.key_state(65) == InputEvent.DOWN
    state.update({65}, (0, 0), 10)
    assert state.key_press(65)
    state.update(set(), (0, 0), 20)
    assert state.key_up(65)
    state.update(set(), (0, 0), 30)
    assert state.key_state(65) == InputEvent.NONE


def test_other_keys_stay_none():
    state = InputState(500)
    state.update({65}, (0, 0), 0)
    assert state.key_state(66) == InputEvent.NONE
    assert sum(1 for s in state.key_map() if s != InputEvent.NONE) == 1


def test_maps_have_fixed_lengths():
    state = InputState(500)
    state.update({1, 300, -5}, (0, 0), 0)
    assert len(state.key_map()) == MAX_INPUT_KEY
    assert len(state.button_map()) == MAX_INPUT_BTN


def test_buttons_follow_virtual_keys():
    state = InputState(500)
    state.update({VK_RBUTTON}, (0, 0), 0)
    assert state.button_down(1)
    assert not state.button_down(0)
    state.update({VK_RBUTTON}, (0, 0), 10)
    assert state.button_press(1)


def test_double_click():
    state = InputState(500)
    state.update({VK_LBUTTON}, (0, 0), 0)
    state.update(set(), (0, 0), 50)
    assert state.button_up(0)
    state.update({VK_LBUTTON}, (0, 0), 100)
    assert state.button_down(0)
    state.update(set(), (0, 0), 150)
    assert state.button_state(0) == InputEvent.DBLCLICK


def test_slow_second_click_is_not_double():
    state = InputState(500)
    state.update({VK_LBUTTON}, (0, 0), 0)
    state.update(set(), (0, 0), 50)
    state.update({VK_LBUTTON}, (0, 0), 600)
    state.update(set(), (0, 0), 650)
    assert state.button_state(0) == InputEvent.UP


def test_mouse_position_and_delta():
    state = InputState(500)
    state.update(set(), (10, 20), 0)
    assert state.mouse_pos() == (10.0, 20.0, 0.0)
    assert state.mouse_delta() == (10.0, 20.0, 0.0)
    state.update(set(), (15, 18), 10)
    assert state.mouse_delta() == (5.0, -2.0, 0.0)


def test_wheel_accumulates_into_z():
    state = InputState(500)
    state.update(set(), (0, 0), 0)
    state.wheel(120)
    assert state.mouse_pos()[2] == 1.0
    state.update(set(), (0, 0), 10)
    assert state.mouse_delta()[2] == 1.0
    state.wheel(-240)
    assert state.mouse_pos()[2] == -1.0


@pytest.mark.parametrize("key", [-1, MAX_INPUT_KEY])
def test_key_out_of_range(key):
    with pytest.raises(IndexError):
        InputState(500).key_state(key)


@pytest.mark.parametrize("button", [-1, MAX_INPUT_BTN])
def test_button_out_of_range(button):
    with pytest.raises(IndexError):
        InputState(500).button_state(button)