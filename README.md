# splib

Building blocks for small 2D games on pygame: keyboard and mouse state with
edge detection and double-click recognition, textures and fonts addressed by
integer id, animated sprite models described in plain text files, and
RIFF/WAVE reading and writing with in-memory sound buffers.

## Install

    pip install .

For the tests:

    pip install .[test]
    pytest

## Modules

### `splib.input`

`InputState(double_click_ms=500)` tracks 256 key codes and 8 mouse buttons.
Call `update(pressed_keys, mouse_pos, now_ms)` once per frame with the key
codes held down, the cursor position and a millisecond clock. Codes 0x01,
0x02 and 0x04 are read as the left, right and middle mouse buttons.

Each key and button then has an `InputEvent`: `NONE`, `DOWN` (pressed this
frame), `UP` (released this frame), `PRESS` (held) or, for buttons,
`DBLCLICK` when a second release follows the first press within
`double_click_ms`. Query with `key_down`, `key_up`, `key_press`,
`key_state`, `button_down`, `button_up`, `button_press`, `button_state`,
or take the whole `key_map()` / `button_map()`. An index out of range
raises `IndexError`.

`wheel(delta)` adds `delta / 120` to the third component of `mouse_pos()`;
`mouse_delta()` is the change since the previous frame.

```python
from splib.input import InputEvent, InputState

state = InputState(double_click_ms=500)
state.update({0x25}, (10, 20), now_ms=0)
assert state.key_state(0x25) is InputEvent.DOWN
state.update({0x25}, (12, 20), now_ms=16)
assert state.key_press(0x25)
assert state.mouse_delta() == (2.0, 0.0, 0.0)
```

### `splib.texture`

`TextureRegistry.load(path, color_key=0x00FFFFFF)` loads an image with
pygame and returns an id counting up from 1. Pixels equal to the ARGB colour
key become transparent; a key of 0 keeps every pixel. Loading a name that is
already registered (compared case-insensitively) returns the existing id.
`find`, `find_by_name`, `width`, `height`, `release` (returns how many
remain), `clear` and `len()` work on the registry; an unknown id or an
unreadable file raises `TextureError`. Each `Texture` has `id`, `name`,
`surface`, `width`, `height` and `image_rect()`.

### `splib.font`

`FontRegistry.create(name, height, italic=0)` makes a pygame system font and
returns its id. `draw_text(surface, font_id, rect, color, text)` draws
(possibly multi-line) text at the top-left of `rect = (left, top, right,
bottom)`, clipped to that rectangle widened by 20 pixels on the right, in an
ARGB colour, and returns the height of the drawn lines. `find`, `release`,
`clear` and `len()` complete it; an unknown id raises `FontError`.

### `splib.model`

A model file looks like this:

    texture hero.png 00ff00ff
    total 3
    delta 100
    0   0 0 32 32
    100 32 0 64 32
    200 64 0 96 32

The first line names the texture file and an optional hexadecimal colour
key, the second the number of frames, the third how long each frame lasts;
each following line is `time left top right bottom`. Lines shorter than five
characters are skipped and reading stops after `total` frames.

`ModelDefinition.from_text(text)` parses such a file. `ModelRegistry(textures)`
loads model files by path through a `TextureRegistry` and hands out ids;
`find`, `find_by_name`, `clear` and `len()` are also there. A `Model` offers
`frame_index(now, start)` (the frame showing at that time, or `None`),
`frame_rect(index)`, `reset_rect()` and `render(surface)`, which draws its
`rect` of the texture at its `position`, tinted by `color`. Bad files raise
`ModelError`.

### `splib.wavefile` and `splib.wavewriter`

`WaveFormat` holds a format chunk: `WaveFormat.pcm(channels, sample_rate,
bits_per_sample)`, `from_bytes`, `to_bytes` and `silence_byte()` (128 for
8-bit, otherwise 0). `WaveReader(path)` reads sample data sequentially with
`read(size)` and `reset()`; `WaveReader.from_memory(data, fmt)` does the same
over raw bytes. `WaveWriter(path, fmt)` writes `fmt `, `fact` and `data`
chunks and fixes the sizes on `close()`. Both are context managers;
problems raise `WaveError`.

```python
from splib.wavefile import WaveFormat, WaveReader
from splib.wavewriter import WaveWriter

fmt = WaveFormat.pcm(2, 22050, 16)
with WaveWriter("out.wav", fmt) as writer:
    writer.write(b"\x00\x01" * 100)
with WaveReader("out.wav") as reader:
    assert reader.size == 200
```

### `splib.soundbuffer`

`SoundBuffer(size, fmt)` is a block of sample memory with a play cursor and
`play`, `stop`, `set_position`, `advance`, `restore` and `duplicate`.
`BufferedSound(buffers, reader, flags)` fills its first buffer from a
`WaveReader` (padding with silence, or repeating the data with
`fill_buffer(buffer, repeat=True)`), plays on the first idle buffer with
`play(...)`, and has `stop`, `reset`, `is_playing`, `free_buffer` and
`buffer(index)`. `Caps` lists the creation flags; volume, frequency and pan
are only applied when `CTRLVOLUME`, `CTRLFREQUENCY` and `CTRLPAN` are set.

## What this package does not do

There is no window, frame loop or demo program here: you create the pygame
display, run the event loop and feed `InputState` yourself. Sound buffers
hold and move through sample data but send nothing to an audio device, and
there is no registry that loads and plays sounds by id.