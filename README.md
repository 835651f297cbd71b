# mlxcore

A pure-Python, headless core for a small 2D graphics library. It does the
bookkeeping of such a library: images, their placements, depth ordering and
vertex batching. It needs no window system and no GPU, and it has no
dependencies outside the standard library.

## What is in it

- `mlxcore.images`
  - `Image` is an RGBA pixel buffer, four bytes per pixel. It has
    `put_pixel`, `pixel` and a nearest-neighbour `resize`.
  - `Instance` is one placement of an image: `x`, `y`, `z` and `enabled`.
  - `DrawCall` is a render queue entry: an image plus the index of one of its
    instances.
  - `sort_render_queue` orders draw calls by ascending depth. Calls at equal
    depth come out in reverse of their input order.
  - `texture_to_image` copies a `Texture` into a new `Image`.
- `mlxcore.renderer`
  - `Batch` turns instances into `Vertex` quads, two triangles each. It
    binds up to 16 texture handles and flushes when a 17th handle is needed
    or when its capacity is reached, which is 12000 vertices by default. An
    optional `on_flush` callback receives the vertices and the bound handles
    of every flush.
  - `projection_matrix(width, height, depth)` returns the column-major
    orthographic projection.
- `mlxcore.context`
  - `Mlx` is the context. It creates images (`new_image`) and places
    instances (`image_to_window`). Each placement gets the next depth value,
    and `set_instance_depth` changes it. `delete_image` removes an image,
    and `loop_hook` adds per-frame callbacks.
  - `render_frame` runs a single frame and `loop` runs frames until
    `close_window` is called. `terminate` releases everything the context
    holds. `Mlx` also works as a context manager and terminates on exit.
  - The global settings from `mlxcore.keys.Setting` are read with
    `get_setting` and changed with `set_setting`.
- `mlxcore.textures`
  - `Texture` holds RGBA pixel data. `pixel(x, y)` returns a `0xRRGGBBAA`
    integer.
- `mlxcore.xpm42`
  - `read_xpm42(stream)` decodes the XPM42 text image format from a text or
    binary stream.
  - `load_xpm42(path)` does the same from a file and returns an `Xpm`.
- `mlxcore.font`
  - `get_texoffset(c)` gives the X offset of a character's glyph in the font
    atlas. Glyphs are 10 × 20 pixels. The result is -1 for characters that
    are not printable ASCII.
- `mlxcore.keys`
  - Input enums: `Key`, `Action`, `ModifierKey`, `MouseKey`, `MouseMode`,
    `Cursor` and `Setting`.
  - The `KeyData` record.
- `mlxcore.utils`
  - `fnv_hash` is 64-bit FNV-1a.
  - `rgba_to_mono` converts a colour to grey.
  - `draw_pixel` writes a colour into a byte buffer.
- `mlxcore.errors`
  - Library failures raise `MlxError`, which carries an `ErrorCode`.
    `strerror` gives the English text for a code.
  - An invalid dimension raises code `INVDIM`. A malformed XPM42 file raises
    `INVXPM`, a wrong file extension `INVEXT`, and a file that cannot be
    opened `INVFILE`.
  - Plain argument mistakes raise `ValueError`, `IndexError` or `TypeError`.
    These include an out-of-bounds pixel and a non-positive window size.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from mlxcore.context import Mlx

flushes = []

with Mlx(320, 240, "demo", on_flush=lambda verts, handles: flushes.append(len(verts))) as mlx:
    image = mlx.new_image(16, 16)
    image.put_pixel(0, 0, 0xFF0000FF)
    index = mlx.image_to_window(image, 10, 20)

    frames = []

    def tick(param):
        frames.append(param)
        if len(frames) == 3:
            mlx.close_window()

    mlx.loop_hook(tick, "frame")
    mlx.loop()

print(flushes)  # one flush of 6 vertices per frame: [6, 6, 6]
```

## XPM42 files

An XPM42 file has these parts, in order:

1. The line `!XPM42`.
2. A header line: `width height colour_count chars_per_pixel mode`. The mode
   is `c` for colour or `m` for monochrome. Width and height may be at most
   32767, and chars-per-pixel at most 10.
3. One line for each colour. Each line holds the pixel key, one space, and
   `#RRGGBBAA`. In monochrome mode the colour is converted to grey.
4. One line for each row of pixels, `width × chars_per_pixel` characters
   long.

```python
from mlxcore.xpm42 import load_xpm42

xpm = load_xpm42("sprite.xpm42")
print(xpm.texture.width, xpm.texture.height, xpm.mode)
```

The path must contain `.xpm42`.

## What it does not do

- It opens no window and shows nothing on screen. Drawing ends at the
  vertices and texture handles that `Batch` passes to `on_flush`. Turning
  them into pixels is up to the caller.
- It reads no keyboard, mouse or cursor input. The enums in `mlxcore.keys`
  only name the codes.
- It does not load PNG files.
- It ships no font atlas pixels, so it cannot render text into an image.
  `get_texoffset` only locates glyphs.