# doomkit

doomkit has two parts:

- **A printf-style formatter.** It handles the `d i u o x X c s p f n % Z`
  conversions and the `- + 0 space #` flags. It reads width and precision
  fields, and `*` works in both. The `h hh l ll L j z` size modifiers are
  also read.
- **A BMP reader.** It reads bitmap files into lists of `0xRRGGBB` pixel
  values.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Formatting text

```python
from doomkit.printf import sprintf, printf

sprintf("%5d|%-5s|%#x", 42, "ab", 255)   # '   42|ab   |0xff'
sprintf("%.2f", 3.14159)                 # '3.14'
count = printf("%c%c\n", ord("h"), ord("i"))
```

`sprintf` returns the formatted string. `printf` writes the text to standard
output and returns the count of characters produced.

### How it differs from C

Padding, sign and prefix follow this formatter's own rules. They do not
match C's in every corner case. Some examples:

- A zero value with a precision of `0` comes out as `0` under `%#o`.
- `%jd` and `%zd` print their value with no padding. They add nothing to
  the returned count.
- `%n` stores the count so far into `target[0]` of the argument it is given.
  Any mutable sequence works, for example a one-element list.
- `%s` takes `None` and prints `(null)`.

### Lower-level functions

For a single directive, use the lower-level modules:

| Function | What it does |
| --- | --- |
| `doomkit.spec.parse_spec` | Parses one conversion into a `FormatSpec`. |
| `doomkit.printf.format_directive` | Formats a parsed spec. |
| `doomkit.intfmt.format_int`, `doomkit.unsigned.format_unsigned`, `doomkit.wideint.format_long_unsigned` | Integer formatters. |
| `doomkit.floatfmt.format_float`, `doomkit.longfloat.format_long_float` | Float formatters. |
| `doomkit.charfmt.format_char`, `format_percent`, `format_z` | Formatters for `%c`, `%%` and `%Z`. |
| `doomkit.numconv.to_base`, `doomkit.numconv.signed_decimal` | Integer-to-text helpers. |

## Loading bitmaps

```python
from doomkit.bmp_image import load_texture

texture = load_texture("wall.bmp")
texture.width, texture.height   # dimensions
texture.pixels[0]               # top-left pixel as 0xRRGGBB
```

`load_texture` returns a `Texture` whose `pixels` is one flat list with the
top row first. `load_image` returns a list of rows in file order, which is
bottom row first.

### What the loader reads

The loader accepts:

- information blocks of 40, 108 or 124 bytes;
- palette images with 8 or fewer bits per pixel;
- 24- and 32-bit direct-colour images, uncompressed or with bit fields
  (compression 0, 3 or 6);
- RLE8 compression (compression 1).

Palette images with fewer than 8 bits per pixel have a limitation. Only the
first two samples of each byte are placed, and their positions are swapped.

### Errors

`doomkit.bmp.BmpError`, a subclass of `ValueError`, is raised for:

- a missing file;
- a bad signature;
- a core (12-byte) or other unknown header size;
- 16-bit images;
- RLE4, JPEG, PNG or unknown compression;
- truncated data;
- colour indices outside the colour map.

### Parsing pieces of a file

The steps of the loader are available on their own:

- `doomkit.bmp`: `read_file_header`, `read_info_size`, `read_info_block` and
  `parse_info`.
- `doomkit.bmp_image`: `read_color_map`, `decode_array` and `decode_rle`.

## What it does not do

The package is a library only:

- There is no command-line tool.
- It does not open windows or display images.
- It does not write BMP files.