import io
import struct

import pytest

from doomkit.bmp import BmpError, BmpInfo
from doomkit.bmp_image import (
    ColorMap,
    Texture,
    color_map_shift,
    decode_array,
    decode_rle,
    load_image,
    load_texture,
    read_color_map,
)


def _bmp(width, height, bit_count, pixels, *, compression=0, palette=(),
         clr_used=0, size_image=0):
    palette_bytes = b"".join(struct.pack("<I", c) for c in palette)
    info = struct.pack("<iiHHiIIIII", width, height, 1, bit_count, compression,
                       size_image, 0, 0, clr_used, 0)
    offset = 14 + 4 + len(info) + len(palette_bytes)
    header = struct.pack("<HIHHI", 0x4D42, offset + len(pixels), 0, 0, offset)
    return header + struct.pack("<i", 40) + info + palette_bytes + pixels


def _write(tmp_path, data):
    path = tmp_path / "image.bmp"
    path.write_bytes(data)
    return path


def test_color_map_shift_values():
    assert color_map_shift(40, BmpInfo(compression=3)) == 12
    assert color_map_shift(40, BmpInfo(compression=6)) == 16
    assert color_map_shift(40, BmpInfo(compression=0)) == 0
    assert color_map_shift(108, BmpInfo(compression=3)) == 0


def test_read_color_map_palette():
    palette = [0x00112233, 0x00445566]
    stream = io.BytesIO(struct.pack("<2I", *palette))
    result = read_color_map(stream, BmpInfo(bit_count=1), 40)
    assert result == ColorMap(shift=0, size=8, colors=palette)


def test_read_color_map_skips_bitfield_masks():
    stream = io.BytesIO(bytes(20))
    result = read_color_map(stream, BmpInfo(bit_count=32, compression=3), 40)
    assert result.colors == []
    assert stream.tell() == result.shift


def test_read_color_map_truncated():
    with pytest.raises(BmpError):
        read_color_map(io.BytesIO(b"\x00\x00"), BmpInfo(bit_count=1), 40)


def test_decode_array_32_bit_masks_alpha():
    values = [0xFF112233, 0x00445566]
    info = BmpInfo(width=2, height=1, bit_count=32)
    rows = decode_array(struct.pack("<2I", *values), info, ColorMap())
    assert rows == [[v & 0xFFFFFF for v in values]]


def test_decode_array_uses_palette_when_colours_declared():
    colors = ColorMap(colors=[10, 20])
    info = BmpInfo(width=1, height=1, bit_count=32, clr_used=2)
    assert decode_array(struct.pack("<I", 1), info, colors) == [[20]]


def test_decode_array_8_bit_places_samples_one_to_the_right():
    colors = ColorMap(colors=[10, 20, 30])
    info = BmpInfo(width=3, height=1, bit_count=8)
    assert decode_array(bytes([0, 1, 2]), info, colors) == [[0, 10, 20]]


def test_decode_array_4_bit_high_nibble_first():
    colors = ColorMap(colors=[10, 20, 30])
    info = BmpInfo(width=2, height=1, bit_count=4)
    assert decode_array(bytes([0x21]), info, colors) == [[30, 20]]


def test_decode_array_truncated():
    info = BmpInfo(width=2, height=2, bit_count=32)
    with pytest.raises(BmpError):
        decode_array(bytes(4), info, ColorMap())


def test_decode_rle_runs_and_end_of_line():
    colors = ColorMap(colors=list(range(100, 110)))
    data = bytes([3, 5, 0, 0, 2, 7, 0, 1])
    info = BmpInfo(width=3, height=2, compression=1, size_image=len(data))
    assert decode_rle(data, info, colors) == [[105, 105, 105], [107, 107, 0]]


def test_decode_rle_delta():
    colors = ColorMap(colors=list(range(100, 110)))
    data = bytes([0, 2, 1, 1, 1, 4, 0, 1])
    info = BmpInfo(width=3, height=2, compression=1, size_image=len(data))
    assert decode_rle(data, info, colors) == [[0, 0, 0], [0, 104, 0]]


def test_decode_rle_absolute_run_repeats_first_index():
    colors = ColorMap(colors=list(range(100, 110)))
    data = bytes([0, 3, 2, 0, 1])
    info = BmpInfo(width=3, height=1, compression=1, size_image=len(data))
    assert decode_rle(data, info, colors) == [[102, 102, 102]]


def test_decode_rle_outside_image():
    colors = ColorMap(colors=[1])
    data = bytes([4, 0, 0, 1])
    info = BmpInfo(width=3, height=1, compression=1, size_image=len(data))
    with pytest.raises(BmpError):
        decode_rle(data, info, colors)


def test_load_image_32_bit(tmp_path):
    values = [0x00112233, 0x00445566, 0x00778899, 0x00AABBCC]
    path = _write(tmp_path, _bmp(2, 2, 32, struct.pack("<4I", *values)))
    assert load_image(path) == [values[:2], values[2:]]


def test_load_texture_flips_rows(tmp_path):
    values = [0x00112233, 0x00445566, 0x00778899, 0x00AABBCC]
    path = _write(tmp_path, _bmp(2, 2, 32, struct.pack("<4I", *values)))
    texture = load_texture(path)
    assert texture == Texture(width=2, height=2, pixels=values[2:] + values[:2])


def test_load_rle_file(tmp_path):
    palette = [i * 0x010101 for i in range(256)]
    data = bytes([2, 5, 0, 0, 2, 7, 0, 1])
    path = _write(tmp_path, _bmp(2, 2, 8, data, compression=1, palette=palette,
                                 size_image=len(data)))
    assert load_image(path) == [[palette[5]] * 2, [palette[7]] * 2]


def test_unsupported_compression(tmp_path):
    path = _write(tmp_path, _bmp(1, 1, 32, bytes(4), compression=4))
    with pytest.raises(BmpError):
        load_image(path)


def test_missing_file(tmp_path):
    with pytest.raises(BmpError):
        load_image(tmp_path / "absent.bmp")


def test_bad_signature(tmp_path):
    data = bytearray(_bmp(1, 1, 32, bytes(4)))
    data[0:2] = b"XX"
    path = _write(tmp_path, bytes(data))
    with pytest.raises(BmpError):
        load_texture(path)