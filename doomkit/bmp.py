"""Reading of the BMP file header and the bitmap information block."""

import struct
from dataclasses import dataclass
from typing import BinaryIO

FILE_HEADER_SIZE = 14
CORE_INFO_SIZE = 12
INFO_V3_SIZE = 40
INFO_V4_SIZE = 108
INFO_V5_SIZE = 124

_VALID_TYPES = (0x4D42, 0x424D)

_HEADER = struct.Struct("<HIHHI")
_V3 = struct.Struct("<iiHHiIIIII")
_V4 = struct.Struct("<IIIII36sIII")
_V5 = struct.Struct("<IIII")


class BmpError(ValueError):
    """Raised when a BMP file cannot be read or is of an unsupported kind."""


@dataclass
class BmpHeader:
    """The 14-byte file header."""

    file_type: int
    file_size: int
    reserved1: int
    reserved2: int
    pixel_offset: int


@dataclass
class BmpInfo:
    """The bitmap information block, covering versions 3, 4 and 5."""

    width: int = 0
    height: int = 0
    planes: int = 0
    bit_count: int = 0
    compression: int = 0
    size_image: int = 0
    x_pels_per_meter: int = 0
    y_pels_per_meter: int = 0
    clr_used: int = 0
    clr_important: int = 0
    red_mask: int = 0
    green_mask: int = 0
    blue_mask: int = 0
    alpha_mask: int = 0
    cs_type: int = 0
    endpoints: bytes = bytes(36)
    gamma_red: int = 0
    gamma_green: int = 0
    gamma_blue: int = 0
    v5_intent: int = 0
    v5_profile_data: int = 0
    v5_profile_size: int = 0
    v5_reserved: int = 0


def _read_exact(stream: BinaryIO, count: int, what: str) -> bytes:
    data = stream.read(count)
    if len(data) != count:
        raise BmpError(f"truncated {what}: expected {count} bytes, got {len(data)}")
    return data


def read_file_header(stream: BinaryIO) -> BmpHeader:
    """Read the file header and check the ``BM`` signature."""
    data = _read_exact(stream, FILE_HEADER_SIZE, "file header")
    header = BmpHeader(*_HEADER.unpack(data))
    if header.file_type not in _VALID_TYPES:
        raise BmpError("invalid file type")
    return header


def read_info_size(stream: BinaryIO) -> int:
    """Read the size field that opens the information block."""
    data = _read_exact(stream, 4, "information block size")
    return struct.unpack("<i", data)[0]


def parse_info(data: bytes, size: int) -> BmpInfo:
    """Decode the information block that follows its size field.

    ``size`` is the block size read from the file; ``data`` holds the bytes
    after the size field.
    """
    if size == CORE_INFO_SIZE:
        raise BmpError("unsupported core version of bmp file")
    if size not in (INFO_V3_SIZE, INFO_V4_SIZE, INFO_V5_SIZE):
        raise BmpError(f"unsupported information block size {size}")
    needed = size - 4
    if len(data) < needed:
        raise BmpError(
            f"truncated information block: expected {needed} bytes, got {len(data)}"
        )
    info = BmpInfo(*_V3.unpack_from(data, 0))
    if size >= INFO_V4_SIZE:
        (
            info.red_mask,
            info.green_mask,
            info.blue_mask,
            info.alpha_mask,
            info.cs_type,
            info.endpoints,
            info.gamma_red,
            info.gamma_green,
            info.gamma_blue,
        ) = _V4.unpack_from(data, _V3.size)
    if size == INFO_V5_SIZE:
        (
            info.v5_intent,
            info.v5_profile_data,
            info.v5_profile_size,
            info.v5_reserved,
        ) = _V5.unpack_from(data, _V3.size + _V4.size)
    if info.bit_count == 16:
        raise BmpError("16-bit images are unsupported")
    return info


def read_info_block(stream: BinaryIO, size: int) -> BmpInfo:
    """Read and decode the rest of the information block of the given size."""
    if size == CORE_INFO_SIZE:
        raise BmpError("unsupported core version of bmp file")
    if size not in (INFO_V3_SIZE, INFO_V4_SIZE, INFO_V5_SIZE):
        raise BmpError(f"unsupported information block size {size}")
    data = _read_exact(stream, size - 4, "information block")
    return parse_info(data, size)