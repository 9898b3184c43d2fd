"""
Fixed-width little-endian field encoders for the WebP container layout.
"""

from __future__ import annotations

import enum
import struct

MAX_24BIT = 0x1000000
MAX_32BIT = 0xFFFFFFFF

RIFF = b"RIFF"
WEBP = b"WEBP"
VP8X = b"VP8X"
ANIM = b"ANIM"
ANMF = b"ANMF"
VP8 = b"VP8 "
VP8L = b"VP8L"
ICCP = b"ICCP"
EXIF = b"EXIF"
XMP = b"XMP "

FRAME_TAGS = (VP8L, VP8)

WEBP_HEADER_LEN = 4             # "WEBP"
VP8X_HEADER_LEN = 18            # tag + size + 10-byte payload
ANIM_HEADER_LEN = 14            # tag + size + 6-byte payload
TOTAL_HEADER_LEN = WEBP_HEADER_LEN + VP8X_HEADER_LEN + ANIM_HEADER_LEN
ANMF_HEADER_LEN = 16            # offsets, size, duration, flags
RIFF_HEADER_LEN = 12            # "RIFF" + size + "WEBP"


class VP8XFlags(enum.IntFlag):
    """Feature bits of the VP8X extended header."""
    NONE = 0
    ANIMATION = 0x02
    XMP = 0x04
    EXIF = 0x08
    ALPHA = 0x10
    ICC = 0x20


def u24(value: int) -> bytes:
    """Encode *value* as 3 little-endian bytes.

    Call sites check the range beforehand, so an out-of-range value is a
    programming error.
    """
    if not 0 <= value < MAX_24BIT:
        raise ValueError(f"value {value} does not fit in 24 bits")
    return struct.pack("<I", value)[:3]


def u16(value: int) -> bytes:
    return struct.pack("<H", value)


def u32(value: int) -> bytes:
    return struct.pack("<I", value)


def chunk_header(fourcc: bytes, size: int) -> bytes:
    """Tag followed by the little-endian payload size."""
    if len(fourcc) != 4:
        raise ValueError(f"chunk tag must be 4 bytes, got {fourcc!r}")
    return fourcc + u32(size)
