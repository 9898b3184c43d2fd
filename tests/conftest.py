"""
Shared fixtures for the webp_animator test suite.
"""

from __future__ import annotations

import io
import struct
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from webp_animator.types import Params


def _vp8l_chunk(body: bytes = b"\x2f\x00\x00\x00") -> bytes:
    """A VP8L chunk with an arbitrary body; never decoded."""
    return b"VP8L" + struct.pack("<I", len(body)) + body


def _simple_webp(chunk: bytes) -> bytes:
    """Wrap *chunk* in the 12-byte header of a simple WebP file."""
    return b"RIFF" + struct.pack("<I", 4 + len(chunk)) + b"WEBP" + chunk


def _parse_chunks(data: bytes, start: int = 12, end: int | None = None) -> list[tuple[bytes, bytes]]:
    """Split a RIFF body into (tag, payload) pairs, honouring pad bytes."""
    end = len(data) if end is None else end
    chunks = []
    pos = start
    while pos + 8 <= end:
        tag = data[pos:pos + 4]
        (size,) = struct.unpack("<I", data[pos + 4:pos + 8])
        chunks.append((tag, data[pos + 8:pos + 8 + size]))
        pos += 8 + size + (size & 1)
    return chunks


def _read_u24(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 3], "little")


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory(prefix="webp_animator_test_") as d:
        yield Path(d)


@pytest.fixture
def params_64():
    return Params(width=64, height=64, background_bgra=(255, 255, 255, 255))


@pytest.fixture
def frame_chunk():
    return _vp8l_chunk()


@pytest.fixture
def solid_webp_frames():
    """Two 64x64 lossless WebP files, red then blue."""
    frames = []
    for color in ((255, 0, 0), (0, 0, 255)):
        buf = io.BytesIO()
        Image.new("RGB", (64, 64), color).save(buf, format="WEBP", lossless=True)
        frames.append(buf.getvalue())
    return frames


@pytest.fixture
def vp8l_chunk():
    """Builder for VP8L chunks with a chosen body."""
    return _vp8l_chunk


@pytest.fixture
def simple_webp():
    """Wraps a chunk in a simple WebP file header."""
    return _simple_webp


@pytest.fixture
def parse_chunks():
    """Splits a container into (tag, payload) pairs."""
    return _parse_chunks


@pytest.fixture
def read_u24():
    """Reads a little-endian 24-bit field at an offset."""
    return _read_u24
