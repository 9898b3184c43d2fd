"""
Geometry and timing checks applied before any bytes are emitted.

Each check raises the matching EncodingError subclass and has no side
effects, so a failed check leaves the animator untouched.
"""

from __future__ import annotations

from .codec import FRAME_TAGS, MAX_24BIT, MAX_32BIT
from .exceptions import (
    ContainerSizeError,
    InvalidDimensionsError,
    InvalidDurationError,
    UnrecognizedImageError,
)
from .types import FrameRect


def check_canvas(width: int, height: int) -> None:
    """Canvas sides must be in ``1 .. 2**24`` and the area must fit in 32 bits."""
    if not 0 < width <= MAX_24BIT or not 0 < height <= MAX_24BIT:
        raise InvalidDimensionsError(
            f"canvas {width}x{height} outside 1..{MAX_24BIT} per side"
        )
    if (width * height) >> 32:
        raise InvalidDimensionsError(
            f"canvas area {width}x{height} does not fit in 32 bits"
        )


def check_frame_tag(data: bytes) -> None:
    if bytes(data[:4]) not in FRAME_TAGS:
        raise UnrecognizedImageError(
            f"expected a VP8 or VP8L chunk, got tag {bytes(data[:4])!r}"
        )


def check_duration(duration: int) -> None:
    if not 0 <= duration < MAX_24BIT:
        raise InvalidDurationError(
            f"duration {duration} ms does not fit in 24 bits"
        )


def check_frame_rect(frame: FrameRect, width: int, height: int) -> None:
    """Offsets must be even and the rectangle must lie inside the canvas."""
    if frame.x < 0 or frame.y < 0 or frame.x & 1 or frame.y & 1:
        raise InvalidDimensionsError(
            f"frame offset ({frame.x}, {frame.y}) must be even and non-negative"
        )
    if frame.width <= 0 or frame.height <= 0:
        raise InvalidDimensionsError(
            f"frame size {frame.width}x{frame.height} must be positive"
        )
    if frame.x + frame.width > width or frame.y + frame.height > height:
        raise InvalidDimensionsError(
            f"frame {frame} exceeds canvas {width}x{height}"
        )


def check_riff_size(size: int) -> None:
    """The RIFF size field, and so every chunk length, is 32 bits wide."""
    if size > MAX_32BIT:
        raise ContainerSizeError(
            f"container size {size} does not fit in 32 bits"
        )
