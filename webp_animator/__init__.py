"""
webp_animator -- Assemble animated WebP files from encoded still frames.

Frames are supplied as ready-made VP8/VP8L payloads and wrapped in the
RIFF/VP8X/ANIM/ANMF container layout without touching pixel data.
"""

__version__ = "0.1.0"

from webp_animator.animator import WebPAnimator
from webp_animator.exceptions import (
    ContainerSizeError,
    EncodingError,
    EncodingIOError,
    InvalidDimensionsError,
    InvalidDurationError,
    UnrecognizedImageError,
)
from webp_animator.types import FrameRect, Params

__all__ = [
    "ContainerSizeError",
    "EncodingError",
    "EncodingIOError",
    "FrameRect",
    "InvalidDimensionsError",
    "InvalidDurationError",
    "Params",
    "UnrecognizedImageError",
    "WebPAnimator",
]
