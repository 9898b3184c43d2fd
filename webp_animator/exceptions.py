"""
Custom exception hierarchy for webp_animator.

All webp_animator exceptions inherit from EncodingError so callers can
catch the entire family with a single except clause.
"""

from __future__ import annotations


class EncodingError(Exception):
    """Base exception for all webp_animator errors."""


class InvalidDimensionsError(EncodingError):
    """Raised when canvas or frame-rectangle geometry is out of bounds."""


class InvalidDurationError(EncodingError):
    """Raised when a frame duration does not fit in 24 bits."""


class UnrecognizedImageError(EncodingError):
    """Raised when a frame payload does not start with a VP8/VP8L tag."""


class EncodingIOError(EncodingError):
    """Raised when the output sink fails while writing the container."""


class ContainerSizeError(EncodingError):
    """Raised when a chunk or the whole file outgrows the 32-bit size field."""
