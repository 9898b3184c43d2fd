"""
Animated WebP container writer.

Frames arrive as ready-made ``VP8 `` / ``VP8L`` chunks (or whole simple
WebP files) and are wrapped in ``ANMF`` chunks as they are added.  On
``write`` the ``RIFF`` header, ``VP8X`` extended header, optional ICC
profile, ``ANIM`` parameters, the accumulated frames and any EXIF/XMP
blocks are emitted in that order.

Usage::

    animator = WebPAnimator(Params(width=64, height=64))
    animator.add_webp_image(encode_frame(img1), duration=500)
    animator.add_webp_image(encode_frame(img2), duration=500)
    animator.write(Path("out.webp"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Union

from .codec import (
    ANIM,
    ANMF,
    ANMF_HEADER_LEN,
    RIFF,
    RIFF_HEADER_LEN,
    TOTAL_HEADER_LEN,
    VP8X,
    WEBP,
    VP8XFlags,
    chunk_header,
    u16,
    u24,
    u32,
)
from .exceptions import EncodingIOError
from .types import FrameRect, Params
from .validation import (
    check_canvas,
    check_duration,
    check_frame_rect,
    check_frame_tag,
    check_riff_size,
)

logger = logging.getLogger(__name__)

Sink = Union[BinaryIO, str, Path]


class WebPAnimator:
    """Accumulate frames and write them as one animated WebP file."""

    def __init__(self, params: Params) -> None:
        check_canvas(params.width, params.height)
        self.params = params
        self.icc_profile = b""
        self.exif_metadata = b""
        self.xmp_metadata = b""
        self._frame_data = bytearray()
        self._frame_count = 0

    @property
    def width(self) -> int:
        return self.params.width

    @property
    def height(self) -> int:
        return self.params.height

    @property
    def frame_count(self) -> int:
        """Number of frames accepted so far."""
        return self._frame_count

    @property
    def flags(self) -> VP8XFlags:
        """Feature bits advertised in the VP8X header."""
        flags = VP8XFlags.ANIMATION
        if self.icc_profile:
            flags |= VP8XFlags.ICC
        if self.params.has_alpha:
            flags |= VP8XFlags.ALPHA
        if self.exif_metadata:
            flags |= VP8XFlags.EXIF
        if self.xmp_metadata:
            flags |= VP8XFlags.XMP
        return flags

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def set_icc_profile(self, icc_profile: bytes) -> None:
        """Set the ``ICCP`` chunk written right after ``VP8X``.

        The bytes are written verbatim, so they must form a complete
        chunk (see :func:`webp_animator.metadata.icc_chunk`).
        """
        self.icc_profile = self._metadata_block("ICC profile", icc_profile)

    def set_exif_metadata(self, exif_metadata: bytes) -> None:
        """Set the ``EXIF`` chunk written after the frames."""
        self.exif_metadata = self._metadata_block("EXIF", exif_metadata)

    def set_xmp_metadata(self, xmp_metadata: bytes) -> None:
        """Set the ``XMP `` chunk written last."""
        self.xmp_metadata = self._metadata_block("XMP", xmp_metadata)

    @staticmethod
    def _metadata_block(name: str, data: bytes) -> bytes:
        block = bytes(data)
        if len(block) & 1:
            logger.warning(
                "%s block has odd length %d; no pad byte is added.",
                name, len(block),
            )
        return block

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def add_webp_chunk(
        self,
        data: bytes,
        frame: FrameRect | None = None,
        duration: int = 0,
    ) -> None:
        """Add a frame given as a ``VP8 `` or ``VP8L`` chunk.

        Args:
            data: The chunk, starting with its 4-byte tag.
            frame: Canvas region the frame covers.  ``None`` means the
                whole canvas.
            duration: Display time in milliseconds.

        Raises:
            UnrecognizedImageError: *data* does not start with a known tag.
            InvalidDurationError: *duration* does not fit in 24 bits.
            InvalidDimensionsError: *frame* is misaligned or off-canvas.
            ContainerSizeError: The frame would push the file past 4 GiB.
        """
        check_frame_tag(data)
        check_duration(duration)
        if frame is None:
            frame = FrameRect.full(self.width, self.height)
        check_frame_rect(frame, self.width, self.height)
        check_riff_size(self.riff_size + 8 + ANMF_HEADER_LEN + len(data))

        if len(data) & 1:
            logger.warning(
                "Frame %d payload has odd length %d; no pad byte is added.",
                self._frame_count, len(data),
            )

        # Build the whole chunk first so the buffer only ever grows by
        # complete frames.
        chunk = b"".join((
            chunk_header(ANMF, ANMF_HEADER_LEN + len(data)),
            u24(frame.x >> 1),
            u24(frame.y >> 1),
            u24(frame.width - 1),
            u24(frame.height - 1),
            u24(duration),
            b"\x00",
            bytes(data),
        ))
        self._frame_data += chunk
        self._frame_count += 1
        logger.debug(
            "Added frame %d: %s, %d ms, %d bytes",
            self._frame_count - 1, frame, duration, len(chunk),
        )

    def add_webp_image(
        self,
        data: bytes,
        frame: FrameRect | None = None,
        duration: int = 0,
    ) -> None:
        """Add a frame given as a simple (single-chunk) WebP file.

        The 12-byte ``RIFF`` header is dropped and the remaining chunk is
        passed to :meth:`add_webp_chunk`.  Frame rectangles need even
        offsets, so with ``frame=None`` the canvas origin is used.
        """
        self.add_webp_chunk(data[RIFF_HEADER_LEN:], frame, duration)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @property
    def riff_size(self) -> int:
        """Value of the RIFF size field for the current state."""
        return (
            TOTAL_HEADER_LEN
            + len(self._frame_data)
            + len(self.icc_profile)
            + len(self.exif_metadata)
            + len(self.xmp_metadata)
        )

    def _sections(self) -> list[bytes]:
        """Container sections in emission order."""
        check_riff_size(self.riff_size)
        vp8x = b"".join((
            chunk_header(VP8X, 10),
            bytes((self.flags,)),
            b"\x00\x00\x00",
            u24(self.width - 1),
            u24(self.height - 1),
        ))
        anim = b"".join((
            chunk_header(ANIM, 6),
            bytes(self.params.background_bgra),
            u16(self.params.loop_count),
        ))
        return [
            RIFF + u32(self.riff_size) + WEBP,
            vp8x,
            self.icc_profile,
            anim,
            bytes(self._frame_data),
            self.exif_metadata,
            self.xmp_metadata,
        ]

    def write(self, sink: Sink) -> None:
        """Write the complete container to *sink*.

        *sink* is a binary file-like object or a path.  State is left
        unchanged, so repeated calls produce identical output.

        Raises:
            EncodingIOError: The sink failed; it may hold a partial file.
            ContainerSizeError: The metadata blocks push the file past 4 GiB.
        """
        try:
            if isinstance(sink, (str, Path)):
                with open(sink, "wb") as f:
                    self._write_sections(f)
            else:
                self._write_sections(sink)
        except OSError as exc:
            raise EncodingIOError(f"Failed to write animation: {exc}") from exc
        logger.info(
            "Wrote animated WebP: %d frames, %d bytes",
            self._frame_count, self.riff_size + 8,
        )

    def _write_sections(self, f: BinaryIO) -> None:
        for section in self._sections():
            if section:
                f.write(section)

    def to_bytes(self) -> bytes:
        """Return the complete container as bytes."""
        return b"".join(self._sections())
