"""
Builders for the ICCP, EXIF and XMP chunks.

:class:`~webp_animator.animator.WebPAnimator` writes metadata blocks
verbatim, so they have to be complete, even-aligned RIFF chunks.  The
helpers here produce exactly that.
"""

from __future__ import annotations

from typing import Any

import piexif

from .codec import EXIF, ICCP, XMP, chunk_header

_EXIF_APP1_PREFIX = b"Exif\x00\x00"


def make_chunk(fourcc: bytes, payload: bytes) -> bytes:
    """Wrap *payload* in a RIFF chunk.

    The size field holds the payload length; a zero pad byte follows odd
    payloads.
    """
    payload = bytes(payload)
    pad = b"\x00" if len(payload) & 1 else b""
    return chunk_header(fourcc, len(payload)) + payload + pad


def icc_chunk(profile: bytes) -> bytes:
    return make_chunk(ICCP, profile)


def xmp_chunk(xmp: str | bytes) -> bytes:
    if isinstance(xmp, str):
        xmp = xmp.encode("utf-8")
    return make_chunk(XMP, xmp)


def exif_chunk(exif: bytes) -> bytes:
    """Build an EXIF chunk from TIFF-structured EXIF bytes.

    JPEG-style data carrying the ``Exif\\0\\0`` APP1 marker (as produced by
    ``piexif.dump``) has the marker removed first.
    """
    exif = bytes(exif)
    if exif.startswith(_EXIF_APP1_PREFIX):
        exif = exif[len(_EXIF_APP1_PREFIX):]
    return make_chunk(EXIF, exif)


def build_exif(
    description: str = "",
    artist: str = "",
    software: str = "",
) -> bytes:
    """Build EXIF bytes holding basic attribution tags using piexif.

    Empty fields are omitted.
    """
    exif_dict: dict[str, Any] = {"0th": {}, "Exif": {}, "1st": {}}
    if description:
        exif_dict["0th"][piexif.ImageIFD.ImageDescription] = description.encode("utf-8")
    if artist:
        exif_dict["0th"][piexif.ImageIFD.Artist] = artist.encode("utf-8")
    if software:
        exif_dict["0th"][piexif.ImageIFD.Software] = software.encode("utf-8")
    return piexif.dump(exif_dict)
