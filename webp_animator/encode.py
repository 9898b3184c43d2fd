"""
Pillow-based encoding of still frames into simple WebP files.

The animator itself never touches pixels; these helpers produce the
single-image WebP payloads it consumes.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Sequence

from PIL import Image

from .animator import WebPAnimator
from .types import FrameRect, Params

logger = logging.getLogger(__name__)


@dataclass
class EncodeConfig:
    """WebP still-image encoder options."""
    quality: int = 85               # 0 -- 100
    lossless: bool = True
    method: int = 4                 # Compression effort 0 -- 6


def encode_frame(image: Image.Image, config: EncodeConfig | None = None) -> bytes:
    """Encode *image* as a simple WebP file.

    Lossless RGBA images keep their alpha channel.  Lossy alpha needs an
    extended (VP8X + ALPH) still image, which cannot be used as a frame,
    so lossy frames and every non-RGBA mode are converted to RGB.
    """
    config = config or EncodeConfig()
    if image.mode == "RGBA" and not config.lossless:
        logger.warning("Dropping alpha channel for lossy WebP frame.")
    if image.mode != "RGBA" or not config.lossless:
        image = image.convert("RGB")
    buf = io.BytesIO()
    image.save(
        buf,
        format="WEBP",
        quality=config.quality,
        lossless=config.lossless,
        method=config.method,
    )
    return buf.getvalue()


def animate_images(
    images: Sequence[Image.Image],
    durations: int | Sequence[int],
    params: Params | None = None,
    config: EncodeConfig | None = None,
) -> WebPAnimator:
    """Encode *images* and add them, in order, to a new animator.

    Without *params* the canvas takes the size of the first image and
    ``has_alpha`` is set when any image is RGBA and frames are lossless.
    Every image is placed at the canvas origin; smaller images cover their own size.
    """
    if not images:
        raise ValueError("No images to animate")
    if isinstance(durations, int):
        durations = [durations] * len(images)
    if len(durations) != len(images):
        raise ValueError(
            f"Got {len(durations)} durations for {len(images)} images"
        )

    config = config or EncodeConfig()
    if params is None:
        width, height = images[0].size
        has_alpha = config.lossless and any(img.mode == "RGBA" for img in images)
        params = Params(width=width, height=height, has_alpha=has_alpha)

    animator = WebPAnimator(params)
    for img, duration in zip(images, durations):
        frame = FrameRect(x=0, y=0, width=img.width, height=img.height)
        animator.add_webp_image(encode_frame(img, config), frame, duration)
    logger.info("Encoded %d frames at %dx%d", len(images), params.width, params.height)
    return animator
