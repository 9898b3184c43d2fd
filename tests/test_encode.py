"""
Round-trip tests through Pillow's WebP decoder.
"""

from __future__ import annotations

import io

import pytest
from PIL import Image, features

from webp_animator import FrameRect, Params, UnrecognizedImageError, WebPAnimator
from webp_animator.encode import EncodeConfig, animate_images, encode_frame
from webp_animator.metadata import icc_chunk

pytestmark = pytest.mark.skipif(
    not features.check("webp"), reason="Pillow built without WebP support"
)


def _decode(data: bytes) -> tuple[Image.Image, list[int]]:
    img = Image.open(io.BytesIO(data))
    durations = []
    for i in range(img.n_frames):
        img.seek(i)
        img.load()
        durations.append(img.info["duration"])
    img.seek(0)
    return img, durations


class TestEncodeFrame:
    def test_lossless_is_simple_vp8l(self):
        data = encode_frame(Image.new("RGB", (10, 10), "red"))
        assert data[:4] == b"RIFF"
        assert data[12:16] == b"VP8L"

    def test_lossy_is_simple_vp8(self):
        data = encode_frame(
            Image.new("RGB", (16, 16), "green"),
            EncodeConfig(quality=50, lossless=False),
        )
        assert data[12:16] == b"VP8 "

    def test_lossy_rgba_drops_alpha(self):
        data = encode_frame(
            Image.new("RGBA", (16, 16), (0, 0, 255, 128)),
            EncodeConfig(lossless=False),
        )
        assert data[12:16] == b"VP8 "

    def test_palette_image_converted(self):
        data = encode_frame(Image.new("P", (8, 8)))
        assert data[12:16] == b"VP8L"

    def test_stripped_chunk_is_even(self):
        data = encode_frame(Image.new("RGB", (7, 5), "white"))
        assert len(data[12:]) % 2 == 0


class TestRoundTrip:
    def test_two_frames(self, params_64, solid_webp_frames):
        animator = WebPAnimator(params_64)
        for frame in solid_webp_frames:
            animator.add_webp_image(frame, None, 500)
        img, durations = _decode(animator.to_bytes())
        assert img.n_frames == 2
        assert img.size == (64, 64)
        assert durations == [500, 500]
        assert img.convert("RGB").getpixel((10, 10)) == (255, 0, 0)
        img.seek(1)
        assert img.convert("RGB").getpixel((10, 10)) == (0, 0, 255)

    def test_frame_order_and_durations(self):
        images = [Image.new("RGB", (32, 32), (i * 40, 0, 0)) for i in range(5)]
        durations = [100, 200, 300, 400, 500]
        animator = animate_images(images, durations)
        img, decoded = _decode(animator.to_bytes())
        assert img.n_frames == 5
        assert decoded == durations

    def test_sub_rectangle(self):
        animator = WebPAnimator(Params(width=64, height=64))
        animator.add_webp_image(encode_frame(Image.new("RGB", (64, 64), "white")), None, 100)
        animator.add_webp_image(
            encode_frame(Image.new("RGB", (16, 16), "black")),
            FrameRect(x=32, y=16, width=16, height=16),
            100,
        )
        img, _ = _decode(animator.to_bytes())
        img.seek(1)
        rgb = img.convert("RGB")
        assert rgb.getpixel((40, 20)) == (0, 0, 0)
        assert rgb.getpixel((5, 5)) == (255, 255, 255)

    def test_loop_count(self, solid_webp_frames):
        animator = WebPAnimator(Params(width=64, height=64, loop_count=3))
        animator.add_webp_image(solid_webp_frames[0], None, 100)
        img, _ = _decode(animator.to_bytes())
        assert img.info["loop"] == 3

    def test_with_icc_profile(self, params_64, solid_webp_frames):
        animator = WebPAnimator(params_64)
        animator.set_icc_profile(icc_chunk(b"fake-profile"))
        animator.add_webp_image(solid_webp_frames[0], None, 100)
        animator.add_webp_image(solid_webp_frames[1], None, 100)
        img, _ = _decode(animator.to_bytes())
        assert img.n_frames == 2


class TestAnimateImages:
    def test_canvas_from_first_image(self):
        animator = animate_images([Image.new("RGB", (20, 10))] * 3, 50)
        assert (animator.width, animator.height) == (20, 10)
        assert animator.frame_count == 3
        assert not animator.params.has_alpha

    def test_alpha_detected(self):
        animator = animate_images([Image.new("RGBA", (8, 8))], 50)
        assert animator.params.has_alpha

    def test_alpha_not_advertised_when_lossy(self):
        animator = animate_images(
            [Image.new("RGBA", (8, 8))], 50, config=EncodeConfig(lossless=False)
        )
        assert not animator.params.has_alpha

    def test_smaller_frame_at_origin(self, parse_chunks):
        animator = animate_images(
            [Image.new("RGB", (20, 20)), Image.new("RGB", (10, 6))], 50
        )
        anmf = [p for tag, p in parse_chunks(animator.to_bytes()) if tag == b"ANMF"]
        assert anmf[1][6:12] == b"\x09\x00\x00\x05\x00\x00"

    def test_duration_count_mismatch(self):
        with pytest.raises(ValueError):
            animate_images([Image.new("RGB", (8, 8))] * 2, [100])

    def test_empty(self):
        with pytest.raises(ValueError):
            animate_images([], 100)


def test_extended_still_rejected():
    """A still image with an ICC profile is VP8X-based and cannot be a frame."""
    buf = io.BytesIO()
    Image.new("RGB", (8, 8)).save(buf, format="WEBP", lossless=True, icc_profile=b"x" * 8)
    animator = WebPAnimator(Params(width=8, height=8))
    with pytest.raises(UnrecognizedImageError):
        animator.add_webp_image(buf.getvalue(), None, 100)
