"""
CLI command for assembling still images into an animated WebP.

Usage:
    webp-animator assemble a.webp b.webp c.webp -o anim.webp --duration 200
    webp-animator assemble frame_*.png -o anim.webp --loop 3 --background "#00000000"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PIL import Image

from ..animator import WebPAnimator
from ..encode import EncodeConfig, encode_frame
from ..exceptions import EncodingError
from ..metadata import exif_chunk, icc_chunk, xmp_chunk
from ..types import FrameRect, Params


def parse_color(value: str) -> tuple[int, int, int, int]:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA`` into the BGRA order WebP stores."""
    text = value.lstrip("#")
    if len(text) == 6:
        text += "ff"
    if len(text) != 8:
        raise argparse.ArgumentTypeError(f"invalid color {value!r}, expected #RRGGBB[AA]")
    try:
        r, g, b, a = (int(text[i:i + 2], 16) for i in range(0, 8, 2))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid color {value!r}, expected #RRGGBB[AA]")
    return (b, g, r, a)


def _load_frame(path: Path, config: EncodeConfig) -> tuple[bytes, tuple[int, int], bool]:
    """Return (simple WebP bytes, size, has_alpha) for one input file."""
    with Image.open(str(path)) as img:
        size = img.size
        has_alpha = img.mode in ("RGBA", "LA") or "transparency" in img.info
        if path.suffix.lower() == ".webp":
            return path.read_bytes(), size, has_alpha
        if has_alpha and img.mode != "RGBA":
            img = img.convert("RGBA")
        return encode_frame(img, config), size, has_alpha and config.lossless


def cmd_assemble(args: argparse.Namespace) -> int:
    """Main handler for ``webp-animator assemble``."""
    paths = [Path(p) for p in args.frames]
    for path in paths:
        if not path.is_file():
            print(f"Error: file not found: {path}", file=sys.stderr)
            return 1

    config = EncodeConfig(
        quality=args.quality,
        lossless=not args.lossy,
        method=args.method,
    )

    try:
        frames = [_load_frame(p, config) for p in paths]
        width, height = frames[0][1]
        params = Params(
            width=width,
            height=height,
            background_bgra=args.background,
            loop_count=args.loop,
            has_alpha=args.alpha or any(alpha for _, _, alpha in frames),
        )
        animator = WebPAnimator(params)
        if args.icc:
            animator.set_icc_profile(icc_chunk(Path(args.icc).read_bytes()))
        if args.exif:
            animator.set_exif_metadata(exif_chunk(Path(args.exif).read_bytes()))
        if args.xmp:
            animator.set_xmp_metadata(xmp_chunk(Path(args.xmp).read_bytes()))

        for path, (data, (w, h), _) in zip(paths, frames):
            frame = FrameRect(x=0, y=0, width=w, height=h)
            try:
                animator.add_webp_image(data, frame, args.duration)
            except EncodingError as exc:
                raise EncodingError(f"{path}: {exc}") from exc

        output = Path(args.output)
        animator.write(output)
    except (EncodingError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Done! {animator.frame_count} frames -> {output} ({output.stat().st_size} B)")
    return 0


def build_assemble_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the ``assemble`` subcommand and its arguments."""
    p = subparsers.add_parser(
        "assemble",
        help="Assemble still images into an animated WebP",
        description="Combine WebP files (or any image Pillow can read) into one animated WebP.",
    )
    p.add_argument(
        "frames", nargs="+",
        help="Frame images, in display order",
    )
    p.add_argument(
        "-o", "--output", required=True,
        help="Output .webp path",
    )
    p.add_argument(
        "--duration", type=int, default=100,
        help="Per-frame duration in milliseconds (default: 100)",
    )
    p.add_argument(
        "--loop", type=int, default=0,
        help="Loop count; 0 = infinite (default: 0)",
    )
    p.add_argument(
        "--background", type=parse_color, default=(255, 255, 255, 255),
        help="Canvas background as #RRGGBB[AA] (default: #ffffffff)",
    )
    p.add_argument(
        "--alpha", action="store_true",
        help="Advertise alpha in the container header",
    )
    p.add_argument(
        "--lossy", action="store_true",
        help="Encode non-WebP inputs lossily (drops alpha)",
    )
    p.add_argument(
        "--quality", type=int, default=85,
        help="Lossy quality 0-100 (default: 85)",
    )
    p.add_argument(
        "--method", type=int, default=4,
        help="Compression effort 0-6 (default: 4)",
    )
    p.add_argument("--icc", default=None, help="ICC profile file to embed")
    p.add_argument("--exif", default=None, help="Raw EXIF (TIFF) file to embed")
    p.add_argument("--xmp", default=None, help="XMP packet file to embed")
    p.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
        help="Log every added frame",
    )
    p.set_defaults(func=cmd_assemble)
