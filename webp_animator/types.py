"""
Core data structures shared by the animator and its helpers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FrameRect:
    """Sub-region of the canvas updated by one frame, in canvas pixels."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, width: int, height: int) -> FrameRect:
        """Return the rectangle covering a whole *width* x *height* canvas."""
        return cls(x=0, y=0, width=width, height=height)


@dataclass(frozen=True)
class Params:
    """Global parameters of one animated WebP file."""
    width: int
    height: int
    background_bgra: tuple[int, int, int, int] = (255, 255, 255, 255)
    loop_count: int = 0             # 0 = infinite loop
    has_alpha: bool = False

    def __post_init__(self) -> None:
        bgra = tuple(self.background_bgra)
        if len(bgra) != 4 or not all(0 <= c <= 0xFF for c in bgra):
            raise ValueError(
                f"background_bgra must be 4 bytes, got {self.background_bgra!r}"
            )
        object.__setattr__(self, "background_bgra", bgra)
        if not 0 <= self.loop_count <= 0xFFFF:
            raise ValueError(f"loop_count must fit in 16 bits, got {self.loop_count}")
