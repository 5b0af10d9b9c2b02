"""In-memory pixel images and the sprite operations drawn on them."""

from __future__ import annotations

from dataclasses import dataclass, field

_COLOR_MASK = 0xFFFFFFFF
TRANSPARENT = 0x000000


@dataclass
class Image:
    """A width by height grid of 32-bit colour values, stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        expected = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * expected
        elif len(self.pixels) != expected:
            raise ValueError(
                f"expected {expected} pixels, got {len(self.pixels)}"
            )

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y), or 0 when the point lies outside."""
        if not self._inside(x, y):
            return 0
        return self.pixels[y * self.width + x]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Write a colour at (x, y); points outside the image are ignored."""
        if not self._inside(x, y):
            return
        self.pixels[y * self.width + x] = color & _COLOR_MASK

    def clear(self, color: int = TRANSPARENT) -> None:
        """Fill the whole image with one colour."""
        self.pixels = [color & _COLOR_MASK] * (self.width * self.height)


def unpack_sprite(dest: Image, src: Image, pos: tuple[int, int]) -> None:
    """Copy the dest-sized rectangle of src whose top-left corner is pos."""
    ox, oy = pos
    for y in range(dest.height):
        for x in range(dest.width):
            dest.put_pixel(x, y, src.get_pixel(ox + x, oy + y))


def upscale_sprite(dest: Image, src: Image) -> None:
    """Scale src onto dest with nearest-neighbour sampling."""
    if dest.width == 0 or dest.height == 0:
        return
    ratio_x = (src.width << 16) // dest.width
    ratio_y = (src.height << 16) // dest.height
    for y in range(dest.height):
        src_y = (y * ratio_y) >> 16
        for x in range(dest.width):
            src_x = (x * ratio_x) >> 16
            dest.put_pixel(x, y, src.get_pixel(src_x, src_y))


def draw_sprite_to_buffer(buffer: Image, sprite: Image,
                          pos: tuple[int, int]) -> None:
    """Stamp sprite onto buffer at pos, skipping transparent (black) pixels."""
    ox, oy = pos
    for y in range(sprite.height):
        for x in range(sprite.width):
            color = sprite.get_pixel(x, y)
            if color != TRANSPARENT:
                buffer.put_pixel(ox + x, oy + y, color)