"""
64x32 monochrome frame buffer with XOR sprite drawing.
"""

from typing import Iterable

import numpy as np

from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH


class Display:
    """
    CHIP-8 screen. Pixels are stored row-major as display[y, x].

    Sprites are XORed onto the screen; the starting coordinate wraps,
    but pixels running past the right or bottom edge are clipped unless
    `clipping` is disabled.
    """

    def __init__(self, clipping: bool = True):
        self.clipping = clipping
        self.pixels = np.zeros((DISPLAY_HEIGHT, DISPLAY_WIDTH), dtype=bool)

    def clear(self):
        self.pixels.fill(False)

    def pixel(self, x: int, y: int) -> bool:
        return bool(self.pixels[y % DISPLAY_HEIGHT, x % DISPLAY_WIDTH])

    def set_pixel(self, x: int, y: int, value: bool):
        self.pixels[y % DISPLAY_HEIGHT, x % DISPLAY_WIDTH] = bool(value)

    def draw(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """
        XOR sprite rows onto the screen at (x, y).

        Each row is one byte, most significant bit leftmost. Returns True
        if any lit pixel was turned off. Bits that are clipped off the
        screen never take part in collision detection.
        """
        vx = x % DISPLAY_WIDTH
        vy = y % DISPLAY_HEIGHT
        collision = False

        for row, sprite_byte in enumerate(rows):
            pixel_y = vy + row
            if pixel_y >= DISPLAY_HEIGHT:
                if self.clipping:
                    break
                pixel_y %= DISPLAY_HEIGHT

            for col in range(8):
                if not sprite_byte & (0x80 >> col):
                    continue

                pixel_x = vx + col
                if pixel_x >= DISPLAY_WIDTH:
                    if self.clipping:
                        break
                    pixel_x %= DISPLAY_WIDTH

                if self.pixels[pixel_y, pixel_x]:
                    collision = True
                self.pixels[pixel_y, pixel_x] ^= True

        return collision

    def snapshot(self) -> np.ndarray:
        """Get current display state as a (32, 64) bool array"""
        return self.pixels.copy()

    def to_buffer(self, on: int = 0xFFFFFF, off: int = 0x000000) -> np.ndarray:
        """Flat row-major 0xRRGGBB buffer, one uint32 per pixel"""
        return np.where(self.pixels, on, off).astype(np.uint32).ravel()

    def to_image(self, scale: int = 8) -> np.ndarray:
        """Get display as a scaled 0-255 grayscale image array"""
        scaled = np.repeat(np.repeat(self.pixels, scale, axis=0), scale, axis=1)
        return scaled.astype(np.uint8) * 255

    def lit_count(self) -> int:
        return int(np.count_nonzero(self.pixels))
