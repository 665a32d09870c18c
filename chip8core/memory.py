"""
4 KB CHIP-8 address space.

0x000-0x04F holds the hexadecimal font, 0x200-0xFFF the program image.
All addresses are masked to 12 bits, so no access can fall outside memory.
"""

from typing import Union

import numpy as np

from .constants import (
    ADDRESS_MASK, CHIP8_FONT, FONT_SIZE, FONT_START, MAX_PROGRAM_SIZE,
    MEMORY_SIZE, PROGRAM_START,
)
from .errors import ImageTooLarge


class Memory:
    """Byte-addressable RAM with the font preloaded"""

    def __init__(self):
        self.data = np.zeros(MEMORY_SIZE, dtype=np.uint8)
        self.clear()

    def clear(self):
        """Zero all memory and rewrite the font table"""
        self.data.fill(0)
        self.data[FONT_START:FONT_START + FONT_SIZE] = CHIP8_FONT

    def read(self, address: int) -> int:
        return int(self.data[address & ADDRESS_MASK])

    def write(self, address: int, value: int):
        self.data[address & ADDRESS_MASK] = value & 0xFF

    def read_block(self, address: int, length: int) -> bytes:
        """Read `length` bytes starting at `address`, wrapping at the top of memory"""
        indices = (address + np.arange(length)) & ADDRESS_MASK
        return self.data[indices].tobytes()

    def load_program(self, rom_data: Union[bytes, bytearray, np.ndarray]) -> int:
        """
        Copy a program image into memory at PROGRAM_START.

        Memory is left untouched if the image does not fit. Returns the
        number of bytes written.
        """
        if isinstance(rom_data, np.ndarray):
            rom_bytes = rom_data.astype(np.uint8).tobytes()
        else:
            rom_bytes = bytes(rom_data)

        if len(rom_bytes) > MAX_PROGRAM_SIZE:
            raise ImageTooLarge(len(rom_bytes), MAX_PROGRAM_SIZE)

        image = np.frombuffer(rom_bytes, dtype=np.uint8)
        self.data[PROGRAM_START:PROGRAM_START + len(image)] = image
        return len(image)

    def __len__(self):
        return MEMORY_SIZE
