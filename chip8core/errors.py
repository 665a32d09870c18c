"""
Error types raised by the CHIP-8 core.

Every error is terminal for the current run: the emulator never retries or
rolls back. The caller decides whether to halt, report or reset.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all CHIP-8 core errors"""


class StackOverflow(Chip8Error):
    """CALL attempted with all 16 stack slots in use"""

    def __init__(self, address: Optional[int] = None):
        self.address = address
        where = f" at PC=0x{address:03X}" if address is not None else ""
        super().__init__(f"Stack overflow{where}")


class StackUnderflow(Chip8Error):
    """RET attempted with an empty call stack"""

    def __init__(self, address: Optional[int] = None):
        self.address = address
        where = f" at PC=0x{address:03X}" if address is not None else ""
        super().__init__(f"RET with empty stack{where}")


class ImageTooLarge(Chip8Error):
    """Program image does not fit between the program start and top of memory"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM too large: {size} bytes, max {limit}")


class UnknownOpcode(Chip8Error):
    """Instruction word matches none of the 35 CHIP-8 instructions"""

    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        self.address = address
        where = f" at PC=0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown instruction 0x{opcode:04X}{where}")


class EmulatorCrashed(Chip8Error):
    """step() called after a previous fatal error, before reset()"""
