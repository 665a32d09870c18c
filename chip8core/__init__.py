"""
chip8core - execution core for the CHIP-8 virtual machine.
"""

from .constants import (
    CHIP8_FONT, DISPLAY_HEIGHT, DISPLAY_WIDTH, FONT_START, MEMORY_SIZE,
    PROGRAM_START,
)
from .cpu import CPU, Instruction, decode
from .display import Display
from .emulator import Chip8Emulator
from .errors import (
    Chip8Error, EmulatorCrashed, ImageTooLarge, StackOverflow, StackUnderflow,
    UnknownOpcode,
)
from .keypad import Keypad
from .memory import Memory
from .quirks import DEFAULT_QUIRKS
from .timers import Timers

__version__ = "0.1.0"
