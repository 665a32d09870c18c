"""
CHIP-8 emulator core.

Chip8Emulator aggregates memory, display, keypad, timers and the CPU.
It does no wall-clock pacing: callers decide how many step() calls happen
per tick_timers() call and when to render after a draw.
"""

import logging
import threading
from typing import Dict, Optional, Union

import numpy as np

from .constants import MEMORY_SIZE, PROGRAM_START
from .cpu import CPU, Instruction
from .display import Display
from .errors import Chip8Error, EmulatorCrashed
from .keypad import Keypad
from .memory import Memory
from .quirks import resolve_quirks
from .timers import Timers

logger = logging.getLogger(__name__)

# Number of instructions traced at DEBUG level after each reset
TRACE_LIMIT = 20

STAT_KEYS = (
    'instructions_executed',
    'display_writes',
    'display_clears',
    'sprite_collisions',
    'memory_reads',
    'memory_writes',
    'timer_sets',
    'timer_ticks',
    'sound_activations',
    'key_checks',
    'blocking_key_waits',
    'jumps_taken',
    'subroutine_calls',
    'returns',
    'random_generations',
    'cycles_executed',
)


class Chip8Emulator:
    """
    Single-instance CHIP-8 machine.

    quirks:     overrides for DEFAULT_QUIRKS (see quirks.py)
    seed:       seed for the RND instruction's generator
    debug_file: optional path; debug messages are appended to it
    """

    def __init__(self, quirks: Optional[Dict[str, bool]] = None,
                 seed: Optional[int] = None, debug_file: Optional[str] = None):
        self.quirks = resolve_quirks(quirks)
        self.seed = seed
        self.debug_file = debug_file
        self.debug_log = []
        # One child logger per instance; debug_file output is attached here only
        self.logger = logger.getChild(f"{id(self):x}")
        self._file_handler = None
        if debug_file:
            self._file_handler = logging.FileHandler(debug_file, encoding='utf-8')
            self._file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(self._file_handler)
            self.logger.setLevel(logging.DEBUG)

        self._lock = threading.RLock()
        self.memory = Memory()
        self.display = Display(clipping=self.quirks['clipping'])
        self.keypad = Keypad()
        self.timers = Timers()
        self.stats = {}
        self.cpu = CPU(self.quirks, stats=self.stats)
        self.crashed = False
        self.reset()

    def log_debug(self, message: str):
        """Record a debug message in debug_log and this emulator's logger"""
        self.debug_log.append(message)
        self.logger.debug(message)

    def close(self):
        """Detach the debug file handler, if any"""
        if self._file_handler is not None:
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None
            self.logger.setLevel(logging.NOTSET)

    def reset(self):
        """Return every component to its power-on state"""
        with self._lock:
            self.memory.clear()
            self.display.clear()
            self.keypad.release_all()
            self.timers.reset()
            self.cpu.rng = np.random.default_rng(self.seed)
            self.cpu.reset()
            self.stats.clear()
            self.stats.update({key: 0 for key in STAT_KEYS})
            self.crashed = False
        self.log_debug("Emulator reset")

    def load_rom(self, rom_data: Union[bytes, bytearray, np.ndarray]) -> int:
        """Load a program image at 0x200. Raises ImageTooLarge if it does not fit."""
        with self._lock:
            try:
                size = self.memory.load_program(rom_data)
            except Chip8Error as e:
                self.log_debug(f"ERROR: {e}")
                raise
        self.log_debug(f"Loaded ROM: {size} bytes, first instruction: "
                       f"0x{self.memory.read(PROGRAM_START):02X}"
                       f"{self.memory.read(PROGRAM_START + 1):02X}")
        return size

    def step(self) -> bool:
        """
        Execute one instruction.

        Returns True if the instruction drew a sprite, so a frontend can
        pace frames on draws. Fatal errors propagate as Chip8Error
        subclasses and leave the emulator crashed until reset().
        """
        with self._lock:
            if self.crashed:
                raise EmulatorCrashed("Emulator has crashed; reset() before stepping")

            keys = self.keypad.snapshot()
            instruction = self.cpu.fetch(self.memory)
            self.stats['instructions_executed'] += 1
            if self.stats['instructions_executed'] <= TRACE_LIMIT:
                self._trace(instruction)

            try:
                return self.cpu.execute(instruction, self.memory, self.display,
                                        keys, self.timers)
            except Chip8Error as e:
                self.crashed = True
                self.log_debug(f"ERROR: {e}")
                raise

    def _trace(self, ins: Instruction):
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.log_debug(f"Executing: {ins}")
        self.log_debug(f"  Opcode: 0x{ins.family:X}, x={ins.x}, y={ins.y}, n={ins.n}, "
                       f"kk=0x{ins.kk:02X}, nnn=0x{ins.nnn:03X}")

    def tick_timers(self):
        """Advance the delay and sound timers by one 60 Hz period"""
        with self._lock:
            self.timers.tick()
            self.stats['timer_ticks'] += 1

    def run(self, max_cycles: int = 1000, cycles_per_tick: Optional[int] = 16) -> int:
        """
        Run up to max_cycles instructions, ticking the timers once every
        cycles_per_tick instructions (None disables ticking). Returns the
        number of instructions executed. Errors propagate as from step().
        """
        executed = 0
        for cycle in range(max_cycles):
            self.step()
            executed += 1
            self.stats['cycles_executed'] += 1
            if cycles_per_tick and (cycle + 1) % cycles_per_tick == 0:
                self.tick_timers()
        return executed

    # Convenience accessors

    def set_key(self, key: int, pressed: bool):
        """Set key state (0-F)"""
        self.keypad.set_key(key, pressed)

    def sound_active(self) -> bool:
        return self.timers.sound_active()

    def get_display(self) -> np.ndarray:
        """Get current display state as 2D array"""
        return self.display.snapshot()
    @property
    def registers(self) -> np.ndarray:
        return self.cpu.registers

    @property
    def index_register(self) -> int:
        return self.cpu.index_register

    @property
    def program_counter(self) -> int:
        return self.cpu.program_counter

    @property
    def stack_pointer(self) -> int:
        return self.cpu.stack_pointer

    @property
    def delay_timer(self) -> int:
        return self.timers.delay

    @property
    def sound_timer(self) -> int:
        return self.timers.sound

    def get_stats(self) -> Dict[str, int]:
        """Get current instrumentation statistics"""
        return self.stats.copy()
    def __repr__(self):
        return (f"Chip8Emulator(PC=0x{self.cpu.program_counter:03X}, "
                f"I=0x{self.cpu.index_register:03X}, SP={self.cpu.stack_pointer}, "
                f"crashed={self.crashed}, memory={MEMORY_SIZE})")

