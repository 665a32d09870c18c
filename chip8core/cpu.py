"""
CHIP-8 register file, instruction decoding and execution.

The CPU owns V0-VF, I, PC, SP and the call stack. It does not own memory,
the display, the keypad or the timers; those are handed to execute() by
the emulator that aggregates them.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .constants import (
    ADDRESS_MASK, FLAG_REGISTER, FONT_GLYPH_SIZE, FONT_START, PROGRAM_START,
    REGISTER_COUNT, STACK_SIZE,
)
from .display import Display
from .errors import StackOverflow, StackUnderflow, UnknownOpcode
from .keypad import Keypad
from .memory import Memory
from .quirks import resolve_quirks
from .timers import Timers


@dataclass(frozen=True)
class Instruction:
    """A decoded 16-bit instruction word"""
    address: int
    opcode: int
    family: int  # top nibble
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    def __str__(self):
        return f"0x{self.opcode:04X} at PC=0x{self.address:03X}"


def decode(opcode: int, address: int = 0) -> Instruction:
    """Split an instruction word into its bit fields"""
    opcode = int(opcode) & 0xFFFF
    return Instruction(
        address=address,
        opcode=opcode,
        family=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )


class CPU:
    """
    Fetch/decode/execute engine.

    `quirks` selects the historical variants described in quirks.py;
    `stats` is the emulator's instrumentation dict and is updated in place.
    """

    def __init__(self, quirks: Optional[Dict[str, bool]] = None,
                 rng: Optional[np.random.Generator] = None,
                 stats: Optional[Dict[str, int]] = None):
        self.quirks = resolve_quirks(quirks)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.stats = stats if stats is not None else {}
        self.reset()

    def reset(self):
        self.registers = np.zeros(REGISTER_COUNT, dtype=np.uint8)
        # Plain int; only the low 12 bits address memory
        self.index_register = 0
        self.program_counter = PROGRAM_START
        self.stack_pointer = 0
        self.stack = np.zeros(STACK_SIZE, dtype=np.uint16)

    def _count(self, key: str, amount: int = 1):
        self.stats[key] = self.stats.get(key, 0) + amount

    def _skip(self):
        self.program_counter = (self.program_counter + 2) & ADDRESS_MASK

    def _v(self, index: int) -> int:
        return int(self.registers[index])

    def _set_flag(self, value: int):
        self.registers[FLAG_REGISTER] = value

    def fetch(self, memory: Memory) -> Instruction:
        """Read the word at PC (big-endian) and advance PC by two"""
        address = self.program_counter
        high_byte = memory.read(address)
        low_byte = memory.read(address + 1)
        self.program_counter = (address + 2) & ADDRESS_MASK
        return decode((high_byte << 8) | low_byte, address)

    def execute(self, ins: Instruction, memory: Memory, display: Display,
                keypad: Keypad, timers: Timers) -> bool:
        """
        Execute one decoded instruction.

        Returns True if the instruction was a sprite draw. Raises
        StackOverflow, StackUnderflow or UnknownOpcode on fatal errors.
        """
        family = ins.family
        x, y, kk, nnn = ins.x, ins.y, ins.kk, ins.nnn

        if ins.opcode == 0x00E0:  # CLS
            display.clear()
            self._count('display_clears')

        elif ins.opcode == 0x00EE:  # RET
            if self.stack_pointer == 0:
                raise StackUnderflow(ins.address)
            self.stack_pointer -= 1
            self.program_counter = int(self.stack[self.stack_pointer])
            self._count('returns')

        elif family == 0x0:  # SYS addr, ignored
            pass

        elif family == 0x1:  # JP addr
            self.program_counter = nnn
            self._count('jumps_taken')

        elif family == 0x2:  # CALL addr
            if self.stack_pointer >= STACK_SIZE:
                raise StackOverflow(ins.address)
            self.stack[self.stack_pointer] = self.program_counter
            self.stack_pointer += 1
            self.program_counter = nnn
            self._count('subroutine_calls')

        elif family == 0x3:  # SE Vx, byte
            if self._v(x) == kk:
                self._skip()

        elif family == 0x4:  # SNE Vx, byte
            if self._v(x) != kk:
                self._skip()

        elif family == 0x5:  # SE Vx, Vy
            if ins.n != 0:
                raise UnknownOpcode(ins.opcode, ins.address)
            if self._v(x) == self._v(y):
                self._skip()

        elif family == 0x6:  # LD Vx, byte
            self.registers[x] = kk

        elif family == 0x7:  # ADD Vx, byte (no carry)
            self.registers[x] = (self._v(x) + kk) & 0xFF

        elif family == 0x8:
            self._execute_alu(ins)

        elif family == 0x9:  # SNE Vx, Vy
            if ins.n != 0:
                raise UnknownOpcode(ins.opcode, ins.address)
            if self._v(x) != self._v(y):
                self._skip()

        elif family == 0xA:  # LD I, addr
            self.index_register = nnn

        elif family == 0xB:  # JP V0, addr
            offset = self._v(x) if self.quirks['jumping'] else self._v(0)
            self.program_counter = (nnn + offset) & ADDRESS_MASK
            self._count('jumps_taken')

        elif family == 0xC:  # RND Vx, byte
            self.registers[x] = int(self.rng.integers(0, 256)) & kk
            self._count('random_generations')

        elif family == 0xD:  # DRW Vx, Vy, nibble
            rows = memory.read_block(self.index_register, ins.n)
            collision = display.draw(self._v(x), self._v(y), rows)
            self._set_flag(1 if collision else 0)
            self._count('display_writes')
            if collision:
                self._count('sprite_collisions')
            return True

        elif family == 0xE:
            key = self._v(x) & 0xF
            if kk == 0x9E:  # SKP Vx
                if keypad.is_down(key):
                    self._skip()
            elif kk == 0xA1:  # SKNP Vx
                if not keypad.is_down(key):
                    self._skip()
            else:
                raise UnknownOpcode(ins.opcode, ins.address)
            self._count('key_checks')

        elif family == 0xF:
            self._execute_misc(ins, memory, keypad, timers)

        return False

    def _execute_alu(self, ins: Instruction):
        """8xyN register-register operations. VF is always written last."""
        x, y = ins.x, ins.y
        vx = self._v(x)
        vy = self._v(y)

        if ins.n == 0x0:  # LD Vx, Vy
            self.registers[x] = vy
        elif ins.n == 0x1:  # OR Vx, Vy
            self.registers[x] = vx | vy
            if self.quirks['logic']:
                self._set_flag(0)
        elif ins.n == 0x2:  # AND Vx, Vy
            self.registers[x] = vx & vy
            if self.quirks['logic']:
                self._set_flag(0)
        elif ins.n == 0x3:  # XOR Vx, Vy
            self.registers[x] = vx ^ vy
            if self.quirks['logic']:
                self._set_flag(0)
        elif ins.n == 0x4:  # ADD Vx, Vy
            result = vx + vy
            self.registers[x] = result & 0xFF
            self._set_flag(1 if result > 0xFF else 0)
        elif ins.n == 0x5:  # SUB Vx, Vy
            self.registers[x] = (vx - vy) & 0xFF
            self._set_flag(1 if vx >= vy else 0)  # NOT borrow
        elif ins.n == 0x6:  # SHR Vx {, Vy}
            source = vx if self.quirks['shifting'] else vy
            self.registers[x] = source >> 1
            self._set_flag(source & 0x1)
        elif ins.n == 0x7:  # SUBN Vx, Vy
            self.registers[x] = (vy - vx) & 0xFF
            self._set_flag(1 if vy >= vx else 0)  # NOT borrow
        elif ins.n == 0xE:  # SHL Vx {, Vy}
            source = vx if self.quirks['shifting'] else vy
            self.registers[x] = (source << 1) & 0xFF
            self._set_flag((source >> 7) & 0x1)
        else:
            raise UnknownOpcode(ins.opcode, ins.address)

    def _execute_misc(self, ins: Instruction, memory: Memory, keypad: Keypad,
                      timers: Timers):
        """FxNN timer, keypad, index and memory transfer operations"""
        x, kk = ins.x, ins.kk

        if kk == 0x07:  # LD Vx, DT
            self.registers[x] = timers.get_delay()

        elif kk == 0x0A:  # LD Vx, K
            key = keypad.first_down()
            if key is None:
                # Re-run this instruction on the next step
                self.program_counter = ins.address
                self._count('blocking_key_waits')
            else:
                self.registers[x] = key

        elif kk == 0x15:  # LD DT, Vx
            timers.set_delay(self._v(x))
            self._count('timer_sets')

        elif kk == 0x18:  # LD ST, Vx
            timers.set_sound(self._v(x))
            self._count('timer_sets')
            if self._v(x) > 0:
                self._count('sound_activations')

        elif kk == 0x1E:  # ADD I, Vx
            self.index_register = (self.index_register + self._v(x)) & 0xFFFF

        elif kk == 0x29:  # LD F, Vx
            self.index_register = FONT_START + (self._v(x) & 0xF) * FONT_GLYPH_SIZE

        elif kk == 0x33:  # LD B, Vx
            value = self._v(x)
            memory.write(self.index_register, value // 100)
            memory.write(self.index_register + 1, (value // 10) % 10)
            memory.write(self.index_register + 2, value % 10)
            self._count('memory_writes', 3)

        elif kk == 0x55:  # LD [I], Vx
            for i in range(x + 1):
                memory.write(self.index_register + i, self._v(i))
            self._count('memory_writes', x + 1)
            if self.quirks['memory']:
                self.index_register = (self.index_register + x + 1) & 0xFFFF

        elif kk == 0x65:  # LD Vx, [I]
            for i in range(x + 1):
                self.registers[i] = memory.read(self.index_register + i)
            self._count('memory_reads', x + 1)
            if self.quirks['memory']:
                self.index_register = (self.index_register + x + 1) & 0xFFFF

        else:
            raise UnknownOpcode(ins.opcode, ins.address)
