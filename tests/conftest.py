import pytest

from chip8core import Chip8Emulator, PROGRAM_START


@pytest.fixture
def emu():
    return Chip8Emulator(seed=1234)


def words(*opcodes):
    """Assemble 16-bit instruction words into a big-endian image"""
    out = bytearray()
    for op in opcodes:
        out += bytes([(op >> 8) & 0xFF, op & 0xFF])
    return bytes(out)


@pytest.fixture
def run_program(emu):
    """Load the given instruction words and execute that many steps"""
    def _run(*opcodes, steps=None):
        emu.load_rom(words(*opcodes))
        for _ in range(len(opcodes) if steps is None else steps):
            emu.step()
        return emu
    return _run
