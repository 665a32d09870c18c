"""
16-key hexadecimal keypad state.

The keypad may be written from a UI thread while the emulator steps on
another, so the cells sit behind a lock and the emulator reads a frozen
snapshot once per instruction.
"""

import threading
from typing import Optional

import numpy as np

from .constants import KEYPAD_SIZE


def _check_key(key: int) -> int:
    if not 0 <= key < KEYPAD_SIZE:
        raise ValueError(f"Key index out of range: {key} (expected 0-F)")
    return key


class Keypad:
    """Pressed/released state for keys 0x0-0xF"""

    def __init__(self):
        self._keys = np.zeros(KEYPAD_SIZE, dtype=bool)
        self._lock = threading.Lock()

    def set_key(self, key: int, down: bool):
        _check_key(key)
        with self._lock:
            self._keys[key] = bool(down)

    def is_down(self, key: int) -> bool:
        _check_key(key)
        with self._lock:
            return bool(self._keys[key])

    def first_down(self) -> Optional[int]:
        """Lowest-numbered key currently down, or None"""
        with self._lock:
            pressed = np.flatnonzero(self._keys)
        return int(pressed[0]) if pressed.size else None

    def release_all(self):
        with self._lock:
            self._keys.fill(False)

    def snapshot(self) -> 'Keypad':
        """Independent copy of the current key states"""
        copy = Keypad()
        with self._lock:
            copy._keys[:] = self._keys
        return copy

