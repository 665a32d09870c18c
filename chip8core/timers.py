"""
Delay and sound timers. Both count down once per tick and stop at zero.
"""


class Timers:
    """The CHIP-8 delay/sound timer pair"""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        """Advance both timers by one 60 Hz period"""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def get_delay(self) -> int:
        return self.delay

    def set_delay(self, value: int):
        self.delay = value & 0xFF

    def get_sound(self) -> int:
        return self.sound

    def set_sound(self, value: int):
        self.sound = value & 0xFF

    def sound_active(self) -> bool:
        """True while the buzzer should sound"""
        return self.sound > 0

    def reset(self):
        self.delay = 0
        self.sound = 0
