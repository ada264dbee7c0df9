"""Input bitmask, gamepad accumulator and keyboard auto-repeat.

The host samples its input source each frame into a bitmask:

    LEFT = bit 0, UP (rotate) = bit 1, RIGHT = bit 2, DOWN = bit 3,
    ESC (reset) = bit 4

Other bits are ignored by the engine.
"""

from dataclasses import dataclass, fields
from enum import IntFlag

REPEAT_RATE_SLOW = 200
REPEAT_RATE_FAST = 100
REPEAT_RATE_RAPID = 40


class Key(IntFlag):
    NONE = 0
    LEFT = 1 << 0
    UP = 1 << 1
    RIGHT = 1 << 2
    DOWN = 1 << 3
    ESC = 1 << 4


# Evaluation order and the repeat rate used once each key is held.
REPEAT_KEYS = (
    (Key.LEFT, REPEAT_RATE_FAST),
    (Key.RIGHT, REPEAT_RATE_FAST),
    (Key.UP, REPEAT_RATE_FAST),
    (Key.DOWN, REPEAT_RATE_RAPID),
)


@dataclass
class GamepadState:
    """Held/released state of the five game buttons."""

    left: int = 0
    up: int = 0
    right: int = 0
    down: int = 0
    esc: int = 0

    def to_mask(self) -> int:
        mask = Key.NONE
        for f in fields(self):
            if getattr(self, f.name):
                mask |= Key[f.name.upper()]
        return int(mask)

    @classmethod
    def from_mask(cls, mask: int) -> "GamepadState":
        return cls(**{
            f.name: int(bool(mask & Key[f.name.upper()])) for f in fields(cls)
        })

    def press(self, button: str):
        setattr(self, button, 1)

    def release(self, button: str):
        setattr(self, button, 0)

    def clear(self):
        """Reset all buttons to unpressed."""
        for f in fields(self):
            setattr(self, f.name, 0)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) == 0 for f in fields(self))


class KeyRepeat:
    """Edge detection plus delayed auto-repeat for the four direction keys.

    A key fires on the frame it goes down and again each time the shared
    repeat deadline passes while it stays held. The first repeat waits
    ``REPEAT_RATE_SLOW``; later ones use the per-key rate from
    ``REPEAT_KEYS``. All four keys share one deadline.
    """

    def __init__(self, slow: int = REPEAT_RATE_SLOW):
        self.slow = slow
        self.old_keys = 0
        self.next_time = 0

    def update(self, keys: int, time: int) -> Key:
        """Return the keys that fire this frame and remember ``keys``."""
        fired = Key.NONE
        for key, rate in REPEAT_KEYS:
            if not keys & key:
                continue
            if not self.old_keys & key:
                fired |= key
                self.next_time = time + self.slow
            elif time > self.next_time:
                fired |= key
                self.next_time = time + rate
        self.old_keys = keys
        return fired
