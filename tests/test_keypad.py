import pytest

from chip8core import Keypad


def test_new_keypad_has_no_keys_down():
    keypad = Keypad()
    assert not any(keypad.is_down(k) for k in range(16))
    assert keypad.first_down() is None


def test_set_and_release_key():
    keypad = Keypad()
    keypad.set_key(0x5, True)
    assert keypad.is_down(0x5)
    assert not keypad.is_down(0x6)
    keypad.set_key(0x5, False)
    assert not keypad.is_down(0x5)


def test_first_down_is_lowest_pressed():
    keypad = Keypad()
    keypad.set_key(0xC, True)
    keypad.set_key(0x7, True)
    assert keypad.first_down() == 0x7


def test_snapshot_is_independent():
    keypad = Keypad()
    keypad.set_key(0x1, True)
    snap = keypad.snapshot()
    keypad.set_key(0x1, False)
    keypad.set_key(0x2, True)
    assert snap.is_down(0x1)
    assert not snap.is_down(0x2)


def test_release_all():
    keypad = Keypad()
    for k in (0, 3, 0xF):
        keypad.set_key(k, True)
    keypad.release_all()
    assert keypad.first_down() is None


@pytest.mark.parametrize("key", [-1, 16, 0x20])
def test_out_of_range_key_rejected(key):
    keypad = Keypad()
    with pytest.raises(ValueError):
        keypad.set_key(key, True)
    with pytest.raises(ValueError):
        keypad.is_down(key)
