import numpy as np

from chip8core import DISPLAY_HEIGHT, DISPLAY_WIDTH, Display


def test_new_display_is_blank():
    display = Display()
    assert not display.snapshot().any()
    assert display.snapshot().shape == (DISPLAY_HEIGHT, DISPLAY_WIDTH)


def test_draw_without_collision():
    display = Display()
    collision = display.draw(0, 0, [0b11110000])
    assert collision is False
    assert [display.pixel(x, 0) for x in range(8)] == [True] * 4 + [False] * 4


def test_draw_collision_erases_pixel():
    display = Display()
    display.set_pixel(0, 0, True)
    collision = display.draw(0, 0, [0b10000000])
    assert collision is True
    assert display.pixel(0, 0) is False


def test_redraw_erases_and_reports_collision():
    display = Display()
    assert display.draw(5, 5, [0x80]) is False
    assert display.draw(5, 5, [0x80]) is True
    assert display.lit_count() == 0


def test_multi_row_sprite():
    display = Display()
    display.draw(0, 0, [0b11110000, 0b00001111])
    assert display.pixel(3, 0) and not display.pixel(4, 0)
    assert not display.pixel(3, 1) and display.pixel(4, 1) and display.pixel(7, 1)


def test_start_coordinates_wrap():
    display = Display()
    display.draw(DISPLAY_WIDTH + 2, DISPLAY_HEIGHT + 3, [0x80])
    assert display.pixel(2, 3)


def test_sprite_clipped_at_right_edge():
    display = Display()
    display.draw(62, 0, [0xFF])
    assert display.pixel(62, 0) and display.pixel(63, 0)
    assert display.lit_count() == 2


def test_sprite_clipped_at_bottom_edge():
    display = Display()
    display.draw(0, 30, [0x80, 0x80, 0x80, 0x80])
    assert display.pixel(0, 30) and display.pixel(0, 31)
    assert display.lit_count() == 2


def test_clipped_bits_do_not_collide():
    display = Display()
    display.set_pixel(0, 0, True)
    assert display.draw(63, 0, [0xC0]) is False
    assert display.pixel(0, 0)


def test_wrapping_when_clipping_disabled():
    display = Display(clipping=False)
    display.draw(62, 0, [0xF0])
    assert display.pixel(62, 0) and display.pixel(63, 0)
    assert display.pixel(0, 0) and display.pixel(1, 0)


def test_clear():
    display = Display()
    display.draw(10, 10, [0xFF])
    display.clear()
    assert display.lit_count() == 0


def test_snapshot_is_a_copy():
    display = Display()
    snap = display.snapshot()
    snap[0, 0] = True
    assert not display.pixel(0, 0)


def test_to_buffer():
    display = Display()
    display.set_pixel(0, 0, True)
    display.set_pixel(63, 31, True)
    buffer = display.to_buffer()
    assert buffer.shape == (DISPLAY_WIDTH * DISPLAY_HEIGHT,)
    assert buffer[0] == 0xFFFFFF
    assert buffer[1] == 0x000000
    assert buffer[-1] == 0xFFFFFF


def test_to_image_scales():
    display = Display()
    display.set_pixel(1, 0, True)
    image = display.to_image(scale=2)
    assert image.shape == (DISPLAY_HEIGHT * 2, DISPLAY_WIDTH * 2)
    assert image.dtype == np.uint8
    assert image[0, 2] == 255 and image[1, 3] == 255
    assert image[0, 0] == 0
