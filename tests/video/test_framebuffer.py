"""Tests for the monochrome framebuffer."""

from __future__ import annotations

import pytest

from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer


def test_dimensions():
    fb = Framebuffer()

    assert (fb.width, fb.height) == (DISPLAY_WIDTH, DISPLAY_HEIGHT) == (64, 32)
    assert fb.lit_count() == 0


def test_draw_sets_bits_msb_first():
    fb = Framebuffer()

    collision = fb.draw_sprite(2, 3, [0b10100000])

    assert collision is False
    assert fb.get_pixel(2, 3) == 1
    assert fb.get_pixel(3, 3) == 0
    assert fb.get_pixel(4, 3) == 1


def test_xor_collision():
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0b11000000])

    collision = fb.draw_sprite(1, 0, [0b11000000])

    assert collision is True
    assert fb.get_pixel(0, 0) == 1
    assert fb.get_pixel(1, 0) == 0
    assert fb.get_pixel(2, 0) == 1


def test_vertical_wrap():
    fb = Framebuffer()

    fb.draw_sprite(0, 31, [0x80, 0x80])

    assert fb.get_pixel(0, 31) == 1
    assert fb.get_pixel(0, 0) == 1


def test_origin_wraps():
    fb = Framebuffer()

    fb.draw_sprite(64 + 5, 32 + 2, [0x80])

    assert fb.get_pixel(5, 2) == 1


def test_clear_and_revision():
    fb = Framebuffer()
    start = fb.revision
    fb.draw_sprite(0, 0, [0xFF])
    fb.clear()

    assert fb.lit_count() == 0
    assert fb.revision == start + 2


def test_rows_and_snapshot():
    fb = Framebuffer(width=4, height=2)
    fb.draw_sprite(0, 1, [0b01000000])

    assert fb.rows() == [(0, 0, 0, 0), (0, 1, 0, 0)]
    assert fb.snapshot() == bytes([0, 0, 0, 0, 0, 1, 0, 0])


def test_get_pixel_bounds():
    with pytest.raises(IndexError):
        Framebuffer().get_pixel(64, 0)
