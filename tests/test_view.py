"""
Tests for wurm/view.py - cell to screen geometry.
"""

from wurm.view import cell_rect


def test_cell_rect_origin():
    rect = cell_rect((0, 0), cell_size=10)
    assert (rect.x, rect.y, rect.w, rect.h) == (0, 0, 9, 9)


def test_cell_rect_scales_with_cell_size():
    rect = cell_rect((3, 7), cell_size=10)
    assert rect.topleft == (30, 70)
    assert rect.size == (9, 9)


def test_cell_rect_offset():
    rect = cell_rect((2, 1), cell_size=8, offset=(0, 20))
    assert rect.topleft == (16, 28)
    assert rect.size == (7, 7)
