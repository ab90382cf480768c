from types import SimpleNamespace

import pytest
from werkzeug.datastructures import MultiDict

from app.grid import (
    DEFAULT_VIEWPORT, ICON_SIZE, MAX_COLUMNS, MAX_VIEWPORT_EXTENT, MIN_COLUMNS, PITCH, ROW_COUNT,
    add_slot_position, build_layout, column_count, drag_bounds, interpolate,
    screen_range, slot_offset, slot_transform, viewport_size,
)


def people(n):
    return [SimpleNamespace(id=i, nickname=f'n{i}') for i in range(1, n + 1)]


@pytest.mark.parametrize('width,cols', [(375, 3), (900, 6), (1000, 6), (1920, 10), (100000, 10), (0, 3)])
def test_column_count_is_clamped(width, cols):
    assert column_count(width) == cols
    assert MIN_COLUMNS <= column_count(width) <= MAX_COLUMNS


def test_odd_rows_are_shifted_by_half_a_slot():
    assert slot_offset(0, 0) == (0, 0)
    assert slot_offset(0, 2) == (2 * PITCH, 0)
    assert slot_offset(1, 2) == (2 * PITCH + PITCH / 2, ICON_SIZE)
    assert slot_offset(2, 1) == (PITCH, 2 * ICON_SIZE)


def test_screen_range_control_points():
    assert screen_range(1000) == (-60.0, 80.0, 830.0, 970.0)


def test_interpolate_is_linear_and_clamped():
    xs = (-60.0, 80.0, 830.0, 970.0)
    ys = (0.0, 1.0, 1.0, 0.0)
    assert interpolate(-500, xs, ys) == 0.0
    assert interpolate(5000, xs, ys) == 0.0
    assert interpolate(10, xs, ys) == pytest.approx(0.5)
    assert interpolate(400, xs, ys) == 1.0
    assert interpolate(900, xs, ys) == pytest.approx(0.5)


def test_slot_inside_comfort_band_is_full_size():
    t = slot_transform((0, 0), (200, 200), (1000, 1000))
    assert t == {'scale': 1.0, 'translate_x': 0.0, 'translate_y': 0.0}


def test_slot_past_left_edge_is_hidden_and_pushed_right():
    t = slot_transform((-90, 0), (0, 200), (1000, 1000))
    assert t['scale'] == 0.0
    assert t['translate_x'] == 50.0


def test_scale_uses_the_smaller_axis():
    # x is comfortable, y halfway into the bottom fade
    t = slot_transform((0, 0), (200, 880), (1000, 1000))
    assert t['scale'] == pytest.approx(0.5)


def test_drag_bounds_depend_on_width():
    assert drag_bounds(1000) == {'left': -200, 'right': 100, 'top': -500, 'bottom': 50}


def test_layout_fills_rows_and_reserves_add_slot():
    members = people(3)
    slots = build_layout(members, 900, 800)
    cols = column_count(900)

    assert len(slots) == ROW_COUNT * cols
    add = slots[-1]
    assert add.is_add and add.member is None
    assert (add.row, add.col) == add_slot_position(3, cols) == (0, 3)
    assert all(not s.is_add for s in slots[:-1])
    assert (0, 3) not in [(s.row, s.col) for s in slots[:-1]]


def test_members_repeat_by_slot_index():
    members = people(3)
    slots = build_layout(members, 900, 800)
    for s in slots[:-1]:
        assert s.member is members[s.index % 3]


def test_layout_without_members_has_only_add_slot():
    slots = build_layout([], 1200, 800)
    assert len(slots) == 1
    assert slots[0].is_add
    assert (slots[0].row, slots[0].col) == (0, 0)


def test_add_slot_beyond_grid_keeps_every_member_slot():
    cols = column_count(900)
    members = people(ROW_COUNT * cols)
    slots = build_layout(members, 900, 800)
    assert len(slots) == ROW_COUNT * cols + 1
    assert (slots[-1].row, slots[-1].col) == (ROW_COUNT, 0)


def test_slot_to_dict():
    slots = build_layout(people(2), 900, 800)
    d = slots[0].to_dict()
    assert d['member_id'] == 1
    assert d['is_add'] is False
    assert {'scale', 'translate_x', 'translate_y', 'row', 'col', 'x', 'y'} <= set(d)
    assert slots[-1].to_dict()['member_id'] is None


@pytest.mark.parametrize('width', [float('nan'), float('inf'), float('-inf'), 1e308])
def test_column_count_survives_extreme_widths(width):
    assert MIN_COLUMNS <= column_count(width) <= MAX_COLUMNS


def test_viewport_size_falls_back_on_bad_values():
    args = MultiDict({'width': 'nan', 'height': 'inf'})
    assert viewport_size(args) == DEFAULT_VIEWPORT
    assert viewport_size(MultiDict({'width': 'abc'})) == DEFAULT_VIEWPORT
    assert viewport_size(MultiDict({'width': '1e308', 'height': '-5'})) == (MAX_VIEWPORT_EXTENT, 0.0)
    assert viewport_size(MultiDict({'width': '900', 'height': '800'})) == (900.0, 800.0)
