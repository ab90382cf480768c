# app/grid.py
"""
Layout of the landing page "bubble grid".

Avatars sit on a draggable plane in a brick pattern (odd rows shifted by
half a slot). A slot is drawn at full size inside a comfortable band of the
viewport and shrinks/slides out towards the edges; scale and translation are
piecewise-linear in the slot's on-screen position.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

ICON_SIZE = 100
ICON_MARGIN = 80
ROW_COUNT = 10
MIN_COLUMNS = 3
MAX_COLUMNS = 10

# on-screen offset added to every slot position
SCREEN_PADDING = 20
INITIAL_PLANE = (-200, -100)

SCALE_RANGE = (0.0, 1.0, 1.0, 0.0)
TRANSLATE_RANGE = (50.0, 0.0, 0.0, -50.0)

PITCH = ICON_SIZE + ICON_MARGIN

DEFAULT_VIEWPORT = (1920.0, 1080.0)
MAX_VIEWPORT_EXTENT = 20000.0


def viewport_size(args) -> Tuple[float, float]:
    """Width and height from request args.

    Missing or non-finite values fall back to the defaults; the rest are
    clamped to [0, MAX_VIEWPORT_EXTENT].
    """
    size = []
    for name, default in zip(('width', 'height'), DEFAULT_VIEWPORT):
        value = args.get(name, default, type=float)
        if not math.isfinite(value):
            value = default
        size.append(min(MAX_VIEWPORT_EXTENT, max(0.0, value)))
    return size[0], size[1]


def column_count(viewport_width: float) -> int:
    cols = (viewport_width * 1.2) // PITCH
    # clamp before int() so nan and inf land on a bound
    return int(min(MAX_COLUMNS, max(MIN_COLUMNS, cols)))


def slot_offset(row: int, col: int) -> Tuple[float, float]:
    """Position of a slot on the plane."""
    x = col * PITCH + (row % 2) * (PITCH / 2)
    y = row * ICON_SIZE
    return x, y


def screen_range(extent: float) -> Tuple[float, float, float, float]:
    """Control points along one axis: fade in, full size from, full size to, fade out."""
    far = extent - PITCH / 2
    return (-60.0, 80.0, far - 80, far + 60)


def interpolate(value: float, xs, ys) -> float:
    """Piecewise-linear interpolation through (xs, ys), clamped at both ends."""
    if value <= xs[0]:
        return float(ys[0])
    if value >= xs[-1]:
        return float(ys[-1])
    i = bisect_right(xs, value) - 1
    x0, x1 = xs[i], xs[i + 1]
    y0, y1 = ys[i], ys[i + 1]
    if x1 == x0:
        return float(y1)
    return y0 + (y1 - y0) * (value - x0) / (x1 - x0)


def drag_bounds(viewport_width: float) -> dict:
    return {'left': -viewport_width / 5, 'right': 100, 'top': -500, 'bottom': 50}


def slot_transform(plane: Tuple[float, float], offset: Tuple[float, float],
                   viewport: Tuple[float, float]) -> dict:
    """Scale and translation of a slot for a given plane position."""
    sx = plane[0] + offset[0] + SCREEN_PADDING
    sy = plane[1] + offset[1] + SCREEN_PADDING
    x_range = screen_range(viewport[0])
    y_range = screen_range(viewport[1])
    scale = min(interpolate(sx, x_range, SCALE_RANGE),
                interpolate(sy, y_range, SCALE_RANGE))
    return {
        'scale': scale,
        'translate_x': interpolate(sx, x_range, TRANSLATE_RANGE),
        'translate_y': interpolate(sy, y_range, TRANSLATE_RANGE),
    }


@dataclass
class Slot:
    row: int
    col: int
    index: int
    x: float
    y: float
    member: Optional[Any] = None
    is_add: bool = False
    transform: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            'row': self.row,
            'col': self.col,
            'index': self.index,
            'x': self.x,
            'y': self.y,
            'member_id': getattr(self.member, 'id', None),
            'is_add': self.is_add,
            **self.transform,
        }


def add_slot_position(member_count: int, cols: int) -> Tuple[int, int]:
    """Row and column right after the last member."""
    return member_count // cols, member_count % cols


def build_layout(members, width: float, height: float,
                 plane: Tuple[float, float] = INITIAL_PLANE) -> List[Slot]:
    """Member slots (members repeat by index) followed by the add-member slot."""
    cols = column_count(width)
    viewport = (width, height)
    add_at = add_slot_position(len(members), cols)
    slots = []
    if members:
        for row in range(ROW_COUNT):
            for col in range(cols):
                if (row, col) == add_at:
                    continue
                index = row * cols + col
                x, y = slot_offset(row, col)
                slots.append(Slot(row, col, index, x, y,
                                  member=members[index % len(members)],
                                  transform=slot_transform(plane, (x, y), viewport)))
    row, col = add_at
    x, y = slot_offset(row, col)
    slots.append(Slot(row, col, len(members), x, y, is_add=True,
                      transform=slot_transform(plane, (x, y), viewport)))
    return slots
