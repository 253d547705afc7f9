"""
Arc geometry for circular gauges.

Angles are in degrees measured clockwise from 12 o'clock, so 0 points up,
90 points right and -90 points left. A gauge may span any arc segment,
including more than a half circle, and can be mirrored horizontally for the
right-hand gauge of a symmetric pair.

Everything here is a pure function of its inputs; it is safe to call on every
frame and needs no rendering surface.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QPainterPath

# Tick layout, measured inward from the arc radius
TICK_INNER_OFFSET = 12.0
TICK_OUTER_OFFSET = 4.0
MAJOR_TICK_EVERY = 3
MAJOR_TICK_STROKE = 2
MINOR_TICK_STROKE = 1


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class ArcPath:
    """
    Drawable arc between two points on a circle.

    The arc is described back to front: ``start`` sits at the gauge's end
    angle and ``end`` at its start angle, matching SVG path conventions
    where sweep flag 0 draws from ``start`` to ``end`` counter-clockwise.
    """

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    start: Point
    end: Point
    large_arc: int  # 1 when the arc spans more than 180 degrees
    sweep: int = 0  # 1 for reversed or mirrored arcs, not both
    mirrored: bool = False

    def to_svg(self) -> str:
        """Render as an SVG path ``d`` attribute."""
        return (
            f"M {_num(self.start.x)} {_num(self.start.y)} "
            f"A {_num(self.radius)} {_num(self.radius)} 0 {self.large_arc} {self.sweep} "
            f"{_num(self.end.x)} {_num(self.end.y)}"
        )

    def to_painter_path(self) -> QPainterPath:
        """
        Build the same arc as a QPainterPath.

        Qt measures angles counter-clockwise from 3 o'clock, so a gauge
        angle maps to ``90 - angle`` (``90 + angle`` when mirrored).
        """
        sign = -1.0 if self.mirrored else 1.0
        r = self.radius
        rect = QRectF(self.center.x - r, self.center.y - r, 2 * r, 2 * r)

        path = QPainterPath()
        path.moveTo(QPointF(self.start.x, self.start.y))
        path.arcTo(
            rect,
            90.0 - sign * self.end_angle,
            sign * (self.end_angle - self.start_angle),
        )
        return path


@dataclass(frozen=True)
class TickMark:
    """One tick line on the gauge face."""

    index: int
    angle: float  # unmirrored gauge angle
    value: float  # reading this tick represents
    inner: Point
    outer: Point
    active: bool  # at or below the current reading
    major: bool  # drawn heavier (every third tick)

    @property
    def stroke_width(self) -> int:
        return MAJOR_TICK_STROKE if self.major else MINOR_TICK_STROKE

    def to_svg(self) -> str:
        return (
            f"M {_num(self.inner.x)} {_num(self.inner.y)} "
            f"L {_num(self.outer.x)} {_num(self.outer.y)}"
        )


@dataclass(frozen=True)
class GaugeSpec:
    """Inputs for one gauge render."""

    value: float
    max_value: float
    start_angle: float = -225.0
    end_angle: float = 45.0
    tick_count: int = 13
    size: float = 200.0  # square canvas edge
    stroke_width: float = 8.0
    mirrored: bool = False

    @property
    def center(self) -> Point:
        c = self.size / 2
        return Point(c, c)

    @property
    def radius(self) -> float:
        return (self.size - self.stroke_width * 2) / 2

    @property
    def clamped_value(self) -> float:
        return clamp_value(self.value, self.max_value)


@dataclass(frozen=True)
class GaugeRender:
    """Everything a drawing layer needs for a two-tone gauge."""

    background_arc_path: str
    active_arc_path: Optional[str]  # None when the reading is zero
    ticks: List[TickMark] = field(default_factory=list)
    angle: float = 0.0
    fraction: float = 0.0


def _num(v: float) -> str:
    # Adding 0.0 folds -0.0 into 0.0
    return f"{round(v, 3) + 0.0:g}"


def _mirror(point: Point, center: Point) -> Point:
    return Point(2 * center.x - point.x, point.y)


def clamp_value(value: float, max_value: float) -> float:
    """Clamp a reading to ``[0, max_value]``."""
    if max_value <= 0:
        return 0.0
    return max(0.0, min(max_value, value))


def polar_to_cartesian(
    center: Tuple[float, float], radius: float, angle_deg: float
) -> Point:
    """
    Convert a gauge angle to canvas coordinates.

    Args:
        center: (x, y) of the circle center
        radius: Circle radius
        angle_deg: Degrees clockwise from 12 o'clock

    Returns:
        Point on the circle (canvas y grows downward)
    """
    rad = math.radians(angle_deg - 90.0)
    cx, cy = center
    return Point(cx + radius * math.cos(rad), cy + radius * math.sin(rad))


def describe_arc(
    center: Tuple[float, float],
    radius: float,
    start_angle: float,
    end_angle: float,
    mirrored: bool = False,
) -> ArcPath:
    """
    Describe the arc from start_angle to end_angle.

    The arc runs clockwise, or counter-clockwise when end_angle is less
    than start_angle.

    Args:
        center: (x, y) of the circle center
        radius: Circle radius
        start_angle: Arc start, degrees clockwise from 12 o'clock
        end_angle: Arc end, degrees clockwise from 12 o'clock
        mirrored: Reflect horizontally about the center

    Returns:
        ArcPath with large_arc set when the span exceeds 180 degrees
    """
    c = Point(*center)
    start = polar_to_cartesian(c, radius, end_angle)
    end = polar_to_cartesian(c, radius, start_angle)
    if mirrored:
        start = _mirror(start, c)
        end = _mirror(end, c)

    return ArcPath(
        center=c,
        radius=radius,
        start_angle=start_angle,
        end_angle=end_angle,
        start=start,
        end=end,
        large_arc=1 if abs(end_angle - start_angle) > 180 else 0,
        sweep=1 if (end_angle < start_angle) != mirrored else 0,
        mirrored=mirrored,
    )


def current_angle(
    value: float, max_value: float, start_angle: float, end_angle: float
) -> float:
    """
    Angle of the needle for a reading.

    The value is clamped to ``[0, max_value]`` first. A zero max_value
    returns start_angle rather than dividing by zero.
    """
    if max_value == 0:
        return start_angle
    clamped = clamp_value(value, max_value)
    return start_angle + clamped / max_value * (end_angle - start_angle)


def generate_ticks(spec: GaugeSpec) -> List[TickMark]:
    """
    Evenly spaced ticks over the whole arc, both ends included.

    A tick is active when the value it represents is at or below the
    clamped reading; every third tick (index 0, 3, 6, ...) is major.
    """
    count = spec.tick_count
    if count <= 0:
        return []

    center = spec.center
    inner_r = spec.radius - TICK_INNER_OFFSET
    outer_r = spec.radius - TICK_OUTER_OFFSET
    span = spec.end_angle - spec.start_angle
    reading = spec.clamped_value

    ticks: List[TickMark] = []
    for i in range(count):
        t = i / (count - 1) if count > 1 else 0.0
        angle = spec.start_angle + t * span
        tick_value = t * max(spec.max_value, 0.0)

        inner = polar_to_cartesian(center, inner_r, angle)
        outer = polar_to_cartesian(center, outer_r, angle)
        if spec.mirrored:
            inner = _mirror(inner, center)
            outer = _mirror(outer, center)

        ticks.append(
            TickMark(
                index=i,
                angle=angle,
                value=tick_value,
                inner=inner,
                outer=outer,
                active=tick_value <= reading,
                major=i % MAJOR_TICK_EVERY == 0,
            )
        )
    return ticks


def render(spec: GaugeSpec) -> GaugeRender:
    """Compute background arc, active arc and ticks for a gauge."""
    center = spec.center
    radius = spec.radius
    angle = current_angle(spec.value, spec.max_value, spec.start_angle, spec.end_angle)
    reading = spec.clamped_value

    background = describe_arc(
        center, radius, spec.start_angle, spec.end_angle, mirrored=spec.mirrored
    )
    active = None
    if reading > 0:
        active = describe_arc(
            center, radius, spec.start_angle, angle, mirrored=spec.mirrored
        ).to_svg()

    return GaugeRender(
        background_arc_path=background.to_svg(),
        active_arc_path=active,
        ticks=generate_ticks(spec),
        angle=angle,
        fraction=reading / spec.max_value if spec.max_value > 0 else 0.0,
    )
