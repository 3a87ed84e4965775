"""Tests for edge coloring and corner detection."""

import math

import pytest

from glyphfield.core.coloring import (
    angle_between,
    color_contour,
    color_edges,
    find_corners,
    is_corner,
    next_color,
)
from glyphfield.domain import (
    Contour,
    EdgeColor,
    LinearSegment,
    QuadraticSegment,
    Shape,
    Vec2,
    Vertex,
    VertexKind,
)


def polygon(*points: tuple[float, float]) -> Contour:
    """Closed contour of line segments through the given points."""
    contour = Contour()
    for (x0, y0), (x1, y1) in zip(points, points[1:] + points[:1]):
        contour.add_edge(LinearSegment(Vec2(x0, y0), Vec2(x1, y1)))
    return contour


def smooth_circle(segments: int = 8, radius: float = 10.0) -> Contour:
    """Closed contour of quadratic arcs approximating a circle."""
    contour = Contour()
    step = 2 * math.pi / segments
    for i in range(segments):
        a0 = i * step
        a1 = (i + 1) * step
        mid = (a0 + a1) / 2
        ctrl_r = radius / math.cos(step / 2)
        contour.add_edge(
            QuadraticSegment(
                Vec2(radius * math.cos(a0), radius * math.sin(a0)),
                Vec2(ctrl_r * math.cos(mid), ctrl_r * math.sin(mid)),
                Vec2(radius * math.cos(a1), radius * math.sin(a1)),
            )
        )
    return contour


class TestCornerDetection:
    """Tests for angle and corner predicates."""

    def test_angle_between(self) -> None:
        """Test angles between unit directions."""
        assert angle_between(Vec2(1, 0), Vec2(1, 0)) == pytest.approx(0.0)
        assert angle_between(Vec2(1, 0), Vec2(0, 1)) == pytest.approx(math.pi / 2)
        assert angle_between(Vec2(1, 0), Vec2(-1, 0)) == pytest.approx(math.pi)

    def test_right_angle_is_corner(self) -> None:
        """Test that a 90 degree turn is a corner."""
        assert is_corner(Vec2(1, 0), Vec2(0, 1))

    def test_slight_bend_is_not_corner(self) -> None:
        """Test that a small turn is not a corner."""
        assert not is_corner(Vec2(1, 0), Vec2(1, 0.05))

    def test_straight_continuation(self) -> None:
        """Test that collinear edges do not form a corner."""
        assert not is_corner(Vec2(0, 1), Vec2(0, 1))

    def test_threshold(self) -> None:
        """Test that a lower threshold only keeps sharp corners."""
        # 60 degree turn: interior angle 120 degrees
        turn = Vec2(math.cos(math.pi / 3), math.sin(math.pi / 3))
        assert is_corner(Vec2(1, 0), turn, threshold=3.0)
        assert not is_corner(Vec2(1, 0), turn, threshold=math.pi / 2)

    def test_find_corners_square(self) -> None:
        """Test every junction of a square is a corner."""
        square = polygon((0, 0), (10, 0), (10, 10), (0, 10))
        assert find_corners(square) == [0, 1, 2, 3]

    def test_find_corners_smooth(self) -> None:
        """Test a smooth outline has no corners."""
        assert find_corners(smooth_circle()) == []


class TestNextColor:
    """Tests for the color cycle."""

    def test_cycle(self) -> None:
        """Test cyan -> magenta -> yellow -> cyan."""
        assert next_color(EdgeColor.CYAN) == EdgeColor.MAGENTA
        assert next_color(EdgeColor.MAGENTA) == EdgeColor.YELLOW
        assert next_color(EdgeColor.YELLOW) == EdgeColor.CYAN

    def test_outside_cycle(self) -> None:
        """Test colors outside the cycle restart at magenta."""
        assert next_color(EdgeColor.WHITE) == EdgeColor.MAGENTA


class TestColorContour:
    """Tests for per-contour coloring."""

    def test_empty(self) -> None:
        """Test an empty contour is left alone."""
        contour = Contour()
        color_contour(contour)
        assert len(contour) == 0

    def test_single_edge_white(self) -> None:
        """Test a lone edge drives every channel."""
        contour = Contour()
        contour.add_edge(QuadraticSegment(Vec2(0, 0), Vec2(5, 10), Vec2(0, 0), EdgeColor.BLACK))
        color_contour(contour)
        assert contour.edges[0].color == EdgeColor.WHITE

    def test_two_edges_distinct(self) -> None:
        """Test a two-edge contour gets cyan and magenta."""
        contour = Contour()
        contour.add_edge(QuadraticSegment(Vec2(0, 0), Vec2(5, 10), Vec2(10, 0)))
        contour.add_edge(QuadraticSegment(Vec2(10, 0), Vec2(5, -10), Vec2(0, 0)))
        color_contour(contour)
        assert [e.color for e in contour.edges] == [EdgeColor.CYAN, EdgeColor.MAGENTA]

    def test_square(self) -> None:
        """Test a square switches color at every corner."""
        square = polygon((0, 0), (10, 0), (10, 10), (0, 10))
        color_contour(square)
        assert [e.color for e in square.edges] == [
            EdgeColor.CYAN,
            EdgeColor.MAGENTA,
            EdgeColor.YELLOW,
            EdgeColor.CYAN,
        ]

    def test_square_every_channel_used(self) -> None:
        """Test each channel is carried by at least one edge."""
        square = polygon((0, 0), (10, 0), (10, 10), (0, 10))
        color_contour(square)
        colors = [e.color for e in square.edges]
        assert any(c.has_red() for c in colors)
        assert any(c.has_green() for c in colors)
        assert any(c.has_blue() for c in colors)

    def test_adjacent_edges_at_corner_differ(self) -> None:
        """Test the two edges meeting at an interior corner never share a color."""
        pentagon = polygon((0, 0), (10, 0), (13, 8), (5, 13), (-3, 8))
        color_contour(pentagon)
        colors = [e.color for e in pentagon.edges]
        # Junctions 1..4 are not the wrap-around pair
        for i in range(1, len(colors)):
            assert colors[i] != colors[i - 1]

    def test_no_corners_cycles(self) -> None:
        """Test a smooth contour cycles through the two-channel colors."""
        circle = smooth_circle(6)
        color_contour(circle)
        assert [e.color for e in circle.edges] == [
            EdgeColor.CYAN,
            EdgeColor.MAGENTA,
            EdgeColor.YELLOW,
        ] * 2

    def test_starts_at_first_corner(self) -> None:
        """Test coloring begins at the first detected corner."""
        # Bottom side split in two collinear edges
        contour = polygon((0, 0), (5, 0), (10, 0), (10, 10), (0, 10))
        corners = find_corners(contour)
        assert corners == [0, 2, 3, 4]
        color_contour(contour)
        colors = [e.color for e in contour.edges]
        assert colors[0] == colors[1] == EdgeColor.CYAN
        assert colors[2] == EdgeColor.MAGENTA
        assert colors[3] == EdgeColor.YELLOW
        assert colors[4] == EdgeColor.CYAN

    def test_deterministic(self) -> None:
        """Test repeated coloring gives identical results."""
        first = polygon((0, 0), (10, 0), (13, 8), (5, 13), (-3, 8))
        second = polygon((0, 0), (10, 0), (13, 8), (5, 13), (-3, 8))
        color_contour(first)
        color_contour(second)
        assert [e.color for e in first.edges] == [e.color for e in second.edges]


class TestColorEdges:
    """Tests for whole-shape coloring."""

    def test_contours_colored_independently(self) -> None:
        """Test every contour of a shape is colored."""
        vertices = [
            Vertex(VertexKind.MOVE, 0, 0),
            Vertex(VertexKind.LINE, 10, 0),
            Vertex(VertexKind.LINE, 10, 10),
            Vertex(VertexKind.LINE, 0, 0),
            Vertex(VertexKind.MOVE, 20, 0),
            Vertex(VertexKind.QUAD, 20, 0, cx=25, cy=10),
        ]
        shape = Shape.from_vertices(vertices)
        color_edges(shape)
        first, second = shape.contours
        assert [e.color for e in first.edges] == [
            EdgeColor.CYAN,
            EdgeColor.MAGENTA,
            EdgeColor.YELLOW,
        ]
        assert second.edges[0].color == EdgeColor.WHITE


def regular_polygon(sides: int, radius: float = 10.0) -> Contour:
    """Regular polygon whose every junction is a corner."""
    step = 2 * math.pi / sides
    return polygon(
        *[(radius * math.cos(i * step), radius * math.sin(i * step)) for i in range(sides)]
    )


class TestWrapAround:
    """Tests for the colors meeting at the contour's start corner."""

    @pytest.mark.parametrize("sides", [4, 7])
    def test_shared_when_one_past_multiple_of_three(self, sides: int) -> None:
        """Test the last and first edges share a color for 4 and 7 corners."""
        contour = regular_polygon(sides)
        color_contour(contour)
        assert contour.edges[-1].color == contour.edges[0].color

    @pytest.mark.parametrize("sides", [3, 5, 6, 8])
    def test_distinct_otherwise(self, sides: int) -> None:
        """Test the last and first edges differ for other corner counts."""
        contour = regular_polygon(sides)
        color_contour(contour)
        assert contour.edges[-1].color != contour.edges[0].color
