"""Unit tests for the obstacle router."""

from unittest.mock import patch

import pytest

from arrowroute.core.router import ObstacleRouter, find_path_around_obstacles
from arrowroute.domain import Bounds, Point


@pytest.fixture
def router() -> ObstacleRouter:
    """Create a router with the default margin."""
    return ObstacleRouter(margin=15.0)


class TestObstacleRouter:
    """Tests for ObstacleRouter."""

    def test_clear_segment_is_direct(self, router):
        """Test an unobstructed segment returns exactly its endpoints."""
        result = router.route(Point(0, 0), Point(100, 0), [Bounds(200, -10, 220, 10)])
        assert result.points == [Point(0, 0), Point(100, 0)]
        assert result.is_direct
        assert not result.fell_back

    def test_no_obstacles(self, router):
        """Test routing without obstacles."""
        assert router.route(Point(0, 0), Point(10, 10), []).points == [Point(0, 0), Point(10, 10)]

    def test_routes_around_obstacle(self, router):
        """Test a blocked segment detours above or below."""
        result = router.route(Point(0, 0), Point(100, 0), [Bounds(40, -10, 60, 10)])

        assert result.points[0] == Point(0, 0)
        assert result.points[-1] == Point(100, 0)
        assert len(result.points) == 3
        assert abs(result.points[1].y) == 25
        assert result.raw_node_count >= 3

    def test_endpoints_preserved(self, router):
        """Test endpoints survive routing through several obstacles."""
        obstacles = [
            Bounds(40, -40, 60, 40),
            Bounds(120, -10, 140, 60),
            Bounds(80, -80, 100, -50),
        ]
        start, end = Point(0, 0), Point(200, 10)
        result = router.route(start, end, obstacles)
        assert result.points[0] == start
        assert result.points[-1] == end

    def test_start_inside_obstacle(self, router):
        """Test the container of the start is ignored."""
        container = Bounds(40, -10, 60, 10)
        result = router.route(Point(50, 0), Point(200, 0), [container])

        assert result.obstacles == []
        assert result.points == [Point(50, 0), Point(200, 0)]

    def test_fallback_when_search_fails(self, router):
        """Test an empty search result falls back to the direct segment."""
        with patch("arrowroute.core.router.find_node_path", return_value=[]):
            result = router.route(Point(0, 0), Point(100, 0), [Bounds(40, -10, 60, 10)])

        assert result.points == [Point(0, 0), Point(100, 0)]
        assert result.fell_back

    def test_deterministic(self, router):
        """Test identical inputs produce identical routes."""
        obstacles = [Bounds(40, -10, 60, 10), Bounds(70, 20, 90, 40)]
        first = router.route(Point(0, 0), Point(150, 0), obstacles)
        second = router.route(Point(0, 0), Point(150, 0), obstacles)
        assert first.points == second.points


class TestFindPathAroundObstacles:
    """Tests for the functional entry point."""

    def test_matches_router(self):
        """Test the function returns the router's points."""
        obstacles = [Bounds(40, -10, 60, 10)]
        expected = ObstacleRouter(15.0).route(Point(0, 0), Point(100, 0), obstacles).points
        assert find_path_around_obstacles(Point(0, 0), Point(100, 0), obstacles) == expected

    def test_margin_changes_clearance(self):
        """Test a larger margin pushes the detour farther out."""
        obstacles = [Bounds(40, -10, 60, 10)]
        path = find_path_around_obstacles(Point(0, 0), Point(100, 0), obstacles, margin=30)
        assert abs(path[1].y) == 40
