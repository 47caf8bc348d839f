"""Tests for projecting coordinates onto the density grid."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from postmap.boundary import calculate_boundary
from postmap.density import build_density_grid, project
from postmap.errors import InvalidInputError
from postmap.models import BoundingBox, Coordinate


BOX = BoundingBox(0.0, 10.0, 0.0, 10.0)


def nonzero_cells(grid):
    return {(r, c): v for r, row in enumerate(grid) for c, v in enumerate(row) if v}


def test_projection_corners():
    # south-west corner is the bottom-left cell, north-east the top-right
    assert project(Coordinate(0.0, 0.0), BOX, 11, 11) == (10, 0)
    assert project(Coordinate(10.0, 10.0), BOX, 11, 11) == (0, 10)


def test_projection_floors_fractions():
    # 0.55 * 10 = 5.5 -> 5
    assert project(Coordinate(5.5, 5.5), BOX, 11, 11) == (5, 5)


def test_projection_outside_grid_returns_none():
    assert project(Coordinate(-1.0, 5.0), BOX, 11, 11) is None
    assert project(Coordinate(5.0, 11.0), BOX, 11, 11) is None


def test_zero_range_axes_project_to_edge():
    box = BoundingBox(51.5, 51.5, -0.1, -0.1)
    assert project(Coordinate(51.5, -0.1), box, 20, 10) == (9, 0)


def test_center_blob_radius_one():
    grid = build_density_grid([Coordinate(5.0, 5.0)], BOX, 11, 11, radius=1)
    assert nonzero_cells(grid) == {
        (5, 5): 2,
        (4, 5): 1, (6, 5): 1, (5, 4): 1, (5, 6): 1,
    }


def test_center_blob_radius_two():
    grid = build_density_grid([Coordinate(5.0, 5.0)], BOX, 11, 11, radius=2)
    cells = nonzero_cells(grid)

    assert cells[(5, 5)] == 3
    assert cells[(3, 5)] == 1
    assert cells[(4, 4)] == 1
    assert cells[(4, 5)] == 2
    # diamond of Manhattan radius 2 has 13 cells
    assert len(cells) == 13
    assert (3, 4) not in cells


def test_radius_zero_marks_single_cell():
    grid = build_density_grid([Coordinate(5.0, 5.0)], BOX, 11, 11, radius=0)
    assert nonzero_cells(grid) == {(5, 5): 1}


def test_blob_is_clipped_at_grid_edge():
    grid = build_density_grid([Coordinate(0.0, 0.0)], BOX, 11, 11, radius=1)
    assert nonzero_cells(grid) == {(10, 0): 2, (9, 0): 1, (10, 1): 1}


def test_overlapping_blobs_accumulate():
    coords = [Coordinate(5.0, 5.0), Coordinate(5.0, 6.0)]
    grid = build_density_grid(coords, BOX, 11, 11, radius=1)
    cells = nonzero_cells(grid)

    assert cells[(5, 5)] == 2 + 1
    assert cells[(5, 6)] == 1 + 2
    assert cells[(5, 4)] == 1
    assert cells[(5, 7)] == 1


def test_identical_coordinates_stack_in_one_cell():
    coords = [Coordinate(51.5, -0.1)] * 5
    box = calculate_boundary(coords)
    grid = build_density_grid(coords, box, 20, 10)
    cells = nonzero_cells(grid)

    assert cells == {(9, 0): 10, (8, 0): 5, (9, 1): 5}


def test_grid_shape():
    grid = build_density_grid([Coordinate(1.0, 1.0)], BOX, 30, 7)
    assert len(grid) == 7
    assert all(len(row) == 30 for row in grid)


def test_invalid_grid_arguments():
    with pytest.raises(InvalidInputError):
        build_density_grid([Coordinate(1.0, 1.0)], BOX, 0, 5)
    with pytest.raises(InvalidInputError):
        build_density_grid([Coordinate(1.0, 1.0)], BOX, 10, 5, radius=-1)
