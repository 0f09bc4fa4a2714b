import math

import pytest

from hex_arena.coords import (
    ORIGIN,
    AxialCoordinate,
    axial_to_world,
    hex_cell_count,
    hex_distance,
    hex_range,
)


def test_derived_s_coordinate() -> None:
    coord = AxialCoordinate(2, -5)
    assert coord.s == 3
    assert coord.q + coord.r + coord.s == 0


def test_coordinates_are_hashable_values() -> None:
    assert AxialCoordinate(1, 2) == AxialCoordinate(1, 2)
    assert len({AxialCoordinate(1, 2), AxialCoordinate(1, 2)}) == 1


@pytest.mark.parametrize(
    "q, r, size, expected",
    [
        (0, 0, 3.0, (0.0, 0.0)),
        (1, 0, 1.0, (math.sqrt(3), 0.0)),
        (0, 1, 1.0, (math.sqrt(3) / 2, 1.5)),
        (-2, 1, 3.0, (3.0 * (-2 * math.sqrt(3) + math.sqrt(3) / 2), 4.5)),
    ],
)
def test_axial_to_world(
    q: int, r: int, size: float, expected: tuple[float, float]
) -> None:
    x, z = axial_to_world(q, r, size)
    assert x == pytest.approx(expected[0])
    assert z == pytest.approx(expected[1])


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((0, 0), (0, 0), 0),
        ((0, 0), (1, 0), 1),
        ((0, 0), (1, -1), 1),
        ((0, 0), (2, -1), 2),
        ((3, -3), (-3, 0), 6),
        ((5, -5), (10, -10), 5),
        ((-1, 2), (2, -1), 3),
    ],
)
def test_hex_distance(
    a: tuple[int, int], b: tuple[int, int], expected: int
) -> None:
    pa, pb = AxialCoordinate(*a), AxialCoordinate(*b)
    assert hex_distance(pa, pb) == expected
    assert hex_distance(pb, pa) == expected


def test_radius_one_neighbors() -> None:
    coords = set(hex_range(1))
    assert coords == {
        ORIGIN,
        AxialCoordinate(1, 0),
        AxialCoordinate(1, -1),
        AxialCoordinate(0, -1),
        AxialCoordinate(-1, 0),
        AxialCoordinate(-1, 1),
        AxialCoordinate(0, 1),
    }


@pytest.mark.parametrize("radius", list(range(0, 13)))
def test_hex_range_count_and_bounds(radius: int) -> None:
    coords = list(hex_range(radius))
    assert len(coords) == 3 * radius * (radius + 1) + 1 == hex_cell_count(radius)
    assert len(set(coords)) == len(coords)
    assert all(hex_distance(c, ORIGIN) <= radius for c in coords)


def test_hex_cell_count_rejects_negative() -> None:
    with pytest.raises(ValueError):
        hex_cell_count(-1)
