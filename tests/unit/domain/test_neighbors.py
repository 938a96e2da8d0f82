"""Tests for the neighbor finder."""

import pytest

from geosearch.domain.geohash.codec import decode, encode
from geosearch.domain.geohash.neighbors import DIRECTIONS, neighbors

NORTH, NORTH_EAST, EAST, SOUTH_EAST, SOUTH, SOUTH_WEST, WEST, NORTH_WEST = range(8)


def test_neighbors_known_cell_clockwise_from_north():
    assert neighbors("dqcjq") == [
        "dqcjw",
        "dqcjx",
        "dqcjr",
        "dqcjp",
        "dqcjn",
        "dqcjj",
        "dqcjm",
        "dqcjt",
    ]


def test_eight_directions():
    assert len(DIRECTIONS) == 8
    assert DIRECTIONS[NORTH] == (1, 0)
    assert DIRECTIONS[NORTH_WEST] == (1, -1)


@pytest.mark.parametrize("geohash", ["dqcjq", "u4pruyd", "9q8yy", "ww8p1r4t8", "s"])
def test_neighbors_keep_length_and_surround_cell(geohash):
    result = neighbors(geohash)
    center = decode(geohash)
    assert len(result) == 8
    assert all(len(n) == len(geohash) for n in result)
    assert geohash not in result

    north = decode(result[NORTH])
    east = decode(result[EAST])
    assert north.latitude == pytest.approx(center.latitude + 2 * center.lat_error)
    assert north.longitude == pytest.approx(center.longitude)
    assert east.longitude == pytest.approx(center.longitude + 2 * center.lon_error)


@pytest.mark.parametrize("geohash", ["dqcjq", "u4pruyd", "9q8yy", "ww8p1r4t8"])
def test_neighbor_relation_is_symmetric(geohash):
    for neighbor in neighbors(geohash):
        assert geohash in neighbors(neighbor)


def test_east_of_antimeridian_wraps_around():
    edge = encode(0.1, 179.99, 3)
    result = neighbors(edge)
    assert result[EAST] == encode(0.1, -179.99, 3)
    for direction in (NORTH_EAST, EAST, SOUTH_EAST):
        assert decode(result[direction]).longitude < 0


def test_west_of_antimeridian_wraps_around():
    edge = encode(-0.1, -179.99, 3)
    assert neighbors(edge)[WEST] == encode(-0.1, 179.99, 3)


def test_north_of_pole_clamps_to_edge_row():
    polar = encode(89.99, 10.0, 3)
    result = neighbors(polar)
    assert result[NORTH] == polar
    assert result[NORTH_EAST] == result[EAST]
    assert result[NORTH_WEST] == result[WEST]


def test_south_of_pole_clamps_to_edge_row():
    polar = encode(-89.99, 10.0, 3)
    result = neighbors(polar)
    assert result[SOUTH] == polar
    assert result[SOUTH_EAST] == result[EAST]
