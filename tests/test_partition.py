import itertools

import pytest

from partition import Partitioner, Pixel, segment_of


def all_pixels(partitioner):
    return [pixel for segment in partitioner.segments() for pixel in partitioner.chunk_pixels(segment)]


def test_partitions_cover_every_pixel_exactly_once():
    partitioner = Partitioner(10, 10, 4)
    keys = [(pixel.row, pixel.col) for pixel in all_pixels(partitioner)]
    assert len(keys) == 100
    assert set(keys) == set(itertools.product(range(10), range(10)))


def test_pixels_land_in_their_hashed_segment():
    partitioner = Partitioner(7, 5, 3)
    for segment in partitioner.segments():
        for pixel in partitioner.chunk_pixels(segment):
            assert pixel.segment == segment
            assert segment == segment_of(pixel.row, pixel.col, 7, 3)


def test_segment_contents_do_not_depend_on_shuffle():
    first = Partitioner(9, 6, 4, seed=1)
    second = Partitioner(9, 6, 4, seed=2)
    for segment in first.segments():
        assert set(first.chunk_pixels(segment)) == set(second.chunk_pixels(segment))


def test_same_seed_gives_same_visiting_order():
    first = Partitioner(9, 6, 4, seed=11)
    second = Partitioner(9, 6, 4, seed=11)
    for segment in first.segments():
        assert first.chunk_pixels(segment) == second.chunk_pixels(segment)


def test_chunk_is_scattered_across_rows():
    partitioner = Partitioner(16, 16, 4, seed=3)
    rows = {pixel.row for pixel in partitioner.chunk_pixels(0)}
    assert len(rows) == 16


@pytest.mark.parametrize("segment", [4, 100, -1])
def test_nonexistent_segment_raises(segment):
    partitioner = Partitioner(10, 10, 4)
    with pytest.raises(KeyError):
        partitioner.chunk_pixels(segment)


def test_more_segments_than_pixels_leaves_empty_chunks():
    partitioner = Partitioner(2, 1, 4)
    assert partitioner.chunk_pixels(0) == [Pixel(0, 0, 0)]
    assert partitioner.chunk_pixels(1) == [Pixel(0, 1, 1)]
    assert partitioner.chunk_pixels(2) == []
    assert partitioner.chunk_pixels(3) == []


@pytest.mark.parametrize("width, height, segments", [(0, 4, 2), (4, 0, 2), (4, 4, 0)])
def test_invalid_arguments(width, height, segments):
    with pytest.raises(ValueError):
        Partitioner(width, height, segments)
