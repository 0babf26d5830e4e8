import logging
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class Pixel(NamedTuple):
    row: int
    col: int
    segment: int


def segment_of(row, col, width, segment_count):
    return (row * width + col) % segment_count


class Partitioner:
    """
    Split the pixels of a width x height image into segment_count chunks.

    Rows and columns are visited in independently shuffled order, so every
    chunk is scattered over the whole image and a partial render shows
    sparse coverage everywhere instead of a finished top half.
    """

    def __init__(self, width, height, segment_count, seed=None):
        if width < 1 or height < 1:
            raise ValueError("Image dimensions must be positive, got {}x{}".format(width, height))
        if segment_count < 1:
            raise ValueError("segment_count must be at least 1, got {}".format(segment_count))
        self.width = width
        self.height = height
        self.segment_count = segment_count

        rng = np.random.default_rng(seed)
        rows = rng.permutation(height)
        cols = rng.permutation(width)

        # key = segment, value = pixels assigned to that segment
        self._index_map = {segment: [] for segment in range(segment_count)}
        for col in cols.tolist():
            for row in rows.tolist():
                segment = segment_of(row, col, width, segment_count)
                self._index_map[segment].append(Pixel(row, col, segment))

        logger.debug("Partitioned %dx%d pixels into %d segments", width, height, segment_count)

    def chunk_pixels(self, segment):
        """
        Return the pixels assigned to the given segment.

        A segment outside [0, segment_count) raises KeyError; there is no
        valid fallback for it.
        """
        return self._index_map[segment]

    def segments(self):
        return range(self.segment_count)
