import logging
import threading

import numpy as np
from PIL import Image

from shading import CMAX, Color

logger = logging.getLogger(__name__)

# Marker line checked before every write. It starts with '#' so PPM readers
# treat it as a comment.
SENTINEL = b"#SENTINEL pixels start below"
SENTINEL_LINE = SENTINEL + b"\n"

# Bytes per pixel record: "rrr ggg bbb\n"
RECORD_WIDTH = 12

DEFAULT_CANVAS = Color(180, 255, 200)


def format_record(color):
    """Fixed-width ASCII record for one pixel; channels are clamped to [0, 255]."""
    clamped = color.clamped()
    return "{:3d} {:3d} {:3d}\n".format(clamped.red, clamped.green, clamped.blue).encode("ascii")


def parse_record(record):
    red, green, blue = (int(token) for token in record.split())
    return Color(red, green, blue)


class PpmWriter:
    """
    A "Portable Pixmap" written in P3 (ASCII) mode with random-access pixel writes.

    The whole image is pre-allocated with the canvas color on construction,
    so every write_pixel is an in-place overwrite of one fixed-width record.
    Writes may arrive in any order from any thread; a single lock serializes
    the seek/validate/seek/write sequence on the shared file handle.

    This overwrites the file if it already exists.
    """

    def __init__(self, output_path, width, height, canvas=DEFAULT_CANVAS):
        if width < 1 or height < 1:
            raise ValueError("Image dimensions must be positive, got {}x{}".format(width, height))
        self.output_path = output_path
        self.width = width
        self.height = height
        self.rejected_writes = 0
        self._lock = threading.Lock()

        header = "P3\n{} {}\n{}\n".format(width, height, CMAX).encode("ascii")
        self.offset = len(header)
        with open(output_path, "wb") as f:
            f.write(header)
            f.write(SENTINEL_LINE)
            f.write(format_record(canvas) * (width * height))

        # Unbuffered, so each sentinel check reads what is actually on disk
        self._file = open(output_path, "r+b", buffering=0)
        logger.debug("Pre-allocated %dx%d PPM at %s, pixel data at offset %d",
                     width, height, output_path, self.offset + len(SENTINEL_LINE))

    def _record_offset(self, row, col):
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError("Pixel ({}, {}) outside {}x{} image".format(row, col, self.width, self.height))
        return self.offset + len(SENTINEL_LINE) + row * (RECORD_WIDTH * self.width) + col * RECORD_WIDTH

    def _sentinel_intact(self):
        self._file.seek(self.offset)
        check = self._file.read(len(SENTINEL_LINE))
        if check != SENTINEL_LINE:
            logger.error("Sentinel value does not match - file seems corrupt. NOT WRITING! "
                         "got: %r expect: %r", check, SENTINEL_LINE)
            return False
        return True

    def write_pixel(self, color, row, col):
        """
        Overwrite the record at (row, col) with color.

        Returns:
            True if the record was written, False if the sentinel check failed
            and the write was skipped.
        """
        offset = self._record_offset(row, col)
        with self._lock:
            if not self._sentinel_intact():
                self.rejected_writes += 1
                return False
            self._file.seek(offset)
            self._file.write(format_record(color))
        return True

    def write(self, pixel, color):
        return self.write_pixel(color, pixel.row, pixel.col)

    def read_pixel(self, row, col):
        offset = self._record_offset(row, col)
        with self._lock:
            self._file.seek(offset)
            return parse_record(self._file.read(RECORD_WIDTH))

    @property
    def corrupted(self):
        return self.rejected_writes > 0

    def close(self):
        if self._file.closed:
            return
        self._file.close()
        if self.corrupted:
            logger.error("%d pixel writes to %s were rejected; the image is incomplete",
                         self.rejected_writes, self.output_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def read_ppm(input_path):
    """
    Load a PPM file into a (height, width, 3) uint8 array.

    The writer's sentinel is a PPM comment, so Pillow skips it.
    """
    with Image.open(input_path) as image:
        if image.format != "PPM":
            raise ValueError("{} is not a PPM file (found {})".format(input_path, image.format))
        return np.asarray(image.convert("RGB"), dtype=np.uint8)
