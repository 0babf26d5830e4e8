import logging
import threading

import numpy as np
from PIL import Image

from partition import segment_of
from shading import CMAX

logger = logging.getLogger(__name__)


class Framebuffer:
    """
    In-memory RGB pixel store shared by all render workers.

    Holds one lock per partition segment. A pixel always belongs to the same
    segment, so a worker writing its own chunk only ever contends with
    workers assigned the same segment.
    """

    def __init__(self, partitioner):
        self.partitioner = partitioner
        self.width = partitioner.width
        self.height = partitioner.height
        self._data = np.zeros(self.width * self.height * 3, dtype=np.uint8)
        self._locks = [threading.Lock() for _ in partitioner.segments()]

    def write_pixel(self, pixel, color):
        """Clamp color and store it at (pixel.row, pixel.col) under the segment lock."""
        row, col = pixel.row, pixel.col
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError("Pixel ({}, {}) outside {}x{} image".format(row, col, self.width, self.height))

        clamped = color.clamped()
        start = 3 * (row * self.width + col)
        segment = segment_of(row, col, self.width, self.partitioner.segment_count)
        with self._locks[segment]:
            self._data[start:start + 3] = (clamped.red, clamped.green, clamped.blue)

    write = write_pixel

    def pixels(self):
        """Copy of the stored image shaped (height, width, 3)."""
        return self._data.reshape((self.height, self.width, 3)).copy()

    def save_ppm(self, output_path):
        """Write the image as plain P3 text, one pixel per line."""
        with open(output_path, "w") as f:
            f.write("P3\n{} {}\n{}\n".format(self.width, self.height, CMAX))
            for red, green, blue in self._data.reshape((-1, 3)).tolist():
                f.write("{} {} {}\n".format(red, green, blue))
        logger.info("Wrote %dx%d PPM to %s", self.width, self.height, output_path)

    def save_image(self, output_path):
        """Save the image in any format Pillow infers from the file extension."""
        image = Image.fromarray(self.pixels())
        image.save(output_path)
        logger.info("Wrote %dx%d image to %s", self.width, self.height, output_path)
