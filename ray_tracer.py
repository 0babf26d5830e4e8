import argparse
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from camera import Camera
from config import CAMERA_SETTINGS, OUTPUT_SETTINGS, RENDER_SETTINGS
from framebuffer import Framebuffer
from partition import Partitioner
from ppm_writer import PpmWriter
from scene import default_scene, parse_scene_file
from shading import Color, Sampler

logger = logging.getLogger(__name__)


def default_worker_count():
    return os.cpu_count() or 1


def render_chunk(sink, scene, camera, segment, partitioner, sampler, rng):
    """
    Render every pixel of one partition segment and write it to the sink.

    Args:
        sink: Framebuffer or PpmWriter; only its write(pixel, color) is used.
        scene: sequence of surfaces, read-only.
        camera: Camera, read-only.
        segment: partition id in [0, partitioner.segment_count).
        partitioner: Partitioner the sink was built for.
        sampler: Sampler holding image size and antialiasing settings.
        rng: numpy Generator owned by this worker alone.

    Returns:
        Number of pixels rendered.
    """
    start_time = time.time()
    pixels = partitioner.chunk_pixels(segment)
    for pixel in pixels:
        color = sampler.shade_pixel(scene, camera, pixel.row, pixel.col, rng)
        sink.write(pixel, color)

    logger.debug("Segment %d: %d pixels in %.2fs", segment, len(pixels), time.time() - start_time)
    return len(pixels)


def render(sink, scene, camera, partitioner, sampler, seed=None):
    """
    Render all segments concurrently, one worker thread per segment.

    Each worker gets its own generator spawned from a single SeedSequence,
    so a fixed seed reproduces the image for a fixed segment count.
    Blocks until every worker finishes and re-raises the first worker error.
    """
    segment_count = partitioner.segment_count
    seeds = np.random.SeedSequence(seed).spawn(segment_count)

    start_time = time.time()
    logger.info("Rendering %dx%d with %d workers, %d samples per pixel",
                partitioner.width, partitioner.height, segment_count, sampler.samples_per_pixel)

    with ThreadPoolExecutor(max_workers=segment_count) as executor:
        futures = [
            executor.submit(render_chunk, sink, scene, camera, segment, partitioner, sampler,
                            np.random.default_rng(worker_seed))
            for segment, worker_seed in zip(partitioner.segments(), seeds)
        ]
        rendered = sum(future.result() for future in futures)

    total_time = time.time() - start_time
    logger.info("Rendered %d pixels in %.1fs", rendered, total_time)
    return rendered


def flush(sink, output_path=None):
    """
    Finish a render: close the file sink, or write the framebuffer to output_path.

    Returns:
        True if the output is complete, False if the file sink rejected writes.
    """
    if isinstance(sink, PpmWriter):
        sink.close()
        return not sink.corrupted

    if output_path is None:
        raise ValueError("A framebuffer needs an output path to flush to")
    if output_path.lower().endswith(".ppm"):
        sink.save_ppm(output_path)
    else:
        sink.save_image(output_path)
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description='Threaded sphere ray tracer')
    parser.add_argument('output_image', type=str, help='Name of the output image file')
    parser.add_argument('--scene', type=str, default=None,
                        help='Path to a scene file (default: built-in two-sphere scene)')
    parser.add_argument('--height', type=int, default=RENDER_SETTINGS['height'], help='Image height')
    parser.add_argument('--aspect-ratio', type=float, default=RENDER_SETTINGS['aspect_ratio'],
                        help='Image width / height')
    parser.add_argument('--samples', type=int, default=RENDER_SETTINGS['samples_per_pixel'],
                        help='Samples per pixel')
    parser.add_argument('--workers', type=int, default=None,
                        help='Number of worker threads (default: CPU count)')
    parser.add_argument('--sink', choices=('memory', 'file'), default=OUTPUT_SETTINGS['sink'],
                        help='Render into memory, or write pixels straight into a PPM file')
    parser.add_argument('--seed', type=int, default=None, help='Seed for partitioning and jitter')
    parser.add_argument('--no-jitter', action='store_true', help='Cast every sample through the pixel corner')
    parser.add_argument('--blend-background', action='store_true',
                        default=RENDER_SETTINGS['blend_background'],
                        help='Average missed samples against the background')
    parser.add_argument('--verbose', action='store_true', help='Log debug output')
    args = parser.parse_args(argv)

    if args.sink == 'file' and not args.output_image.lower().endswith('.ppm'):
        parser.error("the file sink writes PPM only; use a .ppm output name")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    height = args.height
    width = int(height * args.aspect_ratio)

    camera = None
    if args.scene:
        camera, scene = parse_scene_file(args.scene)
    else:
        scene = default_scene()
    if camera is None:
        camera = Camera.for_aspect_ratio(args.aspect_ratio, **CAMERA_SETTINGS)

    print(f"Scene loaded: {len(scene)} surfaces")
    print(f"Rendering {width}x{height} image...")

    num_workers = args.workers if args.workers else default_worker_count()
    partitioner = Partitioner(width, height, num_workers, seed=args.seed)
    sampler = Sampler(width, height, args.samples,
                      jitter=RENDER_SETTINGS['jitter'] and not args.no_jitter,
                      blend_background=args.blend_background)

    if args.sink == 'file':
        sink = PpmWriter(args.output_image, width, height, Color(*OUTPUT_SETTINGS['canvas_color']))
    else:
        sink = Framebuffer(partitioner)

    try:
        render(sink, scene, camera, partitioner, sampler, seed=args.seed)
    finally:
        complete = flush(sink, args.output_image)

    if not complete:
        print(f"Image at {args.output_image} is incomplete: the file was corrupted during the render",
              file=sys.stderr)
        return 1
    print(f"Image saved to {args.output_image}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
