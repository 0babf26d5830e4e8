"""
Default settings for the ray tracer
"""

# Rendering settings
RENDER_SETTINGS = {
    'height': 711,
    'aspect_ratio': 16.0 / 9.0,
    'samples_per_pixel': 100,
    'jitter': True,
    'blend_background': False,  # missed samples count as zero when a pixel has any hit
}

# Camera settings
CAMERA_SETTINGS = {
    'viewport_height': 2.0,
    'focal_length': 1.0,
}

# Output settings
OUTPUT_SETTINGS = {
    'sink': 'memory',  # 'memory' (framebuffer) or 'file' (random-access PPM)
    'canvas_color': (180, 255, 200),
}
