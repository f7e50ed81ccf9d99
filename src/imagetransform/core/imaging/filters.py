"""Per-pixel colour filters.

Both filters accept RGB or RGBA images and keep the alpha channel untouched.
"""

import numpy as np
from PIL import Image, ImageOps

# Rows produce R', G', B' from (R, G, B).
SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float64,
)


def _restore_alpha(result: Image.Image, source: Image.Image) -> Image.Image:
    if source.mode == "RGBA":
        result.putalpha(source.getchannel("A"))
    return result


def apply_grayscale(image: Image.Image) -> Image.Image:
    """Convert to luminance using ITU-R 601-2 weights, returned as RGB(A).

    Applying it to an already gray image leaves every pixel unchanged.
    """
    gray = ImageOps.grayscale(image).convert("RGB")
    return _restore_alpha(gray, image)


def apply_sepia(image: Image.Image) -> Image.Image:
    """Apply the sepia tone matrix, truncating and clamping each channel to [0, 255]."""
    rgb = np.asarray(image.convert("RGB"), dtype=np.float64)
    toned = np.floor(rgb @ SEPIA_MATRIX.T)
    sepia = Image.fromarray(np.clip(toned, 0, 255).astype(np.uint8))
    return _restore_alpha(sepia, image)
