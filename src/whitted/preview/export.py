"""Image export utilities for rendered images.

Rendered images are float64 arrays of shape (H, W, 3) with channels in
[0, 1]. Export clamps, optionally gamma-encodes, and truncates to 8 bits the
same way ``Color.to_rgb8`` does, so a saved pixel matches the color the
renderer computed.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from whitted.preview.export import save_png
    >>> image = scene.camera.render(scene.world)
    >>> save_png(image, "image.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a float image to uint8 for display/export.

    Args:
        image: Image array of shape (H, W, 3) with values nominally in [0, 1].
        gamma: Gamma encoding exponent; 1.0 leaves values linear, 2.2
            approximates sRGB.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the image is not (H, W, 3) or gamma is not positive.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    processed = np.clip(image.astype(np.float64), 0.0, 1.0)
    if gamma != 1.0:
        processed = np.power(processed, 1.0 / gamma)

    # Truncate, matching Color.to_rgb8
    return (processed * 255.0).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a rendered image as an 8-bit RGB PNG file.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1].
        filepath: Output file path (should end in .png).
        gamma: Gamma encoding exponent (default 1.0, no correction).
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def load_png(filepath: str | Path) -> npt.NDArray[np.float64]:
    """Load a PNG as a float64 (H, W, 3) image in [0, 1]."""
    with PILImage.open(filepath) as pil_image:
        data = np.asarray(pil_image.convert("RGB"), dtype=np.float64)
    return data / 255.0


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
