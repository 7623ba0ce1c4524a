"""
Deterministic RGBA8 test images for exercising the transforms.
"""

import numpy as np
from scipy.ndimage import gaussian_filter

from .host import from_array


def solid(width, height, color=(128, 128, 128, 255)):
    """Buffer filled with a single RGBA colour."""
    array = np.empty((height, width, 4), dtype=np.uint8)
    array[...] = np.asarray(color, dtype=np.uint8)
    return from_array(array)


def gradient(width, height, horizontal=True):
    """
    Linear grey ramp from black to white, alpha opaque.
    
    Args:
        width: Width in pixels
        height: Height in pixels
        horizontal: Ramp along x if True, along y otherwise
    """
    length = width if horizontal else height
    ramp = np.round(np.linspace(0, 255, max(length, 1))).astype(np.uint8)[:length]
    
    array = np.empty((height, width, 4), dtype=np.uint8)
    if horizontal:
        array[..., :3] = ramp[np.newaxis, :, np.newaxis]
    else:
        array[..., :3] = ramp[:, np.newaxis, np.newaxis]
    array[..., 3] = 255
    return from_array(array)


def checkerboard(width, height, cell=8, colors=((0, 0, 0, 255), (255, 255, 255, 255))):
    """Two-colour checkerboard with square cells of ``cell`` pixels."""
    if cell <= 0:
        raise ValueError(f"cell must be positive, got {cell}")
    
    y, x = np.mgrid[0:height, 0:width]
    odd = ((x // cell) + (y // cell)) % 2 == 1
    
    palette = np.asarray(colors, dtype=np.uint8)
    return from_array(palette[odd.astype(np.intp)])


def smooth_noise(width, height, sigma=2.0, seed=0):
    """
    Seeded random colour noise blurred into soft blobs.
    
    Args:
        width: Width in pixels
        height: Height in pixels
        sigma: Gaussian blur sigma in pixels (0 for raw noise)
        seed: Random seed
    """
    rng = np.random.default_rng(seed)
    noise = rng.uniform(0, 255, size=(height, width, 4))
    
    if sigma > 0 and noise.size:
        # Blur each channel spatially, never across channels
        noise = gaussian_filter(noise, sigma=(sigma, sigma, 0), mode='nearest')
    
    # Stretch back to the full range after the blur flattened it
    lo, hi = (noise.min(), noise.max()) if noise.size else (0.0, 0.0)
    if hi > lo:
        noise = (noise - lo) * (255.0 / (hi - lo))
    
    return from_array(np.clip(np.round(noise), 0, 255).astype(np.uint8))


PATTERNS = {
    'solid': solid,
    'gradient': gradient,
    'checkerboard': checkerboard,
    'noise': smooth_noise,
}
