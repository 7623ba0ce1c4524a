"""
1-D reconstruction filters for separable resampling.

Each filter is a kernel function evaluated on distances measured in
source samples, together with the radius outside of which it is zero.
"""

import numpy as np


LANCZOS_LOBES = 3


def sinc(x):
    """Normalized sinc, sin(pi*x) / (pi*x) with sinc(0) = 1."""
    # np.sinc is already the normalized form
    return np.sinc(x)


def lanczos(x, a=LANCZOS_LOBES):
    """
    Lanczos windowed sinc.
    
    L(x) = sinc(x) * sinc(x / a) for |x| < a, 0 otherwise.
    """
    x = np.asarray(x, dtype=np.float64)
    return np.where(np.abs(x) < a, sinc(x) * sinc(x / a), 0.0)


def lanczos3(x):
    return lanczos(x, LANCZOS_LOBES)


def triangle(x):
    """Linear interpolation kernel (tent)."""
    x = np.abs(np.asarray(x, dtype=np.float64))
    return np.where(x < 1.0, 1.0 - x, 0.0)


def box(x):
    """Nearest-neighbour kernel, half-open so ties pick a single sample."""
    x = np.asarray(x, dtype=np.float64)
    return np.where((x >= -0.5) & (x < 0.5), 1.0, 0.0)


def cubic_bc(x, b=0.0, c=0.5):
    """
    Mitchell-Netravali family of cubics.
    
    b=0, c=0.5 gives Catmull-Rom.
    """
    x = np.abs(np.asarray(x, dtype=np.float64))
    x2 = x * x
    x3 = x2 * x
    near = ((12 - 9 * b - 6 * c) * x3 + (-18 + 12 * b + 6 * c) * x2 + (6 - 2 * b)) / 6.0
    far = ((-b - 6 * c) * x3 + (6 * b + 30 * c) * x2
           + (-12 * b - 48 * c) * x + (8 * b + 24 * c)) / 6.0
    return np.where(x < 1.0, near, np.where(x < 2.0, far, 0.0))


def catmull_rom(x):
    return cubic_bc(x, 0.0, 0.5)


def gaussian(x, sigma=0.5):
    """Gaussian kernel, truncated at the filter support."""
    x = np.asarray(x, dtype=np.float64)
    return np.exp(-(x * x) / (2.0 * sigma * sigma)) / np.sqrt(2.0 * np.pi * sigma * sigma)


class Filter:
    """A kernel function and its support radius in source samples."""
    
    def __init__(self, name, kernel, support):
        self.name = name
        self.kernel = kernel
        self.support = support
    
    def __call__(self, x):
        return self.kernel(x)
    
    def __repr__(self):
        return f"Filter({self.name!r}, support={self.support})"


FILTERS = {
    'nearest': Filter('nearest', box, 0.5),
    'triangle': Filter('triangle', triangle, 1.0),
    'catmullrom': Filter('catmullrom', catmull_rom, 2.0),
    'gaussian': Filter('gaussian', gaussian, 3.0),
    'lanczos3': Filter('lanczos3', lanczos3, float(LANCZOS_LOBES)),
}


def get_filter(name):
    """
    Look up a filter by name.
    
    Args:
        name: One of FILTERS' keys (case-insensitive)
        
    Returns:
        Filter
    """
    try:
        return FILTERS[name.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown filter {name!r}; expected one of {sorted(FILTERS)}"
        ) from None
