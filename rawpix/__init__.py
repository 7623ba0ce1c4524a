"""
Embeddable RGBA8 image-processing core.

A host allocates a PixelBuffer once, writes raw pixel bytes into it
through a borrowed byte view and then calls the transforms on it,
reading the result back through the same kind of view.

Main components:
- PixelBuffer: flat RGBA8 storage with a raw host-facing byte view
- Grayscale: in-place BT.709 luma conversion
- SeparableResampler: two-pass Lanczos (and friends) resize
- RoundTripHarness: rescale-and-restore quality checks

Example usage:
    from rawpix import PixelBuffer, apply_grayscale, resize
    
    buffer = PixelBuffer(width, height)
    with buffer.lease() as view:
        view[:] = rgba_bytes
    apply_grayscale(buffer)
    thumbnail = resize(buffer, width // 2, height // 2)
"""

__version__ = '1.0.0'

from .pixel_buffer import PixelBuffer
from .grayscale import apply_grayscale
from .kernels import FILTERS, get_filter
from .resampler import SeparableResampler, resize
from .round_trip import RoundTripHarness, RoundTripReport, round_trip
from .host import from_rgba_bytes, to_rgba_bytes, from_array, to_array, from_image, to_image

__all__ = [
    'PixelBuffer',
    'apply_grayscale',
    'FILTERS',
    'get_filter',
    'SeparableResampler',
    'resize',
    'RoundTripHarness',
    'RoundTripReport',
    'round_trip',
    'from_rgba_bytes',
    'to_rgba_bytes',
    'from_array',
    'to_array',
    'from_image',
    'to_image',
]
