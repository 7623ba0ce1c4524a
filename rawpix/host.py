"""
Bridging helpers between host-side image data and PixelBuffer.

These copy pixels in and out through the buffer's raw view, the same
way a host that cannot share memory objects populates a buffer.
"""

import numpy as np
from PIL import Image

from .pixel_buffer import CHANNELS, PixelBuffer


def from_rgba_bytes(width, height, data):
    """
    Create a buffer and fill it from raw RGBA8 bytes.
    
    Args:
        width: Width in pixels
        height: Height in pixels
        data: Bytes-like object of exactly width * height * 4 bytes
        
    Returns:
        PixelBuffer
    """
    data = memoryview(data).cast('B')
    buffer = PixelBuffer(width, height)
    if len(data) != buffer.nbytes:
        raise ValueError(
            f"Expected {buffer.nbytes} bytes for {width}x{height} RGBA8, got {len(data)}"
        )
    
    with buffer.lease() as view:
        view[:] = data
    
    return buffer


def to_rgba_bytes(buffer):
    """Copy the buffer contents out as bytes."""
    with buffer.lease() as view:
        return view.tobytes()


def from_array(array):
    """
    Create a buffer from an (H x W x 4) array.
    
    Args:
        array: uint8 array-like in RGBA order
        
    Returns:
        PixelBuffer holding a copy of the data
    """
    array = np.asarray(array)
    if array.ndim != 3 or array.shape[2] != CHANNELS:
        raise ValueError(f"Expected an (H x W x 4) array, got shape {array.shape}")
    if array.dtype != np.uint8:
        raise ValueError(f"Expected uint8 data, got {array.dtype}")
    
    height, width = array.shape[:2]
    return from_rgba_bytes(width, height, np.ascontiguousarray(array).tobytes())


def to_array(buffer):
    """Copy the buffer into a new (H x W x 4) uint8 array."""
    return buffer.pixels().copy()


def from_image(image):
    """
    Create a buffer from an in-memory PIL image.
    
    Args:
        image: PIL.Image.Image in any mode (converted to RGBA)
        
    Returns:
        PixelBuffer
    """
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    
    width, height = image.size
    return from_rgba_bytes(width, height, image.tobytes())


def to_image(buffer):
    """Copy the buffer into a new RGBA PIL image."""
    return Image.frombytes('RGBA', (buffer.width, buffer.height), to_rgba_bytes(buffer))
