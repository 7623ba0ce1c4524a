"""
In-place luma conversion of an RGBA8 pixel buffer (ITU-R BT.709).
"""

import numpy as np


# BT.709 luma coefficients scaled by 10000, so that truncating
# Y = 0.2126*R + 0.7152*G + 0.0722*B is exact integer arithmetic
LUMA_WEIGHTS = (2126, 7152, 722)
LUMA_SCALE = 10000


def luma(rgb):
    """
    Truncated BT.709 luma of RGB triples.
    
    Args:
        rgb: Array (... x 3) of uint8 channel values
        
    Returns:
        uint8 array of shape rgb.shape[:-1]
    """
    rgb = np.asarray(rgb, dtype=np.uint32)
    wr, wg, wb = LUMA_WEIGHTS
    y = (wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]) // LUMA_SCALE
    return y.astype(np.uint8)


def apply_grayscale(buffer):
    """
    Desaturate every pixel of ``buffer`` in place.
    
    R, G and B are all set to the pixel's luma, truncated toward zero.
    Alpha is left untouched.
    
    Args:
        buffer: PixelBuffer, mutated in place
    """
    buffer.ensure_not_leased()
    buffer.check_geometry()
    
    if buffer.is_empty:
        return
    
    pixels = buffer._array()
    y = luma(pixels[..., :3])
    
    # Broadcast the luma plane into the three colour channels
    pixels[..., :3] = y[..., np.newaxis]
