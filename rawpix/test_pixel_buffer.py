"""
Tests for PixelBuffer storage and the host-facing byte view.
"""

import numpy as np
import pytest

from rawpix.pixel_buffer import PixelBuffer
from rawpix.grayscale import apply_grayscale
from rawpix.resampler import resize


@pytest.mark.parametrize('width,height', [(1, 1), (3, 2), (17, 5), (0, 9), (9, 0), (0, 0)])
def test_view_length_matches_geometry(width, height):
    """Raw view always spans width * height * 4 bytes."""
    buffer = PixelBuffer.create(width, height)
    
    assert buffer.width == width
    assert buffer.height == height
    assert len(buffer.raw_view()) == width * height * 4
    assert buffer.nbytes == width * height * 4


def test_writes_through_view_are_visible():
    """Bytes written through the view land in row-major RGBA order."""
    buffer = PixelBuffer(2, 2)
    view = buffer.raw_view()
    view[:] = bytes(range(16))
    
    pixels = buffer.pixels()
    assert tuple(pixels[0, 1]) == (4, 5, 6, 7)
    assert tuple(pixels[1, 0]) == (8, 9, 10, 11)


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        PixelBuffer(-1, 4)
    with pytest.raises(ValueError):
        PixelBuffer(4, 2 ** 32)
    with pytest.raises(ValueError):
        PixelBuffer(2.5, 4)


def test_lease_is_exclusive():
    """A second lease or a transform during a lease fails fast."""
    buffer = PixelBuffer(2, 2)
    
    with buffer.lease() as view:
        view[:] = bytes(16)
        assert buffer.is_leased
        
        with pytest.raises(BufferError):
            with buffer.lease():
                pass
        with pytest.raises(BufferError):
            buffer.raw_view()
        with pytest.raises(BufferError):
            apply_grayscale(buffer)
        with pytest.raises(BufferError):
            resize(buffer, 4, 4)
    
    assert not buffer.is_leased


def test_lease_view_released_on_exit():
    """A view retained past its lease cannot be used."""
    buffer = PixelBuffer(1, 1)
    
    with buffer.lease() as view:
        view[:] = b'\x01\x02\x03\x04'
    
    with pytest.raises(ValueError):
        view[0] = 9
    assert bytes(buffer.raw_view()) == b'\x01\x02\x03\x04'


def test_lease_released_after_error():
    buffer = PixelBuffer(1, 1)
    
    with pytest.raises(RuntimeError):
        with buffer.lease():
            raise RuntimeError("host failed mid-write")
    
    assert not buffer.is_leased


def test_pixels_view_is_read_only():
    buffer = PixelBuffer(2, 1)
    buffer.raw_view()[:] = bytes(8)
    
    with pytest.raises(ValueError):
        buffer.pixels()[0, 0, 0] = 1


def test_copy_is_independent():
    buffer = PixelBuffer(2, 1)
    buffer.raw_view()[:] = bytes(range(8))
    
    clone = buffer.copy()
    clone.raw_view()[0] = 200
    
    assert clone != buffer
    assert buffer.raw_view()[0] == 0
    assert np.array_equal(clone.pixels()[0, 1], buffer.pixels()[0, 1])


def test_geometry_mismatch_is_detected():
    buffer = PixelBuffer(2, 2)
    buffer._data = np.zeros(12, dtype=np.uint8)
    
    with pytest.raises(ValueError):
        buffer.check_geometry()
    with pytest.raises(ValueError):
        resize(buffer, 4, 4)
