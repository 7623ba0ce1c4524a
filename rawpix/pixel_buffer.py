"""
Flat RGBA8 pixel buffer shared between a host and the transforms
in this package, backed by a single NumPy byte array.
"""

from contextlib import contextmanager

import numpy as np


CHANNELS = 4  # R, G, B, A
MAX_DIMENSION = 2 ** 32 - 1


def check_dimension(value, name):
    """Validate a width/height value and return it as a Python int."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < 0 or value > MAX_DIMENSION:
        raise ValueError(f"{name} must be in [0, {MAX_DIMENSION}], got {value}")
    return value


class PixelBuffer:
    """
    Contiguous ``width * height`` RGBA8 pixels.
    
    Storage is row-major, 4 bytes per pixel in R, G, B, A order with no
    padding, so the row stride is exactly ``width * 4`` bytes.
    
    The storage is allocated uninitialized. Its contents are undefined
    until the caller has written every byte through ``raw_view()`` or
    ``lease()``; transforms read whatever is there.
    
    The buffer never changes size. Resizing produces a new buffer.
    """
    
    def __init__(self, width, height):
        """
        Allocate a buffer.
        
        Args:
            width: Width in pixels (0 .. 2**32 - 1)
            height: Height in pixels (0 .. 2**32 - 1)
        """
        self._width = check_dimension(width, 'width')
        self._height = check_dimension(height, 'height')
        # MemoryError from numpy propagates; nothing to recover at this layer
        self._data = np.empty(self._width * self._height * CHANNELS, dtype=np.uint8)
        self._leases = 0
    
    @classmethod
    def create(cls, width, height):
        """Allocate an uninitialized buffer of ``width x height`` pixels."""
        return cls(width, height)
    
    @property
    def width(self):
        return self._width
    
    @property
    def height(self):
        return self._height
    
    @property
    def nbytes(self):
        """Length of the storage in bytes (``width * height * 4``)."""
        return self._data.size
    
    @property
    def is_empty(self):
        return self._width == 0 or self._height == 0
    
    @property
    def is_leased(self):
        return self._leases > 0
    
    def raw_view(self):
        """
        Borrow a writable byte view over the storage.
        
        The view aliases the buffer memory directly; writes through it are
        visible to subsequent transforms without any copy. It must not be
        used after the buffer is dropped or replaced by a resize result.
        Prefer ``lease()`` when the borrow should be scoped and exclusive.
        
        Returns:
            memoryview of format 'B' and length ``width * height * 4``
        """
        self.ensure_not_leased()
        return memoryview(self._data)
    
    @contextmanager
    def lease(self):
        """
        Exclusive, scoped borrow of the raw byte view.
        
        While the lease is held, a second lease or any transform on this
        buffer raises BufferError. On exit the view is released, so any
        retained reference to it becomes unusable.
        
        Yields:
            memoryview of format 'B' and length ``width * height * 4``
        """
        self.ensure_not_leased()
        self._leases += 1
        view = memoryview(self._data)
        try:
            yield view
        finally:
            view.release()
            self._leases -= 1
    
    def ensure_not_leased(self):
        """Raise BufferError while the host holds a lease on this buffer."""
        if self._leases:
            raise BufferError("pixel buffer is leased to the host")
    
    def check_geometry(self):
        """Raise ValueError if the storage length disagrees with width and height."""
        expected = self._width * self._height * CHANNELS
        if self._data.ndim != 1 or self._data.size != expected:
            raise ValueError(
                f"buffer holds {self._data.size} bytes, "
                f"expected {expected} for {self._width}x{self._height} RGBA8"
            )
    
    def pixels(self):
        """
        Read-only (H x W x 4) uint8 view of the storage, for inspection.
        
        The view is invalidated by the same rules as ``raw_view()``.
        """
        view = self._data.reshape(self._height, self._width, CHANNELS)
        view.flags.writeable = False
        return view
    
    def _array(self):
        """Writable (H x W x 4) view, used by transforms that know the geometry."""
        return self._data.reshape(self._height, self._width, CHANNELS)
    
    def copy(self):
        """Independent buffer with the same geometry and contents."""
        self.ensure_not_leased()
        other = PixelBuffer(self._width, self._height)
        other._data[:] = self._data
        return other
    
    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self._width == other._width and self._height == other._height
                and np.array_equal(self._data, other._data))
    
    __hash__ = None
    
    def __repr__(self):
        return f"PixelBuffer(width={self._width}, height={self._height})"
