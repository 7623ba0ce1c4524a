"""
Round-trip (rescale then restore) harness for checking resampling
quality and stability.
"""

import math

import numpy as np

from .resampler import SeparableResampler


class RoundTripReport:
    """Result of a round trip together with its error against the source."""
    
    def __init__(self, ratio, intermediate_size, result, max_error, mean_error, psnr):
        self.ratio = ratio
        self.intermediate_size = intermediate_size
        self.result = result
        self.max_error = max_error
        self.mean_error = mean_error
        self.psnr = psnr
    
    def summary(self):
        w, h = self.intermediate_size
        return (f"ratio={self.ratio:g} via {w}x{h}: "
                f"max={self.max_error} mae={self.mean_error:.4f} psnr={self.psnr:.2f} dB")
    
    def __repr__(self):
        return f"RoundTripReport({self.summary()})"


class RoundTripHarness:
    """
    Rescales an image by a ratio and back to its original size.
    
    The output is a reproducible lossy copy of the input, useful for
    regression tests of the resampler.
    """
    
    def __init__(self, resampler_params=None, verbose=False):
        """
        Initialize harness.
        
        Args:
            resampler_params: Keyword arguments for SeparableResampler
            verbose: Print progress for each pass
        """
        resampler_params = resampler_params or {}
        self.resampler = SeparableResampler(**resampler_params)
        self.verbose = verbose
    
    def intermediate_size(self, source, ratio):
        """
        Geometry of the first pass: floor(width * ratio) x floor(height * ratio).
        
        The product is taken in single precision, so decimal ratios such as
        0.29 floor the same way a 32-bit float host computes them.
        """
        ratio = np.float32(ratio)
        if not np.isfinite(ratio):
            raise ValueError(f"ratio must be finite, got {ratio}")
        if ratio <= 0:
            return 0, 0
        
        up_w = np.floor(np.float32(source.width) * ratio)
        up_h = np.floor(np.float32(source.height) * ratio)
        if not (np.isfinite(up_w) and np.isfinite(up_h)):
            raise ValueError(f"ratio {ratio} overflows the intermediate geometry")
        return int(up_w), int(up_h)
    
    def round_trip(self, source, ratio):
        """
        Resize ``source`` by ``ratio`` and back to its original geometry.
        
        When the intermediate geometry is degenerate (``ratio <= 0`` or a
        ratio small enough to floor a side to 0), that empty intermediate
        buffer is returned as is, following the resampler's zero-size rule.
        
        Args:
            source: PixelBuffer to read (not modified)
            ratio: Scale factor of the first pass
            
        Returns:
            New PixelBuffer
        """
        up_w, up_h = self.intermediate_size(source, ratio)
        
        if self.verbose:
            print(f"  Resizing {source.width}x{source.height} -> {up_w}x{up_h}...")
        scaled = self.resampler.resize(source, up_w, up_h)
        
        if scaled.is_empty:
            if self.verbose:
                print("  Intermediate image is empty, stopping")
            return scaled
        
        if self.verbose:
            print(f"  Resizing {up_w}x{up_h} -> {source.width}x{source.height}...")
        return self.resampler.resize(scaled, source.width, source.height)
    
    def evaluate(self, source, ratio):
        """
        Run a round trip and measure how far it drifted from ``source``.
        
        Args:
            source: PixelBuffer to read
            ratio: Scale factor of the first pass
            
        Returns:
            RoundTripReport
            
        Raises:
            ValueError: If the round trip degenerates to an empty buffer
        """
        result = self.round_trip(source, ratio)
        if result.is_empty and not source.is_empty:
            up_w, up_h = self.intermediate_size(source, ratio)
            raise ValueError(
                f"ratio {ratio} collapses {source.width}x{source.height} "
                f"to an empty {up_w}x{up_h} intermediate"
            )
        max_error, mean_error, psnr = compare(source, result)
        
        report = RoundTripReport(
            float(ratio), self.intermediate_size(source, ratio), result,
            max_error, mean_error, psnr
        )
        if self.verbose:
            print(f"  {report.summary()}")
        return report


def compare(expected, actual):
    """
    Channel-wise error between two buffers of the same geometry.
    
    Args:
        expected: Reference PixelBuffer
        actual: PixelBuffer to measure
        
    Returns:
        max_error: Largest absolute channel difference
        mean_error: Mean absolute channel difference
        psnr: Peak signal-to-noise ratio in dB (inf when identical)
    """
    if (expected.width, expected.height) != (actual.width, actual.height):
        raise ValueError(
            f"Cannot compare {expected.width}x{expected.height} "
            f"with {actual.width}x{actual.height}"
        )
    
    if expected.is_empty:
        return 0, 0.0, math.inf
    
    diff = expected.pixels().astype(np.int16) - actual.pixels().astype(np.int16)
    abs_diff = np.abs(diff)
    mse = float(np.mean(diff.astype(np.float64) ** 2))
    psnr = math.inf if mse == 0 else 10.0 * math.log10(255.0 ** 2 / mse)
    
    return int(abs_diff.max()), float(abs_diff.mean()), psnr


def round_trip(source, ratio, filter_name='lanczos3'):
    """Convenience wrapper around RoundTripHarness.round_trip."""
    harness = RoundTripHarness({'filter_name': filter_name})
    return harness.round_trip(source, ratio)
