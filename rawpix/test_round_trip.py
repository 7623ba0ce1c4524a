"""
Tests for the round-trip harness.
"""

import math

import numpy as np
import pytest

from rawpix.host import to_rgba_bytes
from rawpix.patterns import gradient, smooth_noise, solid
from rawpix.round_trip import RoundTripHarness, compare, round_trip


@pytest.mark.parametrize('ratio', [2.0, 1.5, 0.5, 3.3, 1.0])
def test_restores_original_geometry(ratio):
    source = smooth_noise(30, 20, seed=1)
    
    result = round_trip(source, ratio)
    
    assert (result.width, result.height) == (30, 20)
    assert result.nbytes == 30 * 20 * 4


def test_intermediate_uses_floor():
    harness = RoundTripHarness()
    source = solid(10, 7)
    
    assert harness.intermediate_size(source, 1.5) == (15, 10)
    assert harness.intermediate_size(source, 0.25) == (2, 1)
    assert harness.intermediate_size(source, 0) == (0, 0)
    assert harness.intermediate_size(source, -2) == (0, 0)


def test_intermediate_size_in_single_precision():
    """100 * 0.29 is 28.999999999999996 in doubles but 29 in 32-bit floats."""
    harness = RoundTripHarness()
    
    assert harness.intermediate_size(solid(100, 100), 0.29) == (29, 29)
    assert harness.intermediate_size(solid(100, 40), np.float32(0.29)) == (29, 11)


def test_overflowing_ratio_rejected():
    with pytest.raises(ValueError):
        RoundTripHarness().intermediate_size(solid(4, 4), 1e300)


def test_round_trip_goes_through_single_precision_size(capsys):
    RoundTripHarness(verbose=True).round_trip(solid(100, 100), 0.29)
    
    assert "100x100 -> 29x29" in capsys.readouterr().out


def test_source_not_modified():
    source = smooth_noise(12, 12, seed=4)
    before = to_rgba_bytes(source)
    
    round_trip(source, 2.0)
    
    assert to_rgba_bytes(source) == before


@pytest.mark.parametrize('ratio', [0.0, -1.0, 0.05])
def test_degenerate_ratio_follows_zero_size_rule(ratio):
    """A collapsed intermediate is returned as the empty result."""
    source = solid(10, 10)
    
    result = round_trip(source, ratio)
    
    assert result.is_empty
    assert result.nbytes == 0


def test_non_finite_ratio_rejected():
    with pytest.raises(ValueError):
        round_trip(solid(4, 4), float('nan'))


def test_upscale_round_trip_is_close():
    """Smooth content survives a 2x round trip almost unchanged."""
    source = smooth_noise(40, 40, sigma=3.0, seed=9)
    
    report = RoundTripHarness().evaluate(source, 2.0)
    
    assert report.intermediate_size == (80, 80)
    assert report.mean_error < 2.0
    assert report.psnr > 30.0


def test_uniform_round_trip_is_exact():
    source = solid(9, 6, (10, 20, 30, 40))
    
    report = RoundTripHarness().evaluate(source, 0.5)
    
    assert report.max_error == 0
    assert math.isinf(report.psnr)
    assert report.result == source


def test_round_trip_deterministic():
    source = gradient(25, 13)
    assert round_trip(source, 1.7) == round_trip(source, 1.7)


def test_verbose_progress(capsys):
    harness = RoundTripHarness(resampler_params={'filter_name': 'catmullrom'}, verbose=True)
    
    harness.evaluate(solid(8, 8), 2.0)
    
    out = capsys.readouterr().out
    assert "8x8 -> 16x16" in out
    assert "16x16 -> 8x8" in out
    assert "psnr" in out


def test_evaluate_degenerate_ratio():
    with pytest.raises(ValueError, match="collapses 8x8 to an empty 0x0"):
        RoundTripHarness().evaluate(solid(8, 8), 0.0)


def test_compare_requires_same_geometry():
    with pytest.raises(ValueError):
        compare(solid(4, 4), solid(4, 5))


def test_compare_metrics():
    a = solid(2, 2, (0, 0, 0, 0))
    b = solid(2, 2, (0, 0, 0, 0))
    b.raw_view()[0] = 16
    
    max_error, mean_error, psnr = compare(a, b)
    
    assert max_error == 16
    assert mean_error == pytest.approx(1.0)
    assert psnr == pytest.approx(10 * np.log10(255.0 ** 2 / 16.0))
