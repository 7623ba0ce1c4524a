#!/usr/bin/env python3
"""
rawpix command line demo.
Builds a synthetic test image in memory and runs the transforms on it.

Usage:
    python -m rawpix.cli --pattern noise --size 256 192 --ratio 1.5
"""

import argparse
import sys
import time

from .grayscale import apply_grayscale
from .kernels import FILTERS
from .patterns import PATTERNS
from .round_trip import RoundTripHarness


def print_banner():
    """Print banner."""
    banner = """
 _ __ __ ___      ___ __ (_)_  __
| '__/ _` \\ \\ /\\ / / '_ \\| \\ \\/ /
| | | (_| |\\ V  V /| |_) | |>  <
|_|  \\__,_| \\_/\\_/ | .__/|_/_/\\_\\
                   |_|
RGBA8 buffers, luma and Lanczos resampling
    """
    print(banner)


def build_parser():
    parser = argparse.ArgumentParser(
        description='Run grayscale, resize and round-trip transforms on a generated image'
    )
    
    parser.add_argument(
        '--pattern',
        choices=sorted(PATTERNS),
        default='noise',
        help='Test image to generate (default: noise)'
    )
    
    parser.add_argument(
        '--size',
        nargs=2,
        type=int,
        metavar=('WIDTH', 'HEIGHT'),
        default=(128, 128),
        help='Test image size in pixels (default: 128 128)'
    )
    
    parser.add_argument(
        '--resize',
        nargs=2,
        type=int,
        metavar=('WIDTH', 'HEIGHT'),
        help='Resize to this size instead of running a round trip'
    )
    
    parser.add_argument(
        '--ratio',
        type=float,
        default=2.0,
        help='Round-trip scale ratio (default: 2.0)'
    )
    
    parser.add_argument(
        '--filter',
        choices=sorted(FILTERS),
        default='lanczos3',
        help='Resampling filter (default: lanczos3)'
    )
    
    parser.add_argument(
        '--grayscale',
        action='store_true',
        help='Convert the test image to grayscale first'
    )
    
    parser.add_argument(
        '--seed',
        type=int,
        default=0,
        help='Random seed for the noise pattern (default: 0)'
    )
    
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only print the final result line'
    )
    
    return parser


def main(argv=None):
    """Main function for CLI."""
    args = build_parser().parse_args(argv)
    verbose = not args.quiet
    
    if verbose:
        print_banner()
    
    width, height = args.size
    
    try:
        if args.pattern == 'noise':
            source = PATTERNS['noise'](width, height, seed=args.seed)
        else:
            source = PATTERNS[args.pattern](width, height)
    except Exception as e:
        print(f"Error generating test image: {str(e)}")
        return 1
    
    if verbose:
        print(f"Source: {args.pattern} {source.width}x{source.height} ({source.nbytes} bytes)")
    
    harness = RoundTripHarness(
        resampler_params={'filter_name': args.filter},
        verbose=verbose,
    )
    
    start_time = time.time()
    
    try:
        if args.grayscale:
            if verbose:
                print("\nApplying grayscale...")
            apply_grayscale(source)
        
        if args.resize:
            new_width, new_height = args.resize
            if verbose:
                print(f"\nResizing with {args.filter}...")
            result = harness.resampler.resize(source, new_width, new_height)
            line = f"{source.width}x{source.height} -> {result.width}x{result.height}"
        else:
            if verbose:
                print(f"\nRound trip with {args.filter}...")
            report = harness.evaluate(source, args.ratio)
            line = report.summary()
        
        elapsed_time = time.time() - start_time
    
    except Exception as e:
        print(f"\nError during processing: {str(e)}")
        return 1
    
    if verbose:
        print(f"\n✓ Success!")
        print(f"  Processing time: {elapsed_time:.3f} seconds")
    print(line)
    
    return 0


if __name__ == '__main__':
    sys.exit(main())
