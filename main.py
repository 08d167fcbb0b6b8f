#!/usr/bin/env python3
"""
Luma - A Python Monte Carlo Path Tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from luma.camera import Camera
from luma.renderer import Renderer, RenderSettings, RenderCancelled, get_platform_info
from luma.scene_parser import OutputSettings, SceneParseError, default_scene, load_scene

PROGRESS_SIZE = 75


def print_progress(progress: float) -> None:
    """Draw a textual progress bar on the current console line."""
    bar = ''.join('#' if i / PROGRESS_SIZE < progress else ' ' for i in range(PROGRESS_SIZE))
    print(f'\r[{bar}] {int(progress * 100)}%', end='', flush=True)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Luma - A Python Monte Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 64 --height 36 --samples 4 --scale 8
  python main.py --scene scenes/default.yaml --sampler sobol
        '''
    )

    parser.add_argument('--scene', type=str, default=None, help='Scene file (YAML or JSON)')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 240)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 135)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 16)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 10)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (default: 0)')
    parser.add_argument('--sampler', type=str, default=None, choices=['random', 'sobol'],
                        help='Sampler for bounce directions (default: random)')
    parser.add_argument('--mode', type=str, default=None,
                        choices=['radiance', 'ambient_occlusion', 'normals'],
                        help='Shading mode (default: radiance)')
    parser.add_argument('--scale', type=int, default=None, help='Output upscale factor (default: 16)')
    parser.add_argument('--output', type=str, default=None, help='Output filename (default: output.png)')
    parser.add_argument('--info', action='store_true', help='Show platform info and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s'
    )

    # Show platform info
    if args.info:
        info = get_platform_info()
        print("Luma Platform Info:")
        print(f"  System: {info['system']}")
        print(f"  Machine: {info['machine']}")
        print(f"  Processor: {info['processor']}")
        print(f"  Python: {info['python_version']}")
        print(f"  CPU Cores: {info['cpu_count']}")
        print(f"  ARM: {info['is_arm']}")
        print(f"  x86: {info['is_x86']}")
        print(f"  Apple Silicon: {info['is_apple_silicon']}")
        return 0

    # Load scene, falling back to the built-in one
    try:
        if args.scene:
            world, camera, settings, output = load_scene(args.scene)
        else:
            world = default_scene()
            settings = RenderSettings()
            camera = None
            output = OutputSettings(scale=16)

        overrides = {
            'width': args.width,
            'height': args.height,
            'samples_per_pixel': args.samples,
            'max_depth': args.depth,
            'num_threads': args.threads,
            'seed': args.seed,
            'sampler': args.sampler,
            'mode': args.mode,
        }
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if overrides:
            values = {**vars(settings), **overrides}
            settings = RenderSettings(**values)
            if 'width' in overrides or 'height' in overrides:
                camera = None
        if camera is None:
            camera = Camera(settings.width / settings.height)
        if args.scale is not None:
            output.scale = args.scale
        if args.output is not None:
            output.path = args.output
    except (SceneParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 60)
    print("Luma Path Tracer")
    print("=" * 60)
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Sampler: {settings.sampler}")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)
    renderer.set_progress_callback(print_progress)

    start_time = time.time()
    try:
        image = renderer.render(world, camera)
    except (RenderCancelled, KeyboardInterrupt):
        renderer.cancel()
        print("\nRender cancelled")
        return 1
    print()

    elapsed = time.time() - start_time
    print(f"Render completed in {elapsed:.2f} seconds")
    print(f"  Paths per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    # Ensure output directory exists
    output_path = Path(output.path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {output_path} (scale {output.scale})")
    image.save(output_path, scale=output.scale)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
