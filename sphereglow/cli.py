"""
SphereGlow - A small Monte Carlo path tracer

Command-line interface for rendering the built-in scene.
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

from .camera import Camera
from .config import ConfigError, load_settings
from .integrator import TraceSettings
from .renderer import Renderer, RenderSettings
from .scene import build_default_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SphereGlow - A small Monte Carlo path tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  sphereglow --output image.ppm
  sphereglow --width 600 --height 240 --samples 64 --seed 7 --output render.png
  sphereglow --config settings.yaml --russian-roulette
        '''
    )

    parser.add_argument('--config', type=str, default=None, help='JSON or YAML settings file')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 300)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 120)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 8)')
    parser.add_argument('--bounces', type=int, default=None, help='Bounce budget (default: 8)')
    parser.add_argument('--exposure', type=float, default=None, help='Pre-tonemap exposure (default: 0.5)')
    parser.add_argument('--russian-roulette', action='store_true', default=None,
                        help='Enable Russian roulette path termination')
    parser.add_argument('--no-aa', action='store_true', help='Disable sub-pixel jitter')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (default: random)')
    parser.add_argument('--threads', type=int, default=None, help='Number of worker threads (default: 1)')
    parser.add_argument('--output', type=str, default='output/image.ppm', help='Output filename')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def resolve_settings(args: argparse.Namespace) -> tuple[TraceSettings, RenderSettings]:
    """Combine the settings file (if any) with command-line overrides."""
    if args.config:
        trace_settings, render_settings = load_settings(args.config)
    else:
        trace_settings, render_settings = TraceSettings(), RenderSettings()

    trace_overrides = {
        'n_bounces': args.bounces,
        'exposure': args.exposure,
        'enable_russian_roulette': args.russian_roulette,
    }
    render_overrides = {
        'width': args.width,
        'height': args.height,
        'samples_per_pixel': args.samples,
        'num_threads': args.threads,
        'seed': args.seed,
    }
    if args.no_aa:
        render_overrides['enable_aa'] = False

    trace_settings = dataclasses.replace(
        trace_settings, **{k: v for k, v in trace_overrides.items() if v is not None}
    )
    render_settings = dataclasses.replace(
        render_settings, **{k: v for k, v in render_overrides.items() if v is not None}
    )
    return trace_settings, render_settings


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        trace_settings, settings = resolve_settings(args)
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # Print header
    print("=" * 60)
    print("SphereGlow Path Tracer")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Bounces: {trace_settings.n_bounces}")
    print(f"  Exposure: {trace_settings.exposure}")
    print(f"  Russian roulette: {trace_settings.enable_russian_roulette}")
    print(f"  Threads: {settings.num_threads}")

    world = build_default_scene()
    camera = Camera()
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings, trace_settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Samples per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, str(output_path))

    print("\nDone!")
    return 0
