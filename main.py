#!/usr/bin/env python3
"""
Unified CLI entry point for procanim.

Usage:
    python main.py view [--creature NAME] [--debug]
    python main.py simulate <creature> [--frames N] [--path KIND] [--output FILE]
    python main.py snapshot <creature> [--frames N] [--path KIND] [--output FILE]
"""

import argparse
import logging
import sys


def _load_config(args):
    from procanim.config import load_config

    overrides = {}
    for key in ('width', 'height', 'fps'):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    return load_config(args.config, overrides)


def _simulated_scene(args, config):
    from procanim.scene.state import SceneState
    from procanim.workflows.simulate import make_pointer_path, run_simulation

    scene = SceneState(config.width, config.height, config)
    scene.select(args.creature)

    print(f"Simulating {args.creature}")
    print(f"  Canvas: {config.width}x{config.height}")
    print(f"  Pointer path: {args.path} ({args.frames} frames, {args.loops} loops)")

    path = make_pointer_path(args.path, args.frames, config.width, config.height, loops=args.loops)
    if getattr(args, 'record', False):
        scene.start_recording()

    run_simulation(scene, path, report_every=max(args.frames // 5, 1))
    return scene, path


def cmd_view(args):
    """Open the interactive viewer."""
    from procanim.workflows.viewer import run_viewer

    config = _load_config(args)

    print(f"Opening viewer ({config.width}x{config.height} @ {config.fps} fps)")
    print("  Move the mouse over the canvas to lead the creature")
    print("  Click the canvas to switch creature")
    print("  'Skeleton' toggles the chain debug view")

    scene = run_viewer(config, creature=args.creature, debug=args.debug)
    scene.print_stats()


def cmd_simulate(args):
    """Run a headless simulation and save the scene to JSON."""
    config = _load_config(args)
    scene, _ = _simulated_scene(args, config)
    scene.print_stats()

    output_path = args.output or f"{args.creature}_{args.path}.json"
    scene.save_to_file(output_path)
    print(f"\n✓ Scene saved to: {output_path}")


def cmd_snapshot(args):
    """Simulate, then draw the final pose to an image."""
    from procanim.workflows.simulate import render_snapshot

    config = _load_config(args)
    scene, path = _simulated_scene(args, config)

    output_path = args.output or f"{args.creature}.png"
    render_snapshot(scene, output_path, debug=args.debug, pointer=path[-1])
    print(f"\n✓ Snapshot saved to: {output_path}")


def _add_common_options(parser):
    parser.add_argument('--config', type=str, default=None,
        help='JSON config file overriding the defaults')
    parser.add_argument('--width', type=int, default=None, help='Canvas width')
    parser.add_argument('--height', type=int, default=None, help='Canvas height')


def _add_simulation_options(parser):
    from procanim.models import CREATURES
    from procanim.workflows.simulate import POINTER_PATHS

    parser.add_argument('creature', choices=list(CREATURES), help='Creature to simulate')
    parser.add_argument('--frames', type=int, default=600,
        help='Number of ticks to simulate (default: 600)')
    parser.add_argument('--path', type=str, default='circle', choices=POINTER_PATHS,
        help='Pointer trajectory (default: circle)')
    parser.add_argument('--loops', type=float, default=1.0,
        help='Times a closed trajectory is traversed (default: 1)')
    parser.add_argument('--output', type=str, default=None, help='Output file')


def main(argv=None):
    from procanim.models import CREATURES

    parser = argparse.ArgumentParser(
        description="procanim - Procedural Creature Animation",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # View command
    parser_view = subparsers.add_parser('view',
        help='Open the interactive viewer')
    _add_common_options(parser_view)
    parser_view.add_argument('--creature', type=str, default=None, choices=list(CREATURES),
        help='Creature shown first (default: fish)')
    parser_view.add_argument('--fps', type=int, default=None, help='Frames per second (default: 60)')
    parser_view.add_argument('--debug', action='store_true', help='Start with the skeleton view on')
    parser_view.set_defaults(func=cmd_view)

    # Simulate command
    parser_sim = subparsers.add_parser('simulate',
        help='Drive a creature along a scripted pointer path and save the scene')
    _add_common_options(parser_sim)
    _add_simulation_options(parser_sim)
    parser_sim.add_argument('--record', action='store_true',
        help='Keep a snapshot of every frame in the output')
    parser_sim.set_defaults(func=cmd_simulate)

    # Snapshot command
    parser_snap = subparsers.add_parser('snapshot',
        help='Simulate, then render the final pose to an image')
    _add_common_options(parser_snap)
    _add_simulation_options(parser_snap)
    parser_snap.add_argument('--debug', action='store_true', help='Draw the chains too')
    parser_snap.set_defaults(func=cmd_snapshot)

    # Parse arguments
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command != 'view':
        import matplotlib
        matplotlib.use('Agg')

    # Execute command
    args.func(args)


if __name__ == '__main__':
    main()
