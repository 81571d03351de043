#!/usr/bin/env python3
"""
Galaxy Field

Procedurally generated, animated 3D field of galaxies, rendered with Vispy.

Usage:
    python main.py                          # Browse the built-in catalog
    python main.py --select cartwheel       # Start with a specific galaxy
    python main.py --catalog galaxies.json  # Use a catalog from a JSON file
    python main.py --export out.h5          # Write particle buffers and exit
"""

import argparse
import logging
import sys
from pathlib import Path

from galaxy_field.catalog import DEFAULT_CATALOG, load_catalog
from galaxy_field.config import HELP_CONTENT
from galaxy_field.animation.scene import GalaxyScene
from galaxy_field.state.persistence import save_buffers

# Note: visualization.renderer is imported lazily in main() to avoid
# loading graphics libraries for --help, --list and --export


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Galaxy Field - procedural, animated galaxy browser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_CONTENT,
    )
    parser.add_argument(
        '--catalog',
        '-c',
        type=str,
        metavar='FILE',
        help='Load the galaxy catalog from a JSON file (default: built-in catalog)',
    )
    parser.add_argument(
        '--select',
        '-s',
        type=str,
        default=None,
        metavar='ID',
        help='Galaxy id to select at start (unknown ids fall back to the first)',
    )
    parser.add_argument(
        '--list',
        '-l',
        action='store_true',
        help='Print the catalog and exit',
    )
    parser.add_argument(
        '--export',
        '-e',
        type=str,
        default=None,
        metavar='FILE',
        help='Generate all particle buffers, save them to an HDF5 file and exit',
    )
    parser.add_argument(
        '--point-size',
        '-p',
        type=float,
        default=1.0,
        metavar='SCALE',
        help='Multiplier on rendered point sizes (default: 1.0)',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable debug logging',
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.catalog:
        catalog_path = Path(args.catalog)
        if not catalog_path.exists():
            print(f"Error: File not found: {catalog_path}")
            sys.exit(1)
        print(f"Loading catalog from: {catalog_path}")

    try:
        catalog = load_catalog(catalog_path) if args.catalog else DEFAULT_CATALOG
        galaxy_scene = GalaxyScene(catalog, selected=args.select)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.list:
        for instance in galaxy_scene.instances:
            print(
                f"{instance.index:2d}  {instance.id:<24} {instance.type:<28} "
                f"{instance.morphology.value}"
            )
        return

    print(f"Generating particle fields for {len(galaxy_scene.instances)} galaxies...")
    try:
        buffers = galaxy_scene.all_buffers()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    total = sum(b.primary.count + b.bulge.count + b.dust.count for b in buffers.values())
    print(f"Generated {total} particles.")

    if args.export:
        filepath = save_buffers(Path(args.export), galaxy_scene.instances, buffers)
        print(f"Saved to: {filepath}")
        return

    # Import here to avoid loading graphics libraries when only exporting
    from galaxy_field.visualization.renderer import run_visualization

    print("Use --help for command-line options.")
    print("Press H in the visualization window to toggle on-screen help.")
    print(f"Selected: {galaxy_scene.interaction.selected}")
    try:
        run_visualization(galaxy_scene, point_size_scale=args.point_size)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        print("Done.")


if __name__ == '__main__':
    main()
