#!/usr/bin/env python
"""
Pixel Prefab CLI - Convert pixel art into rectangle prefabs

Usage:
    python main.py <input_image> [options]

Examples:
    python main.py torch.gif                         # torch.vgp next to the image
    python main.py torch.gif --ppu 16 --loop         # 16 pixels per unit, looping
    python main.py logo.png --halign center --valign center --hit
    python main.py torch.gif --config torch.yaml     # settings from YAML
"""

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert pixel art (PNG, animated GIF, ...) into a rectangle prefab",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s torch.gif                          # Default settings
  %(prog)s torch.gif -o out/torch.vgp --loop  # Loop until lifetime ends
  %(prog)s logo.png --ppu 8 --halign center   # Centered, 8 px per unit
  %(prog)s logo.png --config logo.yaml        # Load settings from YAML
  %(prog)s logo.png --save-config logo.yaml   # Save the effective settings
        """
    )

    parser.add_argument(
        'input',
        type=str,
        help='Input image (PNG, GIF, WebP, ...)'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output .vgp path (default: <input>.vgp)'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        metavar='FILE',
        help='YAML settings file; command line options override it'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        default=None,
        metavar='FILE',
        help='Write the effective settings to a YAML file'
    )

    parser.add_argument('--name', type=str, default=None, help='Prefab name (default: input file name)')
    parser.add_argument('--description', type=str, default=None, help='Prefab description')
    parser.add_argument('--type', dest='prefab_type', type=int, default=None, help='Prefab type code')

    parser.add_argument(
        '--ppu', '--pixels-per-unit',
        dest='pixels_per_unit',
        type=float,
        default=None,
        help='Pixels per editor unit (default: 1)'
    )

    parser.add_argument(
        '--halign',
        dest='horizontal_alignment',
        type=str,
        default=None,
        choices=['left', 'center', 'right'],
        help='Horizontal origin alignment (default: left)'
    )

    parser.add_argument(
        '--valign',
        dest='vertical_alignment',
        type=str,
        default=None,
        choices=['top', 'center', 'bottom'],
        help='Vertical origin alignment (default: top)'
    )

    parser.add_argument('--lifetime', type=float, default=None, help='Object lifetime in seconds (default: 5)')
    parser.add_argument('--depth', type=int, default=None, help='Render depth (default: 20)')

    parser.add_argument(
        '--hit',
        dest='use_hit_objects',
        action='store_true',
        default=None,
        help='Make rectangles hit objects'
    )

    parser.add_argument('-s', '--speed', type=float, default=None, help='Playback speed multiplier (default: 1.0)')

    parser.add_argument(
        '--loop',
        dest='looped',
        action='store_true',
        default=None,
        help='Repeat the animation until the lifetime ends'
    )

    parser.add_argument('--seed', type=int, default=None, help='Object id seed (default: 0)')

    parser.add_argument(
        '--strict-slots',
        action='store_true',
        help='Fail when frames decompose into different rectangle counts'
    )

    parser.add_argument(
        '-j', '--jobs',
        type=int,
        default=None,
        help='Decompose frames on this many threads'
    )

    parser.add_argument(
        '--indent',
        type=int,
        default=None,
        help='Indent the JSON output'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show pipeline details'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s'
    )

    from pathlib import Path
    from pixel_prefab import generate_prefab
    from pixel_prefab.core import ExportSettings, ImageLoader, PrefabExporter
    from pixel_prefab.core import load_settings, save_settings

    try:
        input_path = Path(args.input)
        settings = load_settings(args.config) if args.config else ExportSettings(name=input_path.stem)

        settings = settings.replace(
            name=args.name,
            description=args.description,
            prefab_type=args.prefab_type,
            pixels_per_unit=args.pixels_per_unit,
            horizontal_alignment=args.horizontal_alignment,
            vertical_alignment=args.vertical_alignment,
            lifetime=args.lifetime,
            depth=args.depth,
            use_hit_objects=args.use_hit_objects,
            speed=args.speed,
            looped=args.looped,
            seed=args.seed,
            slot_policy='strict' if args.strict_slots else None
        )

        if args.save_config:
            print(f"Settings: {save_settings(settings, args.save_config)}")

        print(f"Loading {input_path}...")
        image = ImageLoader.load(input_path)
        print(f"  {image.width}x{image.height}, {len(image.frames)} frame(s)")

        prefab = generate_prefab(image, settings, max_workers=args.jobs)
        print(f"  {len(prefab.objects) - 1} rectangle object(s)")

        output_path = args.output or PrefabExporter.default_path(input_path)
        output = PrefabExporter.to_vgp(prefab, output_path, indent=args.indent)
        palette_output = PrefabExporter.to_palette(prefab, PrefabExporter.palette_path(output))

        if args.verbose:
            print(f"  Palette ({len(prefab.palette)} color(s)):")
            for i, hex_color in enumerate(PrefabExporter.palette_listing(prefab)):
                print(f"    {i}: {hex_color}")

        print(f"Output: {output}")
        print(f"Palette: {palette_output}")
        print("Done!")

    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
