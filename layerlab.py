#!/usr/bin/env python3
"""
LayerLab — Image Filter Engine
CLI entry point. Also importable as a library.

Usage:
    python layerlab.py list-presets
    python layerlab.py compile vivid --intensity 60
    python layerlab.py compile vivid-warm --intensity 60 --css
    python layerlab.py apply photo.jpg out.png --preset noir --intensity 80
    python layerlab.py apply photo.jpg out.png --preset dramaticWarm --full
    python layerlab.py grid photo.jpg thumbs/ --intensity 100
    python layerlab.py ui
"""

import sys
import os
import argparse
from pathlib import Path

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.compiler import compile as compile_preset, compile_settings, to_css, clamp_intensity
from core.image_io import load_image, save_image
from core.operations import describe
from core.preview import render_preview_grid, THUMBNAIL_SIZE
from core.render import render
from core.safety import preflight
from presets import list_all, get_preset

__version__ = "0.1.0"


def _program_for(args) -> tuple:
    """Pick the intensity-scaled or the full-strength settings program."""
    if getattr(args, "full", False):
        return compile_settings(args.preset)
    return compile_preset(args.preset, args.intensity)


def _warn_unknown(name: str):
    if get_preset(name) is None:
        print(f"Unknown preset: {name}. Using 'original'. "
              f"Use 'layerlab list-presets' to see all.", file=sys.stderr)


def cmd_list_presets(args):
    """List all filter presets in display order."""
    print(f"\n  Presets ({len(list_all())}):")
    print(f"  {'—' * 50}")
    for p in list_all():
        ops = ", ".join(row.kind for row in p.curve) or "none"
        print(f"    {p.name:15s} {p.label:15s} [{ops}]")
    print()


def cmd_compile(args):
    """Print the compiled program for a preset."""
    args.preset = args.preset.strip()
    _warn_unknown(args.preset)
    ops = _program_for(args)
    if args.css:
        print(to_css(ops))
        return
    intensity = "full" if args.full else f"{clamp_intensity(args.intensity):g}"
    print(f"\n  {args.preset} @ {intensity}")
    print(f"  {'—' * 40}")
    if not ops:
        print("    (identity, no operations)")
    for op in ops:
        d = describe(op)
        extra = f" rgb={tuple(d['rgb'])} blend={d['blend_mode']}" if "rgb" in d else ""
        print(f"    {d['kind']:14s} {d['value']!r}{extra}")
    print()


def cmd_apply(args):
    """Apply a preset to an image file."""
    info = preflight(args.input)
    _warn_unknown(args.preset)
    pixels = load_image(info["path"])
    out = render(pixels, _program_for(args))
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    save_image(out, str(output))
    print(f"Saved: {output} ({out.shape[1]}x{out.shape[0]})")


def cmd_grid(args):
    """Render a thumbnail for every preset."""
    info = preflight(args.input)
    pixels = load_image(info["path"])
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    thumbs = render_preview_grid(pixels, intensity=args.intensity, max_side=args.size)
    for name, thumb in thumbs.items():
        save_image(thumb, str(outdir / f"{name}.png"))
    print(f"Rendered {len(thumbs)} previews to {outdir}")


def cmd_ui(args):
    """Launch the HTTP API."""
    from server import start
    start()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layerlab",
        description="LayerLab — Image Filter Engine",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # list-presets
    sub.add_parser("list-presets", help="List all filter presets")

    # compile
    p = sub.add_parser("compile", help="Show the operations a preset compiles to")
    p.add_argument("preset", help="Preset name")
    p.add_argument("--intensity", type=float, default=100, help="0-100 (clamped)")
    p.add_argument("--css", action="store_true", help="Print as a CSS filter string")
    p.add_argument("--full", action="store_true", help="Use full-strength base settings (incl. warmth overlay)")

    # apply
    p = sub.add_parser("apply", help="Apply a preset to an image")
    p.add_argument("input", help="Input image")
    p.add_argument("output", help="Output image (format from extension)")
    p.add_argument("--preset", required=True, help="Preset name")
    p.add_argument("--intensity", type=float, default=100, help="0-100 (clamped)")
    p.add_argument("--full", action="store_true", help="Use full-strength base settings (incl. warmth overlay)")

    # grid
    p = sub.add_parser("grid", help="Render a preview thumbnail per preset")
    p.add_argument("input", help="Input image")
    p.add_argument("outdir", help="Output directory")
    p.add_argument("--intensity", type=float, default=100, help="0-100 (clamped)")
    p.add_argument("--size", type=int, default=THUMBNAIL_SIZE, help="Thumbnail longest side")

    # ui
    sub.add_parser("ui", help="Launch the HTTP API")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "list-presets": cmd_list_presets,
        "compile": cmd_compile,
        "apply": cmd_apply,
        "grid": cmd_grid,
        "ui": cmd_ui,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
