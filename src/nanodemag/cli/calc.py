"""Single geometry calculation CLI.

Usage:
    python -m nanodemag.cli.calc --geometry cylinder --thickness 2 --diameter 30
    python -m nanodemag.cli.calc --geometry prism --a 20 --b 20 --c 2 --in-plane
    python -m nanodemag.cli.calc --geometry thin-film --ms 1400 --ku 0.5

Outputs JSON with factors, anisotropy analysis and derived quantities to stdout.
Dimension flags are named after the fields of the geometry types.
"""

from __future__ import annotations

import argparse
import dataclasses
import json

from ..core.types import GEOMETRY_KINDS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Demagnetization factors and shape anisotropy")
    parser.add_argument("--geometry", choices=list(GEOMETRY_KINDS), default="cylinder", help="Geometry type")
    parser.add_argument("--a", type=float, default=None, help="Prism edge along x (nm)")
    parser.add_argument("--b", type=float, default=None, help="Prism edge along y (nm)")
    parser.add_argument("--c", type=float, default=None, help="Prism edge along z (nm)")
    parser.add_argument("--thickness", type=float, default=None, help="Cylinder thickness (nm)")
    parser.add_argument("--diameter", type=float, default=None, help="Cylinder/sphere diameter (nm)")
    parser.add_argument("--ms", type=float, default=None, help="Saturation magnetization (kA/m)")
    parser.add_argument("--ku", type=float, default=None, help="Crystalline anisotropy (MJ/m^3)")
    parser.add_argument("--exchange", type=float, default=None, help="Exchange stiffness (pJ/m)")
    parser.add_argument("--temperature", type=float, default=None, help="Temperature (K)")
    parser.add_argument(
        "--in-plane",
        action="store_true",
        help="Crystalline easy axis in plane (default: out of plane)",
    )
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument(
        "--log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARN", "ERROR"]
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run a single calculation.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = success, 1 = calculation error).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    geometry_cls = GEOMETRY_KINDS[args.geometry]
    names = [f.name for f in dataclasses.fields(geometry_cls)]
    missing = [f"--{name}" for name in names if getattr(args, name) is None]
    if missing:
        parser.error(f"{args.geometry} requires {', '.join(missing)}")

    from ..core.config import default_config, load_config, merge_config
    from ..core.engine import DemagCalculator
    from ..core.logging import set_log_level

    config = load_config(args.config) if args.config else default_config()
    config = merge_config(
        config,
        {
            "material.ms_ka_per_m": args.ms,
            "material.ku_mj_per_m3": args.ku,
            "material.exchange_pj_per_m": args.exchange,
            "material.temperature_k": args.temperature,
            "crystalline_easy_axis_in_plane": True if args.in_plane else None,
        },
    )

    set_log_level(args.log_level or config.log_level)

    dims = geometry_cls(**{name: getattr(args, name) for name in names})

    calculator = DemagCalculator(config)
    result = calculator.calculate(dims)

    print(json.dumps(result.to_dict(), indent=2))

    return 0 if result.ok else 1


if __name__ == "__main__":
    import sys

    sys.exit(main())
