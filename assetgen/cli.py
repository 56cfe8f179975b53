"""Command-line interface for the assetgen project."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from .errors import AssetGenerationError
from .generator import DEFAULT_LOGO_SPLASH_SCALE, AssetGeneratorOptions
from .inputs.discover import DEFAULT_ASSETS_DIR, discover_inputs
from .io.models import OutputAsset
from .io.outputs import summarize, write_output_table, write_summary
from .platforms.ios.generator import IosAssetGenerator
from .project import Project


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for asset generation."""
    parser = argparse.ArgumentParser(
        description="Generate iOS app icons and splash screens from source images."
    )
    parser.add_argument(
        "--project",
        default=".",
        help="Root directory of the native app project (default: current directory).",
    )
    parser.add_argument(
        "--assets",
        default=None,
        help=f"Directory holding the source images (default: <project>/{DEFAULT_ASSETS_DIR}).",
    )
    parser.add_argument(
        "--ios-path",
        default=None,
        help="Path to the iOS platform directory, relative to the project (default: ios).",
    )
    parser.add_argument(
        "--logo-splash-scale",
        type=float,
        default=DEFAULT_LOGO_SPLASH_SCALE,
        help="Fraction of the logo's width drawn on generated splash screens.",
    )
    parser.add_argument(
        "--splash-background-color",
        default=None,
        help="Background colour of the light splash screen (default #ffffff).",
    )
    parser.add_argument(
        "--splash-background-color-dark",
        default=None,
        help="Background colour of the dark splash screen (default #111111).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum number of variants written in parallel.",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Directory where a Parquet table and JSON summary of the run are written.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every file written.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def build_options(args: argparse.Namespace) -> AssetGeneratorOptions:
    return AssetGeneratorOptions(
        logo_splash_scale=args.logo_splash_scale,
        splash_background_color=args.splash_background_color,
        splash_background_color_dark=args.splash_background_color_dark,
        max_workers=args.workers,
    )


def run(args: argparse.Namespace) -> list[OutputAsset]:
    """Generate assets for every input found and return what was written."""
    project = Project.load(args.project, args.ios_path)
    assets_dir = Path(args.assets) if args.assets else project.directory / DEFAULT_ASSETS_DIR
    generator = IosAssetGenerator(build_options(args))

    inputs = discover_inputs(assets_dir)
    if not inputs:
        print(f"[skip] no source images found in {assets_dir}")
        return []

    generated: list[OutputAsset] = []
    for asset in tqdm(inputs, desc="Generating assets", unit="input", leave=False):
        outputs = generator.generate(asset, project)
        if not outputs:
            print(f"[skip] {asset.path.name}: no iOS outputs for {asset.kind.value}")
            continue
        print(f"[generate] {asset.path.name} -> {len(outputs)} files")
        generated.extend(outputs)

    if args.report:
        report_dir = Path(args.report)
        summary = summarize(str(project.directory), len(inputs), generated)
        table_path = write_output_table(report_dir / "assets.parquet", generated)
        summary_path = write_summary(report_dir / "summary.json", summary)
        print(f"[report] {summary.outputs} files, {summary.bytes_written} bytes -> {summary_path}")
        if table_path:
            print(f"[report] table written to {table_path}")
    return generated


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        run(args)
    except AssetGenerationError as exc:
        print(f"[error] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
