"""
Command-line entry point

Usage:
    densify PATH [PATH ...] [--platform android|ios] [--formats ldpi,hdpi]
            [--resample bicubic|lanczos] [--workers N] [--config FILE] [--json]

Arguments:
    PATH: Image files or folders (scanned recursively for raster images)
    --platform: Naming scheme used to classify images (default from config)
    --formats: Comma separated markers to generate (default: all)
    --json: Print the full batch result as JSON instead of a summary

Exit codes: 0 clean batch, 1 at least one failure reported, 2 usage or config error
"""

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from densify import __version__
from densify.classifiers import ClassifierFactory
from densify.core.logger import get_logger, setup_logging
from densify.core.settings import get_settings
from densify.models.responses import BatchResult
from densify.processing import get_resize_pipeline
from densify.processing.image import RESAMPLE_FILTERS

logger = get_logger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}


def collect_inputs(paths: Iterable[str]) -> List[Path]:
    """Expand files and folders into an ordered, de-duplicated list of images

    Raises:
        FileNotFoundError: a path does not exist
    """
    found: List[Path] = []
    seen = set()

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(
                item
                for item in path.rglob("*")
                if item.is_file()
                and item.suffix.lower() in IMAGE_EXTENSIONS
                and not item.name.startswith(".")
            )
        elif path.is_file():
            candidates = [path]
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")

        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                found.append(candidate)

    return found


def print_summary(result: BatchResult):
    for group in result.groups:
        if group.success:
            created = ", ".join(
                f"{entry.size_class} {entry.width}x{entry.height}"
                for entry in group.synthesized()
            )
            print(f"✅ {group.identifier}: {created or 'nothing to generate'}")
        else:
            print(f"❌ {group.identifier}")
            for failure in group.failures():
                where = f" [{failure.size_class}]" if failure.size_class else ""
                print(f"    {failure.error_type}{where}: {failure.message}")

    for rejection in result.rejected:
        print(f"❌ {rejection.path}: {rejection.error_type}: {rejection.error}")

    print()
    print(
        f"Groups: {len(result.groups)}, "
        f"generated: {sum(len(group.synthesized()) for group in result.groups)}, "
        f"failures: {len(result.failures())}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="densify",
        description="Generate missing density variants of raster images",
    )
    parser.add_argument("paths", nargs="+", help="Image files or folders")
    parser.add_argument(
        "--platform",
        choices=ClassifierFactory.platforms(),
        help="Naming scheme of the inputs (default from config)",
    )
    parser.add_argument(
        "--formats",
        help="Comma separated size markers to generate, e.g. 'hdpi,xhdpi' (default: all)",
    )
    parser.add_argument(
        "--resample",
        choices=sorted(RESAMPLE_FILTERS),
        help="Interpolation kernel (default from config)",
    )
    parser.add_argument("--workers", type=int, help="Groups processed in parallel")
    parser.add_argument("--config", help="TOML file overriding the default configuration")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    parser.add_argument("--json", action="store_true", help="Print the batch result as JSON")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        get_settings(config_path=args.config, reload=True)
        setup_logging(args.log_level)
        pipeline = get_resize_pipeline(
            platform=args.platform,
            output_formats=args.formats,
            resample=args.resample,
            max_workers=args.workers,
        )
        inputs = collect_inputs(args.paths)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Collected {len(inputs)} input image(s)")
    result = pipeline.run(inputs)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_summary(result)

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
