"""Main module for the image variants CLI."""

import argparse
import json
import sys
from typing import Any, Dict, List
from urllib.parse import quote_plus

from . import __version__
from .core.factories import PipelineFactory
from .core.models import PipelineConfig
from .core.planner import plan_variants


def build_event(bucket: str, keys: List[str]) -> Dict[str, Any]:
    """
    Build a minimal object-created notification for ``keys`` in ``bucket``.

    Keys are form-encoded the way storage notifications deliver them.
    """
    return {
        "Records": [
            {
                "s3": {
                    "bucket": {"name": bucket},
                    "object": {"key": quote_plus(key, safe="/")},
                }
            }
            for key in keys
        ]
    }


def main() -> None:
    """
    Entry point for the command-line interface.

    ``process`` runs the pipeline against real S3 objects as if a
    notification had arrived for them, ``plan`` shows which breakpoints a
    source width yields, and ``version`` prints version information.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="image-variants",
        description="Image Variants - responsive WebP variants for uploaded images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate variants for one uploaded image
  image-variants process --bucket media --key uploads/artist/photo.jpg

  # Several images, four at a time
  image-variants process --bucket media --key a.jpg --key b.png --workers 4

  # Which widths would a 1000px source get?
  image-variants plan --width 1000
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Generate variants for existing S3 objects"
    )
    process_parser.add_argument("--bucket", required=True, help="S3 bucket")
    process_parser.add_argument(
        "--key",
        required=True,
        action="append",
        dest="keys",
        help="Source object key (repeatable)",
    )
    process_parser.add_argument(
        "--workers", type=int, default=None, help="Records processed concurrently"
    )
    process_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    plan_parser = subparsers.add_parser(
        "plan", help="Show the breakpoints planned for a source width"
    )
    plan_parser.add_argument(
        "--width", type=int, required=True, help="Source width in pixels"
    )

    subparsers.add_parser("version", help="Show version information")

    args: argparse.Namespace = parser.parse_args()

    if args.command == "process":
        config = PipelineConfig.from_env()
        overrides: Dict[str, Any] = {}
        if args.workers is not None:
            overrides["max_workers"] = args.workers
        if args.debug:
            overrides["log_level"] = "DEBUG"
        if overrides:
            config = PipelineConfig(**{**config.model_dump(), **overrides})

        orchestrator = PipelineFactory.create_pipeline(config=config)
        response = orchestrator.handle_event(build_event(args.bucket, args.keys))
        print(json.dumps(response.body, indent=2))
        sys.exit(0 if response.status_code == 200 else 1)

    elif args.command == "plan":
        widths = plan_variants(args.width)
        print(json.dumps({"width": args.width, "variants": widths}))
        sys.exit(0)

    elif args.command == "version":
        print("Image Variants CLI")
        print(f"Version {__version__}")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
