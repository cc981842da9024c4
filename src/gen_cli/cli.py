"""Command-line interface for fal image generation."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from gen_cli.client import FalClient
from gen_cli.core.exceptions import GenCLIError
from gen_cli.models import (
    DEFAULT_MODEL,
    MODELS,
    model_aliases_for,
    resolve_endpoint,
    resolve_model,
)
from gen_cli.request import (
    GenerationConfig,
    Mode,
    build_request,
    resolve_size_directive,
)
from gen_cli.settings import get_output_dir, get_settings
from gen_cli.utils import download_image, resolve_output_path

MODELS_COMMANDS = ("models", "ls", "list")

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI output.

    Args:
        verbose: Enable debug logging.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def list_models() -> int:
    """Print available models."""
    print("Available Models:\n")
    for name, entry in MODELS.items():
        edit_support = "supports edit" if entry.supports_edit else "no edit"
        aliases = model_aliases_for(name)
        alias_str = f" (alias: {', '.join(aliases)})" if aliases else ""
        print(f"  {name:<17}  {edit_support}{alias_str}")
    print()
    print('Use -i flag to enable edit mode (e.g., gen "prompt" -i image.png)')
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the generate command."""
    parser = argparse.ArgumentParser(
        prog="gen",
        description="""Generate and edit images using fal AI models.

Requires FAL_KEY (checked in order: env var, ./.env, ~/.gen-cli/.env).
Images are saved to ~/.gen-cli/output/ by default.

If -i/--image flags are provided, edit mode is used automatically.
Otherwise, a new image is generated from the prompt.""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  %(prog)s models         List available models (aliases: ls, list)

Examples:
  %(prog)s "a cat in space"
  %(prog)s "cyberpunk city" -m flux2-pro -s 16:9
  %(prog)s "add sunglasses" -i photo.png
  %(prog)s "@image1 in the style of @image2" -i content.png -i style.png -m flux2-pro

FLUX models reference multiple images as @image1, @image2, etc.
flux2-flex also understands HEX color codes ("a wall painted in #2ECC71").

Limits: flux2-pro supports up to 9 images (9MP total),
        flux2-flex supports up to 10 images (14MP total),
        nano-banana-pro supports up to 14 images.
        """,
    )

    parser.add_argument(
        "prompt",
        nargs="?",
        help="Text prompt describing the image to generate",
    )

    parser.add_argument(
        "-m",
        "--model",
        default=DEFAULT_MODEL,
        help=f"Model to use (default: {DEFAULT_MODEL})",
    )

    parser.add_argument(
        "-i",
        "--image",
        action="append",
        dest="images",
        default=[],
        help="Input image(s) for editing (can be used multiple times)",
    )

    parser.add_argument(
        "-s",
        "--size",
        default="",
        help="Aspect ratio: 16:9, 4:3, 1:1, 3:4, 9:16 (default: 4:3 for gen, auto for edit)",
    )

    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=["png", "jpeg"],
        default="png",
        help="Output format (default: png)",
    )

    parser.add_argument(
        "-o",
        "--output",
        default="",
        help="Output file path or directory (default: ~/.gen-cli/output/generated_TIMESTAMP.FORMAT)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=-1,
        help="Seed for reproducibility",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def generate(config: GenerationConfig) -> int:
    """Run one generate or edit request end to end.

    Args:
        config: Parsed user configuration.

    Returns:
        Exit code (0 for success).

    Raises:
        GenCLIError: On any failure.
    """
    entry = resolve_model(config.model)
    is_edit = config.mode is Mode.EDIT
    model_path = resolve_endpoint(entry, edit=is_edit, requested_as=config.model)
    settings = get_settings()

    directive = resolve_size_directive(entry, config.mode, config.size, config.images)
    if directive.detected:
        width, height = directive.detected
        print(f"Input image: {width}x{height} -> using {directive.value}")

    request = build_request(
        entry,
        config,
        directive=directive,
        enable_safety_checker=settings.enable_safety_checker,
    )
    if is_edit:
        print(f"Edit mode: {len(config.images)} input image(s)")

    print(f"Using model: {model_path}")
    if directive.value:
        print(f"Requested size: {directive.value}")

    client = FalClient(settings)
    start = time.monotonic()
    result = client.generate(model_path, request)
    elapsed = time.monotonic() - start

    output_path = resolve_output_path(
        config.output, config.output_format, get_output_dir()
    )
    image = result.images[0]
    print("Downloading image...")
    download_image(image.url, output_path, timeout=settings.download_timeout)

    print(f"Image saved to: {output_path}")
    if image.width > 0:
        print(f"Dimensions: {image.width}x{image.height}")
    print(f"Seed: {result.seed}")
    print(f"Time: {elapsed:.1f}s")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments.

    Returns:
        Exit code.
    """
    args_list = list(sys.argv[1:] if argv is None else argv)

    if args_list and args_list[0] in MODELS_COMMANDS:
        return list_models()

    parser = build_parser()
    args = parser.parse_args(args_list)
    setup_logging(args.verbose)

    if not args.prompt:
        parser.print_help()
        return 0

    config = GenerationConfig(
        prompt=args.prompt,
        model=args.model,
        images=tuple(args.images),
        size=args.size,
        output_format=args.output_format,
        output=args.output,
        seed=args.seed,
    )

    try:
        return generate(config)
    except GenCLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
