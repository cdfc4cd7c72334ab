"""CLI entrypoints for hintgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .pipeline import PreloadPipeline


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hintgen",
        description="Inject preload and preconnect hints into built HTML pages.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    inject_parser = subparsers.add_parser(
        "inject",
        help="Add resource hints to every HTML page in a build directory.",
    )
    _add_verbose_option(inject_parser, suppress_default=True)
    inject_parser.add_argument(
        "path",
        nargs="?",
        default="dist",
        help="Path to the build output directory (defaults to ./dist).",
    )
    inject_parser.add_argument(
        "--config",
        default=None,
        help="Path to .hintgen.yml (defaults to the current directory).",
    )
    inject_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the pages that would change without writing them.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for hintgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "inject":
        config_path = Path(args.config) if args.config else Path.cwd()
        try:
            options = load_config(config_path)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")

        dry_run = bool(getattr(args, "dry_run", False))
        try:
            outcomes = PreloadPipeline(options).run(args.path, dry_run=dry_run)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except Exception as exc:  # pragma: no cover - defensive guard
            parser.exit(1, f"hintgen inject failed: {exc}\nRun with --verbose for more details.\n")

        changed = sum(1 for outcome in outcomes if outcome.changed)
        suffix = " (dry-run)" if dry_run else ""
        print(f"{changed} of {len(outcomes)} page(s) updated{suffix}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
