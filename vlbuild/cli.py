"""CLI entrypoints for vlbuild commands."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import ConfigError, load_snapshot
from .emitter import BuildPlanEmitter, OutputUnavailableError
from .logging import configure_logging


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
        prog="vlbuild",
        description="Emit the vl_build.json build plan for a finished Verilator compilation.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    emit_parser = subparsers.add_parser(
        "emit",
        help="Write the build plan document described by a snapshot file.",
    )
    _add_verbose_option(emit_parser, suppress_default=True)
    emit_parser.add_argument(
        "snapshot",
        help="YAML file holding the compiler configuration and generated file list.",
    )
    emit_parser.add_argument(
        "--make-dir",
        type=Path,
        default=None,
        help=(
            "Override the output directory recorded in the snapshot. A relative path "
            "resolves against the current directory, unlike make_dir inside the "
            "snapshot, which resolves against the snapshot file's directory."
        ),
    )
    emit_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the document to stdout instead of writing it.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for vlbuild commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "emit":
        try:
            config, files = load_snapshot(Path(args.snapshot))
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"vlbuild emit failed: {exc}\n")
        if args.make_dir is not None:
            config = dataclasses.replace(config, make_dir=args.make_dir.expanduser().resolve())

        emitter = BuildPlanEmitter(config, files)
        if args.dry_run:
            sys.stdout.write(emitter.render())
            return
        try:
            path = emitter.emit()
        except OutputUnavailableError as exc:
            parser.exit(1, f"vlbuild emit failed: {exc}\n")
        print(f"Build plan written to {_relativize(path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
