"""CLI entrypoints for sitemin commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .gallery import GalleryError
from .logging import configure_logging
from .minify import STRICTNESS_AGGRESSIVE
from .orchestrator import BuildError, Orchestrator, OutputRootError, SourceRootError

EXIT_OK = 0
EXIT_GALLERY_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_OUTPUT_ERROR = 3
EXIT_IO_ERROR = 4


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    verbose_kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
        "default": argparse.SUPPRESS if suppress_default else False,
    }
    parser.add_argument("-v", "--verbose", **verbose_kwargs)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log output to this file.",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitemin",
        description="Minify HTML and CSS for a static site and copy the remaining assets.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Rebuild the output directory from the source tree.",
    )
    _add_common_options(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the site source (defaults to current directory).",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Build directory, relative to the source root (defaults to dist).",
    )
    build_parser.add_argument(
        "--aggressive",
        action="store_true",
        help="Merge all whitespace between tags and drop empty CSS rules.",
    )
    build_parser.add_argument(
        "-j",
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of files to process in parallel.",
    )

    gallery_parser = subparsers.add_parser(
        "gallery",
        help="Generate the gallery page and WebP images.",
    )
    _add_common_options(gallery_parser, suppress_default=True)
    gallery_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the site root (defaults to current directory).",
    )
    gallery_parser.add_argument("--source", default=None, help="Directory holding images and captions.")
    gallery_parser.add_argument("--output", default=None, help="Directory for the WebP images.")
    gallery_parser.add_argument("--html", default=None, help="Gallery page to write.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing build and gallery operations.",
    )
    _add_common_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sitemin commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            outcome = orchestrator.run_build(
                args.path,
                build_dir=args.output,
                strictness=STRICTNESS_AGGRESSIVE if args.aggressive else None,
                workers=args.workers,
            )
        except (ConfigError, SourceRootError) as exc:
            parser.exit(EXIT_CONFIG_ERROR, f"{exc}\n")
        except OutputRootError as exc:
            parser.exit(EXIT_OUTPUT_ERROR, f"{exc}\n")
        except BuildError as exc:
            parser.exit(
                EXIT_IO_ERROR, f"sitemin build failed: {exc}\nRun with --verbose for more details.\n"
            )
        print(outcome.summary)
    elif args.command == "gallery":
        try:
            result = orchestrator.run_gallery(
                args.path,
                source_dir=args.source,
                output_dir=args.output,
                html_file=args.html,
            )
        except (ConfigError, SourceRootError) as exc:
            parser.exit(EXIT_CONFIG_ERROR, f"{exc}\n")
        except GalleryError as exc:
            parser.exit(EXIT_GALLERY_FAILED, f"sitemin gallery failed: {exc}\n")
        minutes, seconds = divmod(int(result.elapsed), 60)
        print("-----------------------------------")
        print("Gallery generation complete!")
        print(f"Compilation complete in {minutes} minutes and {seconds} seconds.")
        print(f"Generated files: {_relativize(result.html_path)} and {_relativize(result.output_dir)}/")
        if result.skipped:
            print(f"Skipped {len(result.skipped)} image(s); see warnings above.")
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
