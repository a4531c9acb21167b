"""CLI entrypoints for sitegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .builder import SiteBuilder
from .logging import configure_logging


_VERBOSE_HELP = "Increase log verbosity for troubleshooting."


def _subcommand_parents() -> list[argparse.ArgumentParser]:
    """Options shared by every subcommand: verbosity and catalog inputs."""
    # SUPPRESS leaves a top-level -v in place when the subcommand omits it.
    verbosity = argparse.ArgumentParser(add_help=False)
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help=_VERBOSE_HELP
    )

    catalog = argparse.ArgumentParser(add_help=False)
    catalog.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the site root (defaults to current directory).",
    )
    catalog.add_argument(
        "--production",
        action="store_true",
        default=None,
        help="Mark the generated catalog as a production build.",
    )
    catalog.add_argument(
        "--url-base",
        default=None,
        help="Prefix for generated download URLs (overrides .sitegen.yml).",
    )
    return [verbosity, catalog]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitegen",
        description="Build a static site with a versioned download catalog.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help=_VERBOSE_HELP)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a debug log of the run to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    parents = _subcommand_parents()

    build_parser = subparsers.add_parser(
        "build",
        parents=parents,
        help="Assemble the download catalog and write the site.",
    )
    build_parser.add_argument(
        "--outdir",
        default=None,
        help="Output directory (defaults to site.outdir or ./build).",
    )

    subparsers.add_parser(
        "meta",
        parents=parents,
        help="Print the assembled download catalog as JSON.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        parents=parents,
        help="Build the site and serve it locally.",
    )
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sitegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    builder = SiteBuilder()

    if args.command == "build":
        try:
            outcome = builder.run_build(
                args.path,
                production=args.production,
                url_base=args.url_base,
                outdir=args.outdir,
            )
        except RuntimeError as exc:
            parser.exit(1, f"sitegen build failed: {exc}\nRun with --verbose for more details.\n")
        print(
            f"Built {len(outcome.pages)} page(s) for version {outcome.meta.app_version} "
            f"into {_relativize(outcome.outdir)}"
        )
    elif args.command == "meta":
        try:
            meta = builder.load_meta(
                args.path, production=args.production, url_base=args.url_base
            )
        except RuntimeError as exc:
            parser.exit(1, f"sitegen meta failed: {exc}\n")
        print(meta.model_dump_json(indent=2, exclude_none=True))
    elif args.command == "serve":
        from .service import run_service

        try:
            outcome = builder.run_build(
                args.path, production=args.production, url_base=args.url_base
            )
            config = builder.load_config(args.path)
        except RuntimeError as exc:
            parser.exit(1, f"sitegen serve failed: {exc}\nRun with --verbose for more details.\n")
        run_service(
            lambda: outcome.meta,
            outcome.outdir,
            host=args.host or config.serve.host,
            port=args.port or config.serve.port,
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
