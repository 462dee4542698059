"""Command-line entry point for tmxstream."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tmxstream import __version__
from tmxstream.batch import (
    file_stats,
    remove_info_elements,
    search_replace_attributes,
    split_files_by_tu_count,
)
from tmxstream.config import (
    ON_ERROR_POLICIES,
    SECTION_REMOVE,
    SECTION_REPLACE,
    SECTION_SPLIT,
    BatchOptions,
    FilterOptions,
    RewriteOptions,
    SplitOptions,
    load_settings,
)
from tmxstream.errors import ConfigurationError, TmxStreamError

logger = logging.getLogger("tmxstream")

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _add_batch_arguments(parser: argparse.ArgumentParser, settings: dict, *, output: bool) -> None:
    parser.add_argument(
        "-W", "--cwd", type=Path, default=Path.cwd(),
        help="Working directory in which to search for TMX files",
    )
    parser.add_argument(
        "-F", "--file-match", nargs="+", action="extend", required=True, metavar="GLOB",
        help="TMX file match glob pattern(s), e.g. '**/*.tmx'",
    )
    parser.add_argument(
        "-I", "--file-ignore", nargs="+", action="extend", default=[], metavar="GLOB",
        help="TMX file ignore glob pattern(s)",
    )
    if output:
        parser.add_argument(
            "-O", "--output-path", type=Path, required=True,
            help="Output directory, relative to the working directory",
        )
    parser.add_argument(
        "--on-error", choices=ON_ERROR_POLICIES, default=settings["on_error"],
        help="Stop at the first failing file, or report it and continue",
    )


def build_parser(settings: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmxstream",
        description="Streaming tools for large TMX files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="JSON settings file overriding the defaults")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log warnings and errors only")

    commands = parser.add_subparsers(dest="command", required=True)

    stats = commands.add_parser("file-stats", help="Get file stats for TMX files")
    _add_batch_arguments(stats, settings, output=False)

    remove = commands.add_parser(
        "remove-info-elements",
        help="Remove info elements from TMX files to reduce file size",
    )
    _add_batch_arguments(remove, settings, output=True)
    remove_defaults = settings[SECTION_REMOVE]
    remove.add_argument(
        "-N", "--keep-notes", action="store_true", default=remove_defaults["keep_notes"],
        help="Keep note elements",
    )
    remove.add_argument(
        "-K", "--keep-prop-types", nargs="+", action="extend", metavar="TYPE",
        default=list(remove_defaults["keep_prop_types"]),
        help="Prop elements with these type attributes are kept (e.g. context_prev)",
    )

    replace = commands.add_parser(
        "search-replace-attributes",
        help="Search and replace attribute values in TMX files",
    )
    _add_batch_arguments(replace, settings, output=True)
    replace_defaults = settings[SECTION_REPLACE]
    replace.add_argument(
        "-T", "--tag-names", nargs="+", action="extend", metavar="TAG",
        default=list(replace_defaults["tag_names"]),
        help="Tag names to limit search & replace to",
    )
    replace.add_argument(
        "-A", "--attribute-names", nargs="+", action="extend", metavar="ATTR",
        default=list(replace_defaults["attribute_names"]),
        help="Attribute names to limit search & replace to",
    )
    replace.add_argument(
        "-S", "--search-pattern", required=True,
        help="Regular expression matched against attribute values",
    )
    replace.add_argument(
        "-R", "--search-flags", default=replace_defaults["search_flags"],
        help="Flags for the search pattern: i, m, s, x, and g to replace every match",
    )
    replace.add_argument(
        "-V", "--replacement-value", required=True,
        help=r"Replacement value; \1 or \g<name> refer to captured groups",
    )

    split = commands.add_parser("split-files-by-tu-count", help="Split TMX files by tu element count")
    _add_batch_arguments(split, settings, output=True)
    split.add_argument(
        "-M", "--max-tu-count", type=int, default=settings[SECTION_SPLIT]["max_tu_count"],
        help="Start a new file when the tu count exceeds this maximum",
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run(args: argparse.Namespace, settings: dict) -> int:
    batch = BatchOptions(
        file_match=args.file_match,
        cwd=args.cwd,
        file_ignore=args.file_ignore,
        output_path=getattr(args, "output_path", None),
        on_error=args.on_error,
        chunk_size=settings["chunk_size"],
    )

    if args.command == "file-stats":
        result = file_stats(batch)
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif args.command == "remove-info-elements":
        result = remove_info_elements(
            batch,
            FilterOptions(keep_notes=args.keep_notes, keep_prop_types=args.keep_prop_types),
        )
    elif args.command == "search-replace-attributes":
        result = search_replace_attributes(
            batch,
            RewriteOptions(
                search_pattern=args.search_pattern,
                replacement_value=args.replacement_value,
                tag_names=args.tag_names,
                attribute_names=args.attribute_names,
                search_flags=args.search_flags,
            ),
        )
    else:
        result = split_files_by_tu_count(batch, SplitOptions(max_tu_count=args.max_tu_count))

    for error in result.errors:
        print(f"error: {error}", file=sys.stderr)
    return 0 if result.ok else EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    # --config has to be known before the parser's defaults can be built
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=Path)
    known, _ = pre.parse_known_args(argv)

    try:
        settings = load_settings(known.config)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    args = build_parser(settings).parse_args(argv)
    _configure_logging(args)

    try:
        return run(args, settings)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except TmxStreamError as exc:
        logger.debug("Batch aborted", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
