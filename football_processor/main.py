"""
Main entry point for the College Football Game Stats Processor.
"""

import os
import sys
import json
import argparse
from typing import List, Optional

from .errors import BadRequestError, GameStatsError, NotFoundError, ValidationError
from .excel.workbook_generator import generate_excel_workbook
from .export.csv_codec import list_to_csv
from .export.orchestrator import ExportOrchestrator
from .loaders import CorpusLoader, FileSystemDocumentStore, load_corpus
from .models import ExportRequest
from .parsers.frontmatter_parser import parse_frontmatter
from .parsers.validator import format_validation_errors, validate_frontmatter
from .processors.season_summary_processor import SeasonSummaryProcessor
from .utils.constants import CONTENT_DIR, EXPORT_FORMATS, EXPORT_TYPES
from .utils.log import info, warn, error, success, debug, set_verbosity, set_use_emoji, set_use_color


def build_loader(args) -> CorpusLoader:
    store = FileSystemDocumentStore(args.content_dir)
    debug(f"Content directory: {store.directory}")
    return CorpusLoader(store, max_workers=args.workers)


def cmd_export(args) -> int:
    """Write one CSV export to a file or stdout."""
    request = ExportRequest(
        kind=args.type,
        format=args.format,
        slug=args.slug,
        season=args.season,
    )
    orchestrator = ExportOrchestrator(build_loader(args), validate=args.validate, include_bom=args.bom)

    try:
        download = orchestrator.export(request)
    except BadRequestError as e:
        error(f"Bad request: {e}")
        return 2
    except NotFoundError as e:
        error(f"Not found: {e}")
        return 1
    except GameStatsError as e:
        error(str(e))
        return 1

    if not args.output:
        sys.stdout.write(download.content + '\n')
        return 0

    output_path = os.path.expanduser(args.output)
    if os.path.isdir(output_path):
        output_path = os.path.join(output_path, download.filename)

    # newline='' keeps '\n' terminators on every platform
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(download.content)

    success(f"Saved {download.filename} to {os.path.abspath(output_path)}")
    return 0


def cmd_list(args) -> int:
    """Print the game listing as CSV or JSON."""
    items = build_loader(args).load_all_as_list_items(validate=args.validate)
    if args.json:
        print(json.dumps([item.to_dict() for item in items], indent=2))
    else:
        print(list_to_csv(items))
    return 0


def cmd_excel(args) -> int:
    """Generate the Excel workbook for the whole corpus."""
    records = load_corpus(args.content_dir, validate=args.validate, max_workers=args.workers)
    if not records:
        warn("No games to process. Exiting.")
        return 1

    output_path = os.path.expanduser(args.output)
    if os.path.exists(output_path):
        debug(f"Removing existing file: {output_path}")
        os.remove(output_path)

    generate_excel_workbook(records, output_path, include_game_sheets=not args.summary_only)
    success("Processing complete!")
    info(f"Excel: {os.path.abspath(output_path)}")
    return 0


def cmd_summary(args) -> int:
    """Print the overall record and the per-season table."""
    records = build_loader(args).load_all(validate=args.validate)
    if not records:
        warn("No games to summarize.")
        return 1

    processor = SeasonSummaryProcessor(records)
    overall = processor.overall(args.season)
    label = f"Season {args.season}" if args.season is not None else "All games"

    print(f"{label}: {overall['wins']}-{overall['losses']}-{overall['ties']} "
          f"({overall['win_percentage']:.1f}%) in {overall['total_games']} games")
    print(f"Points: {overall['points_scored']} for, {overall['points_allowed']} against "
          f"({overall['avg_points_scored']:.1f} / {overall['avg_points_allowed']:.1f} per game)")

    if args.season is None:
        seasons = processor.create_season_records()
        print()
        print(seasons.to_string(index=False))
    return 0


def cmd_validate(args) -> int:
    """Check every document against the schema and report failures."""
    store = FileSystemDocumentStore(args.content_dir)
    failures = 0

    for slug in store.list_slugs():
        try:
            raw_metadata, _ = parse_frontmatter(store.read(slug), source=slug)
        except GameStatsError as e:
            error(str(e))
            failures += 1
            continue

        result = validate_frontmatter(raw_metadata, source=slug)
        if not result.success:
            failures += 1
            error(f"{slug}:")
            print(format_validation_errors(result.error), file=sys.stderr)

    if failures:
        warn(f"{failures} invalid documents")
        return 1
    success("All documents are valid")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export college football game documents to CSV, JSON, and Excel."
    )
    parser.add_argument(
        '--content-dir',
        default=str(CONTENT_DIR),
        help=f'Directory containing game Markdown files (default: {CONTENT_DIR})'
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        help='Validate frontmatter against the schema while loading'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help='Parse documents with this many threads'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable extra debug output'
    )
    parser.add_argument(
        '--no-emoji',
        action='store_true',
        help='Disable emoji in console output'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored log prefixes'
    )

    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    export = subparsers.add_parser('export', help='Export games as CSV')
    export.add_argument('--type', default='single', choices=EXPORT_TYPES, help='Export scope')
    export.add_argument('--format', default='csv', choices=EXPORT_FORMATS, help='CSV shape')
    export.add_argument('--slug', help='Game slug for single exports')
    export.add_argument('--season', help='Season year for season exports')
    export.add_argument('--output', '-o', help='Output file or directory (default: stdout)')
    export.add_argument('--bom', action='store_true', help='Prefix a UTF-8 BOM for Excel')
    export.set_defaults(func=cmd_export)

    listing = subparsers.add_parser('list', help='List games')
    listing.add_argument('--json', action='store_true', help='Print JSON instead of CSV')
    listing.set_defaults(func=cmd_list)

    excel = subparsers.add_parser('excel', help='Generate an Excel workbook')
    excel.add_argument('output', help='Path of the .xlsx file to write')
    excel.add_argument('--summary-only', action='store_true', help='Skip per-game sheets')
    excel.set_defaults(func=cmd_excel)

    summary = subparsers.add_parser('summary', help='Print win/loss records')
    summary.add_argument('--season', type=int, default=None, help='Limit to one season')
    summary.set_defaults(func=cmd_summary)

    validate = subparsers.add_parser('validate', help='Check every document against the schema')
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    set_verbosity(args.verbose)
    set_use_emoji(not args.no_emoji)
    set_use_color(not args.no_color)

    if not os.path.isdir(args.content_dir):
        warn(f"Content directory does not exist: {args.content_dir}")

    try:
        return args.func(args)
    except ValidationError as e:
        error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
