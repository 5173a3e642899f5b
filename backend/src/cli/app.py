from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ..config.settings import AnalysisSettings, ScoringConfig
from ..local_analysis import __version__
from ..scanner.errors import AcquisitionError, FormatError, ValidationError
from .display import format_run_header, render_empty_result, render_ranking_table
from .services.contribution_analysis_service import ContributionAnalysisService, validate_top_n

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser(settings: AnalysisSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contrib-rank",
        description="Get the top N authors of a repository ranked by impact score.",
    )
    parser.add_argument("top_n", help="Number of top authors to return")
    parser.add_argument(
        "-r",
        "--repo",
        default=settings.default_repo_url,
        help="Repository HTTPS link or path to a local clone (default: %(default)s)",
    )
    parser.add_argument(
        "-d",
        "--directory",
        default=settings.default_directory,
        help="Only count history under this path of the repository (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        help="Read a saved `git log --pretty=format:'%%ae %%at' --numstat` export instead of running git ('-' for stdin).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the ranking as JSON instead of a table.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    err_console = Console(stderr=True)
    try:
        settings = AnalysisSettings.from_env()
        scoring = ScoringConfig.from_env()
    except ValueError as exc:
        err_console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        return EXIT_USAGE

    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Progress goes to stderr when stdout carries JSON.
    console = err_console if args.json else Console()

    try:
        top_n = validate_top_n(args.top_n)
    except ValidationError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        err_console.print("Please provide a valid positive number.")
        return EXIT_USAGE

    for line in format_run_header(vars(args)):
        console.print(escape(line))

    service = ContributionAnalysisService(scoring=scoring, settings=settings)
    try:
        if args.log_file:
            result = service.rank_log_file(args.log_file, top_n)
        else:
            console.print("[bold cyan]Fetching history...[/bold cyan]")
            result = service.rank_repository(top_n, repo=args.repo, directory=args.directory)
    except AcquisitionError as exc:
        err_console.print(f"[red]Repository acquisition failed: {escape(str(exc))}[/red]")
        return EXIT_FAILURE
    except FormatError as exc:
        err_console.print(f"[red]Malformed git log ({exc.code}): {escape(str(exc))}[/red]")
        return EXIT_FAILURE
    except OSError as exc:
        err_console.print(f"[red]Could not read log file: {escape(str(exc))}[/red]")
        return EXIT_FAILURE

    if args.json:
        print(json.dumps(service.export_data(result), indent=2))
        return EXIT_OK

    if result.is_empty:
        console.print(render_empty_result(result))
    else:
        console.print(render_ranking_table(result))
    return EXIT_OK


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted. Exiting.")
        sys.exit(EXIT_FAILURE)
