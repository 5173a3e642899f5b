from __future__ import annotations

from typing import Any, Mapping, Optional

from rich import box
from rich.table import Table
from rich.text import Text

from ..scanner.models import RankingResult

RANKING_COLUMNS = (
    ("Rank", "right"),
    ("Author", "left"),
    ("Commits", "right"),
    ("Scaled Commits", "right"),
    ("Lines Added", "right"),
    ("Lines Deleted", "right"),
    ("Score", "right"),
)


def format_count(value: int) -> str:
    return f"{value:,}"


def render_ranking_table(result: RankingResult, *, title: Optional[str] = None) -> Table:
    """Build the contributor leaderboard."""
    shown = len(result.contributors)
    table = Table(
        title=title or f"Top {shown} of {result.total_authors} contributors",
        box=box.ROUNDED,
        show_header=True,
    )
    for name, justify in RANKING_COLUMNS:
        if name == "Author":
            table.add_column(name, justify=justify, style="green", overflow="fold")
        else:
            table.add_column(name, justify=justify, style="bold cyan" if name == "Score" else None)

    for contributor in result.contributors:
        table.add_row(
            str(contributor.rank),
            contributor.identity,
            format_count(contributor.commit_count),
            format_count(contributor.scaled_commit_count),
            format_count(contributor.lines_added),
            format_count(contributor.lines_deleted),
            contributor.score,
        )
    return table


def render_empty_result(result: RankingResult) -> Text:
    message = (result.message or "no contributors found").capitalize()
    return Text(f"{message}.", style="dim")


def format_run_header(settings: Mapping[str, Any]) -> list[str]:
    """Lines echoed before an analysis so the user sees what is being read."""
    lines: list[str] = []
    if settings.get("log_file"):
        lines.append(f"Using log file: {settings['log_file']}")
        return lines
    lines.append(f"Using repository URL: {settings.get('repo')}")
    lines.append(f"Using directory: {settings.get('directory')}")
    return lines
