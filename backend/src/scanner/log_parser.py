"""
Git log parser.

Turns the output of ``git log --pretty=format:'%ae %at' --numstat`` into
per-author totals. The stream is a sequence of blocks, each one a header
line (author identity followed by a Unix timestamp) and zero or more
numstat lines of the form ``<added>\\t<deleted>\\t<path>``.

Parsing is written as a fold: ``accumulate_line`` takes the state built so
far plus the next line and returns the updated state. The "current author"
lives inside that state, so every line can be tested in isolation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, Optional, Tuple

from .errors import FormatError
from .models import AuthorRawStats

logger = logging.getLogger(__name__)

HEADER_MARKER = "@"
NUMSTAT_SEPARATOR = "\t"
# git prints "-" instead of counts for binary files
BINARY_PLACEHOLDER = "-"

_DIGITS = re.compile(r"[0-9]+")


@dataclass
class LogParseState:
    """Accumulator threaded through the fold."""

    authors: Dict[str, AuthorRawStats] = field(default_factory=dict)
    current_author: Optional[str] = None
    header_lines: int = 0
    orphan_lines: int = 0


def parse_header(line: str, line_number: int = 0) -> Tuple[str, int]:
    """
    Split a header line into ``(identity, timestamp)``.

    The last whitespace-separated token is the timestamp; everything before
    it is the identity, so identities containing digits or spaces survive.
    """
    parts = line.strip().rsplit(None, 1)
    if len(parts) != 2:
        raise FormatError(
            "Header line has no timestamp",
            "malformed_header",
            line=line,
            line_number=line_number,
        )

    identity, raw_timestamp = parts[0].strip(), parts[1]
    if not _DIGITS.fullmatch(raw_timestamp):
        raise FormatError(
            f"Header timestamp {raw_timestamp!r} is not a Unix timestamp",
            "malformed_header",
            line=line,
            line_number=line_number,
        )
    if not identity:
        raise FormatError(
            "Header line has an empty author identity",
            "malformed_header",
            line=line,
            line_number=line_number,
        )
    return identity, int(raw_timestamp)


def _parse_count(value: str, line: str, line_number: int) -> int:
    if value == BINARY_PLACEHOLDER:
        return 0
    if _DIGITS.fullmatch(value):
        return int(value)
    raise FormatError(
        f"Numstat field {value!r} is neither a count nor {BINARY_PLACEHOLDER!r}",
        "malformed_numstat",
        line=line,
        line_number=line_number,
    )


def parse_numstat(line: str, line_number: int = 0) -> Tuple[int, int]:
    """Return ``(added, deleted)`` for a single numstat line."""
    fields = line.split(NUMSTAT_SEPARATOR)
    if len(fields) < 2:
        raise FormatError(
            "Numstat line does not contain added/deleted columns",
            "malformed_numstat",
            line=line,
            line_number=line_number,
        )
    added = _parse_count(fields[0].strip(), line, line_number)
    deleted = _parse_count(fields[1].strip(), line, line_number)
    return added, deleted


def _is_header(line: str) -> bool:
    # Numstat lines always carry tabs, `%ae %at` headers never do.
    return HEADER_MARKER in line and NUMSTAT_SEPARATOR not in line


def accumulate_line(state: LogParseState, line: str, line_number: int = 0) -> LogParseState:
    """Fold one log line into ``state`` and return it."""
    if not line.strip():
        return state

    if _is_header(line):
        identity, timestamp = parse_header(line, line_number)
        stats = state.authors.get(identity)
        if stats is None:
            stats = state.authors[identity] = AuthorRawStats()
        stats.commit_count += 1
        stats.commit_timestamps.append(timestamp)
        state.current_author = identity
        state.header_lines += 1
        return state

    if state.current_author is None:
        # Nothing to attribute it to.
        state.orphan_lines += 1
        return state

    added, deleted = parse_numstat(line, line_number)
    stats = state.authors[state.current_author]
    stats.lines_added += added
    stats.lines_deleted += deleted
    return state


def parse_git_log_lines(lines: Iterable[str]) -> Dict[str, AuthorRawStats]:
    """Fold an iterable of log lines (e.g. an open file) into per-author stats."""
    state = reduce(
        lambda acc, item: accumulate_line(acc, item[1].rstrip("\r\n"), item[0]),
        enumerate(lines, start=1),
        LogParseState(),
    )
    if state.orphan_lines:
        logger.warning(f"Ignored {state.orphan_lines} numstat line(s) appearing before any commit header")
    logger.debug(f"Parsed {state.header_lines} commits from {len(state.authors)} authors")
    return state.authors


def parse_git_log(text: str) -> Dict[str, AuthorRawStats]:
    """Parse a complete git log export held in memory."""
    if not text:
        return {}
    # git can emit \x0c or \u2028 inside raw paths; only "\n" ends a line.
    return parse_git_log_lines(text.split("\n"))
