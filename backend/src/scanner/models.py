from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
import sys
from typing import List, Optional, Tuple

_DATACLASS_KWARGS = {"slots": True} if sys.version_info >= (3, 10) else {}


@dataclass(**_DATACLASS_KWARGS)
class AuthorRawStats:
    """Per-author totals accumulated while folding over a git log."""

    commit_count: int = 0
    commit_timestamps: List[int] = field(default_factory=list)
    lines_added: int = 0
    lines_deleted: int = 0


@dataclass(frozen=True, **_DATACLASS_KWARGS)
class AuthorScore:
    identity: str
    commit_count: int
    commit_timestamps: Tuple[int, ...]
    lines_added: int
    lines_deleted: int
    scaled_commit_count: int
    score: float
    # exact value, used for ordering
    exact_score: Decimal


@dataclass(frozen=True, **_DATACLASS_KWARGS)
class RankedContributor:
    rank: int
    identity: str
    commit_count: int
    scaled_commit_count: int
    lines_added: int
    lines_deleted: int
    score: str  # formatted to one decimal place

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "identity": self.identity,
            "commit_count": self.commit_count,
            "scaled_commit_count": self.scaled_commit_count,
            "lines_added": self.lines_added,
            "lines_deleted": self.lines_deleted,
            "score": self.score,
        }


NO_CONTRIBUTORS_MESSAGE = "no contributors found"


@dataclass(**_DATACLASS_KWARGS)
class RankingResult:
    """
    Ranked contributors, truncated to the requested top-N.

    An empty result is a valid outcome (the log had no header lines), not
    an error; ``message`` carries the human readable explanation.
    """

    contributors: List[RankedContributor] = field(default_factory=list)
    total_authors: int = 0
    message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.contributors
