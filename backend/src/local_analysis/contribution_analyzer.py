"""
Contribution Analyzer Module

Scores and ranks contributors from per-author git log totals.
Provides:
- Burst-resistant commit counting (scaled commit count)
- Weighted impact score per author
- Deterministic ranking with top-N shaping
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config.settings import ScoringConfig
from ..scanner.models import (
    NO_CONTRIBUTORS_MESSAGE,
    AuthorRawStats,
    AuthorScore,
    RankedContributor,
    RankingResult,
)

logger = logging.getLogger(__name__)


def scaled_commit_count(timestamps: Iterable[int], window_seconds: int = 1800) -> int:
    """
    Count "separate" contributions in a list of commit timestamps.

    A commit is counted when it lands at least ``window_seconds`` after the
    last *counted* commit. Skipped commits never move the anchor, so commits
    29 minutes apart are counted every other one (0, 29, 58 min -> 2).

    Args:
        timestamps: Unix timestamps in seconds, any order, duplicates allowed
        window_seconds: Merge window, 30 minutes by default

    Returns:
        Number of counted events
    """
    ordered = sorted(timestamps)
    if len(ordered) <= 1:
        return len(ordered)

    counted = 0
    last_counted: Optional[int] = None
    for timestamp in ordered:
        if last_counted is None or timestamp - last_counted >= window_seconds:
            counted += 1
            last_counted = timestamp
    return counted


def score_author(identity: str, raw: AuthorRawStats, config: Optional[ScoringConfig] = None) -> AuthorScore:
    config = config or ScoringConfig()
    scaled = scaled_commit_count(raw.commit_timestamps, config.merge_window_seconds)
    # Weights go through str() so 0.3 means 3/10, not its binary approximation.
    exact = (
        Decimal(str(config.commit_weight)) * scaled
        + Decimal(str(config.lines_added_weight)) * raw.lines_added
        + Decimal(str(config.lines_deleted_weight)) * raw.lines_deleted
    )
    return AuthorScore(
        identity=identity,
        commit_count=raw.commit_count,
        commit_timestamps=tuple(raw.commit_timestamps),
        lines_added=raw.lines_added,
        lines_deleted=raw.lines_deleted,
        scaled_commit_count=scaled,
        score=float(exact),
        exact_score=exact,
    )


def score_authors(
    raw_stats: Mapping[str, AuthorRawStats],
    config: Optional[ScoringConfig] = None,
) -> List[AuthorScore]:
    config = config or ScoringConfig()
    return [score_author(identity, raw, config) for identity, raw in raw_stats.items()]


def _ranking_key(entry: AuthorScore):
    return (-entry.exact_score, entry.identity)


def rank_scores(scores: Iterable[AuthorScore]) -> List[AuthorScore]:
    """Sort by score descending, then identity ascending."""
    return sorted(scores, key=_ranking_key)


def format_score(score: float) -> str:
    return f"{score:.1f}"


def rank_contributors(
    raw_stats: Mapping[str, AuthorRawStats],
    top_n: Optional[int] = None,
    config: Optional[ScoringConfig] = None,
) -> RankingResult:
    """
    Score every author and return the best ``top_n`` of them.

    ``top_n`` must already be validated as a positive integer; ``None``
    keeps every author. Asking for more authors than exist is not an error.
    """
    ranked = rank_scores(score_authors(raw_stats, config))
    if not ranked:
        return RankingResult(contributors=[], total_authors=0, message=NO_CONTRIBUTORS_MESSAGE)

    selected = ranked if top_n is None else ranked[:top_n]
    contributors = [
        RankedContributor(
            rank=position,
            identity=entry.identity,
            commit_count=entry.commit_count,
            scaled_commit_count=entry.scaled_commit_count,
            lines_added=entry.lines_added,
            lines_deleted=entry.lines_deleted,
            score=format_score(entry.score),
        )
        for position, entry in enumerate(selected, start=1)
    ]
    return RankingResult(contributors=contributors, total_authors=len(ranked))


class ContributionAnalyzer:
    """
    Analyzes per-author git log totals and ranks contributors.

    Holds the scoring policy so callers configure weights and the merge
    window once and reuse the analyzer across runs.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.logger = logging.getLogger(__name__)

    def analyze_contributions(
        self,
        raw_stats: Mapping[str, AuthorRawStats],
        top_n: Optional[int] = None,
    ) -> RankingResult:
        result = rank_contributors(raw_stats, top_n=top_n, config=self.config)
        if result.is_empty:
            self.logger.info("No contributors found in git log")
        else:
            self.logger.info(
                f"Ranked {result.total_authors} contributors, returning top {len(result.contributors)}"
            )
        return result

    def export_to_dict(self, result: RankingResult) -> Dict[str, Any]:
        """
        Export a ranking to a dictionary for JSON serialization.

        Args:
            result: RankingResult to export

        Returns:
            Dictionary representation
        """
        return {
            "total_authors": result.total_authors,
            "message": result.message,
            "contributors": [contributor.to_dict() for contributor in result.contributors],
        }
